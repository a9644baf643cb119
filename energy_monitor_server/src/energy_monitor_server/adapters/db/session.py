import logging

from energy_monitor_core.config.environments import get_settings
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

log = logging.getLogger(__name__)


def create_db_engine(database_url: str):
    if database_url.startswith("sqlite"):
        # one shared connection so an in-memory database outlives each session
        return create_engine(
            database_url,
            future=True,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, future=True, echo=False)


def create_session_factory():
    """Create the session factory with current settings."""
    settings = get_settings()

    log.info("Initializing database connection for %s environment", settings.ENVIRONMENT.value)
    log.info("Database URL: %s", settings.DATABASE_URL)

    engine = create_db_engine(settings.DATABASE_URL)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


# Create the session factory
SessionLocal = create_session_factory()

Base = declarative_base()
