"""
Command line entry point.

Usage:
    energy-monitor --environment development api --port 8080
    energy-monitor --environment development server
    energy-monitor --environment development setup-db
"""

import argparse
import logging
import os
from typing import Optional, Sequence

import uvicorn
from energy_monitor_core.config.environments import get_settings

log = logging.getLogger(__name__)


def setup_logging(config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def run_api_server(args: argparse.Namespace, config) -> None:
    host = args.host or config.API_HOST
    port = args.port or config.API_PORT
    reload = args.reload and args.environment != "production"
    log.info("Serving API on %s:%s (%s, reload=%s)", host, port, args.environment, reload)

    uvicorn.run(
        "energy_monitor_server.adapters.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=config.LOG_LEVEL.lower(),
    )


def run_mqtt_server(args: argparse.Namespace, config) -> None:
    from energy_monitor_server.adapters.mqtt.server import main as mqtt_main

    mqtt_main()


def setup_database(args: argparse.Namespace, config) -> None:
    from energy_monitor_server.adapters.db.session import create_db_engine
    from energy_monitor_server.adapters.db.sqlalchemy_models import Base

    engine = create_db_engine(config.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    log.info("Created tables: %s", ", ".join(sorted(Base.metadata.tables)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="energy-monitor",
        description="Energy Monitor - API, MQTT ingestion and database setup",
    )
    parser.add_argument(
        "--environment",
        choices=["production", "development", "testing"],
        default="development",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    api = commands.add_parser("api", help="Run the HTTP API")
    api.add_argument("--host", help="Host to bind to (overrides config)")
    api.add_argument("--port", type=int, help="Port to bind to (overrides config)")
    api.add_argument("--reload", action="store_true", help="Auto-reload outside production")
    api.set_defaults(handler=run_api_server)

    commands.add_parser("server", help="Ingest device messages from MQTT").set_defaults(
        handler=run_mqtt_server
    )
    commands.add_parser("setup-db", help="Create the database tables").set_defaults(
        handler=setup_database
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    # settings are resolved from this variable
    os.environ["ENERGY_MONITOR_ENV"] = args.environment
    config = get_settings()
    setup_logging(config)

    args.handler(args, config)


if __name__ == "__main__":
    main()
