from contextlib import AbstractContextManager

from sqlalchemy.orm import Session, sessionmaker

from energy_monitor_server.adapters.db.repository import (
    SqlDeviceRegistry,
    SqlEventStore,
    SqlMeasurementStore,
)
from energy_monitor_server.adapters.db.session import SessionLocal


class SqlAlchemyUoW(AbstractContextManager):
    """
    One transaction over one session.

    The unit of work may be entered more than once (the API dependency opens
    it and the use case opens it again); only the outermost exit commits, while an
    error rolls back at the first exit it passes. A caller-supplied session is never committed or closed here.
    """

    def __init__(
        self,
        session: Session | None = None,
        session_factory: sessionmaker = SessionLocal,
    ):
        self._owns_session = session is None
        self.session: Session = session or session_factory()
        self._depth = 0
        self._devices: SqlDeviceRegistry | None = None
        self._events: SqlEventStore | None = None
        self._measurements: SqlMeasurementStore | None = None

    def __enter__(self):
        self._depth += 1
        return self

    def __exit__(self, exc_type, *_):
        self._depth -= 1
        if exc_type is None and self._depth > 0:
            return
        if not self._owns_session:
            return
        if exc_type:
            self.session.rollback()
        else:
            self.session.commit()
        if self._depth == 0:
            self.session.close()

    def device_registry(self) -> SqlDeviceRegistry:
        if self._devices is None:
            self._devices = SqlDeviceRegistry(self.session)
        return self._devices

    def event_store(self) -> SqlEventStore:
        if self._events is None:
            self._events = SqlEventStore(self.session)
        return self._events

    def measurement_store(self) -> SqlMeasurementStore:
        if self._measurements is None:
            self._measurements = SqlMeasurementStore(self.session)
        return self._measurements
