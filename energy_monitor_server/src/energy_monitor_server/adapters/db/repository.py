from datetime import datetime, timezone
from typing import List, Optional

from energy_monitor_core.domain.models import (
    Device,
    DeviceCategory,
    Event,
    EventAction,
    Measurement,
    as_utc,
)
from energy_monitor_core.domain.ports import DeviceRegistry, EventStore, MeasurementStore
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from energy_monitor_server.adapters.db.sqlalchemy_models import DeviceORM, EventORM, MeasurementORM


class SqlDeviceRegistry(DeviceRegistry):
    def __init__(self, session: Session):
        self.session = session

    # READ side
    def get(self, device_id: int) -> Optional[Device]:
        row = self.session.get(DeviceORM, device_id)
        return self._to_domain(row) if row is not None else None

    # helper
    @staticmethod
    def _to_domain(row: DeviceORM) -> Device:
        return Device(
            id=row.id,
            category=DeviceCategory(row.category),
            power_consumption=row.power_consumption,
            room_id=row.room_id,
            organization_id=row.organization_id,
            units=row.units,
        )


class SqlEventStore(EventStore):
    def __init__(self, session: Session):
        self.session = session

    # READ side
    def get(self, event_id: int) -> Optional[Event]:
        stmt = select(EventORM).where(EventORM.id == event_id, EventORM.deleted_date.is_(None))
        row = self.session.scalars(stmt).first()
        return self._to_domain(row) if row is not None else None

    def get_events_for_room(self, room_id: int, until: Optional[datetime] = None) -> List[Event]:
        stmt = select(EventORM).where(
            EventORM.room_id == room_id,
            EventORM.deleted_date.is_(None),
        )
        if until is not None:
            stmt = stmt.where(EventORM.created_date <= as_utc(until))
        stmt = stmt.order_by(EventORM.created_date.asc(), EventORM.id.asc())
        return [self._to_domain(r) for r in self.session.scalars(stmt).all()]

    # WRITE side
    def append(self, event: Event) -> Event:
        created = as_utc(event.created_date)
        row = EventORM()
        row.device_id = event.device_id
        row.room_id = event.room_id
        row.action = EventAction(event.action).value
        row.created_date = created
        row.updated_date = created
        self.session.add(row)
        self.session.flush()
        return self._to_domain(row)

    def soft_delete(self, event_id: int) -> bool:
        stmt = (
            update(EventORM)
            .where(EventORM.id == event_id, EventORM.deleted_date.is_(None))
            .values(deleted_date=datetime.now(tz=timezone.utc))
        )
        return self.session.execute(stmt).rowcount > 0

    # helper
    @staticmethod
    def _to_domain(row: EventORM) -> Event:
        return Event(
            id=row.id,
            device_id=row.device_id,
            room_id=row.room_id,
            action=EventAction(row.action),
            created_date=as_utc(row.created_date),
        )


class SqlMeasurementStore(MeasurementStore):
    def __init__(self, session: Session):
        self.session = session

    # READ side
    def get_for_device_in_range(
        self, device_id: int, start: datetime, end: datetime
    ) -> List[Measurement]:
        stmt = (
            select(MeasurementORM)
            .where(
                MeasurementORM.device_id == device_id,
                MeasurementORM.deleted_date.is_(None),
                MeasurementORM.created_date >= as_utc(start),
                MeasurementORM.created_date < as_utc(end),
            )
            .order_by(MeasurementORM.created_date.asc(), MeasurementORM.id.asc())
        )
        return [self._to_domain(r) for r in self.session.scalars(stmt).all()]

    # WRITE side
    def append(self, measurement: Measurement) -> Measurement:
        created = as_utc(measurement.created_date)
        row = MeasurementORM()
        row.device_id = measurement.device_id
        row.room_id = measurement.room_id
        row.value = measurement.value
        row.created_date = created
        row.updated_date = created
        self.session.add(row)
        self.session.flush()
        return self._to_domain(row)

    def update_value(self, measurement_id: int, value: float) -> Optional[Measurement]:
        stmt = select(MeasurementORM).where(
            MeasurementORM.id == measurement_id, MeasurementORM.deleted_date.is_(None)
        )
        row = self.session.scalars(stmt).first()
        if row is None:
            return None
        row.value = value
        row.updated_date = datetime.now(tz=timezone.utc)
        self.session.flush()
        return self._to_domain(row)

    def soft_delete(self, measurement_id: int) -> bool:
        stmt = (
            update(MeasurementORM)
            .where(MeasurementORM.id == measurement_id, MeasurementORM.deleted_date.is_(None))
            .values(deleted_date=datetime.now(tz=timezone.utc))
        )
        return self.session.execute(stmt).rowcount > 0

    # helper
    @staticmethod
    def _to_domain(row: MeasurementORM) -> Measurement:
        return Measurement(
            id=row.id,
            device_id=row.device_id,
            room_id=row.room_id,
            value=row.value,
            created_date=as_utc(row.created_date),
        )
