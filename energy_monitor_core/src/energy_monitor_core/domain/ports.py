from datetime import datetime
from typing import List, Optional, Protocol

from energy_monitor_core.domain.models import Device, Event, Measurement


class DeviceRegistry(Protocol):
    def get(self, device_id: int) -> Optional[Device]: ...


class EventStore(Protocol):
    def append(self, event: Event) -> Event: ...

    def get(self, event_id: int) -> Optional[Event]: ...

    def get_events_for_room(
        self, room_id: int, until: Optional[datetime] = None
    ) -> List[Event]: ...

    def soft_delete(self, event_id: int) -> bool: ...


class MeasurementStore(Protocol):
    def append(self, measurement: Measurement) -> Measurement: ...

    def get_for_device_in_range(
        self, device_id: int, start: datetime, end: datetime
    ) -> List[Measurement]: ...

    def update_value(self, measurement_id: int, value: float) -> Optional[Measurement]: ...

    def soft_delete(self, measurement_id: int) -> bool: ...


class UnitOfWork(Protocol):
    def device_registry(self) -> DeviceRegistry: ...

    def event_store(self) -> EventStore: ...

    def measurement_store(self) -> MeasurementStore: ...

    def __enter__(self) -> "UnitOfWork": ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None: ...
