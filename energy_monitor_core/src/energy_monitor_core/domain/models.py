from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from typing import Optional

from energy_monitor_core.domain.exceptions import InvalidWindow


class DeviceCategory(str, Enum):
    SENSOR = "SENSOR"
    ACTUATOR = "ACTUATOR"


class EventAction(str, Enum):
    TURN_ON = "ON"
    TURN_OFF = "OFF"


@dataclass
class Device:
    id: int
    category: DeviceCategory
    power_consumption: Optional[float] = None  # rate per hour, actuators only
    room_id: Optional[int] = None
    organization_id: Optional[int] = None
    units: Optional[str] = None  # sensors only


@dataclass
class Event:
    device_id: int
    action: EventAction
    created_date: datetime
    room_id: Optional[int] = None
    id: Optional[int] = None


@dataclass
class Measurement:
    device_id: int
    value: float
    created_date: datetime
    room_id: Optional[int] = None
    id: Optional[int] = None


def as_utc(value: datetime) -> datetime:
    """Naive instants are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class ConsumptionWindow:
    start: datetime
    end: datetime

    def __post_init__(self):
        object.__setattr__(self, "start", as_utc(self.start))
        object.__setattr__(self, "end", as_utc(self.end))

    @classmethod
    def from_dates(
        cls, start_date: date, end_date: date, tz: tzinfo = timezone.utc
    ) -> "ConsumptionWindow":
        """Expand whole days into instants; end_date is inclusive of its whole day."""
        if start_date > end_date:
            raise InvalidWindow(start_date, end_date)
        start = datetime.combine(start_date, time.min, tzinfo=tz)
        end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=tz)
        return cls(start=start, end=end)


@dataclass(frozen=True)
class OnInterval:
    device_id: int
    on_time: datetime
    off_time: datetime

    def __post_init__(self):
        object.__setattr__(self, "on_time", as_utc(self.on_time))
        object.__setattr__(self, "off_time", as_utc(self.off_time))

    def clipped_hours(self, window: ConsumptionWindow) -> float:
        effective_start = max(self.on_time, window.start)
        effective_end = min(self.off_time, window.end)
        if effective_start < effective_end:
            return (effective_end - effective_start).total_seconds() / 3600.0
        return 0.0
