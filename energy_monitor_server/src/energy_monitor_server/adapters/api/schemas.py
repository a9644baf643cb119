# energy_monitor_server/adapters/api/schemas.py

from datetime import datetime
from typing import Optional

from energy_monitor_core.domain.models import EventAction
from pydantic import BaseModel, Field


class EventIn(BaseModel):
    device_id: int
    action: EventAction = Field(..., description="ON or OFF")


class EventOut(BaseModel):
    id: int
    device_id: int
    room_id: Optional[int] = None
    action: EventAction
    created_date: datetime

    @classmethod
    def from_domain(cls, event) -> "EventOut":
        return cls(
            id=event.id,
            device_id=event.device_id,
            room_id=event.room_id,
            action=event.action,
            created_date=event.created_date,
        )


class MeasurementIn(BaseModel):
    device_id: int
    value: float


class MeasurementOut(BaseModel):
    id: int
    device_id: int
    room_id: Optional[int] = None
    value: float
    created_date: datetime

    @classmethod
    def from_domain(cls, measurement) -> "MeasurementOut":
        return cls(
            id=measurement.id,
            device_id=measurement.device_id,
            room_id=measurement.room_id,
            value=measurement.value,
            created_date=measurement.created_date,
        )


class PowerConsumptionOut(BaseModel):
    total_power_consumption: float
