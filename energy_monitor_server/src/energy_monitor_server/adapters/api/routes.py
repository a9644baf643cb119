# energy_monitor_server/adapters/api/routes.py

import logging
from datetime import date, timezone, tzinfo
from typing import List
from zoneinfo import ZoneInfo

from energy_monitor_core.application.calculate_consumption import get_room_power_consumption
from energy_monitor_core.application.manage_events import delete_event, get_event
from energy_monitor_core.application.manage_measurements import (
    get_measurements_for_device,
    record_measurement,
)
from energy_monitor_core.application.record_event import record_device_event
from energy_monitor_core.config.environments import get_settings
from energy_monitor_core.domain.exceptions import (
    DeviceNotActuator,
    DeviceNotFound,
    DeviceNotSensor,
    EventNotFound,
    InvalidWindow,
    MissingPowerRating,
)
from energy_monitor_core.domain.models import ConsumptionWindow
from fastapi import APIRouter, Depends, HTTPException, Query, status

from energy_monitor_server.adapters.api.schemas import (
    EventIn,
    EventOut,
    MeasurementIn,
    MeasurementOut,
    PowerConsumptionOut,
)
from energy_monitor_server.adapters.db.uow import SqlAlchemyUoW

log = logging.getLogger(__name__)

router = APIRouter()


def get_uow():
    with SqlAlchemyUoW() as uow:
        yield uow


def get_report_timezone() -> tzinfo:
    name = get_settings().REPORT_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


@router.get("/ping")
def ping():
    return {"status": "ok"}


@router.post("/events", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: EventIn,
    uow: SqlAlchemyUoW = Depends(get_uow),
):
    try:
        event = record_device_event(event_in.device_id, event_in.action, uow)
    except DeviceNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except DeviceNotActuator as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return EventOut.from_domain(event)


@router.get("/events/{event_id}", response_model=EventOut)
def read_event(event_id: int, uow: SqlAlchemyUoW = Depends(get_uow)):
    try:
        return EventOut.from_domain(get_event(event_id, uow))
    except EventNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.delete("/events/{event_id}")
def remove_event(event_id: int, uow: SqlAlchemyUoW = Depends(get_uow)):
    try:
        delete_event(event_id, uow)
    except EventNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return {"status": "ok"}


@router.get("/rooms/{room_id}/power-consumption", response_model=PowerConsumptionOut)
def room_power_consumption(
    room_id: int,
    start_date: date = Query(..., alias="startDate", description="YYYY-MM-DD, inclusive"),
    end_date: date = Query(..., alias="endDate", description="YYYY-MM-DD, inclusive"),
    tz: tzinfo = Depends(get_report_timezone),
    uow: SqlAlchemyUoW = Depends(get_uow),
):
    try:
        window = ConsumptionWindow.from_dates(start_date, end_date, tz=tz)
        total = get_room_power_consumption(room_id, window, uow)
    except InvalidWindow as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except (DeviceNotFound, MissingPowerRating) as exc:
        log.error("Failed to calculate power consumption for room %s: %s", room_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to calculate power consumption by room",
        )
    return PowerConsumptionOut(total_power_consumption=total)


@router.post("/measurements", response_model=MeasurementOut, status_code=status.HTTP_201_CREATED)
def create_measurement(
    measurement_in: MeasurementIn,
    uow: SqlAlchemyUoW = Depends(get_uow),
):
    try:
        measurement = record_measurement(measurement_in.device_id, measurement_in.value, uow)
    except DeviceNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except DeviceNotSensor as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return MeasurementOut.from_domain(measurement)


@router.get("/measurements/{device_id}", response_model=List[MeasurementOut])
def device_measurements(
    device_id: int,
    start_date: date = Query(..., alias="startDate", description="YYYY-MM-DD, inclusive"),
    end_date: date = Query(..., alias="endDate", description="YYYY-MM-DD, inclusive"),
    tz: tzinfo = Depends(get_report_timezone),
    uow: SqlAlchemyUoW = Depends(get_uow),
):
    try:
        window = ConsumptionWindow.from_dates(start_date, end_date, tz=tz)
        measurements = get_measurements_for_device(device_id, window, uow)
    except InvalidWindow as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except DeviceNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return [MeasurementOut.from_domain(m) for m in measurements]
