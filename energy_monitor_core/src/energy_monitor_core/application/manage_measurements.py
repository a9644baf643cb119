import logging
from datetime import datetime, timezone
from typing import List, Optional

from energy_monitor_core.domain.exceptions import (
    DeviceNotFound,
    DeviceNotSensor,
    InvalidWindow,
    MeasurementNotFound,
)
from energy_monitor_core.domain.models import ConsumptionWindow, DeviceCategory, Measurement
from energy_monitor_core.domain.ports import UnitOfWork

log = logging.getLogger(__name__)


def record_measurement(
    device_id: int,
    value: float,
    uow: UnitOfWork,
    now: Optional[datetime] = None,
) -> Measurement:
    """Store a sensor value, stamped with the device's current room."""
    with uow:
        device = uow.device_registry().get(device_id)
        if device is None:
            log.warning("Rejected measurement: device %s not found", device_id)
            raise DeviceNotFound(device_id)
        if device.category != DeviceCategory.SENSOR:
            log.warning("Rejected measurement: device %s is a %s", device_id, device.category.value)
            raise DeviceNotSensor(device_id, device.category)

        measurement = Measurement(
            device_id=device_id,
            value=value,
            created_date=now or datetime.now(tz=timezone.utc),
            room_id=device.room_id,
        )
        saved = uow.measurement_store().append(measurement)
        log.debug("Recorded measurement %s from device %s", saved.id, device_id)
        return saved


def get_measurements_for_device(
    device_id: int,
    window: ConsumptionWindow,
    uow: UnitOfWork,
) -> List[Measurement]:
    if window.start > window.end:
        raise InvalidWindow(window.start, window.end)
    with uow:
        if uow.device_registry().get(device_id) is None:
            raise DeviceNotFound(device_id)
        return uow.measurement_store().get_for_device_in_range(
            device_id=device_id,
            start=window.start,
            end=window.end,
        )


def update_measurement(measurement_id: int, value: float, uow: UnitOfWork) -> Measurement:
    with uow:
        updated = uow.measurement_store().update_value(measurement_id, value)
        if updated is None:
            raise MeasurementNotFound(measurement_id)
    log.info("Updated measurement %s to %s", measurement_id, value)
    return updated


def delete_measurement(measurement_id: int, uow: UnitOfWork) -> None:
    with uow:
        if not uow.measurement_store().soft_delete(measurement_id):
            raise MeasurementNotFound(measurement_id)
    log.info("Deleted measurement %s", measurement_id)
