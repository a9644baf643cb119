import logging
from datetime import datetime, timezone
from typing import Optional

from energy_monitor_core.domain.exceptions import DeviceNotActuator, DeviceNotFound
from energy_monitor_core.domain.models import DeviceCategory, Event, EventAction
from energy_monitor_core.domain.ports import UnitOfWork

log = logging.getLogger(__name__)


def record_device_event(
    device_id: int,
    action: EventAction,
    uow: UnitOfWork,
    now: Optional[datetime] = None,
) -> Event:
    """Store an on/off event for an actuator, stamped with the device's current room."""
    with uow:
        device = uow.device_registry().get(device_id)
        if device is None:
            log.warning("Rejected %s event: device %s not found", action.value, device_id)
            raise DeviceNotFound(device_id)
        if device.category != DeviceCategory.ACTUATOR:
            log.warning(
                "Rejected %s event: device %s is a %s",
                action.value,
                device_id,
                device.category.value,
            )
            raise DeviceNotActuator(device_id, device.category)

        event = Event(
            device_id=device_id,
            action=action,
            created_date=now or datetime.now(tz=timezone.utc),
            room_id=device.room_id,
        )
        saved = uow.event_store().append(event)
        log.info("Recorded event %s: device %s turned %s", saved.id, device_id, action.value)
        return saved
