from .calculate_consumption import ConsumptionCalculator, get_room_power_consumption
from .manage_events import delete_event, get_event
from .manage_measurements import (
    delete_measurement,
    get_measurements_for_device,
    record_measurement,
    update_measurement,
)
from .record_event import record_device_event

__all__ = [
    "ConsumptionCalculator",
    "get_room_power_consumption",
    "delete_event",
    "get_event",
    "delete_measurement",
    "get_measurements_for_device",
    "record_measurement",
    "update_measurement",
    "record_device_event",
]
