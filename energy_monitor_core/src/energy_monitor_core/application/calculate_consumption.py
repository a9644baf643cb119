import logging
from datetime import datetime
from typing import Iterable, Optional

from energy_monitor_core.domain.consumption import compute_consumption
from energy_monitor_core.domain.exceptions import InvalidWindow
from energy_monitor_core.domain.models import ConsumptionWindow, Event
from energy_monitor_core.domain.ports import DeviceRegistry, EventStore, UnitOfWork

log = logging.getLogger(__name__)


class ConsumptionCalculator:
    """Computes room power consumption from the event store and device registry."""

    def __init__(self, device_registry: DeviceRegistry, event_store: EventStore):
        self._devices = device_registry
        self._events = event_store

    def compute(
        self,
        events: Iterable[Event],
        window: ConsumptionWindow,
        now: Optional[datetime] = None,
    ) -> float:
        return compute_consumption(events, window, self._devices.get, now=now)

    def for_room(
        self,
        room_id: int,
        window: ConsumptionWindow,
        now: Optional[datetime] = None,
    ) -> float:
        if window.start > window.end:
            raise InvalidWindow(window.start, window.end)

        # Events after the window end cannot add to it, earlier ones may still be open.
        events = self._events.get_events_for_room(room_id, until=window.end)
        total = self.compute(events, window, now=now)
        log.info(
            "Room %s consumed %.4f between %s and %s (%d events)",
            room_id,
            total,
            window.start,
            window.end,
            len(events),
        )
        return total


def get_room_power_consumption(
    room_id: int,
    window: ConsumptionWindow,
    uow: UnitOfWork,
    now: Optional[datetime] = None,
) -> float:
    with uow:
        calculator = ConsumptionCalculator(uow.device_registry(), uow.event_store())
        return calculator.for_room(room_id, window, now=now)
