"""
Power consumption reconstruction from actuator on/off events.

Events are paired per device into on-intervals, each interval is clipped
to the reporting window, and the clipped hours are multiplied by the
device's power rating. Devices still on after the last event are treated
as on until ``now``.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional

from energy_monitor_core.domain.exceptions import (
    DeviceNotFound,
    InvalidWindow,
    MissingPowerRating,
)
from energy_monitor_core.domain.models import (
    ConsumptionWindow,
    Device,
    Event,
    EventAction,
    OnInterval,
    as_utc,
)

log = logging.getLogger(__name__)

DeviceLookup = Callable[[int], Optional[Device]]


class _RatingCache:
    """Resolves each device's power rating once per computation."""

    def __init__(self, lookup_device: DeviceLookup):
        self._lookup = lookup_device
        self._ratings: Dict[int, float] = {}

    def resolve(self, device_id: int) -> float:
        if device_id not in self._ratings:
            device = self._lookup(device_id)
            if device is None:
                raise DeviceNotFound(device_id)
            if device.power_consumption is None:
                raise MissingPowerRating(device_id)
            self._ratings[device_id] = device.power_consumption
        return self._ratings[device_id]


def compute_consumption(
    events: Iterable[Event],
    window: ConsumptionWindow,
    lookup_device: DeviceLookup,
    now: Optional[datetime] = None,
) -> float:
    """
    Total energy (rating unit x hours) consumed inside ``window``.

    ``events`` may arrive in any order; they are processed by ``created_date``
    and events sharing a timestamp keep their arrival order. A TurnOff with
    no open TurnOn is ignored, and a repeated TurnOn moves the open
    timestamp forward. Naive timestamps are read as UTC. Raises
    ``InvalidWindow`` before touching any event, and ``DeviceNotFound`` /
    ``MissingPowerRating`` as soon as an event references a device that
    cannot be rated. No partial total is returned.
    """
    if window.start > window.end:
        raise InvalidWindow(window.start, window.end)
    now = as_utc(now) if now is not None else datetime.now(tz=timezone.utc)

    ratings = _RatingCache(lookup_device)
    on_since: Dict[int, datetime] = {}
    hours: Dict[int, float] = {}

    for event in sorted(events, key=lambda e: as_utc(e.created_date)):
        device_id = event.device_id
        ratings.resolve(device_id)
        hours.setdefault(device_id, 0.0)

        if event.action == EventAction.TURN_ON:
            if device_id in on_since:
                log.debug(
                    "Device %s turned on again at %s, replacing %s",
                    device_id,
                    event.created_date,
                    on_since[device_id],
                )
            on_since[device_id] = event.created_date
            continue

        if device_id not in on_since:
            log.debug("Ignoring stray turn-off for device %s at %s", device_id, event.created_date)
            continue

        interval = OnInterval(device_id, on_since.pop(device_id), event.created_date)
        hours[device_id] += interval.clipped_hours(window)

    # still on
    for device_id, on_time in on_since.items():
        hours[device_id] += OnInterval(device_id, on_time, now).clipped_hours(window)

    return sum(hours[device_id] * ratings.resolve(device_id) for device_id in sorted(hours))
