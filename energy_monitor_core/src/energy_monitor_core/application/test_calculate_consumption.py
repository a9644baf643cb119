from datetime import datetime, timezone

import pytest

from energy_monitor_core.application.calculate_consumption import (
    ConsumptionCalculator,
    get_room_power_consumption,
)
from energy_monitor_core.domain.exceptions import DeviceNotFound, InvalidWindow
from energy_monitor_core.domain.models import (
    ConsumptionWindow,
    Device,
    DeviceCategory,
    Event,
    EventAction,
)

WINDOW = ConsumptionWindow(
    start=datetime(2024, 1, 1, tzinfo=timezone.utc),
    end=datetime(2024, 1, 2, tzinfo=timezone.utc),
)
NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _event(device_id, action, hour, room_id=7):
    return Event(
        device_id=device_id,
        action=action,
        created_date=datetime(2024, 1, 1, hour, tzinfo=timezone.utc),
        room_id=room_id,
    )


class FakeDeviceRegistry:
    def __init__(self):
        self.devices = {
            1: Device(id=1, category=DeviceCategory.ACTUATOR, power_consumption=2.0, room_id=7),
            2: Device(id=2, category=DeviceCategory.ACTUATOR, power_consumption=1.5, room_id=7),
        }

    def get(self, device_id):
        return self.devices.get(device_id)


class FakeEventStore:
    def __init__(self, events):
        self.events = events
        self.calls = []

    def get_events_for_room(self, room_id, until=None):
        self.calls.append((room_id, until))
        return [e for e in self.events if e.room_id == room_id]


class StubUoW:
    def __init__(self, events):
        self.registry = FakeDeviceRegistry()
        self.store = FakeEventStore(events)
        self.entered = 0

    def device_registry(self):
        return self.registry

    def event_store(self):
        return self.store

    def __enter__(self):
        self.entered += 1
        return self

    def __exit__(self, *exc):
        pass


def test_for_room_fetches_events_up_to_window_end():
    events = [
        _event(1, EventAction.TURN_ON, 10),
        _event(1, EventAction.TURN_OFF, 14),
        _event(2, EventAction.TURN_ON, 20),
        _event(2, EventAction.TURN_OFF, 22, room_id=8),
    ]
    uow = StubUoW(events)
    calculator = ConsumptionCalculator(uow.registry, uow.store)

    total = calculator.for_room(7, WINDOW, now=NOW)

    # device 2 is still on as far as room 7 knows: 20:00 until window end
    assert total == pytest.approx(4 * 2.0 + 4 * 1.5)
    assert uow.store.calls == [(7, WINDOW.end)]


def test_compute_uses_registry_ratings():
    uow = StubUoW([])
    calculator = ConsumptionCalculator(uow.registry, uow.store)
    events = [_event(2, EventAction.TURN_ON, 0), _event(2, EventAction.TURN_OFF, 2)]
    assert calculator.compute(events, WINDOW, now=NOW) == pytest.approx(3.0)


def test_for_room_rejects_inverted_window_without_fetching():
    uow = StubUoW([])
    calculator = ConsumptionCalculator(uow.registry, uow.store)
    inverted = ConsumptionWindow(start=WINDOW.end, end=WINDOW.start)

    with pytest.raises(InvalidWindow):
        calculator.for_room(7, inverted, now=NOW)
    assert uow.store.calls == []


def test_for_room_unknown_device_propagates():
    uow = StubUoW([_event(42, EventAction.TURN_ON, 3)])
    with pytest.raises(DeviceNotFound):
        get_room_power_consumption(7, WINDOW, uow, now=NOW)


def test_get_room_power_consumption_opens_unit_of_work():
    uow = StubUoW([_event(1, EventAction.TURN_ON, 10), _event(1, EventAction.TURN_OFF, 11)])
    assert get_room_power_consumption(7, WINDOW, uow, now=NOW) == pytest.approx(2.0)
    assert uow.entered == 1
