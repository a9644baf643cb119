from datetime import datetime, timezone

import pytest

from energy_monitor_core.application.manage_events import delete_event, get_event
from energy_monitor_core.domain.exceptions import EventNotFound
from energy_monitor_core.domain.models import Event, EventAction


class FakeEventStore:
    def __init__(self):
        self.events = {
            1: Event(
                id=1,
                device_id=3,
                action=EventAction.TURN_ON,
                created_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )
        }

    def get(self, event_id):
        return self.events.get(event_id)

    def soft_delete(self, event_id):
        return self.events.pop(event_id, None) is not None


class StubUoW:
    def __init__(self):
        self.store = FakeEventStore()

    def event_store(self):
        return self.store

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        pass


def test_get_event():
    assert get_event(1, StubUoW()).device_id == 3


def test_get_missing_event():
    with pytest.raises(EventNotFound):
        get_event(2, StubUoW())


def test_delete_event():
    uow = StubUoW()
    delete_event(1, uow)
    assert uow.store.events == {}
    with pytest.raises(EventNotFound):
        delete_event(1, uow)
