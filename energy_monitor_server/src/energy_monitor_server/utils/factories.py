from datetime import datetime, timezone

import factory
from energy_monitor_core.domain.models import (
    Device,
    DeviceCategory,
    Event,
    EventAction,
    Measurement,
)


class DeviceFactory(factory.Factory):
    class Meta:
        model = Device

    id = factory.Sequence(lambda n: n + 1)
    category = DeviceCategory.ACTUATOR
    power_consumption = 1.0
    room_id = 1
    organization_id = 1
    units = None


class EventFactory(factory.Factory):
    class Meta:
        model = Event

    device_id = 1
    action = EventAction.TURN_ON
    created_date = factory.LazyFunction(lambda: datetime.now(tz=timezone.utc))
    room_id = 1
    id = None


class MeasurementFactory(factory.Factory):
    class Meta:
        model = Measurement

    device_id = 1
    value = factory.Sequence(lambda n: float(n))
    created_date = factory.LazyFunction(lambda: datetime.now(tz=timezone.utc))
    room_id = 1
    id = None
