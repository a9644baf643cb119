class EnergyMonitorError(Exception):
    """Base class for domain errors."""


class InvalidWindow(EnergyMonitorError):
    """Raised when a consumption window starts after it ends."""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"Invalid window: start {start} is after end {end}")


class DeviceNotFound(EnergyMonitorError):
    """Raised when a device id cannot be resolved in the registry."""

    def __init__(self, device_id):
        self.device_id = device_id
        super().__init__(f"Device {device_id} not found")


class MissingPowerRating(EnergyMonitorError):
    """Raised when an actuator has no power rating to multiply by."""

    def __init__(self, device_id):
        self.device_id = device_id
        super().__init__(f"Device {device_id} has no power consumption rating")


class DeviceNotActuator(EnergyMonitorError):
    """Raised when an on/off event is recorded for a device that is not an actuator."""

    def __init__(self, device_id, category):
        self.device_id = device_id
        self.category = category
        super().__init__(f"Device {device_id} is a {category}; only actuators can have events")


class EventNotFound(EnergyMonitorError):
    def __init__(self, event_id):
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found")


class DeviceNotSensor(EnergyMonitorError):
    """Raised when a measurement is recorded for a device that is not a sensor."""

    def __init__(self, device_id, category):
        self.device_id = device_id
        self.category = category
        super().__init__(f"Device {device_id} is a {category}; only sensors can have measurements")


class MeasurementNotFound(EnergyMonitorError):
    def __init__(self, measurement_id):
        self.measurement_id = measurement_id
        super().__init__(f"Measurement {measurement_id} not found")
