import logging

import paho.mqtt.client as mqtt
from energy_monitor_core.application import record_device_event, record_measurement
from energy_monitor_core.config.environments import get_settings
from energy_monitor_core.domain.exceptions import EnergyMonitorError
from pydantic import ValidationError

from energy_monitor_server.adapters.api.schemas import EventIn, MeasurementIn
from energy_monitor_server.adapters.db.uow import SqlAlchemyUoW

log = logging.getLogger(__name__)


def _on_connect(client, _userdata, _flags, reason_code, _properties):
    settings = get_settings()

    if reason_code.is_failure:
        log.error("MQTT connect failed, reason=%s", reason_code)
        return
    log.info("Connected to broker %s:%s", settings.MQTT_BROKER, settings.MQTT_PORT)
    for topic in (settings.MQTT_TOPIC, settings.MQTT_MEASUREMENT_TOPIC):
        client.subscribe(topic, qos=1)
        log.info("Subscribed to %s", topic)


def _ingest_event(payload: bytes, uow: SqlAlchemyUoW) -> None:
    event_in = EventIn.model_validate_json(payload)
    event = record_device_event(event_in.device_id, event_in.action, uow)
    log.debug("Ingested event %s from device %s", event.id, event.device_id)


def _ingest_measurement(payload: bytes, uow: SqlAlchemyUoW) -> None:
    measurement_in = MeasurementIn.model_validate_json(payload)
    measurement = record_measurement(measurement_in.device_id, measurement_in.value, uow)
    log.debug("Ingested measurement %s from device %s", measurement.id, measurement.device_id)


def _on_message(_client, _userdata, msg):
    settings = get_settings()
    if mqtt.topic_matches_sub(settings.MQTT_MEASUREMENT_TOPIC, msg.topic):
        ingest = _ingest_measurement
    else:
        ingest = _ingest_event

    try:
        with SqlAlchemyUoW() as uow:
            ingest(msg.payload, uow)
    except ValidationError as exc:
        log.warning("Dropping malformed payload on topic %s: %s", msg.topic, exc)
    except EnergyMonitorError as exc:
        log.warning("Rejected message on topic %s: %s", msg.topic, exc)
    except Exception as exc:
        log.exception("Failed to process message on topic %s: %s", msg.topic, exc)


def main() -> None:
    settings = get_settings()
    log.info(
        "Connecting to MQTT broker at %s:%s as %s",
        settings.MQTT_BROKER,
        settings.MQTT_PORT,
        settings.MQTT_CLIENT_ID,
    )

    client = mqtt.Client(
        mqtt.CallbackAPIVersion.VERSION2,
        client_id=settings.MQTT_CLIENT_ID,
        clean_session=True,
    )
    client.on_connect = _on_connect
    client.on_message = _on_message
    client.connect(settings.MQTT_BROKER, settings.MQTT_PORT, keepalive=60)
    client.loop_forever()
