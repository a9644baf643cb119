import logging

from energy_monitor_core.domain.exceptions import EventNotFound
from energy_monitor_core.domain.models import Event
from energy_monitor_core.domain.ports import UnitOfWork

log = logging.getLogger(__name__)


def get_event(event_id: int, uow: UnitOfWork) -> Event:
    with uow:
        event = uow.event_store().get(event_id)
        if event is None:
            raise EventNotFound(event_id)
        return event


def delete_event(event_id: int, uow: UnitOfWork) -> None:
    with uow:
        if not uow.event_store().soft_delete(event_id):
            raise EventNotFound(event_id)
    log.info("Deleted event %s", event_id)
