"""Asynchronous tasks of the core module.

``relay_outbox_events`` is the side-effect dispatcher: it turns committed
``OutboxEvent`` rows back into domain events and publishes them on the
in-process bus.  Handler failures are recorded on the row and logged; they
never reach the request that committed the state change.
"""

from __future__ import annotations

import structlog
from celery import shared_task
from django.db import transaction

from modules.core.models import OutboxEvent
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)

RELAY_BATCH_SIZE = 100


@shared_task(name="core.debug_task")
def debug_task():
    """Diagnostic task used to check that the worker is alive."""
    logger.info("debug_task.executed", status="ok")
    return {"status": "ok", "message": "Celery is working"}


@shared_task(name="core.relay_outbox_events")
def relay_outbox_events(batch_size: int = RELAY_BATCH_SIZE) -> dict:
    """Publish pending outbox events, one savepoint per event."""
    published = 0
    failed = 0

    with transaction.atomic():
        batch = list(
            OutboxEvent.objects.pending().select_for_update(skip_locked=True)[
                :batch_size
            ]
        )
        for outbox in batch:
            log = logger.bind(
                outbox_id=str(outbox.id),
                event_type=outbox.event_type,
                aggregate_id=outbox.aggregate_id,
            )
            try:
                with transaction.atomic():
                    event = DomainEvent.from_payload(outbox.event_type, outbox.payload)
                    event_bus.publish(event)
            except Exception as exc:
                log.exception("outbox.relay_failed")
                outbox.mark_as_failed(str(exc))
                failed += 1
            else:
                outbox.mark_as_published()
                published += 1

    if batch:
        logger.info("outbox.relayed", published=published, failed=failed)
    return {"published": published, "failed": failed}


def schedule_outbox_relay() -> None:
    """Enqueue the relay; a broker outage leaves rows for the periodic sweep."""
    try:
        relay_outbox_events.delay()
    except Exception:
        logger.exception("outbox.relay_schedule_failed")
