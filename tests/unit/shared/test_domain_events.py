"""Unit tests for domain event primitives and the in-memory bus."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.reservations.events import (
    ReservationCreated,
    ReservationSold,
    ReservationStatusChanged,
)
from modules.reservations.models import Reservation
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


class _Recorder:
    def __init__(self, fail: bool = False) -> None:
        self.seen: list[DomainEvent] = []
        self.fail = fail

    def handle(self, event: DomainEvent) -> None:
        self.seen.append(event)
        if self.fail:
            raise RuntimeError("handler failed")


def test_event_name_is_class_name():
    event = ReservationSold(aggregate_id=uuid4(), buyer_id=7, product_id="p")
    assert event.event_name == "ReservationSold"


def test_events_are_immutable():
    event = ReservationSold(aggregate_id=uuid4())
    with pytest.raises(AttributeError):
        event.buyer_id = 3  # type: ignore[misc]


def test_from_payload_rebuilds_event():
    original = ReservationStatusChanged(
        aggregate_id=uuid4(),
        old_status="PENDING",
        new_status="SOLD",
        actor_id=4,
        product_id="p-1",
        quantity_delta=-2,
    )
    payload = {
        "aggregate_id": str(original.aggregate_id),
        "event_id": str(original.event_id),
        "occurred_on": original.occurred_on.isoformat(),
        "event_name": original.event_name,
        "old_status": "PENDING",
        "new_status": "SOLD",
        "actor_id": 4,
        "product_id": "p-1",
        "quantity_delta": -2,
    }

    rebuilt = DomainEvent.from_payload("ReservationStatusChanged", payload)

    assert rebuilt == original


def test_from_payload_ignores_unknown_keys():
    rebuilt = DomainEvent.from_payload(
        "ReservationCreated",
        {"aggregate_id": str(uuid4()), "quantity": 2, "legacy_field": "x"},
    )
    assert isinstance(rebuilt, ReservationCreated)
    assert rebuilt.quantity == 2


def test_from_payload_unknown_event():
    with pytest.raises(LookupError):
        DomainEvent.from_payload("OrderShipped", {"aggregate_id": str(uuid4())})


def test_reservation_collects_and_clears_events():
    reservation = Reservation(quantity=1)
    reservation.add_domain_event(ReservationSold(aggregate_id=reservation.id))

    assert [e.event_name for e in reservation.domain_events] == ["ReservationSold"]
    reservation.clear_domain_events()
    assert reservation.domain_events == []


class TestInMemoryEventBus:
    def test_publish_reaches_subscribers_of_that_type_only(self):
        bus = InMemoryEventBus()
        sold, created = _Recorder(), _Recorder()
        bus.subscribe(ReservationSold, sold)
        bus.subscribe(ReservationCreated, created)

        event = ReservationSold(aggregate_id=uuid4())
        bus.publish(event)

        assert sold.seen == [event]
        assert created.seen == []

    def test_subscribe_is_idempotent(self):
        bus = InMemoryEventBus()
        handler = _Recorder()
        bus.subscribe(ReservationSold, handler)
        bus.subscribe(ReservationSold, handler)

        assert bus.handlers_for(ReservationSold) == [handler]

    def test_handler_errors_propagate(self):
        bus = InMemoryEventBus()
        bus.subscribe(ReservationSold, _Recorder(fail=True))

        with pytest.raises(RuntimeError):
            bus.publish(ReservationSold(aggregate_id=uuid4()))


def test_app_registers_reservation_handlers():
    from shared.infrastructure.bus import event_bus

    for event_class in (ReservationCreated, ReservationSold, ReservationStatusChanged):
        assert event_bus.handlers_for(event_class)
