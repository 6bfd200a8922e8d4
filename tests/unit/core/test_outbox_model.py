"""Unit tests for the OutboxEvent model."""

from __future__ import annotations

import uuid

import pytest

from modules.core.models import EventStatus, OutboxEvent

pytestmark = pytest.mark.unit


def _make_event(**overrides) -> OutboxEvent:
    aggregate_id = str(uuid.uuid4())
    defaults = {
        "event_type": "ReservationCreated",
        "payload": {"aggregate_id": aggregate_id, "quantity": 2},
        "aggregate_id": aggregate_id,
        "topic": "reservations",
    }
    defaults.update(overrides)
    return OutboxEvent.objects.create(**defaults)


class TestCreation:
    def test_defaults(self):
        event = _make_event()
        event.refresh_from_db()
        assert event.status == EventStatus.PENDING
        assert event.processed_at is None
        assert event.error_message is None
        assert event.retry_count == 0
        assert event.id.version == 7

    def test_payload_round_trips_through_json_column(self):
        payload = {"product_id": "abc", "quantity_delta": -3, "nested": {"k": [1, 2]}}
        event = _make_event(payload=payload)
        event.refresh_from_db()
        assert event.payload == payload

    def test_str(self):
        event = _make_event(aggregate_id="r-1")
        assert str(event) == "ReservationCreated [PENDING] (r-1)"


class TestStatusChanges:
    def test_mark_as_published(self):
        event = _make_event()
        event.mark_as_published()
        event.refresh_from_db()
        assert event.status == EventStatus.PUBLISHED
        assert event.processed_at is not None

    def test_mark_as_failed_counts_attempts(self):
        event = _make_event()
        event.mark_as_failed("smtp down")
        event.mark_as_failed("smtp still down")
        event.refresh_from_db()
        assert event.status == EventStatus.FAILED
        assert event.error_message == "smtp still down"
        assert event.retry_count == 2


class TestQuerySet:
    def test_pending_excludes_processed_rows(self):
        waiting = _make_event()
        done = _make_event()
        broken = _make_event()
        done.mark_as_published()
        broken.mark_as_failed("boom")

        assert list(OutboxEvent.objects.pending()) == [waiting]

    def test_pending_is_oldest_first(self):
        first = _make_event()
        second = _make_event()
        assert list(OutboxEvent.objects.pending()) == [first, second]

    def test_for_aggregate_accepts_uuid(self):
        aggregate = uuid.uuid4()
        mine = _make_event(aggregate_id=str(aggregate))
        _make_event()
        assert list(OutboxEvent.objects.for_aggregate(aggregate)) == [mine]
