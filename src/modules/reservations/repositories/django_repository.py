"""Django ORM implementation of the Reservation repository.

``save`` is the single write path for a reservation: it persists the row
and turns the domain events collected on the entity into ``OutboxEvent``
rows inside the caller's transaction.

Concurrency control on transitions uses ``select_for_update()``; the
locking query never joins other tables so only the reservation row is
locked.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from modules.core.models import OutboxEvent
from modules.reservations.constants import OUTBOX_TOPIC, ReservationStatus
from modules.reservations.models import Reservation, ReservationStatusHistory
from modules.reservations.repositories.interfaces import IReservationRepository

logger = structlog.get_logger(__name__)


class ReservationDjangoRepository(IReservationRepository):
    """Concrete Reservation repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Reservation]:
        """Retrieve a reservation with buyer, product and seller joined.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Reservation.objects.select_related("buyer", "product__seller")
                .prefetch_related("status_history")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Reservation]:
        try:
            return Reservation.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Reservation]:
        queryset = Reservation.objects.select_related("buyer", "product__seller")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def list_for_buyer(self, buyer_id: int) -> QuerySet[Reservation]:
        return self.list({"buyer_id": buyer_id})

    def list_for_seller(
        self,
        seller_id: Optional[int],
        filters: Optional[Dict[str, Any]] = None,
    ) -> QuerySet[Reservation]:
        queryset = self.list(filters).filter(is_archived=False)
        if seller_id is not None:
            queryset = queryset.filter(product__seller_id=seller_id)
        return queryset

    def count_other_holds(self, product_id: UUID, exclude_id: UUID) -> int:
        return (
            Reservation.objects.filter(
                product_id=product_id,
                status=ReservationStatus.PENDING,
                is_archived=False,
            )
            .exclude(id=exclude_id)
            .count()
        )

    def count_pending_for_seller(self, seller_id: int) -> int:
        return Reservation.objects.filter(
            product__seller_id=seller_id,
            status=ReservationStatus.PENDING,
            is_archived=False,
        ).count()

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Reservation) -> Reservation:
        """Persist a reservation and queue its domain events in the outbox."""
        entity.save()

        events = entity.domain_events
        for event in events:
            OutboxEvent.objects.create(
                event_type=event.event_name,
                aggregate_id=str(event.aggregate_id),
                payload=_serialize_event_payload(event),
                topic=OUTBOX_TOPIC,
            )
        entity.clear_domain_events()

        logger.info(
            "reservation.saved",
            reservation_id=str(entity.id),
            event_count=len(events),
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Archive a reservation.  Returns ``False`` if missing or already archived."""
        reservation = self.get_for_update(id)
        if not reservation:
            return False
        archived = reservation.archive()
        if archived:
            logger.info("reservation.archived", reservation_id=str(id))
        return archived

    # ------------------------------------------------------------------
    # Audit trail
    # ------------------------------------------------------------------

    def add_history(
        self,
        reservation_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> ReservationStatusHistory:
        history = ReservationStatusHistory.objects.create(
            reservation_id=reservation_id,
            old_status=old_status,
            new_status=status,
            user_id=user_id,
            notes=notes,
        )
        logger.info(
            "reservation.history_added",
            reservation_id=str(reservation_id),
            old_status=old_status,
            new_status=status,
        )
        return history


def _serialize_event_payload(event: Any) -> Dict[str, Any]:
    data = asdict(event)
    normalized = _normalize_for_json(data)
    return json.loads(json.dumps(normalized))


def _normalize_for_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, list):
        return [_normalize_for_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize_for_json(val) for key, val in value.items()}
    return value
