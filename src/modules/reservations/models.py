"""Reservation and ReservationStatusHistory models.

Business rules implemented:
- ``quantity`` is fixed at creation and is at least 1 (DB check constraint).
- ``status`` only changes through ``ReservationService.transition_reservation``.
- ``review_token`` is issued once, on the first entry into SOLD, and never
  regenerated or exposed by the API serializers.
- Archival (``is_archived``) hides a reservation from the seller's working
  view; rows are never hard-deleted by the normal flow.
- Every status change appends a ``ReservationStatusHistory`` record.
"""

from __future__ import annotations

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.reservations.constants import ReservationStatus
from modules.reservations.state_machine import ReservationState
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class Reservation(DomainEventMixin, BaseModel):
    """A buyer's claim on ``quantity`` units of one product."""

    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    status = models.CharField(
        max_length=20,
        choices=ReservationStatus.choices,
        default=ReservationStatus.PENDING,
    )
    review_token = models.CharField(  # noqa: DJ01
        max_length=64,
        unique=True,
        null=True,
        blank=True,
        default=None,
        editable=False,
    )
    is_archived = models.BooleanField(default=False)
    read_by_admin = models.BooleanField(default=False)

    class Meta:
        db_table = "reservations"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["product", "status"],
                name="rsv_product_status_idx",
            ),
            models.Index(fields=["buyer"], name="reservations_buyer_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="reservations_quantity_positive",
            ),
        ]

    @property
    def state(self) -> ReservationState:
        return ReservationState(quantity=self.quantity, review_token=self.review_token)

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    def archive(self) -> bool:
        """Hide the reservation from seller views.  Returns ``False`` if already archived."""
        if self.is_archived:
            return False
        self.is_archived = True
        self.save(update_fields=["is_archived", "updated_at"])
        return True

    def mark_as_read(self) -> None:
        if self.read_by_admin:
            return
        self.read_by_admin = True
        self.save(update_fields=["read_by_admin", "updated_at"])

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} ({self.status})"


class ReservationStatusHistory(BaseModel):
    """Append-only audit trail for reservation status changes.

    ``user`` is nullable: ``None`` means the change was made by the system.
    """

    reservation = models.ForeignKey(
        "reservations.Reservation",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=ReservationStatus.choices,
        null=True,
        blank=True,
    )
    new_status = models.CharField(
        max_length=20,
        choices=ReservationStatus.choices,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "reservation_status_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["reservation", "-created_at"],
                name="rsh_reservation_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.reservation_id} : {self.old_status} -> {self.new_status}"
