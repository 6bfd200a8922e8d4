"""Product model: a seller's listing and its inventory counters.

Business rules implemented:
- ``quantity`` is the number of units available for new reservations and
  never goes negative (DB check constraint + ledger invariant).
- ``is_sold`` / ``is_reserved`` are derived flags.  They are only written
  through ``apply_state`` with a ``ProductState`` computed by the
  reservation state machine.
- Price must be greater than zero.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel
from modules.products.ledger import ProductState

logger = structlog.get_logger(__name__)

STOCK_FIELDS = ["quantity", "is_sold", "is_reserved"]


class Product(SoftDeleteModel):
    """Product aggregate root (inventory ledger row)."""

    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="products",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    quantity = models.PositiveIntegerField(default=0)
    is_sold = models.BooleanField(default=False)
    is_reserved = models.BooleanField(default=False)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["seller"], name="products_seller_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="products_quantity_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    @property
    def state(self) -> ProductState:
        return ProductState(
            quantity=self.quantity,
            is_sold=self.is_sold,
            is_reserved=self.is_reserved,
        )

    def apply_state(self, state: ProductState) -> None:
        self.quantity = state.quantity
        self.is_sold = state.is_sold
        self.is_reserved = state.is_reserved

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                seller_id=self.seller_id,
                quantity=self.quantity,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.quantity} un.)"
