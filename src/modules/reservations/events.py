"""Domain events for the Reservations bounded context.

Payloads are written to the transactional outbox as JSON, so every field
is a primitive.  Review tokens are never part of an event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class ReservationCreated(DomainEvent):
    """Raised when a buyer places a reservation."""

    seller_id: Optional[int] = None
    buyer_id: Optional[int] = None
    product_id: str = ""
    quantity: int = 0


@dataclass(frozen=True)
class ReservationStatusChanged(DomainEvent):
    """Raised after every committed status change."""

    old_status: str = ""
    new_status: str = ""
    actor_id: Optional[int] = None
    product_id: str = ""
    quantity_delta: int = 0


@dataclass(frozen=True)
class ReservationSold(DomainEvent):
    """Raised the first time a reservation enters SOLD (review token issued)."""

    buyer_id: Optional[int] = None
    product_id: str = ""
