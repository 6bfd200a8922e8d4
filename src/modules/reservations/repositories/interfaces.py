"""Reservation repository interface.

Extends ``IRepository[Reservation]`` with the row-lock, hold counting and
audit-trail operations the Transactional Applier needs.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.reservations.models import Reservation, ReservationStatusHistory


class IReservationRepository(IRepository["Reservation"]):
    """Repository contract for the Reservation entity."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Reservation]:
        """Retrieve a reservation with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def add_history(
        self,
        reservation_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> ReservationStatusHistory:
        """Record a status change in the reservation's audit trail."""

    @abstractmethod
    def count_other_holds(self, product_id: UUID, exclude_id: UUID) -> int:
        """Count non-archived PENDING reservations on a product, except one."""

    @abstractmethod
    def list_for_buyer(self, buyer_id: int) -> QuerySet[Reservation]:
        """Reservations placed by a buyer, newest first."""

    @abstractmethod
    def list_for_seller(
        self,
        seller_id: Optional[int],
        filters: Optional[Dict[str, Any]] = None,
    ) -> QuerySet[Reservation]:
        """Non-archived reservations on a seller's products (all sellers if ``None``)."""

    @abstractmethod
    def count_pending_for_seller(self, seller_id: int) -> int:
        """Number of non-archived PENDING reservations on a seller's products."""
