"""Product repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """List live (not soft-deleted) products with optional filters."""

    @abstractmethod
    def get_for_update(
        self, id: str, include_deleted: bool = False
    ) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Soft-deleted rows are skipped unless *include_deleted* is set.

        Every reservation write path locks the product row first, so two
        transitions touching the same stock serialize here.
        """

    @abstractmethod
    def save_stock(self, product: Product) -> Product:
        """Persist only the ledger columns of *product*."""
