"""Product service layer (Use Cases).

Sellers create and edit their own listings; administrators may edit any.
The initial ``quantity`` is the only stock write performed here; every
later change goes through the reservation transition path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.accounts.exceptions import NotAuthorized
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.identity import Actor
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, actor: Actor, dto: CreateProductDTO) -> Product:
        """Create a listing owned by *actor*.

        Raises:
            NotAuthorized: the actor is neither a seller nor an admin.
        """
        if not (actor.is_seller or actor.is_admin):
            raise NotAuthorized("Only sellers can create products.")

        product = Product(
            seller_id=actor.user_id,
            name=dto.name,
            price=dto.price,
            description=dto.description,
            quantity=dto.quantity,
        )
        product = self._repo.save(product)
        logger.info(
            "product.created", product_id=str(product.id), seller_id=actor.user_id
        )
        return product

    @transaction.atomic
    def update_product(self, actor: Actor, id: str, dto: UpdateProductDTO) -> Product:
        """Update descriptive fields of a listing.

        The row is locked so a concurrent reservation transition cannot be
        overwritten by the full-row save.

        Raises:
            ProductNotFound: the product does not exist.
            NotAuthorized: the actor does not own the product.
        """
        product = self._repo.get_for_update(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        if not actor.can_manage(product.seller_id):
            raise NotAuthorized("You can only edit your own products.")

        for field in ("name", "price", "description"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        product = self._repo.save(product)
        logger.info("product.updated", product_id=str(id))
        return product

    @transaction.atomic
    def delete_product(self, actor: Actor, id: str) -> None:
        """Soft-delete a listing.

        Raises:
            ProductNotFound: the product does not exist.
            NotAuthorized: the actor does not own the product.
        """
        product = self.get_product(id)
        if not actor.can_manage(product.seller_id):
            raise NotAuthorized("You can only delete your own products.")
        self._repo.delete(id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[Product]:
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        """Raises ProductNotFound if the product does not exist."""
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
