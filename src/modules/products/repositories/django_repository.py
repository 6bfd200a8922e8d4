"""Django ORM implementation of the Product repository.

Methods return ``None`` for missing entities instead of raising: the
Service Layer decides how to translate absence into a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from modules.products.models import STOCK_FIELDS, Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        try:
            return Product.objects.alive().select_related("seller").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"seller_id": 3}
            {"name__icontains": "bicicleta"}
        """
        queryset = Product.objects.alive().select_related("seller")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def get_for_update(
        self, id: str, include_deleted: bool = False
    ) -> Optional[Product]:
        queryset = Product.objects.all() if include_deleted else Product.objects.alive()
        try:
            return queryset.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    def save_stock(self, product: Product) -> Product:
        product.save(update_fields=STOCK_FIELDS)
        logger.info(
            "product.stock_saved",
            product_id=str(product.id),
            quantity=product.quantity,
            is_sold=product.is_sold,
            is_reserved=product.is_reserved,
        )
        return product

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a product by ID."""
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.soft_deleted", product_id=str(id))
        return True
