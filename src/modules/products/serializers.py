"""Product DRF serializers (read side).

Writes go through the pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    seller_name = serializers.CharField(source="seller.display_name", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "seller_id",
            "seller_name",
            "name",
            "description",
            "price",
            "quantity",
            "is_sold",
            "is_reserved",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
