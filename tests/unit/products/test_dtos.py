"""Unit tests for Product DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, UpdateProductDTO

pytestmark = pytest.mark.unit


class TestCreateProductDTO:
    def test_valid(self):
        dto = CreateProductDTO(name="  Vestido Floral ", price=Decimal("120.00"), quantity=3)
        assert dto.name == "Vestido Floral"
        assert dto.quantity == 3
        assert dto.description == ""

    def test_quantity_defaults_to_zero(self):
        assert CreateProductDTO(name="Bolsa", price=Decimal("10")).quantity == 0

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-1.50")])
    def test_price_must_be_positive(self, price):
        with pytest.raises(ValidationError, match="Price must be greater than zero"):
            CreateProductDTO(name="Bolsa", price=price)

    def test_blank_name(self):
        with pytest.raises(ValidationError, match="Name must not be empty"):
            CreateProductDTO(name="   ", price=Decimal("10"))

    def test_negative_quantity(self):
        with pytest.raises(ValidationError, match="Quantity cannot be negative"):
            CreateProductDTO(name="Bolsa", price=Decimal("10"), quantity=-1)

    def test_frozen(self):
        dto = CreateProductDTO(name="Bolsa", price=Decimal("10"))
        with pytest.raises(ValidationError):
            dto.name = "Outra"


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        dto = UpdateProductDTO()
        assert dto.name is None and dto.price is None and dto.description is None

    def test_has_no_quantity(self):
        assert "quantity" not in UpdateProductDTO.model_fields

    def test_price_validation(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(price=Decimal("0"))
