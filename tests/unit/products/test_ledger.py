"""Unit tests for the ``ProductState`` ledger value."""

from __future__ import annotations

import pytest

from modules.products.exceptions import StockInvariantViolation
from modules.products.ledger import ProductState

pytestmark = pytest.mark.unit


class TestInvariant:
    def test_negative_quantity_is_rejected(self):
        with pytest.raises(StockInvariantViolation):
            ProductState(quantity=-1)

    def test_withdrawing_more_than_available_is_rejected(self):
        with pytest.raises(StockInvariantViolation):
            ProductState(quantity=1).withdraw(2, is_reserved=False)

    @pytest.mark.parametrize("units", [0, -3])
    def test_non_positive_units_are_rejected(self, units):
        state = ProductState(quantity=5)
        with pytest.raises(StockInvariantViolation):
            state.withdraw(units, is_reserved=False)
        with pytest.raises(StockInvariantViolation):
            state.restore(units, is_reserved=False)


class TestCanFulfil:
    def test_exact_quantity(self):
        assert ProductState(quantity=3).can_fulfil(3) is True

    def test_more_than_available(self):
        assert ProductState(quantity=3).can_fulfil(4) is False

    def test_zero_units(self):
        assert ProductState(quantity=3).can_fulfil(0) is False


class TestOperations:
    def test_withdraw_derives_is_sold(self):
        assert ProductState(quantity=3).withdraw(1, is_reserved=False).is_sold is False
        assert ProductState(quantity=3).withdraw(3, is_reserved=False).is_sold is True

    def test_restore_clears_is_sold(self):
        state = ProductState(quantity=0, is_sold=True).restore(2, is_reserved=True)
        assert state == ProductState(quantity=2, is_sold=False, is_reserved=True)

    def test_with_hold_only_changes_flag(self):
        state = ProductState(quantity=0, is_sold=True)
        assert state.with_hold(True) == ProductState(quantity=0, is_sold=True, is_reserved=True)

    def test_states_are_immutable(self):
        state = ProductState(quantity=1)
        with pytest.raises(AttributeError):
            state.quantity = 2  # type: ignore[misc]
