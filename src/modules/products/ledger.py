"""Inventory ledger: a product's stock counters as a pure value.

``ProductState`` never performs I/O.  Each operation returns a new state
whose flags are derived from the quantity and the hold information passed
in, so ``is_sold`` / ``is_reserved`` cannot drift from the stock count.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from modules.products.exceptions import StockInvariantViolation


@dataclass(frozen=True)
class ProductState:
    quantity: int
    is_sold: bool = False
    is_reserved: bool = False

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise StockInvariantViolation(
                f"Product quantity cannot be negative (got {self.quantity})."
            )

    def can_fulfil(self, units: int) -> bool:
        return 0 < units <= self.quantity

    def withdraw(self, units: int, *, is_reserved: bool) -> ProductState:
        """Remove *units* from stock (sale)."""
        if units < 1:
            raise StockInvariantViolation("Withdrawn units must be positive.")
        remaining = self.quantity - units
        return ProductState(
            quantity=remaining,
            is_sold=remaining <= 0,
            is_reserved=is_reserved,
        )

    def restore(self, units: int, *, is_reserved: bool) -> ProductState:
        """Give *units* back to stock (sale reversal)."""
        if units < 1:
            raise StockInvariantViolation("Restored units must be positive.")
        return ProductState(
            quantity=self.quantity + units,
            is_sold=False,
            is_reserved=is_reserved,
        )

    def with_hold(self, is_reserved: bool) -> ProductState:
        return replace(self, is_reserved=is_reserved)
