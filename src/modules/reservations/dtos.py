"""Reservation DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and ``ReservationService``.
DTOs are immutable (``frozen=True``).
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class CreateReservationDTO(BaseModel):
    """A buyer claims ``quantity`` units of ``product_id``."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int = 1

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class TransitionReservationDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    notes: str = ""

    @field_validator("status")
    @classmethod
    def status_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field 'status' is required.")
        return v.strip()
