"""Reservation domain constants.

Defines status choices and the allowed edges of the reservation state
machine.  ``SOLD`` can be left again (sale reversal); ``CANCELED`` is
terminal.
"""

from django.db import models


class ReservationStatus(models.TextChoices):
    PENDING = "PENDING", "Pendente"
    CONFIRMED = "CONFIRMED", "Confirmada"
    SOLD = "SOLD", "Vendida"
    CANCELED = "CANCELED", "Cancelada"


VALID_TRANSITIONS: dict[str, set[str]] = {
    ReservationStatus.PENDING: {
        ReservationStatus.CONFIRMED,
        ReservationStatus.CANCELED,
        ReservationStatus.SOLD,
    },
    ReservationStatus.CONFIRMED: {
        ReservationStatus.PENDING,
        ReservationStatus.SOLD,
        ReservationStatus.CANCELED,
    },
    ReservationStatus.SOLD: {
        ReservationStatus.CONFIRMED,
        ReservationStatus.PENDING,
        ReservationStatus.CANCELED,
    },
    ReservationStatus.CANCELED: set(),
}

# Statuses that keep a soft hold on the product (``Product.is_reserved``).
HOLDING_STATUSES: set[str] = {ReservationStatus.PENDING}

TERMINAL_STATES: set[str] = {ReservationStatus.CANCELED}

REVIEW_TOKEN_BYTES = 32

OUTBOX_TOPIC = "reservations"
