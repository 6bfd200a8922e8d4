"""Reservation state machine.

``transition`` is a pure function: it receives the current stock counters
of the product and the immutable facts of the reservation and returns the
state both must take after the status change, or raises.  It performs no
I/O, so the service can run it between ``SELECT ... FOR UPDATE`` and the
write-back without any other query in between.

Rules:

1. Entering ``SOLD`` withdraws ``reservation.quantity`` units (rejected
   with ``OversellError`` when stock is short) and issues a review token
   unless the reservation already carries one.
2. Leaving ``SOLD`` gives the units back and clears ``is_sold``.
3. Any other edge leaves ``quantity`` untouched.
4. Requesting the current status succeeds without any effect.

``is_reserved`` is always recomputed: the product stays reserved while the
reservation is ``PENDING`` or any other hold exists on it.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any, Callable, Optional

from modules.products.ledger import ProductState
from modules.reservations.constants import (
    HOLDING_STATUSES,
    REVIEW_TOKEN_BYTES,
    VALID_TRANSITIONS,
    ReservationStatus,
)
from modules.reservations.exceptions import InvalidTransition, OversellError


@dataclass(frozen=True)
class ReservationState:
    quantity: int
    review_token: Optional[str] = None


@dataclass(frozen=True)
class TransitionResult:
    status: str
    product: ProductState
    review_token: Optional[str]
    quantity_delta: int = 0
    token_issued: bool = False
    changed: bool = True


def parse_status(value: Any) -> ReservationStatus:
    """Normalise a status coming from the outside world.

    Raises:
        InvalidTransition: *value* is not a known status.
    """
    if isinstance(value, str):
        try:
            return ReservationStatus(value.strip().upper())
        except ValueError:
            pass
    raise InvalidTransition(f"Unknown reservation status {value!r}.")


def generate_review_token() -> str:
    return secrets.token_urlsafe(REVIEW_TOKEN_BYTES)


def transition(
    old_status: str,
    new_status: str,
    product: ProductState,
    reservation: ReservationState,
    *,
    has_other_holds: bool = False,
    token_factory: Callable[[], str] = generate_review_token,
) -> TransitionResult:
    """Compute the outcome of moving a reservation from *old_status* to *new_status*.

    Raises:
        InvalidTransition: unknown status, edge not allowed, or a
            reservation without units.
        OversellError: the product has fewer units than the reservation
            claims when entering ``SOLD``.
    """
    current = parse_status(old_status)
    requested = parse_status(new_status)

    if reservation.quantity < 1:
        raise InvalidTransition("Reservation quantity must be at least 1.")

    if current == requested:
        return TransitionResult(
            status=current,
            product=product,
            review_token=reservation.review_token,
            changed=False,
        )

    if requested not in VALID_TRANSITIONS[current]:
        raise InvalidTransition(f"Cannot transition from {current} to {requested}.")

    holding = requested in HOLDING_STATUSES or has_other_holds

    if requested == ReservationStatus.SOLD:
        if not product.can_fulfil(reservation.quantity):
            raise OversellError(
                f"Insufficient stock to mark as sold: requested "
                f"{reservation.quantity}, available {product.quantity}."
            )
        token = reservation.review_token
        issued = token is None
        if issued:
            token = token_factory()
        return TransitionResult(
            status=requested,
            product=product.withdraw(reservation.quantity, is_reserved=has_other_holds),
            review_token=token,
            quantity_delta=-reservation.quantity,
            token_issued=issued,
        )

    if current == ReservationStatus.SOLD:
        return TransitionResult(
            status=requested,
            product=product.restore(reservation.quantity, is_reserved=holding),
            review_token=reservation.review_token,
            quantity_delta=reservation.quantity,
        )

    return TransitionResult(
        status=requested,
        product=product.with_hold(holding),
        review_token=reservation.review_token,
    )
