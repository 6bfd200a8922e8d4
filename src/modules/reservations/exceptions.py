"""Reservation domain exceptions.

Raised by the state machine and the Service Layer when business rules are
violated.  The API layer (Views) catches these and translates them into
HTTP responses.
"""

from __future__ import annotations


class ReservationNotFound(Exception):
    """The requested reservation does not exist."""


class InvalidTransition(Exception):
    """Unknown status value, disallowed edge, or archived reservation."""


class OversellError(Exception):
    """Marking the reservation as sold would take product stock below zero."""


class InsufficientStock(Exception):
    """The product does not have enough units for a new reservation."""
