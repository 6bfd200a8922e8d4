"""Event handlers for Reservations domain events.

Handlers run inside the outbox relay, after the transition that produced
the event has committed.  An exception here marks the outbox row as
FAILED; it never undoes the transition.
"""

from __future__ import annotations

import structlog

from modules.notifications.repositories.django_repository import (
    AdminNotificationDjangoRepository,
)
from modules.notifications.services import NotificationService
from modules.notifications.tasks import (
    send_reservation_email,
    send_review_request_email,
)
from modules.reservations.events import (
    ReservationCreated,
    ReservationSold,
    ReservationStatusChanged,
)
from modules.reservations.models import Reservation
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class ReservationCreatedHandler(IEventHandler[ReservationCreated]):
    """Notify the back-office and e-mail the seller about a new reservation."""

    def __init__(self, notification_service: NotificationService | None = None) -> None:
        self._notifications = notification_service or NotificationService(
            repository=AdminNotificationDjangoRepository()
        )

    def handle(self, event: ReservationCreated) -> None:
        reservation = (
            Reservation.objects.select_related("buyer", "product__seller")
            .filter(id=event.aggregate_id)
            .first()
        )
        if reservation is None:
            logger.warning(
                "reservation.handler_missing_reservation",
                reservation_id=str(event.aggregate_id),
            )
            return

        seller = reservation.product.seller
        self._notifications.notify(
            seller_id=seller.pk,
            reservation_id=reservation.id,
            message=(
                f"{reservation.buyer.display_name} reservou {reservation.quantity}x "
                f'"{reservation.product.name}" de {seller.display_name}.'
            ),
            contact_channel=seller.contact_channel,
        )
        send_reservation_email.delay(str(reservation.id))


class ReservationSoldHandler(IEventHandler[ReservationSold]):
    def handle(self, event: ReservationSold) -> None:
        send_review_request_email.delay(str(event.aggregate_id))


class ReservationStatusChangedHandler(IEventHandler[ReservationStatusChanged]):
    def handle(self, event: ReservationStatusChanged) -> None:
        logger.info(
            "reservation.status_changed",
            reservation_id=str(event.aggregate_id),
            product_id=event.product_id,
            old_status=event.old_status,
            new_status=event.new_status,
            quantity_delta=event.quantity_delta,
            actor_id=event.actor_id,
        )


reservation_created_handler = ReservationCreatedHandler()
reservation_sold_handler = ReservationSoldHandler()
reservation_status_changed_handler = ReservationStatusChangedHandler()
