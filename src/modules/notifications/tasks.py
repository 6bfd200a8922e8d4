"""Celery tasks delivering the reservation e-mails.

Tasks receive only the reservation id and load everything else, review
token included, from the database at send time.
"""

from __future__ import annotations

import structlog
from celery import shared_task
from django.apps import apps

from modules.notifications.emails import (
    RESERVATION_CREATED,
    REVIEW_REQUEST,
    send_templated_email,
    site_link,
)

logger = structlog.get_logger(__name__)

RETRY_COUNTDOWN = 60


def _load_reservation(reservation_id: str):
    reservation_model = apps.get_model("reservations", "Reservation")
    return (
        reservation_model.objects.select_related("buyer", "product__seller")
        .filter(id=reservation_id)
        .first()
    )


@shared_task(bind=True, max_retries=3, name="notifications.send_reservation_email")
def send_reservation_email(self, reservation_id: str) -> bool:
    """Tell the seller a buyer reserved one of their products."""
    log = logger.bind(reservation_id=str(reservation_id))
    reservation = _load_reservation(reservation_id)
    if reservation is None:
        log.warning("email.reservation_missing")
        return False

    seller = reservation.product.seller
    if not seller.email:
        log.warning("email.seller_without_address", seller_id=seller.pk)
        return False

    buyer = reservation.buyer
    try:
        send_templated_email(
            RESERVATION_CREATED,
            seller.email,
            {
                "seller_name": seller.display_name,
                "buyer_name": buyer.display_name,
                "buyer_contact": buyer.email,
                "product_name": reservation.product.name,
                "quantity": reservation.quantity,
                "reservations_url": site_link("dashboard/reservations"),
            },
        )
    except Exception as exc:
        log.warning("email.send_failed", attempt=self.request.retries + 1)
        raise self.retry(exc=exc, countdown=RETRY_COUNTDOWN)
    return True


@shared_task(bind=True, max_retries=3, name="notifications.send_review_request_email")
def send_review_request_email(self, reservation_id: str) -> bool:
    """Invite the buyer to review a completed purchase."""
    log = logger.bind(reservation_id=str(reservation_id))
    reservation = _load_reservation(reservation_id)
    if reservation is None or not reservation.review_token:
        log.warning("email.review_token_missing")
        return False

    buyer = reservation.buyer
    if not buyer.email:
        log.warning("email.buyer_without_address", buyer_id=buyer.pk)
        return False

    try:
        send_templated_email(
            REVIEW_REQUEST,
            buyer.email,
            {
                "buyer_name": buyer.display_name,
                "seller_name": reservation.product.seller.display_name,
                "product_name": reservation.product.name,
                "review_url": site_link(f"review/{reservation.review_token}"),
            },
        )
    except Exception as exc:
        log.warning("email.send_failed", attempt=self.request.retries + 1)
        raise self.retry(exc=exc, countdown=RETRY_COUNTDOWN)
    return True
