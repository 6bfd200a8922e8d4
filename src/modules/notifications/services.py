"""Notification service layer.

``notify`` is the in-app half of the notification sink: it records an
``AdminNotification`` for the back-office.  The e-mail half lives in
``tasks.py``.  The remaining operations are the admin inbox.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

import structlog

from modules.accounts.exceptions import NotAuthorized
from modules.notifications.exceptions import NotificationNotFound
from modules.notifications.models import AdminNotification

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.identity import Actor
    from modules.notifications.repositories.interfaces import (
        IAdminNotificationRepository,
    )

logger = structlog.get_logger(__name__)


class NotificationService:
    def __init__(self, repository: IAdminNotificationRepository) -> None:
        self._repo = repository

    def notify(
        self,
        seller_id: int,
        reservation_id: Optional[UUID],
        message: str,
        contact_channel: str = "",
    ) -> AdminNotification:
        notification = self._repo.save(
            AdminNotification(
                seller_id=seller_id,
                reservation_id=reservation_id,
                message=message,
                contact_channel=contact_channel or "",
            )
        )
        logger.info(
            "notification.created",
            notification_id=str(notification.id),
            seller_id=seller_id,
            reservation_id=str(reservation_id) if reservation_id else None,
        )
        return notification

    def list_notifications(
        self, actor: Actor, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[AdminNotification]:
        self._require_admin(actor)
        return self._repo.list(filters)

    def unread_count(self, actor: Actor) -> int:
        self._require_admin(actor)
        return self._repo.count_unread()

    def mark_as_read(self, actor: Actor, notification_id: str) -> AdminNotification:
        """Raises NotAuthorized or NotificationNotFound."""
        self._require_admin(actor)
        notification = self._repo.get_by_id(notification_id)
        if not notification:
            raise NotificationNotFound(f"Notification {notification_id} not found.")
        notification.mark_as_read()
        return notification

    def delete_notification(self, actor: Actor, notification_id: str) -> None:
        self._require_admin(actor)
        if not self._repo.delete(notification_id):
            raise NotificationNotFound(f"Notification {notification_id} not found.")

    @staticmethod
    def _require_admin(actor: Actor) -> None:
        if not actor.is_admin:
            raise NotAuthorized("Only administrators can manage notifications.")
