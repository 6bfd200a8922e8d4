"""Django ORM implementation of the AdminNotification repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from modules.notifications.models import AdminNotification
from modules.notifications.repositories.interfaces import (
    IAdminNotificationRepository,
)

logger = structlog.get_logger(__name__)


class AdminNotificationDjangoRepository(IAdminNotificationRepository):
    def get_by_id(self, id: str) -> Optional[AdminNotification]:
        try:
            return AdminNotification.objects.select_related("seller").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[AdminNotification]:
        queryset = AdminNotification.objects.select_related("seller", "reservation")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def count_unread(self) -> int:
        return AdminNotification.objects.filter(is_read=False).count()

    def save(self, entity: AdminNotification) -> AdminNotification:
        entity.save()
        return entity

    def delete(self, id: str) -> bool:
        notification = self.get_by_id(id)
        if not notification:
            return False
        notification.delete()
        logger.info("notification.deleted", notification_id=str(id))
        return True
