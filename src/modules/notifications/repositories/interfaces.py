"""Admin notification repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.notifications.models import AdminNotification


class IAdminNotificationRepository(IRepository["AdminNotification"]):
    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[AdminNotification]:
        """List notifications, newest first."""

    @abstractmethod
    def count_unread(self) -> int:
        """Number of notifications not yet read by an administrator."""
