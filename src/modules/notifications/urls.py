"""Notification URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.notifications.views import AdminNotificationViewSet

router = DefaultRouter(trailing_slash=True)
router.register(
    "admin/notifications", AdminNotificationViewSet, basename="admin-notification"
)

urlpatterns = router.urls
