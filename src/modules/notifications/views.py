"""Admin notification inbox API.

Every endpoint requires the ADMIN role; the service re-checks it so the
rule also holds outside HTTP.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.exceptions import NotAuthorized
from modules.accounts.identity import Actor
from modules.accounts.permissions import IsAdminRole
from modules.notifications.exceptions import NotificationNotFound
from modules.notifications.filters import AdminNotificationFilter
from modules.notifications.models import AdminNotification
from modules.notifications.repositories.django_repository import (
    AdminNotificationDjangoRepository,
)
from modules.notifications.serializers import AdminNotificationSerializer
from modules.notifications.services import NotificationService


class AdminNotificationViewSet(GenericViewSet):
    queryset = AdminNotification.objects.all()
    serializer_class = AdminNotificationSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    filterset_class = AdminNotificationFilter
    filter_backends = [DjangoFilterBackend]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = NotificationService(
            repository=AdminNotificationDjangoRepository()
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/admin/notifications/"""
        queryset = self._service.list_notifications(Actor.from_user(request.user))
        queryset = self.filter_queryset(queryset)
        page = self.paginate_queryset(queryset)
        serializer = AdminNotificationSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request: Request) -> Response:
        """GET /api/v1/admin/notifications/unread-count/"""
        count = self._service.unread_count(Actor.from_user(request.user))
        return Response({"unread_count": count})

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/admin/notifications/{pk}/ marks it as read."""
        try:
            notification = self._service.mark_as_read(
                Actor.from_user(request.user), str(pk)
            )
        except NotificationNotFound:
            return Response(
                {"detail": "Notification not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except NotAuthorized as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(AdminNotificationSerializer(notification).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/admin/notifications/{pk}/"""
        try:
            self._service.delete_notification(Actor.from_user(request.user), str(pk))
        except NotificationNotFound:
            return Response(
                {"detail": "Notification not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except NotAuthorized as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)
