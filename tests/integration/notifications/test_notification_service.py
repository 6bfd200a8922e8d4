"""Integration tests for ``NotificationService``."""

from __future__ import annotations

import pytest

from modules.accounts.exceptions import NotAuthorized
from modules.notifications.exceptions import NotificationNotFound
from modules.notifications.repositories.django_repository import (
    AdminNotificationDjangoRepository,
)
from modules.notifications.services import NotificationService

pytestmark = pytest.mark.integration


@pytest.fixture()
def service():
    return NotificationService(repository=AdminNotificationDjangoRepository())


def test_notify_records_unread_notification(service, seller):
    notification = service.notify(
        seller_id=seller.pk,
        reservation_id=None,
        message="Nova reserva",
        contact_channel=seller.contact_channel,
    )

    notification.refresh_from_db()
    assert notification.is_read is False
    assert notification.contact_channel == "https://wa.me/5511999999999"


def test_inbox_is_admin_only(service, actor_for, seller):
    with pytest.raises(NotAuthorized):
        service.list_notifications(actor_for(seller))
    with pytest.raises(NotAuthorized):
        service.unread_count(actor_for(seller))


def test_mark_as_read_and_count(service, actor_for, admin_account, seller):
    admin = actor_for(admin_account)
    notification = service.notify(seller_id=seller.pk, reservation_id=None, message="x")
    assert service.unread_count(admin) == 1

    service.mark_as_read(admin, str(notification.id))
    service.mark_as_read(admin, str(notification.id))

    assert service.unread_count(admin) == 0


def test_delete_missing(service, actor_for, admin_account):
    with pytest.raises(NotificationNotFound):
        service.delete_notification(actor_for(admin_account), "not-a-uuid")
