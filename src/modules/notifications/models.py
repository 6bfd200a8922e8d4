"""Admin notification records (in-app notification sink)."""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel


class AdminNotification(BaseModel):
    """Back-office notice that a seller has a new reservation to handle.

    ``contact_channel`` snapshots how the seller can be reached at the time
    of the notification (WhatsApp link or e-mail).
    """

    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="admin_notifications",
    )
    reservation = models.ForeignKey(
        "reservations.Reservation",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="admin_notifications",
    )
    message = models.TextField()
    contact_channel = models.CharField(max_length=255, blank=True, default="")
    is_read = models.BooleanField(default=False)

    class Meta:
        db_table = "admin_notifications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["is_read", "-created_at"],
                name="admin_notif_read_created_idx",
            ),
        ]

    def mark_as_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.save(update_fields=["is_read", "updated_at"])

    def __str__(self) -> str:
        return f"{self.seller_id}: {self.message[:40]}"
