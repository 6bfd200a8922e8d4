"""Marketplace user model.

Authentication itself is delegated to Django + SimpleJWT; this model only
carries the identity fact the reservation core consumes (``id`` + ``role``)
and the seller's contact channel used by admin notifications.
"""

from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models


class UserRole(models.TextChoices):
    BUYER = "BUYER", "Comprador"
    SELLER = "SELLER", "Vendedor"
    ADMIN = "ADMIN", "Administrador"


class User(AbstractUser):
    role = models.CharField(
        max_length=10,
        choices=UserRole.choices,
        default=UserRole.BUYER,
    )
    store_name = models.CharField(max_length=255, blank=True, default="")
    whatsapp_link = models.URLField(max_length=255, blank=True, default="")

    class Meta(AbstractUser.Meta):
        db_table = "users"
        swappable = "AUTH_USER_MODEL"

    @property
    def display_name(self) -> str:
        return self.store_name or self.get_full_name() or self.get_username()

    @property
    def contact_channel(self) -> str:
        """Preferred way for the marketplace staff to reach this user."""
        return self.whatsapp_link or self.email
