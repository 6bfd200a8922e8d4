"""Notification domain exceptions."""

from __future__ import annotations


class NotificationNotFound(Exception):
    """The requested admin notification does not exist."""
