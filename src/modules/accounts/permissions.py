"""DRF permission classes driven by ``User.role``."""

from __future__ import annotations

from rest_framework.permissions import BasePermission

from modules.accounts.identity import Actor


class IsSellerOrAdmin(BasePermission):
    message = "Only sellers and administrators may perform this action."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        actor = Actor.from_user(user)
        return actor.is_seller or actor.is_admin


class IsAdminRole(BasePermission):
    message = "Only administrators may perform this action."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return Actor.from_user(user).is_admin
