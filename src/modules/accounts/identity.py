"""Identity fact consumed by the domain services.

Services never look at ``request.user`` directly: views turn the
authenticated user into an ``Actor`` and pass it down.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from modules.accounts.models import UserRole


@dataclass(frozen=True)
class Actor:
    user_id: int
    role: str

    @classmethod
    def from_user(cls, user: Any) -> Actor:
        role = UserRole.ADMIN if user.is_superuser else user.role
        return cls(user_id=user.pk, role=role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_seller(self) -> bool:
        return self.role == UserRole.SELLER

    def can_manage(self, seller_id: int) -> bool:
        """Admins manage everything; sellers only their own storefront."""
        return self.is_admin or (self.is_seller and seller_id == self.user_id)
