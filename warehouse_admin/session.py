# warehouse_admin/session.py
"""
Explicit authentication context handed to whatever needs it.

Nothing here is global: the container owns one `Session` and passes it to
the API client and to the screens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from warehouse_admin.models.party import User


@dataclass
class Session:
    token: Optional[str] = None
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.user.is_admin

    def start(self, token: str, user: User) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None

    def ensure_consistent(self) -> bool:
        """
        A token without a user (or the reverse) cannot be trusted; wipe both.

        Returns True if the session had to be cleared.
        """
        if bool(self.token) != (self.user is not None):
            self.clear()
            return True
        return False

    def auth_header(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
