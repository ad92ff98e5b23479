# warehouse_admin/ui/messages.py
"""Message classes for the application."""

from __future__ import annotations

from textual.message import Message


class SessionExpired(Message):
    """The backend rejected our token; the app should return to login."""

    def __init__(self, reason: str = "") -> None:
        super().__init__()
        self.reason = reason


class OpenResource(Message):
    """Ask the app to show the list screen for a resource key."""

    def __init__(self, key: str) -> None:
        super().__init__()
        self.key = key
