# warehouse_admin/services/auth_service.py
"""
Login / logout against the backend's `/auth/login` endpoint.
"""

from __future__ import annotations

from warehouse_admin.api.client import ApiClient
from warehouse_admin.errors import AuthenticationError, ValidationError
from warehouse_admin.models.party import User
from warehouse_admin.session import Session
from simple_logger import Slogger


class AuthService:
    """Fills and clears the shared Session."""

    def __init__(self, client: ApiClient, session: Session) -> None:
        self._client = client
        self._session = session

    def login(self, email: str, password: str) -> User:
        email = (email or "").strip()
        missing = [name for name, value in (("Email", email), ("Password", password)) if not value]
        if missing:
            raise ValidationError(f"Required: {', '.join(missing)}", fields=missing)

        body = self._client.post("/auth/login", {"email": email, "password": password}) or {}
        token = body.get("accessToken") if isinstance(body, dict) else None
        if not token:
            Slogger.warning("Login response carried no access token", {"email": email})
            raise AuthenticationError("No access token received")

        user = User.from_api(body.get("userDTO") or {})
        self._session.start(token, user)
        Slogger.info("Logged in", {"email": user.email or email, "role": user.role})
        return user

    def logout(self) -> None:
        if self._session.user is not None:
            Slogger.info("Logged out", {"email": self._session.user.email})
        self._session.clear()
