# warehouse_admin/errors.py
from __future__ import annotations

from typing import Iterable, Optional


class WarehouseAdminError(Exception):
    """Base class for all console errors."""
    pass


class ConfigError(WarehouseAdminError):
    """Error related to configuration."""
    pass


class ApiError(WarehouseAdminError):
    """The backend answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(ApiError):
    """Request never got a response (connection refused, timeout...)."""
    pass


class AuthenticationError(ApiError):
    """Missing, rejected or expired credentials."""
    pass


class PermissionDeniedError(ApiError):
    """Authenticated, but not allowed to do this."""
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    """Input rejected, either locally (missing fields) or by the backend."""

    def __init__(
        self,
        message: str,
        fields: Iterable[str] = (),
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code)
        self.fields = list(fields)


class ExportError(WarehouseAdminError):
    """Error related to CSV export."""
    pass
