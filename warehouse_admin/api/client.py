# File: warehouse_admin/api/client.py

import logging
from typing import Any, Dict, Optional

from curl_cffi import requests

from warehouse_admin.errors import (
    ApiError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from warehouse_admin.session import Session

logger = logging.getLogger(__name__)

# --- Constants (can be overridden by parameters or config later) ---
DEFAULT_BASE_URL = "http://localhost:8080/api/v1"
DEFAULT_TIMEOUT_SECONDS = 10
AUTH_PATH_PREFIX = "/auth"


def _error_message(response: Any) -> str:
    """Best-effort human message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if body.get(key):
                return str(body[key])
    text = (getattr(response, "text", "") or "").strip()
    return text[:200] if text else f"HTTP {response.status_code}"


class ApiClient:
    """
    Thin JSON client for the warehouse REST API.

    Attaches the bearer token from `session` to every request outside
    `/auth`, and turns HTTP failures into the console's error types.
    A 401 also clears the session so the UI can send the user back to login.
    """

    def __init__(
        self,
        session: Session,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http: Optional[Any] = None,
    ) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http if http is not None else requests.Session()

    # ------------------------------------------------------------------ #
    # verbs
    # ------------------------------------------------------------------ #

    def get(self, path: str, *, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None) -> Any:
        return self.request("GET", path, params=params, timeout=timeout)

    def post(self, path: str, data: Any = None, *, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None) -> Any:
        return self.request("POST", path, params=params, json=data, timeout=timeout)

    def put(self, path: str, data: Any = None, *, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None) -> Any:
        return self.request("PUT", path, params=params, json=data, timeout=timeout)

    def delete(self, path: str, *, timeout: Optional[float] = None) -> Any:
        return self.request("DELETE", path, timeout=timeout)

    # ------------------------------------------------------------------ #
    # core
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body (None when empty).

        Raises:
            NetworkError: no response at all
            AuthenticationError: 401, session cleared
            PermissionDeniedError: 403
            NotFoundError: 404
            ValidationError: 400 / 422
            ApiError: any other status >= 400
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if not path.startswith(AUTH_PATH_PREFIX):
            headers.update(self.session.auth_header())

        clean_params = {k: v for k, v in (params or {}).items() if v is not None}

        logger.debug(f"{method} {url} params={clean_params}")
        try:
            response = self._http.request(
                method,
                url,
                params=clean_params or None,
                json=json,
                headers=headers,
                timeout=timeout or self.timeout,
            )
        except requests.RequestsError as e:
            logger.warning(f"Request failed for {method} {url}: {e}")
            raise NetworkError(f"Could not reach {url}: {e}") from e

        self._raise_for_status(method, url, path, response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _raise_for_status(self, method: str, url: str, path: str, response: Any) -> None:
        status = response.status_code
        if status < 400:
            return

        message = _error_message(response)
        logger.warning(f"{method} {url} failed with {status}: {message}")

        if status == 401:
            if not path.startswith(AUTH_PATH_PREFIX):
                self.session.clear()
            raise AuthenticationError(message, status)
        if status == 403:
            raise PermissionDeniedError(message, status)
        if status == 404:
            raise NotFoundError(message, status)
        if status in (400, 422):
            raise ValidationError(message, status_code=status)
        raise ApiError(message, status)

    def close(self) -> None:
        close = getattr(self._http, "close", None)
        if close:
            close()
