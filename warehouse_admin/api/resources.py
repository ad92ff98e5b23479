# warehouse_admin/api/resources.py
"""
Per-resource endpoint wrappers.

The backend is not uniform about list payloads, so `ListPayload.from_response`
accepts the three shapes it produces:

    {"count": 42, "items": [...]}              most resources
    [...]                                      inventories (no total)
    {"content": [...], "totalElements": 42}    paged Spring endpoints
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from warehouse_admin.api.client import ApiClient
from warehouse_admin.errors import ApiError

LIST_TIMEOUT_SECONDS = 10


@dataclass(frozen=True, slots=True)
class ListPayload:
    items: List[Dict[str, Any]]
    count: Optional[int]    # None when the endpoint did not report one

    @classmethod
    def from_response(cls, body: Any) -> "ListPayload":
        if body is None:
            return cls(items=[], count=0)
        if isinstance(body, list):
            return cls(items=body, count=None)
        if isinstance(body, dict):
            if "items" in body:
                return cls(items=list(body.get("items") or []), count=_count(body.get("count")))
            if "content" in body:
                return cls(
                    items=list(body.get("content") or []),
                    count=_count(body.get("totalElements")),
                )
        raise ApiError(f"Unexpected list payload: {type(body).__name__}")


def _count(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return None


class ResourceApi:
    """CRUD endpoints for one collection, e.g. `/clients`."""

    def __init__(self, client: ApiClient, endpoint: str) -> None:
        self._client = client
        self.endpoint = "/" + endpoint.strip("/")

    # ---------- read side ----------

    def list(self, page: int = 1, size: int = 10, **filters: Any) -> ListPayload:
        """`page` is 1-based, as the backend expects."""
        body = self._client.get(
            self.endpoint,
            params={"page": page, "size": size, **filters},
            timeout=LIST_TIMEOUT_SECONDS,
        )
        return ListPayload.from_response(body)

    def count(self) -> int:
        body = self._client.get(f"{self.endpoint}/count")
        if isinstance(body, dict):
            body = body.get("count")
        total = _count(body)
        if total is None:
            raise ApiError(f"{self.endpoint}/count returned {body!r}")
        return total

    def get(self, record_id: int) -> Dict[str, Any]:
        return self._client.get(f"{self.endpoint}/{record_id}")

    def search(self, name: str, page: int = 1, size: int = 3) -> ListPayload:
        body = self._client.get(
            f"{self.endpoint}/search",
            params={"name": name, "page": page, "size": size},
            timeout=LIST_TIMEOUT_SECONDS,
        )
        return ListPayload.from_response(body)

    # ---------- write side ----------

    def create(self, data: Dict[str, Any]) -> Any:
        return self._client.post(self.endpoint, data)

    def update(self, record_id: int, data: Dict[str, Any]) -> Any:
        return self._client.put(f"{self.endpoint}/{record_id}", data)

    def delete(self, record_id: int) -> None:
        self._client.delete(f"{self.endpoint}/{record_id}")


class QueryParamResourceApi(ResourceApi):
    """Products are created/updated through query parameters, not a JSON body."""

    def create(self, data: Dict[str, Any]) -> Any:
        return self._client.post(self.endpoint, None, params=data)

    def update(self, record_id: int, data: Dict[str, Any]) -> Any:
        return self._client.put(f"{self.endpoint}/{record_id}", None, params=data)


class StockApi(ResourceApi):
    """Stock levels: a read-only listing plus the low-stock counter."""

    def low_stock_count(self, threshold: int = 10) -> int:
        body = self._client.get(f"{self.endpoint}/low-stock/count", params={"threshold": threshold}, timeout=5)
        if isinstance(body, dict):
            body = body.get("count")
        return _count(body) or 0


class DashboardApi:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def statistics(self) -> Dict[str, int]:
        body = self._client.get("/dashboard/statistics") or {}
        return {key: _count(value) or 0 for key, value in body.items()}
