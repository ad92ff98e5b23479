# warehouse_admin/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Any, Dict

from warehouse_admin.api.client import ApiClient
from warehouse_admin.api.resources import DashboardApi, StockApi
from warehouse_admin.resources import ResourceDefinition, get_resource
from warehouse_admin.services.auth_service import AuthService
from warehouse_admin.services.dashboard_service import DashboardService
from warehouse_admin.services.resource_service import ResourceService
from warehouse_admin.session import Session


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any], *, http: Any = None) -> None:
        self._cfg = config
        self._http = http
        self._session: Session | None = None
        self._client: ApiClient | None = None
        self._auth_service: AuthService | None = None
        self._dashboard_service: DashboardService | None = None
        self._resource_services: Dict[str, ResourceService] = {}

    @property
    def page_size(self) -> int:
        return self._cfg.get("ui", {}).get("per_page", 10)

    # ---------- infra ----------
    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = Session()
        return self._session

    @property
    def client(self) -> ApiClient:
        if self._client is None:
            api_cfg = self._cfg.get("api", {})
            self._client = ApiClient(
                self.session,
                api_cfg.get("base_url", "http://localhost:8080/api/v1"),
                timeout=api_cfg.get("timeout", 10),
                http=self._http,
            )
        return self._client

    # ---------- services ----------
    @property
    def auth_service(self) -> AuthService:
        if self._auth_service is None:
            self._auth_service = AuthService(self.client, self.session)
        return self._auth_service

    @property
    def dashboard_service(self) -> DashboardService:
        if self._dashboard_service is None:
            self._dashboard_service = DashboardService(
                DashboardApi(self.client),
                StockApi(self.client, get_resource("stocks").endpoint),
            )
        return self._dashboard_service

    def resource_service(self, key: str) -> ResourceService:
        if key not in self._resource_services:
            definition: ResourceDefinition = get_resource(key)
            self._resource_services[key] = ResourceService(
                definition,
                definition.api_class(self.client, definition.endpoint),
                default_page_size=self.page_size,
            )
        return self._resource_services[key]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


# convenience factory
def build_container(config: Dict[str, Any]) -> Container:
    """Create a container for the given config."""
    return Container(config)
