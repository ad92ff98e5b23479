"""HTTP access to the warehouse backend."""

from warehouse_admin.api.client import ApiClient
from warehouse_admin.api.resources import (
    DashboardApi,
    ListPayload,
    QueryParamResourceApi,
    ResourceApi,
    StockApi,
)

__all__ = [
    "ApiClient",
    "DashboardApi",
    "ListPayload",
    "QueryParamResourceApi",
    "ResourceApi",
    "StockApi",
]
