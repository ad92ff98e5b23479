# warehouse_admin/services/dashboard_service.py
"""Counters shown on the landing screen."""

from __future__ import annotations

from typing import List, Tuple

from warehouse_admin.api.resources import DashboardApi, StockApi

STAT_LABELS = [
    ("userCount", "Total Users"),
    ("clientCount", "Total Clients"),
    ("supplierCount", "Total Suppliers"),
    ("warehouseCount", "Total Warehouses"),
    ("productCount", "Total Products"),
]


class DashboardService:
    def __init__(self, dashboard_api: DashboardApi, stock_api: StockApi, *, low_stock_threshold: int = 10) -> None:
        self._dashboard = dashboard_api
        self._stock = stock_api
        self._threshold = low_stock_threshold

    def summary(self) -> List[Tuple[str, int]]:
        stats = self._dashboard.statistics()
        rows = [(label, stats[key]) for key, label in STAT_LABELS if key in stats]
        rows.append((f"Low stock (< {self._threshold})", self._stock.low_stock_count(self._threshold)))
        return rows
