"""
Landing screen: headline counters and the list of resource shortcuts.
"""

from __future__ import annotations

from typing import List, Tuple

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label, Static

from warehouse_admin.errors import AuthenticationError, WarehouseAdminError
from warehouse_admin.resources import RESOURCES
from warehouse_admin.services.dashboard_service import DashboardService
from warehouse_admin.session import Session
from warehouse_admin.ui.messages import OpenResource, SessionExpired
from simple_logger import Slogger


class DashboardScreen(Screen):
    BINDINGS = [
        Binding("ctrl+r", "refresh", "Refresh"),
    ]

    def __init__(self, dashboard_service: DashboardService, session: Session, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self.dashboard_service = dashboard_service
        self.session = session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="main-container"):
            with Horizontal(id="dashboard-panes"):
                with Vertical(id="stats-pane"):
                    yield Label("Overview", id="screen-title")
                    yield DataTable(id="stats-table", cursor_type="none")
                with Vertical(id="shortcuts-pane"):
                    yield Label("Resources", classes="pane-title")
                    yield DataTable(id="shortcuts-table", cursor_type="row")
        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        stats = self.query_one("#stats-table", DataTable)
        stats.add_columns("Metric", "Value")

        shortcuts = self.query_one("#shortcuts-table", DataTable)
        shortcuts.add_columns("Key", "Resource")
        for key, label in self.shortcuts():
            shortcuts.add_row(key, label, key=label)

        user = self.session.user
        who = f"{user.name or user.email} ({user.role})" if user else "not signed in"
        self.query_one("#status-bar", Static).update(f"Dashboard | {who} | d dashboard | ctrl+l logout | q quit")
        self.load_stats()

    def shortcuts(self) -> List[Tuple[str, str]]:
        rows = []
        for definition in RESOURCES.values():
            if definition.admin_only and not self.session.is_admin:
                continue
            rows.append((definition.hotkey or "-", definition.title))
        return rows

    def load_stats(self) -> None:
        self.run_worker(self._fetch_stats, thread=True, group="stats", exclusive=True)

    def _fetch_stats(self) -> None:
        try:
            rows = self.dashboard_service.summary()
        except WarehouseAdminError as e:
            self.app.call_from_thread(self._fetch_failed, e)
            return
        self.app.call_from_thread(self._show_stats, rows)

    def _show_stats(self, rows: List[Tuple[str, int]]) -> None:
        table = self.query_one("#stats-table", DataTable)
        table.clear()
        for label, value in rows:
            style = "bold red" if label.startswith("Low stock") and value else ""
            table.add_row(label, Text(str(value), style=style))

    def _fetch_failed(self, error: WarehouseAdminError) -> None:
        Slogger.error(f"Failed to load dashboard statistics: {error}", {"error": type(error).__name__})
        if isinstance(error, AuthenticationError):
            self.app.post_message(SessionExpired(str(error)))
            return
        self.notify(f"Failed to load statistics: {error}", severity="error", timeout=5)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id != "shortcuts-table":
            return
        title = event.row_key.value
        for key, definition in RESOURCES.items():
            if definition.title == title:
                self.app.post_message(OpenResource(key))
                return

    def action_refresh(self) -> None:
        self.load_stats()
