"""
Read-only view of one record; orders and purchases also list their lines.
"""

from __future__ import annotations

from typing import Any, Optional

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label

from warehouse_admin.errors import AuthenticationError, WarehouseAdminError
from warehouse_admin.services.resource_service import ResourceService
from warehouse_admin.ui.messages import SessionExpired
from simple_logger import Slogger


class RecordDetailScreen(Screen):
    """Shows the row the list had, then the record as the backend returns it."""

    BINDINGS = [
        ("escape", "go_back", "Back"),
        ("ctrl+r", "refresh", "Refresh"),
    ]

    def __init__(
        self,
        service: ResourceService,
        record: Any,
        *,
        name: Optional[str] = None,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.service = service
        self.definition = service.definition
        self.record = record
        self._unmounted = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="detail-container"):
            yield Label(self._title(), id="screen-title")
            yield DataTable(id="detail-fields", show_cursor=False)
            if self.definition.line_items is not None:
                yield Label(self.definition.line_items.label, classes="pane-title")
                yield DataTable(id="detail-lines", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#detail-fields", DataTable).add_columns("Field", "Value")
        if self.definition.line_items is not None:
            self.query_one("#detail-lines", DataTable).add_columns("Product", "Unit", "Quantity")
        self._show_record()
        self.action_refresh()

    def on_unmount(self) -> None:
        self._unmounted = True

    def _title(self) -> str:
        return f"{self.definition.item_name} #{getattr(self.record, 'id', '?')}"

    def _show_record(self) -> None:
        fields = self.query_one("#detail-fields", DataTable)
        fields.clear()
        for column in self.definition.columns:
            fields.add_row(column.title, column.value(self.record))

        line_items = self.definition.line_items
        if line_items is None:
            return
        lines = self.query_one("#detail-lines", DataTable)
        lines.clear()
        for line in getattr(self.record, line_items.attr, ()) or ():
            lines.add_row(line.product, line.unit, str(line.quantity))

    # ------------------------------------------------------------------ #

    def action_go_back(self) -> None:
        self.dismiss(None)

    def action_refresh(self) -> None:
        record_id = getattr(self.record, "id", None)
        if record_id is None:
            return
        self.run_worker(lambda: self._fetch_record(record_id), thread=True, group="detail", exclusive=True)

    def _fetch_record(self, record_id: int) -> None:
        try:
            record = self.service.by_id(record_id)
        except WarehouseAdminError as e:
            self.app.call_from_thread(self._fetch_failed, e)
            return
        self.app.call_from_thread(self._record_loaded, record)

    def _record_loaded(self, record: Any) -> None:
        if self._unmounted:
            return
        self.record = record
        self.query_one("#screen-title", Label).update(self._title())
        self._show_record()

    def _fetch_failed(self, error: WarehouseAdminError) -> None:
        Slogger.error(
            f"Failed to load {self.definition.key} record: {error}",
            {"resource": self.definition.key, "id": getattr(self.record, "id", None)},
        )
        if self._unmounted:
            return
        if isinstance(error, AuthenticationError):
            self.app.post_message(SessionExpired(str(error)))
            return
        self.notify(f"Showing the list copy: {error}", severity="warning", timeout=4)
