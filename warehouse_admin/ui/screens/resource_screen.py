# warehouse_admin/ui/screens/resource_screen.py
"""
Generic list screen: one backend collection, paginated, searchable,
with create / edit / delete / export.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Static

from warehouse_admin.errors import AuthenticationError, WarehouseAdminError
from warehouse_admin.models.pagination import Page
from warehouse_admin.services.export_service import export_csv
from warehouse_admin.services.list_controller import FetchOutcome, FetchTicket, ListController
from warehouse_admin.services.resource_service import ResourceService
from warehouse_admin.session import Session
from warehouse_admin.ui.controllers.status_bar import StatusBarController
from warehouse_admin.ui.messages import SessionExpired
from warehouse_admin.ui.screens.record_detail_screen import RecordDetailScreen
from warehouse_admin.ui.screens.record_form_screen import RecordFormScreen
from warehouse_admin.ui.widgets.confirmation_modal import ConfirmationModal
from warehouse_admin.ui.widgets.pagination import Pagination
from warehouse_admin.ui.widgets.record_table import RecordTable
from warehouse_admin.ui.widgets.search_bar import SearchBar
from simple_logger import Slogger


class ResourceScreen(Screen):
    """List screen for whichever resource `service` serves."""

    BINDINGS = [
        Binding("f", "focus_search", "Search"),
        Binding("comma", "prev_page", "Prev page"),
        Binding("full_stop", "next_page", "Next page"),
        Binding("v", "view_record", "View"),
        Binding("n", "new_record", "New"),
        Binding("e", "edit_record", "Edit"),
        Binding("delete", "delete_record", "Delete"),
        Binding("x", "export_csv", "Export CSV"),
        Binding("ctrl+r", "refresh", "Refresh"),
    ]

    # ------------------------------------------------------------------ #

    def __init__(
        self,
        service: ResourceService,
        session: Session,
        config: Dict[str, Any],
        *,
        lookup: Optional[Callable[[str], ResourceService]] = None,
        id: Optional[str] = None,
    ) -> None:
        super().__init__(id=id)
        self.service = service
        self.lookup = lookup
        self.definition = service.definition
        self.session = session
        self.config = config
        self.controller = ListController(
            self.definition,
            page_size=config.get("ui", {}).get("per_page", 10),
        )

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Container(id="main-container"):
            with Vertical(id="content-area"):
                yield Label(self.definition.title, id="screen-title")
                yield SearchBar(
                    placeholder=f"Filter {self.definition.title.lower()} on this page...",
                    id="search-bar",
                )
                yield RecordTable(id="records-table")
                yield Pagination(page_size=self.controller.state.page_size, id="pagination")

        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(RecordTable)
        table.add_columns(*[c.title for c in self.definition.columns])
        table.styles.height = "1fr"

        self.status_controller = StatusBarController(self.query_one("#status-bar", Static), self.session)
        self.load_records()

    def on_unmount(self) -> None:
        # anything still in flight lands on a closed controller and is dropped
        self.controller.close()

    # ------------------------------------------------------------------ #
    # Fetching
    # ------------------------------------------------------------------ #

    def load_records(self) -> None:
        """Fetch the current page in a worker thread."""
        ticket = self.controller.begin_fetch()
        self.status_controller.set_loading(True)
        self._refresh_status()
        self.run_worker(
            lambda: self._fetch_page(ticket),
            thread=True,
            group="fetch",
            exclusive=True,
        )

    def _fetch_page(self, ticket: FetchTicket) -> None:
        # runs off the event loop; hand results back with call_from_thread
        try:
            page = self.service.page(page=ticket.page, per_page=ticket.per_page)
        except WarehouseAdminError as e:
            self.app.call_from_thread(self._fetch_failed, ticket, e)
            return
        self.app.call_from_thread(self._apply_page, ticket, page)

    def _apply_page(self, ticket: FetchTicket, page: Page[Any]) -> None:
        outcome = self.controller.accept(ticket, page)
        if outcome is FetchOutcome.DISCARDED:
            return
        if outcome is FetchOutcome.REFETCH:
            self.load_records()
            return
        self.status_controller.set_loading(False)
        self._show_page()

    def _fetch_failed(self, ticket: FetchTicket, error: WarehouseAdminError) -> None:
        if not self.controller.is_current(ticket):
            return
        self.status_controller.set_loading(False)
        self._report_failure(f"Failed to fetch {self.definition.key}", error)
        self._show_page()

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    def _show_page(self) -> None:
        self._render_rows()
        self.query_one(Pagination).update_state(self.controller.state, self.controller.page_window())
        self._refresh_status()

    def _render_rows(self) -> None:
        rows = [self.definition.row(r) for r in self.controller.visible_items]
        empty = (
            f"No {self.definition.key} match '{self.controller.search_query}'."
            if self.controller.search_query
            else f"No {self.definition.key} found."
        )
        self.query_one(RecordTable).set_rows(rows, empty_message=empty)

    def _refresh_status(self) -> None:
        selected = self._selected_record()
        self.status_controller.update(
            self.definition.title,
            self.controller.state,
            self.controller.summary(),
            self.controller.search_query,
            selected=self._describe(selected) if selected is not None else None,
        )

    @staticmethod
    def _describe(record: Any) -> str:
        for attr in ("name", "reference", "product", "warehouse"):
            value = getattr(record, attr, None)
            if value:
                return f"#{record.id} {value}"
        return f"#{getattr(record, 'id', '?')}"

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def on_search_bar_changed(self, event: SearchBar.Changed) -> None:
        self.controller.set_search(event.query)
        self._render_rows()
        self._refresh_status()

    def on_pagination_page_requested(self, event: Pagination.PageRequested) -> None:
        if self.controller.change_page(event.page):
            self.load_records()

    def on_pagination_page_size_changed(self, event: Pagination.PageSizeChanged) -> None:
        if self.controller.change_page_size(event.page_size):
            Slogger.debug(
                "Page size changed",
                {"resource": self.definition.key, "size": event.page_size,
                 "page": self.controller.state.current_page},
            )
            self.load_records()

    def on_record_table_row_chosen(self, event: RecordTable.RowChosen) -> None:
        # lines are only visible in the detail view
        if self.definition.editable and self.definition.line_items is None:
            self.action_edit_record()
        else:
            self.action_view_record()

    def on_data_table_row_highlighted(self, event) -> None:
        self._refresh_status()

    # ------------------------------------------------------------------ #
    # Action handlers
    # ------------------------------------------------------------------ #

    def action_focus_search(self) -> None:
        self.query_one(SearchBar).focus_input()

    def action_next_page(self) -> None:
        if self.controller.next_page():
            self.load_records()

    def action_prev_page(self) -> None:
        if self.controller.previous_page():
            self.load_records()

    def action_refresh(self) -> None:
        self.load_records()

    def action_view_record(self) -> None:
        record = self._selected_record()
        if record is None:
            self.notify("No row selected", severity="warning", timeout=3)
            return
        self.app.push_screen(RecordDetailScreen(self.service, record))

    def action_new_record(self) -> None:
        if not self.definition.editable:
            self.notify(f"{self.definition.title} are read-only here", severity="warning", timeout=3)
            return
        self.app.push_screen(RecordFormScreen(self.service, lookup=self.lookup), self._after_form)

    def action_edit_record(self) -> None:
        if not self.definition.editable:
            self.notify(f"{self.definition.title} are read-only here", severity="warning", timeout=3)
            return
        record = self._selected_record()
        if record is None:
            self.notify("No row selected", severity="warning", timeout=3)
            return
        self.app.push_screen(RecordFormScreen(self.service, record=record, lookup=self.lookup), self._after_form)

    def action_delete_record(self) -> None:
        if self.definition.read_only:
            self.notify(f"{self.definition.title} cannot be deleted here", severity="warning", timeout=3)
            return
        record = self._selected_record()
        if record is None:
            self.notify("No row selected", severity="warning", timeout=3)
            return

        label = self._describe(record)

        def answered(confirmed: Optional[bool]) -> None:
            if confirmed:
                self._delete_record(record, label)

        self.app.push_screen(
            ConfirmationModal(
                title="Are you absolutely sure?",
                message=f"This will permanently delete {label}.\n\nThis action cannot be undone.",
            ),
            answered,
        )

    def action_export_csv(self) -> None:
        try:
            path = export_csv(
                self.definition,
                self.controller.visible_items,
                self.config.get("ui", {}).get("export_dir", "."),
            )
        except WarehouseAdminError as e:
            self.notify(str(e), severity="error", timeout=3)
            return
        self.notify(f"{self.definition.title} exported to {path}", severity="information", timeout=4)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _selected_record(self) -> Optional[Any]:
        try:
            index = self.query_one(RecordTable).current_index
        except NoMatches:
            return None
        visible = self.controller.visible_items
        if index is None or not 0 <= index < len(visible):
            return None
        return visible[index]

    def _after_form(self, saved: Optional[bool]) -> None:
        if saved:
            self.load_records()

    def _delete_record(self, record: Any, label: str) -> None:
        self._run_in_background(
            lambda: self.service.delete(record.id),
            on_success=lambda _: self._record_deleted(label),
            failure=f"Failed to delete {label}",
        )

    def _record_deleted(self, label: str) -> None:
        if self.controller.closed:
            return
        self.notify(f"{label} has been deleted", severity="information", timeout=3)
        self.controller.after_delete()
        self.load_records()

    def _run_in_background(
        self,
        job: Callable[[], Any],
        *,
        on_success: Callable[[Any], None],
        failure: str,
    ) -> None:
        def work() -> None:
            try:
                result = job()
            except WarehouseAdminError as e:
                self.app.call_from_thread(self._report_failure, failure, e)
                return
            self.app.call_from_thread(on_success, result)

        self.run_worker(work, thread=True, group="write")

    def _report_failure(self, what: str, error: WarehouseAdminError) -> None:
        Slogger.error(f"{what}: {error}", {"resource": self.definition.key, "error": type(error).__name__})
        if self.controller.closed:
            return
        if isinstance(error, AuthenticationError):
            self.app.post_message(SessionExpired(str(error)))
            return
        self.notify(f"{what}: {error}", severity="error", timeout=5)
