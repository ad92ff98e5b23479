"""
Screen for creating or editing one record of any resource.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label

from warehouse_admin.errors import AuthenticationError, ValidationError, WarehouseAdminError
from warehouse_admin.services.resource_service import LINE_FIELDS, ResourceService
from warehouse_admin.ui.messages import SessionExpired
from warehouse_admin.ui.widgets.lookup_field import LookupField
from simple_logger import Slogger


class RecordFormScreen(Screen):
    """Full-screen form built from the resource's form fields."""

    BINDINGS = [
        ("escape", "go_back", "Back"),
        ("ctrl+s", "submit", "Save"),
    ]

    def __init__(
        self,
        service: ResourceService,
        record: Optional[Any] = None,
        *,
        lookup: Optional[Callable[[str], ResourceService]] = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        """
        Args:
            service: Service for the resource being edited
            record: Existing record to edit; None to create a new one
            lookup: Gives the service of another resource, for name searches
        """
        super().__init__(name=name, id=id, classes=classes)
        self.service = service
        self.definition = service.definition
        self.record = record
        self._lookup = lookup
        self._saving = False

        # (payload item, product label, unit label) per order/purchase line
        self.entered_lines: List[Tuple[Dict[str, Any], str, str]] = []
        self._lines_changed = False
        if record is not None and self.definition.line_items is not None:
            for line in getattr(record, self.definition.line_items.attr, ()) or ():
                item = {"productId": line.product_id, "unitId": line.unit_id, "quantity": line.quantity}
                self.entered_lines.append((item, line.product, line.unit))

    @property
    def form_mode(self) -> str:
        return "create" if self.record is None else "edit"

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        verb = "New" if self.record is None else "Edit"
        with Container(id="form-container"):
            yield Label(f"{verb} {self.definition.item_name.lower()}", id="form-title")
            with VerticalScroll(id="form-fields"):
                for form_field in self.definition.form_fields:
                    marker = " *" if form_field.required else ""
                    yield Label(f"{form_field.label}{marker}", classes="field-label")
                    if form_field.lookup and self._lookup is not None:
                        yield LookupField(
                            f"field-{form_field.name}",
                            self._lookup(form_field.lookup).search,
                            value=form_field.prefill(self.record),
                            placeholder=form_field.label,
                        )
                        continue
                    yield Input(
                        value=form_field.prefill(self.record),
                        password=form_field.kind == "password",
                        placeholder=form_field.label,
                        id=f"field-{form_field.name}",
                    )
                if self.definition.line_items is not None:
                    yield from self._compose_lines()
            with Horizontal(id="form-buttons"):
                yield Button("Cancel", id="cancel-button")
                yield Button("Save", variant="primary", id="save-button")

        yield Footer()

    def _compose_lines(self) -> ComposeResult:
        yield Label(f"{self.definition.line_items.label} *", classes="field-label")
        yield DataTable(id="line-table", cursor_type="row")
        if self._lookup is not None:
            yield LookupField("line-productId", self._lookup("products").search, placeholder="Product ID")
        else:
            yield Input(placeholder="Product ID", id="line-productId")
        with Horizontal(id="line-entry"):
            yield Input(placeholder="Unit ID", id="line-unitId")
            yield Input(value="1", placeholder="Quantity", id="line-quantity")
            yield Button("Add line", id="add-line")
            yield Button("Remove line", id="remove-line")

    def on_mount(self) -> None:
        if self.definition.line_items is not None:
            self.query_one("#line-table", DataTable).add_columns("Product", "Unit", "Quantity")
            self._show_lines()

        inputs = self.query(Input)
        if inputs:
            inputs.first().focus()

    # ------------------------------------------------------------------ #

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel-button":
            self.action_go_back()
        elif event.button.id == "save-button":
            self.action_submit()
        elif event.button.id == "add-line":
            self.add_line()
        elif event.button.id == "remove-line":
            self.remove_line()

    def action_go_back(self) -> None:
        self.dismiss(False)

    # ------------------------------------------------------------------ #
    # order / purchase lines
    # ------------------------------------------------------------------ #

    def add_line(self) -> bool:
        draft = {key: self.query_one(f"#line-{key}", Input).value for key, _ in LINE_FIELDS}
        for key, _ in LINE_FIELDS:
            self.query_one(f"#line-{key}", Input).remove_class("-invalid")

        try:
            item = self.service.prepare_line(draft)
        except ValidationError as e:
            for key, label in LINE_FIELDS:
                if label in e.fields:
                    self.query_one(f"#line-{key}", Input).add_class("-invalid")
            self.notify(str(e), title="Check the line", severity="warning", timeout=4)
            return False

        self.entered_lines.append((item, f"#{item['productId']}", f"#{item['unitId']}"))
        self._lines_changed = True
        self.query_one("#line-productId", Input).value = ""
        self.query_one("#line-unitId", Input).value = ""
        self.query_one("#line-quantity", Input).value = "1"
        self.query_one("#line-table", DataTable).remove_class("-invalid")
        self._show_lines()
        return True

    def remove_line(self) -> None:
        table = self.query_one("#line-table", DataTable)
        index = table.cursor_row
        if not self.entered_lines or not 0 <= index < len(self.entered_lines):
            self.notify("No line selected", severity="warning", timeout=3)
            return
        del self.entered_lines[index]
        self._lines_changed = True
        self._show_lines()

    def _show_lines(self) -> None:
        table = self.query_one("#line-table", DataTable)
        table.clear()
        for item, product, unit in self.entered_lines:
            table.add_row(product, unit, str(item["quantity"]))

    def collect_lines(self) -> Optional[List[Dict[str, Any]]]:
        """Lines to send; None keeps an edited record's lines as they are."""
        if self.definition.line_items is None:
            return None
        if self.record is not None and not self._lines_changed:
            return None
        return [item for item, _, _ in self.entered_lines]

    # ------------------------------------------------------------------ #
    # saving
    # ------------------------------------------------------------------ #

    def collect_values(self) -> Dict[str, str]:
        return {
            f.name: self.query_one(f"#field-{f.name}", Input).value
            for f in self.definition.form_fields
        }

    def action_submit(self) -> None:
        if self._saving:
            return

        values = self.collect_values()
        lines = self.collect_lines()
        for widget in self.query(Input):
            widget.remove_class("-invalid")

        try:
            self.service.prepare(values, lines)
        except ValidationError as e:
            self._mark_invalid(e)
            self.notify(str(e), title="Check the form", severity="warning", timeout=4)
            return

        self._saving = True
        self.query_one("#save-button", Button).disabled = True
        self.run_worker(lambda: self._save_record(values, lines), thread=True, group="save")

    def _save_record(self, values: Dict[str, str], lines: Optional[List[Dict[str, Any]]]) -> None:
        try:
            if self.record is None:
                self.service.add(values, lines)
            else:
                self.service.update(self.record.id, values, lines)
        except WarehouseAdminError as e:
            self.app.call_from_thread(self._save_failed, e)
            return
        self.app.call_from_thread(self._record_saved)

    def _record_saved(self) -> None:
        verb = "created" if self.record is None else "updated"
        self.notify(f"{self.definition.item_name} {verb}", severity="information", timeout=3)
        self.dismiss(True)

    def _save_failed(self, error: WarehouseAdminError) -> None:
        Slogger.error(
            f"Failed to save {self.definition.key} record: {error}",
            {"resource": self.definition.key, "mode": self.form_mode},
        )
        self._saving = False
        if isinstance(error, AuthenticationError):
            self.app.post_message(SessionExpired(str(error)))
            return
        self.query_one("#save-button", Button).disabled = False
        if isinstance(error, ValidationError):
            self._mark_invalid(error)
        self.notify(f"Failed to save: {error}", title="Error", severity="error", timeout=5)

    def _mark_invalid(self, error: ValidationError) -> None:
        labels = set(error.fields)
        for form_field in self.definition.form_fields:
            if form_field.label in labels:
                self.query_one(f"#field-{form_field.name}", Input).add_class("-invalid")
        line_items = self.definition.line_items
        if line_items is not None and line_items.label in labels:
            self.query_one("#line-table", DataTable).add_class("-invalid")
