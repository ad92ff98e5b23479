"""
Id input with a name search beside it, for form fields that reference
another record (the client of an order, the product of a line).
"""

from typing import Any, Callable, List, Optional

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Input, Select

from warehouse_admin.errors import AuthenticationError, WarehouseAdminError
from warehouse_admin.ui.messages import SessionExpired
from simple_logger import Slogger


class LookupField(Container):
    """
    The backend wants numeric ids. The id can be typed directly, or a name
    typed in the search box (Enter) lists matches; picking one fills the id.
    """

    DEFAULT_CSS = """
    LookupField {
        layout: horizontal;
        height: 3;
    }

    LookupField > .lookup-id {
        width: 14;
    }

    LookupField > .lookup-search {
        width: 1fr;
    }

    LookupField > .lookup-results {
        width: 1fr;
    }
    """

    def __init__(
        self,
        input_id: str,
        search: Callable[[str], List[Any]],
        *,
        value: str = "",
        placeholder: str = "ID",
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        """
        Args:
            input_id: DOM id of the id input, so forms can read it like any other field
            search: Returns records (with `id` and `name`) matching a name
        """
        super().__init__(id=id, classes=classes)
        self._input_id = input_id
        self._search_records = search
        self._initial_value = value
        self._placeholder = placeholder

    def compose(self) -> ComposeResult:
        yield Input(value=self._initial_value, placeholder=self._placeholder, id=self._input_id, classes="lookup-id")
        yield Input(placeholder="Search by name, then Enter", classes="lookup-search")
        yield Select([], prompt="Matches", classes="lookup-results")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not event.input.has_class("lookup-search"):
            return
        event.stop()
        text = event.value.strip()
        if not text:
            return
        self.run_worker(lambda: self._find_matches(text), thread=True, group="lookup", exclusive=True)

    def _find_matches(self, text: str) -> None:
        try:
            records = self._search_records(text)
        except WarehouseAdminError as e:
            self.app.call_from_thread(self._lookup_failed, text, e)
            return
        self.app.call_from_thread(self._show_matches, records)

    def _show_matches(self, records: List[Any]) -> None:
        if not self.is_attached:
            return
        options = [
            (f"#{r.id} {getattr(r, 'name', '')}", r.id)
            for r in records
            if r.id is not None
        ]
        select = self.query_one(".lookup-results", Select)
        select.set_options(options)
        if not options:
            self.notify("No matches", severity="warning", timeout=3)
            return
        select.focus()

    def _lookup_failed(self, text: str, error: WarehouseAdminError) -> None:
        Slogger.error(f"Lookup for '{text}' failed: {error}", {"field": self._input_id})
        if isinstance(error, AuthenticationError):
            self.app.post_message(SessionExpired(str(error)))
            return
        if self.is_attached:
            self.notify(f"Search failed: {error}", severity="error", timeout=4)

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        if event.value is Select.BLANK:
            return
        self.query_one(f"#{self._input_id}", Input).value = str(event.value)
