"""
Pagination bar: first / prev / numbered window / next / last, plus the
page-size selector.
"""

from typing import List, Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.message import Message
from textual.widgets import Button, Label, Select

from warehouse_admin.pagination import PAGE_SIZE_OPTIONS, PageState


class PageButton(Button):
    """A numbered page button; remembers which page it stands for."""

    def __init__(self, page: int, *, active: bool = False) -> None:
        super().__init__(str(page), classes="page-number", variant="primary" if active else "default")
        self.page = page


class Pagination(Container):
    """
    Pagination widget. It only renders a PageState and reports what the
    user asked for; the owning screen decides what the new state is.
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        padding: 0 1;
    }

    Pagination Button {
        min-width: 5;
        margin: 0 0;
    }

    Pagination > #page-numbers {
        width: auto;
        height: 3;
    }

    Pagination .ellipsis {
        width: 3;
        content-align: center middle;
        height: 3;
    }

    Pagination > #page-indicator {
        min-width: 16;
        height: 3;
        content-align: center middle;
    }

    Pagination > #page-size {
        width: 14;
    }
    """

    class PageRequested(Message):
        """User asked for a specific page (may be out of range; the owner clamps)."""
        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    class PageSizeChanged(Message):
        def __init__(self, page_size: int) -> None:
            super().__init__()
            self.page_size = page_size

    def __init__(
        self,
        *,
        page_size: int = 10,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self._page_state: Optional[PageState] = None
        self._initial_size = page_size
        self._suppress_size_event = False

    def compose(self) -> ComposeResult:
        yield Button("«", id="first-page")
        yield Button("‹", id="prev-page")
        yield Horizontal(id="page-numbers")
        yield Button("›", id="next-page")
        yield Button("»", id="last-page")
        yield Label("Page 1 of 1", id="page-indicator")
        yield Select(
            [(f"{n} / page", n) for n in PAGE_SIZE_OPTIONS],
            value=self._initial_size,
            allow_blank=False,
            id="page-size",
        )

    def update_state(self, state: PageState, window: List[Optional[int]]) -> None:
        """Redraw for `state`; `window` is the page-number layout (None = ellipsis)."""
        self._page_state = state

        self.query_one("#page-indicator", Label).update(
            f"Page {state.current_page} of {state.total_pages}"
        )
        self.query_one("#first-page", Button).disabled = not state.has_prev()
        self.query_one("#prev-page", Button).disabled = not state.has_prev()
        self.query_one("#next-page", Button).disabled = not state.has_next()
        self.query_one("#last-page", Button).disabled = not state.has_next()

        numbers = self.query_one("#page-numbers", Horizontal)
        numbers.remove_children()
        widgets = [
            PageButton(page, active=page == state.current_page) if page is not None
            else Label("…", classes="ellipsis")
            for page in window
        ]
        numbers.mount(*widgets)

        size_select = self.query_one("#page-size", Select)
        if size_select.value != state.page_size:
            self._suppress_size_event = True
            size_select.value = state.page_size

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if self._page_state is None:
            return

        current = self._page_state.current_page
        if isinstance(event.button, PageButton):
            requested = event.button.page
        elif event.button.id == "first-page":
            requested = 1
        elif event.button.id == "prev-page":
            requested = current - 1
        elif event.button.id == "next-page":
            requested = current + 1
        elif event.button.id == "last-page":
            requested = self._page_state.total_pages
        else:
            return

        self.post_message(self.PageRequested(requested))

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        if self._suppress_size_event:
            self._suppress_size_event = False
            return
        if event.value is Select.BLANK:
            return
        self.post_message(self.PageSizeChanged(int(event.value)))
