"""
Search bar widget for filtering the rows on screen
"""

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Container
from textual.message import Message
from textual.widgets import Button, Input


class SearchBar(Container):
    """
    Search bar widget with input and clear button. Emits `Changed` on every
    keystroke; filtering is local so there is no need to wait for Enter.
    """

    DEFAULT_CSS = """
    SearchBar {
        layout: horizontal;
        height: 3;
    }

    SearchBar > Input {
        width: 1fr;
    }

    SearchBar > Button {
        min-width: 9;
    }
    """

    class Changed(Message):
        """Search text changed message"""
        def __init__(self, query: str) -> None:
            super().__init__()
            self.query = query

    def __init__(
        self,
        placeholder: str = "Search...",
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self._placeholder = placeholder

    def compose(self) -> ComposeResult:
        yield Input(placeholder=self._placeholder, id="search-input")
        yield Button("Clear", id="search-clear")

    def focus_input(self) -> None:
        self.query_one("#search-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.Changed(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search-clear":
            event.stop()
            # setting the value fires Input.Changed, which reports the new query
            self.query_one("#search-input", Input).value = ""
