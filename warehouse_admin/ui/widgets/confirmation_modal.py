"""
Yes/no dialog for destructive actions.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmationModal(ModalScreen[bool]):
    """
    Dismisses with True when confirmed, False otherwise; push it with a
    callback to act on the answer.
    """

    BINDINGS = [
        ("escape", "answer(False)", "Cancel"),
        ("enter", "answer(True)", "Confirm"),
    ]

    def __init__(
        self,
        title: str,
        message: str,
        *,
        confirm_label: str = "Delete",
        id: str | None = None,
    ):
        super().__init__(id=id)
        self.heading = title
        self.message = message
        self.confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Container(id="confirmation-container"):
            yield Label(self.heading, id="confirmation-title")
            yield Label(self.message, id="confirmation-message")
            with Horizontal(id="confirmation-buttons"):
                yield Button("Cancel", variant="primary", id="no-button")
                yield Button(self.confirm_label, variant="error", id="yes-button")

    def on_mount(self) -> None:
        # safe choice first
        self.query_one("#no-button", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.action_answer(event.button.id == "yes-button")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)
