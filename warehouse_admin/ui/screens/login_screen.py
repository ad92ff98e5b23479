"""
Sign-in screen. Shown at startup and whenever the session is lost.
"""

from __future__ import annotations

from typing import Callable, Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label

from warehouse_admin.errors import ValidationError, WarehouseAdminError
from warehouse_admin.models.party import User
from warehouse_admin.services.auth_service import AuthService
from simple_logger import Slogger


class LoginScreen(Screen):
    """Email / password form that fills the session through AuthService."""

    BINDINGS = [
        ("ctrl+s", "submit", "Sign in"),
    ]

    def __init__(
        self,
        auth_service: AuthService,
        on_login: Callable[[User], None],
        *,
        notice: Optional[str] = None,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self.auth_service = auth_service
        self.on_login = on_login
        self.notice = notice
        self._busy = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="login-container"):
            yield Label("Warehouse Admin", id="login-title")
            yield Label(self.notice or "Sign in to continue", id="login-message")
            yield Label("Email", classes="field-label")
            yield Input(placeholder="you@example.com", id="login-email")
            yield Label("Password", classes="field-label")
            yield Input(placeholder="Password", password=True, id="login-password")
            with Horizontal(id="login-buttons"):
                yield Button("Sign in", variant="primary", id="login-button")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#login-email", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "login-email":
            self.query_one("#login-password", Input).focus()
        else:
            self.action_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "login-button":
            self.action_submit()

    def action_submit(self) -> None:
        if self._busy:
            return
        email = self.query_one("#login-email", Input).value
        password = self.query_one("#login-password", Input).value

        self._set_busy(True)
        self.run_worker(lambda: self._attempt_login(email, password), thread=True, group="login", exclusive=True)

    def _attempt_login(self, email: str, password: str) -> None:
        try:
            user = self.auth_service.login(email, password)
        except WarehouseAdminError as e:
            self.app.call_from_thread(self._login_failed, e)
            return
        self.app.call_from_thread(self._login_succeeded, user)

    def _login_succeeded(self, user: User) -> None:
        self._set_busy(False)
        self.notify(f"Welcome, {user.name or user.email}", severity="information", timeout=3)
        self.on_login(user)

    def _login_failed(self, error: WarehouseAdminError) -> None:
        self._set_busy(False)
        if not isinstance(error, ValidationError):
            Slogger.warning(f"Login failed: {error}", {"error": type(error).__name__})
        self.query_one("#login-password", Input).value = ""
        self.query_one("#login-message", Label).update(f"Login failed: {error}")
        self.notify(str(error), title="Login failed", severity="error", timeout=4)

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.query_one("#login-button", Button).disabled = busy
