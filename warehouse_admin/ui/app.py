"""
Main Textual application class for the Warehouse Admin console
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.app import App
from textual.binding import Binding
from textual.screen import Screen

from warehouse_admin.di import Container, build_container
from warehouse_admin.models.party import User
from warehouse_admin.resources import RESOURCES, get_resource
from warehouse_admin.ui.messages import OpenResource, SessionExpired
from warehouse_admin.ui.screens.dashboard_screen import DashboardScreen
from warehouse_admin.ui.screens.login_screen import LoginScreen
from warehouse_admin.ui.screens.resource_screen import ResourceScreen
from simple_logger import Slogger


def _resource_bindings():
    return [
        Binding(d.hotkey, f"open_resource('{key}')", d.title, show=False)
        for key, d in RESOURCES.items()
        if d.hotkey
    ]


class WarehouseAdminApp(App):
    """Terminal console for the warehouse management backend."""

    TITLE = "Warehouse Admin"
    CSS_PATH = "css/main.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("d", "dashboard", "Dashboard", show=True),
        Binding("ctrl+l", "logout", "Logout", show=True),
        *_resource_bindings(),
    ]

    # ------------------------------------------------------------------ #
    # init / mount
    # ------------------------------------------------------------------ #

    def __init__(self, config: Dict[str, Any], container: Optional[Container] = None) -> None:
        super().__init__()
        self.config = config
        self.container: Container = container or build_container(config)
        self.session = self.container.session

    def on_mount(self) -> None:
        log_cfg = self.config.get("logging", {})
        Slogger.configure(log_cfg.get("path"), log_cfg.get("level"))

        if self.session.ensure_consistent():
            Slogger.warning("Discarded a half-populated session")

        if self.session.is_authenticated:
            self.push_screen(self._build_dashboard_screen())
        else:
            self.push_screen(self._build_login_screen())

    def on_unmount(self) -> None:
        self.container.close()

    # ------------------------------------------------------------------ #
    # navigation
    # ------------------------------------------------------------------ #

    def _build_login_screen(self, notice: Optional[str] = None) -> LoginScreen:
        return LoginScreen(self.container.auth_service, self._after_login, notice=notice, id="login_screen")

    def _build_dashboard_screen(self) -> DashboardScreen:
        return DashboardScreen(self.container.dashboard_service, self.session, id="dashboard_screen")

    def _show_screen(self, screen: Screen) -> None:
        # drop forms and modals above the current view; switching unmounts the old view
        while len(self.screen_stack) > 2:
            self.pop_screen()
        self.switch_screen(screen)

    def _after_login(self, user: User) -> None:
        self._show_screen(self._build_dashboard_screen())

    def show_login(self, notice: Optional[str] = None) -> None:
        self._show_screen(self._build_login_screen(notice))

    def open_resource(self, key: str) -> None:
        if not self.session.is_authenticated:
            self.show_login()
            return

        definition = get_resource(key)
        if definition.admin_only and not self.session.is_admin:
            Slogger.warning(
                "Non-admin tried to open an admin view",
                {"resource": key, "email": self.session.user.email},
            )
            self.notify("Access denied: administrators only", severity="warning", timeout=4)
            self._show_screen(self._build_dashboard_screen())
            return

        Slogger.debug("Opening resource screen", {"resource": key})
        self._show_screen(
            ResourceScreen(
                self.container.resource_service(key),
                self.session,
                self.config,
                lookup=self.container.resource_service,
                id=f"{key}_screen",
            )
        )

    # ------------------------------------------------------------------ #
    # key-binding actions
    # ------------------------------------------------------------------ #

    def action_open_resource(self, key: str) -> None:
        if not self.session.is_authenticated:
            return
        self.open_resource(key)

    def action_dashboard(self) -> None:
        if not self.session.is_authenticated:
            return
        self._show_screen(self._build_dashboard_screen())

    def action_logout(self) -> None:
        if not self.session.is_authenticated:
            return
        self.container.auth_service.logout()
        self.show_login("You have been signed out")

    # ------------------------------------------------------------------ #
    # messages
    # ------------------------------------------------------------------ #

    def on_open_resource(self, message: OpenResource) -> None:
        self.open_resource(message.key)

    def on_session_expired(self, message: SessionExpired) -> None:
        Slogger.warning("Session expired", {"reason": message.reason})
        self.session.clear()
        self.show_login("Your session has expired, please sign in again")
