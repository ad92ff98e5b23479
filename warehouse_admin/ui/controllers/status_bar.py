# warehouse_admin/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from typing import Optional

from textual.widgets import Static

from warehouse_admin.pagination import PageState
from warehouse_admin.session import Session


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    def __init__(self, status_bar: Static, session: Session) -> None:
        self._bar = status_bar
        self._session = session
        self._loading = False

    # ------------------------------------------------------------------ #
    # public helpers
    # ------------------------------------------------------------------ #

    def update(
        self,
        title: str,
        state: PageState,
        summary: str,
        search_query: str = "",
        selected: Optional[str] = None,
    ) -> None:
        """Refresh the whole status line."""
        parts: list[str] = [
            f"{title}: {state.total_elements}",
            f"Page: {state.current_page}/{state.total_pages}",
            f"Size: {state.page_size}",
            summary,
        ]
        if search_query:
            parts.append(f"Search: '{search_query}'")
        if selected:
            parts.append(f"Selected: {selected}")
        if self._loading:
            parts.append("Loading...")
        parts.append(self._user_label())

        self._bar.update(" | ".join(parts))

    def set_loading(self, loading: bool) -> None:
        self._loading = loading

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _user_label(self) -> str:
        user = self._session.user
        if user is None:
            return "Not signed in"
        return f"{user.name or user.email} ({user.role})"
