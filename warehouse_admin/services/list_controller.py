# warehouse_admin/services/list_controller.py
"""
View-owned pagination state for one list screen.

The screen asks for a ticket before each fetch and hands the result back
with it; anything answered for an outdated ticket, or after the screen was
closed, is dropped instead of overwriting newer state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Tuple

from warehouse_admin import pagination
from warehouse_admin.models.pagination import Page
from warehouse_admin.pagination import PageState
from warehouse_admin.resources import ResourceDefinition
from warehouse_admin.utils.formatters import describe_range
from simple_logger import Slogger


@dataclass(frozen=True, slots=True)
class FetchTicket:
    generation: int
    page: int
    per_page: int


class FetchOutcome(Enum):
    DISCARDED = "discarded"   # stale or view closed
    APPLIED = "applied"
    REFETCH = "refetch"       # applied, but the count shrank under the current page


class ListController:
    """Owns the PageState, the current rows and the search text of one view."""

    def __init__(self, definition: ResourceDefinition, *, page_size: int = pagination.DEFAULT_PAGE_SIZE) -> None:
        self.definition = definition
        self.state: PageState = pagination.initial_state(page_size)
        self.items: List[Any] = []
        self.search_query: str = ""
        self._generation = 0
        self._closed = False

    # ------------------------------------------------------------------ #
    # fetch bookkeeping
    # ------------------------------------------------------------------ #

    @property
    def closed(self) -> bool:
        return self._closed

    def begin_fetch(self) -> FetchTicket:
        self._generation += 1
        return FetchTicket(self._generation, self.state.current_page, self.state.page_size)

    def is_current(self, ticket: FetchTicket) -> bool:
        return not self._closed and ticket.generation == self._generation

    def accept(self, ticket: FetchTicket, page: Page[Any]) -> FetchOutcome:
        if not self.is_current(ticket):
            Slogger.debug(
                "Discarding stale page result",
                {"resource": self.definition.key, "ticket": ticket.generation,
                 "latest": self._generation, "closed": self._closed},
            )
            return FetchOutcome.DISCARDED

        self.items = list(page.items)
        self.state = pagination.apply_total_elements(self.state, page.total)

        if self.state.current_page != ticket.page:
            return FetchOutcome.REFETCH
        return FetchOutcome.APPLIED

    def close(self) -> None:
        self._closed = True

    def _invalidate(self) -> None:
        # whatever is in flight was asked for the old state
        self._generation += 1

    def _move(self, new_state: PageState) -> bool:
        if new_state is self.state:
            return False
        self.state = new_state
        self._invalidate()
        return True

    # ------------------------------------------------------------------ #
    # user actions; each returns True when a refetch is needed
    # ------------------------------------------------------------------ #

    def change_page(self, requested_page: int) -> bool:
        return self._move(pagination.change_page(self.state, requested_page))

    def next_page(self) -> bool:
        return self._move(pagination.next_page(self.state))

    def previous_page(self) -> bool:
        return self._move(pagination.previous_page(self.state))

    def first_page(self) -> bool:
        return self._move(pagination.first_page(self.state))

    def last_page(self) -> bool:
        return self._move(pagination.last_page(self.state))

    def change_page_size(self, new_size: int) -> bool:
        if new_size == self.state.page_size:
            return False
        return self._move(pagination.change_page_size(self.state, new_size))

    def after_delete(self) -> bool:
        """
        Call once a delete succeeded. Steps back a page when the deleted row
        was the only one on a page past the first. The caller refetches
        either way.
        """
        stepped = self._move(pagination.page_after_delete(self.state, len(self.items)))
        if stepped:
            Slogger.info(
                "Last row on page deleted, stepping back",
                {"resource": self.definition.key, "page": self.state.current_page},
            )
        return stepped

    def set_search(self, query: str) -> None:
        """Search filters the rows already fetched; no refetch."""
        self.search_query = query.strip()

    # ------------------------------------------------------------------ #
    # derived
    # ------------------------------------------------------------------ #

    @property
    def visible_items(self) -> List[Any]:
        return [r for r in self.items if self.definition.matches(r, self.search_query)]

    def page_window(self) -> List[Any]:
        return pagination.page_window(self.state)

    def bounds(self) -> Tuple[int, int]:
        return pagination.page_bounds(self.state)

    def summary(self) -> str:
        start, end = self.bounds()
        text = describe_range(start, end, self.state.total_elements, self.definition.title.lower())
        if self.search_query:
            text += f" | {len(self.visible_items)} match '{self.search_query}'"
        return text
