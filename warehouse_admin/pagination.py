"""
Page-state arithmetic shared by every list screen.

All functions are pure: they take a `PageState` and return a `PageState`
(the very same object when nothing changes). Out-of-range pages are clamped,
never rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

PAGE_SIZE_OPTIONS: Tuple[int, ...] = (5, 10, 20, 50)
DEFAULT_PAGE_SIZE = 10
MAX_PAGES_TO_SHOW = 5


def total_pages_for(total_elements: int, page_size: int) -> int:
    """Number of pages needed for `total_elements`; an empty set is still one page."""
    return max(1, math.ceil(total_elements / page_size))


@dataclass(frozen=True, slots=True)
class PageState:
    """Where a list view currently is within the full result set."""

    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_elements: int = 0
    total_pages: int = 1

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.total_elements < 0:
            raise ValueError(f"total_elements cannot be negative, got {self.total_elements}")
        expected = total_pages_for(self.total_elements, self.page_size)
        if self.total_pages != expected:
            raise ValueError(
                f"total_pages={self.total_pages} does not match "
                f"{self.total_elements} elements at {self.page_size} per page"
            )
        if not 1 <= self.current_page <= self.total_pages:
            raise ValueError(
                f"current_page={self.current_page} outside [1, {self.total_pages}]"
            )

    # ------------- helpers -------------
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def has_prev(self) -> bool:
        return self.current_page > 1


def initial_state(
    page_size: int = DEFAULT_PAGE_SIZE,
    total_elements: int = 0,
    current_page: int = 1,
) -> PageState:
    """Build a consistent state, clamping `current_page` into range."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    pages = total_pages_for(total_elements, page_size)
    return PageState(
        current_page=min(max(1, current_page), pages),
        page_size=page_size,
        total_elements=total_elements,
        total_pages=pages,
    )


# --------------------------------------------------------------------- #
# transitions
# --------------------------------------------------------------------- #

def change_page(state: PageState, requested_page: int) -> PageState:
    page = max(1, min(requested_page, state.total_pages))
    if page == state.current_page:
        return state
    return replace(state, current_page=page)


def next_page(state: PageState) -> PageState:
    return change_page(state, state.current_page + 1)


def previous_page(state: PageState) -> PageState:
    return change_page(state, state.current_page - 1)


def first_page(state: PageState) -> PageState:
    return change_page(state, 1)


def last_page(state: PageState) -> PageState:
    return change_page(state, state.total_pages)


def change_page_size(state: PageState, new_size: int) -> PageState:
    """
    Switch to `new_size` rows per page while keeping the first visible row
    on screen.

    Page 3 at 10 per page shows rows 21-30; at 5 per page row 21 lives on
    page 5, so that is where we land.
    """
    if new_size <= 0:
        raise ValueError(f"page size must be positive, got {new_size}")

    first_item_index = (state.current_page - 1) * state.page_size
    candidate = max(1, first_item_index // new_size + 1)
    new_total_pages = total_pages_for(state.total_elements, new_size)
    candidate = min(candidate, new_total_pages)

    return PageState(
        current_page=candidate,
        page_size=new_size,
        total_elements=state.total_elements,
        total_pages=new_total_pages,
    )


def apply_total_elements(state: PageState, new_total: int) -> PageState:
    """Take a fresh server count; pull the current page back if it fell off the end."""
    if new_total < 0:
        raise ValueError(f"total cannot be negative, got {new_total}")
    if new_total == state.total_elements:
        return state

    new_total_pages = total_pages_for(new_total, state.page_size)
    return PageState(
        current_page=min(state.current_page, new_total_pages),
        page_size=state.page_size,
        total_elements=new_total,
        total_pages=new_total_pages,
    )


# --------------------------------------------------------------------- #
# delete policy
# --------------------------------------------------------------------- #

def should_step_back_after_delete(state: PageState, items_on_page: int) -> bool:
    """True when the row just deleted was the only one on a page past the first."""
    return items_on_page == 1 and state.current_page > 1


def page_after_delete(state: PageState, items_on_page: int) -> PageState:
    if should_step_back_after_delete(state, items_on_page):
        return change_page(state, state.current_page - 1)
    return state


# --------------------------------------------------------------------- #
# derived views
# --------------------------------------------------------------------- #

def page_bounds(state: PageState) -> Tuple[int, int]:
    """Zero-based [start, end) slice of the full result set for this page."""
    start = (state.current_page - 1) * state.page_size
    end = min(start + state.page_size, state.total_elements)
    return start, max(start, end)


def page_window(state: PageState, max_pages: int = MAX_PAGES_TO_SHOW) -> List[Optional[int]]:
    """
    Page numbers to render as buttons. `None` stands for an ellipsis.

    >>> page_window(initial_state(10, 200, current_page=10))
    [1, None, 8, 9, 10, 11, 12, None, 20]
    """
    total = state.total_pages
    start = max(1, state.current_page - max_pages // 2)
    end = min(total, start + max_pages - 1)
    if end - start + 1 < max_pages:
        start = max(1, end - max_pages + 1)

    window: List[Optional[int]] = []
    if start > 1:
        window.append(1)
        if start > 2:
            window.append(None)

    window.extend(range(start, end + 1))

    if end < total:
        if end < total - 1:
            window.append(None)
        window.append(total)

    return window
