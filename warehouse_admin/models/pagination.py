"""Generic page-of-results container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from warehouse_admin.pagination import total_pages_for

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """A single page of records as returned by the backend."""

    items: Sequence[T]
    total: int           # server-reported count across all pages
    page: int            # 1-based page this slice belongs to
    per_page: int

    @property
    def pages(self) -> int:
        return total_pages_for(self.total, self.per_page)

    def __len__(self) -> int:
        return len(self.items)

    def has_next(self) -> bool:
        return self.page < self.pages

    def has_prev(self) -> bool:
        return self.page > 1
