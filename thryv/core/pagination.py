"""Page Shapes — offset pages (relational) and cursor pages (key-value).

Invariants:
    - OffsetPage: page and limit are 1-based; skip = (page - 1) * limit;
      total_pages = ceil(total / limit) (0 when total is 0)
    - CursorPage: len(items) <= requested limit; next_cursor is None only
      when the store reported no further results
    - The two shapes are distinct types; callers see which store they paginate

Design Decisions:
    - Generic dataclasses: services fill them with ORM rows or Company models,
      routes convert them to response schemas
"""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages_for(total: int, limit: int) -> int:
    return math.ceil(total / limit)


@dataclass
class OffsetPage(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total, self.limit)


@dataclass
class CursorPage(Generic[T]):
    items: list[T] = field(default_factory=list)
    next_cursor: str | None = None

    @property
    def count(self) -> int:
        return len(self.items)
