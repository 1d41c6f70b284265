"""Paging value types shared by the table controller and the data sources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Sequence, TypeVar

from finance_tracker.errors import ValidationError

T = TypeVar("T")


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Ordering on a single field."""

    field: str
    direction: SortDirection = SortDirection.ASC

    def next_for(self, field: str) -> Optional["SortSpec"]:
        """Where a header click on `field` moves this sort: asc, desc, then off."""
        if field != self.field:
            return SortSpec(field, SortDirection.ASC)
        if self.direction is SortDirection.ASC:
            return SortSpec(field, SortDirection.DESC)
        return None

    def __str__(self) -> str:
        arrow = "↑" if self.direction is SortDirection.ASC else "↓"
        return f"{self.field} {arrow}"


def next_sort(current: Optional[SortSpec], field: str) -> Optional[SortSpec]:
    """Three-state cycle: unsorted -> asc -> desc -> unsorted."""
    if current is None:
        return SortSpec(field, SortDirection.ASC)
    return current.next_for(field)


@dataclass(frozen=True, slots=True)
class PageRequest:
    """One ranged query against a data source."""

    offset: int
    count: int
    sort: Optional[SortSpec] = None
    search_text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.count <= 0:
            raise ValidationError(f"count must be positive, got {self.count}", "count")
        if self.offset < 0:
            raise ValidationError(f"offset must not be negative, got {self.offset}", "offset")
        if self.offset % self.count:
            raise ValidationError(
                f"offset {self.offset} is not a multiple of count {self.count}", "offset"
            )

    @classmethod
    def for_page(
        cls,
        page: int,
        per_page: int,
        sort: Optional[SortSpec] = None,
        search_text: Optional[str] = None,
    ) -> "PageRequest":
        return cls(
            offset=(page - 1) * per_page,
            count=per_page,
            sort=sort,
            search_text=search_text or None,
        )

    @property
    def page(self) -> int:
        return self.offset // self.count + 1


@dataclass(frozen=True, slots=True)
class PageResult(Generic[T]):
    """Rows for one request plus the number of rows matching it overall."""

    rows: Sequence[T]
    total_matching: int

    def __post_init__(self) -> None:
        if self.total_matching < 0:
            raise ValidationError("total_matching must not be negative", "total_matching")


def total_pages(total: int, per_page: int) -> int:
    """Number of pages needed for `total` rows; at least 1."""
    return max(1, (total + per_page - 1) // per_page)

