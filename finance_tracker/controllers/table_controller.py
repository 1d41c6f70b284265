# finance_tracker/controllers/table_controller.py
"""
Paged / sorted / searched table state over a RemoteDataSource.

One controller drives one list view. It owns the page, page size, sort and
search text, asks the data source for the matching slice, and hands the
view a snapshot after every change.

Responses can arrive out of order. Every request carries a generation
number and only the response for the newest generation is applied; older
ones are dropped. After `close()` every response is dropped.

Public operations never raise: failures are stored in `last_error` and
passed to the error listeners, and the rows of the last good page stay in
place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from finance_tracker.errors import BackendError, ConfigError, FinanceTrackerError, ValidationError
from finance_tracker.models.pagination import PageRequest, SortSpec, next_sort, total_pages
from finance_tracker.services.data_source import RemoteDataSource
from simple_logger import Slogger

T = TypeVar("T")

DEFAULT_PAGE_SIZE_OPTIONS = (10, 20, 50, 100)


class TableStatus(Enum):
    IDLE = "idle"
    INITIAL_LOADING = "initial_loading"
    PAGING = "paging"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class TableConfig:
    """Per-table settings for a PagedTableController."""

    name: str
    default_sort: Optional[SortSpec] = None
    searchable_fields: Tuple[str, ...] = ()
    sortable_fields: Tuple[str, ...] = ()
    page_size_options: Tuple[int, ...] = DEFAULT_PAGE_SIZE_OPTIONS
    default_page_size: int = 10

    def __post_init__(self) -> None:
        if not self.page_size_options or any(s <= 0 for s in self.page_size_options):
            raise ConfigError(f"{self.name}: page sizes must be positive")
        if self.default_page_size not in self.page_size_options:
            raise ConfigError(
                f"{self.name}: default page size {self.default_page_size} "
                f"is not one of {self.page_size_options}"
            )


@dataclass(frozen=True, slots=True)
class TableSnapshot(Generic[T]):
    """What the view renders."""

    rows: Tuple[T, ...]
    total_count: int
    current_page: int
    page_size: int
    sort: Optional[SortSpec]
    search_text: str
    status: TableStatus

    # ------------- helpers -------------
    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.page_size)

    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def is_busy(self) -> bool:
        return self.status in (TableStatus.INITIAL_LOADING, TableStatus.PAGING)


SnapshotListener = Callable[[TableSnapshot], None]
ErrorListener = Callable[[FinanceTrackerError], None]


class PagedTableController(Generic[T]):
    """Latest-wins pagination controller for one table."""

    def __init__(self, source: RemoteDataSource[T], config: TableConfig) -> None:
        self._source = source
        self._config = config

        self._rows: Tuple[T, ...] = ()
        self._total = 0
        self._page = 1
        self._page_size = config.default_page_size
        self._sort: Optional[SortSpec] = None
        self._search = ""
        self._status = TableStatus.IDLE

        self._generation = 0
        self._pending_page: Optional[int] = None
        self._pending_size: Optional[int] = None
        self._loaded = False
        self._live = True
        self.last_error: Optional[FinanceTrackerError] = None

        self._listeners: List[SnapshotListener] = []
        self._error_listeners: List[ErrorListener] = []

    # ------------------------------------------------------------------ #
    # read side
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> TableConfig:
        return self._config

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_live(self) -> bool:
        return self._live

    @property
    def is_busy(self) -> bool:
        return self._pending_page is not None

    @property
    def snapshot(self) -> TableSnapshot[T]:
        return TableSnapshot(
            rows=self._rows,
            total_count=self._total,
            current_page=self._page,
            page_size=self._page_size,
            sort=self._sort,
            search_text=self._search,
            status=self._status,
        )

    # ------------------------------------------------------------------ #
    # subscriptions
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: SnapshotListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> bool:
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def on_error(self, listener: ErrorListener) -> None:
        if listener not in self._error_listeners:
            self._error_listeners.append(listener)

    # ------------------------------------------------------------------ #
    # operations
    # ------------------------------------------------------------------ #

    async def initialize(
        self,
        initial_rows: Sequence[T] | None = None,
        initial_total: int | None = None,
    ) -> bool:
        """Adopt seed rows as page 1, or fetch page 1 when there are none."""
        if not self._live:
            return False

        if initial_rows is None:
            return await self._fetch(1, TableStatus.INITIAL_LOADING)

        total = len(initial_rows) if initial_total is None else initial_total
        if total < len(initial_rows):
            return self._reject(
                ValidationError(
                    f"initial total {total} is smaller than the {len(initial_rows)} seed rows",
                    "initial_total",
                )
            )

        # seed data supersedes any fetch still in flight
        self._generation += 1
        self._pending_page = None
        self._pending_size = None
        self._rows = tuple(initial_rows)
        self._total = total
        self._page = 1
        self._loaded = True
        self._status = TableStatus.READY
        Slogger.debug(
            f"{self._config.name}: seeded with {len(self._rows)} rows",
            {"total": total},
        )
        self._emit()
        return True

    async def go_to_page(self, page: int) -> bool:
        if not self._live:
            return False
        if page < 1 or page > total_pages(self._total, self._page_size):
            return self._reject(ValidationError(f"page {page} is out of range", "page"))
        if page == self._target_page():
            return False
        return await self._fetch(page, TableStatus.PAGING)

    async def change_page_size(self, size: int) -> bool:
        if not self._live:
            return False
        if size not in self._config.page_size_options:
            return self._reject(
                ValidationError(
                    f"page size {size} is not one of {self._config.page_size_options}",
                    "page_size",
                )
            )
        if size == self._page_size:
            return False
        if self.is_busy:
            Slogger.debug(f"{self._config.name}: page size change ignored while fetching", {"size": size})
            return False
        return await self._fetch(1, TableStatus.PAGING, page_size=size)

    async def toggle_sort(self, field: str) -> bool:
        """Cycle `field` through asc, desc and unsorted; the page is kept."""
        if not self._live:
            return False
        if self._config.sortable_fields and field not in self._config.sortable_fields:
            return self._reject(ValidationError(f"cannot sort by '{field}'", "sort"))

        self._sort = next_sort(self._sort, field)
        return await self._fetch(self._target_page(), TableStatus.PAGING)

    async def set_search_text(self, text: str) -> bool:
        """Search is resolved by the data source; results restart at page 1."""
        if not self._live:
            return False
        text = text or ""
        if text == self._search:
            return False

        self._search = text
        self._emit()
        return await self._fetch(1, TableStatus.PAGING)

    async def notify_mutation(self) -> bool:
        """Re-read the current page after rows were created, changed or removed."""
        if not self._live:
            return False
        return await self._fetch(self._target_page(), TableStatus.PAGING)

    async def refresh(self) -> bool:
        return await self.notify_mutation()

    def close(self) -> None:
        """Teardown: later responses are ignored and listeners are dropped."""
        if not self._live:
            return
        self._live = False
        self._pending_page = None
        self._pending_size = None
        self._listeners.clear()
        self._error_listeners.clear()
        Slogger.debug(f"{self._config.name}: controller closed", {"generation": self._generation})

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _target_page(self) -> int:
        return self._pending_page if self._pending_page is not None else self._page

    def _is_current(self, generation: int) -> bool:
        return self._live and generation == self._generation

    def _settled_status(self) -> TableStatus:
        return TableStatus.READY if self._loaded else TableStatus.IDLE

    async def _fetch(self, page: int, status: TableStatus, *, page_size: int | None = None) -> bool:
        # a page size still being fetched carries over to superseding requests
        size = page_size or self._pending_size or self._page_size
        request = PageRequest.for_page(
            page,
            size,
            sort=self._sort or self._config.default_sort,
            search_text=self._search,
        )

        self._generation += 1
        generation = self._generation
        self._pending_page = page
        self._pending_size = size if size != self._page_size else None
        self._status = status
        self._emit()

        context = {
            "table": self._config.name,
            "generation": generation,
            "offset": request.offset,
            "count": request.count,
            "sort": request.sort,
            "search": request.search_text or "",
        }
        Slogger.debug("Issuing page request", context)

        result = None
        error: Optional[FinanceTrackerError] = None
        current = False
        try:
            result = await self._source.query(request)
        except FinanceTrackerError as e:
            error = e
        except Exception as e:
            Slogger.exception(e, "Data source raised an unexpected error", dict(context))
            error = BackendError(f"{type(e).__name__}: {e}")
        finally:
            current = self._is_current(generation)
            if current:
                self._pending_page = None
                self._pending_size = None
                self._status = self._settled_status()

        if not current:
            Slogger.debug("Discarding stale page response", context)
            return False

        if error is not None:
            Slogger.warning(f"Page request failed: {error}", context)
            self._emit()
            self._report(error)
            return False

        total = result.total_matching
        if request.offset > 0 and request.offset >= total:
            last = total_pages(total, size)
            Slogger.debug(
                f"Page {page} is past the end, clamping to page {last}",
                {**context, "total": total},
            )
            return await self._fetch(last, TableStatus.PAGING, page_size=size)

        self._rows = tuple(result.rows)
        self._total = total
        self._page = page
        self._page_size = size
        self._loaded = True
        self._status = TableStatus.READY
        self.last_error = None
        self._emit()
        return True

    def _reject(self, error: ValidationError) -> bool:
        Slogger.debug(f"{self._config.name}: rejected: {error}")
        self._report(error)
        return False

    def _report(self, error: FinanceTrackerError) -> None:
        self.last_error = error
        for listener in list(self._error_listeners):
            try:
                listener(error)
            except Exception as e:
                Slogger.exception(e, "Error in table error listener", {"table": self._config.name})

    def _emit(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                Slogger.exception(e, "Error in table snapshot listener", {"table": self._config.name})
