# finance_tracker/services/sqlite_source.py
"""
RemoteDataSource backed by one sqlite table repository.

Repository calls block, so each one runs in a worker thread and the event
loop stays free for the UI. sqlite errors are translated into the
TransportError / BackendError split the table controller understands.
"""

from __future__ import annotations

import asyncio
import sqlite3
from typing import Any, Callable, Dict, Sequence, TypeVar

from finance_tracker.db.repos.table_repo import TableRepo
from finance_tracker.errors import BackendError, TransportError
from finance_tracker.models.fields import toggled_status
from finance_tracker.models.pagination import PageRequest, PageResult
from finance_tracker.services.data_source import MutationKind, RemoteDataSource
from simple_logger import Slogger

T = TypeVar("T")

# Messages sqlite uses when the database itself is unreachable.
_TRANSPORT_MARKERS = ("database is locked", "unable to open", "disk i/o error", "database is busy")


def translate_error(exc: sqlite3.Error) -> Exception:
    """Map a sqlite3 exception onto the data-source error hierarchy."""
    message = str(exc)
    if isinstance(exc, sqlite3.OperationalError) and any(
        marker in message.lower() for marker in _TRANSPORT_MARKERS
    ):
        return TransportError(message)
    if isinstance(exc, sqlite3.ProgrammingError) and "closed" in message.lower():
        return TransportError(message)
    return BackendError(message)


class SQLiteDataSource(RemoteDataSource[T]):
    """Serves pages of one table through its repository."""

    def __init__(self, repo: TableRepo[T], *, searchable_fields: Sequence[str] | None = None):
        self._repo = repo
        self._search_fields = tuple(searchable_fields or ())

    @property
    def repo(self) -> TableRepo[T]:
        return self._repo

    async def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run a blocking repository call in a worker thread."""
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except sqlite3.Error as e:
            Slogger.exception(e, f"{type(self._repo).__name__}: database error")
            raise translate_error(e) from e

    # ---------- read side ----------

    def _query_sync(self, request: PageRequest) -> PageResult[T]:
        fields = self._search_fields or None
        total = self._repo.count(search=request.search_text, search_fields=fields)
        rows = self._repo.list(
            offset=request.offset,
            limit=request.count,
            sort=request.sort,
            search=request.search_text,
            search_fields=fields,
        )
        return PageResult(rows=rows, total_matching=total)

    async def query(self, request: PageRequest) -> PageResult[T]:
        return await self.call(self._query_sync, request)

    # ---------- write side ----------

    def _mutate_sync(self, kind: MutationKind, payload: Dict[str, Any]) -> Any:
        values = dict(payload)
        row_id = values.pop("id", None)

        if kind is MutationKind.CREATE:
            return self._repo.add(values)

        if row_id is None:
            raise BackendError(f"{kind.value} needs an id")

        if kind is MutationKind.UPDATE:
            stored = self._repo.update(row_id, values)
        elif kind is MutationKind.DELETE:
            stored = self._repo.delete(row_id) or None
        elif kind is MutationKind.STATUS_TOGGLE:
            current = self._repo.by_id(row_id)
            if current is None:
                stored = None
            elif not hasattr(current, "status"):
                raise BackendError(f"{self._repo.table} rows have no status")
            else:
                stored = self._repo.update(row_id, {"status": toggled_status(current.status)})
        else:
            raise BackendError(f"unsupported mutation: {kind}")

        if stored is None:
            raise BackendError(f"{self._repo.table} row {row_id} not found")
        return stored

    async def mutate(self, kind: MutationKind, payload: Dict[str, Any]) -> Any:
        Slogger.info(
            f"{type(self._repo).__name__}: {kind.value}",
            {"id": payload.get("id", "new")},
        )
        return await self.call(self._mutate_sync, kind, payload)
