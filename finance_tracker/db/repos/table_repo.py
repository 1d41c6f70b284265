# finance_tracker/db/repos/table_repo.py
"""
Generic ranged / ordered / searched access to one table.

Subclasses describe their table (writable columns, sortable and searchable
expressions, default order) and how to turn a row into a model; the SQL is
assembled here. Column names never come from callers directly: sort and
search fields are looked up in the subclass whitelists.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from finance_tracker.db.connection import SQLiteConnection
from finance_tracker.errors import BackendError
from finance_tracker.models.pagination import SortDirection, SortSpec
from simple_logger import Slogger

T = TypeVar("T")


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class TableRepo(Generic[T]):
    """CRUD plus paging for a single table."""

    table: ClassVar[str] = ""
    writable: ClassVar[Tuple[str, ...]] = ()
    # field name -> SQL expression
    sortable: ClassVar[Dict[str, str]] = {}
    searchable: ClassVar[Dict[str, str]] = {}
    default_order: ClassVar[str] = "t.created_on DESC, t.id DESC"
    name_field: ClassVar[Optional[str]] = None

    def __init__(self, db: SQLiteConnection) -> None:
        self._db = db

    # ---------- mapping hooks ----------------------------------------------

    def _to_model(self, row: Dict[str, Any]) -> T:
        raise NotImplementedError("Subclasses must implement this method")

    def _select_columns(self) -> str:
        return "t.*"

    def _from_clause(self) -> str:
        return f"{self.table} t"

    # ---------- read side --------------------------------------------------

    def list(
        self,
        *,
        offset: int = 0,
        limit: int = 10,
        sort: SortSpec | None = None,
        search: str | None = None,
        search_fields: Sequence[str] | None = None,
    ) -> List[T]:
        """Return `limit` rows starting at `offset` in the requested order."""
        where, params = self._where(search, search_fields)
        query = (
            f"SELECT {self._select_columns()} FROM {self._from_clause()}{where}"
            f" ORDER BY {self._order_by(sort)} LIMIT ? OFFSET ?"
        )
        params.extend([limit, offset])

        with self._db.locked():
            cursor = self._db.cursor()
            cursor.execute(query, params)
            results = cursor.fetchall()

        Slogger.debug(
            f"{type(self).__name__}.list: Retrieved {len(results)} rows",
            {"offset": offset, "limit": limit, "sort": sort, "search": search or ""},
        )
        return [self._to_model(dict(row)) for row in results]

    def count(
        self,
        *,
        search: str | None = None,
        search_fields: Sequence[str] | None = None,
    ) -> int:
        """Total rows matching the search (all rows when no search)."""
        where, params = self._where(search, search_fields)
        query = f"SELECT COUNT(*) FROM {self._from_clause()}{where}"

        with self._db.locked():
            cursor = self._db.cursor()
            cursor.execute(query, params)
            return cursor.fetchone()[0]

    def by_id(self, row_id: int) -> Optional[T]:
        """Find a row by id and return a model (or None)."""
        query = f"SELECT {self._select_columns()} FROM {self._from_clause()} WHERE t.id = ?"
        with self._db.locked():
            cursor = self._db.cursor()
            cursor.execute(query, (row_id,))
            row = cursor.fetchone()
        return self._to_model(dict(row)) if row else None

    def find_by_name(self, name: str, *, exclude_id: int | None = None) -> Optional[T]:
        """Case-insensitive exact match on the name column, skipping `exclude_id`."""
        if not self.name_field:
            raise BackendError(f"{self.table} has no name column")

        query = (
            f"SELECT {self._select_columns()} FROM {self._from_clause()}"
            f" WHERE LOWER(TRIM(t.{self.name_field})) = LOWER(TRIM(?))"
        )
        params: List[Any] = [name]
        if exclude_id is not None:
            query += " AND t.id != ?"
            params.append(exclude_id)
        query += " LIMIT 1"

        with self._db.locked():
            cursor = self._db.cursor()
            cursor.execute(query, params)
            row = cursor.fetchone()
        return self._to_model(dict(row)) if row else None

    # ---------- write side -------------------------------------------------

    def add(self, values: Dict[str, Any]) -> T:
        """Insert a row; returns the stored model with its generated id."""
        doc = self._writable(values)
        doc["created_on"] = datetime.now().isoformat()

        fields = ", ".join(doc.keys())
        placeholders = ", ".join(["?"] * len(doc))

        with self._db.locked():
            cursor = self._db.cursor()
            try:
                cursor.execute(
                    f"INSERT INTO {self.table} ({fields}) VALUES ({placeholders})",
                    list(doc.values()),
                )
                self._db.commit()
            except Exception:
                self._db.rollback()
                raise
            row_id = cursor.lastrowid

        Slogger.info(f"{type(self).__name__}.add: Added row id={row_id}", {"table": self.table})
        return self.by_id(row_id)

    def update(self, row_id: int, values: Dict[str, Any]) -> Optional[T]:
        """Partial update; returns the stored model, or None when no row matched."""
        doc = self._writable(values)
        if not doc:
            Slogger.debug(f"{type(self).__name__}.update: Nothing to update for id={row_id}")
            return self.by_id(row_id)
        doc["updated_on"] = datetime.now().isoformat()

        set_clauses = ", ".join(f"{key} = ?" for key in doc)
        params = list(doc.values()) + [row_id]

        with self._db.locked():
            cursor = self._db.cursor()
            try:
                cursor.execute(f"UPDATE {self.table} SET {set_clauses} WHERE id = ?", params)
                self._db.commit()
            except Exception:
                self._db.rollback()
                raise
            success = cursor.rowcount > 0

        if not success:
            Slogger.warning(f"{type(self).__name__}.update: No row with id={row_id}")
            return None

        Slogger.info(
            f"{type(self).__name__}.update: Updated id={row_id}",
            {"fields": ", ".join(k for k in doc if k != "updated_on")},
        )
        return self.by_id(row_id)

    def delete(self, row_id: int) -> bool:
        """Delete a row; False when nothing matched."""
        with self._db.locked():
            cursor = self._db.cursor()
            try:
                cursor.execute(f"DELETE FROM {self.table} WHERE id = ?", (row_id,))
                self._db.commit()
            except Exception:
                self._db.rollback()
                raise
            success = cursor.rowcount > 0

        if success:
            Slogger.info(f"{type(self).__name__}.delete: Deleted id={row_id}")
        else:
            Slogger.warning(f"{type(self).__name__}.delete: No row with id={row_id}")
        return success

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _writable(self, values: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(values) - set(self.writable) - {"id"}
        if unknown:
            raise BackendError(
                f"{self.table} has no writable column(s): {', '.join(sorted(unknown))}"
            )
        return {k: v for k, v in values.items() if k in self.writable}

    def _where(
        self, search: str | None, search_fields: Sequence[str] | None
    ) -> Tuple[str, List[Any]]:
        text = (search or "").strip()
        if not text:
            return "", []

        fields = list(search_fields) if search_fields else list(self.searchable)
        unknown = [f for f in fields if f not in self.searchable]
        if unknown:
            raise BackendError(f"cannot search {self.table} by: {', '.join(unknown)}")

        pattern = _like_pattern(text)
        clauses = [f"{self.searchable[f]} LIKE ? ESCAPE '\\'" for f in fields]
        return f" WHERE ({' OR '.join(clauses)})", [pattern] * len(clauses)

    def _order_by(self, sort: SortSpec | None) -> str:
        if sort is None:
            return self.default_order

        expr = self.sortable.get(sort.field)
        if expr is None:
            raise BackendError(f"cannot sort {self.table} by '{sort.field}'")

        direction = "ASC" if sort.direction is SortDirection.ASC else "DESC"
        return f"{expr} {direction}, t.id {direction}"
