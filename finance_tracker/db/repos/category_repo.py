# finance_tracker/db/repos/category_repo.py
"""
Repository for categories.
"""

from __future__ import annotations

from typing import Any, Dict, List

from finance_tracker.db.repos.table_repo import TableRepo
from finance_tracker.models.category import Category
from finance_tracker.models.fields import ACTIVE


class CategoryRepo(TableRepo[Category]):
    table = "categories"
    writable = ("name", "type", "status")
    sortable = {
        "name": "t.name COLLATE NOCASE",
        "type": "t.type",
        "status": "t.status",
        "created_on": "t.created_on",
    }
    searchable = {
        "name": "t.name",
        "type": "t.type",
        "status": "t.status",
    }
    name_field = "name"

    def _to_model(self, row: Dict[str, Any]) -> Category:
        return Category.from_sqlite(row)

    def active_for_type(self, category_type: str) -> List[Category]:
        """Active categories of one transaction type, by name."""
        with self._db.locked():
            cursor = self._db.cursor()
            cursor.execute(
                "SELECT * FROM categories WHERE type = ? AND status = ? ORDER BY name COLLATE NOCASE",
                (category_type, ACTIVE),
            )
            rows = cursor.fetchall()
        return [Category.from_sqlite(dict(row)) for row in rows]
