"""Domain model for a Category entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from finance_tracker.models.fields import ACTIVE, EXPENSE, _parse_date


@dataclass(frozen=True, slots=True)
class Category:
    id: Optional[int]
    name: str
    type: str = EXPENSE
    status: str = ACTIVE
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Category":
        """Build a `Category` from a SQLite row (dict)."""
        return cls(
            id=row.get("id"),
            name=row.get("name", ""),
            type=row.get("type") or EXPENSE,
            status=row.get("status") or ACTIVE,
            created_on=_parse_date(row.get("created_on")),
            updated_on=_parse_date(row.get("updated_on")),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        """Writable columns only; timestamps are stamped by the repository."""
        return {"name": self.name, "type": self.type, "status": self.status}
