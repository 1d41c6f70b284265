"""Domain model for a PaymentMode entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from finance_tracker.models.fields import _parse_date


@dataclass(frozen=True, slots=True)
class PaymentMode:
    id: Optional[int]
    mode: str
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None

    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "PaymentMode":
        return cls(
            id=row.get("id"),
            mode=row.get("mode", ""),
            created_on=_parse_date(row.get("created_on")),
            updated_on=_parse_date(row.get("updated_on")),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        return {"mode": self.mode}
