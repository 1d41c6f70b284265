"""Domain model for a BankAccount entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from finance_tracker.models.fields import ACTIVE, _parse_date


@dataclass(frozen=True, slots=True)
class BankAccount:
    id: Optional[int]
    bank_name: str
    holder_name: str
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    branch: Optional[str] = None
    status: str = ACTIVE
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "BankAccount":
        """Build a `BankAccount` from a SQLite row (dict)."""
        return cls(
            id=row.get("id"),
            bank_name=row.get("bank_name", ""),
            holder_name=row.get("holder_name", ""),
            account_number=row.get("account_number"),
            ifsc_code=row.get("ifsc_code"),
            branch=row.get("branch"),
            status=row.get("status") or ACTIVE,
            created_on=_parse_date(row.get("created_on")),
            updated_on=_parse_date(row.get("updated_on")),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        return {
            "bank_name": self.bank_name,
            "holder_name": self.holder_name,
            "account_number": self.account_number,
            "ifsc_code": self.ifsc_code,
            "branch": self.branch,
            "status": self.status,
        }

    @property
    def label(self) -> str:
        """Display name used in pickers, e.g. 'HDFC - A. Kumar'."""
        return f"{self.bank_name} - {self.holder_name}"
