"""Domain model for a Transaction entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from finance_tracker.models.fields import EXPENSE, _parse_date, _parse_day


@dataclass(frozen=True, slots=True)
class Transaction:
    id: Optional[int]
    transaction_date: Optional[date]
    amount: float
    type: str = EXPENSE
    category_id: Optional[int] = None
    payment_mode_id: Optional[int] = None
    bank_account_id: Optional[int] = None
    description: Optional[str] = None
    created_on: Optional[datetime] = None
    # joined, read-only
    category_name: Optional[str] = None
    payment_mode: Optional[str] = None
    bank_name: Optional[str] = None

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Transaction":
        """Build a `Transaction` from a joined SQLite row (dict)."""
        return cls(
            id=row.get("id"),
            transaction_date=_parse_day(row.get("transaction_date")),
            amount=float(row.get("amount") or 0),
            type=row.get("type") or EXPENSE,
            category_id=row.get("category_id"),
            payment_mode_id=row.get("payment_mode_id"),
            bank_account_id=row.get("bank_account_id"),
            description=row.get("description"),
            created_on=_parse_date(row.get("created_on")),
            category_name=row.get("category_name"),
            payment_mode=row.get("payment_mode"),
            bank_name=row.get("bank_name"),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        """Convert to SQLite-ready dict (joined fields are not stored)."""
        return {
            "transaction_date": self.transaction_date.isoformat() if self.transaction_date else None,
            "amount": self.amount,
            "type": self.type,
            "category_id": self.category_id,
            "payment_mode_id": self.payment_mode_id,
            "bank_account_id": self.bank_account_id,
            "description": self.description,
        }
