# finance_tracker/db/repos/payment_mode_repo.py
"""
Repository for payment modes.
"""

from __future__ import annotations

from typing import Any, Dict, List

from finance_tracker.db.repos.table_repo import TableRepo
from finance_tracker.models.payment_mode import PaymentMode


class PaymentModeRepo(TableRepo[PaymentMode]):
    table = "payment_modes"
    writable = ("mode",)
    sortable = {
        "mode": "t.mode COLLATE NOCASE",
        "created_on": "t.created_on",
    }
    searchable = {"mode": "t.mode"}
    name_field = "mode"

    def _to_model(self, row: Dict[str, Any]) -> PaymentMode:
        return PaymentMode.from_sqlite(row)

    def all_by_name(self) -> List[PaymentMode]:
        with self._db.locked():
            cursor = self._db.cursor()
            cursor.execute("SELECT * FROM payment_modes ORDER BY mode COLLATE NOCASE")
            rows = cursor.fetchall()
        return [PaymentMode.from_sqlite(dict(row)) for row in rows]
