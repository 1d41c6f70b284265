# finance_tracker/db/repos/bank_account_repo.py
"""
Repository for bank accounts (stored in `bank_details`).
"""

from __future__ import annotations

from typing import Any, Dict, List

from finance_tracker.db.repos.table_repo import TableRepo
from finance_tracker.models.bank_account import BankAccount
from finance_tracker.models.fields import ACTIVE


class BankAccountRepo(TableRepo[BankAccount]):
    table = "bank_details"
    writable = ("bank_name", "holder_name", "account_number", "ifsc_code", "branch", "status")
    sortable = {
        "bank_name": "t.bank_name COLLATE NOCASE",
        "holder_name": "t.holder_name COLLATE NOCASE",
        "status": "t.status",
        "created_on": "t.created_on",
    }
    searchable = {
        "bank_name": "t.bank_name",
        "holder_name": "t.holder_name",
        "account_number": "t.account_number",
        "status": "t.status",
    }
    name_field = "bank_name"

    def _to_model(self, row: Dict[str, Any]) -> BankAccount:
        return BankAccount.from_sqlite(row)

    def active_by_name(self) -> List[BankAccount]:
        with self._db.locked():
            cursor = self._db.cursor()
            cursor.execute(
                "SELECT * FROM bank_details WHERE status = ? ORDER BY bank_name COLLATE NOCASE",
                (ACTIVE,),
            )
            rows = cursor.fetchall()
        return [BankAccount.from_sqlite(dict(row)) for row in rows]
