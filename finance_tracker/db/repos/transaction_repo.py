# finance_tracker/db/repos/transaction_repo.py
"""
Repository for transactions. Reads are joined with categories, payment
modes and bank accounts so rows carry their display names.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict

from finance_tracker.db.repos.table_repo import TableRepo
from finance_tracker.models.transaction import Transaction


class TransactionRepo(TableRepo[Transaction]):
    table = "transactions"
    writable = (
        "transaction_date",
        "amount",
        "type",
        "category_id",
        "payment_mode_id",
        "bank_account_id",
        "description",
    )
    sortable = {
        "transaction_date": "t.transaction_date",
        "amount": "t.amount",
        "type": "t.type",
        "category_name": "c.name COLLATE NOCASE",
        "payment_mode": "p.mode COLLATE NOCASE",
        "bank_name": "b.bank_name COLLATE NOCASE",
        "created_on": "t.created_on",
    }
    searchable = {
        "description": "t.description",
        "category_name": "c.name",
        "bank_name": "b.bank_name",
        "payment_mode": "p.mode",
    }
    default_order = "t.transaction_date DESC, t.created_on DESC, t.id DESC"

    def _to_model(self, row: Dict[str, Any]) -> Transaction:
        return Transaction.from_sqlite(row)

    def _select_columns(self) -> str:
        return (
            "t.*, c.name AS category_name, p.mode AS payment_mode, b.bank_name AS bank_name"
        )

    def _from_clause(self) -> str:
        return (
            "transactions t"
            " JOIN categories c ON c.id = t.category_id"
            " JOIN payment_modes p ON p.id = t.payment_mode_id"
            " LEFT JOIN bank_details b ON b.id = t.bank_account_id"
        )

    def total_amount(self, txn_type: str, start: date, end: date) -> float:
        """Sum of `txn_type` amounts dated within [start, end]."""
        with self._db.locked():
            cursor = self._db.cursor()
            cursor.execute(
                "SELECT COALESCE(SUM(amount), 0) FROM transactions"
                " WHERE type = ? AND transaction_date BETWEEN ? AND ?",
                (txn_type, start.isoformat(), end.isoformat()),
            )
            return float(cursor.fetchone()[0])
