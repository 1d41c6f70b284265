# finance_tracker/services/report_service.py
"""
Dashboard figures: how many payment modes and categories exist, what was
spent this month, and the newest transactions to seed the dashboard table.
"""

from __future__ import annotations

import asyncio
import calendar
import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import List, Tuple

from finance_tracker.db.repos.category_repo import CategoryRepo
from finance_tracker.db.repos.payment_mode_repo import PaymentModeRepo
from finance_tracker.db.repos.transaction_repo import TransactionRepo
from finance_tracker.models.fields import EXPENSE
from finance_tracker.models.transaction import Transaction
from finance_tracker.services.sqlite_source import translate_error


@dataclass(frozen=True, slots=True)
class ReportSummary:
    payment_mode_count: int
    category_count: int
    month_expense_total: float
    month_start: date
    month_end: date


def month_bounds(day: date) -> Tuple[date, date]:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


class ReportService:
    """Read-only aggregates for the dashboard."""

    def __init__(
        self,
        transaction_repo: TransactionRepo,
        category_repo: CategoryRepo,
        payment_mode_repo: PaymentModeRepo,
    ) -> None:
        self._transactions = transaction_repo
        self._categories = category_repo
        self._payment_modes = payment_mode_repo

    def summary(self, today: date | None = None) -> ReportSummary:
        start, end = month_bounds(today or date.today())
        return ReportSummary(
            payment_mode_count=self._payment_modes.count(),
            category_count=self._categories.count(),
            month_expense_total=self._transactions.total_amount(EXPENSE, start, end),
            month_start=start,
            month_end=end,
        )

    def recent_transactions(self, limit: int = 10) -> Tuple[List[Transaction], int]:
        """Newest `limit` transactions and the overall count."""
        rows = self._transactions.list(offset=0, limit=limit)
        return rows, self._transactions.count()

    async def load(self, limit: int = 10, today: date | None = None) -> Tuple[ReportSummary, List[Transaction], int]:
        """Summary plus seed rows, computed off the event loop."""

        def _load():
            summary = self.summary(today)
            rows, total = self.recent_transactions(limit)
            return summary, rows, total

        try:
            return await asyncio.to_thread(_load)
        except sqlite3.Error as e:
            raise translate_error(e) from e
