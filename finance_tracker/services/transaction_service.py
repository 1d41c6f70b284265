# finance_tracker/services/transaction_service.py
"""Business rules for transactions."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Tuple

from finance_tracker.db.repos.bank_account_repo import BankAccountRepo
from finance_tracker.db.repos.category_repo import CategoryRepo
from finance_tracker.db.repos.payment_mode_repo import PaymentModeRepo
from finance_tracker.errors import ValidationError
from finance_tracker.models.fields import ACTIVE, EXPENSE, TRANSACTION_TYPES
from finance_tracker.models.transaction import Transaction
from finance_tracker.services.record_service import (
    RecordService,
    choice,
    optional_id,
    optional_text,
    required_id,
    required_text,
)
from finance_tracker.services.sqlite_source import SQLiteDataSource

Option = Tuple[str, str]


class TransactionService(RecordService[Transaction]):
    label = "Transaction"

    def __init__(
        self,
        source: SQLiteDataSource[Transaction],
        category_repo: CategoryRepo,
        payment_mode_repo: PaymentModeRepo,
        bank_account_repo: BankAccountRepo,
    ) -> None:
        super().__init__(source)
        self._categories = category_repo
        self._payment_modes = payment_mode_repo
        self._banks = bank_account_repo

    def defaults(self) -> Dict[str, str]:
        return {
            "transaction_date": date.today().isoformat(),
            "amount": "",
            "type": EXPENSE,
            "category_id": "",
            "payment_mode_id": "",
            "bank_account_id": "",
            "description": "",
        }

    def clean(self, values: Mapping[str, Any], row_id: int | None) -> Dict[str, Any]:
        raw_date = required_text(values, "transaction_date", "Date")
        try:
            txn_date = date.fromisoformat(raw_date)
        except ValueError:
            raise ValidationError("Date must look like YYYY-MM-DD", "transaction_date")

        raw_amount = required_text(values, "amount", "Amount")
        try:
            amount = float(raw_amount.replace(",", ""))
        except ValueError:
            raise ValidationError("Amount must be a number", "amount")
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero", "amount")

        txn_type = choice(values, "type", TRANSACTION_TYPES, "Type", EXPENSE)

        category_id = required_id(values, "category_id", "Category")
        category = self._categories.by_id(category_id)
        if category is None:
            raise ValidationError("Category does not exist", "category_id")
        if category.type != txn_type:
            raise ValidationError(
                f"Category '{category.name}' is for {category.type}, not {txn_type}", "category_id"
            )
        if category.status != ACTIVE and (row_id is None or self._changed(row_id, "category_id", category_id)):
            raise ValidationError(f"Category '{category.name}' is inactive", "category_id")

        payment_mode_id = required_id(values, "payment_mode_id", "Payment mode")
        if self._payment_modes.by_id(payment_mode_id) is None:
            raise ValidationError("Payment mode does not exist", "payment_mode_id")

        bank_account_id = optional_id(values, "bank_account_id", "Bank account")
        if bank_account_id is not None and self._banks.by_id(bank_account_id) is None:
            raise ValidationError("Bank account does not exist", "bank_account_id")

        return {
            "transaction_date": txn_date.isoformat(),
            "amount": round(amount, 2),
            "type": txn_type,
            "category_id": category_id,
            "payment_mode_id": payment_mode_id,
            "bank_account_id": bank_account_id,
            "description": optional_text(values, "description"),
        }

    def form_values(self, row: Transaction) -> Dict[str, str]:
        return {
            "transaction_date": row.transaction_date.isoformat() if row.transaction_date else "",
            "amount": f"{row.amount:.2f}",
            "type": row.type,
            "category_id": str(row.category_id or ""),
            "payment_mode_id": str(row.payment_mode_id or ""),
            "bank_account_id": str(row.bank_account_id or ""),
            "description": row.description or "",
        }

    # ------------------------------------------------------------------ #
    # form lookups
    # ------------------------------------------------------------------ #

    def _lookup_options_sync(self) -> Dict[str, List[Option]]:
        options: Dict[str, List[Option]] = {}
        for txn_type in TRANSACTION_TYPES:
            options[f"category_id:{txn_type}"] = [
                (c.name, str(c.id)) for c in self._categories.active_for_type(txn_type)
            ]
        options["payment_mode_id"] = [(p.mode, str(p.id)) for p in self._payment_modes.all_by_name()]
        options["bank_account_id"] = [(b.label, str(b.id)) for b in self._banks.active_by_name()]
        return options

    async def lookup_options(self) -> Dict[str, List[Option]]:
        """
        Picker options for the transaction form.

        Categories are keyed per type (`category_id:income`,
        `category_id:expense`) and list only active ones.
        """
        return await self._source.call(self._lookup_options_sync)

    def _changed(self, row_id: int, key: str, value: Any) -> bool:
        current = self._repo.by_id(row_id)
        return current is None or getattr(current, key) != value
