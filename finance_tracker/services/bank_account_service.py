# finance_tracker/services/bank_account_service.py
"""Business rules for bank accounts."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from finance_tracker.models.bank_account import BankAccount
from finance_tracker.models.fields import ACTIVE, STATUSES
from finance_tracker.services.record_service import (
    RecordService,
    choice,
    optional_text,
    required_text,
)


class BankAccountService(RecordService[BankAccount]):
    label = "Bank account"
    has_status = True

    def defaults(self) -> Dict[str, str]:
        return {
            "bank_name": "",
            "holder_name": "",
            "account_number": "",
            "ifsc_code": "",
            "branch": "",
            "status": ACTIVE,
        }

    def clean(self, values: Mapping[str, Any], row_id: int | None) -> Dict[str, Any]:
        ifsc = optional_text(values, "ifsc_code")
        return {
            "bank_name": required_text(values, "bank_name", "Bank name"),
            "holder_name": required_text(values, "holder_name", "Account holder name"),
            "account_number": optional_text(values, "account_number"),
            "ifsc_code": ifsc.upper() if ifsc else None,
            "branch": optional_text(values, "branch"),
            "status": choice(values, "status", STATUSES, "Status", ACTIVE),
        }

    def form_values(self, row: BankAccount) -> Dict[str, str]:
        return {
            "bank_name": row.bank_name,
            "holder_name": row.holder_name,
            "account_number": row.account_number or "",
            "ifsc_code": row.ifsc_code or "",
            "branch": row.branch or "",
            "status": row.status,
        }
