"""Finance Tracker data models."""

from finance_tracker.models.bank_account import BankAccount
from finance_tracker.models.category import Category
from finance_tracker.models.editor import EditorMode, EditorSession
from finance_tracker.models.pagination import (
    PageRequest,
    PageResult,
    SortDirection,
    SortSpec,
)
from finance_tracker.models.payment_mode import PaymentMode
from finance_tracker.models.transaction import Transaction

__all__ = [
    "BankAccount",
    "Category",
    "EditorMode",
    "EditorSession",
    "PageRequest",
    "PageResult",
    "PaymentMode",
    "SortDirection",
    "SortSpec",
    "Transaction",
]
