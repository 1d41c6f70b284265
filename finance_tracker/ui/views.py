# finance_tracker/ui/views.py
"""
What each records screen shows: table columns, form fields and labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from rich.text import Text

from finance_tracker.models.fields import INCOME, EXPENSE, ACTIVE, INACTIVE
from finance_tracker.tables import BANK_ACCOUNTS, CATEGORIES, PAYMENT_MODES, TRANSACTIONS
from finance_tracker.utils.formatters import (
    format_date,
    format_signed_amount,
    title_case,
    truncate_text,
)

UIConfig = Dict[str, Any]
Renderer = Callable[[Any, UIConfig], Union[str, Text]]


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    key: str
    label: str
    render: Renderer
    sortable: bool = True


@dataclass(frozen=True, slots=True)
class FieldSpec:
    key: str
    label: str
    kind: str = "text"          # text | choice | lookup
    required: bool = False
    placeholder: str = ""
    options: Tuple[Tuple[str, str], ...] = ()
    depends_on: Optional[str] = None   # lookup key becomes "<key>:<value of depends_on>"


@dataclass(frozen=True, slots=True)
class RecordView:
    table: str
    title: str
    singular: str
    columns: Tuple[ColumnSpec, ...]
    fields: Tuple[FieldSpec, ...]
    describe: Callable[[Any], str]
    has_status: bool = False
    needs_lookups: bool = False
    search_hint: str = "Search..."


def _attr(name: str) -> Renderer:
    return lambda row, ui: str(getattr(row, name) or "")


def _title(name: str) -> Renderer:
    return lambda row, ui: title_case(getattr(row, name))


def _date(name: str) -> Renderer:
    return lambda row, ui: format_date(getattr(row, name), ui.get("date_format", "%d %b %Y"))


def _amount(row: Any, ui: UIConfig) -> Text:
    text = format_signed_amount(row.amount, row.type, ui.get("currency_symbol", "₹"))
    return Text(text, style="red" if row.type == EXPENSE else "green", justify="right")


TYPE_OPTIONS = (("Expense", EXPENSE), ("Income", INCOME))
STATUS_OPTIONS = (("Active", ACTIVE), ("Inactive", INACTIVE))


CATEGORY_VIEW = RecordView(
    table=CATEGORIES,
    title="Categories",
    singular="category",
    columns=(
        ColumnSpec("name", "Name", _attr("name")),
        ColumnSpec("type", "Type", _title("type")),
        ColumnSpec("status", "Status", _title("status")),
        ColumnSpec("created_on", "Created", _date("created_on")),
    ),
    fields=(
        FieldSpec("name", "Name", required=True, placeholder="e.g. Groceries"),
        FieldSpec("type", "Type", kind="choice", required=True, options=TYPE_OPTIONS),
        FieldSpec("status", "Status", kind="choice", required=True, options=STATUS_OPTIONS),
    ),
    describe=lambda row: row.name,
    has_status=True,
    search_hint="Search categories by name...",
)

PAYMENT_MODE_VIEW = RecordView(
    table=PAYMENT_MODES,
    title="Payment Modes",
    singular="payment mode",
    columns=(
        ColumnSpec("mode", "Mode", _attr("mode")),
        ColumnSpec("created_on", "Created", _date("created_on")),
    ),
    fields=(FieldSpec("mode", "Mode", required=True, placeholder="e.g. UPI"),),
    describe=lambda row: row.mode,
    search_hint="Search payment modes...",
)

BANK_ACCOUNT_VIEW = RecordView(
    table=BANK_ACCOUNTS,
    title="Bank Accounts",
    singular="bank account",
    columns=(
        ColumnSpec("bank_name", "Bank", _attr("bank_name")),
        ColumnSpec("holder_name", "Holder", _attr("holder_name")),
        ColumnSpec("account_number", "Account No.", _attr("account_number"), sortable=False),
        ColumnSpec("ifsc_code", "IFSC", _attr("ifsc_code"), sortable=False),
        ColumnSpec("branch", "Branch", _attr("branch"), sortable=False),
        ColumnSpec("status", "Status", _title("status")),
    ),
    fields=(
        FieldSpec("bank_name", "Bank name", required=True),
        FieldSpec("holder_name", "Account holder", required=True),
        FieldSpec("account_number", "Account number"),
        FieldSpec("ifsc_code", "IFSC code"),
        FieldSpec("branch", "Branch"),
        FieldSpec("status", "Status", kind="choice", required=True, options=STATUS_OPTIONS),
    ),
    describe=lambda row: f"{row.bank_name} ({row.holder_name})",
    has_status=True,
    search_hint="Search by bank, holder, account number or status...",
)

TRANSACTION_COLUMNS = (
    ColumnSpec("transaction_date", "Date", _date("transaction_date")),
    ColumnSpec("type", "Type", _title("type")),
    ColumnSpec("category_name", "Category", _attr("category_name")),
    ColumnSpec("amount", "Amount", _amount),
    ColumnSpec("payment_mode", "Payment Mode", _attr("payment_mode")),
    ColumnSpec("bank_name", "Bank", _attr("bank_name")),
    ColumnSpec(
        "description",
        "Description",
        lambda row, ui: truncate_text(row.description, 40),
        sortable=False,
    ),
)

TRANSACTION_VIEW = RecordView(
    table=TRANSACTIONS,
    title="Transactions",
    singular="transaction",
    columns=TRANSACTION_COLUMNS,
    fields=(
        FieldSpec("transaction_date", "Date", required=True, placeholder="YYYY-MM-DD"),
        FieldSpec("type", "Type", kind="choice", required=True, options=TYPE_OPTIONS),
        FieldSpec("amount", "Amount", required=True, placeholder="0.00"),
        FieldSpec("category_id", "Category", kind="lookup", required=True, depends_on="type"),
        FieldSpec("payment_mode_id", "Payment mode", kind="lookup", required=True),
        FieldSpec("bank_account_id", "Bank account", kind="lookup"),
        FieldSpec("description", "Description"),
    ),
    describe=lambda row: f"{row.category_name or 'transaction'} on {row.transaction_date}",
    needs_lookups=True,
    search_hint="Search by description, category or bank...",
)

RECORD_VIEWS = {
    view.table: view
    for view in (TRANSACTION_VIEW, CATEGORY_VIEW, PAYMENT_MODE_VIEW, BANK_ACCOUNT_VIEW)
}
