# finance_tracker/tables.py
"""
TableConfig for every list in the app.

Page sizes come from the `ui` section of the configuration; what can be
searched and sorted is fixed per table.
"""

from __future__ import annotations

from typing import Any, Dict

from finance_tracker.controllers.table_controller import DEFAULT_PAGE_SIZE_OPTIONS, TableConfig

CATEGORIES = "categories"
PAYMENT_MODES = "payment_modes"
BANK_ACCOUNTS = "bank_accounts"
TRANSACTIONS = "transactions"
RECENT_TRANSACTIONS = "recent_transactions"

_FIELDS = {
    CATEGORIES: {
        "searchable_fields": ("name",),
        "sortable_fields": ("name", "type", "status", "created_on"),
    },
    PAYMENT_MODES: {
        "searchable_fields": ("mode",),
        "sortable_fields": ("mode", "created_on"),
    },
    BANK_ACCOUNTS: {
        "searchable_fields": ("bank_name", "holder_name", "account_number", "status"),
        "sortable_fields": ("bank_name", "holder_name", "status"),
    },
    TRANSACTIONS: {
        "searchable_fields": ("description", "category_name", "bank_name"),
        "sortable_fields": (
            "transaction_date",
            "amount",
            "type",
            "category_name",
            "payment_mode",
            "bank_name",
        ),
    },
}
# The dashboard table pages through the same rows as the transactions list.
_FIELDS[RECENT_TRANSACTIONS] = _FIELDS[TRANSACTIONS]


def table_config(name: str, config: Dict[str, Any]) -> TableConfig:
    """Build the TableConfig for `name` using the app configuration."""
    ui = config.get("ui", {})
    options = tuple(ui.get("page_size_options") or DEFAULT_PAGE_SIZE_OPTIONS)
    return TableConfig(
        name=name,
        page_size_options=options,
        default_page_size=ui.get("per_page", options[0]),
        **_FIELDS[name],
    )
