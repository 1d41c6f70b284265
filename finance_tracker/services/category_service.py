# finance_tracker/services/category_service.py
"""Business rules for categories."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from finance_tracker.models.category import Category
from finance_tracker.models.fields import ACTIVE, EXPENSE, STATUSES, TRANSACTION_TYPES
from finance_tracker.services.record_service import RecordService, choice, required_text


class CategoryService(RecordService[Category]):
    label = "Category"
    has_status = True

    def defaults(self) -> Dict[str, str]:
        return {"name": "", "type": EXPENSE, "status": ACTIVE}

    def clean(self, values: Mapping[str, Any], row_id: int | None) -> Dict[str, Any]:
        name = required_text(values, "name", "Category name")
        self._ensure_unique(name, row_id, "name")
        return {
            "name": name,
            "type": choice(values, "type", TRANSACTION_TYPES, "Type", EXPENSE),
            "status": choice(values, "status", STATUSES, "Status", ACTIVE),
        }

    def form_values(self, row: Category) -> Dict[str, str]:
        return {"name": row.name, "type": row.type, "status": row.status}
