# finance_tracker/services/payment_mode_service.py
"""Business rules for payment modes."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from finance_tracker.models.payment_mode import PaymentMode
from finance_tracker.services.record_service import RecordService, required_text


class PaymentModeService(RecordService[PaymentMode]):
    label = "Payment mode"

    def defaults(self) -> Dict[str, str]:
        return {"mode": ""}

    def clean(self, values: Mapping[str, Any], row_id: int | None) -> Dict[str, Any]:
        mode = required_text(values, "mode", "Payment mode")
        self._ensure_unique(mode, row_id, "mode")
        return {"mode": mode}

    def form_values(self, row: PaymentMode) -> Dict[str, str]:
        return {"mode": row.mode}
