# finance_tracker/services/record_service.py
"""
Write-side use-cases shared by every record type.

A RecordService turns the raw values of an EditorSession into a clean
payload (raising ValidationError on bad input) and sends it to the data
source as a create or update. Subclasses only describe their fields.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Mapping, Optional, Sequence, TypeVar

from finance_tracker.errors import ValidationError
from finance_tracker.models.editor import EditorSession
from finance_tracker.services.data_source import MutationKind
from finance_tracker.services.sqlite_source import SQLiteDataSource
from simple_logger import Slogger

T = TypeVar("T")


# ---------------------------------------------------------------------- #
# field helpers
# ---------------------------------------------------------------------- #

def _text(values: Mapping[str, Any], key: str) -> str:
    value = values.get(key)
    return "" if value is None else str(value).strip()


def required_text(values: Mapping[str, Any], key: str, label: str) -> str:
    text = _text(values, key)
    if not text:
        raise ValidationError(f"{label} is required", key)
    return text


def optional_text(values: Mapping[str, Any], key: str) -> Optional[str]:
    return _text(values, key) or None


def choice(values: Mapping[str, Any], key: str, options: Sequence[str], label: str, default: str) -> str:
    text = _text(values, key).lower() or default
    if text not in options:
        raise ValidationError(f"{label} must be one of: {', '.join(options)}", key)
    return text


def optional_id(values: Mapping[str, Any], key: str, label: str) -> Optional[int]:
    text = _text(values, key)
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise ValidationError(f"{label} is not a valid selection", key)


def required_id(values: Mapping[str, Any], key: str, label: str) -> int:
    row_id = optional_id(values, key, label)
    if row_id is None:
        raise ValidationError(f"{label} is required", key)
    return row_id


class RecordService(Generic[T]):
    """Validates form input and applies it through a data source."""

    label = "Record"
    has_status = False

    def __init__(self, source: SQLiteDataSource[T]) -> None:
        self._source = source
        self._repo = source.repo

    # ------------------------------------------------------------------ #
    # hooks
    # ------------------------------------------------------------------ #

    def clean(self, values: Mapping[str, Any], row_id: int | None) -> Dict[str, Any]:
        """Return the column payload for `values`; may query the repository."""
        raise NotImplementedError("Subclasses must implement this method")

    def form_values(self, row: T) -> Dict[str, str]:
        """Form input that reproduces `row`, for an editing session."""
        raise NotImplementedError("Subclasses must implement this method")

    def defaults(self) -> Dict[str, str]:
        return {}

    # ------------------------------------------------------------------ #
    # use-cases
    # ------------------------------------------------------------------ #

    def new_session(self) -> EditorSession:
        return EditorSession.creating(self.defaults())

    def edit_session(self, row: T) -> EditorSession:
        return EditorSession.editing(row.id, self.form_values(row))

    async def save(self, session: EditorSession) -> T:
        """Create or update from the session; raises ValidationError on bad input."""
        if not session.is_open:
            raise ValidationError("the editor is closed")

        payload = await self._source.call(self.clean, dict(session.values), session.row_id)

        if session.is_editing:
            payload["id"] = session.row_id
            kind = MutationKind.UPDATE
        else:
            kind = MutationKind.CREATE

        stored = await self._source.mutate(kind, payload)
        Slogger.info(f"{self.label} saved", {"mode": session.mode.value, "id": getattr(stored, "id", None)})
        return stored

    async def delete(self, row_id: int) -> bool:
        return await self._source.mutate(MutationKind.DELETE, {"id": row_id})

    async def toggle_status(self, row: T) -> T:
        if not self.has_status:
            raise ValidationError(f"{self.label} has no status to toggle")
        return await self._source.mutate(MutationKind.STATUS_TOGGLE, {"id": row.id})

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _ensure_unique(self, name: str, row_id: int | None, key: str) -> None:
        if self._repo.find_by_name(name, exclude_id=row_id) is not None:
            raise ValidationError(f"{self.label} '{name}' already exists", key)
