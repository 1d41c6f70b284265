"""Create/edit form state owned by a records view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class EditorMode(Enum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


@dataclass(frozen=True, slots=True)
class EditorSession:
    """
    Immutable snapshot of the record form.

    `row_id` is set only while editing; `values` holds the raw form input
    keyed by field name.
    """

    mode: EditorMode = EditorMode.CLOSED
    row_id: Optional[int] = None
    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def closed(cls) -> "EditorSession":
        return cls()

    @classmethod
    def creating(cls, defaults: Mapping[str, Any] | None = None) -> "EditorSession":
        return cls(EditorMode.CREATING, None, MappingProxyType(dict(defaults or {})))

    @classmethod
    def editing(cls, row_id: int, values: Mapping[str, Any]) -> "EditorSession":
        if row_id is None:
            raise ValueError("editing session needs a row id")
        return cls(EditorMode.EDITING, row_id, MappingProxyType(dict(values)))

    # ------------- helpers -------------
    @property
    def is_open(self) -> bool:
        return self.mode is not EditorMode.CLOSED

    @property
    def is_editing(self) -> bool:
        return self.mode is EditorMode.EDITING

    def with_value(self, key: str, value: Any) -> "EditorSession":
        if not self.is_open:
            raise ValueError("cannot change values of a closed editor")
        values = dict(self.values)
        values[key] = value
        return EditorSession(self.mode, self.row_id, MappingProxyType(values))

    def with_values(self, values: Mapping[str, Any]) -> "EditorSession":
        session = self
        for key, value in values.items():
            session = session.with_value(key, value)
        return session

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)
