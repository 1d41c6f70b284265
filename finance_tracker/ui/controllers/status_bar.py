# finance_tracker/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from typing import Optional

from textual.widgets import Static

from finance_tracker.controllers.table_controller import TableSnapshot, TableStatus


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    STATUS_TEXT = {
        TableStatus.IDLE: "",
        TableStatus.INITIAL_LOADING: "Loading…",
        TableStatus.PAGING: "Fetching…",
        TableStatus.READY: "",
    }

    def __init__(self, status_bar: Static, label: str = "Records") -> None:
        self._bar = status_bar
        self._label = label
        self._last_text = ""

    # ------------------------------------------------------------------ #
    # public helpers
    # ------------------------------------------------------------------ #

    @property
    def text(self) -> str:
        return self._last_text

    def render(self, snapshot: TableSnapshot, selected: Optional[str] = None) -> str:
        parts: list[str] = [
            f"{self._label}: {snapshot.total_count}",
            f"Page: {snapshot.current_page}/{snapshot.total_pages}",
            f"Per page: {snapshot.page_size}",
        ]

        if snapshot.sort is not None:
            parts.append(f"Sort: {snapshot.sort}")
        if snapshot.search_text:
            parts.append(f"Search: '{snapshot.search_text}'")
        if selected:
            parts.append(f"Selected: {selected}")

        activity = self.STATUS_TEXT[snapshot.status]
        if activity:
            parts.append(activity)

        return " | ".join(parts)

    def update(self, snapshot: TableSnapshot, selected: Optional[str] = None) -> None:
        """Refresh the whole status line."""
        self._last_text = self.render(snapshot, selected)
        self._bar.update(self._last_text)
