"""
DataTable for one page of records, with click-to-sort headers
"""

from typing import Any, Dict, Optional, Sequence

from textual.message import Message
from textual.widgets import DataTable

from finance_tracker.models.pagination import SortDirection, SortSpec
from finance_tracker.ui.views import ColumnSpec


class RecordTable(DataTable):
    """
    Renders rows through ColumnSpecs; clicking a sortable header asks the
    screen to change the sort
    """

    class SortRequested(Message):
        """A sortable column header was clicked"""
        def __init__(self, field: str) -> None:
            super().__init__()
            self.field = field

    class RecordChosen(Message):
        """Enter pressed on a row"""
        def __init__(self, row: Any) -> None:
            super().__init__()
            self.row = row

    def __init__(
        self,
        columns: Sequence[ColumnSpec],
        ui_config: Dict[str, Any],
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._specs = tuple(columns)
        self._ui = ui_config
        self._rows: Sequence[Any] = ()
        self._sort: Optional[SortSpec] = None

    def on_mount(self) -> None:
        self.add_class("records-table")
        for spec in self._specs:
            self.add_column(self._header(spec), key=spec.key)

    # ------------------------------------------------------------------ #

    def _header(self, spec: ColumnSpec) -> str:
        if self._sort is not None and self._sort.field == spec.key:
            arrow = "▲" if self._sort.direction is SortDirection.ASC else "▼"
            return f"{spec.label} {arrow}"
        return spec.label

    def show(self, rows: Sequence[Any], sort: Optional[SortSpec]) -> None:
        """Replace the table contents, keeping the cursor row where possible."""
        cursor_row = self.cursor_row

        if sort != self._sort:
            self._sort = sort
            # Header labels carry the sort arrow, so the columns are rebuilt.
            self.clear(columns=True)
            for spec in self._specs:
                self.add_column(self._header(spec), key=spec.key)
        else:
            self.clear()

        self._rows = tuple(rows)
        for idx, row in enumerate(self._rows):
            self.add_row(*(spec.render(row, self._ui) for spec in self._specs), key=str(idx))

        if self._rows:
            self.move_cursor(row=min(max(cursor_row, 0), len(self._rows) - 1))

    def selected_row(self) -> Optional[Any]:
        """The record under the cursor, if any."""
        if not self._rows:
            return None
        idx = self.cursor_row
        if 0 <= idx < len(self._rows):
            return self._rows[idx]
        return None

    # ------------------------------------------------------------------ #

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        event.stop()
        field = event.column_key.value
        spec = next((s for s in self._specs if s.key == field), None)
        if spec is not None and spec.sortable:
            self.post_message(self.SortRequested(field))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        row = self.selected_row()
        if row is not None:
            self.post_message(self.RecordChosen(row))
