# finance_tracker/ui/screens/records_screen.py
"""
List screen for one record type: search, sortable table, pagination and
add / edit / delete / status actions.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Static

from finance_tracker.controllers.table_controller import PagedTableController
from finance_tracker.errors import FinanceTrackerError
from finance_tracker.models.editor import EditorSession
from finance_tracker.services.record_service import RecordService
from finance_tracker.ui.controllers.status_bar import StatusBarController
from finance_tracker.ui.mixins.paged_table_mixin import PagedTableMixin
from finance_tracker.ui.screens.record_form_screen import RecordFormScreen
from finance_tracker.ui.views import RecordView
from finance_tracker.ui.widgets.confirmation_modal import ConfirmationModal
from finance_tracker.ui.widgets.pagination import Pagination
from finance_tracker.ui.widgets.record_table import RecordTable
from finance_tracker.ui.widgets.search_bar import SearchBar
from simple_logger import Slogger


class RecordsScreen(PagedTableMixin, Screen):
    """Paged list of one record type."""

    BINDINGS = [
        Binding("a", "add_record", "Add", show=True),
        Binding("e", "edit_record", "Edit", show=True),
        Binding("delete", "delete_record", "Delete", show=True),
        Binding("t", "toggle_status", "Toggle Status", show=True),
        Binding("f", "focus_search", "Search", show=True),
        Binding("r", "refresh", "Refresh", show=False),
        Binding("]", "next_page", "Next Page", show=False),
        Binding("[", "prev_page", "Prev Page", show=False),
    ]

    def __init__(
        self,
        view: RecordView,
        controller: PagedTableController,
        service: RecordService,
        config: Dict[str, Any],
        *,
        name: Optional[str] = None,
        id: Optional[str] = None,
    ) -> None:
        super().__init__(name=name, id=id)
        self.record_view = view
        self.controller = controller
        self.service = service
        self.config = config
        self._started = False

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Vertical(id="content-area"):
            yield Label(self.record_view.title, classes="screen-title")
            yield SearchBar(self.record_view.search_hint, id="search-bar")
            yield RecordTable(self.record_view.columns, self.config.get("ui", {}), id="records-table")
            yield Pagination(
                self.controller.config.page_size_options,
                self.controller.snapshot.page_size,
                id="pagination",
            )

        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(RecordTable).styles.height = "1fr"
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static), self.record_view.title)
        self.attach_controller()

    def on_screen_resume(self) -> None:
        # Other screens may have changed rows this table joins against.
        if not self._started:
            self._started = True
            self.run_table_op(self.controller.initialize())
        else:
            self.run_table_op(self.controller.refresh())

    def on_unmount(self) -> None:
        self.detach_controller()

    def selected_label(self) -> Optional[str]:
        row = self.query_one(RecordTable).selected_row()
        return self.record_view.describe(row) if row is not None else None

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def on_search_bar_submitted(self, event: SearchBar.Submitted) -> None:
        self.run_table_op(self.controller.set_search_text(event.query))

    def on_record_table_record_chosen(self, event: RecordTable.RecordChosen) -> None:
        self._open_editor(self.service.edit_session(event.row))

    def on_data_table_row_highlighted(self, event) -> None:
        if self.status_controller is not None:
            self.status_controller.update(self.controller.snapshot, self.selected_label())

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #

    def action_focus_search(self) -> None:
        self.query_one(SearchBar).focus_input()

    def action_add_record(self) -> None:
        self._open_editor(self.service.new_session())

    def action_edit_record(self) -> None:
        row = self._selected_or_warn()
        if row is not None:
            self._open_editor(self.service.edit_session(row))

    def action_delete_record(self) -> None:
        row = self._selected_or_warn()
        if row is None:
            return

        def on_answer(confirmed: bool | None) -> None:
            if confirmed:
                self.run_worker(self._delete(row), group="mutation", exit_on_error=False)

        self.app.push_screen(
            ConfirmationModal(
                f"Delete {self.record_view.singular}",
                f"Delete '{self.record_view.describe(row)}'? This cannot be undone.",
            ),
            on_answer,
        )

    def action_toggle_status(self) -> None:
        if not self.record_view.has_status:
            self.notify(f"{self.record_view.title} have no status", severity="warning", timeout=3)
            return
        row = self._selected_or_warn()
        if row is not None:
            self.run_worker(self._toggle_status(row), group="mutation", exit_on_error=False)

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def _selected_or_warn(self):
        row = self.query_one(RecordTable).selected_row()
        if row is None:
            self.notify(f"No {self.record_view.singular} selected", severity="warning", timeout=3)
        return row

    def _open_editor(self, session: EditorSession) -> None:
        self.run_worker(self._show_form(session), group="mutation", exit_on_error=False)

    async def _show_form(self, session: EditorSession) -> None:
        lookups = None
        if self.record_view.needs_lookups:
            try:
                lookups = await self.service.lookup_options()
            except FinanceTrackerError as e:
                self.notify(f"Could not load form options: {e}", severity="error", timeout=5)
                return

        verb = "Edit" if session.is_editing else "Add"
        self.app.push_screen(
            RecordFormScreen(
                f"{verb} {self.record_view.singular}",
                self.record_view.fields,
                session,
                submit=self._submit,
                lookups=lookups,
            )
        )

    async def _submit(self, session: EditorSession) -> None:
        stored = await self.service.save(session)
        verb = "updated" if session.is_editing else "added"
        self.notify(f"{self.record_view.singular.capitalize()} '{self.record_view.describe(stored)}' {verb}", timeout=3)
        await self.controller.notify_mutation()

    async def _delete(self, row) -> None:
        context = {"screen": "RecordsScreen", "table": self.record_view.table, "id": row.id}
        try:
            await self.service.delete(row.id)
        except FinanceTrackerError as e:
            Slogger.exception(e, "Delete failed", context)
            self.notify(f"Could not delete: {e}", severity="error", timeout=5)
            return
        Slogger.info(f"Deleted {self.record_view.singular}", context)
        self.notify(f"Deleted '{self.record_view.describe(row)}'", timeout=3)
        await self.controller.notify_mutation()

    async def _toggle_status(self, row) -> None:
        try:
            stored = await self.service.toggle_status(row)
        except FinanceTrackerError as e:
            self.notify(f"Could not change status: {e}", severity="error", timeout=5)
            return
        self.notify(f"'{self.record_view.describe(stored)}' is now {stored.status}", timeout=3)
        await self.controller.notify_mutation()
