# finance_tracker/ui/mixins/paged_table_mixin.py

from typing import Optional

from finance_tracker.controllers.table_controller import (
    PagedTableController,
    TableSnapshot,
    TableStatus,
)
from finance_tracker.errors import FinanceTrackerError, ValidationError
from finance_tracker.ui.controllers.status_bar import StatusBarController
from finance_tracker.ui.widgets.pagination import Pagination
from finance_tracker.ui.widgets.record_table import RecordTable
from simple_logger import Slogger


class PagedTableMixin:
    """Wires a RecordTable, Pagination and status bar to a PagedTableController"""

    controller: PagedTableController
    status_controller: Optional[StatusBarController] = None

    def attach_controller(self) -> None:
        """Subscribe to the controller and render its current state."""
        self.controller.subscribe(self.render_snapshot)
        self.controller.on_error(self.show_table_error)
        self.render_snapshot(self.controller.snapshot)

    def detach_controller(self) -> None:
        self.controller.close()

    def run_table_op(self, op) -> None:
        """Schedule a controller coroutine; the controller reports its own errors."""
        self.run_worker(op, group="table", exit_on_error=False)

    # ------------------------------------------------------------------ #
    # rendering
    # ------------------------------------------------------------------ #

    def render_snapshot(self, snapshot: TableSnapshot) -> None:
        table = self.query_one(RecordTable)
        table.show(snapshot.rows, snapshot.sort)
        table.loading = snapshot.status is TableStatus.INITIAL_LOADING

        self.query_one(Pagination).update_pages(
            snapshot.current_page,
            snapshot.total_pages,
            snapshot.page_size,
            busy=snapshot.is_busy,
        )

        if self.status_controller is not None:
            self.status_controller.update(snapshot, self.selected_label())

    def selected_label(self) -> Optional[str]:
        return None

    def show_table_error(self, error: FinanceTrackerError) -> None:
        if isinstance(error, ValidationError):
            self.notify(str(error), severity="warning", timeout=3)
            return
        Slogger.error(f"Table error: {error}", {"table": self.controller.config.name})
        self.notify(f"Could not load data: {error}", title="Error", severity="error", timeout=5)

    # ------------------------------------------------------------------ #
    # event handlers
    # ------------------------------------------------------------------ #

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        self.run_table_op(self.controller.go_to_page(event.page))

    def on_pagination_page_size_changed(self, event: Pagination.PageSizeChanged) -> None:
        self.run_table_op(self.controller.change_page_size(event.size))

    def on_record_table_sort_requested(self, event: RecordTable.SortRequested) -> None:
        self.run_table_op(self.controller.toggle_sort(event.field))

    def action_next_page(self) -> None:
        snapshot = self.controller.snapshot
        if snapshot.has_next():
            self.run_table_op(self.controller.go_to_page(snapshot.current_page + 1))

    def action_prev_page(self) -> None:
        snapshot = self.controller.snapshot
        if snapshot.has_prev():
            self.run_table_op(self.controller.go_to_page(snapshot.current_page - 1))

    def action_refresh(self) -> None:
        self.run_table_op(self.controller.refresh())
