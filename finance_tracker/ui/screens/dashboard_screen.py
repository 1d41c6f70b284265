# finance_tracker/ui/screens/dashboard_screen.py
"""
Dashboard: summary cards plus a paged table of the latest transactions.
The first page of that table comes with the summary, so the controller is
seeded instead of fetching it again.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Static

from finance_tracker.controllers.table_controller import PagedTableController
from finance_tracker.errors import FinanceTrackerError
from finance_tracker.services.report_service import ReportService, ReportSummary
from finance_tracker.ui.controllers.status_bar import StatusBarController
from finance_tracker.ui.mixins.paged_table_mixin import PagedTableMixin
from finance_tracker.ui.views import TRANSACTION_COLUMNS
from finance_tracker.ui.widgets.pagination import Pagination
from finance_tracker.ui.widgets.record_table import RecordTable
from finance_tracker.utils.formatters import format_amount, format_date
from simple_logger import Slogger


class DashboardScreen(PagedTableMixin, Screen):
    """Summary figures and recent transactions."""

    DEFAULT_CSS = """
    #summary-cards {
        height: 5;
    }

    .summary-card {
        width: 1fr;
        height: 5;
        border: round $primary;
        padding: 0 1;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh", show=True),
        Binding("]", "next_page", "Next Page", show=False),
        Binding("[", "prev_page", "Prev Page", show=False),
    ]

    def __init__(
        self,
        report_service: ReportService,
        controller: PagedTableController,
        config: Dict[str, Any],
        *,
        name: Optional[str] = None,
        id: Optional[str] = None,
    ) -> None:
        super().__init__(name=name, id=id)
        self.report_service = report_service
        self.controller = controller
        self.config = config
        self._started = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Vertical(id="content-area"):
            yield Label("Dashboard", classes="screen-title")
            with Horizontal(id="summary-cards"):
                yield Static("Payment modes\n-", id="card-payment-modes", classes="summary-card")
                yield Static("Categories\n-", id="card-categories", classes="summary-card")
                yield Static("Spent this month\n-", id="card-month-expense", classes="summary-card")
            yield Label("Recent transactions", classes="section-title")
            yield RecordTable(TRANSACTION_COLUMNS, self.config.get("ui", {}), id="recent-table")
            yield Pagination(
                self.controller.config.page_size_options,
                self.controller.snapshot.page_size,
                id="pagination",
            )

        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(RecordTable).styles.height = "1fr"
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static), "Transactions")
        self.attach_controller()

    def on_screen_resume(self) -> None:
        self.run_worker(self.load_dashboard(), group="dashboard", exit_on_error=False)

    def on_unmount(self) -> None:
        self.detach_controller()

    def action_refresh(self) -> None:
        self.run_worker(self.load_dashboard(), group="dashboard", exit_on_error=False)

    # ------------------------------------------------------------------ #

    async def load_dashboard(self) -> None:
        try:
            summary, rows, total = await self.report_service.load(
                limit=self.controller.snapshot.page_size
            )
        except FinanceTrackerError as e:
            Slogger.exception(e, "Loading dashboard failed", {"screen": "DashboardScreen"})
            self.notify(f"Could not load dashboard: {e}", severity="error", timeout=5)
            return

        self.show_summary(summary)

        if not self._started:
            self._started = True
            await self.controller.initialize(rows, total)
        else:
            await self.controller.refresh()

    def show_summary(self, summary: ReportSummary) -> None:
        currency = self.config.get("ui", {}).get("currency_symbol", "₹")
        fmt = self.config.get("ui", {}).get("date_format", "%d %b %Y")
        self.query_one("#card-payment-modes", Static).update(
            f"Payment modes\n[b]{summary.payment_mode_count}[/b]"
        )
        self.query_one("#card-categories", Static).update(
            f"Categories\n[b]{summary.category_count}[/b]"
        )
        self.query_one("#card-month-expense", Static).update(
            f"Spent {format_date(summary.month_start, fmt)} - {format_date(summary.month_end, fmt)}\n"
            f"[b]{format_amount(summary.month_expense_total, currency)}[/b]"
        )
