"""
Main Textual application class for the Finance Tracker
"""

from __future__ import annotations

from typing import Any, Dict

from textual.app import App
from textual.binding import Binding

from finance_tracker.di import Container, build_container
from finance_tracker.tables import (
    BANK_ACCOUNTS,
    CATEGORIES,
    PAYMENT_MODES,
    RECENT_TRANSACTIONS,
    TRANSACTIONS,
)
from finance_tracker.ui.screens.dashboard_screen import DashboardScreen
from finance_tracker.ui.screens.records_screen import RecordsScreen
from finance_tracker.ui.views import RECORD_VIEWS
from simple_logger import Slogger


class FinanceTrackerApp(App):
    """Terminal bookkeeping for categories, payment modes, banks and transactions."""

    TITLE = "Finance Tracker"

    CSS = """
    #content-area {
        height: 1fr;
        padding: 0 1;
    }

    .screen-title, .section-title {
        text-style: bold;
        margin: 1 0 0 0;
    }

    #status-bar {
        height: 1;
        background: $panel;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("1", "show('dashboard')", "Dashboard", show=True),
        Binding("2", "show('transactions')", "Transactions", show=True),
        Binding("3", "show('categories')", "Categories", show=True),
        Binding("4", "show('payment_modes')", "Payment Modes", show=True),
        Binding("5", "show('bank_accounts')", "Banks", show=True),
    ]

    SERVICES = {
        TRANSACTIONS: "transaction_service",
        CATEGORIES: "category_service",
        PAYMENT_MODES: "payment_mode_service",
        BANK_ACCOUNTS: "bank_account_service",
    }

    # ------------------------------------------------------------------ #
    # init / mount
    # ------------------------------------------------------------------ #

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__()
        self.config = config
        self.container: Container = build_container(config)

    def on_mount(self) -> None:
        self.install_screen(
            DashboardScreen(
                self.container.report_service,
                self.container.table_controller(RECENT_TRANSACTIONS),
                self.config,
            ),
            name="dashboard",
        )
        for table, service_attr in self.SERVICES.items():
            self.install_screen(
                RecordsScreen(
                    RECORD_VIEWS[table],
                    self.container.table_controller(table),
                    getattr(self.container, service_attr),
                    self.config,
                ),
                name=table,
            )

        Slogger.info("Finance Tracker UI mounted")
        self.push_screen("dashboard")

    def on_unmount(self) -> None:
        self.container.close()

    # ------------------------------------------------------------------ #
    # key-binding actions
    # ------------------------------------------------------------------ #

    def action_show(self, screen_name: str) -> None:
        if self.screen.is_modal:
            return
        if self.get_screen(screen_name) is self.screen:
            return
        Slogger.debug(f"Switching to {screen_name} screen")
        self.switch_screen(screen_name)
