# finance_tracker/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Any, Dict

from finance_tracker.controllers.table_controller import PagedTableController
from finance_tracker.db.connection import SQLiteConnection
from finance_tracker.db.repos.bank_account_repo import BankAccountRepo
from finance_tracker.db.repos.category_repo import CategoryRepo
from finance_tracker.db.repos.payment_mode_repo import PaymentModeRepo
from finance_tracker.db.repos.transaction_repo import TransactionRepo
from finance_tracker.services.bank_account_service import BankAccountService
from finance_tracker.services.category_service import CategoryService
from finance_tracker.services.payment_mode_service import PaymentModeService
from finance_tracker.services.report_service import ReportService
from finance_tracker.services.sqlite_source import SQLiteDataSource
from finance_tracker.services.transaction_service import TransactionService
from finance_tracker.tables import (
    BANK_ACCOUNTS,
    CATEGORIES,
    PAYMENT_MODES,
    RECENT_TRANSACTIONS,
    TRANSACTIONS,
    table_config,
)


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self._cfg = config
        self._db: SQLiteConnection | None = None
        self._category_repo: CategoryRepo | None = None
        self._payment_mode_repo: PaymentModeRepo | None = None
        self._bank_account_repo: BankAccountRepo | None = None
        self._transaction_repo: TransactionRepo | None = None
        self._sources: Dict[str, SQLiteDataSource] = {}
        self._category_service: CategoryService | None = None
        self._payment_mode_service: PaymentModeService | None = None
        self._bank_account_service: BankAccountService | None = None
        self._transaction_service: TransactionService | None = None
        self._report_service: ReportService | None = None

    @property
    def config(self) -> Dict[str, Any]:
        return self._cfg

    # ---------- infra ----------
    @property
    def db(self) -> SQLiteConnection:
        if self._db is None:
            self._db = SQLiteConnection(self._cfg)
        return self._db

    # ---------- repositories ----------
    @property
    def category_repo(self) -> CategoryRepo:
        if self._category_repo is None:
            self._category_repo = CategoryRepo(self.db)
        return self._category_repo

    @property
    def payment_mode_repo(self) -> PaymentModeRepo:
        if self._payment_mode_repo is None:
            self._payment_mode_repo = PaymentModeRepo(self.db)
        return self._payment_mode_repo

    @property
    def bank_account_repo(self) -> BankAccountRepo:
        if self._bank_account_repo is None:
            self._bank_account_repo = BankAccountRepo(self.db)
        return self._bank_account_repo

    @property
    def transaction_repo(self) -> TransactionRepo:
        if self._transaction_repo is None:
            self._transaction_repo = TransactionRepo(self.db)
        return self._transaction_repo

    # ---------- data sources ----------
    def source(self, table: str) -> SQLiteDataSource:
        """The data source behind `table` (one per table name)."""
        if table not in self._sources:
            repos = {
                CATEGORIES: self.category_repo,
                PAYMENT_MODES: self.payment_mode_repo,
                BANK_ACCOUNTS: self.bank_account_repo,
                TRANSACTIONS: self.transaction_repo,
                RECENT_TRANSACTIONS: self.transaction_repo,
            }
            self._sources[table] = SQLiteDataSource(
                repos[table],
                searchable_fields=table_config(table, self._cfg).searchable_fields,
            )
        return self._sources[table]

    def table_controller(self, table: str) -> PagedTableController:
        """A fresh controller; each list view owns (and closes) its own."""
        return PagedTableController(self.source(table), table_config(table, self._cfg))

    # ---------- services ----------
    @property
    def category_service(self) -> CategoryService:
        if self._category_service is None:
            self._category_service = CategoryService(self.source(CATEGORIES))
        return self._category_service

    @property
    def payment_mode_service(self) -> PaymentModeService:
        if self._payment_mode_service is None:
            self._payment_mode_service = PaymentModeService(self.source(PAYMENT_MODES))
        return self._payment_mode_service

    @property
    def bank_account_service(self) -> BankAccountService:
        if self._bank_account_service is None:
            self._bank_account_service = BankAccountService(self.source(BANK_ACCOUNTS))
        return self._bank_account_service

    @property
    def transaction_service(self) -> TransactionService:
        if self._transaction_service is None:
            self._transaction_service = TransactionService(
                self.source(TRANSACTIONS),
                self.category_repo,
                self.payment_mode_repo,
                self.bank_account_repo,
            )
        return self._transaction_service

    @property
    def report_service(self) -> ReportService:
        if self._report_service is None:
            self._report_service = ReportService(
                self.transaction_repo,
                self.category_repo,
                self.payment_mode_repo,
            )
        return self._report_service

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None


# convenience factory
def build_container(config: Dict[str, Any]) -> Container:
    """Create a container for the given config."""
    return Container(config)
