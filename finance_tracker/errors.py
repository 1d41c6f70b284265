# finance_tracker/errors.py

class FinanceTrackerError(Exception):
    """Base class for all finance tracker errors."""
    pass


class TransportError(FinanceTrackerError):
    """The data source could not be reached (connection, lock, timeout)."""
    pass


class BackendError(FinanceTrackerError):
    """The data source rejected the request (bad sort field, constraint, missing row)."""
    pass


class ValidationError(FinanceTrackerError):
    """Caller supplied an invalid value; rejected before anything is fetched or written."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConfigError(FinanceTrackerError):
    """Error related to configuration."""
    pass
