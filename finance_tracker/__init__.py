"""Finance Tracker: categories, payment modes, bank accounts and transactions."""

__version__ = "0.1.0"
