#!/usr/bin/env python3
"""
Finance Tracker - Main entry point
"""
import os
import sys

# Add the parent directory to sys.path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from finance_tracker.config import load_config
from finance_tracker.errors import ConfigError
from finance_tracker.ui.app import FinanceTrackerApp
from simple_logger import Slogger


def main():
    try:
        config = load_config()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    Slogger.configure(config["logging"]["path"], config["logging"]["level"])
    Slogger.info("Starting Finance Tracker application...", {"db_path": config["sqlite"]["db_path"]})

    app = FinanceTrackerApp(config)
    app.run()


if __name__ == "__main__":
    main()
