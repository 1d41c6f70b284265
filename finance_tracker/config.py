"""
Configuration settings for the Finance Tracker
"""

import copy
import json
import os
from typing import Any, Dict

from dotenv import load_dotenv

from finance_tracker.errors import ConfigError
from simple_logger import Slogger


DEFAULT_CONFIG = {
    "sqlite": {
        "db_path": "data/finance_tracker.db",
    },
    "ui": {
        "per_page": 10,
        "page_size_options": [10, 20, 50, 100],
        "date_format": "%d %b %Y",
        "currency_symbol": "₹",
    },
    "logging": {
        "path": "logs/finance_tracker.log",
        "level": "INFO",
    },
}

CONFIG_FILE = os.path.expanduser("~/.finance_tracker_config.json")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into `base` (in place) and return it."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_file: str | None = None) -> Dict[str, Any]:
    """
    Load configuration from file or environment variables

    Order of precedence (last wins): defaults, JSON config file, `.env` /
    process environment.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = config_file or CONFIG_FILE

    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                _merge(config, json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            Slogger.warning(f"Error loading config file: {e}", {"path": path})

    load_dotenv()

    if os.environ.get("FINANCE_TRACKER_DB"):
        config["sqlite"]["db_path"] = os.environ["FINANCE_TRACKER_DB"]

    if os.environ.get("FINANCE_TRACKER_LOG_LEVEL"):
        config["logging"]["level"] = os.environ["FINANCE_TRACKER_LOG_LEVEL"]

    if os.environ.get("FINANCE_TRACKER_PAGE_SIZE"):
        raw = os.environ["FINANCE_TRACKER_PAGE_SIZE"]
        try:
            config["ui"]["per_page"] = int(raw)
        except ValueError:
            raise ConfigError(f"FINANCE_TRACKER_PAGE_SIZE must be an integer, got {raw!r}")

    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """Raise ConfigError when the paging settings cannot drive a table."""
    ui = config.get("ui", {})
    options = ui.get("page_size_options") or []
    per_page = ui.get("per_page")

    if not options or any(not isinstance(o, int) or o <= 0 for o in options):
        raise ConfigError(f"ui.page_size_options must be positive integers, got {options!r}")
    if per_page not in options:
        raise ConfigError(f"ui.per_page={per_page!r} is not one of {options!r}")
    if not config.get("sqlite", {}).get("db_path"):
        raise ConfigError("sqlite.db_path is required")


def save_config(config: Dict[str, Any], config_file: str | None = None) -> bool:
    """
    Save configuration to file
    """
    path = config_file or CONFIG_FILE
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        Slogger.error(f"Error saving config file: {e}", {"path": path})
        return False
