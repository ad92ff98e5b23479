"""
Configuration settings for the Warehouse Admin console
"""

import copy
import json
import os
from typing import Any, Dict, Optional

import dotenv

from warehouse_admin.errors import ConfigError
from warehouse_admin.pagination import PAGE_SIZE_OPTIONS


DEFAULT_CONFIG = {
    "api": {
        "base_url": "http://localhost:8080/api/v1",
        "timeout": 10,
    },
    "ui": {
        "per_page": 10,
        "date_format": "%Y-%m-%d",
        "export_dir": ".",
    },
    "logging": {
        "path": "logs/warehouse_admin.log",
        "level": "INFO",
    },
}

CONFIG_FILE = os.path.expanduser("~/.warehouse_admin_config.json")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into `base` (in place) and return it."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _validate(config: Dict[str, Any]) -> None:
    per_page = config["ui"].get("per_page")
    if per_page not in PAGE_SIZE_OPTIONS:
        raise ConfigError(
            f"ui.per_page must be one of {PAGE_SIZE_OPTIONS}, got {per_page!r}"
        )
    try:
        timeout = float(config["api"].get("timeout"))
    except (TypeError, ValueError):
        raise ConfigError(f"api.timeout must be a number, got {config['api'].get('timeout')!r}")
    if timeout <= 0:
        raise ConfigError("api.timeout must be positive")
    level = str(config["logging"].get("level") or "INFO").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        raise ConfigError(f"logging.level must be DEBUG, INFO, WARNING or ERROR, got {level!r}")


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file or environment variables.

    Precedence (lowest first): defaults, JSON config file, environment
    (a local `.env` file is read into the environment first).
    """
    dotenv.load_dotenv()
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = config_file or CONFIG_FILE
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                _merge(config, json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Error loading config file {path}: {e}") from e

    if os.environ.get("WAREHOUSE_API_URL"):
        config["api"]["base_url"] = os.environ["WAREHOUSE_API_URL"]

    if os.environ.get("WAREHOUSE_API_TIMEOUT"):
        config["api"]["timeout"] = os.environ["WAREHOUSE_API_TIMEOUT"]

    if os.environ.get("WAREHOUSE_PAGE_SIZE"):
        try:
            config["ui"]["per_page"] = int(os.environ["WAREHOUSE_PAGE_SIZE"])
        except ValueError:
            raise ConfigError(
                f"WAREHOUSE_PAGE_SIZE must be an integer, got {os.environ['WAREHOUSE_PAGE_SIZE']!r}"
            )

    if os.environ.get("WAREHOUSE_LOG_PATH"):
        config["logging"]["path"] = os.environ["WAREHOUSE_LOG_PATH"]

    _validate(config)
    config["api"]["timeout"] = float(config["api"]["timeout"])
    return config


def save_config(config: Dict[str, Any], config_file: Optional[str] = None) -> bool:
    """
    Save configuration to file
    """
    try:
        with open(config_file or CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        from simple_logger import Slogger
        Slogger.error(f"Error saving config file: {e}")
        return False
