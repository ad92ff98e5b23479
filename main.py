#!/usr/bin/env python3
"""
Warehouse Admin console - Main entry point
"""
import sys

from rich.console import Console

from simple_logger import Slogger
from warehouse_admin.config import load_config
from warehouse_admin.errors import ConfigError
from warehouse_admin.ui.app import WarehouseAdminApp


def main():
    try:
        config = load_config()
    except ConfigError as e:
        Console(stderr=True).print(f"[bold red]Configuration error:[/] {e}")
        return 1

    Slogger.configure(config["logging"]["path"], config["logging"]["level"])
    Slogger.log("Starting Warehouse Admin console...", context={"api": config["api"]["base_url"]})

    app = WarehouseAdminApp(config)
    try:
        app.run()
    except Exception as e:
        Slogger.exception(e, "Console crashed")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
