# warehouse_admin/services/export_service.py
"""CSV export of whatever rows a list screen is showing."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Any, Optional, Sequence

from warehouse_admin.errors import ExportError
from warehouse_admin.resources import ResourceDefinition
from simple_logger import Slogger


def export_filename(definition: ResourceDefinition, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{definition.key}-data-{today.isoformat()}.csv"


def export_csv(
    definition: ResourceDefinition,
    records: Sequence[Any],
    directory: str | Path = ".",
    *,
    today: Optional[date] = None,
) -> Path:
    """
    Write `records` as CSV (header row of column titles) and return the path.

    Raises:
        ExportError: nothing to export, or the file could not be written
    """
    if not records:
        raise ExportError("No data to export")

    path = Path(directory).expanduser() / export_filename(definition, today)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([c.title for c in definition.columns])
            for record in records:
                writer.writerow(definition.row(record))
    except OSError as e:
        raise ExportError(f"Could not write {path}: {e}") from e

    Slogger.info(f"Exported {len(records)} {definition.key} rows", {"path": str(path)})
    return path
