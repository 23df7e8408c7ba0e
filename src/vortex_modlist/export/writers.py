"""CSV and JSON writers for the normalized mod list."""

from __future__ import annotations

import csv
import io
import json
import logging
from datetime import UTC, datetime
from enum import StrEnum
from pathlib import Path
from typing import Any

from vortex_modlist.models.records import AggregateModRecord, ModRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Game",
    "Name",
    "Version",
    "Enabled",
    "Load Order",
    "Homepage",
    "Source",
    "Mod ID",
    "Parts",
    "Archive Size",
    "Downloaded",
]


class ExportFormat(StrEnum):
    CSV = "csv"
    JSON = "json"


def download_date(record: ModRecord) -> str | None:
    """UTC date of the archive download; Vortex stores milliseconds since the epoch."""
    if record.archive_file_time is None:
        return None
    return datetime.fromtimestamp(record.archive_file_time / 1000, tz=UTC).date().isoformat()


def record_to_dict(record: ModRecord) -> dict[str, Any]:
    data: dict[str, Any] = {
        "game": record.game,
        "name": record.display_name,
        "version": record.display_version,
        "enabled": record.enabled,
        "load_order": record.deploy_index,
        "homepage": record.homepage,
        "source": record.source_catalog,
        "mod_id": record.numeric_catalog_id,
        "mod_key": record.mod_key,
        "parts": record.part_count,
        "archive_size": record.archive_size,
        "downloaded": download_date(record),
    }
    if isinstance(record, AggregateModRecord):
        data["member_keys"] = record.member_keys
        data["part_numbers"] = record.part_numbers
    return data


def _csv_row(record: ModRecord) -> list[Any]:
    return [
        record.game,
        record.display_name,
        record.display_version,
        "Yes" if record.enabled else "No",
        record.deploy_index,
        record.homepage or "",
        record.source_catalog or "",
        record.numeric_catalog_id or "",
        record.part_count,
        record.archive_size if record.archive_size is not None else "",
        download_date(record) or "",
    ]


def render_csv(records: list[ModRecord]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for record in records:
        writer.writerow(_csv_row(record))
    return buf.getvalue()


def render_json(records: list[ModRecord]) -> str:
    return json.dumps([record_to_dict(r) for r in records], indent=2, ensure_ascii=False) + "\n"


_RENDERERS = {
    ExportFormat.CSV: render_csv,
    ExportFormat.JSON: render_json,
}


def write_export(records: list[ModRecord], path: Path, fmt: ExportFormat) -> Path:
    """Write ``records`` to ``path`` in ``fmt`` and return the path written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_RENDERERS[fmt](records), encoding="utf-8")
    logger.info("Wrote %d records to %s", len(records), path)
    return path
