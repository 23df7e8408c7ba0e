"""Locate, parse and validate the newest Vortex state backup."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from vortex_modlist.errors import NotFoundError, ParseError, SchemaError
from vortex_modlist.schemas.snapshot import Snapshot
from vortex_modlist.snapshot.json_repair import (
    DuplicateKeyError,
    reject_duplicate_keys,
    repair_duplicate_keys,
)

logger = logging.getLogger(__name__)


def find_latest_snapshot(directory: Path, pattern: str = "*.json") -> Path:
    """Return the most recently modified file in ``directory`` matching ``pattern``."""
    if not directory.is_dir():
        raise NotFoundError(f"Snapshot directory does not exist: {directory}")
    candidates = [p for p in directory.glob(pattern) if p.is_file()]
    if not candidates:
        raise NotFoundError(
            f"No Vortex snapshot matching {pattern!r} in {directory}; "
            "start Vortex once so it writes a state backup"
        )
    return max(candidates, key=lambda p: p.stat().st_mtime)


def parse_snapshot_text(text: str) -> dict[str, Any]:
    """Parse backup JSON, repairing duplicate object keys when necessary."""
    try:
        data = json.loads(text, object_pairs_hook=reject_duplicate_keys)
    except DuplicateKeyError as exc:
        logger.warning("Snapshot contains duplicate keys (%s); repairing", exc.key)
        repaired = repair_duplicate_keys(text)
        try:
            data = json.loads(repaired, object_pairs_hook=reject_duplicate_keys)
        except ValueError as retry_exc:
            raise ParseError(
                f"Snapshot is not valid JSON after repair: {retry_exc}"
            ) from retry_exc
    except ValueError as exc:
        raise ParseError(f"Snapshot is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise SchemaError(f"Snapshot root must be a JSON object, got {type(data).__name__}")
    return data


def validate_snapshot(data: dict[str, Any]) -> Snapshot:
    try:
        return Snapshot.model_validate(data)
    except ValidationError as exc:
        raise SchemaError(f"Snapshot does not have the expected shape: {exc}") from exc


class SnapshotLoader:
    """Reads one snapshot per run and keeps the parsed result.

    Either ``path`` names the backup file directly, or the newest file
    matching ``pattern`` in ``directory`` is used.
    """

    def __init__(
        self,
        directory: Path | None = None,
        pattern: str = "*.json",
        *,
        path: Path | None = None,
    ) -> None:
        if directory is None and path is None:
            raise ValueError("SnapshotLoader needs a directory or an explicit path")
        self.directory = directory
        self.pattern = pattern
        self.path = path
        self._snapshot: Snapshot | None = None

    def locate(self) -> Path:
        if self.path is not None:
            if not self.path.is_file():
                raise NotFoundError(f"Snapshot file does not exist: {self.path}")
            return self.path
        assert self.directory is not None
        return find_latest_snapshot(self.directory, self.pattern)

    def load(self) -> Snapshot:
        if self._snapshot is not None:
            return self._snapshot

        source = self.locate()
        logger.info("Reading Vortex snapshot %s", source)
        try:
            text = source.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Snapshot is not UTF-8 text: {exc}") from exc
        self._snapshot = validate_snapshot(parse_snapshot_text(text))
        self.path = source
        return self._snapshot
