import json
from pathlib import Path
from typing import Any

import pytest

from vortex_modlist.matching.resolver import resolve_record
from vortex_modlist.models.records import RawModRecord, ResolvedModRecord
from vortex_modlist.schemas.snapshot import Snapshot


def _mod_entry(
    mod_id: str,
    *,
    logical: str | None = None,
    page: str | None = None,
    file_name: str | None = None,
    version: str | None = None,
    homepage: str | None = None,
    nexus_id: int | str | None = None,
    source: str | None = "nexus",
    mod_type: str = "",
    archive_id: str | None = None,
) -> dict[str, Any]:
    attributes: dict[str, Any] = {"source": source}
    if logical is not None:
        attributes["logicalFileName"] = logical
    if page is not None:
        attributes["modName"] = page
    if file_name is not None:
        attributes["fileName"] = file_name
    if version is not None:
        attributes["version"] = version
    if homepage is not None:
        attributes["homepage"] = homepage
    if nexus_id is not None:
        attributes["modId"] = nexus_id
    entry: dict[str, Any] = {
        "id": mod_id,
        "type": mod_type,
        "state": "installed",
        "attributes": attributes,
    }
    if archive_id is not None:
        entry["archiveId"] = archive_id
    return entry


@pytest.fixture
def mod_entry():
    """Factory for one Vortex mod record (the value under persistent.mods.<game>)."""
    return _mod_entry


@pytest.fixture
def make_snapshot():
    """Build a Vortex backup document: ``{game: [(mod_key, entry, enabled), ...]}``."""

    def _make(
        games: dict[str, list[tuple[str, dict[str, Any] | None, bool]]],
        downloads: dict[str, dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        mods: dict[str, dict[str, Any]] = {}
        profiles: dict[str, Any] = {}
        last_active: dict[str, str] = {}
        for game, entries in games.items():
            mods[game] = {key: entry for key, entry, _enabled in entries}
            profile_id = f"profile-{game}"
            profiles[profile_id] = {
                "id": profile_id,
                "gameId": game,
                "name": "Default",
                "modState": {key: {"enabled": enabled} for key, _entry, enabled in entries},
            }
            last_active[game] = profile_id
        return {
            "persistent": {
                "mods": mods,
                "profiles": profiles,
                "downloads": {"files": downloads or {}},
            },
            "settings": {"profiles": {"lastActiveProfile": last_active}},
        }

    return _make


@pytest.fixture
def snapshot_dir(tmp_path) -> Path:
    d = tmp_path / "state_backups_full"
    d.mkdir()
    return d


@pytest.fixture
def write_snapshot(snapshot_dir):
    def _write(data: dict[str, Any] | str, name: str = "startup.json") -> Path:
        path = snapshot_dir / name
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def to_snapshot():
    def _convert(data: dict[str, Any]) -> Snapshot:
        return Snapshot.model_validate(data)

    return _convert


@pytest.fixture
def make_record():
    """Resolved record with sensible defaults; keyword args override raw fields."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> ResolvedModRecord:
        values: dict[str, Any] = {
            "game": "skyrimse",
            "mod_key": f"mod-{counter['n']}",
            "deploy_index": counter["n"],
            "source_catalog": "nexus",
        }
        counter["n"] += 1
        values.update(overrides)
        return resolve_record(RawModRecord(**values))

    return _make
