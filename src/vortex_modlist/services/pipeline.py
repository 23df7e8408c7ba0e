"""End-to-end normalization of a Vortex snapshot into a display-ready mod list.

Stages run one after another, each taking the full list from the previous:

1. extract raw records from the snapshot
2. resolve a display name and version per record
3. merge multi-part downloads
4. disambiguate records sharing a generic file name
5. infer missing homepages
6. sort by game, deploy index and name
"""

from __future__ import annotations

import logging

from vortex_modlist.errors import SchemaError
from vortex_modlist.matching.disambiguation import disambiguate
from vortex_modlist.matching.grouper import merge_part_groups
from vortex_modlist.matching.resolver import resolve_record
from vortex_modlist.models.records import ModRecord
from vortex_modlist.schemas.snapshot import Snapshot
from vortex_modlist.services.extractor import extract_records
from vortex_modlist.services.homepage_inference import infer_homepages
from vortex_modlist.snapshot.loader import SnapshotLoader

logger = logging.getLogger(__name__)


def sort_records(records: list[ModRecord]) -> list[ModRecord]:
    return sorted(records, key=lambda r: (r.game, r.deploy_index, r.display_name.lower()))


def build_mod_list(snapshot: Snapshot) -> list[ModRecord]:
    resolved = [resolve_record(raw) for raw in extract_records(snapshot)]
    records = merge_part_groups(resolved)
    records = disambiguate(records)
    records = infer_homepages(records)
    return sort_records(records)


def filter_records(
    records: list[ModRecord],
    *,
    game: str | None = None,
    enabled_only: bool = False,
) -> list[ModRecord]:
    result = records
    if game:
        wanted = game.lower()
        result = [r for r in result if r.game.lower() == wanted]
    if enabled_only:
        result = [r for r in result if r.enabled]
    return result


class ModListPipeline:
    """Owns the snapshot for one run and hands out the normalized list."""

    def __init__(self, loader: SnapshotLoader) -> None:
        self.loader = loader

    @property
    def snapshot(self) -> Snapshot:
        return self.loader.load()

    def games(self) -> dict[str, int]:
        """Installed-entry count per game, in snapshot order."""
        mods = self.snapshot.persistent.mods
        if mods is None:
            raise SchemaError("Snapshot has no persistent.mods section")
        return {
            game: sum(1 for entry in (entries or {}).values() if entry is not None)
            for game, entries in mods.items()
        }

    def run(self, *, game: str | None = None, enabled_only: bool = False) -> list[ModRecord]:
        records = build_mod_list(self.snapshot)
        filtered = filter_records(records, game=game, enabled_only=enabled_only)
        logger.info("Mod list ready: %d of %d records", len(filtered), len(records))
        return filtered
