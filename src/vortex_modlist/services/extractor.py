"""Flatten a Vortex snapshot into one raw record per installed-mod entry."""

from __future__ import annotations

import logging
from pathlib import PureWindowsPath

from vortex_modlist.errors import SchemaError
from vortex_modlist.matching.normalization import blank_to_none
from vortex_modlist.models.records import RawModRecord
from vortex_modlist.schemas.snapshot import Download, ModEntry, ModState, Snapshot

logger = logging.getLogger(__name__)


def _enable_map(snapshot: Snapshot, game: str) -> dict[str, ModState | None]:
    profile = snapshot.active_profile(game)
    if profile is None:
        logger.debug("No active profile for %s; every mod reported disabled", game)
        return {}
    return profile.mod_state


def _archive_name_from_download(download: Download | None) -> str | None:
    if download is None or not download.local_path:
        return None
    # Vortex stores Windows-style relative paths
    return blank_to_none(PureWindowsPath(download.local_path).name)


def build_raw_record(
    game: str,
    mod_key: str,
    entry: ModEntry,
    deploy_index: int,
    enabled: bool,
    download: Download | None = None,
) -> RawModRecord:
    attrs = entry.attributes
    return RawModRecord(
        game=game,
        mod_key=mod_key,
        deploy_index=deploy_index,
        enabled=enabled,
        numeric_catalog_id=attrs.mod_id,
        source_catalog=attrs.source,
        homepage=attrs.homepage,
        logical_file_name=attrs.logical_file_name,
        mod_page_name=attrs.mod_name,
        archive_name=attrs.file_name or _archive_name_from_download(download),
        file_version=attrs.version,
        global_version=attrs.mod_version,
        mod_type=entry.type,
        archive_id=entry.archive_id,
        archive_size=download.size if download else None,
        archive_file_time=download.file_time if download else None,
    )


def extract_records(snapshot: Snapshot) -> list[RawModRecord]:
    """One record per (game, mod key), in the snapshot's stored order.

    ``deploy_index`` counts every entry, including null ones that are
    skipped, so positions stay comparable to the stored mapping.
    """
    mods = snapshot.persistent.mods
    if mods is None:
        raise SchemaError("Snapshot has no persistent.mods section")

    downloads = snapshot.persistent.downloads.files
    records: list[RawModRecord] = []
    for game, entries in mods.items():
        if not entries:
            continue
        enable_map = _enable_map(snapshot, game)
        for deploy_index, (mod_key, entry) in enumerate(entries.items()):
            if entry is None:
                logger.debug("Skipping null mod entry %s/%s", game, mod_key)
                continue
            state = enable_map.get(mod_key)
            download = downloads.get(entry.archive_id) if entry.archive_id else None
            records.append(
                build_raw_record(
                    game,
                    mod_key,
                    entry,
                    deploy_index,
                    enabled=state.enabled if state is not None else False,
                    download=download,
                )
            )

    logger.info("Extracted %d mod entries across %d game(s)", len(records), len(mods))
    return records
