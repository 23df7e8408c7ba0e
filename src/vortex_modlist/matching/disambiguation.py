"""Re-expand display names that collapsed onto one shared file name.

Many unrelated mods ship a file with a generic ``logicalFileName`` such as
``patch.esp`` or ``Main File``. When records sharing that label point to
different pages, each is relabelled from its own page or archive name.
Merged multi-part records keep the base name the merger gave them.
"""

from __future__ import annotations

import logging

from vortex_modlist.matching.normalization import blank_to_none, clean_archive_name
from vortex_modlist.models.records import AggregateModRecord, ModRecord

logger = logging.getLogger(__name__)


def _distinct(values: list[str | None]) -> set[str]:
    return {v for v in (blank_to_none(x) for x in values) if v}


def disambiguate(records: list[ModRecord]) -> list[ModRecord]:
    """Relabel conflated records in place and return the same list."""
    groups: dict[tuple[str, str], list[ModRecord]] = {}
    for record in records:
        logical = blank_to_none(record.logical_file_name)
        if logical:
            groups.setdefault((record.game, logical), []).append(record)

    relabelled = 0
    for (game, logical), group in groups.items():
        if len(group) < 2:
            continue
        page_names = _distinct([r.mod_page_name for r in group])
        homepages = _distinct([r.homepage for r in group])
        if len(page_names) < 2 and len(homepages) < 2:
            continue
        logger.debug("Disambiguating %d records named %r in %s", len(group), logical, game)
        for record in group:
            if isinstance(record, AggregateModRecord):
                # already named after its download page
                continue
            page = blank_to_none(record.mod_page_name)
            archive = blank_to_none(record.archive_name)
            label = page or (clean_archive_name(archive) if archive else None)
            if label:
                record.display_name = label
                record.base_name = label
                relabelled += 1

    if relabelled:
        logger.info("Relabelled %d records sharing a file name", relabelled)
    return records
