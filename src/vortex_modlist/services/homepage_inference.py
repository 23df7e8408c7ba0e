"""Fill in missing download-page URLs from sibling records.

No catalog is queried. URLs are only copied between records sharing a
catalog id, or synthesized from a per-game slug learned from URLs already
present in the snapshot.
"""

from __future__ import annotations

import logging
import re

from vortex_modlist.constants import CATALOG_REGISTRY
from vortex_modlist.models.records import ModRecord

logger = logging.getLogger(__name__)


def _page_pattern(domain: str) -> re.Pattern[str]:
    return re.compile(
        rf"^https?://(?:www\.)?{re.escape(domain)}/([^/?#]+)/mods/(\d+)(?:[/?#]|$)",
        re.IGNORECASE,
    )


_PAGE_PATTERNS = {
    name: _page_pattern(entry["domain"]) for name, entry in CATALOG_REGISTRY.items()
}


def _catalog_of(record: ModRecord) -> str | None:
    if not record.source_catalog:
        return None
    name = record.source_catalog.strip().lower()
    return name if name in CATALOG_REGISTRY else None


def propagate_by_catalog_id(records: list[ModRecord]) -> int:
    """Share a known homepage with every record carrying the same catalog id."""
    groups: dict[tuple[str, str], list[ModRecord]] = {}
    for record in records:
        if record.numeric_catalog_id:
            groups.setdefault((record.game, record.numeric_catalog_id), []).append(record)

    filled = 0
    for group in groups.values():
        homepage = next((r.homepage for r in group if r.homepage), None)
        if not homepage:
            continue
        for record in group:
            if not record.homepage:
                record.homepage = homepage
                filled += 1
    return filled


def learn_game_slugs(records: list[ModRecord]) -> dict[tuple[str, str], str]:
    """Map (catalog, game) to the URL slug first seen on that catalog's pages."""
    slugs: dict[tuple[str, str], str] = {}
    for record in records:
        catalog = _catalog_of(record)
        if catalog is None or not record.homepage:
            continue
        m = _PAGE_PATTERNS[catalog].match(record.homepage.strip())
        if m:
            slugs.setdefault((catalog, record.game), m.group(1))
    return slugs


def synthesize_homepages(records: list[ModRecord], slugs: dict[tuple[str, str], str]) -> int:
    filled = 0
    for record in records:
        if record.homepage or not record.numeric_catalog_id:
            continue
        if not record.numeric_catalog_id.isdigit():
            continue
        catalog = _catalog_of(record)
        if catalog is None:
            continue
        slug = slugs.get((catalog, record.game))
        if slug is None:
            continue
        host = CATALOG_REGISTRY[catalog]["host"]
        record.homepage = f"https://{host}/{slug}/mods/{record.numeric_catalog_id}/"
        filled += 1
    return filled


def infer_homepages(records: list[ModRecord]) -> list[ModRecord]:
    """Fill empty homepages in place; existing values are never replaced."""
    propagated = propagate_by_catalog_id(records)
    slugs = learn_game_slugs(records)
    synthesized = synthesize_homepages(records, slugs)
    if propagated or synthesized:
        logger.info(
            "Inferred homepages: %d copied by catalog id, %d synthesized from %d slug(s)",
            propagated,
            synthesized,
            len(slugs),
        )
    return records
