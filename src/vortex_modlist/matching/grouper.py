"""Collapse multi-part downloads into a single reported mod.

Large Nexus uploads are often split into "Foo - Part 1", "Foo - Part 2", ...
and Vortex installs each part as its own package. Parts share a download
page, so candidates are bucketed by (game, homepage) and a bucket is merged
only when at least two of its records carry a part number.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import fields

from vortex_modlist.matching.normalization import find_part_number, part_prefix
from vortex_modlist.models.records import (
    AggregateModRecord,
    ModRecord,
    RawModRecord,
    ResolvedModRecord,
)

logger = logging.getLogger(__name__)

MIN_PARTS_TO_MERGE = 2
MIN_BASE_NAME_LENGTH = 3

_BASE_NAME_FIELDS = (
    "mod_page_name",
    "logical_file_name",
    "archive_name",
    "base_name",
    "display_name",
)
_FALLBACK_NAME_FIELDS = ("base_name", "mod_page_name", "archive_name", "display_name")


def _page_key(url: str) -> str:
    return url.strip().rstrip("/").lower()


def detect_part_number(record: ResolvedModRecord) -> int | None:
    """Part number from the first name-like field that has one."""
    for value in (
        record.logical_file_name,
        record.mod_page_name,
        record.archive_name,
        record.display_name,
        record.mod_key,
    ):
        number = find_part_number(value)
        if number is not None:
            return number
    return None


def infer_base_name(group: list[ResolvedModRecord]) -> str | None:
    """Shared name of a part group, or ``None`` when nothing usable exists."""
    for attr in _BASE_NAME_FIELDS:
        for record in group:
            prefix = part_prefix(getattr(record, attr))
            if prefix and len(prefix) >= MIN_BASE_NAME_LENGTH:
                return prefix

    candidates: list[str] = []
    for record in group:
        for attr in _FALLBACK_NAME_FIELDS:
            value = getattr(record, attr)
            if value and value.strip() and value.strip() not in candidates:
                candidates.append(value.strip())
    if not candidates:
        return None
    return max(candidates, key=len)


def _aggregate_version(members: list[ResolvedModRecord]) -> str:
    global_versions = [m.global_version for m in members if m.global_version]
    if global_versions:
        return global_versions[0]
    file_versions = [m.file_version for m in members if m.file_version]
    if file_versions:
        return Counter(file_versions).most_common(1)[0][0]
    return members[0].display_version


def _total_size(members: list[ResolvedModRecord]) -> int | None:
    sizes = [m.archive_size for m in members if m.archive_size is not None]
    return sum(sizes) if sizes else None


def build_aggregate(
    group: list[ResolvedModRecord], base_name: str, part_numbers: list[int]
) -> AggregateModRecord:
    members = sorted(group, key=lambda r: r.deploy_index)
    representative = members[0]
    values = {f.name: getattr(representative, f.name) for f in fields(RawModRecord)}
    values.update(
        enabled=any(m.enabled for m in members),
        deploy_index=min((m.deploy_index for m in members), default=0),
        homepage=next((m.homepage for m in members if m.homepage), representative.homepage),
        numeric_catalog_id=next(
            (m.numeric_catalog_id for m in members if m.numeric_catalog_id),
            representative.numeric_catalog_id,
        ),
        archive_size=_total_size(members),
        archive_file_time=max(
            (m.archive_file_time for m in members if m.archive_file_time is not None),
            default=None,
        ),
    )
    return AggregateModRecord(
        **values,
        display_name=base_name,
        base_name=base_name,
        display_version=_aggregate_version(members),
        members=members,
        part_numbers=sorted(part_numbers),
    )


def merge_part_groups(records: list[ResolvedModRecord]) -> list[ModRecord]:
    buckets: dict[tuple[str, str], list[int]] = {}
    for idx, record in enumerate(records):
        if not record.homepage:
            continue
        buckets.setdefault((record.game, _page_key(record.homepage)), []).append(idx)

    aggregates: dict[int, AggregateModRecord] = {}
    consumed: set[int] = set()
    for (game, page), indices in buckets.items():
        if len(indices) < MIN_PARTS_TO_MERGE:
            continue
        group = [records[i] for i in indices]
        part_numbers = [n for n in (detect_part_number(r) for r in group) if n is not None]
        if len(part_numbers) < MIN_PARTS_TO_MERGE:
            continue
        base_name = infer_base_name(group)
        if not base_name:
            logger.debug("No usable base name for part group %s %s", game, page)
            continue
        aggregates[indices[0]] = build_aggregate(group, base_name, part_numbers)
        consumed.update(indices)
        logger.debug("Merged %d parts of %r (%s)", len(group), base_name, game)

    merged: list[ModRecord] = []
    for idx, record in enumerate(records):
        if idx in aggregates:
            merged.append(aggregates[idx])
        elif idx not in consumed:
            merged.append(record)

    if aggregates:
        logger.info(
            "Merged %d multi-part group(s) covering %d installed entries",
            len(aggregates),
            len(consumed),
        )
    return merged
