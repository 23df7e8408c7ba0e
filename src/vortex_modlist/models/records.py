"""Transient records flowing through the mod-list pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, fields


@dataclass(kw_only=True)
class RawModRecord:
    """One installed-mod entry as read from the snapshot.

    ``deploy_index`` is the entry's position in its game's mod mapping and
    stands in for load order.
    """

    game: str
    mod_key: str
    deploy_index: int
    enabled: bool = False
    numeric_catalog_id: str | None = None
    source_catalog: str | None = None
    homepage: str | None = None
    logical_file_name: str | None = None
    mod_page_name: str | None = None
    archive_name: str | None = None
    file_version: str | None = None
    global_version: str | None = None
    mod_type: str | None = None
    archive_id: str | None = None
    archive_size: int | None = None
    archive_file_time: float | None = None


@dataclass(kw_only=True)
class ResolvedModRecord(RawModRecord):
    display_name: str
    base_name: str
    display_version: str

    @classmethod
    def from_raw(
        cls, raw: RawModRecord, *, display_name: str, base_name: str, display_version: str
    ) -> ResolvedModRecord:
        values = {f.name: getattr(raw, f.name) for f in fields(RawModRecord)}
        return cls(
            **values,
            display_name=display_name,
            base_name=base_name,
            display_version=display_version,
        )

    @property
    def part_count(self) -> int:
        return 1


@dataclass(kw_only=True)
class AggregateModRecord(ResolvedModRecord):
    """Several installed packages that make up one multi-part download."""

    members: list[ResolvedModRecord] = field(default_factory=list)
    part_numbers: list[int] = field(default_factory=list)

    @property
    def part_count(self) -> int:
        return len(self.members)

    @property
    def member_keys(self) -> list[str]:
        return [m.mod_key for m in self.members]


ModRecord = ResolvedModRecord | AggregateModRecord
