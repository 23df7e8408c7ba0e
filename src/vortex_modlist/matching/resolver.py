"""Pick one display name and version per installed-mod record."""

from vortex_modlist.constants import (
    NO_NAME_PLACEHOLDER,
    NO_VERSION_PLACEHOLDER,
    TOOL_ENTRY_TEMPLATE,
)
from vortex_modlist.matching.normalization import blank_to_none, clean_archive_name
from vortex_modlist.models.records import RawModRecord, ResolvedModRecord


def resolve_display_name(raw: RawModRecord) -> str:
    """Name priority:

    1. ``logicalFileName``, the label Vortex itself shows
    2. the mod page name
    3. the archive name minus packager suffix and extension
    4. a tool-entry label when the entry has a type tag
    5. a fixed placeholder
    """
    if logical := blank_to_none(raw.logical_file_name):
        return logical
    if page := blank_to_none(raw.mod_page_name):
        return page
    if archive := blank_to_none(raw.archive_name):
        return clean_archive_name(archive)
    if mod_type := blank_to_none(raw.mod_type):
        return TOOL_ENTRY_TEMPLATE.format(mod_type=mod_type)
    return NO_NAME_PLACEHOLDER


def resolve_display_version(raw: RawModRecord) -> str:
    return (
        blank_to_none(raw.file_version)
        or blank_to_none(raw.global_version)
        or NO_VERSION_PLACEHOLDER
    )


def resolve_record(raw: RawModRecord) -> ResolvedModRecord:
    display_name = resolve_display_name(raw)
    return ResolvedModRecord.from_raw(
        raw,
        display_name=display_name,
        base_name=blank_to_none(raw.mod_page_name) or display_name,
        display_version=resolve_display_version(raw),
    )
