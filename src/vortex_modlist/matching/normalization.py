"""Shared normalization utilities for snapshot name fields."""

import re

from vortex_modlist.constants import ARCHIVE_EXTENSIONS

# Nexus download names end in -<modId>-<version parts>-<upload timestamp>
PACKAGER_SUFFIX_RE = re.compile(r"-\d+-\d+(?:-\d+)*-\d{9,}$")
PART_RE = re.compile(r"\(\s*part\s*(\d+)\s*\)|\bpart\s*(\d+)\b", re.IGNORECASE)
PART_PREFIX_RE = re.compile(r"^(.*?)\s*(?:[-–]\s*)?\(?\s*\bpart\s*\d+", re.IGNORECASE)
TRAILING_SEPARATOR_RE = re.compile(r"[\s_\-–(]+$")


def blank_to_none(value: str | None) -> str | None:
    """Trim a field and treat blank text as absent.

    >>> blank_to_none("  SkyUI ")
    'SkyUI'
    >>> blank_to_none("   ") is None
    True
    """
    if value is None:
        return None
    value = value.strip()
    return value or None


def strip_archive_extension(name: str) -> str:
    """Remove a trailing .zip/.rar/.7z/.7zip extension.

    >>> strip_archive_extension("SomeMod.7z")
    'SomeMod'
    >>> strip_archive_extension("plugin.esp")
    'plugin.esp'
    """
    lower = name.lower()
    for ext in ARCHIVE_EXTENSIONS:
        if lower.endswith(ext):
            return name[: -len(ext)]
    return name


def strip_packager_suffix(name: str) -> str:
    """Remove the ``-<id>-<version>-<timestamp>`` tail of a Nexus download name.

    >>> strip_packager_suffix("SomeMod-5124-3-09-1739477203")
    'SomeMod'
    >>> strip_packager_suffix("Mod-1-2")
    'Mod-1-2'
    """
    return PACKAGER_SUFFIX_RE.sub("", name)


def clean_archive_name(name: str) -> str:
    """Turn an archive file name into something fit for display.

    >>> clean_archive_name("SomeMod-5124-3-09-1739477203.zip")
    'SomeMod'
    """
    cleaned = strip_packager_suffix(strip_archive_extension(name.strip()))
    return cleaned.strip() or name.strip()


def find_part_number(text: str | None) -> int | None:
    """Return N from a ``(Part N)`` or ``part N`` marker, if any.

    >>> find_part_number("Foo Bar - Part 02")
    2
    >>> find_part_number("Counterpart 2") is None
    True
    """
    if not text:
        return None
    m = PART_RE.search(text)
    if not m:
        return None
    return int(m.group(1) or m.group(2))


def part_prefix(text: str | None) -> str | None:
    """Return the text before a part marker, minus any dash separator.

    >>> part_prefix("Foo Bar - Part 1")
    'Foo Bar'
    >>> part_prefix("Textures (Part 3)")
    'Textures'
    """
    if not text:
        return None
    m = PART_PREFIX_RE.match(text)
    if not m:
        return None
    prefix = TRAILING_SEPARATOR_RE.sub("", m.group(1)).strip()
    return prefix or None
