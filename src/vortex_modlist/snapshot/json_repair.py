"""Duplicate-key repair for Vortex state backups.

Some Vortex builds write objects containing the same key twice (often
differing only in case). Python's ``json`` module would silently keep the
last value, so the loader parses with :func:`reject_duplicate_keys` and, on
:class:`DuplicateKeyError`, rewrites the raw text with
:func:`repair_duplicate_keys` before parsing again.

The repair is a small state machine over the raw text: it tracks string
literals (honouring backslash escapes) and a stack of scopes, one set of
seen keys per open object. A quoted token is a key when the nearest
non-whitespace character before it is ``{`` or ``,`` and the nearest one
after its closing quote is ``:``. Repeated keys get ``" (Duplicate)"``,
``" (Duplicate 2)"``, ... appended. Non-key strings are copied untouched.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

_WHITESPACE = frozenset(" \t\r\n")


class DuplicateKeyError(ValueError):
    """Raised by the parse hook when an object repeats a key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Duplicate key in JSON object: {key!r}")
        self.key = key


def reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """``object_pairs_hook`` that refuses case-insensitive duplicate keys."""
    seen: set[str] = set()
    for key, _value in pairs:
        folded = key.casefold()
        if folded in seen:
            raise DuplicateKeyError(key)
        seen.add(folded)
    return dict(pairs)


def _string_end(text: str, start: int) -> int:
    """Index of the quote closing the string literal opened at ``start``.

    Returns ``len(text)`` for an unterminated literal.
    """
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i
        i += 1
    return n


def _next_significant(text: str, start: int) -> str:
    n = len(text)
    i = start
    while i < n and text[i] in _WHITESPACE:
        i += 1
    return text[i] if i < n else ""


def _dedupe_key(raw_key: str, seen: set[str]) -> str:
    if raw_key.casefold() not in seen:
        return raw_key
    candidate = f"{raw_key} (Duplicate)"
    counter = 2
    while candidate.casefold() in seen:
        candidate = f"{raw_key} (Duplicate {counter})"
        counter += 1
    return candidate


def repair_duplicate_keys(text: str) -> str:
    """Rename repeated object keys so every key is unique per object.

    Running it on already-repaired text changes nothing.
    """
    out: list[str] = []
    # None marks an array scope; keys only exist inside objects.
    scopes: list[set[str] | None] = []
    last_significant = ""
    renamed = 0
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch == '"':
            end = _string_end(text, i)
            raw_key = text[i + 1 : end]
            scope = scopes[-1] if scopes else None
            is_key = (
                scope is not None
                and last_significant in ("{", ",")
                and end < n
                and _next_significant(text, end + 1) == ":"
            )
            if is_key and scope is not None:
                new_key = _dedupe_key(raw_key, scope)
                if new_key != raw_key:
                    renamed += 1
                scope.add(new_key.casefold())
                out.append(f'"{new_key}"')
            else:
                out.append(text[i : end + 1])
            last_significant = '"'
            i = end + 1
            continue

        if ch == "{":
            scopes.append(set())
        elif ch == "[":
            scopes.append(None)
        elif ch in "}]" and scopes:
            scopes.pop()

        if ch not in _WHITESPACE:
            last_significant = ch
        out.append(ch)
        i += 1

    if renamed:
        logger.info("Renamed %d duplicate JSON key(s) in snapshot", renamed)
    return "".join(out)
