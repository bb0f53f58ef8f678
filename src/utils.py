"""Shared utilities for buildgraph."""

from __future__ import annotations

import re

_SEGMENT = re.compile(r'^[^\\<>"?*|\x00-\x1f]+$')


def normalize_module_name(name: str) -> str:
    """Normalize a module declaration to its canonical name.

    Nested modules may be written with ``:`` or ``/`` separators and an
    optional leading ``:``; the canonical form uses ``:`` and has no leading
    separator.

    Examples:
        >>> normalize_module_name(":core")
        'core'
        >>> normalize_module_name("libs/core")
        'libs:core'

    Raises:
        ValueError: If the name has an empty segment or a segment holds a
            control character or one of ``\\ < > " ? * |``.
    """
    parts = [part.strip() for part in name.replace("/", ":").split(":")]
    if parts and parts[0] == "":
        parts = parts[1:]

    if not parts or any(not part for part in parts):
        msg = f"Module name must be non-empty: {name!r}"
        raise ValueError(msg)

    for part in parts:
        if not _SEGMENT.match(part):
            msg = f"Invalid character in module name segment {part!r} of {name!r}"
            raise ValueError(msg)

    return ":".join(parts)


def module_path(name: str, *, is_root: bool = False) -> str:
    """Return the colon-separated project path for a module.

    >>> module_path("libs:core")
    ':libs:core'
    >>> module_path("anything", is_root=True)
    ':'
    """
    if is_root:
        return ":"
    return f":{name}"
