# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Platform-neutral helpers for normalising and comparing reported paths.

Nothing here touches the filesystem: every function works on strings and uses
``/`` as the canonical separator regardless of the host platform.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable
from typing import Final

SEPARATOR: Final[str] = "/"
CURRENT_DIR: Final[str] = "."
_PARENT_DIR: Final[str] = ".."
_DRIVE_RE: Final[re.Pattern[str]] = re.compile(r"^(?P<drive>[A-Za-z]:)(?P<rest>.*)$", re.DOTALL)
_FILENAME_RE: Final[re.Pattern[str]] = re.compile(r".+?\.[^/]+?$")


def _split_drive(path: str) -> tuple[str, str]:
    match = _DRIVE_RE.match(path)
    if match is None:
        return "", path
    return match.group("drive"), match.group("rest")


def is_absolute(path: str) -> bool:
    """Return ``True`` when ``path`` is separator-rooted or drive-letter-rooted."""

    unified = path.replace("\\", SEPARATOR)
    drive, rest = _split_drive(unified)
    if drive:
        return rest.startswith(SEPARATOR)
    return unified.startswith(SEPARATOR)


def normalize(path: str) -> str:
    """Return ``path`` with ``.``/``..`` collapsed and separators unified.

    Backslashes become ``/`` and repeated separators collapse. ``..`` never
    climbs above the root of an absolute path; on relative paths leading ``..``
    segments are kept. A drive-letter prefix such as ``C:`` is preserved and
    treated as absolute. An empty relative result is ``.``. Trailing separators
    are dropped.

    Args:
        path: Raw path string as supplied by a tool or a caller.

    Returns:
        str: Normalised path.
    """

    unified = path.replace("\\", SEPARATOR)
    drive, rest = _split_drive(unified)
    rooted = bool(drive) or rest.startswith(SEPARATOR)
    parts: list[str] = []
    for segment in rest.split(SEPARATOR):
        if segment in ("", CURRENT_DIR):
            continue
        if segment == _PARENT_DIR:
            if parts and parts[-1] != _PARENT_DIR:
                parts.pop()
            elif not rooted:
                parts.append(segment)
            continue
        parts.append(segment)

    joined = SEPARATOR.join(parts)
    if drive:
        return f"{drive}{SEPARATOR}{joined}"
    if rooted:
        return f"{SEPARATOR}{joined}"
    return joined or CURRENT_DIR


def strip_basepath(path: str, basepath: str) -> str:
    """Remove ``basepath`` from the front of ``path``.

    The prefix comparison is an exact string match. Any leading separator left
    over is removed and an empty result becomes ``.`` (the base path itself).

    Args:
        path: Path of the file.
        basepath: Prefix to remove; an empty value leaves ``path`` untouched.

    Returns:
        str: ``path`` relative to ``basepath`` when it was a prefix.
    """

    if not basepath:
        return path
    if path.startswith(basepath):
        path = path[len(basepath) :]
    path = path.lstrip(SEPARATOR)
    return path or CURRENT_DIR


def join_under(base_path: str, path: str) -> str:
    """Return ``path`` placed under ``base_path`` with exactly one separator between them."""

    return f"{base_path.rstrip(SEPARATOR)}{SEPARATOR}{path.lstrip(SEPARATOR)}"


def _looks_like_file(path: str) -> bool:
    last = path.rsplit(SEPARATOR, 1)[-1]
    if last in (CURRENT_DIR, _PARENT_DIR):
        return False
    return _FILENAME_RE.match(path) is not None


def _directory_of(path: str) -> str:
    parent = posixpath.dirname(path)
    return parent or CURRENT_DIR


def find_common_base_path(paths: Iterable[str]) -> str:
    """Return the longest directory prefix shared by every entry of ``paths``.

    Entries whose last segment looks like a file name (it contains a ``.``)
    are replaced by their directory first, then every entry is normalised on
    its own and the segments are compared position by position. The result
    always ends with ``/``; results that are neither separator-rooted nor
    drive-rooted are prefixed with ``./`` to mark them as relative. Paths that
    share no segment at all, relative ones included, give ``/``.

    Args:
        paths: Paths reported by a tool, absolute or relative.

    Returns:
        str: Common base path, or an empty string when ``paths`` is empty.
    """

    candidates = [path.replace("\\", SEPARATOR) for path in paths]
    if not candidates:
        return ""

    normalized = [normalize(_directory_of(path) if _looks_like_file(path) else path) for path in candidates]
    split_paths = [path.split(SEPARATOR) for path in normalized]
    first = split_paths[0]

    common: list[str] = []
    for index, segment in enumerate(first):
        if all(len(other) > index and other[index] == segment for other in split_paths[1:]):
            common.append(segment)
        else:
            break

    # Nothing shared, or only the empty root segment.
    if not common or common == [""]:
        return SEPARATOR

    result = SEPARATOR.join(common)
    if not result.endswith(SEPARATOR):
        result += SEPARATOR
    if result == f"{CURRENT_DIR}{SEPARATOR}" or result.startswith(f"{CURRENT_DIR}{SEPARATOR}"):
        return result
    if not is_absolute(result):
        result = f"{CURRENT_DIR}{SEPARATOR}{result}"
    return result


__all__ = [
    "CURRENT_DIR",
    "SEPARATOR",
    "find_common_base_path",
    "is_absolute",
    "join_under",
    "normalize",
    "strip_basepath",
]
