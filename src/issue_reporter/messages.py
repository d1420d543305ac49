# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Embed help text and reference links into a free-text message and read them back.

Formats without dedicated fields for help and references append them to the
message as ``message (help) [ref]``. Every codec that does so goes through the
helpers below, so the layout and its parsing stay identical across formats.
Both trailing groups are optional and only recognised at the very end of the
text; parentheses or brackets earlier in the message are left alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .models import Issue

_HELP: Final[str] = r"(?:\s+\((?P<help>[^()]*(?:\([^()]*\)[^()]*)*)\))?"
_REF: Final[str] = r"(?:\s+\[(?P<ref>[^\[\]\s]+)\])?"
_CODE: Final[str] = r"(?:\s+\(#(?P<code>[^()\s]+)\))?"

MESSAGE_RE: Final[re.Pattern[str]] = re.compile(rf"^(?P<message>.*?){_HELP}{_REF}\s*$", re.DOTALL)
EMACS_RE: Final[re.Pattern[str]] = re.compile(
    r"^(?P<path>(?:[A-Za-z]:)?[^:]+):(?P<line>\d+):(?P<column>\d+):\s+(?P<severity>[A-Za-z]+)\s+-\s"
    rf"(?P<message>.*?){_CODE}{_HELP}{_REF}\s*$",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    """Fields recovered from an embedded message."""

    message: str
    help: str | None = None
    ref: str | None = None
    code: str | None = None
    path: str | None = None
    line: int = 0
    column: int = 0
    severity: str | None = None


def format_message(
    message: str,
    *,
    help: str = "",
    ref: str = "",
    show_help: bool = True,
    show_ref: bool = True,
) -> str:
    """Return ``message`` followed by `` (help)`` and `` [ref]`` when enabled and present."""

    text = message
    if show_help and help:
        text += f" ({help})"
    if show_ref and ref:
        text += f" [{ref}]"
    return text


def format_emacs_line(issue: Issue, severity: str, *, show_help: bool = True, show_ref: bool = True) -> str:
    """Return ``path:line:col: severity - message (#code)`` plus the embedded help and ref."""

    head = f"{issue.path}:{issue.line}:{issue.column}: {severity} - {issue.message} (#{issue.code})"
    return format_message(head, help=issue.help, ref=issue.ref, show_help=show_help, show_ref=show_ref)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_message(text: str) -> ParsedMessage:
    """Split ``text`` into the message and its trailing ``(help)`` and ``[ref]``.

    Args:
        text: Message as written by :func:`format_message`, or any free text.

    Returns:
        ParsedMessage: Trimmed message with ``help``/``ref`` set when present.
    """

    match = MESSAGE_RE.match(text)
    if match is None:  # pragma: no cover - the pattern accepts any text
        return ParsedMessage(message=text.strip())
    return ParsedMessage(
        message=match.group("message").strip(),
        help=_clean(match.group("help")),
        ref=_clean(match.group("ref")),
    )


def parse_emacs_line(line: str) -> ParsedMessage | None:
    """Parse a line written by :func:`format_emacs_line`.

    Returns:
        ParsedMessage | None: Parsed fields, or ``None`` when ``line`` does not
        follow the ``path:line:col: severity - message`` layout.
    """

    match = EMACS_RE.match(line.strip())
    if match is None:
        return None
    return ParsedMessage(
        message=match.group("message").strip(),
        help=_clean(match.group("help")),
        ref=_clean(match.group("ref")),
        code=_clean(match.group("code")),
        path=match.group("path").strip(),
        line=int(match.group("line")),
        column=int(match.group("column")),
        severity=match.group("severity").lower(),
    )


__all__ = [
    "EMACS_RE",
    "MESSAGE_RE",
    "ParsedMessage",
    "format_emacs_line",
    "format_message",
    "parse_emacs_line",
    "parse_message",
]
