# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Emacs-style line-oriented text codec.

Every issue is one line::

    /path/to/file.ext:line:column: severity - message (#code) (help) [ref]
"""

from __future__ import annotations

from typing import Final

from ..errors import FormatError
from ..features import Feature
from ..messages import format_emacs_line, parse_emacs_line
from ..models import Report
from ..severity import Severity, map_label
from .base import OutputKind, ParsableCodec
from .option_sets import MessageOptions

_LEVELS: Final[dict[Severity, str]] = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.TIP: "warning",
}
_SEVERITIES: Final[dict[str, Severity]] = {"error": Severity.ERROR}


class EmacsCodec(ParsableCodec):
    name = "emacs"
    description = "Emacs-style text representation for static analysis reports"
    output_kind = OutputKind.TXT

    def generate(self, report: Report) -> str:
        messages = self.messages
        lines = [
            format_emacs_line(
                issue,
                _LEVELS[issue.severity],
                show_help=messages.show_help,
                show_ref=messages.show_ref,
            )
            for issues in report.get_issues().values()
            for issue in issues
        ]
        return "\n".join(lines)

    def parse(self, text: str, name: str | None = None) -> Report:
        records = []
        for number, raw_line in enumerate(text.splitlines(), start=1):
            if not raw_line.strip():
                continue
            parsed = parse_emacs_line(raw_line)
            if parsed is None:
                raise FormatError(f"Line {number} is not an emacs-style diagnostic", fragment=raw_line)
            records.append(
                self.issue_record(
                    code=parsed.code,
                    severity=map_label(parsed.severity, _SEVERITIES),
                    message=parsed.message,
                    path=parsed.path,
                    line=parsed.line,
                    column=parsed.column,
                    help=parsed.help,
                    ref=parsed.ref,
                )
            )
        return self._build_report(records, name=None, fallback=name)

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return frozenset({Feature.ISSUE_LINE, Feature.ISSUE_COLUMN})

    @classmethod
    def supports_extra(cls) -> frozenset[Feature]:
        return frozenset({Feature.ISSUE_CODE, Feature.ISSUE_HELP, Feature.ISSUE_REF, Feature.PARSABLE_MESSAGE})


__all__ = ["EmacsCodec"]
