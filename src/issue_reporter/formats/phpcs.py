# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PHP_CodeSniffer JSON report codec."""

from __future__ import annotations

from typing import Any, Final

from ..features import Feature
from ..messages import format_message, parse_message
from ..models import Report
from ..serialization import coerce_dict_sequence
from ..severity import Severity, map_label
from .base import OutputKind, ParsableCodec, load_json_document, require_mapping
from .option_sets import JsonOptions, MessageOptions, ParseMessageOptions, render_json

_TYPES: Final[dict[Severity, str]] = {
    Severity.ERROR: "ERROR",
    Severity.WARNING: "WARNING",
    Severity.TIP: "WARNING",
}
_SEVERITIES: Final[dict[str, Severity]] = {"error": Severity.ERROR, "warning": Severity.WARNING}


class PhpCsCodec(ParsableCodec):
    """``phpcs --report=json`` layout.

    PHP_CodeSniffer only knows errors and warnings, so tips are written as
    warnings. Help and reference are appended to the message; they are only
    read back when ``parse-message`` is on.
    """

    name = "phpcs"
    description = "PHP_CodeSniffer JSON representation"
    output_kind = OutputKind.JSON
    option_sets = (MessageOptions, JsonOptions, ParseMessageOptions)

    def generate(self, report: Report) -> str:
        messages = self.messages
        totals = report.totals_recursive()
        files: dict[str, dict[str, Any]] = {}
        for path, issues in report.get_issues().items():
            entries = []
            errors = 0
            for issue in issues:
                kind = _TYPES[issue.severity]
                if kind == "ERROR":
                    errors += 1
                entry: dict[str, Any] = {
                    "message": format_message(
                        issue.message,
                        help=issue.help,
                        ref=issue.ref,
                        show_help=messages.show_help,
                        show_ref=messages.show_ref,
                    ),
                    "severity": int(issue.severity),
                    "fixable": False,
                    "type": kind,
                    "line": issue.line,
                    "column": issue.column,
                }
                if messages.show_code:
                    entry["source"] = issue.code
                entries.append(entry)
            files[path] = {"errors": errors, "warnings": len(issues) - errors, "messages": entries}

        output = {
            "totals": {"errors": totals.errors, "warnings": totals.warnings + totals.tips, "fixable": 0},
            "files": files,
        }
        return render_json(output, self.settings(JsonOptions))

    def parse(self, text: str, name: str | None = None) -> Report:
        document = load_json_document(text, self.name)
        files = require_mapping(document, "files", self.name)
        parse_messages = self.settings(ParseMessageOptions).parse_message
        records = []
        for path, file_report in files.items():
            if not isinstance(file_report, dict):
                continue
            for entry in coerce_dict_sequence(file_report.get("messages")):
                message = entry.get("message")
                help_text = ref = None
                if parse_messages and isinstance(message, str):
                    parsed = parse_message(message)
                    message, help_text, ref = parsed.message, parsed.help, parsed.ref
                records.append(
                    self.issue_record(
                        code=entry.get("source"),
                        severity=map_label(entry.get("type"), _SEVERITIES),
                        message=message,
                        path=path,
                        line=entry.get("line"),
                        column=entry.get("column"),
                        help=help_text,
                        ref=ref,
                    )
                )
        return self._build_report(records, name=None, fallback=name)

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return frozenset({Feature.ISSUE_LINE, Feature.ISSUE_COLUMN, Feature.ISSUE_CODE})

    @classmethod
    def supports_extra(cls) -> frozenset[Feature]:
        return frozenset({Feature.ISSUE_HELP, Feature.ISSUE_REF, Feature.PARSABLE_MESSAGE})


__all__ = ["PhpCsCodec"]
