# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Language Server Protocol ``publishDiagnostics`` codec."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import Any, Final

from ..features import Feature
from ..models import Issue, Report
from ..serialization import coerce_dict_sequence, coerce_mapping, safe_int
from ..severity import Severity
from .base import OutputKind, ParsableCodec, load_json_document, require_list
from .option_sets import JsonOptions, MessageOptions, ToolOptions, render_json

PUBLISH_DIAGNOSTICS: Final[str] = "textDocument/publishDiagnostics"
FILE_SCHEME: Final[str] = "file://"


class DiagnosticSeverity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


_SEVERITIES_OUT: Final[dict[Severity, DiagnosticSeverity]] = {
    Severity.ERROR: DiagnosticSeverity.ERROR,
    Severity.WARNING: DiagnosticSeverity.WARNING,
    Severity.TIP: DiagnosticSeverity.INFORMATION,
}
_SEVERITIES_IN: Final[dict[int, Severity]] = {
    DiagnosticSeverity.ERROR: Severity.ERROR,
    DiagnosticSeverity.WARNING: Severity.WARNING,
    DiagnosticSeverity.INFORMATION: Severity.TIP,
    DiagnosticSeverity.HINT: Severity.TIP,
}


def _position(issue: Issue) -> dict[str, int]:
    # LSP positions are 0-based; unknown positions (0) are clamped to 0.
    return {"line": max(issue.line - 1, 0), "character": max(issue.column - 1, 0)}


class LspCodec(ParsableCodec):
    """One ``publishDiagnostics`` notification per file, as a JSON array."""

    name = "lsp"
    description = "Language Server Protocol JSON representation for diagnostics"
    output_kind = OutputKind.JSON
    option_sets = (MessageOptions, JsonOptions, ToolOptions)

    def generate(self, report: Report) -> str:
        source = self.settings(ToolOptions).tool_name
        notifications: list[dict[str, Any]] = []
        for path, issues in report.get_issues().items():
            diagnostics = []
            for issue in issues:
                position = _position(issue)
                diagnostic: dict[str, Any] = {
                    "range": {"start": position, "end": dict(position)},
                    "severity": int(_SEVERITIES_OUT[issue.severity]),
                    "code": issue.code,
                    "source": source,
                    "message": issue.message,
                }
                if issue.ref:
                    diagnostic["codeDescription"] = {"href": issue.ref}
                diagnostics.append(diagnostic)
            notifications.append(
                {
                    "jsonrpc": "2.0",
                    "method": PUBLISH_DIAGNOSTICS,
                    "params": {"uri": f"{FILE_SCHEME}{path}", "diagnostics": diagnostics},
                }
            )
        return render_json(notifications, self.settings(JsonOptions))

    def parse(self, text: str, name: str | None = None) -> Report:
        document = load_json_document(text, self.name)
        records = []
        for entry in require_list(document, None, self.name):
            notification = coerce_mapping(entry)
            if notification.get("method") != PUBLISH_DIAGNOSTICS:
                continue
            params = coerce_mapping(notification.get("params"))
            uri = params.get("uri")
            if not isinstance(uri, str):
                continue
            path = uri.removeprefix(FILE_SCHEME)
            for diagnostic in coerce_dict_sequence(params.get("diagnostics")):
                records.append(self._parse_diagnostic(diagnostic, path))
        return self._build_report(records, name=None, fallback=name)

    def _parse_diagnostic(self, diagnostic: Mapping[str, Any], path: str) -> dict[str, Any]:
        start = coerce_mapping(coerce_mapping(diagnostic.get("range")).get("start"))
        severity = _SEVERITIES_IN.get(safe_int(diagnostic.get("severity"), 2), Severity.WARNING)
        return self.issue_record(
            code=diagnostic.get("code"),
            severity=severity,
            message=diagnostic.get("message"),
            path=path,
            line=safe_int(start.get("line")) + 1,
            column=safe_int(start.get("character")) + 1,
            ref=coerce_mapping(diagnostic.get("codeDescription")).get("href"),
        )

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return frozenset({Feature.ISSUE_CODE, Feature.ISSUE_REF})


__all__ = ["DiagnosticSeverity", "LspCodec"]
