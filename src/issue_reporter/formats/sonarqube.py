# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""SonarQube generic issue import codec."""

from __future__ import annotations

from typing import Any, Final

from ..features import Feature
from ..models import Report
from ..serialization import coerce_mapping
from ..severity import Severity, map_label
from .base import OutputKind, ParsableCodec, load_json_document, require_list
from .option_sets import JsonOptions, MessageOptions, ToolOptions, render_json

_SEVERITIES_OUT: Final[dict[Severity, str]] = {
    Severity.ERROR: "BLOCKER",
    Severity.WARNING: "MAJOR",
    Severity.TIP: "MINOR",
}
_TYPES_OUT: Final[dict[Severity, str]] = {
    Severity.ERROR: "BUG",
    Severity.WARNING: "CODE_SMELL",
    Severity.TIP: "CODE_SMELL",
}
_SEVERITIES_IN: Final[dict[str, Severity]] = {
    "blocker": Severity.ERROR,
    "critical": Severity.ERROR,
    "major": Severity.WARNING,
    "minor": Severity.TIP,
    "info": Severity.TIP,
}


class SonarQubeCodec(ParsableCodec):
    name = "sonarqube"
    description = "SonarQube Generic Issue Report JSON representation for static analysis"
    output_kind = OutputKind.JSON
    option_sets = (MessageOptions, JsonOptions, ToolOptions)

    def generate(self, report: Report) -> str:
        engine = self.settings(ToolOptions).tool_name
        issues: list[dict[str, Any]] = []
        for path, file_issues in report.get_issues().items():
            for issue in file_issues:
                text_range: dict[str, int] = {}
                if issue.line > 0:
                    text_range = {"startLine": issue.line, "endLine": issue.line}
                    if issue.column > 0:
                        text_range["startColumn"] = issue.column
                        text_range["endColumn"] = issue.column
                location: dict[str, Any] = {"message": issue.message, "filePath": path}
                if text_range:
                    location["textRange"] = text_range
                issues.append(
                    {
                        "engineId": engine,
                        "ruleId": issue.code,
                        "primaryLocation": location,
                        "type": _TYPES_OUT[issue.severity],
                        "severity": _SEVERITIES_OUT[issue.severity],
                    }
                )
        return render_json({"issues": issues}, self.settings(JsonOptions))

    def parse(self, text: str, name: str | None = None) -> Report:
        document = load_json_document(text, self.name)
        records = []
        for entry in require_list(document, "issues", self.name):
            data = coerce_mapping(entry)
            location = coerce_mapping(data.get("primaryLocation"))
            if not location:
                continue
            text_range = coerce_mapping(location.get("textRange"))
            records.append(
                self.issue_record(
                    code=data.get("ruleId"),
                    severity=map_label(data.get("severity"), _SEVERITIES_IN),
                    message=location.get("message"),
                    path=location.get("filePath"),
                    line=text_range.get("startLine"),
                    column=text_range.get("startColumn"),
                )
            )
        return self._build_report(records, name=None, fallback=name)

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return frozenset({Feature.PRESERVE_SEVERITY, Feature.ISSUE_LINE, Feature.ISSUE_COLUMN, Feature.ISSUE_CODE})


__all__ = ["SonarQubeCodec"]
