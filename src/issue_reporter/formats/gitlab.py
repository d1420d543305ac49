# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""GitLab Code Quality codec."""

from __future__ import annotations

import hashlib
from typing import Any, Final

from ..features import Feature
from ..models import Issue, Report
from ..serialization import coerce_mapping
from ..severity import Severity, map_label
from .base import OutputKind, ParsableCodec, load_json_document, require_list
from .option_sets import JsonOptions, MessageOptions, render_json

_SEVERITIES_OUT: Final[dict[Severity, str]] = {
    Severity.ERROR: "critical",
    Severity.WARNING: "major",
    Severity.TIP: "minor",
}
_SEVERITIES_IN: Final[dict[str, Severity]] = {
    "blocker": Severity.ERROR,
    "critical": Severity.ERROR,
    "major": Severity.WARNING,
    "minor": Severity.TIP,
    "info": Severity.TIP,
}


def fingerprint(path: str, issue: Issue) -> str:
    """Return the stable identifier GitLab uses to track an issue across runs."""

    # Not a security use of MD5; GitLab only needs a stable digest.
    material = f"{path}{issue.line}{issue.code}{issue.message}".encode()
    return hashlib.md5(material, usedforsecurity=False).hexdigest()


class GitLabCodec(ParsableCodec):
    """GitLab Code Quality report: a JSON array of issues.

    The format has no column; parsed issues always have column ``0``.
    """

    name = "gitlab"
    description = "GitLab Code Quality JSON"
    output_kind = OutputKind.JSON
    option_sets = (MessageOptions, JsonOptions)

    def generate(self, report: Report) -> str:
        entries: list[dict[str, Any]] = []
        for path, issues in report.get_issues().items():
            for issue in issues:
                entries.append(
                    {
                        "description": issue.message,
                        "check_name": issue.code,
                        "fingerprint": fingerprint(path, issue),
                        "severity": _SEVERITIES_OUT[issue.severity],
                        "location": {"path": path, "lines": {"begin": issue.line}},
                    }
                )
        return render_json(entries, self.settings(JsonOptions))

    def parse(self, text: str, name: str | None = None) -> Report:
        document = load_json_document(text, self.name)
        records = []
        for entry in require_list(document, None, self.name):
            data = coerce_mapping(entry)
            location = coerce_mapping(data.get("location"))
            if not location:
                continue
            records.append(
                self.issue_record(
                    code=data.get("check_name"),
                    severity=map_label(data.get("severity"), _SEVERITIES_IN),
                    message=data.get("description"),
                    path=location.get("path"),
                    line=coerce_mapping(location.get("lines")).get("begin"),
                )
            )
        return self._build_report(records, name=None, fallback=name)

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return frozenset({Feature.PRESERVE_SEVERITY, Feature.ISSUE_LINE, Feature.ISSUE_CODE})


__all__ = ["GitLabCodec", "fingerprint"]
