# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Checkstyle XML codec."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Final

from ..features import Feature
from ..models import Report
from ..severity import Severity, map_label
from .base import OutputKind, ParsableCodec, load_xml_document, require_root
from .option_sets import MessageOptions, XmlOptions, render_xml

CHECKSTYLE_VERSION: Final[str] = "3.13.3"

# TIP has no checkstyle level of its own and is written as "warning".
_LEVELS: Final[dict[Severity, str]] = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.TIP: "warning",
}
_SEVERITIES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "info": Severity.TIP,
}


class CheckstyleCodec(ParsableCodec):
    """Write and read ``<checkstyle><file><error/></file></checkstyle>`` documents."""

    name = "checkstyle"
    description = "Checkstyle XML representation"
    output_kind = OutputKind.XML
    option_sets = (MessageOptions, XmlOptions)

    def generate(self, report: Report) -> str:
        root = ET.Element("checkstyle", {"version": CHECKSTYLE_VERSION})
        for path, issues in report.get_issues().items():
            file_element = ET.SubElement(root, "file", {"name": path})
            for issue in issues:
                ET.SubElement(
                    file_element,
                    "error",
                    {
                        "line": str(issue.line),
                        "column": str(issue.column),
                        "severity": _LEVELS[issue.severity],
                        "message": issue.message,
                        "source": issue.code,
                    },
                )
        return render_xml(root, self.settings(XmlOptions))

    def parse(self, text: str, name: str | None = None) -> Report:
        root = load_xml_document(text, self.name)
        require_root(root, "checkstyle", self.name)
        records = []
        for file_element in root.iter("file"):
            path = file_element.get("name", "")
            for error in file_element.iter("error"):
                records.append(
                    self.issue_record(
                        code=error.get("source"),
                        severity=map_label(error.get("severity"), _SEVERITIES),
                        message=error.get("message"),
                        path=path,
                        line=error.get("line"),
                        column=error.get("column"),
                    )
                )
        return self._build_report(records, name=None, fallback=name)

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return frozenset({Feature.ISSUE_LINE, Feature.ISSUE_COLUMN, Feature.ISSUE_CODE})


__all__ = ["CheckstyleCodec"]
