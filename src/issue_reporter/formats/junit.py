# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""JUnit XML codec.

Each file becomes a ``<testsuite>`` and each issue a ``<testcase>`` with a
``<failure>``. The failure text is the emacs-style line so CI viewers show the
location, and a ``<properties>`` block records severity, position, help,
reference and extra data.

Reading a document back is deliberately narrower than writing it: only the
``line`` and ``column`` properties are read and every ``<failure>`` or
``<error>`` child becomes an ``ERROR``. Help and reference links found in the
failure text are removed from the message but not kept.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import Any, Final

from ..features import Feature
from ..messages import format_emacs_line, parse_emacs_line
from ..models import Issue, Report
from ..serialization import safe_int
from ..severity import Severity
from .base import OutputKind, ParsableCodec, load_xml_document, require_root
from .option_sets import MessageOptions, ParseMessageOptions, XmlOptions, render_xml

_FAILURE_TAGS: Final[tuple[str, ...]] = ("failure", "error")


class JunitCodec(ParsableCodec):
    name = "junit"
    description = "JUnit XML representation for static analysis reports"
    output_kind = OutputKind.XML
    option_sets = (MessageOptions, XmlOptions, ParseMessageOptions)
    option_defaults = {"parse-message": True}

    def generate(self, report: Report) -> str:
        messages = self.messages
        totals = report.totals_recursive()
        total_time = report.total_time
        root = ET.Element(
            "testsuites",
            {
                "name": report.name,
                "failures": str(totals.errors + totals.warnings + totals.tips),
                "errors": str(totals.errors),
                "time": f"{(total_time or 0.0) / 1000:.3f}",
            },
        )
        if report.time_end is not None:
            root.set("timestamp", str(round(report.time_end)))

        for path, issues in report.get_issues().items():
            suite = ET.SubElement(
                root,
                "testsuite",
                {"name": path, "tests": str(len(issues)), "failures": str(len(issues)), "file": path},
            )
            for issue in issues:
                self._append_case(suite, path, issue, messages)
        return render_xml(root, self.settings(XmlOptions))

    def _append_case(self, suite: ET.Element, path: str, issue: Issue, messages: MessageOptions) -> None:
        case = ET.SubElement(
            suite,
            "testcase",
            {"name": issue.code if messages.show_code else path, "file": path, "line": str(issue.line)},
        )
        failure = ET.SubElement(case, "failure", {"message": issue.message})
        if messages.show_code:
            failure.set("type", issue.code)
        failure.text = format_emacs_line(
            issue,
            issue.severity_label.lower(),
            show_help=messages.show_help,
            show_ref=messages.show_ref,
        )

        props: dict[str, Any] = {
            "severity": issue.severity_label,
            "line": issue.line,
            "column": issue.column,
            "extra": json.dumps(issue.extra),
        }
        if messages.show_help:
            props["help"] = issue.help
        if messages.show_ref:
            props["ref"] = issue.ref
        properties = ET.SubElement(case, "properties")
        for key, value in props.items():
            ET.SubElement(properties, "property", {"name": key, "value": str(value)})

    def parse(self, text: str, name: str | None = None) -> Report:
        root = load_xml_document(text, self.name)
        require_root(root, "testsuites", self.name)
        parse_message = self.settings(ParseMessageOptions).parse_message
        records = []
        for suite in root.iter("testsuite"):
            path = suite.get("file") or suite.get("name") or ""
            for case in suite.iter("testcase"):
                record = self._parse_case(case, path, parse_message)
                if record is not None:
                    records.append(record)
        return self._build_report(records, name=root.get("name"), fallback=name)

    def _parse_case(self, case: ET.Element, path: str, parse_message: bool) -> dict[str, Any] | None:
        element = None
        for tag in _FAILURE_TAGS:
            element = case.find(tag)
            if element is not None:
                break
        if element is None:
            return None

        body = (element.text or "").strip()
        message = element.get("message") or body
        code = element.get("type")
        line = safe_int(case.get("line"))
        column = 0

        if parse_message and body:
            parsed = parse_emacs_line(body)
            if parsed is not None:
                message = parsed.message or message
                line = parsed.line or line
                column = parsed.column or column
                code = code or parsed.code

        properties = case.find("properties")
        if properties is not None:
            for prop in properties.iter("property"):
                if prop.get("name") == "line":
                    line = safe_int(prop.get("value"), line)
                elif prop.get("name") == "column":
                    column = safe_int(prop.get("value"), column)

        return self.issue_record(
            code=code,
            severity=Severity.ERROR,
            message=message,
            path=path,
            line=line,
            column=column,
        )

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return frozenset({Feature.REPORT_NAME, Feature.ISSUE_LINE, Feature.ISSUE_COLUMN, Feature.ISSUE_CODE})

    @classmethod
    def supports_extra(cls) -> frozenset[Feature]:
        return frozenset({Feature.PARSABLE_MESSAGE})


__all__ = ["JunitCodec"]
