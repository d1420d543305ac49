# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lossless XML dump of a report tree.

The document mirrors :meth:`Report.to_dict`: a ``<report>`` element carries the
name, base path, timestamps and totals as attributes, an ``<issues>`` child
holds one ``<issue>`` per issue and ``<subReports>`` nests further ``<report>``
elements. Extra data is written as typed ``<item>`` elements.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Final

from ..errors import FormatError, PreconditionError
from ..features import Feature
from ..models import Issue, Report
from ..serialization import ExtraValue, safe_float
from .base import OutputKind, ParsableCodec, load_xml_document, require_root
from .option_sets import MessageOptions, XmlOptions, render_xml

_ISSUE_FIELDS: Final[tuple[str, ...]] = ("code", "severity", "message", "path", "line", "column", "ref", "help")
_TIME_ATTRIBUTES: Final[dict[str, str]] = {"timeStart": "timeStart", "timeEnd": "timeEnd", "time": "totalTime"}


def _extra_type(value: ExtraValue) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    return "str"


def _extra_text(value: ExtraValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _decode_extra(kind: str | None, text: str) -> ExtraValue:
    try:
        if kind == "bool":
            return text.strip().lower() == "true"
        if kind == "int":
            return int(text)
        if kind == "float":
            return float(text)
    except ValueError as exc:
        raise FormatError(f"Invalid {kind} extra value {text!r}", fragment=text) from exc
    return text


def _issue_element(parent: ET.Element, issue: Issue) -> None:
    element = ET.SubElement(parent, "issue")
    record = issue.to_dict()
    for field in _ISSUE_FIELDS:
        ET.SubElement(element, field).text = str(record[field])
    extra = ET.SubElement(element, "extra")
    for key, value in issue.extra.items():
        item = ET.SubElement(extra, "item", {"key": key, "type": _extra_type(value)})
        item.text = _extra_text(value)


def _report_element(report: Report, parent: ET.Element | None = None) -> ET.Element:
    totals = report.totals_recursive()
    attributes = {
        "name": report.name,
        "basePath": report.base_path,
        "errors": str(totals.errors),
        "warnings": str(totals.warnings),
        "tips": str(totals.tips),
        "files": str(totals.files),
    }
    if report.time_start is not None and report.time_end is not None:
        attributes["timeStart"] = repr(report.time_start)
        attributes["timeEnd"] = repr(report.time_end)
    if report.total_time is not None:
        attributes["time"] = repr(report.total_time)
    element = ET.Element("report", attributes) if parent is None else ET.SubElement(parent, "report", attributes)

    issues = ET.SubElement(element, "issues")
    for issue in report.get_issues(by_file=False, recursive=False):
        _issue_element(issues, issue)
    children = ET.SubElement(element, "subReports")
    for child in report.sub_reports.values():
        _report_element(child, children)
    return element


def _issue_data(element: ET.Element) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for field in _ISSUE_FIELDS:
        child = element.find(field)
        if child is not None:
            data[field] = child.text or ""
    extra: dict[str, ExtraValue] = {}
    for item in element.iterfind("extra/item"):
        key = item.get("key")
        if key:
            extra[key] = _decode_extra(item.get("type"), item.text or "")
    data["extra"] = extra
    return data


def _report_data(element: ET.Element) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": element.get("name", ""),
        "basePath": element.get("basePath", ""),
        "issues": [_issue_data(issue) for issue in element.iterfind("issues/issue")],
        "subReports": [_report_data(child) for child in element.iterfind("subReports/report")],
    }
    for attribute, key in _TIME_ATTRIBUTES.items():
        value = safe_float(element.get(attribute))
        if value is not None:
            data[key] = value
    return data


class RawXmlCodec(ParsableCodec):
    name = "rawxml"
    description = "Complete XML representation"
    output_kind = OutputKind.XML
    option_sets = (MessageOptions, XmlOptions)

    def generate(self, report: Report) -> str:
        return render_xml(_report_element(report), self.settings(XmlOptions))

    def parse(self, text: str, name: str | None = None) -> Report:
        root = load_xml_document(text, self.name)
        require_root(root, "report", self.name)
        data = _report_data(root)
        if not data["name"]:
            data["name"] = name or self.default_report_name()
        try:
            return Report.from_dict(data)
        except PreconditionError as exc:
            raise FormatError(f"Invalid {self.name} document: {exc}", fragment=text[:200]) from exc

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return Feature.all()


__all__ = ["RawXmlCodec"]
