# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the JUnit codec."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from issue_reporter.errors import FormatError
from issue_reporter.formats import JunitCodec
from issue_reporter.models import Report
from issue_reporter.severity import Severity


def _root(text: str) -> ET.Element:
    return ET.fromstring(text.split("\n", 1)[1])


def test_generate_layout(report: Report) -> None:
    root = _root(JunitCodec().generate(report))

    assert root.tag == "testsuites"
    assert root.get("name") == "Lint"
    assert root.get("failures") == "4"
    assert root.get("errors") == "2"
    assert root.get("timestamp") is not None
    suites = root.findall("testsuite")
    assert [suite.get("file") for suite in suites] == [
        "/project/base/src/File1.php",
        "/project/base/src/util/File2.php",
        "/project/base/lib/Types.php",
    ]
    assert suites[0].get("tests") == "2"

    case = suites[0].find("testcase")
    assert case is not None
    assert case.get("name") == "E100"
    assert case.get("line") == "10"
    failure = case.find("failure")
    assert failure is not None
    assert failure.get("message") == "Undefined variable $foo"
    assert failure.get("type") == "E100"
    assert failure.text == (
        "/project/base/src/File1.php:10:5: error - Undefined variable $foo (#E100) (Declare the variable before use)"
    )
    properties = {prop.get("name"): prop.get("value") for prop in case.iterfind("properties/property")}
    assert properties == {
        "severity": "ERROR",
        "line": "10",
        "column": "5",
        "extra": "{}",
        "help": "Declare the variable before use",
    }


def test_generate_without_code(report: Report) -> None:
    case = _root(JunitCodec({"show-code": False}).generate(report)).find("testsuite/testcase")
    assert case is not None
    assert case.get("name") == "/project/base/src/File1.php"
    failure = case.find("failure")
    assert failure is not None
    assert failure.get("type") is None


def test_parse_is_lossier_than_generate(report: Report) -> None:
    codec = JunitCodec({"show-ref": True})
    parsed = codec.parse(codec.generate(report))

    assert parsed.name == "Lint"
    issues = parsed.get_issues(by_file=False)
    assert [(issue.code, issue.line, issue.column) for issue in issues] == [
        ("E100", 10, 5),
        ("W200", 12, 121),
        ("T300", 3, 1),
        ("TYPE.mismatch", 7, 2),
    ]
    # Failures always read back as errors, and the properties block only feeds back positions.
    assert {issue.severity for issue in issues} == {Severity.ERROR}
    assert issues[0].message == "Undefined variable $foo"
    assert issues[0].help == ""
    assert issues[0].ref == ""


def test_parse_error_elements_and_message_body() -> None:
    text = """
    <testsuites>
      <testsuite name="a.py">
        <testcase name="x" line="4">
          <error>a.py:4:2: error - Broken import (#C1) (Install it)</error>
        </testcase>
        <testcase name="passing"/>
      </testsuite>
    </testsuites>
    """
    report = JunitCodec().parse(text, "ci")
    assert report.name == "ci"
    (issue,) = report.get_issues(by_file=False)
    assert issue.severity is Severity.ERROR
    assert (issue.code, issue.line, issue.column) == ("C1", 4, 2)
    assert issue.message == "Broken import"


def test_parse_without_message_parsing() -> None:
    text = (
        '<testsuites><testsuite name="a.py"><testcase name="x" line="4">'
        '<failure message="m">a.py:4:2: warning - m (#C1)</failure>'
        "</testcase></testsuite></testsuites>"
    )
    (issue,) = JunitCodec({"parse-message": False}).parse(text).get_issues(by_file=False)
    assert (issue.code, issue.line, issue.column) == ("unknown", 4, 0)
    assert issue.message == "m"


@pytest.mark.parametrize("text", ["<testsuites>", "<testsuite/>"])
def test_parse_rejects_invalid_documents(text: str) -> None:
    with pytest.raises(FormatError):
        JunitCodec().parse(text)


def test_parse_reads_failures_as_errors() -> None:
    report = Report("Single", "/srv/")
    report.start()
    report.error("E1", "Broken", "a.py", 3, 1)
    report.tip("T1", "Consider", "a.py", 5, 1)
    report.complete()

    codec = JunitCodec()
    issues = codec.parse(codec.generate(report)).get_issues(by_file=False)

    assert [(issue.code, issue.severity) for issue in issues] == [("E1", Severity.ERROR), ("T1", Severity.ERROR)]
