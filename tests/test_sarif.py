# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the SARIF codec."""

from __future__ import annotations

import json

import pytest

from issue_reporter.errors import FormatError
from issue_reporter.formats import SarifCodec
from issue_reporter.models import Report
from issue_reporter.severity import Severity


def test_generate_layout(report: Report) -> None:
    report.get_issues(by_file=False)[0].add_extra("fixable", True)
    log = json.loads(SarifCodec({"tool-name": "phpstan"}).generate(report))

    assert log["version"] == "2.1.0"
    (run,) = log["runs"]
    driver = run["tool"]["driver"]
    assert driver["name"] == "phpstan"
    rules = {rule["id"]: rule for rule in driver["rules"]}
    assert rules["E100"]["helpUri"] == "https://example.com/rules/E100"
    assert rules["E100"]["help"] == {"text": "Declare the variable before use"}
    assert "helpUri" not in rules["W200"]

    levels = [result["level"] for result in run["results"]]
    assert levels == ["error", "warning", "note", "error"]
    first = run["results"][0]
    assert first["properties"] == {"fixable": True}
    location = first["locations"][0]["physicalLocation"]
    assert location["artifactLocation"]["uri"] == "/project/base/src/File1.php"
    assert location["region"] == {"startLine": 10, "endLine": 10, "startColumn": 5, "endColumn": 5}


def test_generate_omits_unknown_region() -> None:
    report = Report("r", "/srv/").start()
    report.warning("W1", "file level", "a.py")
    log = json.loads(SarifCodec().generate(report))
    assert "region" not in log["runs"][0]["results"][0]["locations"][0]["physicalLocation"]


def test_parse_round_trip(report: Report) -> None:
    codec = SarifCodec()
    parsed = codec.parse(codec.generate(report), "from-sarif")

    assert parsed.name == "from-sarif"
    issues = parsed.get_issues(by_file=False)
    assert [issue.severity for issue in issues] == [
        Severity.ERROR,
        Severity.WARNING,
        Severity.TIP,
        Severity.ERROR,
    ]
    assert issues[0].help == "Declare the variable before use"
    assert issues[0].ref == "https://example.com/rules/E100"
    assert issues[3].help == "Cast the value"
    assert (issues[1].line, issues[1].column) == (12, 121)


def test_rule_help_is_shared_per_code() -> None:
    report = Report("r", "/srv/").start()
    report.error("E1", "first", "a.py", 1, help="first help")
    report.error("E1", "second", "b.py", 2, help="second help")
    codec = SarifCodec()

    issues = codec.parse(codec.generate(report)).get_issues(by_file=False)

    assert [issue.help for issue in issues] == ["first help", "first help"]


def test_parse_defaults() -> None:
    text = json.dumps({"runs": [{"results": [{"level": "none", "message": {"text": "m"}}]}]})
    (issue,) = SarifCodec().parse(text).get_issues(by_file=False)
    assert issue.severity is Severity.WARNING
    assert issue.code == "unknown"
    assert issue.path == "/"


@pytest.mark.parametrize("text", ["{", json.dumps({"version": "2.1.0"}), json.dumps([])])
def test_parse_rejects_invalid_documents(text: str) -> None:
    with pytest.raises(FormatError):
        SarifCodec().parse(text)
