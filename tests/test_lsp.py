# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the LSP diagnostics codec."""

from __future__ import annotations

import json

import pytest

from issue_reporter.errors import FormatError
from issue_reporter.formats import LspCodec
from issue_reporter.models import Report
from issue_reporter.severity import Severity


def test_generate_layout(report: Report) -> None:
    notifications = json.loads(LspCodec({"tool-name": "psalm"}).generate(report))

    assert len(notifications) == 3
    first = notifications[0]
    assert first["method"] == "textDocument/publishDiagnostics"
    assert first["params"]["uri"] == "file:///project/base/src/File1.php"
    diagnostic = first["params"]["diagnostics"][0]
    assert diagnostic["range"]["start"] == {"line": 9, "character": 4}
    assert diagnostic["severity"] == 1
    assert diagnostic["source"] == "psalm"
    assert diagnostic["codeDescription"] == {"href": "https://example.com/rules/E100"}
    assert "codeDescription" not in first["params"]["diagnostics"][1]


def test_parse_round_trip(report: Report) -> None:
    codec = LspCodec()
    issues = codec.parse(codec.generate(report)).get_issues(by_file=False)

    assert [(issue.code, issue.severity, issue.line, issue.column) for issue in issues] == [
        ("E100", Severity.ERROR, 10, 5),
        ("W200", Severity.WARNING, 12, 121),
        ("T300", Severity.TIP, 3, 1),
        ("TYPE.mismatch", Severity.ERROR, 7, 2),
    ]
    assert issues[0].ref == "https://example.com/rules/E100"
    assert issues[0].path == "/project/base/src/File1.php"


def test_unknown_positions_come_back_as_first_line() -> None:
    report = Report("r", "/srv/").start()
    report.warning("W1", "whole file", "a.py")
    codec = LspCodec()

    (issue,) = codec.parse(codec.generate(report)).get_issues(by_file=False)

    assert (issue.line, issue.column) == (1, 1)


def test_parse_skips_other_notifications() -> None:
    text = json.dumps(
        [
            {"jsonrpc": "2.0", "method": "window/logMessage", "params": {"message": "hi"}},
            {
                "jsonrpc": "2.0",
                "method": "textDocument/publishDiagnostics",
                "params": {
                    "uri": "file:///srv/a.py",
                    "diagnostics": [{"message": "m", "severity": 4, "range": {"start": {"line": 0, "character": 0}}}],
                },
            },
        ]
    )
    (issue,) = LspCodec().parse(text).get_issues(by_file=False)
    assert issue.severity is Severity.TIP
    assert issue.code == "unknown"


@pytest.mark.parametrize("text", ["", json.dumps({"method": "textDocument/publishDiagnostics"})])
def test_parse_rejects_invalid_documents(text: str) -> None:
    with pytest.raises(FormatError):
        LspCodec().parse(text)
