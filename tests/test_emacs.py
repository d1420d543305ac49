# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the emacs-style text codec."""

from __future__ import annotations

import pytest

from issue_reporter.errors import FormatError
from issue_reporter.formats import EmacsCodec
from issue_reporter.models import Report
from issue_reporter.severity import Severity


def test_generate_lines(report: Report) -> None:
    lines = EmacsCodec().generate(report).splitlines()

    assert lines == [
        "/project/base/src/File1.php:10:5: error - Undefined variable $foo (#E100) (Declare the variable before use)",
        "/project/base/src/File1.php:12:121: warning - Line exceeds 120 characters (#W200)",
        "/project/base/src/util/File2.php:3:1: warning - Prefer early return (#T300)",
        "/project/base/lib/Types.php:7:2: error - Expected int, got string (#TYPE.mismatch) (Cast the value)",
    ]


def test_parse_round_trip(report: Report) -> None:
    codec = EmacsCodec({"show-ref": True})
    parsed = codec.parse(codec.generate(report), "emacs run")

    assert parsed.name == "emacs run"
    assert parsed.base_path == "/project/base/"
    issues = parsed.get_issues(by_file=False)
    assert [issue.severity for issue in issues] == [
        Severity.ERROR,
        Severity.WARNING,
        Severity.WARNING,
        Severity.ERROR,
    ]
    first = issues[0]
    assert (first.code, first.line, first.column) == ("E100", 10, 5)
    assert first.message == "Undefined variable $foo"
    assert first.help == "Declare the variable before use"
    assert first.ref == "https://example.com/rules/E100"
    assert first.relative_path == "src/File1.php"


def test_parse_skips_blank_lines() -> None:
    text = "\n/srv/a.py:1:1: error - m (#X)\n\n"
    assert len(EmacsCodec().parse(text).get_issues(by_file=False)) == 1


def test_parse_empty_text() -> None:
    parsed = EmacsCodec().parse("")
    assert parsed.base_path == "/"
    assert parsed.name == "Parsed emacs report"


def test_parse_rejects_foreign_lines() -> None:
    text = "/srv/a.py:1:1: error - m (#X)\nsomething else"
    with pytest.raises(FormatError, match="Line 2") as excinfo:
        EmacsCodec().parse(text)
    assert excinfo.value.fragment == "something else"
