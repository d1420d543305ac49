# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the issue and report models."""

from __future__ import annotations

import pytest

from issue_reporter.errors import PreconditionError
from issue_reporter.models import Issue, Report, ReportTotals
from issue_reporter.serialization import jsonify
from issue_reporter.severity import Severity, map_label


def test_severity_order_and_wire_values() -> None:
    assert Severity.ERROR > Severity.WARNING > Severity.TIP
    assert [int(member) for member in Severity] == [5, 3, 0]
    assert Severity.coerce("warning") is Severity.WARNING
    assert Severity.coerce(" Tip ") is Severity.TIP
    assert Severity.coerce("5") is Severity.ERROR
    with pytest.raises(ValueError):
        Severity.coerce("fatal")
    with pytest.raises(ValueError):
        Severity.coerce(True)


def test_map_label_falls_back_to_default() -> None:
    mapping = {"error": Severity.ERROR}
    assert map_label("ERROR", mapping) is Severity.ERROR
    assert map_label("notice", mapping) is Severity.WARNING
    assert map_label(None, mapping, Severity.TIP) is Severity.TIP


def test_issue_helpers() -> None:
    issue = Issue(code="E1", severity="error", message="boom")
    assert issue.severity_label == "ERROR"
    assert issue.path == "."
    assert issue.add_code("phpcs").code == "phpcs.E1"
    assert Issue(code="", severity=Severity.TIP).add_code("tool").code == "tool"
    issue.add_extra("count", 3)
    assert issue.to_dict()["extra"] == {"count": 3}


def test_issue_from_dict_names_missing_key() -> None:
    record = {"code": "E1", "severity": 5, "message": "m", "path": "/a.py"}
    with pytest.raises(PreconditionError, match="'line'"):
        Issue.from_dict(record)


def test_issue_from_dict_rejects_unknown_severity() -> None:
    record = {"code": "E1", "severity": "fatal", "message": "m", "path": "/a.py", "line": 1}
    with pytest.raises(PreconditionError):
        Issue.from_dict(record)


def test_issue_from_dict_accepts_optional_fields() -> None:
    issue = Issue.from_dict(
        {"code": "E1", "severity": "tip", "message": "m", "path": "/a.py", "line": 4, "help": "h", "extra": {"k": "v"}}
    )
    assert issue.severity is Severity.TIP
    assert issue.column == 0
    assert issue.help == "h"
    assert issue.extra == {"k": "v"}


def test_adding_issue_requires_started_report() -> None:
    report = Report("Lint", "/project/base/")
    issue = Issue(code="E1", severity=Severity.ERROR, message="m", path="src/a.php")
    with pytest.raises(PreconditionError, match="not been started"):
        report.add_issue(issue)

    report.start()
    report.add_issue(issue)
    assert report.get_issues(by_file=False) == [issue]


def test_adding_issue_requires_code() -> None:
    report = Report("Lint").start()
    with pytest.raises(PreconditionError, match="code"):
        report.add_issue(Issue(code="  ", severity=Severity.ERROR, message="m"))
    assert not report.has_issues()


def test_attach_rewrites_relative_path() -> None:
    report = Report("Lint", "/project/base/").start()
    issue = report.warning("W1", "  spaced message  ", "src/File1.php", 3)
    assert issue.path == "/project/base/src/File1.php"
    assert issue.relative_path == "src/File1.php"
    assert issue.message == "spaced message"


def test_attach_resolves_placeholder_and_absolute_paths() -> None:
    report = Report("Lint", "/project/base").start()
    placeholder = report.error("E1", "global problem")
    absolute = report.error("E2", "elsewhere", "/project/base/./lib/../src/x.py")
    assert report.base_path == "/project/base/"
    assert placeholder.path == "/project/base/"
    assert placeholder.relative_path == "."
    assert absolute.path == "/project/base/src/x.py"
    assert absolute.relative_path == "src/x.py"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("../other/x.php", "/project/other/x.php"),
        ("src/./deep/../x.php", "/project/base/src/x.php"),
        ("src\\win\\x.php", "/project/base/src/win/x.php"),
        ("../../../x.php", "/x.php"),
    ],
)
def test_attached_paths_are_normalised(path: str, expected: str) -> None:
    report = Report("Lint", "/project/base/").start()
    assert report.error("E1", "m", path).path == expected


def test_same_file_counted_once_across_spellings() -> None:
    report = Report("r", "/project/base/").start()
    relative = report.error("E1", "m", "../other/x.php")
    absolute = report.error("E2", "m", "/project/other/x.php")
    assert relative.path == absolute.path == "/project/other/x.php"
    assert report.totals_recursive() == ReportTotals(errors=2, warnings=0, tips=0, files=1)


def test_reports_without_issues_checks_descendants() -> None:
    root = Report("root").start()
    empty = Report("empty").start()
    nested = Report("nested").start()
    grandchild = Report("grandchild", "/srv/").start()
    grandchild.tip("T1", "deep tip", "a.py")
    nested.merge_in(grandchild)
    root.merge_in(empty, nested)

    assert root.reports_without_issues() == {"empty": empty}
    assert root.reports_with_issues() == {"nested": nested}
    assert root.has_issues()
    assert not empty.has_issues()


def test_base_path_is_normalised() -> None:
    assert Report("r").base_path == "/"
    assert Report("r", "C:\\work\\proj").base_path == "C:/work/proj/"


def test_get_issues_groups_by_exact_path_string() -> None:
    report = Report("Lint", "/p/").start()
    report.error("E1", "one", "src/File.php")
    report.error("E2", "two", "src/file.php")
    report.error("E3", "three", "src/File.php")
    grouped = report.get_issues()
    assert list(grouped) == ["/p/src/File.php", "/p/src/file.php"]
    assert [issue.code for issue in grouped["/p/src/File.php"]] == ["E1", "E3"]


def test_get_issues_recursion(report: Report) -> None:
    own = report.get_issues(by_file=False, recursive=False)
    everything = report.get_issues(by_file=False)
    assert [issue.code for issue in own] == ["E100", "W200", "T300"]
    assert [issue.code for issue in everything] == ["E100", "W200", "T300", "TYPE.mismatch"]
    assert "/project/base/lib/Types.php" in report.get_issues()


def test_totals_are_recursive_and_idempotent(report: Report) -> None:
    first = report.totals_recursive()
    assert first == ReportTotals(errors=2, warnings=1, tips=1, files=3)
    assert report.totals_recursive() == first
    assert (report.total_errors, report.total_warnings, report.total_tips, report.total_files) == (2, 1, 1, 3)
    assert first.as_dict()["totalFiles"] == 3


def test_totals_follow_mutation(report: Report) -> None:
    report.sub_reports["Types"].warning("W9", "late", "lib/Other.php")
    assert report.totals_recursive() == ReportTotals(errors=2, warnings=2, tips=1, files=4)


def test_merge_in_replaces_children_by_name(report: Report) -> None:
    replacement = Report("Types", "/project/base/").start().complete()
    report.merge_in(replacement)
    assert report.sub_reports["Types"] is replacement
    assert report.reports_without_issues() == {"Types": replacement}
    assert report.reports_with_issues() == {}
    assert report.has_issues()


def test_merge_in_rejects_self(report: Report) -> None:
    with pytest.raises(PreconditionError):
        report.merge_in(report)


def test_total_time() -> None:
    report = Report("timed")
    assert report.total_time is None
    report.time_start = 100.0
    report.time_end = 101.5
    assert report.total_time == 1500.0
    report.total_time_override = 42.0
    assert report.total_time == 42.0


def test_to_dict_layout(report: Report) -> None:
    data = report.to_dict()
    assert data["name"] == "Lint"
    assert data["basePath"] == "/project/base/"
    assert list(data["issues"]) == ["/project/base/src/File1.php", "/project/base/src/util/File2.php"]
    assert [child["name"] for child in data["subReports"]] == ["Types"]
    assert data["totalErrors"] == 2
    first = data["issues"]["/project/base/src/File1.php"][0]
    assert first["severity"] == 5
    assert first["ref"] == "https://example.com/rules/E100"


def test_from_dict_restores_report(report: Report) -> None:
    rebuilt = Report.from_dict(report.to_dict())
    assert rebuilt.to_dict() == report.to_dict()
    issue = rebuilt.get_issues(by_file=False)[0]
    assert issue.relative_path == "src/File1.php"
    assert issue.help == "Declare the variable before use"


def test_from_dict_accepts_flat_issue_list() -> None:
    rebuilt = Report.from_dict(
        {
            "name": "flat",
            "basePath": "/srv",
            "issues": [{"code": "X", "severity": "warning", "message": "m", "path": "/srv/a.py", "line": 2}],
            "totalTime": 12,
        }
    )
    assert rebuilt.total_warnings == 1
    assert rebuilt.total_time == 12.0
    assert rebuilt.get_issues(by_file=False)[0].relative_path == "a.py"


@pytest.mark.parametrize("missing", ["basePath", "name", "issues"])
def test_from_dict_requires_fields(report: Report, missing: str) -> None:
    data = report.to_dict()
    del data[missing]
    with pytest.raises(PreconditionError, match=missing):
        Report.from_dict(data)


def test_jsonify_uses_to_dict_layout(report: Report) -> None:
    payload = jsonify(report)
    assert payload == jsonify(report.to_dict())
    assert isinstance(payload, dict)
    assert payload["basePath"] == "/project/base/"
    assert "base_path" not in payload
    assert jsonify(report.issues[0])["severity"] == int(Severity.ERROR)
