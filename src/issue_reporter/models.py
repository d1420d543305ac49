# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Issue and Report models shared by every codec."""

from __future__ import annotations

import time
from collections import Counter
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Final, Literal, overload

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import PreconditionError
from .paths import CURRENT_DIR, SEPARATOR, is_absolute, join_under, normalize, strip_basepath
from .serialization import ExtraValue, coerce_dict_sequence, safe_float
from .severity import Severity

_REQUIRED_ISSUE_KEYS: Final[tuple[str, ...]] = ("code", "severity", "message", "path", "line")


class Issue(BaseModel):
    """A single finding reported against a file, line and column.

    ``path`` holds whatever the producer supplied until the issue is attached
    to a :class:`Report`; from then on it is the absolute, normalised path and
    ``relative_path`` is that path with the report's base path stripped.
    """

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    UNKNOWN_CODE: ClassVar[str] = "unknown"

    code: str
    severity: Severity
    message: str = ""
    path: str = CURRENT_DIR
    relative_path: str = Field(default="", alias="relativePath")
    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)
    ref: str = ""
    help: str = ""
    extra: dict[str, ExtraValue] = Field(default_factory=dict)

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: object) -> Severity:
        return Severity.coerce(value)

    @field_validator("path", mode="before")
    @classmethod
    def _default_path(cls, value: object) -> object:
        return CURRENT_DIR if value is None else value

    @field_validator("line", "column", mode="before")
    @classmethod
    def _default_position(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("code", "message", "ref", "help", mode="before")
    @classmethod
    def _default_text(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def severity_label(self) -> str:
        """Return ``ERROR``, ``WARNING`` or ``TIP``."""

        return self.severity.label

    def add_code(self, prefix: str) -> Issue:
        """Prefix the code with ``prefix`` using a dot, or set it when empty."""

        self.code = f"{prefix}.{self.code}" if self.code else prefix
        return self

    def add_extra(self, key: str, value: ExtraValue) -> Issue:
        """Store ``value`` under ``key`` in the extra data."""

        self.extra[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the flat issue record."""

        return {
            "code": self.code,
            "severity": int(self.severity),
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "ref": self.ref,
            "help": self.help,
            "extra": dict(self.extra),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Issue:
        """Build an issue from a flat record.

        Args:
            data: Record holding at least ``code``, ``severity``, ``message``,
                ``path`` and ``line``. ``column``, ``ref``, ``help`` and
                ``extra`` are optional.

        Returns:
            Issue: Unattached issue carrying the record's values.

        Raises:
            PreconditionError: If a required key is missing or a value is invalid.
        """

        for key in _REQUIRED_ISSUE_KEYS:
            if key not in data:
                raise PreconditionError(f"Missing required key '{key}' in issue record.")
        known = {key: data[key] for key in cls.model_fields if key in data}
        if "relativePath" in data:
            known["relative_path"] = data["relativePath"]
        try:
            return cls.model_validate(known)
        except ValidationError as exc:
            raise PreconditionError(f"Invalid issue record: {exc}") from exc


@dataclass(frozen=True, slots=True)
class ReportTotals:
    """Statistics computed over a report and all of its descendants."""

    errors: int
    warnings: int
    tips: int
    files: int

    def as_dict(self) -> dict[str, int]:
        """Return the totals keyed the way the raw dump stores them."""

        return {
            "totalErrors": self.errors,
            "totalWarnings": self.warnings,
            "totalTips": self.tips,
            "totalFiles": self.files,
        }


def _normalize_base_path(value: str) -> str:
    return normalize(value).rstrip(SEPARATOR) + SEPARATOR


class Report(BaseModel):
    """Hierarchical collection of issues and named child reports.

    A report must be started before issues are added. Totals are never stored:
    every accessor walks the tree again, so they always reflect its current
    state.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str
    base_path: str = SEPARATOR
    issues: list[Issue] = Field(default_factory=list)
    sub_reports: dict[str, Report] = Field(default_factory=dict)
    time_start: float | None = None
    time_end: float | None = None
    total_time_override: float | None = None

    def __init__(self, name: str, base_path: str = SEPARATOR, **data: Any) -> None:
        """Create a report called ``name`` rooted at ``base_path``."""

        super().__init__(name=name, base_path=base_path, **data)

    @field_validator("base_path", mode="before")
    @classmethod
    def _normalize_base(cls, value: object) -> str:
        return _normalize_base_path(str(value))

    # -- lifecycle -----------------------------------------------------------

    def start(self) -> Report:
        """Record the start time; required before any issue is added."""

        self.time_start = time.time()
        return self

    def complete(self) -> Report:
        """Record the end time."""

        self.time_end = time.time()
        return self

    @property
    def started(self) -> bool:
        return self.time_start is not None

    @property
    def total_time(self) -> float | None:
        """Return the elapsed time in milliseconds.

        ``total_time_override`` takes precedence; otherwise ``None`` is returned
        until both the start and the end time are known.
        """

        if self.total_time_override is not None:
            return self.total_time_override
        if self.time_start is None or self.time_end is None:
            return None
        return float(round((self.time_end - self.time_start) * 1000))

    # -- ingestion -----------------------------------------------------------

    def issue(
        self,
        code: str,
        severity: Severity | int | str,
        message: str,
        path: str | None = None,
        line: int | None = None,
        column: int | None = None,
        help: str | None = None,
        ref: str | None = None,
    ) -> Issue:
        """Create an issue from the arguments and add it to this report."""

        issue = Issue(
            code=code,
            severity=severity,
            message=message,
            path=path,
            line=line,
            column=column,
            help=help,
            ref=ref,
        )
        self.add_issue(issue)
        return issue

    def error(
        self,
        code: str,
        message: str,
        path: str | None = None,
        line: int | None = None,
        column: int | None = None,
        help: str | None = None,
        ref: str | None = None,
    ) -> Issue:
        """Add an ``ERROR`` issue."""

        return self.issue(code, Severity.ERROR, message, path, line, column, help, ref)

    def warning(
        self,
        code: str,
        message: str,
        path: str | None = None,
        line: int | None = None,
        column: int | None = None,
        help: str | None = None,
        ref: str | None = None,
    ) -> Issue:
        """Add a ``WARNING`` issue."""

        return self.issue(code, Severity.WARNING, message, path, line, column, help, ref)

    def tip(
        self,
        code: str,
        message: str,
        path: str | None = None,
        line: int | None = None,
        column: int | None = None,
        help: str | None = None,
        ref: str | None = None,
    ) -> Issue:
        """Add a ``TIP`` issue."""

        return self.issue(code, Severity.TIP, message, path, line, column, help, ref)

    def add_issues(self, *issues: Issue) -> None:
        for issue in issues:
            self.add_issue(issue)

    def add_issue(self, issue: Issue) -> None:
        """Take ownership of ``issue`` and append it to this report.

        The issue's path is rewritten in place: relative paths are placed under
        the base path, the ``.`` placeholder becomes the base path itself and
        absolute paths are only normalised. Text fields are trimmed.

        Args:
            issue: Issue to attach; it must not belong to another report.

        Raises:
            PreconditionError: If the report was not started or the issue has no code.
        """

        if not self.started:
            raise PreconditionError("Report has not been started yet, call Report.start() before adding issues.")
        if not issue.code.strip():
            raise PreconditionError("Issue must have a code.")
        self._adopt(issue, anchor=True)
        self.issues.append(issue)

    def _adopt(self, issue: Issue, *, anchor: bool) -> None:
        path = normalize(issue.path.strip())
        if path == CURRENT_DIR:
            path = self.base_path
        elif anchor and not is_absolute(path):
            path = normalize(join_under(self.base_path, path))
        issue.path = path.strip()
        issue.relative_path = strip_basepath(issue.path, self.base_path).strip()
        issue.message = issue.message.strip()
        issue.help = issue.help.strip()
        issue.ref = issue.ref.strip()
        issue.code = issue.code.strip()

    def merge_in(self, *reports: Report) -> Report:
        """Attach ``reports`` as children keyed by their names.

        A child with the same name as an existing one replaces it wholesale.
        """

        for report in reports:
            if report is self:
                raise PreconditionError(f"Report '{self.name}' cannot be merged into itself.")
            self.sub_reports[report.name] = report
        return self

    # -- queries -------------------------------------------------------------

    def _iter_issues(self, recursive: bool) -> Iterator[Issue]:
        yield from self.issues
        if recursive:
            for child in self.sub_reports.values():
                yield from child._iter_issues(True)

    @overload
    def get_issues(self, by_file: Literal[True] = ..., recursive: bool = ...) -> dict[str, list[Issue]]: ...

    @overload
    def get_issues(self, by_file: Literal[False], recursive: bool = ...) -> list[Issue]: ...

    def get_issues(self, by_file: bool = True, recursive: bool = True) -> dict[str, list[Issue]] | list[Issue]:
        """Return this report's issues, optionally with every descendant's.

        Args:
            by_file: Group the result by exact path string, keeping insertion
                order inside each group.
            recursive: Append the issues of every descendant, depth first.

        Returns:
            dict[str, list[Issue]] | list[Issue]: Grouped mapping or flat list.
        """

        collected = list(self._iter_issues(recursive))
        if not by_file:
            return collected
        grouped: dict[str, list[Issue]] = {}
        for issue in collected:
            grouped.setdefault(issue.path, []).append(issue)
        return grouped

    def has_issues(self) -> bool:
        """Return ``True`` when this report or any descendant holds an issue."""

        if self.issues:
            return True
        return any(child.has_issues() for child in self.sub_reports.values())

    def reports_with_issues(self) -> dict[str, Report]:
        return {name: child for name, child in self.sub_reports.items() if child.has_issues()}

    def reports_without_issues(self) -> dict[str, Report]:
        return {name: child for name, child in self.sub_reports.items() if not child.has_issues()}

    def _tally(self, counts: Counter[Severity], paths: set[str]) -> None:
        for issue in self.issues:
            counts[issue.severity] += 1
            paths.add(issue.path)
        for child in self.sub_reports.values():
            child._tally(counts, paths)

    def totals_recursive(self) -> ReportTotals:
        """Count issues by severity and distinct files across the whole subtree."""

        counts: Counter[Severity] = Counter()
        paths: set[str] = set()
        self._tally(counts, paths)
        return ReportTotals(
            errors=counts[Severity.ERROR],
            warnings=counts[Severity.WARNING],
            tips=counts[Severity.TIP],
            files=len(paths),
        )

    @property
    def total_errors(self) -> int:
        return self.totals_recursive().errors

    @property
    def total_warnings(self) -> int:
        return self.totals_recursive().warnings

    @property
    def total_tips(self) -> int:
        return self.totals_recursive().tips

    @property
    def total_files(self) -> int:
        return self.totals_recursive().files

    # -- structural dump -----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return a self-describing dump of the report tree.

        Issues are grouped by path; children are dumped recursively and the
        computed totals are included for consumers that only read the top level.
        """

        grouped = self.get_issues(by_file=True, recursive=False)
        return {
            "name": self.name,
            "basePath": self.base_path,
            "issues": {path: [issue.to_dict() for issue in issues] for path, issues in grouped.items()},
            "subReports": [child.to_dict() for child in self.sub_reports.values()],
            "timeStart": self.time_start,
            "timeEnd": self.time_end,
            "totalTime": self.total_time,
            **self.totals_recursive().as_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Report:
        """Rebuild a report tree from a dump or from parsed issue records.

        ``issues`` may be a flat list of records or a mapping of path to a list
        of records. Paths are normalised but not re-anchored, since a dump
        already holds the paths its report owned.

        Args:
            data: Mapping holding ``name``, ``basePath`` and ``issues`` plus the
                optional ``subReports``, ``timeStart``, ``timeEnd`` and
                ``totalTime``.

        Returns:
            Report: Reconstructed report.

        Raises:
            PreconditionError: If a required field is missing or malformed.
        """

        if not isinstance(data, Mapping):
            raise PreconditionError("Report data must be a mapping.")
        if "issues" not in data:
            raise PreconditionError("Missing required field: issues")
        if not data.get("name"):
            raise PreconditionError("Missing required field: name")
        if not data.get("basePath"):
            raise PreconditionError("Missing required field: basePath")

        report = cls(str(data["name"]), str(data["basePath"]))
        for record in _iter_issue_records(data["issues"]):
            issue = Issue.from_dict(record)
            if not issue.code.strip():
                raise PreconditionError("Issue must have a code.")
            report._adopt(issue, anchor=False)
            report.issues.append(issue)

        for child_data in _iter_child_records(data.get("subReports")):
            child = cls.from_dict(child_data)
            report.sub_reports[child.name] = child

        time_start = safe_float(data.get("timeStart"))
        time_end = safe_float(data.get("timeEnd"))
        if time_start is not None and time_end is not None:
            report.time_start = time_start
            report.time_end = time_end
        else:
            report.total_time_override = safe_float(data.get("totalTime"))
        return report


def _iter_issue_records(value: object) -> Iterator[Mapping[str, Any]]:
    if isinstance(value, Mapping):
        for group in value.values():
            if isinstance(group, Mapping):
                yield group
            else:
                yield from coerce_dict_sequence(group)
        return
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise PreconditionError("Field issues must be a list of records or a mapping of path to records.")
    for item in value:
        if isinstance(item, Mapping):
            yield item
        else:
            yield from coerce_dict_sequence(item)


def _iter_child_records(value: object) -> Iterator[Mapping[str, Any]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        value = list(value.values())
    yield from coerce_dict_sequence(value)


__all__ = ["Issue", "Report", "ReportTotals"]
