# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Human-readable summaries: terminal (ANSI), Markdown and HTML.

All three share the same content: a summary table with one row per direct
sub-report plus one for the whole report, followed by one table of issues per
file. None of them can be parsed back.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import Issue, Report
from ..paths import CURRENT_DIR
from .base import Codec, OutputKind
from .option_sets import MessageOptions, RichOptions, severity_emoji

# Width used when wrapping is disabled; tables only grow to their content.
_UNWRAPPED_WIDTH: Final[int] = 1000
NO_ISSUES_MESSAGE: Final[str] = "No issues found. Everything looks good!"
_SUMMARY_HEADERS: Final[tuple[str, ...]] = ("Report", "Files", "Errors", "Warnings", "Tips", "Time")


@dataclass(frozen=True, slots=True)
class IssueTable:
    """Issues of one file, ready to be laid out as a table."""

    title: str
    headers: tuple[str, ...]
    rows: list[tuple[str, ...]]


def _format_time(report: Report) -> str:
    total = report.total_time
    return "-" if total is None else f"{total:g} ms"


def summary_rows(report: Report) -> list[tuple[str, ...]]:
    """Return one row per direct sub-report and a final row for ``report`` itself."""

    rows = []
    for entry in [*report.sub_reports.values(), report]:
        totals = entry.totals_recursive()
        rows.append(
            (
                entry.name,
                str(totals.files),
                str(totals.errors),
                str(totals.warnings),
                str(totals.tips),
                _format_time(entry),
            )
        )
    return rows


class InfoCodec(Codec):
    """Pretty formatted detailed info rendered for a terminal."""

    name = "info"
    description = "Pretty formatted detailed info"
    output_kind = OutputKind.TXT
    option_sets = (MessageOptions, RichOptions)

    # -- content -------------------------------------------------------------

    def detail_headers(self) -> tuple[str, ...]:
        messages = self.messages
        headers = ["Line", " "]
        if messages.show_code:
            headers.append("Code")
        headers.append("Message")
        if messages.show_help:
            headers.append("Help")
        if messages.show_ref:
            headers.append("Ref")
        return tuple(headers)

    def severity_cell(self, issue: Issue) -> str:
        icon = severity_emoji(issue.severity, self.settings(RichOptions))
        return f"{icon} {issue.severity_label}" if icon else issue.severity_label

    def detail_row(self, issue: Issue) -> tuple[str, ...]:
        messages = self.messages
        location = f"{issue.line}:{issue.column}" if issue.column else str(issue.line)
        row = [location, self.severity_cell(issue)]
        if messages.show_code:
            row.append(issue.code)
        row.append(issue.message)
        if messages.show_help:
            row.append(issue.help)
        if messages.show_ref:
            row.append(issue.ref)
        return tuple(row)

    def detail_tables(self, report: Report) -> list[IssueTable]:
        """Return one table per file; the title is the path relative to its report."""

        headers = self.detail_headers()
        tables = []
        for issues in report.get_issues().values():
            title = issues[0].relative_path
            if title in ("", CURRENT_DIR):
                title = report.name
            tables.append(IssueTable(title=title, headers=headers, rows=[self.detail_row(i) for i in issues]))
        return tables

    # -- rendering -----------------------------------------------------------

    def _console(self, buffer: io.StringIO, *, record: bool = False) -> Console:
        presentation = self.settings(RichOptions)
        return Console(
            file=buffer,
            record=record,
            width=presentation.max_width or _UNWRAPPED_WIDTH,
            color_system="standard" if presentation.color else None,
            force_terminal=presentation.color,
            no_color=not presentation.color,
            emoji=False,
            highlight=False,
        )

    def _table(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Table:
        presentation = self.settings(RichOptions)
        table = Table(
            box=box.SIMPLE_HEAVY if presentation.color else box.SIMPLE,
            header_style="bold cyan" if presentation.color else "",
        )
        for header in headers:
            table.add_column(header, max_width=presentation.max_width or None, overflow="fold")
        for row in rows:
            table.add_row(*(Text(cell) for cell in row))
        return table

    def render(self, console: Console, report: Report) -> None:
        presentation = self.settings(RichOptions)
        console.print(Text(report.name, style="bold underline" if presentation.color else ""))
        console.print(self._table(_SUMMARY_HEADERS, summary_rows(report)))
        if not report.has_issues():
            console.print(Text(NO_ISSUES_MESSAGE, style="green" if presentation.color else ""))
            return
        console.print(Text("Detailed Issues", style="bold" if presentation.color else ""))
        for table in self.detail_tables(report):
            console.print(Text.assemble("File: ", (table.title, "cyan" if presentation.color else "")))
            console.print(self._table(table.headers, table.rows))

    def generate(self, report: Report) -> str:
        buffer = io.StringIO()
        self.render(self._console(buffer), report)
        return buffer.getvalue()


class InfoHtmlCodec(InfoCodec):
    """Same content as ``info``, exported as a standalone HTML page."""

    name = "info-html"
    description = "Pretty formatted detailed info as an HTML page"
    output_kind = OutputKind.HTML

    def generate(self, report: Report) -> str:
        console = self._console(io.StringIO(), record=True)
        self.render(console, report)
        return console.export_html(inline_styles=True)


def _md_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def _md_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    lines = [
        "| " + " | ".join(_md_cell(header) for header in headers) + " |",
        "|" + "|".join(" --- " for _ in headers) + "|",
    ]
    lines.extend("| " + " | ".join(_md_cell(cell) for cell in row) + " |" for row in rows)
    return lines


class InfoMdCodec(InfoCodec):
    """Same content as ``info``, as GitHub-flavoured Markdown."""

    name = "info-md"
    description = "Pretty formatted detailed info in Markdown"
    output_kind = OutputKind.MARKDOWN

    def generate(self, report: Report) -> str:
        lines = [f"# {report.name}", ""]
        lines.extend(_md_table(_SUMMARY_HEADERS, summary_rows(report)))
        lines.extend(["", "---", ""])
        if not report.has_issues():
            lines.append(NO_ISSUES_MESSAGE)
            return "\n".join(lines) + "\n"
        lines.extend(["## Detailed Issues", ""])
        for table in self.detail_tables(report):
            lines.extend([f"File: **{table.title}**", ""])
            lines.extend(_md_table(table.headers, table.rows))
            lines.append("")
        return "\n".join(lines)


__all__ = ["InfoCodec", "InfoHtmlCodec", "InfoMdCodec", "IssueTable", "summary_rows"]
