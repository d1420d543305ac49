# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the command line interface."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from issue_reporter.cli._options import parse_option_pairs
from issue_reporter.cli.app import app
from issue_reporter.formats import CheckstyleCodec
from issue_reporter.logging import get_console_manager
from issue_reporter.models import Report

WIDE = {"COLUMNS": "300"}


@pytest.fixture(autouse=True)
def fresh_consoles() -> Iterator[None]:
    get_console_manager().clear()
    yield
    get_console_manager().clear()


@pytest.fixture
def checkstyle_file(report: Report, tmp_path: Path) -> Path:
    path = tmp_path / "checkstyle.xml"
    path.write_text(CheckstyleCodec().generate(report), encoding="utf-8")
    return path


def test_parse_option_pairs() -> None:
    assert parse_option_pairs(["pretty", "no-show-help", "tool-name = phpstan", " "]) == {
        "pretty": True,
        "show-help": False,
        "tool-name": "phpstan",
    }
    assert parse_option_pairs(None) == {}
    with pytest.raises(typer.BadParameter):
        parse_option_pairs(["=value"])


def test_convert_to_stdout(checkstyle_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["convert", str(checkstyle_file), "--from", "checkstyle", "--to", "emacs"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == (
        "/project/base/src/File1.php:10:5: error - Undefined variable $foo (#E100)"
    )


def test_convert_from_stdin_with_options(checkstyle_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["convert", "-", "-f", "checkstyle", "-t", "raw", "-o", "pretty", "-o", "no-escape-slash", "--name", "stdin"],
        input=checkstyle_file.read_text(encoding="utf-8"),
    )
    assert result.exit_code == 0
    assert '\n    "name": "stdin"' in result.stdout
    assert json.loads(result.stdout)["basePath"] == "/project/base/"


def test_convert_to_file(checkstyle_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "report.sarif"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "convert",
            str(checkstyle_file),
            "-f",
            "checkstyle",
            "-t",
            "sarif",
            "--output",
            str(output),
            "--no-emoji",
            "--no-color",
        ],
        env=WIDE,
    )
    assert result.exit_code == 0
    assert "Wrote sarif report to" in result.stdout
    assert len(json.loads(output.read_text(encoding="utf-8"))["runs"][0]["results"]) == 4


def test_convert_reports_unknown_format(checkstyle_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["convert", str(checkstyle_file), "-f", "checkstyle", "-t", "pdf", "--no-emoji"],
        env=WIDE,
    )
    assert result.exit_code == 1
    assert "Unknown format 'pdf'" in result.output


def test_convert_reports_invalid_input(tmp_path: Path) -> None:
    broken = tmp_path / "broken.xml"
    broken.write_text("<checkstyle>", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["convert", str(broken), "-f", "checkstyle", "-t", "emacs"], env=WIDE)
    assert result.exit_code == 1
    assert "Invalid XML for checkstyle" in result.output


def test_convert_reports_missing_file(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["convert", str(tmp_path / "absent.xml"), "-f", "checkstyle", "-t", "emacs"],
        env=WIDE,
    )
    assert result.exit_code == 1
    assert "Cannot read" in result.output


def test_list_formats() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["list-formats", "--no-color"], env=WIDE)
    assert result.exit_code == 0
    for name in ("checkstyle", "info-html", "sonarqube"):
        assert name in result.stdout
    assert "--tool-name=VALUE (default: 'issue-reporter')" in result.stdout
    assert "Can parse the report message (non-standard)" in result.stdout
