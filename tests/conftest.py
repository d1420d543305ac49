# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from issue_reporter.models import Report

BASE_PATH = "/project/base/"


@pytest.fixture
def report() -> Report:
    """Return a completed report with mixed severities and one sub-report."""

    root = Report("Lint", BASE_PATH).start()
    root.error(
        "E100",
        "Undefined variable $foo",
        "src/File1.php",
        10,
        5,
        help="Declare the variable before use",
        ref="https://example.com/rules/E100",
    )
    root.warning("W200", "Line exceeds 120 characters", "src/File1.php", 12, 121)
    root.tip("T300", "Prefer early return", "/project/base/src/util/File2.php", 3, 1)

    child = Report("Types", BASE_PATH).start()
    child.error("TYPE.mismatch", "Expected int, got string", "lib/Types.php", 7, 2, help="Cast the value")
    child.complete()

    root.merge_in(child)
    root.complete()
    return root


@pytest.fixture
def empty_report() -> Report:
    """Return a completed report without any issues."""

    return Report("Clean", BASE_PATH).start().complete()
