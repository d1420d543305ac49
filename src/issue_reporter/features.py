# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Capability flags a parsable codec declares about its round trip."""

from __future__ import annotations

from enum import StrEnum


class Feature(StrEnum):
    """Data a format can carry through a ``generate``/``parse`` round trip."""

    PARSABLE_MESSAGE = "can-parse-the-report-message"
    PRESERVE_SEVERITY = "preserves-the-severity-level-of-issues"
    REPORT_NAME = "includes-the-name-of-the-report"
    REPORT_BASEPATH = "includes-the-reports-base-path"
    REPORT_TOTAL_TIME = "includes-the-total-execution-time"
    REPORT_TIME_END = "includes-the-report-end-time"
    REPORT_TIME_START = "includes-the-report-start-time"
    ISSUE_LINE = "includes-the-issues-line-number"
    ISSUE_COLUMN = "includes-the-issues-column-number"
    ISSUE_HELP = "includes-the-issues-help-text"
    ISSUE_REF = "includes-the-issues-reference-link"
    ISSUE_EXTRA = "includes-extra-issue-data"
    ISSUE_CODE = "includes-the-issues-code"

    def describe(self) -> str:
        """Return the flag as a human-readable sentence."""

        text = self.value.replace("-", " ")
        return text[:1].upper() + text[1:]

    @classmethod
    def all(cls) -> frozenset[Feature]:
        """Return every flag, as declared by lossless formats."""

        return frozenset(cls)


__all__ = ["Feature"]
