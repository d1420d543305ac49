# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the report model, codecs and the CLI."""

from __future__ import annotations


class IssueReporterError(RuntimeError):
    """Base class for every error raised by :mod:`issue_reporter`."""


class PreconditionError(IssueReporterError):
    """Raised when the API is used in a way the data model forbids.

    Examples are adding an issue to a report that was never started, adding an
    issue without a code, or rebuilding a report from a dump that lacks one of
    the required fields.
    """


class FormatError(IssueReporterError):
    """Raised when text handed to a codec's ``parse`` is not valid for the format."""

    def __init__(self, message: str, *, fragment: str | None = None) -> None:
        """Initialise the error with a diagnostic and the offending input.

        Args:
            message: Human-readable description of the problem.
            fragment: Raw fragment of the input that could not be parsed.
        """

        super().__init__(message)
        self.fragment = fragment


class ConfigurationError(IssueReporterError):
    """Raised when codec options cannot be resolved to valid values."""

    def __init__(self, message: str, *, option: str | None = None) -> None:
        """Initialise the error with a diagnostic and the option at fault.

        Args:
            message: Human-readable description of the problem.
            option: Name of the offending option, when known.
        """

        super().__init__(message)
        self.option = option


class TransformError(IssueReporterError):
    """Raised when a report transformer cannot process an issue."""


__all__ = [
    "ConfigurationError",
    "FormatError",
    "IssueReporterError",
    "PreconditionError",
    "TransformError",
]
