# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert static-analysis reports between interchange formats."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .errors import ConfigurationError, FormatError, IssueReporterError, PreconditionError, TransformError
from .features import Feature
from .models import Issue, Report, ReportTotals
from .registry import CodecRegistry, build_default_registry
from .reporter import Reporter
from .severity import Severity

try:
    __version__ = version("issue-reporter")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

__all__ = [
    "CodecRegistry",
    "ConfigurationError",
    "Feature",
    "FormatError",
    "Issue",
    "IssueReporterError",
    "PreconditionError",
    "Report",
    "ReportTotals",
    "Reporter",
    "Severity",
    "TransformError",
    "__version__",
    "build_default_registry",
]
