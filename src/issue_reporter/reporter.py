# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""High-level driver: transform a report, render it and convert between formats."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .models import Report
from .options import OptionScope, OptionSpec
from .registry import CodecRegistry, build_default_registry
from .transformers import BUILTIN_TRANSFORMERS, Transformer

LOGGER = logging.getLogger(__name__)


class Reporter:
    """Render and convert reports with the codecs of one registry.

    Args:
        registry: Codecs available by name; the built-in set when omitted.
        transformers: Transformer classes applied by :meth:`render` when enabled.
    """

    def __init__(
        self,
        registry: CodecRegistry | None = None,
        transformers: Iterable[type[Transformer]] = BUILTIN_TRANSFORMERS,
    ) -> None:
        self.registry = registry if registry is not None else build_default_registry()
        self.transformers = tuple(transformers)

    def options_definition(self, scope: OptionScope = OptionScope.BOTH) -> list[OptionSpec]:
        """Return the options of every codec and transformer, each name once."""

        specs = self.registry.options_definition(scope)
        seen = {spec.name for spec in specs}
        for transformer in self.transformers:
            for spec in transformer.options_definition():
                if spec.name not in seen:
                    seen.add(spec.name)
                    specs.append(spec)
        return specs

    def apply_transformers(self, report: Report, options: Mapping[str, Any]) -> Report:
        """Run every enabled transformer over ``report`` in place."""

        for transformer in self.transformers:
            if transformer.is_enabled(options):
                LOGGER.debug("Applying transformer %s", transformer.name)
                transformer(options).transform(report)
        return report

    def render(self, report: Report, format_name: str, options: Mapping[str, Any] | None = None) -> str:
        """Apply the enabled transformers and generate ``report`` as ``format_name``.

        Raises:
            ConfigurationError: If the format is unknown or an option is invalid.
            TransformError: If a transformer fails.
        """

        options = options or {}
        codec = self.registry.create(format_name, options)
        self.apply_transformers(report, options)
        LOGGER.debug("Generating %s report for %s", format_name, report.name)
        return codec.generate(report)

    def write(
        self,
        report: Report,
        format_name: str,
        output: Path,
        options: Mapping[str, Any] | None = None,
    ) -> Path:
        """Render ``report`` and write it to ``output``."""

        output.write_text(self.render(report, format_name, options), encoding="utf-8")
        return output

    def parse(
        self,
        text: str,
        format_name: str,
        *,
        name: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Report:
        """Parse ``text`` written in ``format_name``.

        Raises:
            ConfigurationError: If the format is unknown or cannot parse.
            FormatError: If ``text`` is not valid for the format.
        """

        codec = self.registry.create_parsable(format_name, options or {})
        LOGGER.debug("Parsing %s input", format_name)
        return codec.parse(text, name)

    def convert(
        self,
        text: str,
        source: str,
        target: str,
        *,
        name: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        """Parse ``text`` as ``source`` and render the result as ``target``."""

        report = self.parse(text, source, name=name, options=options)
        return self.render(report, target, options)


__all__ = ["Reporter"]
