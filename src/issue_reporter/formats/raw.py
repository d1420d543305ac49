# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lossless JSON dump of a report tree."""

from __future__ import annotations

from ..errors import FormatError, PreconditionError
from ..features import Feature
from ..models import Report
from .base import OutputKind, ParsableCodec, load_json_document, require_mapping
from .option_sets import JsonOptions, MessageOptions, render_json


class RawCodec(ParsableCodec):
    """Serialise :meth:`Report.to_dict` as JSON and read it back."""

    name = "raw"
    description = "Complete JSON representation"
    output_kind = OutputKind.JSON
    option_sets = (MessageOptions, JsonOptions)

    def generate(self, report: Report) -> str:
        return render_json(report.to_dict(), self.settings(JsonOptions))

    def parse(self, text: str, name: str | None = None) -> Report:
        data = dict(require_mapping(load_json_document(text, self.name), None, self.name))
        if not data.get("name"):
            data["name"] = name or self.default_report_name()
        try:
            return Report.from_dict(data)
        except PreconditionError as exc:
            raise FormatError(f"Invalid {self.name} document: {exc}", fragment=text[:200]) from exc

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return Feature.all()


__all__ = ["RawCodec"]
