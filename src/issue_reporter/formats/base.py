# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Codec contract shared by every report format."""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import replace
from enum import StrEnum
from typing import Any, ClassVar, TypeVar

from ..errors import FormatError, PreconditionError
from ..features import Feature
from ..models import Issue, Report
from ..options import OptionResolver, OptionScope, OptionSet, OptionSpec, declare_option
from ..paths import CURRENT_DIR, SEPARATOR, find_common_base_path
from ..serialization import JsonValue, safe_int
from .option_sets import MessageOptions

LOGGER = logging.getLogger(__name__)

OptionSetT = TypeVar("OptionSetT", bound=OptionSet)

_FRAGMENT_LIMIT = 200


class OutputKind(StrEnum):
    """Kind of document a codec produces."""

    TXT = "txt"
    HTML = "html"
    XML = "xml"
    JSON = "json"
    MARKDOWN = "markdown"


class Codec(ABC):
    """Serialiser from a :class:`Report` to one external format.

    Subclasses declare their identity as class attributes and list the option
    sets they use in ``option_sets``. ``option_defaults`` overrides the default
    of an inherited option for this codec only.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    output_kind: ClassVar[OutputKind] = OutputKind.TXT
    option_sets: ClassVar[tuple[type[OptionSet], ...]] = (MessageOptions,)
    option_defaults: ClassVar[Mapping[str, Any]] = {}

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        """Create the codec and resolve ``options`` against its declarations."""

        self._resolver = OptionResolver(self.name, self.options_definition(OptionScope.BOTH))
        self._settings: dict[type[OptionSet], OptionSet] = {}
        self.options: dict[str, Any] = {}
        self.configure(options or {})

    def configure(self, options: Mapping[str, Any]) -> Codec:
        """Merge ``options`` into the effective configuration.

        Raises:
            ConfigurationError: If a value is invalid or a required option is missing.
        """

        self.options = self._resolver.resolve(options)
        self._settings = {option_set: option_set.from_values(self.options) for option_set in self.option_sets}
        return self

    def settings(self, option_set: type[OptionSetT]) -> OptionSetT:
        """Return the resolved values of ``option_set`` as a model instance."""

        cached = self._settings.get(option_set)
        if cached is None:
            cached = option_set.from_values(self.options)
            self._settings[option_set] = cached
        return cached  # type: ignore[return-value]

    @property
    def messages(self) -> MessageOptions:
        return self.settings(MessageOptions)

    @classmethod
    def options_definition(cls, scope: OptionScope = OptionScope.NORMAL) -> list[OptionSpec]:
        """Return every option this codec recognises.

        Options come from ``option_sets`` in order; a name declared by more than
        one set is kept once, as first declared.

        Args:
            scope: Emit bare names, ``<codec>-<name>`` names, or both.

        Returns:
            list[OptionSpec]: Declared options in declaration order.
        """

        seen: set[str] = set()
        specs: list[OptionSpec] = []
        for option_set in cls.option_sets:
            for spec in option_set.option_specs():
                if spec.name in seen:
                    continue
                seen.add(spec.name)
                if spec.name in cls.option_defaults:
                    spec = replace(spec, default=cls.option_defaults[spec.name])
                specs.extend(declare_option(cls.name, spec, scope))
        return specs

    @classmethod
    def default_report_name(cls) -> str:
        return f"Parsed {cls.name} report"

    @classmethod
    def is_parsable(cls) -> bool:
        return issubclass(cls, ParsableCodec)

    @abstractmethod
    def generate(self, report: Report) -> str:
        """Render ``report`` in this format without modifying it."""


class ParsableCodec(Codec):
    """Codec that can also read its own format back into a :class:`Report`."""

    @abstractmethod
    def parse(self, text: str, name: str | None = None) -> Report:
        """Build a report from ``text``.

        Args:
            text: Document in this codec's format.
            name: Report name used when the document carries none.

        Raises:
            FormatError: If ``text`` is not valid for the format.
        """

    @classmethod
    @abstractmethod
    def supports(cls) -> frozenset[Feature]:
        """Return the features this format round-trips natively."""

    @classmethod
    def supports_extra(cls) -> frozenset[Feature]:
        """Return the features stored in non-standard places of the format."""

        return frozenset()

    def _build_report(
        self,
        records: Iterable[Mapping[str, Any]],
        *,
        name: str | None,
        fallback: str | None = None,
        time_start: float | None = None,
        time_end: float | None = None,
    ) -> Report:
        """Assemble a report from flat issue records.

        The base path is the common base of every record's path, or ``/`` when
        there are none. The name is ``name`` when given, then ``fallback``, then
        :meth:`default_report_name`.
        """

        issues = [dict(record) for record in records]
        paths = [str(record["path"]) for record in issues if record.get("path") not in (None, "", CURRENT_DIR)]
        base_path = find_common_base_path(paths) or SEPARATOR
        data: dict[str, Any] = {
            "name": name or fallback or self.default_report_name(),
            "basePath": base_path,
            "issues": issues,
            "subReports": [],
            "timeStart": time_start,
            "timeEnd": time_end,
        }
        LOGGER.debug("Parsed %d issue(s) with %s, base path %s", len(issues), self.name, base_path)
        try:
            return Report.from_dict(data)
        except PreconditionError as exc:
            raise FormatError(f"Invalid issue data for {self.name}: {exc}") from exc

    @staticmethod
    def issue_record(
        *,
        code: object,
        severity: object,
        message: object,
        path: object,
        line: object = 0,
        column: object = 0,
        help: object = None,
        ref: object = None,
        extra: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a flat issue record with the documented defaults applied."""

        record: dict[str, Any] = {
            "code": ("" if code is None else str(code).strip()) or Issue.UNKNOWN_CODE,
            "severity": severity,
            "message": "" if message is None else str(message),
            "path": CURRENT_DIR if path in (None, "") else str(path),
            "line": max(safe_int(line), 0),
            "column": max(safe_int(column), 0),
        }
        if help:
            record["help"] = str(help)
        if ref:
            record["ref"] = str(ref)
        if extra:
            record["extra"] = dict(extra)
        return record


def _fragment(text: str) -> str:
    return text[:_FRAGMENT_LIMIT]


def load_json_document(text: str, codec: str) -> JsonValue:
    """Decode ``text`` as JSON or raise :class:`FormatError`."""

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Invalid JSON for {codec}: {exc}", fragment=_fragment(text)) from exc


def load_xml_document(text: str, codec: str) -> ET.Element:
    """Parse ``text`` as XML and return its root, or raise :class:`FormatError`."""

    try:
        return ET.fromstring(text.strip())
    except ET.ParseError as exc:
        raise FormatError(f"Invalid XML for {codec}: {exc}", fragment=_fragment(text)) from exc


def require_root(root: ET.Element, tag: str, codec: str) -> None:
    """Raise :class:`FormatError` unless ``root`` is a ``<tag>`` element."""

    if root.tag != tag:
        raise FormatError(
            f"Expected a <{tag}> root element for {codec}, found <{root.tag}>",
            fragment=_fragment(ET.tostring(root, encoding="unicode")),
        )


def require_mapping(value: JsonValue, key: str | None, codec: str) -> Mapping[str, Any]:
    """Return ``value`` (or ``value[key]``) when it is a JSON object, else raise :class:`FormatError`."""

    target: object = value
    if key is not None:
        target = value.get(key) if isinstance(value, Mapping) else None
    if not isinstance(target, Mapping):
        where = f"'{key}'" if key else "document root"
        raise FormatError(f"Expected a JSON object at {where} for {codec}", fragment=_fragment(json.dumps(value)))
    return target


def require_list(value: JsonValue, key: str | None, codec: str) -> list[Any]:
    """Return ``value`` (or ``value[key]``) when it is a JSON array, else raise :class:`FormatError`."""

    target: object = value
    if key is not None:
        target = value.get(key) if isinstance(value, Mapping) else None
    if not isinstance(target, list):
        where = f"'{key}'" if key else "document root"
        raise FormatError(f"Expected a JSON array at {where} for {codec}", fragment=_fragment(json.dumps(value)))
    return target


__all__ = [
    "Codec",
    "OutputKind",
    "ParsableCodec",
    "load_json_document",
    "load_xml_document",
    "require_list",
    "require_mapping",
    "require_root",
]
