# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reusable option bundles and the rendering helpers that consume them."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import Any, Final

from pydantic import Field

from ..options import OptionSet
from ..serialization import jsonify
from ..severity import Severity

XML_DECLARATION: Final[str] = '<?xml version="1.0" encoding="UTF-8"?>'
SEVERITY_EMOJI: Final[dict[Severity, str]] = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️",
    Severity.TIP: "💡",
}


class MessageOptions(OptionSet):
    """Visibility of the optional issue fields; shared by every codec."""

    show_ref: bool = Field(default=False, description="Show the external reference field")
    show_help: bool = Field(default=True, description="Show the help (fix) field")
    show_code: bool = Field(default=True, description="Show the issue code field")


class JsonOptions(OptionSet):
    pretty: bool = Field(default=False, description="Pretty-print the output")
    escape_slash: bool = Field(default=True, description="Escape forward slashes as \\/")
    escape_unicode: bool = Field(default=True, description="Escape non-ASCII characters as \\uXXXX")


class XmlOptions(OptionSet):
    pretty: bool = Field(default=False, description="Pretty-print the output")


class RichOptions(OptionSet):
    """Presentation knobs for the human-readable codecs."""

    max_width: int = Field(
        default=0,
        ge=0,
        description="Maximum line width in characters, also the per-column width of tables, 0 means no wrapping",
    )
    color: bool = Field(default=True, description="Colour the output")
    emoji: bool = Field(default=True, description="Prefix severities with emoji")


class ParseMessageOptions(OptionSet):
    parse_message: bool = Field(
        default=False,
        description="Extract help and reference from the message when parsing",
    )


class ToolOptions(OptionSet):
    tool_name: str = Field(default="issue-reporter", description="Name written as the producing tool")


def render_json(value: Any, options: JsonOptions) -> str:
    """Serialise ``value`` to JSON honouring the escaping and indentation options."""

    payload = jsonify(value)
    if options.pretty:
        text = json.dumps(payload, indent=4, ensure_ascii=options.escape_unicode)
    else:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=options.escape_unicode)
    if options.escape_slash:
        # "/" only ever occurs inside JSON strings.
        text = text.replace("/", "\\/")
    return text


def render_xml(element: ET.Element, options: XmlOptions) -> str:
    """Serialise ``element`` as a document with an XML declaration."""

    if options.pretty:
        ET.indent(element, space="  ")
    body = ET.tostring(element, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}\n"


def severity_emoji(severity: Severity, options: RichOptions) -> str:
    """Return the emoji for ``severity`` or an empty string when emoji are off."""

    return SEVERITY_EMOJI[severity] if options.emoji else ""


__all__ = [
    "JsonOptions",
    "MessageOptions",
    "ParseMessageOptions",
    "RichOptions",
    "ToolOptions",
    "XmlOptions",
    "render_json",
    "render_xml",
    "severity_emoji",
]
