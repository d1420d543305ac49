# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared option declarations for the issue-reporter CLI."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer

STDIN_MARKER = "-"

INPUT_ARGUMENT = Annotated[
    str,
    typer.Argument(metavar="INPUT", help="Report to read, '-' for standard input."),
]
FROM_OPTION = Annotated[
    str,
    typer.Option("--from", "-f", help="Format of the input report."),
]
TO_OPTION = Annotated[
    str,
    typer.Option("--to", "-t", help="Format to write."),
]
OUTPUT_OPTION = Annotated[
    Path | None,
    typer.Option("--output", help="Write to this file instead of standard output."),
]
NAME_OPTION = Annotated[
    str | None,
    typer.Option("--name", help="Report name used when the input carries none."),
]
FORMAT_OPTION = Annotated[
    list[str] | None,
    typer.Option(
        "--option",
        "-o",
        help="Codec option as key=value, key or no-key (repeatable).",
    ),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Toggle coloured console messages."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log debug details to standard error."),
]


def parse_option_pairs(values: Sequence[str] | None) -> dict[str, Any]:
    """Turn repeated ``-o`` values into a flat option map.

    ``key=value`` sets a value, a bare ``key`` switches a flag on and
    ``no-key`` switches it off.

    Raises:
        typer.BadParameter: If an entry has an empty key.
    """

    options: dict[str, Any] = {}
    for entry in values or ():
        text = entry.strip()
        if not text:
            continue
        key, separator, value = text.partition("=")
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Invalid option '{entry}', expected key=value")
        if separator:
            options[key] = value.strip()
        elif key.startswith("no-"):
            options[key[3:]] = False
        else:
            options[key] = True
    return options


__all__ = [
    "COLOR_OPTION",
    "EMOJI_OPTION",
    "FORMAT_OPTION",
    "FROM_OPTION",
    "INPUT_ARGUMENT",
    "NAME_OPTION",
    "OUTPUT_OPTION",
    "STDIN_MARKER",
    "TO_OPTION",
    "VERBOSE_OPTION",
    "parse_option_pairs",
]
