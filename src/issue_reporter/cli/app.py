# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point: ``convert`` and ``list-formats``."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich import box
from rich.table import Table
from rich.text import Text

from ..errors import IssueReporterError
from ..formats.base import ParsableCodec
from ..logging import fail, get_console_manager, ok
from ..options import OptionMode, OptionScope, OptionSpec
from ..reporter import Reporter
from ._options import (
    COLOR_OPTION,
    EMOJI_OPTION,
    FORMAT_OPTION,
    FROM_OPTION,
    INPUT_ARGUMENT,
    NAME_OPTION,
    OUTPUT_OPTION,
    STDIN_MARKER,
    TO_OPTION,
    VERBOSE_OPTION,
    parse_option_pairs,
)

LOGGER = logging.getLogger("issue_reporter")

app = typer.Typer(
    name="issue-reporter",
    help="Convert static-analysis reports between interchange formats.",
    no_args_is_help=True,
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    if not verbose or LOGGER.handlers:
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG)


def _read_input(source: str) -> str:
    if source == STDIN_MARKER:
        return typer.get_text_stream("stdin").read()
    return Path(source).read_text(encoding="utf-8")


@app.callback()
def main(verbose: VERBOSE_OPTION = False) -> None:
    """Convert static-analysis reports between interchange formats."""

    _configure_logging(verbose)


@app.command("convert")
def convert(
    input_path: INPUT_ARGUMENT,
    source: FROM_OPTION,
    target: TO_OPTION,
    output: OUTPUT_OPTION = None,
    name: NAME_OPTION = None,
    option: FORMAT_OPTION = None,
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
) -> None:
    """Parse INPUT written in one format and write it in another."""

    options = parse_option_pairs(option)
    reporter = Reporter()
    try:
        text = _read_input(input_path)
        converted = reporter.convert(text, source, target, name=name, options=options)
    except OSError as exc:
        fail(f"Cannot read {input_path}: {exc.strerror or exc}", use_emoji=emoji, use_color=color)
        raise typer.Exit(code=1) from exc
    except IssueReporterError as exc:
        fail(str(exc), use_emoji=emoji, use_color=color)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(converted.rstrip("\n"))
        return
    output.write_text(converted, encoding="utf-8")
    ok(f"Wrote {target} report to {output}", use_emoji=emoji, use_color=color)


def _describe_option(spec: OptionSpec) -> str:
    if spec.mode is OptionMode.FLAG:
        label = f"--{spec.name}/--no-{spec.name}"
    else:
        label = f"--{spec.name}=VALUE"
    default = "required" if spec.mode is OptionMode.REQUIRED else f"default: {spec.default!r}"
    return f"{label} ({default}) {spec.description}".rstrip()


@app.command("list-formats")
def list_formats(
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
) -> None:
    """List every available format with its options and features."""

    console = get_console_manager().get(color=color, emoji=emoji)
    reporter = Reporter()
    table = Table(box=box.SIMPLE_HEAVY if color else box.SIMPLE, show_lines=True)
    table.add_column("Format", no_wrap=True)
    table.add_column("Output", no_wrap=True)
    table.add_column("Parsable", no_wrap=True)
    table.add_column("Options", overflow="fold")
    table.add_column("Features", overflow="fold")
    for entry in reporter.registry.values():
        codec = entry.codec
        options = "\n".join(_describe_option(spec) for spec in codec.options_definition(OptionScope.NORMAL))
        features = ""
        if issubclass(codec, ParsableCodec):
            native = sorted(feature.describe() for feature in codec.supports())
            extra = sorted(f"{feature.describe()} (non-standard)" for feature in codec.supports_extra())
            features = "\n".join(native + extra)
        table.add_row(
            Text.assemble((entry.name, "bold" if color else ""), "\n", codec.description),
            Text(str(codec.output_kind)),
            Text("yes" if entry.parsable else "no"),
            Text(options),
            Text(features),
        )
    console.print(table)


__all__ = ["app", "convert", "list_formats", "main"]
