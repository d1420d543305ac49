# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console messages with optional colour and emoji support."""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import Literal

from rich.console import Console
from rich.markup import escape


def detect_tty(stream: Literal["stdout", "stderr"] = "stdout") -> bool:
    """Return ``True`` when the given standard stream appears to be a terminal."""

    try:
        return getattr(sys, stream).isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Provision Rich :class:`Console` instances keyed by colour and emoji settings."""

    def __init__(self) -> None:
        self._cache: dict[tuple[bool, bool, bool, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return a console configured for ``color`` and ``emoji`` preferences.

        Args:
            color: ``True`` when ANSI colour output should be enabled.
            emoji: ``True`` when Rich should render emoji glyphs.
            stderr: Write to standard error instead of standard output.

        Returns:
            Console: Cached or newly constructed console matching the preferences.
        """

        tty = detect_tty("stderr" if stderr else "stdout")
        key = (color, emoji, tty, stderr)
        if key not in self._cache:
            self._cache[key] = Console(
                stderr=stderr,
                color_system="auto" if color and tty else None,
                no_color=not (color and tty),
                emoji=emoji,
                soft_wrap=True,
                highlight=False,
            )
        return self._cache[key]

    def clear(self) -> None:
        self._cache.clear()


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


def _emit(symbol: str, style: str, msg: str, *, use_emoji: bool, use_color: bool, stderr: bool = False) -> None:
    console = get_console_manager().get(color=use_color, emoji=use_emoji, stderr=stderr)
    prefix = f"{symbol} " if use_emoji else ""
    body = escape(msg)
    console.print(f"{prefix}[{style}]{body}[/{style}]" if use_color else f"{prefix}{body}")


def info(msg: str, *, use_emoji: bool = True, use_color: bool = True) -> None:
    """Emit an informational message."""

    _emit("ℹ️", "cyan", msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool = True, use_color: bool = True) -> None:
    """Emit a success message."""

    _emit("✅", "green", msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool = True, use_color: bool = True) -> None:
    """Emit a warning message on standard error."""

    _emit("⚠️", "yellow", msg, use_emoji=use_emoji, use_color=use_color, stderr=True)


def fail(msg: str, *, use_emoji: bool = True, use_color: bool = True) -> None:
    """Emit an error message on standard error."""

    _emit("❌", "red", msg, use_emoji=use_emoji, use_color=use_color, stderr=True)


__all__ = ["RichConsoleManager", "detect_tty", "fail", "get_console_manager", "info", "ok", "warn"]
