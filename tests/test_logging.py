# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for console message helpers."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from issue_reporter.logging import fail, get_console_manager, info, ok, warn


@pytest.fixture(autouse=True)
def fresh_consoles() -> Iterator[None]:
    get_console_manager().clear()
    yield
    get_console_manager().clear()


def test_messages_go_to_expected_streams(capsys: pytest.CaptureFixture[str]) -> None:
    info("starting", use_emoji=False, use_color=False)
    ok("done", use_emoji=False, use_color=False)
    warn("careful", use_emoji=False, use_color=False)
    fail("broken [bold]", use_emoji=False, use_color=False)

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["starting", "done"]
    assert captured.err.splitlines() == ["careful", "broken [bold]"]


def test_emoji_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    ok("done", use_emoji=True, use_color=False)
    assert capsys.readouterr().out.startswith("✅ done")


def test_consoles_are_cached() -> None:
    manager = get_console_manager()
    assert manager.get(color=False, emoji=False) is manager.get(color=False, emoji=False)
    assert manager.get(color=False, emoji=False) is not manager.get(color=False, emoji=False, stderr=True)
