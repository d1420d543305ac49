# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity levels and the lookup helpers codecs use to map them."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import Final


class Severity(IntEnum):
    """Three-level severity shared by every format.

    The integer values are the wire representation used by the raw codecs and
    give the total order ``ERROR > WARNING > TIP``.
    """

    ERROR = 5
    WARNING = 3
    TIP = 0

    @property
    def label(self) -> str:
        """Return the upper-case label (``ERROR``, ``WARNING`` or ``TIP``)."""

        return self.name

    @classmethod
    def coerce(cls, value: object) -> Severity:
        """Return the severity described by ``value``.

        Args:
            value: A :class:`Severity`, its numeric wire value, or a label in any case.

        Returns:
            Severity: Matching severity member.

        Raises:
            ValueError: If ``value`` does not describe a known severity.
        """

        if isinstance(value, Severity):
            return value
        if isinstance(value, bool):
            raise ValueError(f"invalid severity {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            text = value.strip()
            if text.lstrip("-").isdigit():
                return cls(int(text))
            member = _LABELS.get(text.upper())
            if member is not None:
                return member
        raise ValueError(f"invalid severity {value!r}")


_LABELS: Final[dict[str, Severity]] = {member.name: member for member in Severity}


def map_label(
    label: object,
    mapping: Mapping[str, Severity],
    default: Severity = Severity.WARNING,
) -> Severity:
    """Return the severity registered for ``label`` in ``mapping``.

    Lookups are case-insensitive; anything that is not a known string yields
    ``default``.
    """

    if isinstance(label, str):
        return mapping.get(label.strip().lower(), default)
    return default


__all__ = ["Severity", "map_label"]
