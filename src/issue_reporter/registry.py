# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Codec registry keyed by format name."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, cast

from .errors import ConfigurationError
from .formats import BUILTIN_CODECS
from .formats.base import Codec, ParsableCodec
from .options import OptionScope, OptionSpec

LOGGER = logging.getLogger(__name__)


class CodecKind(StrEnum):
    """Capability tag fixed when a codec is registered."""

    GENERATE_ONLY = "generate-only"
    PARSABLE = "parsable"


@dataclass(frozen=True, slots=True)
class CodecEntry:
    """Registered codec class together with its capability tag."""

    name: str
    kind: CodecKind
    codec: type[Codec]

    @property
    def parsable(self) -> bool:
        return self.kind is CodecKind.PARSABLE


class CodecRegistry(Mapping[str, CodecEntry]):
    """Read-only mapping from format name to :class:`CodecEntry`.

    A registry is built once, usually with :func:`build_default_registry`, and
    passed to whatever needs to look codecs up.
    """

    def __init__(self, codecs: Iterable[type[Codec]] = ()) -> None:
        """Initialise the registry and register ``codecs`` in order."""

        self._entries: dict[str, CodecEntry] = {}
        for codec in codecs:
            self.register(codec)

    def register(self, codec: type[Codec]) -> CodecEntry:
        """Register ``codec`` under its ``name``.

        Args:
            codec: Codec class to register.

        Returns:
            CodecEntry: Entry recorded for the codec.

        Raises:
            ValueError: If a codec with the same name is already registered.
        """

        if codec.name in self._entries:
            raise ValueError(f"Codec '{codec.name}' already registered")
        kind = CodecKind.PARSABLE if issubclass(codec, ParsableCodec) else CodecKind.GENERATE_ONLY
        entry = CodecEntry(name=codec.name, kind=kind, codec=codec)
        self._entries[codec.name] = entry
        LOGGER.debug("Registered codec %s (%s)", codec.name, kind)
        return entry

    def entry(self, name: str) -> CodecEntry:
        """Return the entry for ``name``.

        Raises:
            ConfigurationError: If no codec is registered under ``name``.
        """

        try:
            return self._entries[name]
        except KeyError as exc:
            known = ", ".join(self._entries)
            raise ConfigurationError(f"Unknown format '{name}', expected one of: {known}", option=name) from exc

    def create(self, name: str, options: Mapping[str, Any] | None = None) -> Codec:
        """Instantiate the codec registered as ``name`` with ``options``."""

        return self.entry(name).codec(options)

    def create_parsable(self, name: str, options: Mapping[str, Any] | None = None) -> ParsableCodec:
        """Instantiate a codec that can parse.

        Raises:
            ConfigurationError: If ``name`` is unknown or cannot parse.
        """

        entry = self.entry(name)
        if not entry.parsable:
            raise ConfigurationError(f"Format '{name}' can only generate reports", option=name)
        return cast(ParsableCodec, entry.codec(options))

    def parsable(self) -> tuple[CodecEntry, ...]:
        return tuple(entry for entry in self._entries.values() if entry.parsable)

    def options_definition(self, scope: OptionScope = OptionScope.BOTH) -> list[OptionSpec]:
        """Return every option of every codec, each name listed once."""

        seen: set[str] = set()
        specs: list[OptionSpec] = []
        for entry in self._entries.values():
            for spec in entry.codec.options_definition(scope):
                if spec.name not in seen:
                    seen.add(spec.name)
                    specs.append(spec)
        return specs

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __getitem__(self, name: str) -> CodecEntry:
        return self._entries[name]


def build_default_registry() -> CodecRegistry:
    """Return a registry holding every built-in codec."""

    return CodecRegistry(BUILTIN_CODECS)


__all__ = ["CodecEntry", "CodecKind", "CodecRegistry", "build_default_registry"]
