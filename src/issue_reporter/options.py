# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Option declarations and the resolver that merges them for a codec.

Codecs compose several option sets. Each declared option can be exposed under
its bare name, under ``<codec>-<name>`` or under both, so a single flat map of
supplied values (for example parsed from a command line) can configure many
codecs at once while still allowing per-codec overrides.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import IntFlag, StrEnum
from functools import lru_cache
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .errors import ConfigurationError

LOGGER = logging.getLogger(__name__)


class OptionMode(StrEnum):
    """How an option takes its value."""

    FLAG = "flag"
    VALUE = "value"
    REQUIRED = "required"


class OptionScope(IntFlag):
    """Which names :func:`declare_option` emits for an option."""

    NORMAL = 1
    PREFIX = 2
    BOTH = NORMAL | PREFIX


@lru_cache(maxsize=None)
def _adapter(annotation: Any) -> TypeAdapter[Any]:
    return TypeAdapter(annotation)


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Declaration of one configuration knob.

    Attributes:
        name: Option name, bare or prefixed with the owning codec's name.
        mode: Whether the option is a negatable flag, an optional value or a
            required value.
        description: Help text shown by listings.
        default: Value used when nothing is supplied.
        annotation: Type the supplied value is validated against.
    """

    name: str
    mode: OptionMode
    description: str = ""
    default: Any = None
    annotation: Any = str

    def prefixed(self, owner: str) -> OptionSpec:
        """Return a copy named ``<owner>-<name>``."""

        return replace(self, name=f"{owner}-{self.name}")

    def coerce(self, value: Any) -> Any:
        """Validate ``value`` against the declared type.

        A flag supplied without a value (``None``) is switched on.

        Raises:
            ConfigurationError: If ``value`` cannot be converted.
        """

        if value is None and self.mode is OptionMode.FLAG:
            return True
        try:
            return _adapter(self.annotation).validate_python(value)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid value {value!r} for option '{self.name}': {exc.errors()[0]['msg']}",
                option=self.name,
            ) from exc


def declare_option(owner: str, spec: OptionSpec, scope: OptionScope = OptionScope.NORMAL) -> list[OptionSpec]:
    """Return the specs ``scope`` asks for: bare, ``<owner>``-prefixed, or both."""

    specs: list[OptionSpec] = []
    if scope & OptionScope.NORMAL:
        specs.append(spec)
    if scope & OptionScope.PREFIX:
        specs.append(spec.prefixed(owner))
    return specs


class OptionResolver:
    """Compute effective option values for one codec.

    The resolver keeps the values of previous calls: a later :meth:`resolve`
    only changes options that are explicitly supplied again.
    """

    def __init__(self, owner: str, definitions: Iterable[OptionSpec]) -> None:
        """Bind the resolver to ``owner`` and the specs it declares (both scopes)."""

        self.owner = owner
        self.definitions = tuple(definitions)
        self._values: dict[str, Any] = {}

    @property
    def prefix(self) -> str:
        return f"{self.owner}-"

    def bare_name(self, name: str) -> str:
        """Return ``name`` without this resolver's codec prefix."""

        return name[len(self.prefix) :] if name.startswith(self.prefix) else name

    def resolve(self, supplied: Mapping[str, Any]) -> dict[str, Any]:
        """Merge ``supplied`` into the effective configuration.

        For each declared spec, in declaration order:

        1. A spec in this codec's namespace stores its value under the bare name.
        2. A bare spec is skipped when ``<codec>-<name>`` was supplied, so the
           prefixed spec decides.
        3. A value resolved earlier is kept unless the spec's name is supplied.
        4. Otherwise the supplied value is used, or the declared default.

        Args:
            supplied: Flat map of option names to raw values; unknown keys are ignored.

        Returns:
            dict[str, Any]: Effective values keyed by bare option name.

        Raises:
            ConfigurationError: If a value cannot be coerced or a required option
                has no value.
        """

        for spec in self.definitions:
            key = spec.name
            if key.startswith(self.prefix):
                key = key[len(self.prefix) :]
            elif f"{self.prefix}{key}" in supplied:
                continue
            if spec.name in supplied:
                self._values[key] = spec.coerce(supplied[spec.name])
            elif key in self._values:
                continue
            elif spec.mode is not OptionMode.REQUIRED:
                self._values[key] = spec.default

        missing = sorted(
            {
                self.bare_name(spec.name)
                for spec in self.definitions
                if spec.mode is OptionMode.REQUIRED and self.bare_name(spec.name) not in self._values
            }
        )
        if missing:
            raise ConfigurationError(
                f"Missing required option(s) for '{self.owner}': {', '.join(missing)}",
                option=missing[0],
            )
        LOGGER.debug("Resolved options for %s: %s", self.owner, self._values)
        return dict(self._values)


def _to_kebab(name: str) -> str:
    return name.replace("_", "-")


class OptionSet(BaseModel):
    """Base class for a composable bundle of options.

    Each field is one option. The kebab-case alias is the option name, the
    field description is its help text and the field default its default.
    ``bool`` fields become negatable flags; fields without a default are
    required values.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=_to_kebab)

    FLAG_TYPES: ClassVar[tuple[type, ...]] = (bool,)

    @classmethod
    def option_specs(cls) -> list[OptionSpec]:
        """Return one bare :class:`OptionSpec` per field."""

        specs: list[OptionSpec] = []
        for field_name, info in cls.model_fields.items():
            if info.is_required():
                mode = OptionMode.REQUIRED
            elif info.annotation in cls.FLAG_TYPES:
                mode = OptionMode.FLAG
            else:
                mode = OptionMode.VALUE
            specs.append(
                OptionSpec(
                    name=info.alias or _to_kebab(field_name),
                    mode=mode,
                    description=info.description or "",
                    default=None if info.is_required() else info.default,
                    annotation=info.annotation,
                )
            )
        return specs

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> Self:
        """Build the set from resolved values keyed by option name.

        Raises:
            ConfigurationError: If a value does not fit its field.
        """

        known = {name.replace("-", "_"): value for name, value in values.items()}
        data = {name: known[name] for name in cls.model_fields if name in known}
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            error = exc.errors()[0]
            option = _to_kebab(str(error["loc"][0])) if error["loc"] else None
            raise ConfigurationError(f"Invalid options for {cls.__name__}: {error['msg']}", option=option) from exc


__all__ = [
    "OptionMode",
    "OptionResolver",
    "OptionScope",
    "OptionSet",
    "OptionSpec",
    "declare_option",
]
