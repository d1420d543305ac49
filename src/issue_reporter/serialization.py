# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Coercion helpers used when turning decoded payloads into issue records."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from pathlib import Path
from typing import Any, TypeAlias

from pydantic import BaseModel

JsonPrimitive: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]
ExtraValue: TypeAlias = str | int | float | bool


def safe_int(value: object, default: int = 0) -> int:
    """Return ``value`` as ``int`` when possible, otherwise ``default``."""

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def safe_float(value: object) -> float | None:
    """Return ``value`` as ``float`` or ``None`` when it is not numeric."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def coerce_mapping(value: object) -> dict[str, Any]:
    """Return ``value`` when it is a mapping keyed by strings, otherwise ``{}``."""

    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}
    return {}


def coerce_dict_sequence(value: object) -> list[dict[str, Any]]:
    """Return the mapping items of ``value`` when it is a sequence."""

    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        return []
    return [coerce_mapping(item) for item in value if isinstance(item, Mapping)]


def coerce_extra(value: object) -> dict[str, ExtraValue]:
    """Keep only the scalar entries of ``value`` for use as issue extra data."""

    extra: dict[str, ExtraValue] = {}
    for key, item in coerce_mapping(value).items():
        if isinstance(item, (str, int, float, bool)):
            extra[key] = item
    return extra


def jsonify(value: Any) -> JsonValue:
    """Convert ``value`` into a JSON-serializable payload."""

    if isinstance(value, Path):
        return value.as_posix()
    if hasattr(value, "to_dict"):
        return jsonify(value.to_dict())
    if isinstance(value, BaseModel):
        return jsonify(value.model_dump(mode="python", by_alias=True))
    if isinstance(value, Mapping):
        return {str(key): jsonify(item) for key, item in value.items()}
    if isinstance(value, AbstractSet):
        serialised = [jsonify(item) for item in value]
        try:
            return sorted(serialised, key=lambda item: json.dumps(item, sort_keys=True))
        except TypeError:
            return serialised
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [jsonify(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


__all__ = [
    "ExtraValue",
    "JsonPrimitive",
    "JsonValue",
    "coerce_dict_sequence",
    "coerce_extra",
    "coerce_mapping",
    "jsonify",
    "safe_float",
    "safe_int",
]
