# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report transformers applied before a report is generated."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Final

from jinja2 import Environment, StrictUndefined, TemplateError, Undefined

from .errors import TransformError
from .models import Issue, Report
from .options import OptionMode, OptionResolver, OptionSpec


class Transformer(ABC):
    """In-place rewrite of a report tree, toggled by a flag named after it."""

    name: ClassVar[str]
    description: ClassVar[str]
    enabled_by_default: ClassVar[bool] = True

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        self.options = OptionResolver(self.name, self.options_definition()).resolve(options or {})

    @classmethod
    def options_definition(cls) -> list[OptionSpec]:
        return [
            OptionSpec(
                name=cls.name,
                mode=OptionMode.FLAG,
                description=f"Enable the {cls.name} transformer",
                default=cls.enabled_by_default,
                annotation=bool,
            )
        ]

    @classmethod
    def is_enabled(cls, options: Mapping[str, Any]) -> bool:
        """Return whether ``options`` switch this transformer on."""

        return bool(OptionResolver(cls.name, cls.options_definition()).resolve(options)[cls.name])

    @abstractmethod
    def transform(self, report: Report) -> None:
        """Rewrite ``report`` and its descendants in place."""


class MessageReplacer(Transformer):
    """Fill ``{{ key }}`` placeholders in messages and help from the issue's extra data.

    Unknown keys render as an empty string unless ``strict`` is set.
    """

    name = "message-replacer"
    description = 'Replace {{ key }} placeholders in the "message" and "help" fields with issue extra data'

    _MARKERS: Final[tuple[str, ...]] = ("{{", "{%", "{#")

    def __init__(self, options: Mapping[str, Any] | None = None, *, strict: bool = False) -> None:
        super().__init__(options)
        self._env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined if strict else Undefined,
        )

    def render(self, text: str, issue: Issue) -> str:
        """Render ``text`` with ``issue.extra`` as the template context.

        Raises:
            TransformError: If ``text`` is not a valid template or rendering fails.
        """

        if not any(marker in text for marker in self._MARKERS):
            return text
        try:
            return self._env.from_string(text).render(issue.extra)
        except TemplateError as exc:
            raise TransformError(f"Cannot render template for issue {issue.code} at {issue.path}: {exc}") from exc

    def transform(self, report: Report) -> None:
        for issue in report.get_issues(by_file=False, recursive=False):
            issue.message = self.render(issue.message, issue)
            issue.help = self.render(issue.help, issue)
        for child in report.sub_reports.values():
            self.transform(child)


BUILTIN_TRANSFORMERS: Final[tuple[type[Transformer], ...]] = (MessageReplacer,)

__all__ = ["BUILTIN_TRANSFORMERS", "MessageReplacer", "Transformer"]
