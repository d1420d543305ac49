# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in report codecs."""

from __future__ import annotations

from typing import Final

from .base import Codec, OutputKind, ParsableCodec
from .checkstyle import CheckstyleCodec
from .emacs import EmacsCodec
from .gitlab import GitLabCodec
from .info import InfoCodec, InfoHtmlCodec, InfoMdCodec
from .junit import JunitCodec
from .lsp import LspCodec
from .phpcs import PhpCsCodec
from .raw import RawCodec
from .rawxml import RawXmlCodec
from .sarif import SarifCodec
from .sonarqube import SonarQubeCodec

BUILTIN_CODECS: Final[tuple[type[Codec], ...]] = (
    CheckstyleCodec,
    EmacsCodec,
    GitLabCodec,
    InfoCodec,
    InfoHtmlCodec,
    InfoMdCodec,
    JunitCodec,
    LspCodec,
    PhpCsCodec,
    RawCodec,
    RawXmlCodec,
    SarifCodec,
    SonarQubeCodec,
)

__all__ = [
    "BUILTIN_CODECS",
    "CheckstyleCodec",
    "Codec",
    "EmacsCodec",
    "GitLabCodec",
    "InfoCodec",
    "InfoHtmlCodec",
    "InfoMdCodec",
    "JunitCodec",
    "LspCodec",
    "OutputKind",
    "ParsableCodec",
    "PhpCsCodec",
    "RawCodec",
    "RawXmlCodec",
    "SarifCodec",
    "SonarQubeCodec",
]
