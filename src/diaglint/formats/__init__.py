# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Declarative diagnostic line formats and their compiler."""

from __future__ import annotations

from .compiler import Captures, Matcher, build_matcher, compile_format
from .tokens import (
    Code,
    Column,
    Filename,
    FormatSpec,
    FormatToken,
    Line,
    Literal,
    Message,
    SeverityFixed,
    SeverityFromMessage,
    SeverityPattern,
    Whitespace,
)

__all__ = [
    "Captures",
    "Code",
    "Column",
    "Filename",
    "FormatSpec",
    "FormatToken",
    "Line",
    "Literal",
    "Matcher",
    "Message",
    "SeverityFixed",
    "SeverityFromMessage",
    "SeverityPattern",
    "Whitespace",
    "build_matcher",
    "compile_format",
]
