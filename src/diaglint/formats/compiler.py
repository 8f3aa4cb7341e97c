# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile :class:`FormatSpec` descriptions into reusable line matchers.

Compilation is a fold over the spec's tokens. Each token contributes a
sub-pattern (a named group when it captures) to one composed regular
expression, and an extraction step that reads its group and writes into an
explicit capture accumulator. Steps run in token order, so a
:class:`SeverityFromMessage` step always sees the message captured before it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Final, TypeAlias

from pydantic import ValidationError

from ..errors import FormatSpecError
from ..models import Diagnostic
from ..severity import Severity, severity_from_label
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

LOGGER = logging.getLogger(__name__)

FILENAME_PATTERN: Final[str] = r"[^ \t:\r\n\x00\x0c\x0b]+"
DIGITS_PATTERN: Final[str] = r"[0-9]+"
MESSAGE_PATTERN: Final[str] = r"[^\r\n\x00]+"
CODE_PATTERN: Final[str] = r"[@A-Za-z0-9_][A-Za-z0-9_./@-]*"
WHITESPACE_PATTERN: Final[str] = r"[ \t]+"
# Positions wider than a signed 64-bit integer are treated as garbage.
MAX_POSITION_DIGITS: Final[int] = 18


@dataclass(slots=True)
class Captures:
    """Accumulator threaded through the extraction steps of one match."""

    filename: str | None = None
    line: int | None = None
    column: int | None = None
    code: str | None = None
    severity: Severity | None = None
    messages: dict[str, str] = field(default_factory=dict)


Step: TypeAlias = Callable[[re.Match[str], Captures], bool]


def _group(index: int) -> str:
    return f"t{index}"


def _filename_step(group: str) -> Step:
    def step(match: re.Match[str], captures: Captures) -> bool:
        captures.filename = match.group(group)
        return True

    return step


def _to_int(text: str) -> int | None:
    """Parse a digit run, returning ``None`` when it is too long to be a position."""

    if len(text) > MAX_POSITION_DIGITS:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _line_step(group: str) -> Step:
    def step(match: re.Match[str], captures: Captures) -> bool:
        value = _to_int(match.group(group))
        if value is None or value < 1:
            return False
        captures.line = value
        return True

    return step


def _column_step(group: str) -> Step:
    def step(match: re.Match[str], captures: Captures) -> bool:
        value = _to_int(match.group(group))
        if value is None:
            return False
        captures.column = value
        return True

    return step


def _code_step(group: str) -> Step:
    def step(match: re.Match[str], captures: Captures) -> bool:
        captures.code = match.group(group)
        return True

    return step


def _message_step(group: str, name: str) -> Step:
    def step(match: re.Match[str], captures: Captures) -> bool:
        captures.messages[name] = match.group(group)
        return True

    return step


def _severity_from_message_step(token: SeverityFromMessage, source: str) -> Step:
    def step(match: re.Match[str], captures: Captures) -> bool:
        del match
        text = captures.messages.get(source)
        if text is None:
            return False
        captures.severity = token.classifier.classify(text)
        return True

    return step


def _severity_fixed_step(level: Severity) -> Step:
    def step(match: re.Match[str], captures: Captures) -> bool:
        del match
        captures.severity = level
        return True

    return step


def _severity_pattern_step(group: str, token: SeverityPattern) -> Step:
    table = token.table()

    def step(match: re.Match[str], captures: Captures) -> bool:
        captures.severity = severity_from_label(match.group(group), table, classifier=token.classifier)
        return True

    return step


def _compile_token(token: FormatToken, index: int, last_message: str | None) -> tuple[str, Step | None]:
    """Return the sub-pattern and optional extraction step for ``token``."""

    group = _group(index)
    match token:
        case Filename():
            return f"(?P<{group}>{FILENAME_PATTERN})", _filename_step(group)
        case Line():
            return f"(?P<{group}>{DIGITS_PATTERN})", _line_step(group)
        case Column():
            return f"(?P<{group}>{DIGITS_PATTERN})", _column_step(group)
        case Code(prefix=prefix, optional=optional):
            fragment = f"{re.escape(prefix)}(?P<{group}>{CODE_PATTERN})"
            if optional:
                fragment = f"(?:{fragment})?"
            return fragment, _code_step(group)
        case Message(name=name):
            return f"(?P<{group}>{MESSAGE_PATTERN})", _message_step(group, name)
        case SeverityFromMessage(source=source):
            target = source or last_message
            if target is None:
                raise FormatSpecError("SeverityFromMessage must follow a Message token")
            return "", _severity_from_message_step(token, target)
        case SeverityFixed(level=level):
            return "", _severity_fixed_step(Severity(level))
        case SeverityPattern(pattern=pattern):
            return f"(?P<{group}>(?:{pattern}))", _severity_pattern_step(group, token)
        case Literal(text=text):
            return re.escape(text), None
        case Whitespace():
            return WHITESPACE_PATTERN, None
    raise FormatSpecError(f"unsupported format token: {token!r}")


@dataclass(frozen=True, slots=True)
class Matcher:
    """Compiled, reusable matcher for one :class:`FormatSpec`."""

    spec: FormatSpec
    pattern: re.Pattern[str]
    steps: tuple[Step, ...]

    def apply(self, line: str) -> Diagnostic | None:
        """Extract a :class:`Diagnostic` from ``line``.

        The whole line must conform to the format; partial matches are
        failures. One trailing terminator is removed first and text from the
        first NUL onwards is ignored.

        Args:
            line: A single line of tool output.

        Returns:
            Diagnostic | None: Extracted diagnostic, or ``None`` on no match.
        """

        text = line.removesuffix("\n").removesuffix("\r").partition("\x00")[0]
        match = self.pattern.fullmatch(text)
        if match is None:
            return None
        captures = Captures()
        for step in self.steps:
            if not step(match, captures):
                return None
        if captures.filename is None or captures.line is None or not captures.messages:
            return None
        message = captures.messages[self.spec.message_names[0]]
        try:
            return Diagnostic(
                filename=captures.filename,
                line=captures.line,
                column=captures.column,
                message=message,
                severity=captures.severity or self.spec.default_severity,
                code=captures.code,
            )
        except ValidationError:
            return None

    def __call__(self, line: str) -> Diagnostic | None:
        return self.apply(line)


def build_matcher(spec: FormatSpec) -> Matcher:
    """Compile ``spec`` into a fresh :class:`Matcher` without caching.

    Args:
        spec: Validated format description.

    Returns:
        Matcher: Matcher equivalent to any other compiled from ``spec``.

    Raises:
        FormatSpecError: If an embedded severity pattern is not a valid regex.
    """

    parts: list[str] = []
    steps: list[Step] = []
    last_message: str | None = None
    for index, token in enumerate(spec.tokens):
        fragment, step = _compile_token(token, index, last_message)
        parts.append(fragment)
        if step is not None:
            steps.append(step)
        if isinstance(token, Message):
            last_message = token.name
    source = "".join(parts)
    try:
        pattern = re.compile(source)
    except re.error as exc:
        raise FormatSpecError(f"invalid format pattern {source!r}: {exc}") from exc
    LOGGER.debug("compiled format pattern=%s", source)
    return Matcher(spec=spec, pattern=pattern, steps=tuple(steps))


@lru_cache(maxsize=None)
def compile_format(spec: FormatSpec) -> Matcher:
    """Return the cached :class:`Matcher` for ``spec``, compiling it on first use."""

    return build_matcher(spec)


__all__ = ["Captures", "Matcher", "build_matcher", "compile_format"]
