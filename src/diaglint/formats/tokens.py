# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Declarative tokens describing the layout of one diagnostic line.

A :class:`FormatSpec` is an ordered tuple of tokens mirroring the physical
layout of a tool's output, for example::

    FormatSpec.of(Filename(), ":", Line(), ":", Column(), ":", Message(), SeverityFromMessage())

Plain strings passed to :meth:`FormatSpec.of` become :class:`Literal` tokens.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TypeAlias

from ..errors import FormatSpecError
from ..severity import DEFAULT_CLASSIFIER, Severity, SeverityClassifier


@dataclass(frozen=True, slots=True)
class Filename:
    """Run of characters excluding space, tab, colon, CR, LF, NUL, FF and VT."""


@dataclass(frozen=True, slots=True)
class Line:
    """One-based line number written as decimal digits."""


@dataclass(frozen=True, slots=True)
class Column:
    """Column number written as decimal digits."""


@dataclass(frozen=True, slots=True)
class Code:
    """Rule identifier such as ``F401`` or ``SC2086``.

    Attributes:
        prefix: Separator text that precedes the identifier, for example the
            ``/`` in ``[Error/no-undef]``.
        optional: When set, the prefix and identifier may both be absent and
            the diagnostic then carries no code.
    """

    prefix: str = ""
    optional: bool = False


@dataclass(frozen=True, slots=True)
class Message:
    """Remaining text up to a line terminator, bound to ``name``."""

    name: str = "message"


@dataclass(frozen=True, slots=True)
class SeverityFromMessage:
    """Severity derived by classifying an earlier :class:`Message` capture.

    Attributes:
        source: Name of the referenced message; ``None`` selects the closest
            preceding :class:`Message`.
        classifier: Classifier applied to the captured text.
    """

    source: str | None = None
    classifier: SeverityClassifier = DEFAULT_CLASSIFIER


@dataclass(frozen=True, slots=True)
class SeverityFixed:
    """Constant severity regardless of line content."""

    level: Severity


@dataclass(frozen=True, slots=True)
class SeverityPattern:
    """Severity extracted by an embedded regular expression.

    The text matched by ``pattern`` is looked up in ``mapping``
    (case-insensitively); labels missing from the table are classified with
    ``classifier``. ``pattern`` should only use non-capturing groups.
    """

    pattern: str
    mapping: tuple[tuple[str, Severity], ...] = ()
    classifier: SeverityClassifier = DEFAULT_CLASSIFIER

    @classmethod
    def remap(
        cls,
        pattern: str,
        mapping: Mapping[str, Severity | str],
        *,
        classifier: SeverityClassifier = DEFAULT_CLASSIFIER,
    ) -> SeverityPattern:
        """Build a pattern token from a plain ``label -> severity`` mapping."""

        pairs = tuple((str(label), Severity(level)) for label, level in mapping.items())
        return cls(pattern=pattern, mapping=pairs, classifier=classifier)

    def table(self) -> dict[str, Severity]:
        """Return the remap table as a dictionary."""
        return dict(self.mapping)


@dataclass(frozen=True, slots=True)
class Literal:
    """Exact separator text, consumed but not captured."""

    text: str


@dataclass(frozen=True, slots=True)
class Whitespace:
    """One or more spaces or tabs."""


FormatToken: TypeAlias = (
    Filename
    | Line
    | Column
    | Code
    | Message
    | SeverityFromMessage
    | SeverityFixed
    | SeverityPattern
    | Literal
    | Whitespace
)

TOKEN_TYPES: tuple[type, ...] = (
    Filename,
    Line,
    Column,
    Code,
    Message,
    SeverityFromMessage,
    SeverityFixed,
    SeverityPattern,
    Literal,
    Whitespace,
)
SEVERITY_TOKEN_TYPES: tuple[type, ...] = (SeverityFromMessage, SeverityFixed, SeverityPattern)


@dataclass(frozen=True, slots=True)
class FormatSpec:
    """Ordered token sequence describing one tool's diagnostic line.

    Specs are validated on construction and are immutable and hashable, so
    they can key the compiled-matcher cache.

    Raises:
        FormatSpecError: If the token sequence violates a layout invariant.
    """

    tokens: tuple[FormatToken, ...]
    default_severity: Severity = field(default=Severity.WARNING)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))
        object.__setattr__(self, "default_severity", Severity(self.default_severity))
        validate_tokens(self.tokens)

    @classmethod
    def of(cls, *tokens: FormatToken | str, default_severity: Severity = Severity.WARNING) -> FormatSpec:
        """Build a spec from ``tokens``, turning plain strings into literals."""

        coerced = tuple(Literal(token) if isinstance(token, str) else token for token in tokens)
        return cls(tokens=coerced, default_severity=default_severity)

    @property
    def has_column(self) -> bool:
        """Return ``True`` when the layout includes a column field."""
        return any(isinstance(token, Column) for token in self.tokens)

    @property
    def message_names(self) -> tuple[str, ...]:
        """Return the names bound by :class:`Message` tokens in order."""
        return tuple(token.name for token in self.tokens if isinstance(token, Message))


def validate_tokens(tokens: tuple[FormatToken, ...]) -> None:
    """Check the layout invariants of a token sequence.

    Args:
        tokens: Candidate tokens for a :class:`FormatSpec`.

    Raises:
        FormatSpecError: If a token is unknown, a required field is missing, a
            single-use field repeats, or a severity token references a message
            that has not been captured yet.
    """

    for token in tokens:
        if not isinstance(token, TOKEN_TYPES):
            raise FormatSpecError(f"unsupported format token: {token!r}")

    counts = Counter(type(token) for token in tokens)
    for required in (Filename, Line, Message):
        if counts[required] == 0:
            raise FormatSpecError(f"format requires a {required.__name__} token")
    for single in (Filename, Line, Column, Code):
        if counts[single] > 1:
            raise FormatSpecError(f"format may contain at most one {single.__name__} token")
    if sum(counts[kind] for kind in SEVERITY_TOKEN_TYPES) > 1:
        raise FormatSpecError("format may contain at most one severity token")

    seen_messages: list[str] = []
    for token in tokens:
        match token:
            case Literal(text=text) if not text:
                raise FormatSpecError("literal tokens must not be empty")
            case SeverityPattern(pattern=pattern) if not pattern:
                raise FormatSpecError("severity patterns must not be empty")
            case Message(name=name):
                if not name:
                    raise FormatSpecError("message tokens require a name")
                if name in seen_messages:
                    raise FormatSpecError(f"duplicate message name '{name}'")
                seen_messages.append(name)
            case SeverityFromMessage(source=source):
                if not seen_messages:
                    raise FormatSpecError("SeverityFromMessage must follow a Message token")
                if source is not None and source not in seen_messages:
                    raise FormatSpecError(f"SeverityFromMessage references unknown message '{source}'")
            case _:
                pass


__all__ = [
    "Code",
    "Column",
    "Filename",
    "FormatSpec",
    "FormatToken",
    "Line",
    "Literal",
    "Message",
    "SeverityFixed",
    "SeverityFromMessage",
    "SeverityPattern",
    "Whitespace",
    "validate_tokens",
]
