# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

import string
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Canonical severities normalising different tool vocabularies."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


WHITESPACE_STRIP: Final[str] = string.whitespace
PUNCTUATION_STRIP: Final[str] = string.whitespace + "([*\"'`"

# Order matters: the first matching prefix wins.
_PREFIX_RULES: Final[tuple[tuple[str, Severity], ...]] = (
    ("info", Severity.INFO),
    ("note", Severity.INFO),
    ("warning", Severity.WARNING),
    ("error", Severity.ERROR),
)

SEVERITY_COLORS: Final[dict[Severity, str]] = {
    Severity.INFO: "#ddcc88",
    Severity.WARNING: "#ffaf00",
    Severity.ERROR: "#db0000",
}


@dataclass(frozen=True, slots=True)
class SeverityClassifier:
    """Map free-text severity hints onto a :class:`Severity`.

    The input is lower-cased and stripped of leading ``strip_chars`` before the
    full-word prefixes ``info``/``note``, ``warning`` and ``error`` are tested in
    that order. Anything else yields ``default``.

    Attributes:
        strip_chars: Leading characters removed before prefix matching.
        default: Severity returned when no prefix matches.
    """

    strip_chars: str = WHITESPACE_STRIP
    default: Severity = Severity.WARNING

    def classify(self, text: str) -> Severity:
        """Return the severity implied by ``text``.

        Args:
            text: Free-form text such as a captured diagnostic message.

        Returns:
            Severity: Classified severity, never ``None``.
        """

        candidate = text.lower().lstrip(self.strip_chars)
        for prefix, severity in _PREFIX_RULES:
            if candidate.startswith(prefix):
                return severity
        return self.default


DEFAULT_CLASSIFIER: Final[SeverityClassifier] = SeverityClassifier()
PUNCTUATION_CLASSIFIER: Final[SeverityClassifier] = SeverityClassifier(strip_chars=PUNCTUATION_STRIP)


def classify(text: str) -> Severity:
    """Classify ``text`` with the whitespace-only classifier."""

    return DEFAULT_CLASSIFIER.classify(text)


def severity_from_label(
    label: str,
    mapping: Mapping[str, Severity],
    *,
    classifier: SeverityClassifier = DEFAULT_CLASSIFIER,
) -> Severity:
    """Return a :class:`Severity` for ``label`` using a remap table.

    Lookups are case-insensitive. Labels absent from ``mapping`` fall back to
    ``classifier`` so that tools printing ``error``/``warning`` verbatim work
    without an explicit table.

    Args:
        label: Severity field captured from a tool's output line.
        mapping: Table from tool-native labels to canonical severities.
        classifier: Classifier used when ``label`` is not in ``mapping``.

    Returns:
        Severity: Canonical severity for ``label``.
    """

    key = label.strip().lower()
    for raw, severity in mapping.items():
        if raw.lower() == key:
            return Severity(severity)
    return classifier.classify(label)


__all__ = [
    "DEFAULT_CLASSIFIER",
    "PUNCTUATION_CLASSIFIER",
    "PUNCTUATION_STRIP",
    "SEVERITY_COLORS",
    "WHITESPACE_STRIP",
    "Severity",
    "SeverityClassifier",
    "classify",
    "severity_from_label",
]
