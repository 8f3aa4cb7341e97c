# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the diaglint package."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity


class Diagnostic(BaseModel):
    """Normalised diagnostic produced from one matched tool output line."""

    model_config = ConfigDict(frozen=True)

    filename: str
    line: int = Field(ge=1)
    column: int | None = Field(default=None, ge=0)
    message: str
    severity: Severity
    code: str | None = None
    tool: str | None = None

    @property
    def is_error(self) -> bool:
        """Return ``True`` when the diagnostic has error severity."""
        return self.severity is Severity.ERROR

    @property
    def location(self) -> tuple[int, int]:
        """Return a one-based ``(line, column)`` pair, defaulting the column to 1."""
        return self.line, self.column or 1


class AdapterOutcome(BaseModel):
    """Result of running a single adapter against a target."""

    model_config = ConfigDict(validate_assignment=True)

    adapter: str
    returncode: int | None = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Return ``True`` when the adapter could not be executed."""
        return self.error is not None


class LintReport(BaseModel):
    """Aggregate result for one orchestrated run over a language's adapters."""

    model_config = ConfigDict(validate_assignment=True)

    language: str
    target: str | None = None
    outcomes: list[AdapterOutcome] = Field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Return diagnostics in adapter order, then output-line order."""
        return [diag for outcome in self.outcomes for diag in outcome.diagnostics]

    def has_errors(self) -> bool:
        """Return ``True`` when any diagnostic carries error severity."""
        return any(diag.is_error for diag in self.diagnostics)


def group_by_file(diagnostics: Iterable[Diagnostic]) -> dict[str, list[Diagnostic]]:
    """Group ``diagnostics`` by filename preserving first-seen order.

    Args:
        diagnostics: Diagnostics in production order.

    Returns:
        dict[str, list[Diagnostic]]: Mapping of filename to its diagnostics.
    """

    grouped: dict[str, list[Diagnostic]] = {}
    for diag in diagnostics:
        grouped.setdefault(diag.filename, []).append(diag)
    return grouped


def first_error(diagnostics: Sequence[Diagnostic]) -> Diagnostic | None:
    """Return the first error-severity diagnostic, if any."""

    return next((diag for diag in diagnostics if diag.is_error), None)


__all__ = [
    "AdapterOutcome",
    "Diagnostic",
    "LintReport",
    "first_error",
    "group_by_file",
]
