# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across diaglint."""

from __future__ import annotations


class DiaglintError(Exception):
    """Base class for every error raised by diaglint."""


class ConfigError(DiaglintError):
    """Raised when configuration input is invalid."""


class FormatSpecError(DiaglintError, ValueError):
    """Raised when a format description cannot be validated or compiled."""


class AdapterConfigError(DiaglintError, ValueError):
    """Raised when an adapter definition is malformed."""


class UnknownAdapterError(DiaglintError, KeyError):
    """Raised when an adapter name is not present in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown adapter '{self.name}'"


class UnsupportedLanguageError(DiaglintError, LookupError):
    """Raised when no adapters are configured for a language tag.

    Distinct from a configured language that simply produced no diagnostics.
    """

    def __init__(self, language: str) -> None:
        super().__init__(language)
        self.language = language

    def __str__(self) -> str:
        return f"no linters are configured for language '{self.language}'"


class TargetRequiredError(DiaglintError, ValueError):
    """Raised when an adapter needs a target file and none was supplied."""

    def __init__(self, adapter: str) -> None:
        super().__init__(adapter)
        self.adapter = adapter

    def __str__(self) -> str:
        return f"adapter '{self.adapter}' requires a target file"


class ToolInvocationError(DiaglintError, RuntimeError):
    """Raised when an external tool could not be started."""

    def __init__(self, executable: str, reason: str) -> None:
        super().__init__(f"cannot execute {executable} ({reason})")
        self.executable = executable
        self.reason = reason


__all__ = [
    "AdapterConfigError",
    "ConfigError",
    "DiaglintError",
    "FormatSpecError",
    "TargetRequiredError",
    "ToolInvocationError",
    "UnknownAdapterError",
    "UnsupportedLanguageError",
]
