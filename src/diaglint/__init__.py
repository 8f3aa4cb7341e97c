# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic-format compiler and multi-tool lint orchestrator."""

from __future__ import annotations

from importlib import metadata

from .adapters import Adapter, AdapterRegistry
from .builtin import build_default_registry
from .errors import (
    DiaglintError,
    FormatSpecError,
    ToolInvocationError,
    UnsupportedLanguageError,
)
from .formats import FormatSpec, compile_format
from .models import Diagnostic
from .orchestrator import Orchestrator, ToolErrorPolicy
from .severity import Severity, classify

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "Diagnostic",
    "DiaglintError",
    "FormatSpec",
    "FormatSpecError",
    "Orchestrator",
    "Severity",
    "ToolErrorPolicy",
    "ToolInvocationError",
    "UnsupportedLanguageError",
    "__version__",
    "build_default_registry",
    "classify",
    "compile_format",
]

try:
    __version__ = metadata.version("diaglint")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
