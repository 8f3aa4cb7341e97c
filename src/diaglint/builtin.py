# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in adapter catalogue and default language table."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

from .adapters import Adapter, AdapterRegistry
from .formats import (
    Code,
    Column,
    Filename,
    FormatSpec,
    Line,
    Message,
    SeverityFixed,
    SeverityFromMessage,
    SeverityPattern,
    Whitespace,
)
from .severity import Severity

# ``path:line:col: <severity>: text`` as printed by clippy and shellcheck's gcc
# formatter; the severity word stays in the message.
GCC_FORMAT: Final[FormatSpec] = FormatSpec.of(
    Filename(), ":", Line(), ":", Column(), ": ", Message(), SeverityFromMessage()
)

# ``main.c:1:10: fatal error: foo.h: No such file or directory`` from gcc and
# clang; the severity field is split off the message so ``fatal error`` counts.
CC_FORMAT: Final[FormatSpec] = FormatSpec.of(
    Filename(),
    ":",
    Line(),
    ":",
    Column(),
    ": ",
    SeverityPattern.remap(
        r"fatal error|error|warning|note",
        {"fatal error": Severity.ERROR, "note": Severity.INFO},
    ),
    ": ",
    Message(),
)

# ``pkg/mod.py:1:8: F401 [*] `os` imported but unused``
RUFF_FORMAT: Final[FormatSpec] = FormatSpec.of(
    Filename(), ":", Line(), ":", Column(), ": ", Code(), Whitespace(), Message(), SeverityFixed(Severity.WARNING)
)

# ``pkg/mod.py:3:5: error: Incompatible types in assignment  [assignment]``
MYPY_FORMAT: Final[FormatSpec] = FormatSpec.of(
    Filename(),
    ":",
    Line(),
    ":",
    Column(),
    ": ",
    SeverityPattern.remap(r"error|warning|note", {"note": Severity.INFO}),
    ": ",
    Message(),
)

# ``pkg/mod.py:1:0:C:C0114 Missing module docstring`` via the msg-template below.
PYLINT_FORMAT: Final[FormatSpec] = FormatSpec.of(
    Filename(),
    ":",
    Line(),
    ":",
    Column(),
    ":",
    SeverityPattern.remap(
        r"[CRWEFI]",
        {
            "C": Severity.INFO,
            "R": Severity.INFO,
            "I": Severity.INFO,
            "W": Severity.WARNING,
            "E": Severity.ERROR,
            "F": Severity.ERROR,
        },
    ),
    ":",
    Code(),
    Whitespace(),
    Message(),
)

# ``/src/app.js:1:10: 'x' is defined but never used. [Error/no-unused-vars]``; parse
# errors have no rule and end in a bare ``[Error]``.
ESLINT_FORMAT: Final[FormatSpec] = FormatSpec.of(
    Filename(),
    ":",
    Line(),
    ":",
    Column(),
    ": ",
    Message(),
    " [",
    SeverityPattern.remap(r"Error|Warning", {"error": Severity.ERROR, "warning": Severity.WARNING}),
    Code(prefix="/", optional=True),
    "]",
)

# ``./main.go:5:2: fmt.Printf format %d has arg x of wrong type string``
GOVET_FORMAT: Final[FormatSpec] = FormatSpec.of(
    Filename(), ":", Line(), ":", Column(), ": ", Message(), SeverityFixed(Severity.WARNING)
)

BUILTIN_ADAPTERS: Final[tuple[Adapter, ...]] = (
    Adapter(
        name="ruff",
        command=("ruff", "check", "--output-format=concise", "--no-cache", "--no-fix", "%f"),
        format=RUFF_FORMAT,
        description="Ruff linter (concise output).",
    ),
    Adapter(
        name="mypy",
        command=(
            "mypy",
            "--show-column-numbers",
            "--no-error-summary",
            "--no-color-output",
            "--no-pretty",
            "%f",
        ),
        format=MYPY_FORMAT,
        description="mypy static type checker.",
    ),
    Adapter(
        name="pylint",
        command=(
            "pylint",
            "--score=n",
            "--msg-template={path}:{line}:{column}:{C}:{msg_id} {msg}",
            "%f",
        ),
        format=PYLINT_FORMAT,
        description="Pylint with single-letter category remapping.",
    ),
    Adapter(
        name="clippy",
        command=("cargo", "clippy", "--quiet", "--message-format=short"),
        format=GCC_FORMAT,
        description="Cargo clippy; lints the enclosing Cargo project.",
    ),
    Adapter(
        name="gcc",
        command=("gcc", "-fsyntax-only", "-Wall", "-Wextra", "%f"),
        format=CC_FORMAT,
        description="GCC syntax-only compile with warnings.",
    ),
    Adapter(
        name="clang",
        command=("clang", "-fsyntax-only", "-Wall", "-Wextra", "%f"),
        format=CC_FORMAT,
        description="Clang syntax-only compile with warnings.",
    ),
    Adapter(
        name="shellcheck",
        command=("shellcheck", "--format=gcc", "%f"),
        format=GCC_FORMAT,
        description="ShellCheck in gcc-compatible output mode.",
    ),
    Adapter(
        name="eslint",
        command=("eslint", "--format", "unix", "%f"),
        format=ESLINT_FORMAT,
        description="ESLint with the unix formatter.",
    ),
    Adapter(
        name="govet",
        command=("go", "vet", "%f"),
        format=GOVET_FORMAT,
        description="go vet.",
    ),
)

BUILTIN_LANGUAGES: Final[MappingProxyType[str, tuple[str, ...]]] = MappingProxyType(
    {
        "python": ("ruff", "mypy"),
        "rust": ("clippy",),
        "c": ("gcc",),
        "cpp": ("clang",),
        "shell": ("shellcheck",),
        "javascript": ("eslint",),
        "typescript": ("eslint",),
        "go": ("govet",),
    },
)


def build_default_registry() -> AdapterRegistry:
    """Return a registry holding the built-in adapters and language table."""

    return AdapterRegistry(BUILTIN_ADAPTERS, BUILTIN_LANGUAGES)


__all__ = [
    "BUILTIN_ADAPTERS",
    "BUILTIN_LANGUAGES",
    "CC_FORMAT",
    "ESLINT_FORMAT",
    "GCC_FORMAT",
    "GOVET_FORMAT",
    "MYPY_FORMAT",
    "PYLINT_FORMAT",
    "RUFF_FORMAT",
    "build_default_registry",
]
