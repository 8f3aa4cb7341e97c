# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Language detection utilities for selecting the adapter list of a file."""

from __future__ import annotations

from pathlib import Path
from typing import Final

LANGUAGE_EXTENSIONS: Final[dict[str, set[str]]] = {
    "python": {".py", ".pyi"},
    "javascript": {".js", ".jsx", ".mjs", ".cjs"},
    "typescript": {".ts", ".tsx"},
    "go": {".go"},
    "rust": {".rs"},
    "c": {".c", ".h"},
    "cpp": {".cc", ".cpp", ".cxx", ".c++", ".hpp", ".hh", ".hxx", ".h++"},
    "shell": {".sh", ".bash", ".zsh"},
}

LANGUAGE_FILENAMES: Final[dict[str, set[str]]] = {
    "rust": {"cargo.toml"},
    "shell": {".bashrc", ".profile", ".zshrc"},
}


def detect_language(path: Path) -> str | None:
    """Infer the language tag for ``path`` from its suffix or file name.

    Args:
        path: File whose language should be detected.

    Returns:
        str | None: Language tag, or ``None`` when it cannot be inferred.
    """

    name = path.name.lower()
    for language, names in LANGUAGE_FILENAMES.items():
        if name in names:
            return language
    suffix = path.suffix.lower()
    for language, extensions in LANGUAGE_EXTENSIONS.items():
        if suffix in extensions:
            return language
    return None


__all__ = ["LANGUAGE_EXTENSIONS", "LANGUAGE_FILENAMES", "detect_language"]
