# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console and machine-readable renderers for diagnostics."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import Diagnostic, group_by_file
from .severity import SEVERITY_COLORS


def render_line(diag: Diagnostic) -> str:
    """Render ``diag`` as ``filename:line:column:severity:message``.

    An absent column renders as an empty field so the field count is fixed.
    """

    column = "" if diag.column is None else str(diag.column)
    return f"{diag.filename}:{diag.line}:{column}:{diag.severity.value}:{diag.message}"


def render_json(diagnostics: Iterable[Diagnostic]) -> str:
    """Return ``diagnostics`` as a JSON array."""

    payload = [diag.model_dump(mode="json") for diag in diagnostics]
    return json.dumps(payload, indent=2)


def render_pretty(diagnostics: Sequence[Diagnostic], console: Console) -> None:
    """Print a table per file with severity-coloured rows."""

    for filename, entries in group_by_file(diagnostics).items():
        table = Table(title=Text(filename), box=box.SIMPLE, title_justify="left", show_edge=False)
        table.add_column("Line", justify="right")
        table.add_column("Col", justify="right")
        table.add_column("Severity")
        table.add_column("Tool")
        table.add_column("Message", overflow="fold")
        for diag in entries:
            severity = Text(diag.severity.value, style=SEVERITY_COLORS[diag.severity])
            message = f"{diag.code} {diag.message}" if diag.code else diag.message
            table.add_row(
                str(diag.line),
                "" if diag.column is None else str(diag.column),
                severity,
                diag.tool or "-",
                Text(message),
            )
        console.print(table)


def summarize(diagnostics: Sequence[Diagnostic]) -> str:
    """Return a short ``N diagnostic(s), M error(s)`` summary line."""

    errors = sum(1 for diag in diagnostics if diag.is_error)
    files = len(group_by_file(diagnostics))
    return f"{len(diagnostics)} diagnostic(s) in {files} file(s), {errors} error(s)"


__all__ = ["render_json", "render_line", "render_pretty", "summarize"]
