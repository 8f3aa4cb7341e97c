# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnostic models and renderers."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError
from rich.console import Console

from diaglint.models import AdapterOutcome, Diagnostic, LintReport, first_error, group_by_file
from diaglint.reporting import render_json, render_line, render_pretty, summarize
from diaglint.severity import Severity


def _diag(filename: str, line: int, severity: Severity = Severity.WARNING, **extra: object) -> Diagnostic:
    return Diagnostic(filename=filename, line=line, message=f"msg {line}", severity=severity, **extra)  # type: ignore[arg-type]


def test_diagnostic_properties() -> None:
    diag = _diag("a.py", 3, Severity.ERROR, column=7, code="E1")

    assert diag.is_error
    assert diag.location == (3, 7)
    assert _diag("a.py", 4).location == (4, 1)


def test_diagnostic_is_frozen_and_validated() -> None:
    diag = _diag("a.py", 1)

    with pytest.raises(ValidationError):
        diag.line = 2  # type: ignore[misc]
    with pytest.raises(ValidationError):
        _diag("a.py", 0)


def test_group_by_file_preserves_first_seen_order() -> None:
    diagnostics = [_diag("b.py", 1), _diag("a.py", 2), _diag("b.py", 3)]

    grouped = group_by_file(diagnostics)

    assert list(grouped) == ["b.py", "a.py"]
    assert [diag.line for diag in grouped["b.py"]] == [1, 3]


def test_first_error() -> None:
    diagnostics = [_diag("a.py", 1), _diag("a.py", 2, Severity.ERROR)]

    assert first_error(diagnostics) == diagnostics[1]
    assert first_error(diagnostics[:1]) is None


def test_report_aggregates_outcomes() -> None:
    report = LintReport(
        language="python",
        outcomes=[
            AdapterOutcome(adapter="ruff", returncode=1, diagnostics=[_diag("a.py", 1)]),
            AdapterOutcome(adapter="mypy", error="cannot execute mypy (no such file)"),
        ],
    )

    assert [diag.line for diag in report.diagnostics] == [1]
    assert not report.has_errors()
    assert report.outcomes[1].failed


def test_render_line() -> None:
    assert render_line(_diag("a.py", 3, Severity.ERROR, column=7)) == "a.py:3:7:error:msg 3"
    assert render_line(_diag("a.py", 3)) == "a.py:3::warning:msg 3"


def test_render_json() -> None:
    payload = json.loads(render_json([_diag("a.py", 3, Severity.INFO, tool="ruff")]))

    assert payload == [
        {
            "filename": "a.py",
            "line": 3,
            "column": None,
            "message": "msg 3",
            "severity": "info",
            "code": None,
            "tool": "ruff",
        }
    ]


def test_render_pretty_groups_by_file() -> None:
    console = Console(record=True, width=120, color_system=None)

    render_pretty([_diag("a.py", 1, code="F401"), _diag("b.py", 2, Severity.ERROR)], console)

    text = console.export_text()
    assert "a.py" in text
    assert "b.py" in text
    assert "F401 msg 1" in text
    assert "error" in text


def test_summarize() -> None:
    diagnostics = [_diag("a.py", 1), _diag("b.py", 2, Severity.ERROR)]

    assert summarize(diagnostics) == "2 diagnostic(s) in 2 file(s), 1 error(s)"
    assert summarize([]) == "0 diagnostic(s) in 0 file(s), 0 error(s)"
