# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for adapter definitions, the registry and built-in formats."""

from pathlib import Path

import pytest

from diaglint.adapters import Adapter, AdapterRegistry, split_template
from diaglint.builtin import (
    BUILTIN_LANGUAGES,
    CC_FORMAT,
    ESLINT_FORMAT,
    GCC_FORMAT,
    GOVET_FORMAT,
    MYPY_FORMAT,
    PYLINT_FORMAT,
    RUFF_FORMAT,
    build_default_registry,
)
from diaglint.errors import (
    AdapterConfigError,
    TargetRequiredError,
    UnknownAdapterError,
    UnsupportedLanguageError,
)
from diaglint.formats import compile_format
from diaglint.severity import Severity


def _adapter(name: str, command: str = "tool %f") -> Adapter:
    return Adapter.from_template(name, command, GCC_FORMAT)


def test_build_command_substitutes_target() -> None:
    adapter = _adapter("ruff", "ruff check --select=F %f")

    assert adapter.build_command(Path("pkg/mod.py")) == ["ruff", "check", "--select=F", "pkg/mod.py"]
    assert adapter.requires_target is True
    assert adapter.executable == "ruff"


def test_placeholder_inside_argument_is_substituted() -> None:
    adapter = _adapter("tool", "tool --file=%f")

    assert adapter.build_command("x.c") == ["tool", "--file=x.c"]


def test_project_adapter_ignores_target() -> None:
    adapter = _adapter("clippy", "cargo clippy --quiet")

    assert adapter.requires_target is False
    assert adapter.build_command(None) == ["cargo", "clippy", "--quiet"]
    assert adapter.build_command("src/main.rs") == ["cargo", "clippy", "--quiet"]


def test_missing_target_raises() -> None:
    adapter = _adapter("ruff", "ruff check %f")

    with pytest.raises(TargetRequiredError) as excinfo:
        adapter.build_command(None)

    assert excinfo.value.adapter == "ruff"


def test_template_quoting_is_respected() -> None:
    assert split_template("tool --msg='a b' %f") == ("tool", "--msg=a b", "%f")


@pytest.mark.parametrize("template", ["", "   ", "tool 'unterminated"])
def test_invalid_templates_are_rejected(template: str) -> None:
    with pytest.raises(AdapterConfigError):
        split_template(template)


def test_adapter_accepts_argument_sequences() -> None:
    adapter = Adapter(name="gcc", command=["gcc", "-fsyntax-only", "%f"], format=GCC_FORMAT)  # type: ignore[arg-type]

    assert adapter.command == ("gcc", "-fsyntax-only", "%f")


def test_adapter_validation() -> None:
    with pytest.raises(AdapterConfigError):
        Adapter(name="", command=("x",), format=GCC_FORMAT)
    with pytest.raises(AdapterConfigError):
        Adapter(name="x", command=(), format=GCC_FORMAT)
    with pytest.raises(AdapterConfigError):
        Adapter(name="x", command=("x",), format="not a spec")  # type: ignore[arg-type]


def test_registry_resolves_languages_in_order() -> None:
    registry = AdapterRegistry([_adapter("a"), _adapter("b")], {"Python": ["b", "a"]})

    assert [adapter.name for adapter in registry.adapters_for("python")] == ["b", "a"]
    assert registry.supports(" PYTHON ")
    assert not registry.supports("rust")
    assert set(registry) == {"a", "b"}
    assert len(registry) == 2


def test_registry_distinguishes_unsupported_from_empty() -> None:
    registry = AdapterRegistry([_adapter("a")], {"text": []})

    assert registry.adapters_for("text") == ()
    with pytest.raises(UnsupportedLanguageError) as excinfo:
        registry.adapters_for("cobol")
    assert excinfo.value.language == "cobol"


def test_registry_rejects_duplicates_and_unknown_references() -> None:
    with pytest.raises(ValueError, match="already registered"):
        AdapterRegistry([_adapter("a"), _adapter("a")])
    with pytest.raises(UnknownAdapterError, match="unknown adapter 'ghost'"):
        AdapterRegistry([_adapter("a")], {"python": ["a", "ghost"]})


def test_registry_lookup() -> None:
    registry = AdapterRegistry([_adapter("a")])

    assert registry["a"].name == "a"
    assert registry.try_get("missing") is None
    with pytest.raises(KeyError):
        registry["missing"]


def test_registry_views_are_read_only() -> None:
    registry = AdapterRegistry([_adapter("a")], {"python": ["a"]})

    with pytest.raises(TypeError):
        registry.languages["rust"] = ("a",)  # type: ignore[index]


def test_merged_overrides_without_mutating_original() -> None:
    base = AdapterRegistry([_adapter("a"), _adapter("b")], {"python": ["a"]})
    replacement = _adapter("a", "other %f")

    merged = base.merged([replacement, _adapter("c")], {"python": ["a", "c"], "go": ["b"]})

    assert merged["a"].command == ("other", "%f")
    assert [adapter.name for adapter in merged.adapters_for("python")] == ["a", "c"]
    assert merged.supports("go")
    assert base["a"].command == ("tool", "%f")
    assert not base.supports("go")


def test_default_registry_languages() -> None:
    registry = build_default_registry()

    assert [adapter.name for adapter in registry.adapters_for("python")] == ["ruff", "mypy"]
    assert [adapter.name for adapter in registry.adapters_for("rust")] == ["clippy"]
    assert registry["clippy"].requires_target is False
    assert set(registry.languages) == set(BUILTIN_LANGUAGES)
    for adapter in registry.values():
        compile_format(adapter.format)


def test_ruff_format() -> None:
    diag = compile_format(RUFF_FORMAT).apply("pkg/mod.py:1:8: F401 [*] `os` imported but unused")

    assert diag is not None
    assert (diag.filename, diag.line, diag.column) == ("pkg/mod.py", 1, 8)
    assert diag.code == "F401"
    assert diag.message == "[*] `os` imported but unused"
    assert diag.severity is Severity.WARNING
    assert compile_format(RUFF_FORMAT).apply("Found 1 error.") is None


def test_mypy_format() -> None:
    matcher = compile_format(MYPY_FORMAT)

    error = matcher.apply("pkg/mod.py:3:5: error: Incompatible types in assignment  [assignment]")
    note = matcher.apply('pkg/mod.py:3:5: note: Revealed type is "builtins.int"')

    assert error is not None
    assert error.severity is Severity.ERROR
    assert error.message == "Incompatible types in assignment  [assignment]"
    assert note is not None
    assert note.severity is Severity.INFO
    assert matcher.apply("Success: no issues found in 1 source file") is None


def test_pylint_format_remaps_letters() -> None:
    matcher = compile_format(PYLINT_FORMAT)

    convention = matcher.apply("pkg/mod.py:1:0:C:C0114 Missing module docstring")
    error = matcher.apply("pkg/mod.py:4:4:E:E0602 Undefined variable 'x'")

    assert convention is not None
    assert convention.severity is Severity.INFO
    assert convention.code == "C0114"
    assert convention.column == 0
    assert error is not None
    assert error.severity is Severity.ERROR
    assert matcher.apply("************* Module pkg.mod") is None


def test_eslint_format() -> None:
    diag = compile_format(ESLINT_FORMAT).apply(
        "/src/app.js:1:10: 'x' is defined but never used. [Error/no-unused-vars]"
    )

    assert diag is not None
    assert diag.severity is Severity.ERROR
    assert diag.code == "no-unused-vars"
    assert diag.message == "'x' is defined but never used."


def test_eslint_parse_error_without_rule() -> None:
    diag = compile_format(ESLINT_FORMAT).apply("/src/app.js:3:1: Parsing error: Unexpected token } [Error]")

    assert diag is not None
    assert diag.severity is Severity.ERROR
    assert diag.code is None
    assert diag.message == "Parsing error: Unexpected token }"


def test_eslint_scoped_rule_names() -> None:
    diag = compile_format(ESLINT_FORMAT).apply(
        "/src/app.ts:2:1: Unexpected any. [Warning/@typescript-eslint/no-explicit-any]"
    )

    assert diag is not None
    assert diag.code == "@typescript-eslint/no-explicit-any"
    assert diag.severity is Severity.WARNING


def test_gcc_format_keeps_severity_word_in_message() -> None:
    diag = compile_format(GCC_FORMAT).apply("main.c:10:5: warning: unused variable 'x' [-Wunused-variable]")

    assert diag is not None
    assert diag.severity is Severity.WARNING
    assert diag.message == "warning: unused variable 'x' [-Wunused-variable]"
    assert compile_format(GCC_FORMAT).apply("main.c: In function 'main':") is None


def test_govet_format() -> None:
    diag = compile_format(GOVET_FORMAT).apply("./main.go:5:2: fmt.Printf format %d has arg x of wrong type string")

    assert diag is not None
    assert diag.filename == "./main.go"
    assert diag.severity is Severity.WARNING
    assert compile_format(GOVET_FORMAT).apply("# example.com/demo") is None


@pytest.mark.parametrize(
    ("line", "severity", "message"),
    [
        (
            "main.c:1:10: fatal error: foo.h: No such file or directory",
            Severity.ERROR,
            "foo.h: No such file or directory",
        ),
        ("main.c:4:7: error: expected ';' before '}' token", Severity.ERROR, "expected ';' before '}' token"),
        (
            "main.c:10:5: warning: unused variable 'x' [-Wunused-variable]",
            Severity.WARNING,
            "unused variable 'x' [-Wunused-variable]",
        ),
        ("main.c:2:1: note: declared here", Severity.INFO, "declared here"),
    ],
)
def test_cc_format_splits_severity_field(line: str, severity: Severity, message: str) -> None:
    diag = compile_format(CC_FORMAT).apply(line)

    assert diag is not None
    assert diag.severity is severity
    assert diag.message == message


def test_c_compilers_use_cc_format() -> None:
    registry = build_default_registry()

    assert registry["gcc"].format == CC_FORMAT
    assert registry["clang"].format == CC_FORMAT
    assert compile_format(CC_FORMAT).apply("In file included from main.c:1:") is None
