# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface for running configured linters on a file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Final

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .adapters import Adapter
from .config import DiaglintConfig, load_config
from .errors import ConfigError, DiaglintError, TargetRequiredError, ToolInvocationError, UnsupportedLanguageError
from .languages import detect_language
from .logging import fail as core_fail
from .logging import get_console_manager
from .logging import info as core_info
from .logging import ok as core_ok
from .logging import warn as core_warn
from .models import AdapterOutcome
from .orchestrator import Orchestrator, OrchestratorHooks, ToolErrorPolicy
from .reporting import render_json, render_pretty, summarize

EXIT_OK: Final[int] = 0
EXIT_DIAGNOSTIC_ERRORS: Final[int] = 1
EXIT_USAGE: Final[int] = 2
EXIT_TOOL_FAILURE: Final[int] = 3


class OutputMode(str, Enum):
    """Rendering modes supported by ``diaglint lint``."""

    TEXT = "text"
    PRETTY = "pretty"
    JSON = "json"


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_USAGE) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji)

    def debug(self, message: str) -> None:
        """Emit ``message`` only when debug output is enabled."""
        if self.debug_enabled:
            core_info(message, use_emoji=self.use_emoji)


@dataclass(slots=True)
class _RunTracker:
    """Collect per-adapter facts needed for the exit status."""

    logger: CLILogger
    errors: int = 0

    def before(self, adapter: Adapter) -> None:
        self.logger.debug(f"running {adapter.name}: {' '.join(adapter.command)}")

    def after(self, outcome: AdapterOutcome) -> None:
        self.errors += sum(1 for diag in outcome.diagnostics if diag.is_error)
        if outcome.failed:
            self.logger.warn(f"{outcome.adapter} skipped: {outcome.error}")
        else:
            self.logger.debug(
                f"{outcome.adapter} exited {outcome.returncode} with {len(outcome.diagnostics)} diagnostic(s)"
            )

    def hooks(self) -> OrchestratorHooks:
        return OrchestratorHooks(before_adapter=self.before, after_adapter=self.after)


app = typer.Typer(
    name="diaglint",
    help="Run the linters configured for a language and normalise their diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)


def _load(config_path: Path | None) -> DiaglintConfig:
    try:
        return load_config(Path.cwd(), path=config_path)
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc


def _resolve_language(language: str | None, target: Path | None) -> str:
    if language:
        return language
    if target is None:
        raise CLIError("either a target file or --language is required")
    detected = detect_language(target)
    if detected is None:
        raise CLIError(f"cannot infer the language of {target}; pass --language")
    return detected


def _execute_lint(
    *,
    target: Path | None,
    language: str,
    output: OutputMode,
    orchestrator: Orchestrator,
    tracker: _RunTracker,
    console: Console,
) -> int:
    """Run the orchestrator in the requested output mode and return the exit code."""

    try:
        if output is OutputMode.TEXT:
            orchestrator.lint_to_stream(language, target, emit=typer.echo)
        else:
            diagnostics = orchestrator.lint(language, target)
            if output is OutputMode.JSON:
                typer.echo(render_json(diagnostics))
            else:
                render_pretty(diagnostics, console)
                console.print(summarize(diagnostics))
    except (UnsupportedLanguageError, TargetRequiredError) as exc:
        raise CLIError(str(exc)) from exc
    except ToolInvocationError as exc:
        raise CLIError(str(exc), exit_code=EXIT_TOOL_FAILURE) from exc
    return EXIT_DIAGNOSTIC_ERRORS if tracker.errors else EXIT_OK


@app.command("lint")
def lint_command(
    target: Annotated[Path | None, typer.Argument(help="File to lint.")] = None,
    language: Annotated[
        str | None,
        typer.Option("--language", "-l", help="Language tag; inferred from TARGET when omitted."),
    ] = None,
    output: Annotated[OutputMode, typer.Option("--output", "-o", help="Output format.")] = OutputMode.TEXT,
    config: Annotated[Path | None, typer.Option("--config", "-c", help="Configuration file.")] = None,
    skip_missing: Annotated[
        bool,
        typer.Option("--skip-missing", help="Skip linters that cannot be started instead of aborting."),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Report each linter as it runs.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
) -> None:
    """Lint TARGET with every linter configured for its language."""

    logger = CLILogger(use_emoji=not no_emoji, debug_enabled=verbose)
    tracker = _RunTracker(logger=logger)
    try:
        cfg = _load(config)
        resolved = _resolve_language(language, target)
        policy = ToolErrorPolicy.SKIP if skip_missing else cfg.on_tool_error
        orchestrator = Orchestrator(cfg.build_registry(), policy=policy, hooks=tracker.hooks())
        console = get_console_manager().get(color=True, emoji=not no_emoji)
        code = _execute_lint(
            target=target,
            language=resolved,
            output=output,
            orchestrator=orchestrator,
            tracker=tracker,
            console=console,
        )
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except DiaglintError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_USAGE) from exc
    if verbose and code == EXIT_OK:
        logger.ok(f"{resolved}: no error diagnostics")
    raise typer.Exit(code=code)


@app.command("languages")
def languages_command(
    config: Annotated[Path | None, typer.Option("--config", "-c", help="Configuration file.")] = None,
) -> None:
    """List language tags and the linters run for each."""

    try:
        registry = _load(config).build_registry()
    except (CLIError, ConfigError) as exc:
        core_fail(str(exc), use_emoji=True)
        raise typer.Exit(code=EXIT_USAGE) from exc
    table = Table("Language", "Linters")
    for language, names in sorted(registry.languages.items()):
        table.add_row(language, ", ".join(names))
    get_console_manager().get(color=True, emoji=True).print(table)


@app.command("adapters")
def adapters_command(
    config: Annotated[Path | None, typer.Option("--config", "-c", help="Configuration file.")] = None,
) -> None:
    """List every registered linter adapter and its command."""

    try:
        registry = _load(config).build_registry()
    except (CLIError, ConfigError) as exc:
        core_fail(str(exc), use_emoji=True)
        raise typer.Exit(code=EXIT_USAGE) from exc
    table = Table("Adapter", "Command", "Target")
    for name, adapter in registry.items():
        target = Text("file", style="green") if adapter.requires_target else Text("project", style="cyan")
        table.add_row(name, Text(" ".join(adapter.command)), target)
    get_console_manager().get(color=True, emoji=True).print(table)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["CLIError", "EXIT_DIAGNOSTIC_ERRORS", "EXIT_OK", "EXIT_TOOL_FAILURE", "EXIT_USAGE", "app", "main"]
