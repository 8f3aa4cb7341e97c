# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the adapters configured for a language and merge their diagnostics."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from . import process
from .adapters import Adapter, AdapterRegistry
from .errors import ToolInvocationError
from .formats import compile_format
from .models import AdapterOutcome, Diagnostic, LintReport
from .process import CapturedOutput
from .reporting import render_line

LOGGER = logging.getLogger(__name__)

RunnerCallable = Callable[[Sequence[str]], CapturedOutput]
EmitCallable = Callable[[str], None]


class ToolErrorPolicy(str, Enum):
    """What to do when an adapter's executable cannot be started."""

    ABORT = "abort"
    SKIP = "skip"


@dataclass
class OrchestratorHooks:
    """Optional callbacks invoked around each adapter run."""

    before_adapter: Callable[[Adapter], None] | None = None
    after_adapter: Callable[[AdapterOutcome], None] | None = None
    on_adapter_error: Callable[[Adapter, ToolInvocationError], None] | None = None


class Orchestrator:
    """Resolve, run and merge the adapters configured for a language.

    Adapters run strictly one after another in the order listed for the
    language. Diagnostics are produced in adapter order and, within an
    adapter, in the order lines appeared in the tool's output.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        *,
        runner: RunnerCallable | None = None,
        policy: ToolErrorPolicy = ToolErrorPolicy.ABORT,
        hooks: OrchestratorHooks | None = None,
    ) -> None:
        """Create an orchestrator with the supplied collaborators.

        Args:
            registry: Adapter registry and language table.
            runner: Callable used to spawn external tool processes.
            policy: Behaviour when an adapter's tool cannot be started.
            hooks: Optional callbacks invoked throughout execution.
        """

        self._registry = registry
        self._runner = runner or process.capture_output
        self._policy = ToolErrorPolicy(policy)
        self._hooks = hooks or OrchestratorHooks()

    @property
    def registry(self) -> AdapterRegistry:
        """Return the registry backing this orchestrator."""
        return self._registry

    @property
    def policy(self) -> ToolErrorPolicy:
        """Return the active tool error policy."""
        return self._policy

    def iter_diagnostics(self, language: str, target: Path | str | None) -> Iterator[Diagnostic]:
        """Yield diagnostics for ``target`` lazily as each adapter finishes.

        Args:
            language: Language tag selecting the adapter list.
            target: File passed to adapters whose command embeds ``%f``.

        Yields:
            Diagnostic: Matched diagnostics in adapter then line order.

        Raises:
            UnsupportedLanguageError: If ``language`` has no adapters configured.
            ToolInvocationError: If a tool cannot be started under ``ABORT``.
        """

        adapters = self._registry.adapters_for(language)
        for adapter in adapters:
            outcome = self._run_adapter(adapter, target)
            yield from outcome.diagnostics

    def lint(self, language: str, target: Path | str | None) -> list[Diagnostic]:
        """Return every diagnostic produced for ``target`` as structured records."""

        return list(self.iter_diagnostics(language, target))

    def lint_to_stream(
        self,
        language: str,
        target: Path | str | None,
        emit: EmitCallable = print,
    ) -> int:
        """Render each diagnostic as ``filename:line:column:severity:message`` via ``emit``.

        Args:
            language: Language tag selecting the adapter list.
            target: File passed to adapters whose command embeds ``%f``.
            emit: Callable receiving one rendered line per diagnostic.

        Returns:
            int: Number of lines emitted.
        """

        count = 0
        for diag in self.iter_diagnostics(language, target):
            emit(render_line(diag))
            count += 1
        return count

    def run(self, language: str, target: Path | str | None) -> LintReport:
        """Run every adapter and return per-adapter outcomes.

        Args:
            language: Language tag selecting the adapter list.
            target: File passed to adapters whose command embeds ``%f``.

        Returns:
            LintReport: Outcomes in adapter order.
        """

        adapters = self._registry.adapters_for(language)
        report = LintReport(language=language, target=None if target is None else str(target))
        for adapter in adapters:
            report.outcomes.append(self._run_adapter(adapter, target))
        return report

    def _run_adapter(self, adapter: Adapter, target: Path | str | None) -> AdapterOutcome:
        """Execute ``adapter`` and match its output lines.

        Raises:
            ToolInvocationError: If the tool cannot be started under ``ABORT``.
        """

        if self._hooks.before_adapter:
            self._hooks.before_adapter(adapter)
        command = adapter.build_command(target)
        matcher = compile_format(adapter.format)
        LOGGER.debug("adapter=%s command=%s", adapter.name, " ".join(command))
        try:
            captured = self._runner(command)
        except ToolInvocationError as exc:
            if self._hooks.on_adapter_error:
                self._hooks.on_adapter_error(adapter, exc)
            if self._policy is ToolErrorPolicy.ABORT:
                raise
            LOGGER.warning("skipping adapter %s: %s", adapter.name, exc)
            outcome = AdapterOutcome(adapter=adapter.name, error=str(exc))
        else:
            diagnostics: list[Diagnostic] = []
            for line in captured.lines:
                diag = matcher.apply(line)
                if diag is not None:
                    diagnostics.append(diag.model_copy(update={"tool": adapter.name}))
            LOGGER.debug(
                "adapter=%s returncode=%d lines=%d diagnostics=%d",
                adapter.name,
                captured.returncode,
                len(captured.lines),
                len(diagnostics),
            )
            outcome = AdapterOutcome(
                adapter=adapter.name,
                returncode=captured.returncode,
                diagnostics=diagnostics,
            )
        if self._hooks.after_adapter:
            self._hooks.after_adapter(outcome)
        return outcome


__all__ = [
    "EmitCallable",
    "Orchestrator",
    "OrchestratorHooks",
    "RunnerCallable",
    "ToolErrorPolicy",
]
