# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution of external linters."""

from __future__ import annotations

import logging
import os
import shutil

# Bandit: subprocess usage is intentional; commands come from adapter
# definitions and are passed as argument lists without ``shell=True``.
import subprocess  # nosec B404
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ToolInvocationError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CapturedOutput:
    """Combined stdout/stderr of one finished tool invocation."""

    command: tuple[str, ...]
    returncode: int
    lines: tuple[str, ...] = field(default_factory=tuple)


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute() or head_path.parent != Path():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        # ``which`` skips files that exist on PATH without execute permission.
        reason = "permission denied" if shutil.which(head, mode=os.F_OK) else "no such file"
        raise ToolInvocationError(head, reason)
    return [resolved, *rest]


def _split_lines(text: str) -> tuple[str, ...]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line."""

    if not text:
        return ()
    lines = text.removesuffix("\n").split("\n")
    return tuple(line.removesuffix("\r") for line in lines)


def capture_output(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CapturedOutput:
    """Run ``args`` to completion and return its combined output as lines.

    Both output streams are redirected into a single scratch file because
    tools interleave diagnostics across stdout and stderr. The scratch file
    is released on every exit path. A non-zero exit status is not treated as
    a failure; linters routinely exit non-zero when they report issues.

    Args:
        args: Command and arguments to execute.
        cwd: Optional working directory for the child process.
        env: Optional environment replacing the inherited one.

    Returns:
        CapturedOutput: Exit status and decoded output lines.

    Raises:
        ToolInvocationError: If the executable is missing, not executable, or
            the process could not be started.
    """

    normalized = _normalize_args(args)
    executable = args[0]
    with tempfile.TemporaryFile() as scratch:
        try:
            # Bandit: argument lists originate from vetted adapter definitions.
            completed = subprocess.run(  # nosec B603
                normalized,
                cwd=str(cwd) if cwd is not None else None,
                env=dict(env) if env is not None else None,
                check=False,
                stdin=subprocess.DEVNULL,
                stdout=scratch,
                stderr=subprocess.STDOUT,
            )
        except FileNotFoundError as exc:
            raise ToolInvocationError(executable, "no such file") from exc
        except PermissionError as exc:
            raise ToolInvocationError(executable, "permission denied") from exc
        except OSError as exc:
            raise ToolInvocationError(executable, str(exc)) from exc
        scratch.seek(0)
        payload = scratch.read()

    if completed.returncode != 0:
        LOGGER.debug("command=%s exited with status %d", normalized[0], completed.returncode)
    text = payload.decode("utf-8", errors="replace")
    return CapturedOutput(
        command=tuple(normalized),
        returncode=completed.returncode,
        lines=_split_lines(text),
    )


__all__ = ["CapturedOutput", "capture_output"]
