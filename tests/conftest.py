# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import pytest

from diaglint.errors import ToolInvocationError
from diaglint.process import CapturedOutput


class FakeRunner:
    """Runner stub returning canned output keyed by executable name."""

    def __init__(
        self,
        outputs: Mapping[str, Sequence[str]],
        *,
        returncodes: Mapping[str, int] | None = None,
        missing: Sequence[str] = (),
    ) -> None:
        self._outputs = outputs
        self._returncodes = returncodes or {}
        self._missing = set(missing)
        self.calls: list[list[str]] = []

    def __call__(self, args: Sequence[str]) -> CapturedOutput:
        command = list(args)
        self.calls.append(command)
        executable = command[0]
        if executable in self._missing:
            raise ToolInvocationError(executable, "no such file")
        return CapturedOutput(
            command=tuple(command),
            returncode=self._returncodes.get(executable, 0),
            lines=tuple(self._outputs.get(executable, ())),
        )


@pytest.fixture
def fake_runner_factory() -> type[FakeRunner]:
    """Return the :class:`FakeRunner` class for building runner stubs."""
    return FakeRunner
