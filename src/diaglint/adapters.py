# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Adapter definitions and the registry resolving them by name or language."""

from __future__ import annotations

import shlex
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Final

from .errors import AdapterConfigError, TargetRequiredError, UnknownAdapterError, UnsupportedLanguageError
from .formats import FormatSpec

TARGET_PLACEHOLDER: Final[str] = "%f"


@dataclass(frozen=True, slots=True)
class Adapter:
    """One external tool's invocation command paired with its line format.

    Attributes:
        name: Logical tool name used by the language table.
        command: Argument vector; ``%f`` marks where the target path goes.
        format: Layout of one diagnostic line in the tool's output.
        description: Optional human-readable summary.
    """

    name: str
    command: tuple[str, ...]
    format: FormatSpec
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise AdapterConfigError("adapter name must not be empty")
        if not isinstance(self.format, FormatSpec):
            raise AdapterConfigError(f"adapter '{self.name}' requires a FormatSpec")
        object.__setattr__(self, "command", _coerce_command(self.command))

    @classmethod
    def from_template(cls, name: str, template: str, format: FormatSpec, *, description: str = "") -> Adapter:
        """Create an adapter from a shell-style ``template`` such as ``"ruff check %f"``."""

        return cls(name=name, command=split_template(template), format=format, description=description)

    @property
    def requires_target(self) -> bool:
        """Return ``True`` when the command embeds the target file placeholder."""
        return any(TARGET_PLACEHOLDER in arg for arg in self.command)

    @property
    def executable(self) -> str:
        """Return the program name the adapter invokes."""
        return self.command[0]

    def build_command(self, target: Path | str | None) -> list[str]:
        """Materialise the argument vector for ``target``.

        Args:
            target: File being linted; may be ``None`` for project-wide tools.

        Returns:
            list[str]: Command with every ``%f`` replaced by ``target``.

        Raises:
            TargetRequiredError: If the command needs a target and none is given.
        """

        if not self.requires_target:
            return list(self.command)
        if target is None:
            raise TargetRequiredError(self.name)
        path = str(target)
        return [arg.replace(TARGET_PLACEHOLDER, path) for arg in self.command]


def _coerce_command(value: Sequence[str] | str) -> tuple[str, ...]:
    """Accept either an argv sequence or a shell-style template string."""

    if isinstance(value, str):
        return split_template(value)
    parts = tuple(str(item) for item in value)
    if not parts:
        raise AdapterConfigError("adapter command must not be empty")
    return parts


def split_template(template: str) -> tuple[str, ...]:
    """Split a shell-style command template into arguments.

    Raises:
        AdapterConfigError: If quoting is unbalanced or the template is empty.
    """

    try:
        parts = tuple(shlex.split(template))
    except ValueError as exc:
        raise AdapterConfigError(f"invalid command template {template!r}: {exc}") from exc
    if not parts:
        raise AdapterConfigError("adapter command must not be empty")
    return parts


class AdapterRegistry(Mapping[str, Adapter]):
    """Immutable registry of adapters and the language table that orders them.

    ``AdapterRegistry`` behaves like a read-only mapping whose keys are adapter
    names. The language table maps a language tag to the ordered adapter names
    run for it; a tag missing from the table is unsupported.
    """

    def __init__(
        self,
        adapters: Iterable[Adapter],
        languages: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        """Build the registry, validating names and language references.

        Args:
            adapters: Adapter definitions; names must be unique.
            languages: Mapping of language tag to ordered adapter names.

        Raises:
            ValueError: If two adapters share a name.
            UnknownAdapterError: If a language references an unregistered adapter.
        """

        tools: dict[str, Adapter] = {}
        for adapter in adapters:
            if adapter.name in tools:
                raise ValueError(f"Adapter '{adapter.name}' already registered")
            tools[adapter.name] = adapter
        table: dict[str, tuple[str, ...]] = {}
        for language, names in (languages or {}).items():
            ordered = tuple(names)
            for name in ordered:
                if name not in tools:
                    raise UnknownAdapterError(name)
            table[normalize_language(language)] = ordered
        self._adapters: Mapping[str, Adapter] = MappingProxyType(tools)
        self._languages: Mapping[str, tuple[str, ...]] = MappingProxyType(table)

    @property
    def languages(self) -> Mapping[str, tuple[str, ...]]:
        """Return the read-only language table."""
        return self._languages

    def try_get(self, name: str) -> Adapter | None:
        """Return the adapter named ``name`` when registered, otherwise ``None``."""
        return self._adapters.get(name)

    def supports(self, language: str) -> bool:
        """Return ``True`` when ``language`` has an adapter list."""
        return normalize_language(language) in self._languages

    def adapters_for(self, language: str) -> tuple[Adapter, ...]:
        """Return the ordered adapters configured for ``language``.

        Args:
            language: Language tag such as ``"python"``.

        Returns:
            tuple[Adapter, ...]: Adapters in execution order.

        Raises:
            UnsupportedLanguageError: If ``language`` has no adapter list.
        """

        names = self._languages.get(normalize_language(language))
        if names is None:
            raise UnsupportedLanguageError(language)
        return tuple(self._adapters[name] for name in names)

    def merged(
        self,
        adapters: Iterable[Adapter] = (),
        languages: Mapping[str, Sequence[str]] | None = None,
    ) -> AdapterRegistry:
        """Return a new registry with ``adapters`` and ``languages`` overriding this one."""

        combined = dict(self._adapters)
        for adapter in adapters:
            combined[adapter.name] = adapter
        table: dict[str, Sequence[str]] = dict(self._languages)
        for language, names in (languages or {}).items():
            table[normalize_language(language)] = tuple(names)
        return AdapterRegistry(combined.values(), table)

    def __getitem__(self, name: str) -> Adapter:
        try:
            return self._adapters[name]
        except KeyError:
            raise UnknownAdapterError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._adapters)

    def __len__(self) -> int:
        return len(self._adapters)


def normalize_language(language: str) -> str:
    """Return the canonical (trimmed, lower-case) form of a language tag."""

    return language.strip().lower()


__all__ = [
    "TARGET_PLACEHOLDER",
    "Adapter",
    "AdapterRegistry",
    "normalize_language",
    "split_template",
]
