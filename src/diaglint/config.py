# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for user-defined adapters.

Configuration lives in ``.diaglint.toml`` or under ``[tool.diaglint]`` in
``pyproject.toml``::

    on_tool_error = "skip"

    [languages]
    python = ["ruff", "flake8"]

    [adapters.flake8]
    command = "flake8 %f"
    format = ["{filename}", ":", "{line}", ":", "{column}", ": ", "{code}", "{spaces}", "{message}"]
"""

from __future__ import annotations

import re
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .adapters import Adapter, AdapterRegistry
from .builtin import build_default_registry
from .errors import AdapterConfigError, ConfigError, FormatSpecError
from .formats import (
    Code,
    Column,
    Filename,
    FormatSpec,
    FormatToken,
    Line,
    Message,
    SeverityFixed,
    SeverityFromMessage,
    SeverityPattern,
    Whitespace,
    compile_format,
)
from .formats import Literal as LiteralToken
from .orchestrator import ToolErrorPolicy
from .severity import DEFAULT_CLASSIFIER, PUNCTUATION_CLASSIFIER, Severity, SeverityClassifier

CONFIG_FILENAME: Final[str] = ".diaglint.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "diaglint"

_PLACEHOLDER_RE: Final[re.Pattern[str]] = re.compile(r"^\{(?P<kind>[a-z_]+)(?:(?P<op>[:=])(?P<arg>[^}]*))?\}$")
_SIMPLE_TOKENS: Final[dict[str, FormatToken]] = {
    "filename": Filename(),
    "line": Line(),
    "column": Column(),
    "code": Code(),
    "spaces": Whitespace(),
}


class AdapterConfig(BaseModel):
    """User definition of an adapter in configuration files."""

    model_config = ConfigDict(extra="forbid")

    command: str | list[str]
    format: list[str | dict[str, Any]]
    severity_strip: Literal["whitespace", "punctuation"] = "whitespace"
    default_severity: Severity = Severity.WARNING
    description: str = ""

    def classifier(self) -> SeverityClassifier:
        """Return the classifier selected by ``severity_strip``."""
        return PUNCTUATION_CLASSIFIER if self.severity_strip == "punctuation" else DEFAULT_CLASSIFIER

    def to_adapter(self, name: str) -> Adapter:
        """Build an :class:`Adapter` named ``name``.

        Raises:
            ConfigError: If the command or format is invalid.
        """

        spec = parse_format(self.format, classifier=self.classifier(), default_severity=self.default_severity)
        try:
            return Adapter(name=name, command=self.command, format=spec, description=self.description)
        except AdapterConfigError as exc:
            raise ConfigError(f"adapter '{name}': {exc}") from exc


class DiaglintConfig(BaseModel):
    """Top-level configuration document."""

    model_config = ConfigDict(extra="forbid")

    on_tool_error: ToolErrorPolicy = ToolErrorPolicy.ABORT
    languages: dict[str, list[str]] = Field(default_factory=dict)
    adapters: dict[str, AdapterConfig] = Field(default_factory=dict)

    def build_registry(self, base: AdapterRegistry | None = None) -> AdapterRegistry:
        """Return ``base`` (the built-ins by default) overlaid with this config.

        Raises:
            ConfigError: If an adapter is invalid or a language references an
                unknown adapter.
        """

        base = base if base is not None else build_default_registry()
        adapters = [cfg.to_adapter(name) for name, cfg in self.adapters.items()]
        try:
            return base.merged(adapters, self.languages)
        except KeyError as exc:
            raise ConfigError(str(exc)) from exc


def parse_format(
    items: Sequence[str | Mapping[str, Any]],
    *,
    classifier: SeverityClassifier = DEFAULT_CLASSIFIER,
    default_severity: Severity = Severity.WARNING,
) -> FormatSpec:
    """Translate configuration token notation into a :class:`FormatSpec`.

    Args:
        items: Strings (placeholders or literals) and tables describing tokens.
        classifier: Classifier used by ``{severity}`` placeholders.
        default_severity: Severity used when the format has no severity token.

    Returns:
        FormatSpec: Validated format description.

    Raises:
        ConfigError: If a token is unknown or the resulting format is invalid.
    """

    tokens = [_parse_token(item, classifier) for item in items]
    try:
        spec = FormatSpec(tokens=tuple(tokens), default_severity=default_severity)
        compile_format(spec)
    except FormatSpecError as exc:
        raise ConfigError(str(exc)) from exc
    return spec


def _parse_token(item: str | Mapping[str, Any], classifier: SeverityClassifier) -> FormatToken:
    if isinstance(item, Mapping):
        return _parse_table_token(item, classifier)
    match = _PLACEHOLDER_RE.match(item)
    if match is None:
        return LiteralToken(item)
    kind, op, arg = match.group("kind"), match.group("op"), match.group("arg")
    if kind in _SIMPLE_TOKENS and op is None:
        return _SIMPLE_TOKENS[kind]
    if kind == "message":
        return Message(name=arg) if op == ":" and arg else Message()
    if kind == "severity":
        if op is None:
            return SeverityFromMessage(classifier=classifier)
        if op == ":":
            return SeverityFromMessage(source=arg, classifier=classifier)
        try:
            return SeverityFixed(Severity(arg.strip().lower()))
        except ValueError as exc:
            raise ConfigError(f"unknown severity level '{arg}'") from exc
    raise ConfigError(f"unknown format placeholder '{item}'")


def _parse_table_token(item: Mapping[str, Any], classifier: SeverityClassifier) -> FormatToken:
    if "literal" in item:
        return LiteralToken(str(item["literal"]))
    if "code" in item:
        return _parse_code_options(item["code"])
    if "severity_pattern" in item:
        mapping = item.get("map", {})
        if not isinstance(mapping, Mapping):
            raise ConfigError("severity_pattern 'map' must be a table")
        try:
            return SeverityPattern.remap(str(item["severity_pattern"]), mapping, classifier=classifier)
        except ValueError as exc:
            raise ConfigError(f"invalid severity_pattern map: {exc}") from exc
    raise ConfigError(f"unsupported format table {dict(item)!r}")


def _parse_code_options(options: Any) -> Code:
    if not isinstance(options, Mapping):
        raise ConfigError("code options must be a table")
    unknown = set(options) - {"prefix", "optional"}
    if unknown:
        raise ConfigError(f"unknown code options: {', '.join(sorted(unknown))}")
    return Code(prefix=str(options.get("prefix", "")), optional=bool(options.get("optional", False)))


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``data`` with kebab-case keys rewritten to snake_case (two levels deep)."""

    normalised: dict[str, Any] = {}
    for key, value in data.items():
        new_key = key.replace("-", "_")
        if new_key == "adapters" and isinstance(value, Mapping):
            value = {
                name: {k.replace("-", "_"): v for k, v in entry.items()} if isinstance(entry, Mapping) else entry
                for name, entry in value.items()
            }
        normalised[new_key] = value
    return normalised


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc


def _section_from(path: Path) -> Mapping[str, Any]:
    data = _read_toml(path)
    if path.name != PYPROJECT_FILENAME:
        return data
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    return section if isinstance(section, Mapping) else {}


def find_config_file(root: Path) -> Path | None:
    """Return the first configuration file found in ``root``.

    ``.diaglint.toml`` wins over ``pyproject.toml``; a ``pyproject.toml``
    only counts when it has a ``[tool.diaglint]`` table.
    """

    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file() and _section_from(pyproject):
        return pyproject
    return None


def load_config(root: Path | None = None, *, path: Path | None = None) -> DiaglintConfig:
    """Load configuration from ``path`` or by searching ``root``.

    Args:
        root: Directory searched for configuration files (defaults to cwd).
        path: Explicit configuration file; must exist.

    Returns:
        DiaglintConfig: Parsed configuration, or defaults when none is found.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """

    if path is not None:
        if not path.is_file():
            raise ConfigError(f"configuration file {path} does not exist")
        source: Path | None = path
    else:
        source = find_config_file(root or Path.cwd())
    if source is None:
        return DiaglintConfig()
    payload = _normalise_keys(_section_from(source))
    try:
        return DiaglintConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration in {source}: {exc}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "AdapterConfig",
    "DiaglintConfig",
    "find_config_file",
    "load_config",
    "parse_format",
]
