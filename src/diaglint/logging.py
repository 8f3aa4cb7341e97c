# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status messages for people running diaglint.

Diagnostics go to stdout; everything printed here goes to stderr so that
``diaglint lint`` output stays machine-readable. Developer-level records use
the standard :mod:`logging` module through per-module ``LOGGER`` objects.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

from rich.console import Console
from rich.text import Text


@dataclass(frozen=True, slots=True)
class ConsoleSettings:
    """Preferences that select one cached :class:`Console`."""

    color: bool
    emoji: bool
    stderr: bool = False


@dataclass(frozen=True, slots=True)
class _MessageStyle:
    symbol: str
    style: str


_MESSAGE_STYLES: Final[dict[str, _MessageStyle]] = {
    "info": _MessageStyle("ℹ️ ", "cyan"),
    "ok": _MessageStyle("✅ ", "green"),
    "warn": _MessageStyle("⚠️ ", "yellow"),
    "fail": _MessageStyle("❌ ", "red"),
}


def detect_tty() -> bool:
    """Return ``True`` when stdout is attached to a terminal."""

    stream = sys.stdout
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Hand out one Rich console per distinct :class:`ConsoleSettings`."""

    def __init__(self) -> None:
        self._consoles: dict[tuple[ConsoleSettings, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return the console for the given preferences.

        Colour is only enabled when requested and stdout is a terminal. The
        console resolves ``sys.stdout``/``sys.stderr`` at print time, so
        redirected streams are honoured.
        """

        settings = ConsoleSettings(color=color, emoji=emoji, stderr=stderr)
        tty = detect_tty()
        key = (settings, tty)
        console = self._consoles.get(key)
        if console is None:
            colorful = settings.color and tty
            console = Console(
                color_system="auto" if colorful else None,
                no_color=not colorful,
                emoji=settings.emoji,
                highlight=False,
                soft_wrap=True,
                stderr=settings.stderr,
            )
            self._consoles[key] = console
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide console manager."""

    return RichConsoleManager()


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` if ``enable`` is set, else an empty string."""

    return symbol if enable else ""


def message(kind: str, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``msg`` to stderr decorated for ``kind`` (info, ok, warn, fail)."""

    decoration = _MESSAGE_STYLES[kind]
    colorful = detect_tty() if use_color is None else use_color
    text = Text(f"{emoji(decoration.symbol, use_emoji)}{msg}")
    if colorful:
        text.stylize(decoration.style)
    get_console_manager().get(color=colorful, emoji=use_emoji, stderr=True).print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    message("info", msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    message("ok", msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    message("warn", msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    message("fail", msg, use_emoji=use_emoji, use_color=use_color)


__all__ = [
    "ConsoleSettings",
    "RichConsoleManager",
    "detect_tty",
    "emoji",
    "fail",
    "get_console_manager",
    "info",
    "message",
    "ok",
    "warn",
]
