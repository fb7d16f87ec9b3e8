"""Operator-facing message output.

Core code reports progress through ``Reporter.emit(level, message)`` and
never formats console strings itself. The console reporter renders each
level with a color and an emoji prefix.
"""

from typing import Protocol

from rich.console import Console
from rich.markup import escape

LEVELS = ("header", "info", "success", "warning", "error")

_STYLES = {
    "header": ("🚀", "bold cyan"),
    "info": ("ℹ️ ", "blue"),
    "success": ("✅", "green"),
    "warning": ("⚠️ ", "yellow"),
    "error": ("❌", "red"),
}


class Reporter(Protocol):
    def emit(self, level: str, message: str) -> None: ...


class ConsoleReporter:
    """Renders messages to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def emit(self, level: str, message: str) -> None:
        if level not in _STYLES:
            raise ValueError(f"Unknown message level: {level}")
        prefix, style = _STYLES[level]
        self.console.print(f"[{style}]{prefix} {escape(message)}[/{style}]")


class RecordingReporter:
    """Keeps emitted messages in memory."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def emit(self, level: str, message: str) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown message level: {level}")
        self.messages.append((level, message))

    def at(self, level: str) -> list[str]:
        return [m for lvl, m in self.messages if lvl == level]
