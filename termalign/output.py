"""Pluggable output interface via Protocol."""

from __future__ import annotations

import sys
from typing import Protocol

from .theme import get_theme


class Output(Protocol):
    """Pluggable output interface. The CLI reports through these methods.
    CliOutput prints to the terminal; NullOutput discards everything."""

    def result(self, text: str) -> None: ...
    def width_line(self, text: str, width: int, raw: int | None = None, hidden: int | None = None) -> None: ...
    def warn(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def error_with_recovery(
        self,
        error_type: str,
        message: str,
        context: dict[str, str] | None = None,
        recovery: str | None = None,
    ) -> None: ...


class CliOutput:
    """Default CLI output with ANSI color support."""

    def __init__(self) -> None:
        self.theme = get_theme()

    def result(self, text: str) -> None:
        """Print produced text verbatim (aligned fields, tables)."""
        print(text)

    def width_line(self, text: str, width: int, raw: int | None = None, hidden: int | None = None) -> None:
        t = self.theme
        line = f"{t.bold}{width}{t.reset}"
        if raw is not None and hidden is not None:
            line += f" {t.subtle}(raw {raw}, hidden {hidden}){t.reset}"
        print(f"{line}\t{text}{t.reset}")

    def warn(self, message: str) -> None:
        t = self.theme
        print(f"{t.warning}[!!]{t.reset} {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        t = self.theme
        print(f"{t.error}[FAIL]{t.reset} {message}", file=sys.stderr)

    def error_with_recovery(
        self,
        error_type: str,
        message: str,
        context: dict[str, str] | None = None,
        recovery: str | None = None,
    ) -> None:
        """Print formatted error with context and recovery guidance to stderr."""
        from .errors import format_error

        formatted = format_error(error_type, message, context, recovery)
        print(formatted, file=sys.stderr)


class NullOutput:
    """Silent output for testing or programmatic use."""

    def result(self, text: str) -> None:
        pass

    def width_line(self, text: str, width: int, raw: int | None = None, hidden: int | None = None) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def error_with_recovery(
        self,
        error_type: str,
        message: str,
        context: dict[str, str] | None = None,
        recovery: str | None = None,
    ) -> None:
        pass
