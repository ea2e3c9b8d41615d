"""Dataclass contracts for cross-module data exchange."""

from __future__ import annotations

from dataclasses import dataclass

from .align import Alignment


@dataclass
class AlignConfig:
    """Alignment defaults shared by the CLI and table rendering."""

    fill: str = " "  # single ASCII fill character
    alignment: Alignment = Alignment.LEFT
    width: int = 0  # 0 = no padding unless a width is given
    skip_right_fill: bool = False  # no trailing fill after the last field
    separator: str = " | "  # between table columns
    crlf: bool = False  # CRLF line endings for table output
