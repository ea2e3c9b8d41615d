"""Terminal styling for CLI messages with color tier fallback.

Follows the NO_COLOR standard (https://no-color.org/).

Usage:
    t = get_theme()
    print(f"{t.error}[FAIL]{t.reset} Invalid fill")
"""

from __future__ import annotations

import enum
import os
import sys
from dataclasses import dataclass

RESET = "\033[0m"
_BOLD = "\033[1m"


class ColorTier(enum.Enum):
    """Terminal color capability tiers, from richest to none."""

    TRUECOLOR = "truecolor"
    ANSI256 = "256"
    ANSI16 = "16"
    NONE = "none"


def detect_color_tier() -> ColorTier:
    """Detect terminal color tier from environment.

    Detection order:
    1. NO_COLOR env var set -> NONE
    2. FORCE_COLOR env var set -> TRUECOLOR
    3. stdout not a TTY or TERM == 'dumb' -> NONE
    4. COLORTERM in {truecolor, 24bit} -> TRUECOLOR
    5. TERM contains '256color' -> ANSI256
    6. Otherwise -> ANSI16
    """
    if os.environ.get("NO_COLOR"):
        return ColorTier.NONE
    if os.environ.get("FORCE_COLOR"):
        return ColorTier.TRUECOLOR
    if not sys.stdout.isatty() or os.environ.get("TERM") == "dumb":
        return ColorTier.NONE

    colorterm = os.environ.get("COLORTERM", "").lower()
    if colorterm in ("truecolor", "24bit"):
        return ColorTier.TRUECOLOR
    if "256color" in os.environ.get("TERM", ""):
        return ColorTier.ANSI256
    return ColorTier.ANSI16


PALETTE: dict[str, tuple[int, int, int]] = {
    "subtle": (100, 120, 130),
    "yellow": (220, 190, 60),
    "red": (200, 80, 80),
}

# Nearest basic color for each palette entry
_ANSI16_CODES: dict[str, int] = {
    "subtle": 90,
    "yellow": 93,
    "red": 91,
}


def _rgb_to_256(r: int, g: int, b: int) -> int:
    """Convert RGB to closest xterm-256 color index."""
    if abs(r - g) < 10 and abs(g - b) < 10:
        grey = (r + g + b) // 3
        if grey < 8:
            return 16
        if grey > 248:
            return 231
        return round((grey - 8) / 247 * 23) + 232

    # 6x6x6 color cube (indices 16-231)
    ri = round(r / 255 * 5)
    gi = round(g / 255 * 5)
    bi = round(b / 255 * 5)
    return 16 + 36 * ri + 6 * gi + bi


def color(name: str, tier: ColorTier) -> str:
    """Foreground escape sequence for palette entry *name* at *tier*."""
    if tier is ColorTier.NONE:
        return ""
    r, g, b = PALETTE[name]
    if tier is ColorTier.TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    if tier is ColorTier.ANSI256:
        return f"\033[38;5;{_rgb_to_256(r, g, b)}m"
    return f"\033[{_ANSI16_CODES[name]}m"


@dataclass
class Theme:
    """Semantic styles; empty strings in no-color mode."""

    tier: ColorTier = ColorTier.NONE

    subtle: str = ""  # secondary numbers (raw/hidden widths)
    warning: str = ""  # [!!] warnings
    error: str = ""  # [FAIL] errors

    bold: str = ""
    reset: str = ""


def _build_theme(tier: ColorTier) -> Theme:
    if tier is ColorTier.NONE:
        return Theme(tier=tier)
    return Theme(
        tier=tier,
        subtle=color("subtle", tier),
        warning=color("yellow", tier),
        error=color("red", tier),
        bold=_BOLD,
        reset=RESET,
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return appropriate theme based on terminal capabilities.

    Caches result on first call. Use reset_theme() to re-detect.
    """
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = _build_theme(detect_color_tier())
    return _cached_theme


def reset_theme() -> None:
    """Clear cached theme (for testing or after env change)."""
    global _cached_theme
    _cached_theme = None
