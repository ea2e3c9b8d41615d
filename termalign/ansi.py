"""ANSI-aware display width measurement.

Provides the Unicode width table used for raw column counts and a small
state machine that walks a string one character at a time, tracking whether
each position is inside a CSI (``ESC [ ... m``) or OSC (``ESC ] ... ESC \\``)
sequence. Columns the width table would count for escape-sequence characters
are accumulated as *hidden* width and subtracted from the raw width.
"""

from __future__ import annotations

import enum
import logging
import unicodedata
from dataclasses import dataclass
from typing import Protocol

from .errors import WidthInvariantError

logger = logging.getLogger(__name__)

ESC = "\x1b"

# Unicode general categories that occupy no terminal cell
_ZERO_WIDTH_CATEGORIES = frozenset({"Mn", "Me", "Cf", "Cc"})


# ---------------------------------------------------------------------------
# Raw width oracle
# ---------------------------------------------------------------------------


class WidthOracle(Protocol):
    """Per-character and per-string display width under a Unicode table.

    ``str_width(s)`` must equal the sum of ``char_width`` over ``s``.
    """

    def char_width(self, ch: str) -> int: ...
    def str_width(self, text: str) -> int: ...


class UnicodeWidthOracle:
    """East-Asian-width-aware width table built on :mod:`unicodedata`.

    Combining marks, format characters and controls (ESC included) are 0
    columns, wide and fullwidth characters are 2, everything else is 1.
    """

    def char_width(self, ch: str) -> int:
        if unicodedata.combining(ch):
            return 0
        if unicodedata.category(ch) in _ZERO_WIDTH_CATEGORIES:
            return 0
        if unicodedata.east_asian_width(ch) in ("W", "F"):
            return 2
        return 1

    def str_width(self, text: str) -> int:
        return sum(self.char_width(ch) for ch in text)


DEFAULT_ORACLE = UnicodeWidthOracle()


# ---------------------------------------------------------------------------
# Width scanner
# ---------------------------------------------------------------------------


class ScanState(enum.Enum):
    """Position of the scanner relative to escape sequences."""

    NORMAL = "normal"  # not inside any escape
    ESCAPE_CHAR = "escape_char"  # just saw ESC
    OPEN_BRACKET = "open_bracket"  # inside ESC [ ...
    AFTER_ESCAPE = "after_escape"  # CSI terminator 'm' just absorbed
    OSC = "osc"  # inside ESC ] ...
    OSC_ESCAPE_CHAR = "osc_escape_char"  # saw ESC inside OSC, waiting for '\'


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a full scan: hidden columns and the state at end of input."""

    hidden: int
    state: ScanState

    @property
    def terminated(self) -> bool:
        """True when the input did not end in the middle of a sequence."""
        return self.state in (ScanState.NORMAL, ScanState.AFTER_ESCAPE)


def step(
    state: ScanState, ch: str, oracle: WidthOracle = DEFAULT_ORACLE
) -> tuple[ScanState, int]:
    """Advance the scanner by one character.

    Returns ``(next_state, added_hidden)``. The added amount is always the
    table width of the characters the transition assigns to a sequence, so
    the total can never exceed the raw width of the consumed input.
    """
    w = oracle.char_width

    if state is ScanState.NORMAL or state is ScanState.AFTER_ESCAPE:
        if ch == ESC:
            return ScanState.ESCAPE_CHAR, 0
        return ScanState.NORMAL, 0

    if state is ScanState.ESCAPE_CHAR:
        if ch == "[":
            return ScanState.OPEN_BRACKET, w(ESC) + w(ch)
        if ch == "]":
            return ScanState.OSC, w(ESC) + w(ch)
        if ch == ESC:
            # Previous ESC is abandoned, this one may still open a sequence
            return ScanState.ESCAPE_CHAR, 0
        return ScanState.NORMAL, 0

    if state is ScanState.OPEN_BRACKET:
        if ch == ESC:
            return ScanState.ESCAPE_CHAR, 0
        if ch == "m":
            return ScanState.AFTER_ESCAPE, w(ch)
        return ScanState.OPEN_BRACKET, w(ch)

    if state is ScanState.OSC:
        if ch == ESC:
            return ScanState.OSC_ESCAPE_CHAR, 0
        return ScanState.OSC, w(ch)

    # OSC_ESCAPE_CHAR: the pending ESC belongs to the sequence either way
    if ch == "\\":
        return ScanState.NORMAL, w(ESC) + w(ch)
    if ch == ESC:
        return ScanState.OSC_ESCAPE_CHAR, w(ESC)
    return ScanState.OSC, w(ESC) + w(ch)


def scan(text: str, oracle: WidthOracle = DEFAULT_ORACLE) -> ScanResult:
    """Run the state machine over *text* and return the hidden width.

    Truncated or malformed trailing sequences are not errors: the hidden
    count covers whatever was consumed before the input ran out.
    """
    state = ScanState.NORMAL
    hidden = 0
    for ch in text:
        state, added = step(state, ch, oracle)
        hidden += added

    result = ScanResult(hidden=hidden, state=state)
    if not result.terminated:
        logger.debug("Input ended inside escape sequence (state=%s)", state.value)
    return result


def hidden_width(text: str, oracle: WidthOracle = DEFAULT_ORACLE) -> int:
    """Return the display columns consumed by recognized escape sequences."""
    return scan(text, oracle).hidden


def display_width(text: str, oracle: WidthOracle = DEFAULT_ORACLE) -> int:
    """Return the visible column count of *text*, ignoring ANSI sequences.

    Wide characters count as 2 columns and combining marks as 0.

    Raises:
        WidthInvariantError: if the scanner hid more columns than the oracle
            counted, which means the two disagree on what is printable.
    """
    raw = oracle.str_width(text)
    hidden = scan(text, oracle).hidden
    if hidden > raw:
        logger.error("Hidden width %d exceeds raw width %d for %r", hidden, raw, text)
        raise WidthInvariantError(text, raw, hidden)
    return raw - hidden


def strip_ansi(text: str) -> str:
    """Remove every character the scanner places inside a recognized sequence.

    Uses the same transitions as :func:`display_width`, so for terminated
    input ``UnicodeWidthOracle().str_width(strip_ansi(s)) == display_width(s)``.
    An abandoned ``ESC x`` pair is kept as-is.
    """
    kept: list[str] = []
    pending: list[str] = []  # ESC characters whose fate is not decided yet
    state = ScanState.NORMAL
    for ch in text:
        prev = state
        state, _ = step(prev, ch)
        if prev in (ScanState.NORMAL, ScanState.AFTER_ESCAPE):
            if state is ScanState.ESCAPE_CHAR:
                pending = [ch]
            else:
                kept.append(ch)
        elif prev is ScanState.ESCAPE_CHAR:
            if state is ScanState.ESCAPE_CHAR:
                kept.extend(pending)
                pending = [ch]
            elif state is ScanState.NORMAL:
                kept.extend(pending)
                kept.append(ch)
                pending = []
            else:
                pending = []
        elif state is ScanState.ESCAPE_CHAR:
            # ESC cut a sequence short and may open a new one
            pending = [ch]
    if state is ScanState.ESCAPE_CHAR:
        kept.extend(pending)
    return "".join(kept)
