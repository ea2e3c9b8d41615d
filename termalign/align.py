"""Field alignment: pad text to a display width and emit bytes to a sink."""

from __future__ import annotations

import enum

from .ansi import DEFAULT_ORACLE, WidthOracle, display_width
from .errors import FillError
from .writer import Sink, StringWriter, write_all


class Alignment(enum.Enum):
    """Where text sits inside its field."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"

    @classmethod
    def parse(cls, value: str | Alignment) -> Alignment:
        """Accept ``left``/``right``/``center`` or their first letter, any case.

        Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.value[0]):
                return member
        raise ValueError(f"Unknown alignment: {value!r}")


def check_fill(fill: str) -> str:
    """Return *fill* unchanged if it is a single ASCII character.

    Raises FillError otherwise.
    """
    if len(fill) != 1 or not fill.isascii():
        raise FillError(fill)
    return fill


def print_align(
    out: Sink,
    align: Alignment,
    text: str,
    fill: str,
    size: int,
    skip_right_fill: bool = False,
    oracle: WidthOracle = DEFAULT_ORACLE,
) -> None:
    """Align/fill *text* to *size* display columns and write it to *out*.

    If *skip_right_fill* is set, nothing is written after the text, so left
    alignment emits the bare text and centering emits only the left fill.
    Text already as wide as *size* (or wider) is written unchanged.
    """
    fill_byte = check_fill(fill).encode("ascii")
    text_len = display_width(text, oracle)
    nfill = max(0, size - text_len)

    if align is Alignment.RIGHT:
        n = nfill
    elif align is Alignment.CENTER:
        n = nfill // 2
    else:
        n = 0

    if n > 0:
        write_all(out, fill_byte * n)
        nfill -= n
    write_all(out, text.encode("utf-8"))
    if nfill > 0 and not skip_right_fill:
        write_all(out, fill_byte * nfill)


def align_text(
    text: str,
    size: int,
    align: Alignment = Alignment.LEFT,
    fill: str = " ",
    skip_right_fill: bool = False,
) -> str:
    """Return *text* aligned in a field of *size* columns, as a string."""
    out = StringWriter()
    print_align(out, align, text, fill, size, skip_right_fill)
    return out.as_string()
