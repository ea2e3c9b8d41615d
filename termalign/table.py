"""Table layout primitives built on the field aligner.

Pure functions that size columns by visible width and write aligned rows,
so cells containing color codes or hyperlinks still line up.
"""

from __future__ import annotations

from typing import Sequence

from .align import Alignment, print_align
from .ansi import display_width
from .html import HtmlEscape
from .writer import Sink, StringWriter, newline, write_all


def column_widths(rows: Sequence[Sequence[str]]) -> list[int]:
    """Return the widest visible cell of each column.

    Rows may be ragged; short rows simply do not contribute to later columns.
    """
    widths: list[int] = []
    for row in rows:
        for i, cell in enumerate(row):
            w = display_width(cell)
            if i >= len(widths):
                widths.append(w)
            elif w > widths[i]:
                widths[i] = w
    return widths


def print_row(
    out: Sink,
    cells: Sequence[str],
    widths: Sequence[int],
    aligns: Sequence[Alignment] = (),
    fill: str = " ",
    separator: str = " | ",
    skip_right_fill: bool = False,
) -> None:
    """Write one aligned row (without a line terminator) to *out*.

    Args:
        cells: Cell texts (may contain ANSI codes). Missing cells are empty.
        widths: Field width per column; the row has ``len(widths)`` fields.
        aligns: Alignment per column, LEFT where not given.
        fill: Single ASCII fill character.
        separator: Text written between fields.
        skip_right_fill: Omit trailing fill on the last field only.
    """
    sep = separator.encode("utf-8")
    last = len(widths) - 1
    for i, width in enumerate(widths):
        if i > 0:
            write_all(out, sep)
        cell = cells[i] if i < len(cells) else ""
        align = aligns[i] if i < len(aligns) else Alignment.LEFT
        print_align(out, align, cell, fill, width, skip_right_fill and i == last)


def render_table(
    rows: Sequence[Sequence[str]],
    aligns: Sequence[Alignment] = (),
    fill: str = " ",
    separator: str = " | ",
    skip_right_fill: bool = True,
    crlf: bool = False,
) -> str:
    """Render *rows* as aligned text lines joined by the chosen line ending."""
    widths = column_widths(rows)
    out = StringWriter()
    eol = newline(crlf)
    for index, row in enumerate(rows):
        if index:
            write_all(out, eol)
        print_row(out, row, widths, aligns, fill, separator, skip_right_fill)
    return out.as_string()


def render_html_table(rows: Sequence[Sequence[str]], header: bool = True) -> str:
    """Render *rows* as an HTML ``<table>`` with every cell escaped.

    The first row becomes ``<th>`` cells when *header* is set.
    """
    lines = ["<table>"]
    for index, row in enumerate(rows):
        tag = "th" if header and index == 0 else "td"
        cells = "".join(f"<{tag}>{HtmlEscape(cell)}</{tag}>" for cell in row)
        lines.append(f"  <tr>{cells}</tr>")
    lines.append("</table>")
    return "\n".join(lines)
