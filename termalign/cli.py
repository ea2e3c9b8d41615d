"""Command line entry point for termalign.

Subcommands:
    - width: visible width of each argument or stdin line
    - align: pad one text into a fixed-width field
    - table: align delimited rows read from stdin

Core logic lives in:
    - ansi.py: Unicode width table and escape-sequence scanner
    - align.py: Field alignment to byte sinks
    - table.py: Column sizing and row rendering
    - config.py: Defaults from config file and environment
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO

if sys.version_info < (3, 9):
    sys.exit("Error: termalign requires Python 3.9 or newer.")

from .align import Alignment, align_text
from .ansi import DEFAULT_ORACLE, display_width, hidden_width
from .config import load_config
from .errors import (
    ERROR_TEMPLATES,
    ConfigError,
    EncodingError,
    FillError,
    TermAlignError,
    get_recovery_text,
)
from .models import AlignConfig
from .output import CliOutput, Output
from .table import render_html_table, render_table

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def _delimiter(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("delimiter must not be empty")
    return value


def _parse_align_spec(spec: str) -> list[Alignment]:
    """Turn a column spec such as ``"lrc"`` into alignments."""
    return [Alignment.parse(ch) for ch in spec]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="termalign",
        description="Measure and align text by terminal display width, ignoring ANSI codes.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    p.add_argument("--config", default=None, help="Path to JSON config file.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = p.add_subparsers(dest="command", required=True)

    w = sub.add_parser("width", help="Print display width of text.")
    w.add_argument("texts", nargs="*", help="Texts to measure (stdin lines if omitted).")
    w.add_argument("--raw", action="store_true", help="Also show raw and hidden widths.")

    a = sub.add_parser("align", help="Align text into a fixed-width field.")
    a.add_argument("text")
    a.add_argument("-w", "--width", type=int, default=None, help="Field width in columns.")
    a.add_argument("-a", "--align", type=Alignment.parse, default=None, help="left, right or center.")
    a.add_argument("-f", "--fill", default=None, help="Single ASCII fill character.")
    a.add_argument(
        "--no-trailing-fill",
        action="store_true",
        default=None,
        help="Do not write fill after the text.",
    )

    t = sub.add_parser("table", help="Align delimited rows read from stdin.")
    t.add_argument("-a", "--align", type=_parse_align_spec, default=None, help="Per-column spec, e.g. 'lrc'.")
    t.add_argument("-d", "--delimiter", type=_delimiter, default="\t", help="Input cell delimiter (default: tab).")
    t.add_argument("-f", "--fill", default=None, help="Single ASCII fill character.")
    t.add_argument("-s", "--separator", default=None, help="Output column separator.")
    t.add_argument("--html", action="store_true", help="Emit an HTML table instead.")
    t.add_argument("--crlf", action="store_true", default=None, help="Use CRLF line endings.")
    t.add_argument(
        "--no-trailing-fill",
        action="store_true",
        default=None,
        help="Do not pad the last column.",
    )
    return p


def _read_lines(stdin: TextIO) -> Iterable[str]:
    for line in stdin:
        yield line.rstrip("\r\n")


def _cmd_width(args: argparse.Namespace, stdin: TextIO, out: Output) -> int:
    texts = args.texts if args.texts else list(_read_lines(stdin))
    for text in texts:
        width = display_width(text)
        if args.raw:
            out.width_line(text, width, DEFAULT_ORACLE.str_width(text), hidden_width(text))
        else:
            out.width_line(text, width)
    return 0


def _cmd_align(args: argparse.Namespace, config: AlignConfig, out: Output) -> int:
    size = config.width if args.width is None else args.width
    align = config.alignment if args.align is None else args.align
    fill = config.fill if args.fill is None else args.fill
    skip = config.skip_right_fill if args.no_trailing_fill is None else args.no_trailing_fill
    out.result(align_text(args.text, size, align, fill, skip))
    return 0


def _cmd_table(args: argparse.Namespace, config: AlignConfig, stdin: TextIO, out: Output) -> int:
    rows = [line.split(args.delimiter) for line in _read_lines(stdin) if line]
    if not rows:
        out.warn("No rows on stdin")
        return 0
    if args.html:
        out.result(render_html_table(rows))
        return 0

    if args.align is not None:
        aligns = args.align
    else:
        aligns = [config.alignment] * max(len(row) for row in rows)
    logger.debug("Rendering %d rows with alignments %s", len(rows), [a.value for a in aligns])
    out.result(
        render_table(
            rows,
            aligns,
            fill=config.fill if args.fill is None else args.fill,
            separator=config.separator if args.separator is None else args.separator,
            skip_right_fill=(
                config.skip_right_fill if args.no_trailing_fill is None else args.no_trailing_fill
            ),
            crlf=config.crlf if args.crlf is None else args.crlf,
        )
    )
    return 0


def _report(err: TermAlignError, out: Output) -> None:
    """Print a recoverable error with its recovery template."""
    if isinstance(err, FillError):
        key, context = "invalid_fill", {"value": repr(err.fill)}
    elif isinstance(err, ConfigError):
        key, context = "config_invalid", {"path": err.path or "(environment)"}
        if err.key:
            context["key"] = err.key
    elif isinstance(err, EncodingError):
        key, context = "encoding_error", {}
    else:
        out.error(str(err))
        return
    template = ERROR_TEMPLATES[key]
    recovery = get_recovery_text(key)
    out.error_with_recovery(
        template["error_type"],
        str(err),
        context=context,
        recovery=recovery.format(path=context.get("path", "")),
    )


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    out: Optional[Output] = None,
) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if stdin is None:
        stdin = sys.stdin
    if out is None:
        out = CliOutput()

    try:
        config = load_config(Path(args.config) if args.config else None)
        if args.command == "width":
            return _cmd_width(args, stdin, out)
        if args.command == "align":
            return _cmd_align(args, config, out)
        return _cmd_table(args, config, stdin, out)
    except KeyboardInterrupt:
        out.warn("Aborted.")
        return 130
    except TermAlignError as e:
        _report(e, out)
        return 1
    except Exception as e:
        out.error(f"Unexpected error: {e}")
        return 3


if __name__ == "__main__":
    sys.exit(main())
