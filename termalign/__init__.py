"""ANSI-aware display width measurement and field alignment."""

from .align import Alignment, align_text, print_align
from .ansi import display_width, hidden_width, strip_ansi

__all__ = [
    "Alignment",
    "align_text",
    "display_width",
    "hidden_width",
    "print_align",
    "strip_ansi",
]
