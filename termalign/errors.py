"""Centralized exception hierarchy for termalign."""

from __future__ import annotations

import textwrap

from .theme import get_theme


def format_error(
    error_type: str,
    message: str,
    context: dict[str, str] | None = None,
    recovery: str | None = None,
) -> str:
    """Format an error message with optional context and recovery guidance.

    Args:
        error_type: Category of error (e.g., "Encoding error", "Invalid fill")
        message: Primary error description
        context: Optional dict of contextual information (path, value, etc.)
        recovery: Optional prose paragraph with recovery steps

    Returns:
        Multi-line formatted error string ready for display on stderr
    """
    t = get_theme()
    lines = [f"{t.error}[FAIL]{t.reset} {error_type}: {message}"]

    if context:
        context_parts = []
        if "path" in context:
            context_parts.append(f"path '{context['path']}'")
        if "key" in context:
            context_parts.append(f"key '{context['key']}'")
        for key, value in context.items():
            if key not in ("path", "key"):
                context_parts.append(f"{key} '{value}'")

        if context_parts:
            context_prose = "Affected: " + ", ".join(context_parts) + "."
            lines.append("")
            lines.append(textwrap.fill(context_prose, width=80))

    if recovery:
        lines.append("")
        # Numbered steps stay on their own lines
        for line in recovery.split("\n"):
            if line.strip():
                lines.append(textwrap.fill(line, width=80))
            else:
                lines.append("")

    return "\n".join(lines)


ERROR_TEMPLATES: dict[str, dict[str, str]] = {
    "encoding_error": {
        "error_type": "Encoding error",
        "message_template": "Output is not valid UTF-8",
        "recovery_template": (
            "1. Make sure input text is decoded as UTF-8 before aligning\n"
            "2. Check that the fill character is plain ASCII"
        ),
    },
    "invalid_fill": {
        "error_type": "Invalid fill",
        "message_template": "Fill must be a single ASCII character, got {value}",
        "recovery_template": (
            "1. Pass a single character such as ' ', '.', '-' or '*'\n"
            "2. Check TERMALIGN_FILL and the 'fill' key of your config file"
        ),
    },
    "config_invalid": {
        "error_type": "Config error",
        "message_template": "Could not load configuration from {path}",
        "recovery_template": (
            "1. Validate the file: `python -m json.tool {path}`\n"
            "2. Allowed keys: fill, align, width, skip_right_fill, separator, crlf\n"
            "3. Remove the file to fall back to defaults"
        ),
    },
}


def get_recovery_text(template_key: str) -> str:
    """Get recovery text for an error template."""
    return ERROR_TEMPLATES[template_key]["recovery_template"]


class TermAlignError(Exception):
    """Base for all recoverable termalign errors."""


class EncodingError(TermAlignError):
    """A text sink received bytes that are not valid UTF-8."""


class FillError(TermAlignError, ValueError):
    """Fill character is not a single ASCII character."""

    def __init__(self, fill: str):
        super().__init__(f"Fill must be a single ASCII character, got {fill!r}")
        self.fill = fill


class ConfigError(TermAlignError):
    """Config file errors: unreadable, corrupt JSON, invalid values."""

    def __init__(self, message: str, *, path: str | None = None, key: str | None = None):
        super().__init__(message)
        self.path = path
        self.key = key


class WidthInvariantError(AssertionError):
    """Hidden width exceeded raw width: the oracle and the scanner disagree.

    Not a TermAlignError. This is a defect, not bad input.
    """

    def __init__(self, text: str, raw: int, hidden: int):
        super().__init__(
            f"internal error: width {raw} less than hidden {hidden} on string {text!r}"
        )
        self.text = text
        self.raw = raw
        self.hidden = hidden
