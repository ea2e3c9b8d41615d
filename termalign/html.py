"""HTML entity escaping for table cells."""

from __future__ import annotations

# Only these five need escaping in text and attribute values
_ENTITIES: dict[str, str] = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    "'": "&#39;",
    '"': "&quot;",
}


def html_escape(text: str) -> str:
    """Return *text* with ``< > & ' "`` replaced by their entities.

    Single forward pass; untouched runs are copied as slices.
    """
    parts: list[str] = []
    last = 0
    for i, ch in enumerate(text):
        entity = _ENTITIES.get(ch)
        if entity is None:
            continue
        parts.append(text[last:i])
        parts.append(entity)
        last = i + 1
    if last == 0:
        return text
    parts.append(text[last:])
    return "".join(parts)


class HtmlEscape:
    """Wrapper that renders the escaped form of *text* via str() or format()."""

    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text

    def __str__(self) -> str:
        return html_escape(self.text)

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        return f"HtmlEscape({self.text!r})"
