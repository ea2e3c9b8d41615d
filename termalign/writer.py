"""Byte sinks: the output side of alignment."""

from __future__ import annotations

from typing import Protocol

from .errors import EncodingError

NEWLINE = b"\n"
CRLF = b"\r\n"


def newline(crlf: bool = False) -> bytes:
    """Line terminator bytes, CRLF when requested."""
    return CRLF if crlf else NEWLINE


class Sink(Protocol):
    """Anything that accepts bytes. Binary file objects qualify."""

    def write(self, data: bytes) -> int: ...
    def flush(self) -> None: ...


class StringWriter:
    """Sink that decodes each write as UTF-8 into an in-memory string."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, data: bytes) -> int:
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(f"Cannot decode utf8 string : {exc}") from exc
        self._parts.append(text)
        return len(data)

    def flush(self) -> None:
        pass

    def as_string(self) -> str:
        """Return everything written so far."""
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.as_string()


def write_all(out: Sink, data: bytes) -> None:
    """Write *data* completely, looping over short writes.

    Errors raised by the sink propagate unchanged.
    """
    view = memoryview(data)
    while view:
        n = out.write(bytes(view))
        if not n:
            raise OSError("failed to write whole buffer")
        view = view[n:]
