"""Byte encoding of object bodies."""

from __future__ import annotations

from .errors import PDFEncodingError


def encode_text(content: str) -> bytes:
    """Return *content* as UTF-8 bytes.

    An empty body never comes out of a well-formed object, so it is treated
    as a construction bug rather than silently written.
    """

    if not content:
        raise PDFEncodingError("Content cannot be empty")
    return content.encode("utf-8")


def format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if abs(value - int(value)) < 1e-6:
        return str(int(round(value)))
    text = f"{value:.4f}"
    return text.rstrip("0").rstrip(".")


__all__ = ["encode_text", "format_number"]
