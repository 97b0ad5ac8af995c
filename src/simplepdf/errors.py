"""Exceptions raised while assembling and writing PDF files."""

from __future__ import annotations


class SimplePDFError(RuntimeError):
    pass


class PDFEncodingError(SimplePDFError):
    """Raised when an object renders to an empty body."""


class PDFWriteError(SimplePDFError):
    """Raised when the output file cannot be removed, created or written."""


__all__ = ["PDFEncodingError", "PDFWriteError", "SimplePDFError"]
