"""Minimal PDF-1.7 writer: Type1 fonts, JPEG images and raw content streams."""

from .document import PDFDocument
from .errors import PDFEncodingError, PDFWriteError, SimplePDFError
from .jpeg import JPEGFormatError, parse_jpeg
from .objects import ObjectKind, ObjectRef
from .pdf_writer import build_pdf, write_pdf
from .storage import save_pdf

__all__ = [
    "JPEGFormatError",
    "ObjectKind",
    "ObjectRef",
    "PDFDocument",
    "PDFEncodingError",
    "PDFWriteError",
    "SimplePDFError",
    "build_pdf",
    "parse_jpeg",
    "save_pdf",
    "write_pdf",
]
