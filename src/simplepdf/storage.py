"""Persistence helpers for simplepdf."""

from __future__ import annotations

import logging
from pathlib import Path

from .document import PDFDocument
from .errors import PDFWriteError
from .pdf_writer import write_pdf

logger = logging.getLogger(__name__)


def save_pdf(document: PDFDocument, path: str | Path) -> Path:
    """Write *document* to *path*, replacing any file already there.

    Nothing is cleaned up on failure: a partly written file stays on disk.
    """

    target = Path(path)
    try:
        if target.exists():
            target.unlink()
        with open(target, "wb") as handle:
            size = write_pdf(document, handle)
    except OSError as exc:
        raise PDFWriteError(f"Unable to write {target}: {exc}") from exc
    logger.info("Wrote %s (%d pages, %d bytes)", target, document.page_count, size)
    return target


__all__ = ["save_pdf"]
