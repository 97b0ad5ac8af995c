"""Sequential object writer with cross-reference table and trailer emission."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import TYPE_CHECKING, BinaryIO, List

from .encoding import encode_text
from .errors import SimplePDFError

if TYPE_CHECKING:  # pragma: no cover
    from .document import PDFDocument

logger = logging.getLogger(__name__)

HEADER = b"%PDF-1.7\n%\xE2\xE3\xCF\xD3\n"


class PDFWriter:
    """Writes objects to *handle* while recording where each one starts.

    Offsets are counted from the bytes handed to the stream rather than
    read back with ``tell()``, so any writable binary stream works.
    """

    def __init__(self, handle: BinaryIO) -> None:
        self.handle = handle
        self.offset = 0
        self.offsets: List[int] = []

    def _write(self, data: bytes) -> None:
        self.handle.write(data)
        self.offset += len(data)

    def write_header(self) -> None:
        if self.offset:
            raise SimplePDFError("The header must be the first thing written")
        self._write(HEADER)

    def write_object(self, number: int, data: bytes) -> None:
        expected = len(self.offsets) + 1
        if number != expected:
            raise SimplePDFError(f"Object {number} written out of order, expected object {expected}")
        self.offsets.append(self.offset)
        logger.debug("object %d at offset %d (%d bytes)", number, self.offset, len(data))
        self._write(data)

    def write_trailer(self, root: int) -> int:
        """Emit the xref table and trailer; return the xref table's offset."""

        xref_offset = self.offset
        size = len(self.offsets) + 1
        lines = [f"xref\n0 {size}\n", "0000000000 65535 f \n"]
        lines.extend(f"{offset:010d} 00000 n \n" for offset in self.offsets)
        lines.append(f"trailer << /Root {root} 0 R /Size {size} >>\n")
        lines.append(f"startxref\n{xref_offset}\n%%EOF")
        self._write(encode_text("".join(lines)))
        return xref_offset


def write_pdf(document: "PDFDocument", handle: BinaryIO) -> int:
    """Serialize *document* into *handle*; return the number of bytes written."""

    numbering = document.assign_numbers()
    writer = PDFWriter(handle)
    writer.write_header()
    for ref in document.traversal_order():
        number = numbering.number_of(ref)
        writer.write_object(number, document.objects[ref.index].render(number, numbering))
    writer.write_trailer(root=numbering.number_of(document.catalog))
    return writer.offset


def build_pdf(document: "PDFDocument") -> bytes:
    buffer = BytesIO()
    write_pdf(document, buffer)
    return buffer.getvalue()


__all__ = ["HEADER", "PDFWriter", "build_pdf", "write_pdf"]
