"""Minimal JPEG header reader used to size DCT-encoded images.

Only the marker segments are walked; the entropy-coded data is never
decoded.  The first start-of-frame segment gives the pixel dimensions,
which is all an ``/Image`` XObject needs since the payload is embedded
as-is behind ``/DCTDecode``.
"""

from __future__ import annotations

from dataclasses import dataclass
import struct

JPEG_SIGNATURE = b"\xff\xd8"

# SOF0..SOF15 minus DHT (C4), JPG (C8) and DAC (CC)
SOF_MARKERS = frozenset(range(0xC0, 0xD0)) - {0xC4, 0xC8, 0xCC}
STANDALONE_MARKERS = frozenset(range(0xD0, 0xD8)) | {0x01}
SOS_MARKER = 0xDA


@dataclass
class ParsedJPEG:
    width: int
    height: int
    precision: int
    components: int


class JPEGFormatError(ValueError):
    """Raised when the data is not a JPEG whose frame header can be read."""


def parse_jpeg(data: bytes) -> ParsedJPEG:
    if not data.startswith(JPEG_SIGNATURE):
        raise JPEGFormatError("File is not a valid JPEG image")

    offset = len(JPEG_SIGNATURE)
    while offset < len(data):
        if data[offset] != 0xFF:
            raise JPEGFormatError(f"Expected marker at offset {offset}")
        # fill bytes
        while offset < len(data) and data[offset] == 0xFF:
            offset += 1
        if offset >= len(data):
            break
        marker = data[offset]
        offset += 1

        if marker in STANDALONE_MARKERS:
            continue
        if offset + 2 > len(data):
            break
        length = struct.unpack(">H", data[offset : offset + 2])[0]
        if length < 2:
            raise JPEGFormatError("Invalid segment length")

        if marker in SOF_MARKERS:
            if offset + 8 > len(data):
                break
            precision, height, width, components = struct.unpack(">BHHB", data[offset + 2 : offset + 8])
            if width == 0 or height == 0:
                raise JPEGFormatError("JPEG frame declares a zero dimension")
            return ParsedJPEG(width=width, height=height, precision=precision, components=components)
        if marker == SOS_MARKER:
            raise JPEGFormatError("Scan data found before a frame header")
        offset += length

    raise JPEGFormatError("Unexpected end of JPEG data")


__all__ = ["JPEGFormatError", "ParsedJPEG", "parse_jpeg"]
