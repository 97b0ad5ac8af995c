from __future__ import annotations

import struct

import pytest


def _segment(marker: int, payload: bytes) -> bytes:
    return bytes([0xFF, marker]) + struct.pack(">H", len(payload) + 2) + payload


def build_jpeg(width: int, height: int, sof_marker: int = 0xC0) -> bytes:
    """Return JPEG-shaped bytes with a real frame header and no image data."""

    app0 = _segment(0xE0, b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00")
    components = b"".join(bytes([index, 0x11, 0]) for index in (1, 2, 3))
    sof = _segment(sof_marker, struct.pack(">BHHB", 8, height, width, 3) + components)
    sos = _segment(0xDA, b"\x03\x01\x00\x02\x11\x03\x11\x00\x3f\x00")
    return b"\xff\xd8" + app0 + sof + sos + b"\x00\x01\x02" + b"\xff\xd9"


@pytest.fixture
def make_jpeg():
    return build_jpeg
