"""Indirect object variants making up a document.

Objects live in an arena owned by :class:`~simplepdf.document.PDFDocument`
and point at each other through :class:`ObjectRef` handles.  None of them
stores its own object number: numbers come from a separate numbering pass
and are handed to :meth:`PDFObject.render` through a :class:`Numbering`.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Sequence, Tuple

from .encoding import encode_text, format_number

MEDIA_BOX = "[0 0 612 792]"

Pair = Tuple[float, float]


class ObjectKind(Enum):
    CATALOG = "Catalog"
    PAGE_TREE = "Pages"
    PAGE = "Page"
    FONT = "Font"
    IMAGE_XOBJECT = "ImageXObject"
    IMAGE_PAINT_STREAM = "ImagePaintStream"
    CONTENT_STREAM = "ContentStream"


@dataclass(frozen=True)
class ObjectRef:
    """Handle of an object inside a document's arena."""

    index: int
    kind: ObjectKind
    owner: int = 0

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"ObjectRef({self.index}, {self.kind.name})"


@dataclass
class Numbering:
    """Object numbers assigned to arena entries, keyed by arena index."""

    objects: Sequence["PDFObject"]
    numbers: Dict[int, int]

    def number_of(self, ref: ObjectRef) -> int:
        return self.numbers[ref.index]

    def resolve(self, ref: ObjectRef) -> "PDFObject":
        return self.objects[ref.index]

    def reference(self, ref: ObjectRef) -> str:
        return f"{self.number_of(ref)} 0 R"


def _dictionary_object(number: int, entries: str) -> bytes:
    return encode_text(f"{number} 0 obj << {entries} >> endobj\n")


def _stream_object(number: int, entries: str, body: bytes) -> bytes:
    prefix = f"{entries} " if entries else ""
    header = encode_text(f"{number} 0 obj << {prefix}/Length {len(body)} >>\nstream\n")
    return header + body + b"\nendstream\nendobj\n"


class PDFObject:
    kind: ClassVar[ObjectKind]

    def render(self, number: int, numbering: Numbering) -> bytes:
        raise NotImplementedError


@dataclass
class Catalog(PDFObject):
    kind: ClassVar[ObjectKind] = ObjectKind.CATALOG

    pages: ObjectRef

    def render(self, number: int, numbering: Numbering) -> bytes:
        return _dictionary_object(number, f"/Type /Catalog /Pages {numbering.reference(self.pages)}")


@dataclass
class PageTree(PDFObject):
    kind: ClassVar[ObjectKind] = ObjectKind.PAGE_TREE

    kids: List[ObjectRef] = field(default_factory=list)

    def render(self, number: int, numbering: Numbering) -> bytes:
        kids = " ".join(numbering.reference(kid) for kid in self.kids)
        return _dictionary_object(number, f"/Type /Pages /Count {len(self.kids)} /Kids [{kids}]")


@dataclass
class Page(PDFObject):
    kind: ClassVar[ObjectKind] = ObjectKind.PAGE

    parent: ObjectRef
    contents: List[ObjectRef] = field(default_factory=list)
    fonts: List[ObjectRef] = field(default_factory=list)
    xobjects: List[ObjectRef] = field(default_factory=list)

    def _resources(self, numbering: Numbering) -> str:
        font_entries = " ".join(
            f"/{numbering.resolve(ref).alias} {numbering.reference(ref)}" for ref in self.fonts
        )
        parts = [f"/Font << {font_entries} >>" if font_entries else "/Font << >>"]
        if self.xobjects:
            xobject_entries = " ".join(
                f"/{numbering.resolve(ref).name} {numbering.reference(ref)}" for ref in self.xobjects
            )
            parts.append(f"/XObject << {xobject_entries} >>")
        return "<< " + " ".join(parts) + " >>"

    def render(self, number: int, numbering: Numbering) -> bytes:
        contents = " ".join(numbering.reference(ref) for ref in self.contents)
        return _dictionary_object(
            number,
            f"/Type /Page /Parent {numbering.reference(self.parent)} /MediaBox {MEDIA_BOX} "
            f"/Contents [{contents}] /Resources {self._resources(numbering)}",
        )


@dataclass
class Font(PDFObject):
    kind: ClassVar[ObjectKind] = ObjectKind.FONT

    alias: str
    base_font: str

    def render(self, number: int, numbering: Numbering) -> bytes:
        return _dictionary_object(
            number,
            f"/Type /Font /Subtype /Type1 /BaseFont /{self.base_font} /Encoding /WinAnsiEncoding",
        )


@dataclass
class ImageXObject(PDFObject):
    """DCT-encoded raster image; ``data`` is embedded without re-encoding."""

    kind: ClassVar[ObjectKind] = ObjectKind.IMAGE_XOBJECT

    name: str
    width: int
    height: int
    data: bytes

    def render(self, number: int, numbering: Numbering) -> bytes:
        entries = (
            f"/Type /XObject /Subtype /Image /Name /{self.name} /Width {int(self.width)} "
            f"/Height {int(self.height)} /ColorSpace /DeviceRGB /BitsPerComponent 8 /Filter /DCTDecode"
        )
        return _stream_object(number, entries, self.data)


@dataclass
class ImagePaintStream(PDFObject):
    """Content stream fragment placing its image XObject on a page."""

    kind: ClassVar[ObjectKind] = ObjectKind.IMAGE_PAINT_STREAM

    xobject: ObjectRef
    scale: Pair
    translation: Pair

    def operators(self, numbering: Numbering) -> str:
        sx, sy = (format_number(value) for value in self.scale)
        tx, ty = (format_number(value) for value in self.translation)
        name = numbering.resolve(self.xobject).name
        return f"q {sx} 0 0 {sy} {tx} {ty} cm /{name} Do Q"

    def render(self, number: int, numbering: Numbering) -> bytes:
        return _stream_object(number, "", encode_text(self.operators(numbering)))


@dataclass
class ContentStream(PDFObject):
    kind: ClassVar[ObjectKind] = ObjectKind.CONTENT_STREAM

    buffer: io.StringIO = field(default_factory=io.StringIO)

    def render(self, number: int, numbering: Numbering) -> bytes:
        return _stream_object(number, "", self.buffer.getvalue().encode("utf-8"))


__all__ = [
    "Catalog",
    "ContentStream",
    "Font",
    "ImagePaintStream",
    "ImageXObject",
    "Numbering",
    "ObjectKind",
    "ObjectRef",
    "Page",
    "PageTree",
    "PDFObject",
]
