"""Document assembler: owns the object arena and drives finalization."""

from __future__ import annotations

import base64
import binascii
import io
import itertools
import logging
import math
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import SimplePDFError
from .jpeg import parse_jpeg
from .objects import (
    Catalog,
    ContentStream,
    Font,
    ImagePaintStream,
    ImageXObject,
    Numbering,
    ObjectKind,
    ObjectRef,
    Page,
    PageTree,
    PDFObject,
)
from .paths import sanitize_file_name, unique_path

logger = logging.getLogger(__name__)

Pair = Tuple[float, float]

_document_ids = itertools.count(1)


class PDFDocument:
    """In-memory document built up by the caller and written by :meth:`finalize`."""

    def __init__(self, path: Optional[str | Path] = None, name: Optional[str] = None):
        self.path = Path(path) if path is not None else None
        self.name = name
        self.id = next(_document_ids)
        self.objects: List[PDFObject] = []
        self.fonts: List[ObjectRef] = []
        self.images: List[ObjectRef] = []
        self.page_tree = self._add(PageTree())
        self.catalog = self._add(Catalog(pages=self.page_tree))

    @classmethod
    def in_directory(cls, directory: str | Path, name: str) -> "PDFDocument":
        path, resolved_name = unique_path(directory, sanitize_file_name(name))
        return cls(path=path, name=resolved_name)

    # ------------------------------------------------------------------
    # Arena
    # ------------------------------------------------------------------
    def _add(self, obj: PDFObject) -> ObjectRef:
        self.objects.append(obj)
        return ObjectRef(len(self.objects) - 1, obj.kind, owner=self.id)

    def get(self, ref: ObjectRef) -> PDFObject:
        return self.objects[ref.index]

    def _check_owned(self, ref: ObjectRef) -> None:
        if (
            ref.owner != self.id
            or not 0 <= ref.index < len(self.objects)
            or self.objects[ref.index].kind is not ref.kind
        ):
            raise ValueError(f"{ref!r} does not belong to this document")

    @property
    def pages(self) -> List[ObjectRef]:
        return self.get(self.page_tree).kids

    @property
    def page_count(self) -> int:
        return len(self.pages)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def create_font(self, alias: str, base_font: str) -> ObjectRef:
        ref = self._add(Font(alias=alias, base_font=base_font))
        self.fonts.append(ref)
        return ref

    def create_image(
        self,
        name: str,
        data: bytes,
        width: int,
        height: int,
        scale: Pair,
        translation: Pair = (0, 0),
    ) -> ObjectRef:
        """Register a JPEG image and the stream that paints it.

        *width* and *height* are the pixel dimensions of *data*; they are
        trusted as given.  Returns the paint stream handle to pass to
        :meth:`create_page`.
        """

        scale, translation = tuple(scale), tuple(translation)
        if not all(math.isfinite(value) for value in scale + translation):
            raise ValueError(f"Image '{name}' needs finite scale and translation, got {scale} and {translation}")
        xobject = self._add(ImageXObject(name=name, width=int(width), height=int(height), data=bytes(data)))
        paint = self._add(ImagePaintStream(xobject=xobject, scale=scale, translation=translation))
        self.images.append(paint)
        return paint

    def create_base64_jpeg(self, name: str, base64_jpeg: str, scale: Pair, translation: Pair = (0, 0)) -> ObjectRef:
        try:
            data = base64.b64decode(base64_jpeg, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Image '{name}' is not valid Base64: {exc}") from exc
        parsed = parse_jpeg(data)
        return self.create_image(name, data, parsed.width, parsed.height, scale, translation)

    def create_image_from_file(
        self, name: str, path: str | Path, scale: Pair, translation: Pair = (0, 0)
    ) -> ObjectRef:
        with open(path, "rb") as handle:
            data = handle.read()
        parsed = parse_jpeg(data)
        return self.create_image(name, data, parsed.width, parsed.height, scale, translation)

    def create_page(self, resources: Iterable[ObjectRef] = ()) -> io.StringIO:
        """Add a page using *resources* and return its content buffer.

        Fonts become ``/Font`` resources.  Images become ``/XObject``
        resources and their paint streams are appended to the page contents
        after the page's own content stream.
        """

        resources = list(resources)
        for ref in resources:
            self._check_owned(ref)
        content = ContentStream()
        content_ref = self._add(content)
        page = Page(parent=self.page_tree, contents=[content_ref])
        for ref in resources:
            if ref.kind is ObjectKind.FONT:
                page.fonts.append(ref)
            elif ref.kind is ObjectKind.IMAGE_PAINT_STREAM:
                page.xobjects.append(self.get(ref).xobject)
                page.contents.append(ref)
            else:
                raise TypeError(f"{ref.kind.value} objects cannot be used as page resources")
        self.pages.append(self._add(page))
        return content.buffer

    # ------------------------------------------------------------------
    # Numbering
    # ------------------------------------------------------------------
    def traversal_order(self) -> Iterator[ObjectRef]:
        """Yield every object in the order it is numbered and written."""

        yield self.catalog
        yield self.page_tree
        for page_ref in self.pages:
            yield page_ref
            for content_ref in self.get(page_ref).contents:
                if content_ref.kind is ObjectKind.CONTENT_STREAM:
                    yield content_ref
        yield from self.fonts
        for paint_ref in self.images:
            yield paint_ref
            yield self.get(paint_ref).xobject

    def assign_numbers(self) -> Numbering:
        numbers = {}
        for number, ref in enumerate(self.traversal_order(), start=1):
            if ref.index in numbers:
                raise SimplePDFError(f"{ref.kind.value} object reached twice while numbering")
            numbers[ref.index] = number
        logger.debug("assigned %d object numbers", len(numbers))
        return Numbering(self.objects, numbers)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def finalize(self, path: Optional[str | Path] = None) -> Path:
        from .storage import save_pdf

        target = path if path is not None else self.path
        if target is None:
            raise SimplePDFError("No output path specified")
        return save_pdf(self, target)


__all__ = ["PDFDocument"]
