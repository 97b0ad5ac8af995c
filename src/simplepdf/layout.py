"""Build documents from JSON layout descriptions."""

from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path
from typing import Dict, Optional, Tuple

from .document import PDFDocument
from .jpeg import parse_jpeg
from .objects import ObjectRef


def _pair(value: object, default: Tuple[float, float]) -> Tuple[float, float]:
    if value is None:
        return default
    first, second = value
    return float(first), float(second)


def _image_bytes(image: Dict[str, object], base_dir: Path) -> bytes:
    if "file" in image:
        return (base_dir / str(image["file"])).read_bytes()
    if "base64" in image:
        try:
            return base64.b64decode(str(image["base64"]), validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Image '{image['name']}' is not valid Base64: {exc}") from exc
    raise ValueError(f"Image '{image['name']}' needs a 'file' or 'base64' entry")


def load_layout(path: str | Path) -> Dict[str, object]:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def document_from_dict(
    data: Dict[str, object],
    document: Optional[PDFDocument] = None,
    base_dir: str | Path = ".",
) -> PDFDocument:
    """Populate *document* (a new one by default) from a layout mapping.

    Pages name their resources by font alias or image name.  Images come
    from ``file`` (relative to *base_dir*) or ``base64``; an explicit
    ``width`` and ``height`` skips reading them from the JPEG header, and
    a missing ``scale`` paints the image at one point per pixel.
    """

    document = document if document is not None else PDFDocument()
    resources: Dict[str, ObjectRef] = {}

    for font in data.get("fonts", []):
        alias = str(font["alias"])
        resources[alias] = document.create_font(alias, str(font.get("base_font", "Helvetica")))

    for image in data.get("images", []):
        name = str(image["name"])
        payload = _image_bytes(image, Path(base_dir))
        if "width" in image and "height" in image:
            width, height = int(image["width"]), int(image["height"])
        else:
            parsed = parse_jpeg(payload)
            width, height = parsed.width, parsed.height
        resources[name] = document.create_image(
            name,
            payload,
            width,
            height,
            scale=_pair(image.get("scale"), (width, height)),
            translation=_pair(image.get("translation"), (0, 0)),
        )

    for page in data.get("pages", []):
        refs = []
        for resource in page.get("resources", []):
            if resource not in resources:
                raise KeyError(f"Unknown page resource '{resource}'")
            refs.append(resources[resource])
        buffer = document.create_page(refs)
        buffer.write(str(page.get("content", "")))

    return document


__all__ = ["document_from_dict", "load_layout"]
