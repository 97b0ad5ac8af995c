"""Output file naming helpers."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Tuple

logger = logging.getLogger(__name__)

INVALID_FILE_NAME_CHARS = '<>:"/\\|?*' + "".join(chr(code) for code in range(32))

_INVALID = re.escape(INVALID_FILE_NAME_CHARS)
_INVALID_PATTERN = re.compile(rf"([{_INVALID}]*\.+$)|([{_INVALID}]+)")


def sanitize_file_name(name: str) -> str:
    """Replace runs of characters not allowed in file names, and trailing dots, with ``_``."""

    return _INVALID_PATTERN.sub("_", name)


def unique_path(directory: str | Path, name: str) -> Tuple[Path, str]:
    """Return ``(path, name)`` for ``directory/name.pdf``.

    A file already at that path is removed.  When it cannot be removed the
    name gets a ``_2``, ``_3``, ... suffix until a free or removable path is
    found.
    """

    base_name = name
    count = 1
    path = Path(directory) / f"{name}.pdf"
    while path.exists():
        try:
            path.unlink()
        except OSError as exc:
            count += 1
            name = f"{base_name}_{count}"
            new_path = Path(directory) / f"{name}.pdf"
            logger.warning("Unable to remove %s (%s), writing to %s instead", path, exc, new_path)
            path = new_path
        else:
            logger.debug("Removed existing file %s", path)
    return path, name


__all__ = ["sanitize_file_name", "unique_path"]
