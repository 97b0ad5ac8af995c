"""CLI entrypoint: build a PDF from a JSON layout file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import SimplePDFError
from .layout import document_from_dict, load_layout
from .paths import sanitize_file_name, unique_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simplepdf", description="Build a PDF file from a JSON layout")
    parser.add_argument("layout", type=Path, help="JSON file describing fonts, images and pages")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for the PDF (default: next to the layout)")
    parser.add_argument("--name", default=None, help="File name without extension (default: layout file name)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for per-object detail)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING if not args.verbose else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    output_dir = args.output_dir or args.layout.parent
    name = args.name or args.layout.stem
    try:
        layout = load_layout(args.layout)
        document = document_from_dict(layout, base_dir=args.layout.parent)
        # resolving the path removes an existing file, so the layout must build first
        path, _ = unique_path(output_dir, sanitize_file_name(name))
        path = document.finalize(path)
    except (SimplePDFError, ValueError, KeyError, OSError) as exc:
        message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
        print(f"simplepdf: error: {message}", file=sys.stderr)
        return 1
    print(path)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
