from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from pagereader.blocks import parse_blocks
from pagereader.dispatch import FORMATS, OutputFormat, normalize_format, render
from pagereader.errors import PageReaderConfigError, PageReaderError, PageReaderInputError
from pagereader.inline import parse_spans
from pagereader.json_tree import render_json
from pagereader.plain import render_plain
from pagereader.sanitize import sanitize_html


def _package_version() -> str:
    try:
        return version("pagereader")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "FORMATS",
    "OutputFormat",
    "PageReaderConfigError",
    "PageReaderError",
    "PageReaderInputError",
    "__version__",
    "normalize_format",
    "parse_blocks",
    "parse_spans",
    "render",
    "render_json",
    "render_plain",
    "sanitize_html",
]
