"""Saving raw results to disk (the "download" action)."""

from __future__ import annotations

import time
from pathlib import Path

from pagereader.dispatch import normalize_format
from pagereader.errors import PageReaderInputError

FILENAME_PREFIX = "page-reader-result"


def result_extension(format: str | None) -> str:
    fmt = normalize_format(format)
    if fmt == "json":
        return "json"
    if fmt == "html":
        return "html"
    # Plain text is saved as .md too.
    return "md"


def result_filename(format: str | None, timestamp_ms: int) -> str:
    return f"{FILENAME_PREFIX}-{timestamp_ms}.{result_extension(format)}"


def save_result(
    text: str,
    format: str | None,
    directory: Path,
    *,
    timestamp_ms: int | None = None,
) -> Path:
    """Write `text` unchanged into `directory` and return the new file's path."""

    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    path = directory / result_filename(format, timestamp_ms)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise PageReaderInputError(f"Failed writing result file: {path}") from e
    return path
