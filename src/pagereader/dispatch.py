"""Format dispatch: the single place that picks a renderer for a text blob."""

from __future__ import annotations

import logging
from typing import Literal, cast

from pagereader.blocks import parse_blocks
from pagereader.json_tree import render_json
from pagereader.nodes import Raw, RenderNode
from pagereader.plain import render_plain
from pagereader.sanitize import sanitize_html

logger = logging.getLogger("pagereader.dispatch")

OutputFormat = Literal["markdown", "html", "json", "plain"]

FORMATS: tuple[OutputFormat, ...] = ("markdown", "html", "json", "plain")
DEFAULT_FORMAT: OutputFormat = "markdown"


def normalize_format(value: object) -> OutputFormat:
    """Map any discriminator to a known format; unknown or missing means markdown."""

    if isinstance(value, str):
        v = value.strip().lower()
        if v in FORMATS:
            return cast(OutputFormat, v)
    return DEFAULT_FORMAT


def render(text: str, format: str | None = DEFAULT_FORMAT) -> list[RenderNode]:
    """Render `text` into document nodes according to `format`."""

    fmt = normalize_format(format)
    logger.debug("rendering %d chars as %s", len(text), fmt)

    if fmt == "html":
        return [Raw(sanitize_html(text))]
    if fmt == "json":
        return [render_json(text)]
    if fmt == "plain":
        return render_plain(text)
    return parse_blocks(text)
