"""Error formatting and actionable hints for CLI output.

Keep this module small and dependency-light: it is imported by the CLI layer
and only depends on the error hierarchy.
"""

from __future__ import annotations

from pagereader.errors import PageReaderConfigError, PageReaderInputError


def format_hint(exc: BaseException) -> str | None:
    """Return an actionable hint for a known error, or None."""
    msg = str(exc)

    if isinstance(exc, PageReaderConfigError):
        if "pagereader.toml" in msg and "find" in msg.lower():
            return "create a pagereader.toml containing `version = 1`, or pass --config"
        if "render.format" in msg:
            return "use one of: markdown, html, json, plain"
        if "output.view" in msg:
            return "use one of: html, page, tree, raw"
        return None

    if isinstance(exc, PageReaderInputError):
        if "writing" in msg.lower():
            return "check that the output directory exists and is writable"
        return "check that the input file exists, or pass `-` to read from stdin"

    if isinstance(exc, ImportError):
        if "watchfiles" in msg:
            return "install the watch extra: pip install pagereader[watch]"
        if "fastmcp" in msg:
            return "install the mcp extra: pip install pagereader[mcp]"

    return None


def format_error_with_hint(exc: BaseException) -> str:
    """Format error message + optional hint for stderr output."""
    msg = (str(exc) or repr(exc)).strip()

    result = f"error: {msg}"
    hint = format_hint(exc)
    if hint:
        result += f"\nhint: {hint}"
    return result
