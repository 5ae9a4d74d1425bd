"""MCP server for pagereader: exposes render/sanitize as MCP tools.

The server uses FastMCP (optional dependency) for the transport layer.
Core tool functions are plain Python and can be tested without FastMCP installed.
"""

from __future__ import annotations

import json

from pagereader.dispatch import normalize_format, render
from pagereader.html_adapter import to_html
from pagereader.nodes import to_dict
from pagereader.sanitize import sanitize_html

# ---------------------------------------------------------------------------
# Core tool functions (no FastMCP dependency)
# ---------------------------------------------------------------------------


def tool_render(text: str, *, format: str | None = None, view: str = "tree") -> str:
    """Render text and return a JSON envelope.

    `view` is ``"tree"`` (node dicts under ``"nodes"``) or ``"html"`` (an HTML
    fragment under ``"html"``).
    """
    if view not in ("tree", "html"):
        return json.dumps(
            {"command": "render", "ok": False, "error": f"unsupported view: {view!r}"}
        )

    fmt = normalize_format(format)
    nodes = render(text, fmt)
    payload: dict[str, object] = {"command": "render", "ok": True, "format": fmt}
    if view == "html":
        payload["html"] = to_html(nodes)
    else:
        payload["nodes"] = [to_dict(n) for n in nodes]
    return json.dumps(payload, ensure_ascii=False)


def tool_sanitize(html: str) -> str:
    """Strip script elements and inline event handlers from HTML."""
    return json.dumps({"command": "sanitize", "ok": True, "html": sanitize_html(html)})


# ---------------------------------------------------------------------------
# FastMCP server factory
# ---------------------------------------------------------------------------


def create_mcp_server():
    """Create and return a FastMCP server with pagereader tools registered.

    Raises ImportError if fastmcp is not installed.
    """
    from fastmcp import FastMCP

    mcp = FastMCP("pagereader", instructions="Render AI-generated text as readable documents")

    @mcp.tool()
    def pagereader_render(text: str, format: str = "markdown", view: str = "tree") -> str:
        """Render text as a document.

        `format` is one of markdown, html, json, plain (unknown values fall
        back to markdown). `view` is "tree" for the node tree or "html" for an
        HTML fragment. Returns JSON.
        """
        return tool_render(text, format=format, view=view)

    @mcp.tool()
    def pagereader_sanitize(html: str) -> str:
        """Remove <script> elements and quoted on* handler attributes.

        Best-effort only; this is not a full HTML sanitizer. Returns JSON.
        """
        return tool_sanitize(html)

    return mcp


def run_server() -> None:
    """Entry point: create and run the MCP server (stdio transport)."""
    mcp = create_mcp_server()
    mcp.run()
