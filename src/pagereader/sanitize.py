"""Best-effort textual HTML filter.

This is NOT a security boundary. It strips ``<script>`` elements and quoted
inline event-handler attributes (``onclick="..."``) and nothing else:
``javascript:`` URLs, ``<iframe>``, ``<style>``, unquoted handlers and
anything smuggled through malformed markup pass through untouched. Callers
that inject `Raw` output into a page with script execution rights must
isolate it themselves (sandboxed frame, CSP, or a real allow-list sanitizer).
"""

from __future__ import annotations

import re

# Matches up to the first closing tag, across newlines.
_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_HANDLER_DQ_RE = re.compile(r'\bon\w+="[^"]*"', re.IGNORECASE)
_HANDLER_SQ_RE = re.compile(r"\bon\w+='[^']*'", re.IGNORECASE)


def sanitize_html(html: str) -> str:
    """Remove script elements and quoted ``on*`` handler attributes from `html`."""

    out = _SCRIPT_RE.sub("", html)
    out = _HANDLER_DQ_RE.sub("", out)
    return _HANDLER_SQ_RE.sub("", out)
