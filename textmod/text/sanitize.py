"""HTML sanitization for user-authored listing text.

Listing sections are rendered as HTML by the front end, so anything that
could execute is removed before the remaining text is escaped.
"""

from __future__ import annotations

import html
import re

_DANGEROUS_BLOCKS = re.compile(
    r"<(script|iframe|object|embed|form|style)\b[^>]*>[\s\S]*?</\1\s*>",
    re.IGNORECASE,
)
_DANGEROUS_OPEN_TAGS = re.compile(r"<\s*/?\s*(script|iframe|object|embed|form|style)\b[^>]*>", re.IGNORECASE)
_EVENT_HANDLERS = re.compile(r"""\s+on\w+\s*=\s*("[^"]*"|'[^']*'|[^\s>]+)""", re.IGNORECASE)
_JS_URIS = re.compile(
    r"""\s+(href|src|data|action)\s*=\s*("\s*javascript:[^"]*"|'\s*javascript:[^']*'|javascript:[^\s>]*)""",
    re.IGNORECASE,
)


def sanitize_content(content: str) -> str:
    """Strip executable markup from *content* and HTML-escape the rest."""
    if not content:
        return ""

    sanitized = _DANGEROUS_BLOCKS.sub("", content)
    # Unclosed dangerous tags survive the block pass.
    sanitized = _DANGEROUS_OPEN_TAGS.sub("", sanitized)
    sanitized = _EVENT_HANDLERS.sub("", sanitized)
    sanitized = _JS_URIS.sub("", sanitized)

    return html.escape(sanitized, quote=True)
