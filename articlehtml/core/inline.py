"""Inline span formatting (bold, italic, links) for single lines of text."""

import html as html_lib
import re

BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
ITALIC_PATTERN = re.compile(r"(?<!\*)\*([^*\s](?:[^*]*[^*\s])?)\*(?!\*)")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
BARE_URL_PATTERN = re.compile(r"https?://[^\s<>\"']+")

# existing anchors (with their text) and any other tag are left untouched
MARKUP_PATTERN = re.compile(r"(<a\b[^>]*>.*?</a\s*>|<[^>]+>)", re.IGNORECASE | re.DOTALL)


def anchor(href: str, text: str) -> str:
    """builds a link that opens in a new tab without leaking the opener."""
    escaped_href = html_lib.escape(href)
    return f'<a href="{escaped_href}" target="_blank" rel="noopener noreferrer">{text}</a>'


def _link_bare_urls(text: str) -> str:
    """wraps URLs found in text segments only, never inside markup."""
    segments = MARKUP_PATTERN.split(text)
    # split() with a capturing group puts markup at odd indexes
    return "".join(
        segment
        if i % 2
        else BARE_URL_PATTERN.sub(lambda m: anchor(m.group(0), m.group(0)), segment)
        for i, segment in enumerate(segments)
    )


def format_inline(text: str) -> str:
    """
    converts inline markdown spans to HTML.

    Rules apply in order: bold, italic, explicit links, bare URLs. Bold runs
    first so that `**` is never read as two italic markers.

    Args:
        text: a single line or fragment of text

    Returns:
        text with inline spans converted to tags
    """
    formatted = BOLD_PATTERN.sub(r"<strong>\1</strong>", text)
    formatted = ITALIC_PATTERN.sub(r"<em>\1</em>", formatted)
    formatted = LINK_PATTERN.sub(lambda m: anchor(m.group(2), m.group(1)), formatted)
    return _link_bare_urls(formatted)
