"""markdown-ish text to article HTML conversion."""

import re

from articlehtml.core.models import Block, Heading, ListBlock
from articlehtml.core.parser import parse_blocks

EMPTY_PARAGRAPH_PATTERN = re.compile(r"<p>\s*</p>")


def render_block(block: Block) -> str:
    """renders a single block to HTML."""
    if isinstance(block, Heading):
        return f"<h{block.level}>{block.text}</h{block.level}>"
    if isinstance(block, ListBlock):
        tag = block.kind.value
        items = "".join(f"<li>{item}</li>" for item in block.items)
        return f"<{tag}>{items}</{tag}>"
    return f"<p>{block.text}</p>"


def cleanup_html(html: str) -> str:
    """
    removes wrapper artifacts left by converting text that held markup.

    Args:
        html: joined block HTML

    Returns:
        HTML without doubled <p> wrappers or empty paragraphs
    """
    html = html.replace("<p><p>", "<p>")
    html = html.replace("</p></p>", "</p>")
    return EMPTY_PARAGRAPH_PATTERN.sub("", html)


def convert_to_html(text: str) -> str:
    """
    converts markdown-ish or plain text to semantic HTML.

    Lines become headings, bullet/numbered lists or paragraphs; anything
    unrecognized falls back to a paragraph, so conversion never fails.

    Args:
        text: raw text, typically an LLM response or scraped copy

    Returns:
        HTML with one block per line, blocks joined by newlines
    """
    blocks = parse_blocks(text)
    return cleanup_html("\n".join(render_block(block) for block in blocks))
