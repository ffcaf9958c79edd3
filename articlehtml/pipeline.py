"""Post-processing of LLM rewrites into publishable article HTML."""

import logging
import re
from typing import Any, Optional

from articlehtml.converter import convert_to_html
from articlehtml.core.models import Article
from articlehtml.sanitizers.publish import sanitize_for_publish

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"<[^>]+>")
LEADING_TAG_PATTERN = re.compile(r"^<[a-z]", re.IGNORECASE)
TITLE_PATTERN = re.compile(r"TITLE:\s*(.+?)(?:\n|CONTENT:)", re.IGNORECASE)
CONTENT_PATTERN = re.compile(r"CONTENT:\s*([\s\S]+)", re.IGNORECASE)
TITLE_LINE_PATTERN = re.compile(r"TITLE:\s*.+?\n", re.IGNORECASE)

MEDIA_MARKERS = ("<img", "<svg", "<figure")

PROMPT_TEMPLATE = """You are an expert content writer who improves articles while maintaining their core message.

Rewrite the original article below to match the style, formatting and quality of the reference articles.

Original Article:
Title: {title}

Content:
{content}

{references}

Requirements:
- Return the content as HTML, not markdown.
- Use <h2> for sections and <h3> for subsections, wrap paragraphs in <p>.
- Use <ul><li> for bullet lists and <ol><li> for numbered lists.
- Use <strong> and <em> for emphasis.
- Write links as <a href="url" target="_blank" rel="noopener noreferrer">text</a>.
- Keep the facts and roughly the length of the original.
{media}
Format the response exactly as:
TITLE: [enhanced title]
CONTENT: [enhanced content in HTML]"""

MEDIA_INSTRUCTIONS = """- Preserve all images, SVGs and figures, including their src attributes.
"""


class EnhancementResponseError(ValueError):
    """raised when an LLM completion payload has no usable content."""


def has_html(text: str) -> bool:
    """checks whether text contains any tag."""
    return TAG_PATTERN.search(text) is not None


def has_media(text: str) -> bool:
    """checks whether text carries HTML or embedded media."""
    return has_html(text) or any(marker in text for marker in MEDIA_MARKERS)


def has_block_markup(html: str) -> bool:
    """checks for paragraph or heading markup."""
    return "<p>" in html or "<h" in html


def finalize_content(text: str) -> str:
    """
    turns model output into sanitized article HTML.

    Plain text goes through the converter first; HTML is sanitized as is.
    Text mixed with markup, or output without paragraph or heading markup,
    gets an extra converter pass.

    Args:
        text: model output, either HTML or markdown-ish text

    Returns:
        sanitized HTML
    """
    if has_html(text):
        logger.debug("Content already holds HTML, sanitizing only")
        content = text
    else:
        logger.info("Plain text content, converting to HTML")
        content = convert_to_html(text)

    content = sanitize_for_publish(content)

    if not LEADING_TAG_PATTERN.match(content.strip()):
        logger.debug("Content starts with bare text, converting mixed content")
        content = convert_to_html(content)

    if not has_block_markup(content):
        logger.warning("No paragraph or heading markup found, forcing conversion")
        content = convert_to_html(content)

    return content


def extract_completion_text(payload: Any) -> str:
    """
    extracts the message text from a chat completion response.

    Args:
        payload: decoded JSON body of the completion response

    Returns:
        content of the first choice's message

    Raises:
        EnhancementResponseError: if the payload has no choices or content
    """
    choices = payload.get("choices") if isinstance(payload, dict) else None
    if not isinstance(choices, list) or not choices:
        raise EnhancementResponseError(f"Invalid API response structure: {payload!r}")

    choice = choices[0]
    message = choice.get("message") if isinstance(choice, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not content or not isinstance(content, str):
        raise EnhancementResponseError(
            f"Invalid API response: missing content in choices[0].message: {payload!r}"
        )
    return content


def split_title_content(response_text: str, fallback_title: str) -> tuple[str, str]:
    """
    splits a `TITLE: ... CONTENT: ...` response.

    Args:
        response_text: raw model response
        fallback_title: title to keep when the response has none

    Returns:
        (title, content) tuple
    """
    title_match = TITLE_PATTERN.search(response_text)
    content_match = CONTENT_PATTERN.search(response_text)

    title = title_match.group(1).strip() if title_match else fallback_title

    if content_match:
        return title, content_match.group(1).strip()

    if title_match:
        # no CONTENT marker: everything after the title line
        parts = TITLE_LINE_PATTERN.split(response_text)
        if len(parts) > 1:
            return title, "".join(parts[1:]).strip()

    return title, response_text


def enhance_article(
    original: Article, payload: Any, reference_urls: Optional[list[str]] = None
) -> Article:
    """
    builds the enhanced article from a completion payload.

    Args:
        original: article that was rewritten
        payload: decoded chat completion response
        reference_urls: URLs the rewrite was based on, cited at the end

    Returns:
        new article linked to the original, with sanitized HTML content

    Raises:
        EnhancementResponseError: if the payload has no usable content
    """
    response_text = extract_completion_text(payload)
    title, content = split_title_content(response_text, original.title)
    urls = list(reference_urls or [])
    return Article(
        title=title,
        content=append_citations(finalize_content(content), urls),
        original_id=original.id,
        reference_urls=urls,
    )


def build_enhancement_prompt(original: Article, references: list[Article]) -> str:
    """assembles the rewrite prompt from the original and reference articles."""
    reference_text = "\n\n---\n\n".join(
        f"Reference Article {i}:\nTitle: {ref.title}\n\nContent:\n{ref.content}"
        for i, ref in enumerate(references, start=1)
    )
    return PROMPT_TEMPLATE.format(
        title=original.title,
        content=original.content,
        references=reference_text,
        media=MEDIA_INSTRUCTIONS if has_media(original.content) else "",
    )


def append_citations(content: str, reference_urls: list[str]) -> str:
    """
    appends a numbered list of reference links to article HTML.

    Args:
        content: article HTML
        reference_urls: URLs of the reference articles

    Returns:
        content followed by a references section, or content unchanged
    """
    if not reference_urls:
        return content

    lines = ["**References:**"]
    lines.extend(f"{i}. {url}" for i, url in enumerate(reference_urls, start=1))
    references = convert_to_html("\n".join(lines))
    return f"{content}\n<hr>\n{references}"
