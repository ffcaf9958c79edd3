"""publish-side HTML cleanup for model output and scraped markup."""

import re

DEFAULT_ALT_TEXT = "Article image"

SCRIPT_STYLE_PATTERN = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)
# attribute text may hold '>' inside quoted values
IMG_PATTERN = re.compile(
    r"<img\b((?:\"[^\"]*\"|'[^']*'|[^'\">])*?)(\s*/)?>", re.IGNORECASE
)
ANCHOR_PATTERN = re.compile(r"<a\b((?:\"[^\"]*\"|'[^']*'|[^'\">])*)>", re.IGNORECASE)
ATTR_PATTERN = re.compile(r"([^\s=/>]+)(?:\s*=\s*(\"[^\"]*\"|'[^']*'|[^\s>]+))?")


def parse_attributes(attrs: str) -> dict[str, str]:
    """
    tokenizes a tag's attribute text into a name to value map.

    Names are lowercased; quoted values are unquoted. Values are never
    scanned for names, so `title="no alt here"` only yields `title`.

    Args:
        attrs: text between the tag name and the closing bracket

    Returns:
        dict of attribute names to values ("" for bare attributes)
    """
    parsed: dict[str, str] = {}
    for match in ATTR_PATTERN.finditer(attrs):
        value = match.group(2) or ""
        if value[:1] in ("'", '"'):
            value = value[1:-1]
        parsed.setdefault(match.group(1).lower(), value)
    return parsed


def has_attribute(attrs: str, name: str) -> bool:
    """checks for a whole attribute name in a tag's attribute text."""
    return name.lower() in parse_attributes(attrs)


def sanitize_for_publish(html: str, alt_text: str = DEFAULT_ALT_TEXT) -> str:
    """
    strips scripts and styles and normalizes media and link attributes.

    Attributes are only added when absent, so running this on its own
    output changes nothing.

    Args:
        html: full document or fragment HTML
        alt_text: alt text for images that have none

    Returns:
        sanitized HTML
    """
    html = SCRIPT_STYLE_PATTERN.sub("", html)

    def fix_image(match: re.Match[str]) -> str:
        attrs = match.group(1)
        closing = match.group(2) or ""
        names = parse_attributes(attrs)
        if "alt" not in names:
            attrs += f' alt="{alt_text}"'
        if "loading" not in names:
            attrs += ' loading="lazy"'
        return f"<img{attrs}{closing}>"

    def fix_anchor(match: re.Match[str]) -> str:
        attrs = match.group(1)
        names = parse_attributes(attrs)
        href = names.get("href")
        # same-page anchors keep default navigation
        if href is None or "target" in names or href.startswith("#"):
            return match.group(0)
        attrs += ' target="_blank"'
        if "rel" not in names:
            attrs += ' rel="noopener noreferrer"'
        return f"<a{attrs}>"

    html = IMG_PATTERN.sub(fix_image, html)
    return ANCHOR_PATTERN.sub(fix_anchor, html)
