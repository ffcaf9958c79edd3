"""display-side cleanup of stored article HTML before it is rendered."""

import logging
import re
from typing import Any, Optional

from bs4 import BeautifulSoup, FeatureNotFound

from articlehtml.sanitizers.publish import DEFAULT_ALT_TEXT

logger = logging.getLogger(__name__)

DEFAULT_PARSER = "html.parser"
RESPONSIVE_STYLE = "max-width: 100%; height: auto;"
FIGURE_MARGIN = "margin: 1.5rem 0;"
FONT_SIZE_LIMIT_PX = 100
CLAMPED_FONT_SIZE = "2rem"

HIDDEN_STYLE_PATTERN = re.compile(
    r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE
)
FONT_SIZE_PATTERN = re.compile(r"font-size:\s*(\d+)px", re.IGNORECASE)


def _responsive_style(style: str) -> str:
    """prefixes the responsive sizing rules unless max-width is already set."""
    if "max-width" in style:
        return style
    return f"{RESPONSIVE_STYLE} {style}".strip()


def _has_attr_ignore_case(tag: Any, name: str) -> bool:
    """checks attributes case-insensitively (html.parser lowercases names)."""
    wanted = name.lower()
    return any(attr.lower() == wanted for attr in tag.attrs)


class DisplaySanitizer:
    """cleans untrusted stored HTML for display."""

    def __init__(
        self, parser: str = DEFAULT_PARSER, alt_text: str = DEFAULT_ALT_TEXT
    ) -> None:
        self.parser = parser
        self.alt_text = alt_text
        self.available = self._probe_parser()

    def _probe_parser(self) -> bool:
        """checks once whether the configured tree builder is installed."""
        try:
            BeautifulSoup("", self.parser)
        except FeatureNotFound:
            logger.warning(
                "HTML tree builder %r unavailable, display sanitizing disabled",
                self.parser,
            )
            return False
        return True

    def _parse(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html, self.parser)

    def _serialize(self, soup: BeautifulSoup) -> str:
        """returns the fragment markup, unwrapping parser-added html/body."""
        if soup.body is not None:
            return "".join(str(child) for child in soup.body.contents)
        return str(soup)

    def _remove_hidden(self, soup: BeautifulSoup) -> None:
        for tag in soup.find_all(["script", "style", "noscript"]):
            if not tag.decomposed:
                tag.decompose()

        for tag in soup.find_all(style=True):
            if not tag.decomposed and HIDDEN_STYLE_PATTERN.search(tag["style"]):
                tag.decompose()

    def _fix_images(self, soup: BeautifulSoup) -> None:
        for img in soup.find_all("img"):
            img["style"] = _responsive_style(img.get("style", ""))
            if not img.has_attr("loading"):
                img["loading"] = "lazy"
            if not img.has_attr("alt"):
                img["alt"] = self.alt_text

    def _fix_svgs(self, soup: BeautifulSoup) -> None:
        for svg in soup.find_all("svg"):
            svg["style"] = _responsive_style(svg.get("style", ""))
            if (
                not _has_attr_ignore_case(svg, "viewBox")
                and svg.has_attr("width")
                and svg.has_attr("height")
            ):
                svg["viewBox"] = f"0 0 {svg['width']} {svg['height']}"

    def _fix_figures(self, soup: BeautifulSoup) -> None:
        for figure in soup.find_all("figure"):
            if not figure.has_attr("style"):
                figure["style"] = FIGURE_MARGIN

    def _remove_empty(self, soup: BeautifulSoup) -> None:
        # emptiness is judged once, so wrappers emptied here are kept
        for tag in soup.find_all(["div", "span"]):
            if tag.contents or tag.get("class") or tag.get("id"):
                continue
            tag.decompose()

    def _clamp_font_sizes(self, soup: BeautifulSoup) -> None:
        for tag in soup.find_all(style=True):
            style = tag["style"]
            match = FONT_SIZE_PATTERN.search(style)
            if match and int(match.group(1)) > FONT_SIZE_LIMIT_PX:
                tag["style"] = FONT_SIZE_PATTERN.sub(
                    f"font-size: {CLAMPED_FONT_SIZE}", style, count=1
                )

    def sanitize(self, html: Optional[str]) -> str:
        """
        removes hidden and unsafe elements and makes media responsive.

        Args:
            html: stored article HTML

        Returns:
            cleaned HTML, or the input unchanged when no tree builder exists
        """
        if not html:
            return ""
        if not self.available:
            return html

        soup = self._parse(html)
        self._remove_hidden(soup)
        self._fix_images(soup)
        self._fix_svgs(soup)
        self._fix_figures(soup)
        self._remove_empty(soup)
        self._clamp_font_sizes(soup)
        return self._serialize(soup)

    def extract_text(self, html: Optional[str]) -> str:
        """returns the text content of html for previews."""
        if not html:
            return ""
        if not self.available:
            return html
        return str(self._parse(html).get_text())


# probed once at import
default_sanitizer = DisplaySanitizer()


def sanitize_for_display(html: Optional[str]) -> str:
    """sanitizes html with the default display sanitizer."""
    return default_sanitizer.sanitize(html)


def extract_text(html: Optional[str]) -> str:
    """extracts preview text with the default display sanitizer."""
    return default_sanitizer.extract_text(html)
