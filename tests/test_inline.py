"""tests for inline span formatting."""

from articlehtml.core.inline import format_inline

LINK_ATTRS = 'target="_blank" rel="noopener noreferrer"'


def test_formats_bold_italic_and_link() -> None:
    """applies bold, italic and link rules together."""
    result = format_inline("**bold** and *em* and [x](http://e.com)")

    assert result == (
        "<strong>bold</strong> and <em>em</em> and "
        f'<a href="http://e.com" {LINK_ATTRS}>x</a>'
    )


def test_double_asterisk_is_not_two_italics() -> None:
    """unpaired ** is left alone."""
    assert format_inline("a ** b") == "a ** b"


def test_single_character_italic() -> None:
    """italic wraps single characters."""
    assert format_inline("*a*") == "<em>a</em>"


def test_spaced_asterisks_are_not_italic() -> None:
    """asterisks used as operators stay as text."""
    assert format_inline("2 * 3 * 4") == "2 * 3 * 4"


def test_wraps_bare_url() -> None:
    """plain URLs become links."""
    result = format_inline("see https://example.com/page now")

    assert result == (
        f'see <a href="https://example.com/page" {LINK_ATTRS}>'
        "https://example.com/page</a> now"
    )


def test_existing_anchor_is_not_double_wrapped() -> None:
    """URLs in an existing anchor's href and text stay as they are."""
    html = '<a href="http://e.com">http://e.com</a>'

    assert format_inline(html) == html


def test_markdown_link_with_url_text_wrapped_once() -> None:
    """a link whose text is its URL produces one anchor."""
    result = format_inline("[http://e.com](http://e.com)")

    assert result.count("<a ") == 1
    assert result == f'<a href="http://e.com" {LINK_ATTRS}>http://e.com</a>'


def test_url_after_bold_label() -> None:
    """bare URL next to other tags is still linked."""
    result = format_inline("**Source:** https://e.com")

    assert result == (
        f'<strong>Source:</strong> <a href="https://e.com" {LINK_ATTRS}>https://e.com</a>'
    )


def test_escapes_href() -> None:
    """hrefs are attribute-escaped."""
    result = format_inline("[q](http://e.com/?a=1&b=2)")

    assert 'href="http://e.com/?a=1&amp;b=2"' in result


def test_plain_text_unchanged() -> None:
    """text without markdown spans is returned as is."""
    assert format_inline("nothing to see here.") == "nothing to see here."
