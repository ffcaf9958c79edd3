"""tests for text to HTML conversion."""

from articlehtml.converter import cleanup_html, convert_to_html


def test_converts_markdown_headings() -> None:
    """# syntax becomes h1-h6."""
    assert convert_to_html("# Title") == "<h1>Title</h1>"
    assert convert_to_html("###### Sub") == "<h6>Sub</h6>"


def test_plain_lines_become_paragraphs() -> None:
    """each plain line is wrapped in exactly one paragraph."""
    text = "the first line.\nanother line here.\nlast one"

    result = convert_to_html(text)

    assert result == "<p>the first line.</p>\n<p>another line here.</p>\n<p>last one</p>"
    assert result.count("<p>") == 3


def test_blank_line_flushes_list() -> None:
    """a blank line closes the list before the next paragraph."""
    result = convert_to_html("* one\n* two\n\nNext")

    assert result == "<ul><li>one</li><li>two</li></ul>\n<p>Next</p>"


def test_list_kind_switch_starts_new_list() -> None:
    """switching between numbered and bullet items flushes the open list."""
    result = convert_to_html("1. a\n* b")

    assert result == "<ol><li>a</li></ol>\n<ul><li>b</li></ul>"


def test_all_bullet_markers() -> None:
    """*, - and • all start bullet items."""
    result = convert_to_html("• dot\n- dash\n* star")

    assert result == "<ul><li>dot</li><li>dash</li><li>star</li></ul>"


def test_heading_closes_list() -> None:
    """an explicit heading between items splits the list."""
    result = convert_to_html("- a\n## Next\n- b")

    assert result == "<ul><li>a</li></ul>\n<h2>Next</h2>\n<ul><li>b</li></ul>"


def test_paragraph_closes_list() -> None:
    """a plain line between items splits the list."""
    result = convert_to_html("- a\nplain text\n- b")

    assert result == "<ul><li>a</li></ul>\n<p>plain text</p>\n<ul><li>b</li></ul>"


def test_heuristic_heading() -> None:
    """short capitalized line followed by text becomes h2."""
    result = convert_to_html("Getting Started\nSome text here.")

    assert result == "<h2>Getting Started</h2>\n<p>Some text here.</p>"


def test_heuristic_heading_needs_following_text() -> None:
    """heading-shaped last line or line before a blank stays a paragraph."""
    assert convert_to_html("Getting Started") == "<p>Getting Started</p>"
    assert convert_to_html("Getting Started\n\nBody.") == (
        "<p>Getting Started</p>\n<p>Body.</p>"
    )


def test_hyphenated_line_is_not_heading() -> None:
    """a dash anywhere rules out the heading heuristic."""
    result = convert_to_html("Well-known Facts\nBody.")

    assert result == "<p>Well-known Facts</p>\n<p>Body.</p>"


def test_formats_inline_spans_in_paragraphs() -> None:
    """paragraph text goes through the inline formatter."""
    result = convert_to_html("this is **bold** text.")

    assert result == "<p>this is <strong>bold</strong> text.</p>"


def test_collapses_double_wrapped_paragraphs() -> None:
    """lines already wrapped in <p> are not wrapped twice."""
    assert convert_to_html("<p>already wrapped</p>") == "<p>already wrapped</p>"


def test_strips_crlf_line_endings() -> None:
    """carriage returns do not leak into output."""
    result = convert_to_html("first line.\r\nsecond line.\r\n")

    assert result == "<p>first line.</p>\n<p>second line.</p>"


def test_empty_input() -> None:
    """empty and whitespace-only input yields empty output."""
    assert convert_to_html("") == ""
    assert convert_to_html("\n  \n") == ""


def test_cleanup_removes_empty_paragraphs() -> None:
    """cleanup drops paragraphs holding only whitespace."""
    assert cleanup_html("<p> </p>\n<p>x</p>") == "\n<p>x</p>"
