"""tests for line classification into blocks."""

from articlehtml.core.models import Heading, ListBlock, ListKind, Paragraph
from articlehtml.core.parser import looks_like_heading, parse_blocks


def test_parses_explicit_heading_levels() -> None:
    """number of leading # sets the heading level."""
    blocks = parse_blocks("# One\n### Three\n###### Six")

    assert blocks == [
        Heading(level=1, text="One"),
        Heading(level=3, text="Three"),
        Heading(level=6, text="Six"),
    ]


def test_seven_hashes_is_a_paragraph() -> None:
    """more than six # is not a heading."""
    assert parse_blocks("####### seven") == [Paragraph(text="####### seven")]


def test_groups_consecutive_items_of_same_kind() -> None:
    """consecutive items of one kind form a single list."""
    blocks = parse_blocks("1. a\n2. b\n- c")

    assert blocks == [
        ListBlock(kind=ListKind.NUMBERED, items=("a", "b")),
        ListBlock(kind=ListKind.BULLET, items=("c",)),
    ]


def test_no_list_item_dropped_or_duplicated() -> None:
    """every item lands in exactly one flushed list."""
    text = "* a\n* b\n\n1. c\n- d\nplain text\n2. e"

    blocks = parse_blocks(text)
    items = [item for b in blocks if isinstance(b, ListBlock) for item in b.items]

    assert items == ["a", "b", "c", "d", "e"]
    assert len([b for b in blocks if isinstance(b, ListBlock)]) == 4


def test_heuristic_heading_before_non_blank_line() -> None:
    """short capitalized line followed by text becomes h2."""
    blocks = parse_blocks("Overview\nthe details follow.")

    assert blocks == [Heading(level=2, text="Overview"), Paragraph(text="the details follow.")]


def test_list_items_are_inline_formatted() -> None:
    """item text goes through the inline formatter."""
    blocks = parse_blocks("* **Time Constraints:** text")

    assert blocks == [
        ListBlock(
            kind=ListKind.BULLET,
            items=("<strong>Time Constraints:</strong> text",),
        )
    ]


def test_looks_like_heading_rules() -> None:
    """heading heuristic rejects punctuation, markers and last lines."""
    assert looks_like_heading("Why It Matters", "body")
    assert not looks_like_heading("Why it matters.", "body")
    assert not looks_like_heading("Is it done?", "body")
    assert not looks_like_heading("Well-known Facts", "body")
    assert not looks_like_heading("lowercase start", "body")
    assert not looks_like_heading("Why It Matters", None)
    assert not looks_like_heading("Why It Matters", "   ")
    assert not looks_like_heading("A" * 100, "body")


def test_empty_text_has_no_blocks() -> None:
    """empty input produces no blocks."""
    assert parse_blocks("") == []
