"""Line classifier turning markdown-ish text into blocks."""

import re
from functools import reduce
from typing import NamedTuple, Optional

from articlehtml.core.inline import format_inline
from articlehtml.core.models import Block, Heading, ListBlock, ListKind, Paragraph

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
BULLET_PATTERN = re.compile(r"^[*\-•]\s+(.+)$")
NUMBERED_PATTERN = re.compile(r"^\d+\.\s+(.+)$")
HEADING_SHAPE_PATTERN = re.compile(r"^[A-Z][^.!?]*$")
LIST_START_PATTERN = re.compile(r"^[*\-•\d]")

HEURISTIC_HEADING_MAX_LENGTH = 100
HEURISTIC_HEADING_LEVEL = 2


class _FoldState(NamedTuple):
    """blocks emitted so far plus the list still accumulating items."""

    blocks: tuple[Block, ...] = ()
    pending: Optional[ListBlock] = None

    def flush(self) -> "_FoldState":
        """closes the pending list, if any."""
        if self.pending is None or not self.pending.items:
            return _FoldState(self.blocks, None)
        return _FoldState(self.blocks + (self.pending,), None)

    def emit(self, block: Block) -> "_FoldState":
        """closes the pending list and emits block after it."""
        flushed = self.flush()
        return _FoldState(flushed.blocks + (block,), None)

    def add_item(self, kind: ListKind, item: str) -> "_FoldState":
        """adds a list item, reopening the list when the kind changes."""
        state = self
        if state.pending is not None and state.pending.kind is not kind:
            state = state.flush()
        pending = state.pending or ListBlock(kind=kind)
        return _FoldState(state.blocks, pending.append(item))


def looks_like_heading(line: str, next_line: Optional[str]) -> bool:
    """
    checks whether an unmarked line reads like a section heading.

    A short capitalized line without sentence punctuation or list markers,
    followed by a non-blank line, is treated as a heading.

    Args:
        line: stripped line
        next_line: raw following line, or None at end of input

    Returns:
        True if the line should render as a heading
    """
    return (
        len(line) < HEURISTIC_HEADING_MAX_LENGTH
        and HEADING_SHAPE_PATTERN.match(line) is not None
        and LIST_START_PATTERN.match(line) is None
        and "*" not in line
        and "-" not in line
        and next_line is not None
        and bool(next_line.strip())
    )


def _step(state: _FoldState, pair: tuple[str, Optional[str]]) -> _FoldState:
    """classifies one line and folds it into state."""
    raw_line, next_line = pair
    line = raw_line.strip()

    if not line:
        return state.flush()

    heading = HEADING_PATTERN.match(line)
    if heading:
        return state.emit(Heading(level=len(heading.group(1)), text=heading.group(2)))

    if looks_like_heading(line, next_line):
        return state.emit(Heading(level=HEURISTIC_HEADING_LEVEL, text=line))

    bullet = BULLET_PATTERN.match(line)
    if bullet:
        return state.add_item(ListKind.BULLET, format_inline(bullet.group(1)))

    numbered = NUMBERED_PATTERN.match(line)
    if numbered:
        return state.add_item(ListKind.NUMBERED, format_inline(numbered.group(1)))

    return state.emit(Paragraph(text=format_inline(line)))


def parse_blocks(text: str) -> list[Block]:
    """
    splits text into headings, lists and paragraphs in document order.

    Args:
        text: markdown-ish or plain text

    Returns:
        list of blocks; list and paragraph text is already inline formatted
    """
    lines = text.split("\n")
    next_lines: list[Optional[str]] = [*lines[1:], None]
    final = reduce(_step, zip(lines, next_lines), _FoldState())
    return list(final.flush().blocks)
