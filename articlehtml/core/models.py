"""Data models for converted articles and their blocks."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ListKind(Enum):
    """kind of list block, valued by its HTML tag."""

    BULLET = "ul"
    NUMBERED = "ol"


@dataclass(frozen=True)
class Heading:
    """Heading block (h1-h6)."""

    level: int
    text: str


@dataclass(frozen=True)
class ListBlock:
    """Run of consecutive list items of the same kind."""

    kind: ListKind
    items: tuple[str, ...] = ()

    def append(self, item: str) -> "ListBlock":
        """returns a copy with item added at the end."""
        return ListBlock(kind=self.kind, items=self.items + (item,))


@dataclass(frozen=True)
class Paragraph:
    """Paragraph block."""

    text: str


Block = Union[Heading, ListBlock, Paragraph]


@dataclass
class Article:
    """Article record passed through the enhancement pipeline."""

    title: str
    content: str
    id: Optional[int] = None
    original_id: Optional[int] = None
    reference_urls: list[str] = field(default_factory=list)
