"""Intermediate Representation for parsed Markdown.

This module defines the document tree produced by the parser and consumed
by the renderer, the JSON codec and the table navigation helpers. Every
node is a frozen dataclass holding tuples, so a parsed Document is an
immutable value that compares by content.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union


# =============================================================================
# Inline elements
# =============================================================================

@dataclass(frozen=True)
class Text:
    """Literal text, rendered verbatim."""

    text: str


@dataclass(frozen=True)
class Bold:
    """Strong emphasis wrapping further inline elements (``**...**``)."""

    children: tuple["InlineElement", ...] = ()


@dataclass(frozen=True)
class Italic:
    """Emphasis wrapping further inline elements (``*...*``)."""

    children: tuple["InlineElement", ...] = ()


@dataclass(frozen=True)
class Code:
    """Inline code span. The content is never parsed for markup."""

    code: str


@dataclass(frozen=True)
class Link:
    """Inline link ``[text](url)``.

    Attributes:
        text: Link label, kept as raw text
        url: Link destination
    """

    text: str
    url: str


InlineElement = Union[Text, Bold, Italic, Code, Link]


@dataclass(frozen=True)
class InlineText:
    """One run of formatted text: an ordered sequence of inline elements."""

    elements: tuple[InlineElement, ...] = ()

    @classmethod
    def plain(cls, text: str) -> "InlineText":
        """Build an InlineText holding a single unformatted run."""
        return cls(elements=(Text(text),))

    @property
    def plain_text(self) -> str:
        """Get the text content with all markup removed."""
        return "".join(_plain(element) for element in self.elements)

    def __str__(self) -> str:
        return self.plain_text


def _plain(element: InlineElement) -> str:
    if isinstance(element, Text):
        return element.text
    if isinstance(element, (Bold, Italic)):
        return "".join(_plain(child) for child in element.children)
    if isinstance(element, Code):
        return element.code
    return element.text


# =============================================================================
# Tables
# =============================================================================

def is_separator_row(row: Sequence[str]) -> bool:
    """Check whether a row is a header separator such as ``|---|:--:|``.

    Every cell, once trimmed, may only contain ``-`` and ``:`` and must
    contain at least one ``-``.
    """
    for cell in row:
        trimmed = cell.strip()
        if "-" not in trimmed or trimmed.strip("-:"):
            return False
    return True


@dataclass(frozen=True)
class Table:
    """A grid of cell strings.

    Rows may have different lengths; no width normalization is applied.

    Attributes:
        rows: Table rows, each a tuple of cell strings
        has_header: True when rows[0] is a header and rows[1] its separator
    """

    rows: tuple[tuple[str, ...], ...] = ()
    has_header: bool = False

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> "Table":
        """Build a table, detecting the header from the second row."""
        frozen = tuple(tuple(row) for row in rows)
        has_header = len(frozen) >= 2 and is_separator_row(frozen[1])
        return cls(rows=frozen, has_header=has_header)


# =============================================================================
# Blocks
# =============================================================================

@dataclass(frozen=True)
class Paragraph:
    text: InlineText


@dataclass(frozen=True)
class Header:
    """A heading. ``level`` is the number of leading ``#`` characters."""

    level: int
    text: InlineText


@dataclass(frozen=True)
class UnorderedList:
    items: tuple[InlineText, ...] = ()


@dataclass(frozen=True)
class OrderedList:
    items: tuple[InlineText, ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block.

    Attributes:
        language: Info string after the opening fence, or None
        code: Raw content between the fences
    """

    code: str
    language: Optional[str] = None


@dataclass(frozen=True)
class Blockquote:
    text: InlineText


@dataclass(frozen=True)
class TableBlock:
    table: Table


Block = Union[
    Paragraph,
    Header,
    UnorderedList,
    OrderedList,
    CodeBlock,
    Blockquote,
    TableBlock,
]


@dataclass(frozen=True)
class Document:
    """A parsed Markdown document.

    Attributes:
        blocks: Blocks in reading order
    """

    blocks: tuple[Block, ...] = ()

    @classmethod
    def parse(cls, markdown: str) -> "Document":
        """Parse Markdown text into a Document."""
        from pinniped.formatting.parser import MarkdownParser

        return MarkdownParser().parse(markdown)

    def to_markdown(self) -> str:
        """Render the Document back to Markdown text."""
        from pinniped.formatting.renderer import MarkdownRenderer

        return MarkdownRenderer().render(self)
