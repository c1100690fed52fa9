"""Pinniped: a Markdown parser with round-trip rendering."""

from pinniped.formatting.ir import Document
from pinniped.formatting.parser import MarkdownParser, ParseError
from pinniped.formatting.renderer import MarkdownRenderer

__version__ = "0.1.0"

__all__ = [
    "Document",
    "MarkdownParser",
    "MarkdownRenderer",
    "ParseError",
    "parse",
    "render",
    "__version__",
]


def parse(text: str) -> Document:
    """Parse Markdown text into a Document."""
    return MarkdownParser().parse(text)


def render(document: Document) -> str:
    """Render a Document back to Markdown text."""
    return MarkdownRenderer().render(document)
