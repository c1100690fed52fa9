"""Formatting utilities for parsing and rendering Markdown."""

from pinniped.formatting.ir import (
    Text,
    Bold,
    Italic,
    Code,
    Link,
    InlineElement,
    InlineText,
    Table,
    Paragraph,
    Header,
    UnorderedList,
    OrderedList,
    CodeBlock,
    Blockquote,
    TableBlock,
    Block,
    Document,
)
from pinniped.formatting.parser import MarkdownParser, ParseError
from pinniped.formatting.renderer import MarkdownRenderer

__all__ = [
    "Text",
    "Bold",
    "Italic",
    "Code",
    "Link",
    "InlineElement",
    "InlineText",
    "Table",
    "Paragraph",
    "Header",
    "UnorderedList",
    "OrderedList",
    "CodeBlock",
    "Blockquote",
    "TableBlock",
    "Block",
    "Document",
    "MarkdownParser",
    "MarkdownRenderer",
    "ParseError",
]
