"""Markdown renderer for converting the document IR back to text."""

from typing import Sequence

from pinniped.formatting.ir import (
    Block,
    Blockquote,
    Bold,
    Code,
    CodeBlock,
    Document,
    Header,
    InlineElement,
    InlineText,
    Italic,
    Link,
    OrderedList,
    Paragraph,
    Table,
    TableBlock,
    Text,
    UnorderedList,
)
from pinniped.formatting.parser import split_lines


class MarkdownRenderer:
    """Render a Document as Markdown.

    Rendering is stateless and performs no escaping. It reproduces the
    source of any document built from supported constructs, except that
    runs of blank lines collapse to one, header text is trimmed and
    trailing whitespace in code blocks is dropped.
    """

    def render(self, doc: Document) -> str:
        """Convert a Document to Markdown text."""
        return "\n\n".join(self.render_block(block) for block in doc.blocks)

    def render_block(self, block: Block) -> str:
        """Render a single block without surrounding blank lines."""
        if isinstance(block, Paragraph):
            return self.render_inline(block.text)
        if isinstance(block, Header):
            return f"{'#' * block.level} {self.render_inline(block.text)}"
        if isinstance(block, UnorderedList):
            return "\n".join(f"- {self.render_inline(item)}" for item in block.items)
        if isinstance(block, OrderedList):
            return "\n".join(
                f"{number}. {self.render_inline(item)}"
                for number, item in enumerate(block.items, start=1)
            )
        if isinstance(block, CodeBlock):
            return f"```{block.language or ''}\n{block.code.rstrip()}\n```"
        if isinstance(block, Blockquote):
            return "\n".join(
                f"> {line}" for line in split_lines(self.render_inline(block.text))
            )
        if isinstance(block, TableBlock):
            return self.render_table(block.table)
        raise TypeError(f"Cannot render block of type {type(block).__name__}")

    def render_table(self, table: Table) -> str:
        """Render table rows as ``|a|b|`` lines."""
        return "\n".join(f"|{'|'.join(row)}|" for row in table.rows)

    def render_inline(self, text: InlineText) -> str:
        """Render an InlineText."""
        return self._render_elements(text.elements)

    def _render_elements(self, elements: Sequence[InlineElement]) -> str:
        parts: list[str] = []
        for element in elements:
            if isinstance(element, Text):
                parts.append(element.text)
            elif isinstance(element, Bold):
                parts.append(f"**{self._render_elements(element.children)}**")
            elif isinstance(element, Italic):
                parts.append(f"*{self._render_elements(element.children)}*")
            elif isinstance(element, Code):
                parts.append(f"`{element.code}`")
            elif isinstance(element, Link):
                parts.append(f"[{element.text}]({element.url})")
            else:
                raise TypeError(
                    f"Cannot render inline element of type {type(element).__name__}"
                )
        return "".join(parts)


def render(doc: Document) -> str:
    """Render a Document to Markdown with a default renderer."""
    return MarkdownRenderer().render(doc)
