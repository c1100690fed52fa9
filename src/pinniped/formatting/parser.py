"""Markdown parser for converting text to the document IR."""

import logging
import string

from pinniped.formatting.inline import parse_inline
from pinniped.formatting.ir import (
    Block,
    Blockquote,
    CodeBlock,
    Document,
    Header,
    OrderedList,
    Paragraph,
    Table,
    TableBlock,
    UnorderedList,
)

logger = logging.getLogger(__name__)

FENCE = "```"


class ParseError(Exception):
    """Input that cannot be processed at all."""

    pass


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping a trailing empty line and any CR."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class MarkdownParser:
    """Parse Markdown text into a Document.

    Parsing runs in two passes. The fence pass walks the text looking for
    triple-backtick fences and turns fenced regions into code blocks. The
    text between fences is then split on blank lines and each section is
    classified as a single block.
    """

    def parse(self, markdown_text: str) -> Document:
        """Convert Markdown text to a Document.

        Args:
            markdown_text: The Markdown source

        Returns:
            Document with parsed blocks

        Raises:
            ParseError: If the input is not text
        """
        if not isinstance(markdown_text, str):
            raise ParseError(
                f"Expected str, got {type(markdown_text).__name__}"
            )

        blocks: list[Block] = []
        pending: list[str] = []
        code: list[str] = []
        language = None
        in_fence = False
        pos = 0
        length = len(markdown_text)

        while pos < length:
            if markdown_text.startswith(FENCE, pos):
                pos += len(FENCE)
                line_end = markdown_text.find("\n", pos)
                if line_end == -1:
                    line_end = length
                if in_fence:
                    blocks.append(CodeBlock(code="".join(code), language=language))
                    code = []
                    language = None
                    in_fence = False
                else:
                    self._flush(pending, blocks)
                    pending = []
                    language = markdown_text[pos:line_end].strip() or None
                    in_fence = True
                # The rest of a fence line is the info string or discarded
                pos = line_end + 1
                continue

            if markdown_text.startswith("``", pos):
                chunk = "``"
            else:
                chunk = markdown_text[pos]
            (code if in_fence else pending).append(chunk)
            pos += len(chunk)

        if in_fence:
            blocks.append(CodeBlock(code="".join(code), language=language))
        else:
            self._flush(pending, blocks)

        logger.debug("Parsed %d block(s) from %d characters", len(blocks), length)
        return Document(blocks=tuple(blocks))

    def _flush(self, pending: list[str], blocks: list[Block]) -> None:
        """Classify buffered text outside fences and append its blocks."""
        text = "".join(pending).strip()
        if not text:
            return
        for section in text.split("\n\n"):
            section = section.strip()
            if section:
                blocks.append(self._parse_section(section))

    def _parse_section(self, section: str) -> Block:
        """Classify one blank-line-delimited section.

        Every line must satisfy a rule for it to apply; otherwise the
        section falls through to the next rule and finally to Paragraph.
        """
        if section.startswith("#"):
            level = len(section) - len(section.lstrip("#"))
            return Header(level=level, text=parse_inline(section[level:].strip()))

        lines = [line.strip() for line in split_lines(section)]

        if all(line.startswith("> ") for line in lines):
            quote = "\n".join(line[2:] for line in lines)
            return Blockquote(text=parse_inline(quote))

        if all(line.startswith("- ") for line in lines):
            return UnorderedList(
                items=tuple(parse_inline(line[2:]) for line in lines)
            )

        if all(self._is_ordered_item(line) for line in lines):
            return OrderedList(
                items=tuple(
                    parse_inline(line[line.find(". ") + 2:]) for line in lines
                )
            )

        if "|" in section and all("|" in line for line in lines):
            return TableBlock(table=Table.from_rows([self._split_row(line) for line in lines]))

        return Paragraph(text=parse_inline(section))

    @staticmethod
    def _is_ordered_item(line: str) -> bool:
        return bool(line) and line[0] in string.digits and ". " in line

    @staticmethod
    def _split_row(line: str) -> list[str]:
        return [cell.strip() for cell in line.strip("|").split("|")]

    def to_markdown(self, doc: Document) -> str:
        """Convert a Document back to Markdown."""
        return doc.to_markdown()
