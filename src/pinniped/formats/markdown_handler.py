"""Markdown file handler."""

from pathlib import Path

from pinniped.formats.base import FormatHandler
from pinniped.formatting.ir import Document
from pinniped.formatting.parser import MarkdownParser
from pinniped.formatting.renderer import MarkdownRenderer


class MarkdownHandler(FormatHandler):
    """Handler for Markdown (.md, .markdown) and plain text (.txt) files."""

    def __init__(self) -> None:
        self.parser = MarkdownParser()
        self.renderer = MarkdownRenderer()

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".md", ".markdown", ".txt")

    def read(self, path: Path) -> Document:
        """Read and parse a Markdown file."""
        return self.parser.parse(self.read_text(path))

    def write(self, document: Document, path: Path) -> None:
        """Render the Document as Markdown."""
        self.write_text(self.renderer.render(document), path)
