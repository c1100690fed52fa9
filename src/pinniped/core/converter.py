"""Document conversion orchestrator."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pinniped.config import get_settings
from pinniped.formats import FORMAT_EXTENSIONS, SUPPORTED_EXTENSIONS, get_handler
from pinniped.formats.markdown_handler import MarkdownHandler
from pinniped.formatting.ir import Document
from pinniped.formatting.parser import MarkdownParser
from pinniped.formatting.renderer import MarkdownRenderer

logger = logging.getLogger(__name__)

# Added to output stems when input and output formats coincide
OUTPUT_SUFFIX = "-pinniped"


class ConversionError(Exception):
    """Error during document conversion."""

    pass


@dataclass(frozen=True)
class RoundTripReport:
    """Outcome of parsing and re-rendering a Markdown text.

    Attributes:
        original: The input text
        rendered: The text produced by render(parse(original))
        block_count: Number of blocks parsed
    """

    original: str
    rendered: str
    block_count: int

    @property
    def identical(self) -> bool:
        """Check whether rendering reproduced the input exactly."""
        return self.original == self.rendered


class DocumentConverter:
    """Converts documents between Markdown and JSON files.

    Pipeline:
    1. Read input file with the handler for its extension
    2. Parse to the document IR (Markdown) or decode it (JSON)
    3. Write with the handler for the output extension
    """

    def __init__(self, output_format: Optional[str] = None) -> None:
        """Initialize the converter.

        Args:
            output_format: "json" or "md"; defaults to the configured format
        """
        settings = get_settings()
        self.output_format = output_format or settings.output_format
        if self.output_format not in FORMAT_EXTENSIONS:
            raise ConversionError(
                f"Unknown output format: {self.output_format}. "
                f"Supported: {', '.join(FORMAT_EXTENSIONS)}"
            )
        self.parser = MarkdownParser()
        self.renderer = MarkdownRenderer()

    @property
    def output_extension(self) -> str:
        return FORMAT_EXTENSIONS[self.output_format]

    def output_path_for(
        self, input_path: Path, output_dir: Optional[Path] = None
    ) -> Path:
        """Generate the output path for an input file.

        The output keeps the input stem and takes the output format's
        extension. Converting a file to its own format adds a -pinniped
        suffix so the input is never overwritten.
        """
        stem = input_path.stem
        if get_handler(input_path.suffix) is get_handler(self.output_extension):
            stem = f"{stem}{OUTPUT_SUFFIX}"
        output_name = f"{stem}{self.output_extension}"

        if output_dir:
            return output_dir / output_name
        return input_path.parent / output_name

    def convert_file(self, input_path: Path, output_path: Path) -> Document:
        """Convert a document file.

        Args:
            input_path: Path to input document
            output_path: Path for output document

        Returns:
            The Document that was written

        Raises:
            ConversionError: If conversion fails
        """
        if not input_path.exists():
            raise ConversionError(f"Input file not found: {input_path}")

        ext = input_path.suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ConversionError(
                f"Unsupported format: {ext}. "
                f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
            )
        if output_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise ConversionError(
                f"Unsupported output format: {output_path.suffix.lower()}"
            )

        handler = get_handler(ext)()
        try:
            if isinstance(handler, MarkdownHandler):
                text = handler.read_text(input_path)
                if not text.strip():
                    raise ConversionError("Input file contains no text")
                document = self.parser.parse(text)
            else:
                document = handler.read(input_path)
        except ValueError as e:
            raise ConversionError(f"Could not read {input_path.name}: {e}") from e
        logger.info("Read %d block(s) from %s", len(document.blocks), input_path)

        output_handler = get_handler(output_path.suffix.lower())()
        output_handler.write(document, output_path)
        logger.info("Wrote %s", output_path)

        return document

    def roundtrip(self, text: str) -> RoundTripReport:
        """Parse and re-render Markdown text.

        Useful for checking whether a text only uses constructs that
        survive a round trip unchanged.
        """
        document = self.parser.parse(text)
        rendered = self.renderer.render(document)
        return RoundTripReport(
            original=text,
            rendered=rendered,
            block_count=len(document.blocks),
        )
