"""Abstract base class for document format handlers."""

from abc import ABC, abstractmethod
from pathlib import Path

from pinniped.config import get_settings
from pinniped.formatting.ir import Document


class FormatHandler(ABC):
    """Abstract base class for document format handlers.

    Each handler reads a file into a Document and writes a Document back
    out in its own format.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.md',))."""
        ...

    @abstractmethod
    def read(self, path: Path) -> Document:
        """Load a Document from a file.

        Args:
            path: Path to the input file

        Returns:
            The parsed Document
        """
        ...

    @abstractmethod
    def write(self, document: Document, path: Path) -> None:
        """Write a Document to a file.

        Args:
            document: The Document to write
            path: Path to write the output file
        """
        ...

    def read_text(self, path: Path) -> str:
        """Read raw file content using the configured encoding."""
        return path.read_text(encoding=get_settings().encoding)

    def write_text(self, content: str, path: Path) -> None:
        """Write raw content using the configured encoding."""
        path.write_text(content, encoding=get_settings().encoding)
