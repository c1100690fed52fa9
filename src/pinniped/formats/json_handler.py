"""JSON document file handler."""

from pathlib import Path

from pinniped.config import get_settings
from pinniped.formats.base import FormatHandler
from pinniped.formatting.ir import Document
from pinniped.formatting.serialization import dumps, loads


class JSONHandler(FormatHandler):
    """Handler for serialized documents (.json).

    Files hold the externally tagged document shape produced by
    ``pinniped.formatting.serialization``.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".json",)

    def read(self, path: Path) -> Document:
        """Load a serialized Document."""
        return loads(self.read_text(path))

    def write(self, document: Document, path: Path) -> None:
        """Serialize the Document, indented per settings."""
        self.write_text(dumps(document, indent=get_settings().json_indent), path)
