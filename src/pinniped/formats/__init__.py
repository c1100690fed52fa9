"""Document format handlers for Pinniped."""

from pinniped.formats.base import FormatHandler
from pinniped.formats.json_handler import JSONHandler
from pinniped.formats.markdown_handler import MarkdownHandler

__all__ = [
    "FormatHandler",
    "MarkdownHandler",
    "JSONHandler",
]

# Map file extensions to handlers
HANDLER_MAP: dict[str, type[FormatHandler]] = {
    ".md": MarkdownHandler,
    ".markdown": MarkdownHandler,
    ".txt": MarkdownHandler,
    ".json": JSONHandler,
}

SUPPORTED_EXTENSIONS = tuple(HANDLER_MAP.keys())

# Output format name -> file extension
FORMAT_EXTENSIONS: dict[str, str] = {
    "md": ".md",
    "json": ".json",
}


def get_handler(extension: str) -> type[FormatHandler]:
    """Get the appropriate handler class for a file extension."""
    ext = extension.lower()
    if ext not in HANDLER_MAP:
        raise ValueError(
            f"Unsupported file format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return HANDLER_MAP[ext]
