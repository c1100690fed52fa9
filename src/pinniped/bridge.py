"""String-in, string-out entry points for host applications.

Native and web hosts exchange documents as JSON text. Every function here
returns JSON (or Markdown) text and reports failures as an
``{"error": "..."}`` object instead of raising.
"""

import json
import logging
from typing import Any, Union

from pinniped.core.navigation import (
    Direction,
    TableLookupError,
    get_cell,
    navigate,
    table_at,
)
from pinniped.formatting.ir import (
    Blockquote,
    CodeBlock,
    Document,
    Header,
    OrderedList,
    Paragraph,
    TableBlock,
    UnorderedList,
)
from pinniped.formatting.parser import MarkdownParser, ParseError
from pinniped.formatting.renderer import MarkdownRenderer
from pinniped.formatting.serialization import (
    SerializationError,
    block_to_dict,
    blocks_from_list,
    document_to_dict,
    loads,
)

logger = logging.getLogger(__name__)

_parser = MarkdownParser()
_renderer = MarkdownRenderer()


def _error(message: str) -> str:
    logger.warning("Bridge call failed: %s", message)
    return json.dumps({"error": message}, ensure_ascii=False)


def _ok(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False)


def _load(document_json: Any) -> Document:
    if document_json is None:
        raise SerializationError("Document JSON cannot be null")
    if not isinstance(document_json, str):
        raise SerializationError("Document JSON must be a string")
    try:
        return loads(document_json)
    except SerializationError as e:
        raise SerializationError(f"JSON deserialization failed: {e}") from e


def parse_markdown(text: Any) -> str:
    """Parse Markdown and return the document as JSON."""
    if text is None:
        return _error("Input cannot be null")
    try:
        document = _parser.parse(text)
    except ParseError as e:
        return _error(f"Parse error: {e}")
    return _ok(document_to_dict(document))


def to_markdown(document_json: Any) -> str:
    """Render a JSON document back to Markdown.

    Returns error JSON instead of Markdown if the document is malformed.
    """
    try:
        document = _load(document_json)
    except SerializationError as e:
        return _error(str(e))
    return _renderer.render(document)


def parse_blocks(text: Any) -> str:
    """Parse Markdown and return the bare list of blocks as JSON."""
    if text is None:
        return _error("Input cannot be null")
    try:
        document = _parser.parse(text)
    except ParseError as e:
        return _error(f"Parse error: {e}")
    return _ok([block_to_dict(block) for block in document.blocks])


def blocks_to_markdown(blocks_json: Any) -> str:
    """Render a JSON list of blocks to Markdown."""
    try:
        blocks = blocks_from_list(json.loads(blocks_json))
    except (TypeError, json.JSONDecodeError, SerializationError) as e:
        return _error(f"JSON deserialization failed: {e}")
    return _renderer.render(Document(blocks=blocks))


def table_navigate(
    document_json: Any,
    block_index: int,
    current_row: int,
    current_col: int,
    direction: Union[int, str],
) -> str:
    """Move from a table cell and return ``{"row", "col", "valid"}``.

    ``direction`` is 0-3 or up/down/left/right. Numbers outside 0-3 leave
    the position unchanged.
    """
    try:
        document = _load(document_json)
        table = table_at(document, block_index)
    except (SerializationError, TableLookupError) as e:
        return _error(str(e))

    if isinstance(direction, str):
        try:
            direction = Direction.parse(direction)
        except ValueError as e:
            return _error(str(e))

    position = navigate(table, current_row, current_col, direction)
    return _ok(position.to_dict())


def table_get_cell(document_json: Any, block_index: int, row: int, col: int) -> str:
    """Return ``{"content": ...}`` for a logical table cell."""
    try:
        document = _load(document_json)
        content = get_cell(table_at(document, block_index), row, col)
    except (SerializationError, TableLookupError) as e:
        return _error(str(e))
    return _ok({"content": content})


def describe_block(index: int, block: Any) -> dict[str, Any]:
    """Summarize a block for host-side outlines."""
    info: dict[str, Any] = {"index": index}
    if isinstance(block, Paragraph):
        info["type"] = "paragraph"
    elif isinstance(block, Header):
        info["type"] = "header"
        info["level"] = block.level
    elif isinstance(block, UnorderedList):
        info["type"] = "unorderedList"
        info["itemCount"] = len(block.items)
    elif isinstance(block, OrderedList):
        info["type"] = "orderedList"
        info["itemCount"] = len(block.items)
    elif isinstance(block, CodeBlock):
        info["type"] = "codeBlock"
        info["language"] = block.language
    elif isinstance(block, Blockquote):
        info["type"] = "blockquote"
    elif isinstance(block, TableBlock):
        rows = block.table.rows
        info["type"] = "table"
        info["rowCount"] = len(rows)
        info["colCount"] = len(rows[0]) if rows else 0
        info["hasHeader"] = block.table.has_header
    return info


def document_info(document_json: Any) -> str:
    """Return ``{"blockCount", "blocks"}`` summarizing a JSON document."""
    try:
        document = _load(document_json)
    except SerializationError as e:
        return _error(str(e))
    return _ok({
        "blockCount": len(document.blocks),
        "blocks": [describe_block(i, block) for i, block in enumerate(document.blocks)],
    })
