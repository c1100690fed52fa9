"""JSON codec for the document IR.

The JSON shape is externally tagged: each union variant is an object with
a single key naming the variant, e.g. ``{"Header": {"level": 1, "text":
{"elements": [{"Text": "Title"}]}}}``. Host applications rely on this shape,
so field and variant names are part of the interface.
"""

import json
from typing import Any, Optional

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


class SerializationError(ValueError):
    """JSON data does not describe a valid document."""

    pass


# =============================================================================
# Encoding
# =============================================================================

def inline_element_to_dict(element: InlineElement) -> dict[str, Any]:
    if isinstance(element, Text):
        return {"Text": element.text}
    if isinstance(element, Bold):
        return {"Bold": [inline_element_to_dict(child) for child in element.children]}
    if isinstance(element, Italic):
        return {"Italic": [inline_element_to_dict(child) for child in element.children]}
    if isinstance(element, Code):
        return {"Code": element.code}
    if isinstance(element, Link):
        return {"Link": {"text": element.text, "url": element.url}}
    raise SerializationError(f"Unknown inline element: {type(element).__name__}")


def inline_text_to_dict(text: InlineText) -> dict[str, Any]:
    return {"elements": [inline_element_to_dict(element) for element in text.elements]}


def table_to_dict(table: Table) -> dict[str, Any]:
    return {"rows": [list(row) for row in table.rows], "has_header": table.has_header}


def block_to_dict(block: Block) -> dict[str, Any]:
    """Encode a block as a single-key variant object."""
    if isinstance(block, Paragraph):
        return {"Paragraph": inline_text_to_dict(block.text)}
    if isinstance(block, Header):
        return {"Header": {"level": block.level, "text": inline_text_to_dict(block.text)}}
    if isinstance(block, UnorderedList):
        return {"UnorderedList": [inline_text_to_dict(item) for item in block.items]}
    if isinstance(block, OrderedList):
        return {"OrderedList": [inline_text_to_dict(item) for item in block.items]}
    if isinstance(block, CodeBlock):
        return {"CodeBlock": {"language": block.language, "code": block.code}}
    if isinstance(block, Blockquote):
        return {"Blockquote": inline_text_to_dict(block.text)}
    if isinstance(block, TableBlock):
        return {"Table": table_to_dict(block.table)}
    raise SerializationError(f"Unknown block: {type(block).__name__}")


def document_to_dict(doc: Document) -> dict[str, Any]:
    return {"blocks": [block_to_dict(block) for block in doc.blocks]}


# =============================================================================
# Decoding
# =============================================================================

def _variant(data: Any, what: str) -> tuple[str, Any]:
    """Unpack a single-key variant object into (tag, payload)."""
    if not isinstance(data, dict) or len(data) != 1:
        raise SerializationError(f"Expected a single-key {what} object, got {data!r}")
    return next(iter(data.items()))


def _expect(value: Any, kind: type, what: str) -> Any:
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SerializationError(
            f"Expected {what} to be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _field(data: Any, name: str, what: str) -> Any:
    _expect(data, dict, what)
    if name not in data:
        raise SerializationError(f"Missing field '{name}' in {what}")
    return data[name]


def inline_element_from_dict(data: Any) -> InlineElement:
    tag, payload = _variant(data, "inline element")
    if tag == "Text":
        return Text(_expect(payload, str, "Text"))
    if tag == "Bold":
        return Bold(tuple(inline_element_from_dict(child) for child in _expect(payload, list, "Bold")))
    if tag == "Italic":
        return Italic(tuple(inline_element_from_dict(child) for child in _expect(payload, list, "Italic")))
    if tag == "Code":
        return Code(_expect(payload, str, "Code"))
    if tag == "Link":
        return Link(
            text=_expect(_field(payload, "text", "Link"), str, "Link.text"),
            url=_expect(_field(payload, "url", "Link"), str, "Link.url"),
        )
    raise SerializationError(f"Unknown inline element variant: {tag}")


def inline_text_from_dict(data: Any) -> InlineText:
    elements = _expect(_field(data, "elements", "InlineText"), list, "InlineText.elements")
    return InlineText(elements=tuple(inline_element_from_dict(e) for e in elements))


def table_from_dict(data: Any) -> Table:
    rows = _expect(_field(data, "rows", "Table"), list, "Table.rows")
    has_header = _expect(_field(data, "has_header", "Table"), bool, "Table.has_header")
    cells = []
    for row in rows:
        _expect(row, list, "table row")
        cells.append(tuple(_expect(cell, str, "table cell") for cell in row))
    return Table(rows=tuple(cells), has_header=has_header)


def block_from_dict(data: Any) -> Block:
    """Decode a single-key variant object into a block."""
    tag, payload = _variant(data, "block")
    if tag == "Paragraph":
        return Paragraph(text=inline_text_from_dict(payload))
    if tag == "Header":
        level = _expect(_field(payload, "level", "Header"), int, "Header.level")
        if level < 1:
            raise SerializationError(f"Header level must be positive, got {level}")
        return Header(level=level, text=inline_text_from_dict(_field(payload, "text", "Header")))
    if tag in ("UnorderedList", "OrderedList"):
        items = tuple(inline_text_from_dict(item) for item in _expect(payload, list, tag))
        return UnorderedList(items=items) if tag == "UnorderedList" else OrderedList(items=items)
    if tag == "CodeBlock":
        _expect(payload, dict, "CodeBlock")
        language = payload.get("language")
        if language is not None:
            _expect(language, str, "CodeBlock.language")
        return CodeBlock(
            code=_expect(_field(payload, "code", "CodeBlock"), str, "CodeBlock.code"),
            language=language,
        )
    if tag == "Blockquote":
        return Blockquote(text=inline_text_from_dict(payload))
    if tag == "Table":
        return TableBlock(table=table_from_dict(payload))
    raise SerializationError(f"Unknown block variant: {tag}")


def blocks_from_list(data: Any) -> tuple[Block, ...]:
    return tuple(block_from_dict(block) for block in _expect(data, list, "blocks"))


def document_from_dict(data: Any) -> Document:
    return Document(blocks=blocks_from_list(_field(data, "blocks", "Document")))


# =============================================================================
# JSON text
# =============================================================================

def dumps(doc: Document, indent: Optional[int] = None) -> str:
    """Serialize a Document to JSON text."""
    return json.dumps(document_to_dict(doc), indent=indent, ensure_ascii=False)


def loads(text: str) -> Document:
    """Deserialize a Document from JSON text.

    Raises:
        SerializationError: If the text is not JSON or has the wrong shape
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e}") from e
    return document_from_dict(data)
