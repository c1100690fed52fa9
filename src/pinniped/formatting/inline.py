"""Inline parser: builds the inline element tree from tokens.

Unmatched or malformed markup is never dropped. An opener without a
closer becomes literal text, so rendering the result reproduces the
characters of the input.
"""

from typing import Optional, Sequence

from pinniped.formatting.ir import (
    Bold,
    Code,
    InlineElement,
    InlineText,
    Italic,
    Link,
    Text,
)
from pinniped.formatting.tokenizer import Marker, TextToken, Token, token_source, tokenize


def parse_inline(text: str) -> InlineText:
    """Parse a run of inline Markdown into an InlineText."""
    return InlineText(elements=tuple(parse_tokens(tokenize(text))))


def parse_tokens(tokens: Sequence[Token]) -> list[InlineElement]:
    """Parse a token slice into inline elements."""
    elements: list[InlineElement] = []
    pos = 0

    while pos < len(tokens):
        token = tokens[pos]

        if isinstance(token, TextToken):
            elements.append(Text(token.text))
            pos += 1
            continue

        if token is Marker.BOLD or token is Marker.ITALIC:
            close = _find(tokens, token, pos + 1)
            if close is None:
                elements.append(Text(token.value))
                pos += 1
                continue
            children = tuple(parse_tokens(tokens[pos + 1:close]))
            wrapper = Bold if token is Marker.BOLD else Italic
            elements.append(wrapper(children))
            pos = close + 1
            continue

        if token is Marker.CODE:
            close = _find(tokens, Marker.CODE, pos + 1)
            if close is None:
                elements.append(Text("`"))
                pos += 1
                continue
            elements.append(Code(_source(tokens[pos + 1:close])))
            pos = close + 1
            continue

        if token is Marker.LINK_START:
            middle = _find(tokens, Marker.LINK_MIDDLE, pos + 1)
            end = None if middle is None else _find(tokens, Marker.LINK_END, middle + 1)
            if end is None:
                elements.append(Text("["))
                pos += 1
                continue
            elements.append(
                Link(
                    text=_source(tokens[pos + 1:middle]),
                    url=_source(tokens[middle + 1:end]),
                )
            )
            pos = end + 1
            continue

        # Stray "](" or ")" outside a link
        elements.append(Text(token.value))
        pos += 1

    return elements


def _find(tokens: Sequence[Token], marker: Marker, start: int) -> Optional[int]:
    for index in range(start, len(tokens)):
        if tokens[index] is marker:
            return index
    return None


def _source(tokens: Sequence[Token]) -> str:
    return "".join(token_source(token) for token in tokens)
