"""Inline tokenizer: splits a run of inline Markdown into markup tokens."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

logger = logging.getLogger(__name__)


class Marker(Enum):
    """Markup tokens with their source text."""

    BOLD = "**"
    ITALIC = "*"
    CODE = "`"
    LINK_START = "["
    LINK_MIDDLE = "]("
    LINK_END = ")"


@dataclass
class TextToken:
    """A run of characters with no markup meaning."""

    text: str


Token = Union[TextToken, Marker]

# Characters that end a text run
SPECIAL_CHARS = frozenset("*`[])")

# Balance penalties for the triple-star heuristic
MISNEST_PENALTY = 3
UNMATCHED_CLOSER_PENALTY = 15
UNCLOSED_OPENER_PENALTY = 8


def balance_penalty(text: str, bold_first: bool) -> int:
    """Score one reading of a leading ``***`` against the rest of the text.

    The two openers implied by the reading are pushed on a stack, then
    every later ``**`` or ``*`` closes the nearest opener of its kind.
    Closing an opener that is not on top costs 3 per level skipped, a
    closer with no opener costs 15, and each opener left over costs 8.

    Args:
        text: Text starting at the ``***`` being disambiguated
        bold_first: True for ``**`` + ``*``, False for ``*`` + ``**``

    Returns:
        Total penalty; lower means better balanced
    """
    if bold_first:
        stack = [Marker.BOLD, Marker.ITALIC]
    else:
        stack = [Marker.ITALIC, Marker.BOLD]
    penalty = 0
    pos = 3

    while pos < len(text):
        if text.startswith("**", pos):
            kind = Marker.BOLD
            pos += 2
        elif text[pos] == "*":
            kind = Marker.ITALIC
            pos += 1
        else:
            pos += 1
            continue

        for depth, opener in enumerate(reversed(stack)):
            if opener is kind:
                penalty += depth * MISNEST_PENALTY
                del stack[len(stack) - 1 - depth]
                break
        else:
            penalty += UNMATCHED_CLOSER_PENALTY

    return penalty + len(stack) * UNCLOSED_OPENER_PENALTY


def _split_triple_star(text: str, pos: int) -> tuple[Marker, Marker]:
    """Decide whether the ``***`` at ``pos`` opens bold or italic first."""
    remainder = text[pos:]
    bold_first = balance_penalty(remainder, bold_first=True)
    italic_first = balance_penalty(remainder, bold_first=False)
    logger.debug(
        "Triple star at %d: bold-first=%d italic-first=%d",
        pos, bold_first, italic_first,
    )
    if bold_first <= italic_first:
        return Marker.BOLD, Marker.ITALIC
    return Marker.ITALIC, Marker.BOLD


def tokenize(text: str) -> list[Token]:
    """Tokenize an inline run.

    Handles:
    - ``***`` (split into bold and italic by balance penalty)
    - ``**`` and ``*``
    - backtick code delimiters
    - ``[``, ``](`` and ``)`` link punctuation
    - plain text
    """
    tokens: list[Token] = []
    pos = 0

    while pos < len(text):
        char = text[pos]

        if char == "*":
            if text.startswith("***", pos):
                tokens.extend(_split_triple_star(text, pos))
                pos += 3
            elif text.startswith("**", pos):
                tokens.append(Marker.BOLD)
                pos += 2
            else:
                tokens.append(Marker.ITALIC)
                pos += 1
        elif char == "`":
            tokens.append(Marker.CODE)
            pos += 1
        elif char == "[":
            tokens.append(Marker.LINK_START)
            pos += 1
        elif char == "]":
            if text.startswith("](", pos):
                tokens.append(Marker.LINK_MIDDLE)
                pos += 2
            else:
                # A bare bracket is literal text
                if tokens and isinstance(tokens[-1], TextToken):
                    tokens[-1].text += "]"
                else:
                    tokens.append(TextToken("]"))
                pos += 1
        elif char == ")":
            tokens.append(Marker.LINK_END)
            pos += 1
        else:
            end = pos
            while end < len(text) and text[end] not in SPECIAL_CHARS:
                end += 1
            tokens.append(TextToken(text[pos:end]))
            pos = end

    return tokens


def token_source(token: Token) -> str:
    """Get the source characters a token was lexed from."""
    if isinstance(token, TextToken):
        return token.text
    return token.value
