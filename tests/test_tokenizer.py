"""Tests for the inline tokenizer."""

import pytest

from pinniped.formatting.tokenizer import (
    Marker,
    TextToken,
    balance_penalty,
    token_source,
    tokenize,
)


class TestTokenize:
    """Tests for the tokenize function."""

    def test_plain_text_is_one_token(self):
        """Test that text without markup becomes a single token."""
        assert tokenize("Hello, world!") == [TextToken("Hello, world!")]

    def test_empty_text(self):
        """Test that empty input yields no tokens."""
        assert tokenize("") == []

    def test_bold_and_italic_markers(self):
        """Test that ** and * become bold and italic markers."""
        assert tokenize("a **b** *c*") == [
            TextToken("a "),
            Marker.BOLD,
            TextToken("b"),
            Marker.BOLD,
            TextToken(" "),
            Marker.ITALIC,
            TextToken("c"),
            Marker.ITALIC,
        ]

    def test_code_marker(self):
        """Test that each backtick is a code marker."""
        assert tokenize("`x`") == [Marker.CODE, TextToken("x"), Marker.CODE]

    def test_link_markers(self):
        """Test link punctuation tokens."""
        assert tokenize("[t](u)") == [
            Marker.LINK_START,
            TextToken("t"),
            Marker.LINK_MIDDLE,
            TextToken("u"),
            Marker.LINK_END,
        ]

    def test_closing_paren_always_emits_link_end(self):
        """Test that ) is a marker even outside a link."""
        assert tokenize("(see note)") == [TextToken("(see note"), Marker.LINK_END]

    def test_bare_bracket_joins_preceding_text(self):
        """Test that ] without ( is appended to the previous text token."""
        assert tokenize("a]b") == [TextToken("a]"), TextToken("b")]

    def test_bare_bracket_at_start(self):
        """Test that a leading ] starts a new text token."""
        assert tokenize("]x") == [TextToken("]"), TextToken("x")]

    def test_bracket_after_marker_starts_text(self):
        """Test that ] after a marker is not merged into it."""
        assert tokenize("*]") == [Marker.ITALIC, TextToken("]")]

    def test_four_stars(self):
        """Test that a run of four stars is consumed three then one."""
        tokens = tokenize("****")
        assert tokens == [Marker.BOLD, Marker.ITALIC, Marker.ITALIC]

    def test_token_source(self):
        """Test that tokens map back to their source characters."""
        source = "a **b** `c` [d](e) f]"
        assert "".join(token_source(t) for t in tokenize(source)) == source


class TestTripleStar:
    """Tests for the triple-star disambiguation."""

    def test_penalty_bold_first_natural_nesting(self):
        """Test penalties when the italic closes first."""
        text = "***bold and italic* just bold**"
        assert balance_penalty(text, bold_first=True) == 0
        assert balance_penalty(text, bold_first=False) == 3

    def test_penalty_italic_first_natural_nesting(self):
        """Test penalties when the bold closes first."""
        text = "***bold and italic** just italic*"
        assert balance_penalty(text, bold_first=True) == 3
        assert balance_penalty(text, bold_first=False) == 0

    def test_penalty_unclosed_openers(self):
        """Test that each opener left on the stack costs 8."""
        assert balance_penalty("***", bold_first=True) == 16
        assert balance_penalty("***", bold_first=False) == 16

    def test_penalty_unmatched_closer(self):
        """Test that a closer with no opener costs 15."""
        # Bold-first: * closes italic, ** closes bold, last * has nothing
        assert balance_penalty("***a*b**c*", bold_first=True) == 15

    def test_bold_first_chosen(self):
        """Test that the lower penalty decides the split."""
        tokens = tokenize("***bold and italic* just bold**")
        assert tokens[:2] == [Marker.BOLD, Marker.ITALIC]

    def test_italic_first_chosen(self):
        """Test that * + ** is chosen when it balances better."""
        tokens = tokenize("***bold and italic** just italic*")
        assert tokens[:2] == [Marker.ITALIC, Marker.BOLD]

    def test_tie_favors_bold_first(self):
        """Test that equal penalties produce ** then *."""
        assert tokenize("***plain") == [
            Marker.BOLD,
            Marker.ITALIC,
            TextToken("plain"),
        ]

    @pytest.mark.parametrize("text", ["***both***", "x ***y*** z"])
    def test_symmetric_triple_stars(self, text: str):
        """Test that ***x*** nests one marker pair inside the other."""
        markers = [t for t in tokenize(text) if isinstance(t, Marker)]
        assert markers == [Marker.ITALIC, Marker.BOLD, Marker.BOLD, Marker.ITALIC]
