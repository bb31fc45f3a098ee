"""
Unit tests for the character-level lexer.
"""

import io

import pytest
from kaleido.frontend import Lexer, Token, TokenKind, tokenize_source
from kaleido.frontend.lexer import parse_number


def kinds(source):
    return [t.kind for t in tokenize_source(source)]


class CountingSource:
    """Text source that records every character handed out."""

    def __init__(self, text):
        self._stream = io.StringIO(text)
        self.consumed = ""

    def read(self, size=-1):
        chunk = self._stream.read(size)
        self.consumed += chunk
        return chunk


class TestLexerBasic:
    """Tests for basic lexer functionality."""

    def test_empty_source(self):
        """Test tokenizing empty source."""
        tokens = tokenize_source("")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF

    def test_whitespace_only(self):
        """Test that whitespace alone yields only EOF."""
        assert kinds(" \t\n\r\n  ") == [TokenKind.EOF]

    def test_simple_expression(self):
        """Test tokenizing a simple binary expression."""
        tokens = tokenize_source("x + 42")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER, TokenKind.CHAR, TokenKind.NUMBER, TokenKind.EOF
        ]
        assert tokens[0].text == "x"
        assert tokens[1].text == "+"
        assert tokens[2].value == 42.0

    def test_single_character_tokens(self):
        """Test that operators and punctuation stand for themselves."""
        tokens = tokenize_source("(),+-*/<;")
        assert all(t.kind == TokenKind.CHAR for t in tokens[:-1])
        assert [t.text for t in tokens[:-1]] == list("(),+-*/<;")

    def test_non_ascii_character_is_its_own_token(self):
        """Test that characters outside ASCII letters become CHAR tokens."""
        tokens = tokenize_source("é")
        assert tokens[0].kind == TokenKind.CHAR
        assert tokens[0].text == "é"

    def test_no_space_needed_between_tokens(self):
        """Test tokenizing without separating whitespace."""
        tokens = tokenize_source("foo(1,x)")
        assert [t.text for t in tokens[:-1]] == ["foo", "(", "1", ",", "x", ")"]

    def test_is_char(self):
        """Test the single-character token predicate."""
        token = Token(TokenKind.CHAR, "(")
        assert token.is_char("(")
        assert not token.is_char(")")
        assert not Token(TokenKind.IDENTIFIER, "(").is_char("(")


class TestLexerKeywords:
    """Tests for keyword and identifier tokenization."""

    def test_keywords(self):
        """Test that keywords are recognized."""
        assert kinds("def extern if then else") == [
            TokenKind.DEF, TokenKind.EXTERN, TokenKind.IF,
            TokenKind.THEN, TokenKind.ELSE, TokenKind.EOF,
        ]

    def test_keywords_are_case_sensitive(self):
        """Test that keyword matching is case-sensitive."""
        tokens = tokenize_source("Def EXTERN If")
        assert all(t.kind == TokenKind.IDENTIFIER for t in tokens[:-1])

    def test_keyword_prefix_is_identifier(self):
        """Test that identifiers starting with a keyword stay identifiers."""
        tokens = tokenize_source("define iffy elsewhere")
        assert [t.kind for t in tokens[:-1]] == [TokenKind.IDENTIFIER] * 3

    def test_alphanumeric_identifier(self):
        """Test that identifiers may contain digits after the first letter."""
        tokens = tokenize_source("x1y2")
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].text == "x1y2"

    def test_digit_then_letter_splits(self):
        """Test that a leading digit starts a number, not an identifier."""
        tokens = tokenize_source("1x")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.EOF]

    def test_underscore_is_not_part_of_identifier(self):
        """Test that '_' is a separate character token."""
        tokens = tokenize_source("a_b")
        assert [t.text for t in tokens[:-1]] == ["a", "_", "b"]
        assert tokens[1].kind == TokenKind.CHAR


class TestLexerNumbers:
    """Tests for numeric literal tokenization."""

    @pytest.mark.parametrize("source, expected", [
        ("0", 0.0),
        ("42", 42.0),
        ("3.14", 3.14),
        (".5", 0.5),
        ("5.", 5.0),
    ])
    def test_well_formed_numbers(self, source, expected):
        """Test parsing of well-formed decimal literals."""
        tokens = tokenize_source(source)
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].value == expected
        assert tokens[0].text == source

    @pytest.mark.parametrize("source, expected", [
        ("1.2.3", 1.2),
        ("1..5", 1.0),
        ("..5", 0.0),
        (".", 0.0),
    ])
    def test_malformed_numbers_use_longest_prefix(self, source, expected):
        """Test that malformed literals keep the longest valid decimal prefix."""
        tokens = tokenize_source(source)
        assert len(tokens) == 2
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].value == expected
        assert tokens[0].text == source

    def test_parse_number_directly(self):
        """Test the strtod-style number parser."""
        assert parse_number("10.25") == 10.25
        assert parse_number("7.7.7") == 7.7
        assert parse_number("...") == 0.0


class TestLexerComments:
    """Tests for comment skipping."""

    def test_comment_only(self):
        """Test that a lone comment produces no tokens."""
        assert kinds("# nothing to see here") == [TokenKind.EOF]

    def test_comment_is_transparent(self):
        """Test that comments vanish from the token stream."""
        with_comment = [(t.kind, t.text) for t in tokenize_source("1 # comment\n+2")]
        without = [(t.kind, t.text) for t in tokenize_source("1 +2")]
        assert with_comment == without

    def test_consecutive_comment_lines(self):
        """Test skipping many comment lines in a row."""
        source = "# a\n" * 5000 + "x"
        tokens = tokenize_source(source)
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].lineno == 5001

    def test_comment_at_end_of_input(self):
        """Test a comment terminated by end of input rather than newline."""
        assert kinds("x # trailing") == [TokenKind.IDENTIFIER, TokenKind.EOF]


class TestLexerStream:
    """Tests for the lazy, forward-only token stream."""

    def test_eof_is_idempotent(self):
        """Test that EOF keeps being returned after end of input."""
        lexer = Lexer("x")
        assert lexer.next_token().kind == TokenKind.IDENTIFIER
        for _ in range(3):
            assert lexer.next_token().kind == TokenKind.EOF

    def test_iteration_stops_after_eof(self):
        """Test that iterating a lexer ends with exactly one EOF."""
        tokens = list(Lexer("a b"))
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.EOF
        ]

    def test_text_stream_source(self):
        """Test reading from a text stream instead of a string."""
        tokens = tokenize_source(io.StringIO("def f(x) x"))
        assert tokens[0].kind == TokenKind.DEF
        assert len(tokens) == 7

    def test_reads_lazily(self):
        """Test that only one character past the token is read."""
        source = CountingSource("abc def ghi")
        lexer = Lexer(source)
        token = lexer.next_token()
        assert token.text == "abc"
        assert source.consumed == "abc "


class TestLexerLineNumbers:
    """Tests for line and column tracking."""

    def test_line_and_column(self):
        """Test that token positions are tracked correctly."""
        tokens = tokenize_source("x\n  y + 1")
        assert (tokens[0].lineno, tokens[0].col_offset) == (1, 0)
        assert (tokens[1].lineno, tokens[1].col_offset) == (2, 2)
        assert (tokens[2].lineno, tokens[2].col_offset) == (2, 4)
        assert (tokens[3].lineno, tokens[3].col_offset) == (2, 6)

    def test_token_repr(self):
        """Test the debugging representation of tokens."""
        tokens = tokenize_source("foo 2")
        assert repr(tokens[0]) == "Token(IDENTIFIER, 'foo', line=1)"
        assert repr(tokens[1]) == "Token(NUMBER, 2.0, line=1)"
