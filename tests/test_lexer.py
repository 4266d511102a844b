# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the C tokenizer.
#
# Test coverage includes:
#   - Keyword / identifier resolution
#   - Integer constants and the word-boundary rule
#   - Delimiters and whitespace handling
#   - Longest-match selection
#   - Position tracking
#   - Unknown characters
# =============================================================================

import pytest

from minicc.compiler.lexer import CLexer, CToken, CTokenType, TOKEN_PATTERNS, tokenize
from minicc.compiler.errors import LexError, UnknownTokenError


def kinds(source: str) -> list:
    """Helper returning only the token types."""
    return [t.type for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces no tokens."""
        assert tokenize("") == []

    def test_whitespace_only(self):
        """Whitespace carries no token."""
        assert tokenize("  \n\t \r\n ") == []

    def test_minimal_program(self):
        """The canonical program tokenizes to exactly ten tokens."""
        tokens = tokenize("int main(void) {return 0;}")
        assert tokens == [
            CToken(CTokenType.INT),
            CToken(CTokenType.IDENTIFIER, "main"),
            CToken(CTokenType.LPAREN),
            CToken(CTokenType.VOID),
            CToken(CTokenType.RPAREN),
            CToken(CTokenType.LBRACE),
            CToken(CTokenType.RETURN),
            CToken(CTokenType.CONSTANT, "0"),
            CToken(CTokenType.SEMICOLON),
            CToken(CTokenType.RBRACE),
        ]

    def test_delimiters(self):
        """Each delimiter is its own token."""
        assert kinds("(){};") == [
            CTokenType.LPAREN,
            CTokenType.RPAREN,
            CTokenType.LBRACE,
            CTokenType.RBRACE,
            CTokenType.SEMICOLON,
        ]

    def test_no_whitespace_needed_around_delimiters(self):
        """Delimiters split identifiers and constants without spaces."""
        assert kinds("return(42);") == [
            CTokenType.RETURN,
            CTokenType.LPAREN,
            CTokenType.CONSTANT,
            CTokenType.RPAREN,
            CTokenType.SEMICOLON,
        ]


# =============================================================================
# Keyword and Identifier Tests
# =============================================================================

class TestKeywords:
    """Test keyword lookup after identifier matching."""

    @pytest.mark.parametrize("text,token_type", [
        ("int", CTokenType.INT),
        ("void", CTokenType.VOID),
        ("return", CTokenType.RETURN),
    ])
    def test_keywords(self, text, token_type):
        """Keywords surface as their own kinds with no lexeme."""
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].type == token_type
        assert tokens[0].lexeme is None

    @pytest.mark.parametrize("text", [
        "main", "_start", "x1", "integer", "returns", "Int", "VOID", "int_", "_void",
    ])
    def test_non_keywords_are_identifiers(self, text):
        """Anything other than an exact keyword is an identifier with its lexeme."""
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].type == CTokenType.IDENTIFIER
        assert tokens[0].lexeme == text

    def test_keyword_prefix_uses_longest_match(self):
        """'returnx' is one identifier, not 'return' followed by 'x'."""
        tokens = tokenize("returnx")
        assert tokens == [CToken(CTokenType.IDENTIFIER, "returnx")]


# =============================================================================
# Constant Tests
# =============================================================================

class TestConstants:
    """Test integer constant recognition."""

    def test_single_digit(self):
        tokens = tokenize("7")
        assert tokens == [CToken(CTokenType.CONSTANT, "7")]

    def test_multi_digit(self):
        """The lexeme keeps the source text, leading zeros included."""
        tokens = tokenize("0042")
        assert tokens == [CToken(CTokenType.CONSTANT, "0042")]

    def test_constant_followed_by_letter_is_rejected(self):
        """A constant may not run into a word character."""
        with pytest.raises(UnknownTokenError) as exc_info:
            tokenize("123abc")
        assert exc_info.value.char == "1"

    def test_constant_followed_by_underscore_is_rejected(self):
        with pytest.raises(UnknownTokenError):
            tokenize("1_000")

    def test_constant_before_semicolon(self):
        assert kinds("1;") == [CTokenType.CONSTANT, CTokenType.SEMICOLON]


# =============================================================================
# Error Tests
# =============================================================================

class TestUnknownTokens:
    """Test rejection of characters no pattern matches."""

    def test_at_sign(self):
        """A bare '@' is rejected, not skipped."""
        with pytest.raises(UnknownTokenError) as exc_info:
            tokenize("@")
        assert exc_info.value.char == "@"

    def test_unknown_inside_program(self):
        """The error points at the offending character."""
        with pytest.raises(UnknownTokenError) as exc_info:
            tokenize("int main(void) { return 0 @ ; }", "hello.c")
        error = exc_info.value
        assert error.char == "@"
        assert error.location.filename == "hello.c"
        assert error.location.line == 1
        assert error.location.column == 27
        assert "unknown token '@'" in str(error)

    @pytest.mark.parametrize("char", ["#", "$", "-", "+", "~", "é", "\\", "`"])
    def test_other_characters(self, char):
        with pytest.raises(UnknownTokenError):
            tokenize(char)

    @pytest.mark.parametrize("char", ["\u00a0", "\x1c", "\x1f", "\u2003", "\u3000"])
    def test_non_c_whitespace(self, char):
        """Only C whitespace separates tokens; other space characters are rejected."""
        with pytest.raises(UnknownTokenError) as exc_info:
            tokenize(f"int{char}main")
        assert exc_info.value.char == char
        assert exc_info.value.location.column == 4

    def test_c_whitespace(self):
        assert tokenize("int \t\v\f\r\nmain") == [
            CToken(CTokenType.INT),
            CToken(CTokenType.IDENTIFIER, "main"),
        ]

    def test_is_lex_error(self):
        """Tokenizer errors belong to the LexError family."""
        with pytest.raises(LexError):
            tokenize("int @")

    def test_non_ascii_letter_ends_identifier(self):
        """Identifiers are ASCII; the accented letter itself is unknown."""
        with pytest.raises(UnknownTokenError) as exc_info:
            tokenize("café")
        assert exc_info.value.char == "é"
        assert exc_info.value.location.column == 4


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Test line and column tracking."""

    def test_columns_on_one_line(self):
        tokens = tokenize("int main")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (1, 5)

    def test_lines(self):
        tokens = tokenize("int\n  main\n\n(")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (2, 3), (4, 1)]

    def test_positions_ignored_in_equality(self):
        """Tokens compare on kind and lexeme only."""
        assert CToken(CTokenType.IDENTIFIER, "x", 1, 1) == CToken(CTokenType.IDENTIFIER, "x", 9, 9)

    def test_filename_recorded(self):
        tokens = CLexer("main", "prog.c").tokenize()
        assert tokens[0].location.filename == "prog.c"


# =============================================================================
# Pattern Table Tests
# =============================================================================

class TestPatternTable:
    """Test the ordered pattern table."""

    def test_no_two_patterns_share_a_first_character(self):
        """No tie is possible between the fixed patterns."""
        samples = ["a", "_", "0", "(", ")", "{", "}", ";"]
        for sample in samples:
            matching = [t for t, p in TOKEN_PATTERNS if p.match(sample)]
            assert len(matching) == 1, sample

    def test_deterministic(self):
        """Tokenizing twice gives the same result."""
        source = "int main(void) { return 5; }"
        assert tokenize(source) == tokenize(source)

    def test_describe(self):
        assert CToken(CTokenType.IDENTIFIER, "main").describe() == "identifier 'main'"
        assert CToken(CTokenType.SEMICOLON).describe() == "';'"
