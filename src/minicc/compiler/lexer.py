"""
C Lexer (Tokenizer)
===================

This module implements the lexer for the minicc C subset. It converts
preprocessed source text into a list of tokens for the parser.

Token Categories
----------------
- Keywords: int, void, return
- Identifiers: function names (letters, digits, underscores)
- Constants: decimal integer literals
- Delimiters: ( ) { } ;

Matching Strategy
-----------------
At each position the lexer skips whitespace, then tries every pattern in
TOKEN_PATTERNS against the text at the cursor and keeps the longest match.
When two patterns match the same length, the one listed first wins, so
the order of TOKEN_PATTERNS is the tie-break rule. Keywords are not
patterns of their own: an identifier match is looked up in KEYWORDS
afterwards.

An integer constant must not run straight into a word character, so
`123abc` is rejected rather than split into `123` and `abc`.

Example Usage
-------------
>>> from minicc.compiler.lexer import CLexer
>>> for token in CLexer("int main(void) { return 42; }").tokenize():
...     print(token)
Token(INT, 1:1)
Token(IDENTIFIER, 'main', 1:5)
Token(LPAREN, 1:9)
Token(VOID, 1:10)
Token(RPAREN, 1:14)
Token(LBRACE, 1:16)
Token(RETURN, 1:18)
Token(CONSTANT, '42', 1:25)
Token(SEMICOLON, 1:27)
Token(RBRACE, 1:29)
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from minicc.errors import SourceLocation
from minicc.compiler.errors import UnknownTokenError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class CTokenType(Enum):
    """
    Token kinds for the C subset.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Function names
    CONSTANT = auto()       # Integer literals

    # === Keywords ===
    INT = auto()            # int
    VOID = auto()           # void
    RETURN = auto()         # return

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;


# Map keyword strings to their token types
KEYWORDS: dict[str, CTokenType] = {
    "int": CTokenType.INT,
    "void": CTokenType.VOID,
    "return": CTokenType.RETURN,
}

# Printable spelling of each fixed token, used in diagnostics
TOKEN_SPELLINGS: dict[CTokenType, str] = {
    CTokenType.INT: "'int'",
    CTokenType.VOID: "'void'",
    CTokenType.RETURN: "'return'",
    CTokenType.LPAREN: "'('",
    CTokenType.RPAREN: "')'",
    CTokenType.LBRACE: "'{'",
    CTokenType.RBRACE: "'}'",
    CTokenType.SEMICOLON: "';'",
    CTokenType.IDENTIFIER: "identifier",
    CTokenType.CONSTANT: "constant",
}

# C source whitespace; anything else that matches no pattern is an error
WHITESPACE = frozenset(" \t\n\v\f\r")

# Candidate patterns in priority order. re.ASCII keeps \w and \b to
# [A-Za-z0-9_], matching C's identifier alphabet.
TOKEN_PATTERNS: tuple[tuple[CTokenType, re.Pattern], ...] = (
    (CTokenType.IDENTIFIER, re.compile(r"[A-Za-z_]\w*\b", re.ASCII)),
    (CTokenType.CONSTANT, re.compile(r"[0-9]+\b", re.ASCII)),
    (CTokenType.LPAREN, re.compile(r"\(")),
    (CTokenType.RPAREN, re.compile(r"\)")),
    (CTokenType.LBRACE, re.compile(r"\{")),
    (CTokenType.RBRACE, re.compile(r"\}")),
    (CTokenType.SEMICOLON, re.compile(r";")),
)


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class CToken:
    """
    A single token from C source code.

    Identifiers and constants carry their source text in `lexeme`;
    keywords and delimiters do not. The position fields are informational
    and are ignored when tokens are compared.

    Attributes:
        type: The CTokenType classification
        lexeme: Source text for identifiers and constants, otherwise None
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: CTokenType
    lexeme: Optional[str] = None
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)
    filename: str = field(default="<input>", compare=False)

    def __repr__(self) -> str:
        if self.lexeme is not None:
            return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Describe the token for error messages, e.g. "identifier 'main'"."""
        if self.lexeme is not None:
            return f"{TOKEN_SPELLINGS[self.type]} '{self.lexeme}'"
        return TOKEN_SPELLINGS[self.type]


# =============================================================================
# Lexer Implementation
# =============================================================================

class CLexer:
    """
    Tokenizes preprocessed C source text.

    Usage:
        tokens = CLexer(source_text, filename).tokenize()

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> list[CToken]:
        """
        Convert the whole source into tokens, in source order.

        Returns:
            List of CToken objects (empty for blank input)

        Raises:
            UnknownTokenError: If no pattern matches at some position
        """
        tokens: list[CToken] = []

        while True:
            self._skip_whitespace()
            if self._at_end():
                break
            tokens.append(self._scan_token())

        logger.debug(f"{self.filename}: {len(tokens)} tokens")
        return tokens

    # =========================================================================
    # Cursor Handling
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _advance(self, count: int) -> None:
        """Move the cursor forward, keeping line and column in step."""
        for _ in range(count):
            char = self.source[self._pos]
            self._pos += 1
            if char == "\n":
                self._line += 1
                self._column = 1
                self._line_start_pos = self._pos
            else:
                self._column += 1

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self.source[self._pos] in WHITESPACE:
            self._advance(1)

    def _current_line(self) -> str:
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _longest_match(self) -> Optional[tuple[CTokenType, str]]:
        """
        Find the longest pattern match at the cursor.

        Ties go to the pattern listed first in TOKEN_PATTERNS.
        """
        best: Optional[tuple[CTokenType, str]] = None
        for token_type, pattern in TOKEN_PATTERNS:
            match = pattern.match(self.source, self._pos)
            if match is None:
                continue
            if best is None or len(match.group()) > len(best[1]):
                best = (token_type, match.group())
        return best

    def _scan_token(self) -> CToken:
        line, column = self._line, self._column

        best = self._longest_match()
        if best is None:
            raise UnknownTokenError(
                self.source[self._pos],
                location=SourceLocation(self.filename, line, column),
                source_line=self._current_line(),
            )

        token_type, text = best
        lexeme: Optional[str] = None
        if token_type == CTokenType.IDENTIFIER:
            keyword = KEYWORDS.get(text)
            if keyword is not None:
                token_type = keyword
            else:
                lexeme = text
        elif token_type == CTokenType.CONSTANT:
            lexeme = text

        self._advance(len(text))
        return CToken(token_type, lexeme, line, column, self.filename)


def tokenize(source: str, filename: str = "<input>") -> list[CToken]:
    """Tokenize source text. Convenience wrapper around CLexer."""
    return CLexer(source, filename).tokenize()
