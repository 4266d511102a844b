"""
C Recursive Descent Parser
==========================

This module implements the recursive descent parser for the minicc C
subset. It takes the token list from the lexer and builds an Abstract
Syntax Tree (AST).

Grammar (EBNF)
--------------
program         ::= function_def
function_def    ::= 'int' IDENTIFIER '(' 'void' ')' '{' statement '}'
statement       ::= 'return' expression ';'
expression      ::= CONSTANT | IDENTIFIER

Each production consumes exactly the tokens it matches and fails on the
first missing token; there is no backtracking and no error recovery. The
whole token list must be consumed.

The parser performs no semantic checks: `return x;` is accepted here
even though the lowering stage cannot compile it.

Example Usage
-------------
>>> from minicc.compiler.parser import parse_source
>>> ast = parse_source('int main(void) { return 42; }')
>>> ast.body.name
Identifier(name='main')
"""

import logging
from typing import Optional

from minicc.errors import SourceLocation
from minicc.compiler.lexer import CLexer, CToken, CTokenType, TOKEN_SPELLINGS
from minicc.compiler.ast import (
    Expression,
    FunctionDef,
    Identifier,
    IntConstant,
    Program,
    Return,
    Statement,
)
from minicc.compiler.errors import TrailingTokensError, UnexpectedTokenError

logger = logging.getLogger(__name__)


class CParser:
    """
    Recursive descent parser for the C subset.

    Usage:
        tokens = CLexer(source, "hello.c").tokenize()
        ast = CParser(tokens, "hello.c", source.splitlines()).parse()

    Attributes:
        tokens: List of tokens to parse
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        tokens: list[CToken],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []

        # Current position in token list
        self._pos = 0

    def parse(self) -> Program:
        """
        Parse the token list into an AST.

        Returns:
            Program node wrapping the single function definition

        Raises:
            UnexpectedTokenError: If a required token is missing
            TrailingTokensError: If tokens remain after the function
        """
        location = self._peek().location if self._peek() else None
        function = self._parse_function_def()

        extra = self._peek()
        if extra is not None:
            raise TrailingTokensError(
                extra.describe(),
                location=extra.location,
                source_line=self._source_line(extra),
            )

        logger.debug(f"{self.filename}: parsed function '{function.name.name}'")
        return Program(function, location=location)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _peek(self) -> Optional[CToken]:
        """Return the current token, or None at end of input."""
        if self._pos < len(self.tokens):
            return self.tokens[self._pos]
        return None

    def _expect(self, token_type: CTokenType, hint: Optional[str] = None) -> CToken:
        """
        Consume the current token, which must be of the given type.

        Raises:
            UnexpectedTokenError: If the current token has another type
                or the input has ended
        """
        token = self._peek()
        if token is not None and token.type == token_type:
            self._pos += 1
            return token
        raise self._unexpected(TOKEN_SPELLINGS[token_type], token, hint)

    def _unexpected(
        self,
        expected: str,
        token: Optional[CToken],
        hint: Optional[str] = None,
    ) -> UnexpectedTokenError:
        if token is None:
            return UnexpectedTokenError(
                expected, "end of input", location=self._end_location(), hint=hint
            )
        return UnexpectedTokenError(
            expected,
            token.describe(),
            location=token.location,
            hint=hint,
            source_line=self._source_line(token),
        )

    def _source_line(self, token: CToken) -> Optional[str]:
        if 0 < token.line <= len(self.source_lines):
            return self.source_lines[token.line - 1]
        return None

    def _end_location(self) -> Optional[SourceLocation]:
        """Location just past the last token, if there is one."""
        if not self.tokens:
            return None
        last = self.tokens[-1]
        width = len(last.lexeme) if last.lexeme is not None else len(TOKEN_SPELLINGS[last.type]) - 2
        return SourceLocation(self.filename, last.line, last.column + width)

    # =========================================================================
    # Productions
    # =========================================================================

    def _parse_function_def(self) -> FunctionDef:
        """function_def ::= 'int' IDENTIFIER '(' 'void' ')' '{' statement '}'"""
        start = self._expect(CTokenType.INT, hint="a program starts with 'int main(void)'")
        name_token = self._expect(CTokenType.IDENTIFIER)
        self._expect(CTokenType.LPAREN)
        self._expect(CTokenType.VOID, hint="functions take no parameters: write '(void)'")
        self._expect(CTokenType.RPAREN)
        self._expect(CTokenType.LBRACE)
        body = self._parse_statement()
        self._expect(CTokenType.RBRACE)

        name = Identifier(name_token.lexeme, location=name_token.location)
        return FunctionDef(name, body, location=start.location)

    def _parse_statement(self) -> Statement:
        """statement ::= 'return' expression ';'"""
        start = self._expect(CTokenType.RETURN)
        value = self._parse_expression()
        self._expect(CTokenType.SEMICOLON, hint="every return statement ends with a semicolon")
        return Return(value, location=start.location)

    def _parse_expression(self) -> Expression:
        """expression ::= CONSTANT | IDENTIFIER"""
        token = self._peek()
        if token is not None and token.type == CTokenType.CONSTANT:
            self._pos += 1
            return IntConstant(int(token.lexeme), location=token.location)
        if token is not None and token.type == CTokenType.IDENTIFIER:
            self._pos += 1
            return Identifier(token.lexeme, location=token.location)
        raise self._unexpected("constant or identifier", token)


def parse_source(source: str, filename: str = "<input>") -> Program:
    """Tokenize and parse source text in one step."""
    tokens = CLexer(source, filename).tokenize()
    return CParser(tokens, filename, source.splitlines()).parse()
