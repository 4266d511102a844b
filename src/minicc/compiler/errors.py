"""
Compiler Error Hierarchy
========================

This module defines the exception hierarchy for the translation pipeline.
All exceptions inherit from CompilerError, which itself inherits from
MiniCCError for consistent error handling across the project.

Each pipeline stage owns exactly one branch of the tree, so an error
always identifies the stage that produced it.

Exception Hierarchy
-------------------
CompilerError (base for all pipeline errors)
├── LexError - tokenizer errors
│   └── UnknownTokenError - no token pattern matches at the cursor
├── ParseError (alias CSyntaxError) - syntax builder errors
│   ├── UnexpectedTokenError - expected token kind is absent
│   └── TrailingTokensError - tokens left after the program
├── LowerError - instruction selection errors
│   ├── InvalidFunctionNameError - function name is not an identifier
│   ├── UnsupportedFunctionBodyError - body is not a single return
│   ├── UnsupportedReturnExpressionError - return value is not lowerable
│   └── ConstantOutOfRangeError - constant does not fit in an int
└── EmitError - assembly emission errors
    ├── EmitInvalidFunctionNameError - function label is not an identifier
    └── OutputFileError - writing the assembly file failed

Error Message Format
--------------------
    hello.c:1:22: error: expected ';', found '}'
        int main(void){return 2}
                             ^
    hint: every return statement ends with a semicolon
"""

from typing import Optional

from minicc.errors import MiniCCError, SourceLocation


# =============================================================================
# Base Compiler Exception
# =============================================================================

class CompilerError(MiniCCError):
    """
    Base exception for all translation pipeline errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            hello.c:1:16: error: unknown token '@'
                int main(void){@}
                               ^
        """
        parts = []

        # Location prefix
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Tokenizer Errors
# =============================================================================

class LexError(CompilerError):
    """Base class for errors raised while tokenizing source text."""
    pass


class UnknownTokenError(LexError):
    """
    No token pattern matches at the current position.

    The tokenizer never skips an unrecognized character silently; the
    offending character is reported and tokenization stops.

    Attributes:
        char: The character at the cursor
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown token '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class ParseError(CompilerError):
    """
    Syntax error in C source code.

    Raised when the token sequence does not match the grammar. The parser
    never backtracks, so the first mismatch is reported.
    """
    pass


# The name used throughout the compiler for syntax errors
CSyntaxError = ParseError


class UnexpectedTokenError(ParseError):
    """
    The parser expected one token kind and found another.

    Attributes:
        expected: Description of the expected token kind
        found: Description of the token actually present ("end of input"
               when the sequence ran out)
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, found {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class TrailingTokensError(ParseError):
    """
    Tokens remain after a complete program was parsed.

    Attributes:
        found: Description of the first unconsumed token
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"unexpected {found} after end of program",
            location=location,
            hint="a translation unit contains exactly one function definition",
            source_line=source_line,
        )


# =============================================================================
# Lowering Errors
# =============================================================================

class LowerError(CompilerError):
    """Base class for errors raised while selecting instructions."""
    pass


class InvalidFunctionNameError(LowerError):
    """A function definition's name is not an identifier expression."""

    def __init__(self, found: str):
        self.found = found
        super().__init__(f"function name must be an identifier, got {found}")


class UnsupportedFunctionBodyError(LowerError):
    """A function body is something other than a single return statement."""

    def __init__(self, found: str):
        self.found = found
        super().__init__(
            f"unsupported function body: {found}",
            hint="a function body must be a single 'return' statement",
        )


class UnsupportedReturnExpressionError(LowerError):
    """
    A return statement's value cannot be lowered.

    Only integer constants can be returned: there is no storage for
    variables, so `return x;` parses but does not compile.
    """

    def __init__(self, found: str):
        self.found = found
        super().__init__(
            f"unsupported return expression: {found}",
            hint="only integer constants can be returned",
        )


class ConstantOutOfRangeError(LowerError):
    """
    An integer constant does not fit the 32-bit int type.

    Attributes:
        value: The constant as written
    """

    def __init__(self, value: int, location: Optional[SourceLocation] = None):
        self.value = value
        super().__init__(
            f"integer constant {value} is out of range for type int",
            location=location,
            hint="int constants range from -2147483648 to 2147483647",
        )


# =============================================================================
# Emission Errors
# =============================================================================

class EmitError(CompilerError):
    """Base class for errors raised while writing assembly text."""
    pass


class EmitInvalidFunctionNameError(EmitError):
    """A function definition's label is not an identifier operand."""

    def __init__(self, found: str):
        self.found = found
        super().__init__(f"function label must be an identifier, got {found}")


class OutputFileError(EmitError):
    """
    The assembly text could not be written.

    Attributes:
        path: The output path
        reason: The underlying operating system error text
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write '{path}': {reason}")
