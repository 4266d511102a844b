"""
minicc Error Hierarchy
======================

This module defines the root of the exception hierarchy for minicc.
All exceptions inherit from MiniCCError, allowing callers to catch every
compiler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
MiniCCError (base)
├── CompilerError (translation pipeline, see minicc.compiler.errors)
│   ├── LexError
│   ├── ParseError
│   ├── LowerError
│   └── EmitError
└── ToolchainError (external preprocessor / assembler-linker)

Design Philosophy
-----------------
Compiler errors capture source location information (filename, line,
column) when it is known. Error messages follow this format:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional, Sequence


# =============================================================================
# Base Exception Class
# =============================================================================

class MiniCCError(Exception):
    """
    Base exception for all minicc errors.

    Every exception raised by the compiler or its driver inherits from
    this class:

        try:
            compile_c("int main(void) { return 0; }")
        except MiniCCError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# External Toolchain Exceptions
# =============================================================================

class ToolchainError(MiniCCError):
    """
    An external tool (preprocessor, assembler or linker) failed.

    Raised when:
    - The tool executable cannot be found
    - The tool exits with a non-zero status
    - The tool does not finish within the configured timeout

    Attributes:
        command: The command line that was run
        return_code: Exit status of the tool (None if it never ran)
        stderr: Captured standard error output
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        return_code: Optional[int] = None,
        stderr: str = "",
    ):
        self.message = message
        self.command = list(command) if command else []
        self.return_code = return_code
        self.stderr = stderr
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.command:
            parts.append(f"command: {' '.join(self.command)}")
        if self.return_code is not None:
            parts.append(f"exit status: {self.return_code}")
        if self.stderr.strip():
            parts.append(self.stderr.rstrip())
        return "\n".join(parts)
