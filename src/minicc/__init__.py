"""
minicc - A Small Ahead-of-Time C Compiler
=========================================

This package translates a minimal subset of C into x86-64 assembly text
for the GNU assembler, and drives the system C toolchain to turn that
text into an executable.

Main Components
---------------
- **compiler**: the translation pipeline
    Lexer → Parser → Lowering → Emitter

- **toolchain**: the external preprocessor and assembler/linker

- **cli**: the `minicc` command

Quick Start
-----------
Compile source text to assembly:
    >>> from minicc import compile_c
    >>> asm = compile_c("int main(void) { return 0; }")

Or use the command-line tool:
    $ minicc hello.c
    $ ./hello; echo $?
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from minicc.errors import MiniCCError, SourceLocation, ToolchainError
from minicc.compiler import (
    MiniCCompiler,
    CompilerOptions,
    CompilerResult,
    Stage,
    compile_c,
    CompilerError,
    LexError,
    ParseError,
    LowerError,
    EmitError,
)

__all__ = [
    "__version__",
    # Compiler
    "MiniCCompiler",
    "CompilerOptions",
    "CompilerResult",
    "Stage",
    "compile_c",
    # Exception hierarchy
    "MiniCCError",
    "SourceLocation",
    "ToolchainError",
    "CompilerError",
    "LexError",
    "ParseError",
    "LowerError",
    "EmitError",
]
