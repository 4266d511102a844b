"""
minicc Translation Pipeline
===========================

This package implements the core of a small ahead-of-time compiler for a
minimal subset of C, producing x86-64 assembly text for the GNU toolchain.

- A lexer (tokenizer) for preprocessed C source
- A recursive descent parser producing a C AST
- An instruction selector lowering the C AST to an instruction AST
- An emitter printing the instruction AST as GNU assembler text

Pipeline
--------
    C Source → Lexer → Parser → AST → Lowering → Instructions → Emitter → .s

Preprocessing and assembling/linking are done by external tools; see
minicc.toolchain.

Usage
-----
>>> from minicc.compiler import compile_c
>>> asm_output = compile_c('int main(void) { return 0; }')

Language Subset
---------------
    int NAME(void) { return CONSTANT; }

The parser also accepts an identifier as the return value, but such
programs cannot be lowered yet.
"""

from minicc.compiler.compiler import (
    MiniCCompiler,
    CompilerOptions,
    CompilerResult,
    Stage,
    compile_c,
)
from minicc.compiler.errors import (
    CompilerError,
    LexError,
    UnknownTokenError,
    ParseError,
    CSyntaxError,
    UnexpectedTokenError,
    TrailingTokensError,
    LowerError,
    InvalidFunctionNameError,
    UnsupportedFunctionBodyError,
    UnsupportedReturnExpressionError,
    ConstantOutOfRangeError,
    EmitError,
    EmitInvalidFunctionNameError,
    OutputFileError,
)
from minicc.compiler.lexer import CLexer, CTokenType, CToken, tokenize
from minicc.compiler.parser import CParser, parse_source
from minicc.compiler.lowering import lower
from minicc.compiler.emitter import emit, write_assembly
from minicc.compiler.ast import (
    ASTNode,
    ASTPrinter,
    Expression,
    Statement,
    IntConstant,
    Identifier,
    Program,
    FunctionDef,
    Return,
)

__all__ = [
    # Main API
    "MiniCCompiler",
    "CompilerOptions",
    "CompilerResult",
    "Stage",
    "compile_c",
    # Errors
    "CompilerError",
    "LexError",
    "UnknownTokenError",
    "ParseError",
    "CSyntaxError",
    "UnexpectedTokenError",
    "TrailingTokensError",
    "LowerError",
    "InvalidFunctionNameError",
    "UnsupportedFunctionBodyError",
    "UnsupportedReturnExpressionError",
    "ConstantOutOfRangeError",
    "EmitError",
    "EmitInvalidFunctionNameError",
    "OutputFileError",
    # Stages
    "CLexer",
    "CTokenType",
    "CToken",
    "tokenize",
    "CParser",
    "parse_source",
    "lower",
    "emit",
    "write_assembly",
    # AST Nodes
    "ASTNode",
    "ASTPrinter",
    "Expression",
    "Statement",
    "IntConstant",
    "Identifier",
    "Program",
    "FunctionDef",
    "Return",
]
