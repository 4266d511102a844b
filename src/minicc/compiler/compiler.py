"""
Compiler Main Module
====================

This module provides the main compiler interface. It runs the four
translation stages in order, each consuming the previous stage's output:

    Source text → Lex → Parse → Lower → Emit → Assembly text

Usage
-----
Command line:
    $ minicc hello.c

Programmatic:
    >>> from minicc.compiler import compile_c
    >>> print(compile_c('int main(void) { return 2; }'))
        .globl main
    main:
        movl    $2, %eax
        ret
        .section .note.GNU-stack,"",@progbits

Stopping Early
--------------
CompilerOptions.stop_after selects the last stage to run. The result
holds the output of every stage that ran, so `Stage.PARSE` yields tokens
and an AST but no instructions or assembly.

Error Handling
--------------
The first error in any stage aborts the compilation and propagates to
the caller unchanged. No stage catches another stage's errors.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Optional, Union

from minicc.compiler import asm_ast
from minicc.compiler.ast import Program
from minicc.compiler.emitter import emit
from minicc.compiler.lexer import CLexer, CToken
from minicc.compiler.lowering import lower
from minicc.compiler.parser import CParser

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    """Pipeline stages, in execution order."""
    LEX = 1
    PARSE = 2
    CODEGEN = 3
    EMIT = 4


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        stop_after: Last stage to run (default: run all four)
    """
    stop_after: Stage = Stage.EMIT


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Fields for stages that did not run keep their defaults.

    Attributes:
        filename: Source filename
        stage: Last stage that completed
        tokens: Token list from the lexer
        ast: C AST from the parser
        program: Instruction AST from lowering
        assembly: Assembly text from the emitter
    """
    filename: str = "<input>"
    stage: Optional[Stage] = None
    tokens: list[CToken] = field(default_factory=list)
    ast: Optional[Program] = None
    program: Optional[asm_ast.Program] = None
    assembly: str = ""

    @property
    def token_count(self) -> int:
        return len(self.tokens)


class MiniCCompiler:
    """
    Compiler for the minicc C subset.

    Example:
        compiler = MiniCCompiler(CompilerOptions(stop_after=Stage.PARSE))
        result = compiler.compile_source(source, "hello.c")
        print(result.ast)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile C source text.

        Args:
            source: Preprocessed C source
            filename: Source filename for error messages

        Returns:
            CompilerResult holding each completed stage's output

        Raises:
            CompilerError: If any stage fails
        """
        stop_after = self.options.stop_after
        result = CompilerResult(filename=filename)

        # Stage 1: Lexical analysis
        result.tokens = CLexer(source, filename).tokenize()
        result.stage = Stage.LEX
        if stop_after <= Stage.LEX:
            return result

        # Stage 2: Parsing
        result.ast = CParser(result.tokens, filename, source.splitlines()).parse()
        result.stage = Stage.PARSE
        if stop_after <= Stage.PARSE:
            return result

        # Stage 3: Instruction selection
        result.program = lower(result.ast)
        result.stage = Stage.CODEGEN
        if stop_after <= Stage.CODEGEN:
            return result

        # Stage 4: Emission
        result.assembly = emit(result.program)
        result.stage = Stage.EMIT
        logger.debug(f"{filename}: compiled to {len(result.assembly)} bytes of assembly")
        return result

    def compile_file(self, filepath: Union[str, Path]) -> CompilerResult:
        """
        Compile a preprocessed C source file.

        Raises:
            CompilerError: If compilation fails
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")
        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(path))


def compile_c(source: str, filename: str = "<input>") -> str:
    """
    Compile C source text to assembly text.

    Raises:
        CompilerError: If compilation fails
    """
    return MiniCCompiler().compile_source(source, filename).assembly
