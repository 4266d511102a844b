"""
x86-64 Assembly Emitter
=======================

Serializes the instruction AST into GNU assembler (AT&T syntax) text for
a single translation unit with one global entry symbol.

Output Format
-------------
    .globl main
main:
    movl    $0, %eax
    ret
    .section .note.GNU-stack,"",@progbits

The trailing section directive marks the object as not needing an
executable stack; the GNU linker warns without it.

The text is built in a list of lines and joined once, so a failure part
way through never leaves a partially written file behind.
"""

import logging
from pathlib import Path
from typing import Union

from minicc.compiler import asm_ast
from minicc.compiler.errors import (
    EmitError,
    EmitInvalidFunctionNameError,
    OutputFileError,
)

logger = logging.getLogger(__name__)

INDENT = "    "
MNEMONIC_WIDTH = 8

# 32-bit return-value register in AT&T syntax
RETURN_REGISTER = "%eax"

STACK_NOTE = '.section .note.GNU-stack,"",@progbits'


def emit(program: asm_ast.Program) -> str:
    """
    Render an instruction-tree program as assembly text.

    Args:
        program: Root of the instruction AST

    Returns:
        Assembly source, newline terminated

    Raises:
        EmitError: If the tree cannot be serialized
    """
    if not isinstance(program, asm_ast.Program):
        raise EmitError(f"expected a program, got {type(program).__name__}")

    lines: list[str] = []
    _emit_program(program, lines)
    text = "\n".join(lines) + "\n"
    logger.debug(f"emitted {len(lines)} lines of assembly")
    return text


def write_assembly(program: asm_ast.Program, path: Union[str, Path]) -> Path:
    """
    Emit a program and write the text to path.

    Returns:
        The path written

    Raises:
        EmitError: If the tree cannot be serialized
        OutputFileError: If the file cannot be written
    """
    path = Path(path)
    text = emit(program)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputFileError(str(path), e.strerror or str(e)) from e
    logger.debug(f"wrote {len(text)} bytes to {path}")
    return path


# =============================================================================
# Node Serialization
# =============================================================================

def _emit_program(program: asm_ast.Program, lines: list[str]) -> None:
    body = program.body
    if not isinstance(body, asm_ast.FuncDef):
        raise EmitError(f"program body must be a function, got {type(body).__name__}")

    lines.append(f"{INDENT}.globl {_function_name(body)}")
    _emit_function(body, lines)
    lines.append(f"{INDENT}{STACK_NOTE}")


def _emit_function(func: asm_ast.FuncDef, lines: list[str]) -> None:
    lines.append(f"{_function_name(func)}:")
    for instr in func.instructions:
        _emit_instruction(instr, lines)


def _emit_instruction(instr: asm_ast.Instr, lines: list[str]) -> None:
    if isinstance(instr, asm_ast.Mov):
        operands = f"{_operand(instr.src)}, {_operand(instr.dst)}"
        lines.append(_format_instruction("movl", operands))
    elif isinstance(instr, asm_ast.Ret):
        lines.append(_format_instruction("ret"))
    elif isinstance(instr, asm_ast.Series):
        for child in instr.instructions:
            _emit_instruction(child, lines)
    else:
        raise EmitError(f"{type(instr).__name__} is not an instruction")


def _operand(node: asm_ast.Instr) -> str:
    if isinstance(node, asm_ast.Imm):
        return f"${node.value}"
    if isinstance(node, asm_ast.Register):
        return RETURN_REGISTER
    if isinstance(node, asm_ast.Identifier):
        return node.name
    raise EmitError(f"{type(node).__name__} is not an operand")


def _function_name(func: asm_ast.FuncDef) -> str:
    if not isinstance(func.name, asm_ast.Identifier):
        raise EmitInvalidFunctionNameError(type(func.name).__name__)
    return func.name.name


def _format_instruction(mnemonic: str, operands: str = "") -> str:
    if operands:
        return f"{INDENT}{mnemonic:<{MNEMONIC_WIDTH}}{operands}"
    return f"{INDENT}{mnemonic}"
