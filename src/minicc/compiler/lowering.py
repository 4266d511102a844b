"""
Instruction Selection
=====================

Lowers the C AST to the target instruction AST. Lowering is a plain
structural recursion: no optimization and no register allocation beyond
the single return register.

Rules
-----
| C node                  | Instructions                          |
|-------------------------|---------------------------------------|
| Program(body)           | Program(lower(body))                  |
| FunctionDef(name, body) | FuncDef(name, [mov value, %eax; ret]) |
| Return(IntConstant(n))  | Series([mov $n, %eax; ret])           |
| IntConstant(n)          | Imm(n)                                |
| Identifier(name)        | Identifier(name)                      |

Limitations
-----------
A function body must be exactly one return statement, and only integer
constants can be returned. `return x;` parses, but there is no storage for
variables, so lowering rejects it with UnsupportedReturnExpressionError.
Constants must fit the 32-bit int type (ConstantOutOfRangeError); the
assembler would otherwise truncate the immediate without an error.
"""

import logging

from minicc.compiler import asm_ast
from minicc.compiler import ast as c_ast
from minicc.compiler.ast import ASTPrinter
from minicc.compiler.errors import (
    InvalidFunctionNameError,
    LowerError,
    UnsupportedFunctionBodyError,
    UnsupportedReturnExpressionError,
    ConstantOutOfRangeError,
)

logger = logging.getLogger(__name__)

# Range of the 32-bit int type
INT_MIN = -2**31
INT_MAX = 2**31 - 1


def lower(program: c_ast.Program) -> asm_ast.Program:
    """
    Lower a parsed program to the instruction AST.

    Args:
        program: Root of the C AST

    Returns:
        Root of the instruction AST

    Raises:
        LowerError: If the tree contains a construct with no lowering
    """
    if not isinstance(program, c_ast.Program):
        raise LowerError(f"expected a program, got {_describe(program)}")
    result = lower_statement(program)
    logger.debug(f"lowered {_count_instructions(result)} instructions")
    return result


def lower_statement(stmt: c_ast.Statement) -> asm_ast.Instr:
    """Lower one statement node."""
    if isinstance(stmt, c_ast.Program):
        return asm_ast.Program(lower_statement(stmt.body))
    if isinstance(stmt, c_ast.FunctionDef):
        return _lower_function(stmt)
    if isinstance(stmt, c_ast.Return):
        return _lower_return(stmt)
    raise LowerError(f"cannot lower {_describe(stmt)}")


def lower_expression(expr: c_ast.Expression) -> asm_ast.Instr:
    """Lower one expression node to an operand."""
    if isinstance(expr, c_ast.IntConstant):
        if not INT_MIN <= expr.value <= INT_MAX:
            raise ConstantOutOfRangeError(expr.value, expr.location)
        return asm_ast.Imm(expr.value)
    if isinstance(expr, c_ast.Identifier):
        return asm_ast.Identifier(expr.name)
    raise LowerError(f"cannot lower {_describe(expr)}")


def _lower_function(func: c_ast.FunctionDef) -> asm_ast.FuncDef:
    if not isinstance(func.name, c_ast.Identifier):
        raise InvalidFunctionNameError(_describe(func.name))
    if not isinstance(func.body, c_ast.Return):
        raise UnsupportedFunctionBodyError(_describe(func.body))

    body = _lower_return(func.body)
    return asm_ast.FuncDef(asm_ast.Identifier(func.name.name), list(body.instructions))


def _lower_return(stmt: c_ast.Return) -> asm_ast.Series:
    if not isinstance(stmt.value, c_ast.IntConstant):
        raise UnsupportedReturnExpressionError(_describe(stmt.value))

    return asm_ast.Series([
        asm_ast.Mov(lower_expression(stmt.value), asm_ast.Register()),
        asm_ast.Ret(),
    ])


def _describe(node: object) -> str:
    if isinstance(node, c_ast.Expression):
        return ASTPrinter().print(node)
    return f"{node.__class__.__name__} node"


def _count_instructions(program: asm_ast.Program) -> int:
    body = program.body
    if isinstance(body, asm_ast.FuncDef):
        return len(body.instructions)
    return 0
