# =============================================================================
# test_lowering.py - Instruction Selection Tests
# =============================================================================
# Tests for lowering the C AST to the instruction AST.
# =============================================================================

import pytest

from minicc.compiler import asm_ast
from minicc.compiler.ast import (
    FunctionDef,
    Identifier,
    IntConstant,
    Program,
    Return,
)
from minicc.compiler.errors import (
    InvalidFunctionNameError,
    LowerError,
    UnsupportedFunctionBodyError,
    UnsupportedReturnExpressionError,
    ConstantOutOfRangeError,
)
from minicc.compiler.lowering import lower, lower_expression, lower_statement
from minicc.compiler.parser import parse_source


def function(body, name=None) -> Program:
    """Helper building Program(FunctionDef(name, body))."""
    return Program(FunctionDef(name or Identifier("main"), body))


# =============================================================================
# Successful Lowering
# =============================================================================

class TestLowering:
    """Tests for the lowering rules."""

    def test_program(self):
        result = lower(parse_source("int main(void){return 0;}"))
        assert result == asm_ast.Program(
            asm_ast.FuncDef(
                asm_ast.Identifier("main"),
                [asm_ast.Mov(asm_ast.Imm(0), asm_ast.Register()), asm_ast.Ret()],
            )
        )

    @pytest.mark.parametrize("value", [0, 1, 2, 42, 255, 2147483647])
    def test_return_constant_is_move_then_ret(self, value):
        """Return(Constant(N)) is exactly mov $N, %eax then ret, in that order."""
        series = lower_statement(Return(IntConstant(value)))
        assert isinstance(series, asm_ast.Series)
        assert series.instructions == [
            asm_ast.Mov(asm_ast.Imm(value), asm_ast.Register()),
            asm_ast.Ret(),
        ]

    def test_function_body_is_flattened(self):
        """The function holds the instructions directly, not a Series."""
        result = lower(function(Return(IntConstant(3))))
        instructions = result.body.instructions
        assert len(instructions) == 2
        assert not any(isinstance(i, asm_ast.Series) for i in instructions)
        assert instructions[0] == asm_ast.Mov(asm_ast.Imm(3), asm_ast.Register())
        assert instructions[1] == asm_ast.Ret()

    def test_function_name_kept(self):
        result = lower(function(Return(IntConstant(3)), Identifier("start")))
        assert result.body.name == asm_ast.Identifier("start")

    def test_expressions(self):
        assert lower_expression(IntConstant(9)) == asm_ast.Imm(9)
        assert lower_expression(Identifier("x")) == asm_ast.Identifier("x")

    def test_input_not_modified(self):
        ast = parse_source("int main(void){return 5;}")
        before = repr(ast)
        lower(ast)
        assert repr(ast) == before


# =============================================================================
# Rejected Trees
# =============================================================================

class TestLoweringErrors:
    """Trees the lowering stage refuses."""

    def test_constant_function_name(self):
        """A function name must be an Identifier."""
        with pytest.raises(InvalidFunctionNameError) as exc_info:
            lower(function(Return(IntConstant(0)), IntConstant(1)))
        assert "Constant(1)" in str(exc_info.value)

    def test_nested_function_body(self):
        inner = FunctionDef(Identifier("inner"), Return(IntConstant(0)))
        with pytest.raises(UnsupportedFunctionBodyError):
            lower(function(inner))

    def test_program_as_function_body(self):
        with pytest.raises(UnsupportedFunctionBodyError):
            lower(function(Program(Return(IntConstant(0)))))

    def test_return_identifier(self):
        """Returning a variable is an explicit limitation."""
        with pytest.raises(UnsupportedReturnExpressionError) as exc_info:
            lower(parse_source("int main(void){return x;}"))
        assert '"x"' in str(exc_info.value)

    def test_return_identifier_statement(self):
        with pytest.raises(UnsupportedReturnExpressionError):
            lower_statement(Return(Identifier("x")))

    @pytest.mark.parametrize("value", [2147483648, 4294967296, 10**20])
    def test_constant_too_large(self, value):
        """Constants that do not fit in an int are rejected, not truncated."""
        with pytest.raises(ConstantOutOfRangeError) as exc_info:
            lower(function(Return(IntConstant(value))))
        assert exc_info.value.value == value
        assert str(value) in str(exc_info.value)

    def test_constant_range_reports_location(self):
        with pytest.raises(ConstantOutOfRangeError) as exc_info:
            lower(parse_source("int main(void){return 4294967296;}", "big.c"))
        location = exc_info.value.location
        assert (location.filename, location.line, location.column) == ("big.c", 1, 23)

    def test_negative_constant_limit(self):
        assert lower_expression(IntConstant(-2**31)) == asm_ast.Imm(-2**31)
        with pytest.raises(ConstantOutOfRangeError):
            lower_expression(IntConstant(-2**31 - 1))

    def test_not_a_program(self):
        with pytest.raises(LowerError):
            lower(Return(IntConstant(0)))

    def test_error_family(self):
        for error_type in (
            InvalidFunctionNameError,
            UnsupportedFunctionBodyError,
            UnsupportedReturnExpressionError,
            ConstantOutOfRangeError,
        ):
            assert issubclass(error_type, LowerError)
