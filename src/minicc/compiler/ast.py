"""
C Abstract Syntax Tree (AST) Definitions
========================================

This module defines the AST node types produced by the parser. The AST
represents the structure of a C program after parsing, ready for
lowering to target instructions.

Node Hierarchy
--------------
ASTNode (base)
├── Expressions
│   ├── IntConstant - integer literal
│   └── Identifier - name reference
└── Statements
    ├── Program - root node, exactly one child statement
    ├── FunctionDef - function definition
    └── Return - return statement

Design Notes
------------
- All nodes are dataclasses; equality ignores source locations
- The tree is strictly owned: no node is shared between parents
- FunctionDef.name is typed as a general Expression because the tree can
  be built by hand; the lowering stage rejects anything but Identifier
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from minicc.errors import SourceLocation


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears (optional)
    """
    location: Optional[SourceLocation] = field(
        default=None, kw_only=True, compare=False, repr=False
    )


@dataclass
class Expression(ASTNode):
    """Base class for expression nodes."""
    pass


@dataclass
class Statement(ASTNode):
    """Base class for statement nodes."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class IntConstant(Expression):
    """Integer literal, e.g. `42`."""
    value: int


@dataclass
class Identifier(Expression):
    """Name reference, e.g. `main`."""
    name: str


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Program(Statement):
    """
    Root node of the AST representing a complete translation unit.

    Attributes:
        body: The single top-level statement (a FunctionDef when parsed)
    """
    body: Statement


@dataclass
class FunctionDef(Statement):
    """
    Function definition: `int name(void) { body }`.

    Attributes:
        name: The function name, an Identifier for well-formed trees
        body: The single statement making up the function body
    """
    name: Expression
    body: Statement


@dataclass
class Return(Statement):
    """Return statement: `return value;`."""
    value: Expression


# =============================================================================
# Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care
    about:

        class FunctionCounter(ASTVisitor):
            def visit_FunctionDef(self, node):
                ...
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to visit_<ClassName>, falling back to generic_visit."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)


# =============================================================================
# AST Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for the source AST.

    Produces a fixed, indented rendering, four spaces per level:

        Program(
            Function(
                name="main",
                body={
                    Return(
                        Constant(2)
                    )
                }
            )
        )

    Usage:
        print(ASTPrinter().print(ast))
    """

    INDENT = "    "

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Render the AST rooted at node and return it as a string."""
        self.output = []
        self.indent_level = 0
        if isinstance(node, Expression):
            return self._expr_str(node)
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        self.output.append(f"{self.INDENT * self.indent_level}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def visit_Program(self, node: Program):
        self._emit("Program(")
        self._indent()
        self.visit(node.body)
        self._dedent()
        self._emit(")")

    def visit_FunctionDef(self, node: FunctionDef):
        self._emit("Function(")
        self._indent()
        self._emit(f"name={self._expr_str(node.name)},")
        self._emit("body={")
        self._indent()
        self.visit(node.body)
        self._dedent()
        self._emit("}")
        self._dedent()
        self._emit(")")

    def visit_Return(self, node: Return):
        self._emit("Return(")
        self._indent()
        self._emit(self._expr_str(node.value))
        self._dedent()
        self._emit(")")

    def _expr_str(self, expr: Expression) -> str:
        """Render an expression on a single line."""
        if isinstance(expr, IntConstant):
            return f"Constant({expr.value})"
        if isinstance(expr, Identifier):
            return f'"{expr.name}"'
        return f"<{expr.__class__.__name__}>"
