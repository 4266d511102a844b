"""
Target Instruction AST
======================

Node types describing x86-64 code in a form that can be printed directly
as GNU assembler text. The lowering stage builds this tree from the C
AST and the emitter serializes it.

Node Hierarchy
--------------
Instr (base)
├── Program - translation unit, one body node
├── FuncDef - labelled function with an ordered instruction list
├── Mov - 32-bit move, src -> dst
├── Ret - return to caller
├── Series - instructions grouped for splicing into a parent list
└── Operands
    ├── Imm - immediate integer
    ├── Register - the 32-bit return-value register (%eax)
    └── Identifier - a symbol name

Series has no meaning at run time. It lets a lowering rule return several
instructions as one value; the emitter prints its contents in order.
"""

from dataclasses import dataclass, field


@dataclass
class Instr:
    """Base class for all instruction-tree nodes."""
    pass


# =============================================================================
# Operands
# =============================================================================

@dataclass
class Imm(Instr):
    """Immediate integer operand."""
    value: int


@dataclass
class Register(Instr):
    """The integer return-value register."""
    pass


@dataclass
class Identifier(Instr):
    """Symbol name, used for function labels."""
    name: str


# =============================================================================
# Instructions
# =============================================================================

@dataclass
class Mov(Instr):
    """Move src into dst."""
    src: Instr
    dst: Instr


@dataclass
class Ret(Instr):
    """Return from the current function."""
    pass


@dataclass
class Series(Instr):
    """An ordered group of instructions."""
    instructions: list[Instr] = field(default_factory=list)


# =============================================================================
# Top-Level Structure
# =============================================================================

@dataclass
class FuncDef(Instr):
    """
    Function definition.

    Attributes:
        name: The function label, an Identifier for well-formed trees
        instructions: The function body, in execution order
    """
    name: Instr
    instructions: list[Instr] = field(default_factory=list)


@dataclass
class Program(Instr):
    """Translation unit: one top-level node, normally a FuncDef."""
    body: Instr
