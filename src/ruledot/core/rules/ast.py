"""Abstract Syntax Tree nodes for rule expressions.

The tree is produced by an external parser and only read here. Every
node records the position of its first token in the rule text and
declares its variant name in ``kind``.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional

@dataclass(frozen=True)
class Position:
    """Location of a node in the rule source."""
    offset: int
    line: int = 1
    column: int = 0

@dataclass(eq=False)
class Node:
    """Base class for all AST nodes."""
    kind: ClassVar[str] = "Node"

@dataclass(eq=False)
class Primary(Node):
    """An identifier, a literal, or a parenthesized sub-expression."""
    kind: ClassVar[str] = "Primary"
    pos: Position
    ident: str | None = None
    number: int | None = None
    string: str | None = None
    sub_expression: Optional["Expression"] = None

@dataclass(eq=False)
class Unary(Node):
    """Represents a unary operation (e.g., !a, -1) or a bare primary."""
    kind: ClassVar[str] = "Unary"
    pos: Position
    op: str | None = None
    unary: Optional["Unary"] = None
    primary: Primary | None = None

@dataclass(eq=False)
class BitOperation(Node):
    """A chain of unaries joined by bitwise operators (e.g., a & 4)."""
    kind: ClassVar[str] = "BitOperation"
    pos: Position
    unary: Unary
    op: str | None = None
    next: Optional["BitOperation"] = None

@dataclass(eq=False)
class Array(Node):
    """Represents a literal array of strings or of integers.

    The parser only builds non-empty arrays holding one of the two lists.
    An array built with neither is drawn with an empty label.
    """
    kind: ClassVar[str] = "Array"
    pos: Position
    strings: list[str] = field(default_factory=list)
    numbers: list[int] = field(default_factory=list)

@dataclass(eq=False)
class ArrayComparison(Node):
    """Represents a comparison against an array (e.g., a in [1, 2])."""
    kind: ClassVar[str] = "ArrayComparison"
    pos: Position
    op: str
    array: Array

@dataclass(eq=False)
class ScalarComparison(Node):
    """Represents a comparison against a scalar (e.g., == 1)."""
    kind: ClassVar[str] = "ScalarComparison"
    pos: Position
    op: str
    next: BitOperation

@dataclass(eq=False)
class Comparison(Node):
    """A bit operation optionally compared to an array or a scalar."""
    kind: ClassVar[str] = "Comparison"
    pos: Position
    bit_operation: BitOperation
    array_comparison: ArrayComparison | None = None
    scalar_comparison: ScalarComparison | None = None

@dataclass(eq=False)
class Expression(Node):
    """A comparison optionally joined to the next expression (e.g., a && b)."""
    kind: ClassVar[str] = "Expression"
    pos: Position
    comparison: Comparison
    op: str | None = None
    next: Optional["Expression"] = None

@dataclass(eq=False)
class BooleanExpression(Node):
    """Wraps the top-level expression of a rule."""
    kind: ClassVar[str] = "BooleanExpression"
    pos: Position
    expression: Expression

@dataclass(eq=False)
class Rule(Node):
    """Root of a parsed rule."""
    kind: ClassVar[str] = "Rule"
    pos: Position
    boolean_expression: BooleanExpression
    expr: str = ""
