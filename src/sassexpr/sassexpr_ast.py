"""
Defines the abstract syntax tree (AST) produced by the SassScript parser.

Classes:
    ASTNode:
        Base class of every node. Nodes are frozen dataclasses: built once by the
        parser, bottom-up, and never mutated afterwards.

    BinaryOp, UnaryOp, Funcall, Variable, Literal:
        The closed set of node variants.

    Operator, LiteralKind:
        Closed enumerations for operator and literal tags.

    ASTDict:
        TypedDict representation for serializing nodes to plain Python dictionaries,
        suitable for JSON output or debugging.

Each node tracks:
    kind (str): Short tag of the variant ("binary_op", "funcall", ...).
    line (int): Source line number for error messages.
    col (int): Source column number for error messages.

Source positions are metadata only: they are excluded from equality, so two
parses of the same expression at different offsets compare equal.

Example:
    node = BinaryOp(Literal(LiteralKind.NUMBER, 1), Literal(LiteralKind.NUMBER, 2), Operator.PLUS)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, TypedDict

from sassexpr.sassexpr_constants import TokenType


class Operator(Enum):
    """Operators carried by BinaryOp and UnaryOp nodes."""

    COMMA = "comma"
    CONCAT = "concat"
    OR = "or"
    AND = "and"
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    PLUS = "plus"
    MINUS = "minus"
    TIMES = "times"
    DIV = "div"
    MOD = "mod"
    NOT = "not"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, type_: TokenType) -> "Operator":
        """Maps an operator token type to its AST operator.

        Raises:
            ValueError: If the token type is not an operator.
        """
        return cls(type_.value)


class LiteralKind(Enum):
    STRING = "string"
    NUMBER = "number"
    COLOR = "color"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, type_: TokenType) -> "LiteralKind":
        return cls(type_.value)


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an AST node used for serialization.

    Fields:
        kind (str): The node variant (e.g., "binary_op", "funcall").
        operator (str): Operator name for binary and unary operations.
        name (str): Function or variable name.
        type (str): Literal kind for literals.
        value (Any): Literal value; colours serialize as an [r, g, b] list.
        unit (str | None): Number unit, if any.
        line (int): Line number in the source code where the node originates.
        col (int): Column number in the source code where the node originates.
        children (list[ASTDict]): Operands or arguments, in order.
    """

    kind: str
    operator: str
    name: str
    type: str
    value: Any
    unit: str | None
    line: int
    col: int
    children: list["ASTDict"]


@dataclass(frozen=True)
class ASTNode:
    """
    Base class for SassScript AST nodes.

    Source location fields are keyword-only, excluded from comparison and repr.
    """

    kind = "node"

    line: int = field(default=0, kw_only=True, compare=False, repr=False)
    col: int = field(default=0, kw_only=True, compare=False, repr=False)

    def children(self) -> tuple["ASTNode", ...]:
        """Returns the direct child nodes, in source order."""
        return ()

    def _base_dict(self) -> ASTDict:
        return {"kind": self.kind, "line": self.line, "col": self.col}

    def to_dict(self) -> ASTDict:
        """Converts the node (and all descendants) into nested dictionaries."""
        d = self._base_dict()
        d["children"] = [c.to_dict() for c in self.children()]
        return d


@dataclass(frozen=True)
class BinaryOp(ASTNode):
    """`left <operator> right`; also comma lists and juxtaposition concatenation."""

    kind = "binary_op"

    left: ASTNode
    right: ASTNode
    operator: Operator

    def children(self) -> tuple[ASTNode, ...]:
        return (self.left, self.right)

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["operator"] = str(self.operator)
        return d

    def __repr__(self) -> str:
        return f"BinaryOp({self.operator}, {self.left!r}, {self.right!r})"


@dataclass(frozen=True)
class UnaryOp(ASTNode):
    kind = "unary_op"

    operand: ASTNode
    operator: Operator

    def children(self) -> tuple[ASTNode, ...]:
        return (self.operand,)

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["operator"] = str(self.operator)
        return d

    def __repr__(self) -> str:
        return f"UnaryOp({self.operator}, {self.operand!r})"


@dataclass(frozen=True)
class Funcall(ASTNode):
    kind = "funcall"

    name: str
    args: tuple[ASTNode, ...] = ()

    def children(self) -> tuple[ASTNode, ...]:
        return self.args

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["name"] = self.name
        return d

    def __repr__(self) -> str:
        args = ", ".join(repr(a) for a in self.args)
        return f"Funcall({self.name!r}, [{args}])"


@dataclass(frozen=True)
class Variable(ASTNode):
    kind = "variable"

    name: str

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["name"] = self.name
        return d

    def __repr__(self) -> str:
        return f"Variable({self.name!r})"


@dataclass(frozen=True)
class Literal(ASTNode):
    """A string, number, colour or boolean value.

    Numbers may carry a unit (``Literal(LiteralKind.NUMBER, 10, "px")``);
    colours hold an ``(r, g, b)`` tuple.
    """

    kind = "literal"

    type: LiteralKind
    value: Any
    unit: str | None = None

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["type"] = str(self.type)
        d["value"] = list(self.value) if isinstance(self.value, tuple) else self.value
        d["unit"] = self.unit
        return d

    def __repr__(self) -> str:
        unit = self.unit or ""
        return f"Literal({self.type}, {self.value!r}{unit})"


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yields `node` and all of its descendants, depth-first, pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


__all__ = [
    "ASTDict",
    "ASTNode",
    "BinaryOp",
    "Funcall",
    "Literal",
    "LiteralKind",
    "Operator",
    "UnaryOp",
    "Variable",
    "walk",
]
