"""
Renders SassScript AST nodes back into SassScript source text.

This module defines the `InspectEmitter` class, used by the CLI and REPL to show
a parsed expression in canonical form. Every binary and unary operation is
wrapped in parentheses, so the emitted text makes the tree's grouping explicit
and parses back into an equal tree.

Output Forms:
    - Binary operations: `(1 + 2)`, `(a, b)` for comma lists, `(a b)` for concatenation
    - Unary operations: `(-x)`, `(/x)`, `(not x)`
    - Calls: `name(a, b)`
    - Variables: `!name`
    - Literals: `"text"`, `10px`, `#ff0000`, `true`

Raises:
    - `NotImplementedError`: If a node kind has no `emit_expr_*` method.
"""

from decimal import Decimal

from sassexpr.sassexpr_ast import (
    ASTNode,
    BinaryOp,
    Funcall,
    Literal,
    LiteralKind,
    Operator,
    UnaryOp,
    Variable,
)

BINARY_SYMBOLS: dict[Operator, str] = {
    Operator.OR: " or ",
    Operator.AND: " and ",
    Operator.EQ: " == ",
    Operator.NEQ: " != ",
    Operator.GT: " > ",
    Operator.GTE: " >= ",
    Operator.LT: " < ",
    Operator.LTE: " <= ",
    Operator.PLUS: " + ",
    Operator.MINUS: " - ",
    Operator.TIMES: " * ",
    Operator.DIV: " / ",
    Operator.MOD: " % ",
    Operator.COMMA: ", ",
    Operator.CONCAT: " ",
}

UNARY_SYMBOLS: dict[Operator, str] = {
    Operator.MINUS: "-",
    Operator.DIV: "/",
    Operator.NOT: "not ",
}


class InspectEmitter:
    """Emits SassScript source text from AST nodes.

    Methods:
        emit_expr(node): Dispatches to `emit_expr_<kind>` for the node.
        get_output(): Returns everything emitted so far, one expression per line.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit(self, node: ASTNode) -> str:
        """Emits `node` and records it in the output buffer."""
        text = self.emit_expr(node)
        self.lines.append(text)
        return text

    def emit_expr(self, node: ASTNode) -> str:
        """
        Dispatches expression emission based on node kind.

        Raises
        ------
        NotImplementedError
            If no emitter exists for the node kind.
        """
        method = getattr(self, f"emit_expr_{node.kind}", None)
        if callable(method):
            return str(method(node))
        raise NotImplementedError(f"No expression emitter for kind '{node.kind}'")

    def emit_expr_binary_op(self, node: BinaryOp) -> str:
        left = self.emit_expr(node.left)
        right = self.emit_expr(node.right)
        return f"({left}{BINARY_SYMBOLS[node.operator]}{right})"

    def emit_expr_unary_op(self, node: UnaryOp) -> str:
        operand = self.emit_expr(node.operand)
        return f"({UNARY_SYMBOLS[node.operator]}{operand})"

    def emit_expr_funcall(self, node: Funcall) -> str:
        args = ", ".join(self.emit_expr(a) for a in node.args)
        return f"{node.name}({args})"

    def emit_expr_variable(self, node: Variable) -> str:
        return f"!{node.name}"

    def emit_expr_literal(self, node: Literal) -> str:
        if node.type is LiteralKind.STRING:
            return self.emit_string(str(node.value))
        if node.type is LiteralKind.NUMBER:
            return self.emit_number(node.value) + (node.unit or "")
        if node.type is LiteralKind.COLOR:
            r, g, b = node.value
            return f"#{r:02x}{g:02x}{b:02x}"
        if node.type is LiteralKind.BOOL:
            return "true" if node.value else "false"
        raise ValueError(f"Unknown literal: {node!r}")

    def emit_string(self, value: str) -> str:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    def emit_number(self, value: int | float) -> str:
        text = repr(value)
        if "e" in text or "E" in text:
            text = format(Decimal(text), "f")
            if "." not in text:
                text += ".0"
        return text


def inspect(node: ASTNode) -> str:
    """Returns the canonical source text of `node`."""
    return InspectEmitter().emit_expr(node)


__all__ = ["InspectEmitter", "inspect"]
