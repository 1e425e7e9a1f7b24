from typing import Any

import pytest

from sassexpr.sassexpr_ast import Literal, LiteralKind
from sassexpr.sassexpr_constants import TokenType
from sassexpr.sassexpr_lexer import Token


class WarningSink:
    """Collects deprecation diagnostics passed to a parser."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture  # type: ignore[misc]
def sink() -> WarningSink:
    return WarningSink()


def make_tokens(*types_vals: tuple[TokenType, Any]) -> list[Token]:
    """Builds tokens on line 1, one column apart."""
    return [Token(t, v, 1, i + 1) for i, (t, v) in enumerate(types_vals)]


def num(value: int | float, unit: str | None = None) -> Literal:
    return Literal(LiteralKind.NUMBER, value, unit)


def string(value: str) -> Literal:
    return Literal(LiteralKind.STRING, value)


def boolean(value: bool) -> Literal:
    return Literal(LiteralKind.BOOL, value)


def color(r: int, g: int, b: int) -> Literal:
    return Literal(LiteralKind.COLOR, (r, g, b))
