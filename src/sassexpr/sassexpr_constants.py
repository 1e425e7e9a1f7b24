"""
Token vocabulary shared by the SassScript lexer and parser.

Defines:
    TokenType: Closed enumeration of every token the lexer can produce.
    token_hashmap: Maps source spellings (symbols and keywords) to token types.
    LITERAL_TOKENS: Token types that carry a literal value.
    COLOR_NAMES: The sixteen HTML4 colour keywords, lexed as colour literals.
"""

from enum import Enum


class TokenType(Enum):
    """Token kinds for SassScript expressions.

    The value is the lowercase name used in diagnostics, e.g.
    ``Expected rparen token, was end of text.``
    """

    IDENT = "ident"
    CONST = "const"
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMA = "comma"
    STRING = "string"
    NUMBER = "number"
    COLOR = "color"
    BOOL = "bool"
    OR = "or"
    AND = "and"
    NOT = "not"
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

    def __str__(self) -> str:
        return self.value


token_hashmap: dict[str, TokenType] = {
    # Punctuation
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    # Arithmetic
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.TIMES,
    "/": TokenType.DIV,
    "%": TokenType.MOD,
    # Comparison
    "==": TokenType.EQ,
    "!=": TokenType.NEQ,
    ">": TokenType.GT,
    ">=": TokenType.GTE,
    "<": TokenType.LT,
    "<=": TokenType.LTE,
    # Keywords
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
}

LITERAL_TOKENS: tuple[TokenType, ...] = (
    TokenType.STRING,
    TokenType.NUMBER,
    TokenType.COLOR,
    TokenType.BOOL,
)

BOOL_WORDS: dict[str, bool] = {"true": True, "false": False}

COLOR_NAMES: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "white": (255, 255, 255),
    "maroon": (128, 0, 0),
    "red": (255, 0, 0),
    "purple": (128, 0, 128),
    "fuchsia": (255, 0, 255),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "olive": (128, 128, 0),
    "yellow": (255, 255, 0),
    "navy": (0, 0, 128),
    "blue": (0, 0, 255),
    "teal": (0, 128, 128),
    "aqua": (0, 255, 255),
}

__all__ = [
    "BOOL_WORDS",
    "COLOR_NAMES",
    "LITERAL_TOKENS",
    "TokenType",
    "token_hashmap",
]
