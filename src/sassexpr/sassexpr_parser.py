"""
SassScript Expression Parser

Parses a stream of SassScript tokens into an abstract syntax tree.

The grammar is a fixed chain of precedence levels, loosest binding first:

    expr (comma) -> concat (juxtaposition) -> or -> and -> eq/neq
    -> relational (gt, gte, lt, lte) -> additive (plus, minus)
    -> multiplicative (times, div, mod) -> unary minus -> unary div
    -> unary not -> funcall -> paren -> variable -> literal

Parser Behavior
---------------
- Each level returns an ASTNode, or None when its production does not apply.
  None propagates upward silently so that a higher level may try another branch.
- Hard failures (a required sub-expression or token is missing) raise
  `SassScriptSyntaxError` and end the parse.
- Tokens are only consumed after a successful match; the cursor never moves back.
- Binary levels fold left-associatively: `1 - 2 - 3` is `(1 - 2) - 3`.
- A bare identifier that is not a function call is read as an unquoted string
  and reported to the `warn` sink as deprecated.
- The entry point does not require the token source to be exhausted; trailing
  tokens are left for the host grammar.

Entry Points
------------
- `Parser(tokens).parse()`: Parse one expression from any token source.
- `parse(text)`: Lex and parse a string.
- `parse_tokens(tokens)`: Parse a list of already-built tokens.

Raises
------
SassScriptSyntaxError
    Raised when a required expression or token is missing.
"""

from __future__ import annotations

import logging
from typing import Callable

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
from sassexpr.sassexpr_constants import LITERAL_TOKENS, TokenType
from sassexpr.sassexpr_errors import SassScriptSyntaxError
from sassexpr.sassexpr_lexer import Lexer, Token, TokenSource, TokenStream

log = logging.getLogger(__name__)

Level = Callable[[], "ASTNode | None"]
WarnSink = Callable[[str], None]


def log_warning(message: str) -> None:
    log.warning(message)


class Parser:
    """
    SassScript Parser Class

    Holds the token cursor for a single parse. Instances are not reusable across
    expressions and are not shared between threads.

    Attributes
    ----------
    tokens : TokenSource
        The token source being consumed.
    warn : Callable[[str], None]
        Receives non-fatal deprecation diagnostics. Defaults to logging them at
        WARNING level.

    Methods
    -------
    parse() -> ASTNode
        Parse one expression and return its root node.
    try_tok(*types) -> Token | None
        Consume and return the next token if its type is one of `types`.
    assert_tok(*types) -> Token
        Like `try_tok`, but raise when the token is absent.
    assert_expr(level) -> ASTNode
        Run a grammar level, raising when it yields nothing.
    """

    def __init__(self, tokens: TokenSource, warn: WarnSink | None = None) -> None:
        self.tokens: TokenSource = tokens
        self.warn: WarnSink = warn if warn is not None else log_warning

    def parse(self) -> ASTNode:
        """Parse one expression and return the root of its AST."""
        return self.assert_expr(self.expr)

    # Binary levels

    def expr(self) -> ASTNode | None:
        return self.binary(self.concat, TokenType.COMMA)

    def concat(self) -> ASTNode | None:
        e = self.or_expr()
        if e is None:
            return None
        while True:
            sub = self.or_expr()
            if sub is None:
                return e
            e = BinaryOp(e, sub, Operator.CONCAT, line=e.line, col=e.col)

    def or_expr(self) -> ASTNode | None:
        return self.binary(self.and_expr, TokenType.OR)

    def and_expr(self) -> ASTNode | None:
        return self.binary(self.eq_or_neq, TokenType.AND)

    def eq_or_neq(self) -> ASTNode | None:
        return self.binary(self.relational, TokenType.EQ, TokenType.NEQ)

    def relational(self) -> ASTNode | None:
        return self.binary(
            self.plus_or_minus,
            TokenType.GT,
            TokenType.GTE,
            TokenType.LT,
            TokenType.LTE,
        )

    def plus_or_minus(self) -> ASTNode | None:
        return self.binary(self.times_div_or_mod, TokenType.PLUS, TokenType.MINUS)

    def times_div_or_mod(self) -> ASTNode | None:
        return self.binary(
            self.unary_minus, TokenType.TIMES, TokenType.DIV, TokenType.MOD
        )

    def binary(self, sub: Level, *ops: TokenType) -> ASTNode | None:
        """Left-associative production over `ops`, with `sub` as operands."""
        e = sub()
        if e is None:
            return None
        while True:
            tok = self.try_tok(*ops)
            if tok is None:
                return e
            right = self.assert_expr(sub)
            e = BinaryOp(e, right, Operator.from_token(tok.type), line=e.line, col=e.col)

    # Unary levels

    def unary_minus(self) -> ASTNode | None:
        return self.unary(TokenType.MINUS, self.unary_minus, self.unary_div)

    def unary_div(self) -> ASTNode | None:
        # For strings, so /foo/bar works
        return self.unary(TokenType.DIV, self.unary_div, self.unary_not)

    def unary_not(self) -> ASTNode | None:
        return self.unary(TokenType.NOT, self.unary_not, self.funcall)

    def unary(self, op: TokenType, this: Level, sub: Level) -> ASTNode | None:
        tok = self.try_tok(op)
        if tok is None:
            return sub()
        operand = self.assert_expr(this)
        return UnaryOp(operand, Operator.from_token(op), line=tok.line, col=tok.col)

    # Leaf productions

    def funcall(self) -> ASTNode | None:
        name = self.try_tok(TokenType.IDENT)
        if name is None:
            return self.paren()
        # An identifier without arguments is just a string
        if self.try_tok(TokenType.LPAREN) is None:
            self.warn(
                f"Implicit strings are deprecated. '{name.value}' was not quoted. "
                f'Please add double quotes. E.g. "{name.value}".'
            )
            return Literal(LiteralKind.STRING, name.value, line=name.line, col=name.col)
        args = self.arglist()
        self.assert_tok(TokenType.RPAREN)
        return Funcall(name.value, tuple(args), line=name.line, col=name.col)

    def arglist(self) -> list[ASTNode]:
        """Comma-separated arguments, each parsed at the concatenation level."""
        e = self.concat()
        if e is None:
            return []
        args = [e]
        while self.try_tok(TokenType.COMMA) is not None:
            args.append(self.assert_expr(self.concat))
        return args

    def paren(self) -> ASTNode | None:
        if self.try_tok(TokenType.LPAREN) is None:
            return self.variable()
        e = self.assert_expr(self.expr)
        self.assert_tok(TokenType.RPAREN)
        return e

    def variable(self) -> ASTNode | None:
        c = self.try_tok(TokenType.CONST)
        if c is None:
            return self.literal()
        return Variable(c.value, line=c.line, col=c.col)

    def literal(self) -> ASTNode | None:
        t = self.try_tok(*LITERAL_TOKENS)
        if t is None:
            return None
        return Literal(
            LiteralKind.from_token(t.type), t.value, t.unit, line=t.line, col=t.col
        )

    # Matching primitives

    def try_tok(self, *types: TokenType) -> Token | None:
        peeked = self.tokens.peek()
        if peeked is not None and peeked.type in types:
            return self.tokens.next()
        return None

    def assert_tok(self, *types: TokenType) -> Token:
        tok = self.try_tok(*types)
        if tok is not None:
            return tok
        expected = " or ".join(str(t) for t in types)
        raise self.error(f"Expected {expected} token, was {self.describe_next()}.")

    def assert_expr(self, level: Level) -> ASTNode:
        e = level()
        if e is not None:
            return e
        raise self.error(f"Expected expression, was {self.describe_next()}.")

    def describe_next(self) -> str:
        peeked = self.tokens.peek()
        if peeked is None:
            return "end of text"
        return f"{peeked.type} token"

    def error(self, message: str) -> SassScriptSyntaxError:
        return SassScriptSyntaxError(message, self.tokens.line, self.tokens.offset)


def parse(
    text: str, line: int = 1, offset: int = 1, warn: WarnSink | None = None
) -> ASTNode:
    """Lex `text` and parse one expression from it.

    Args:
        text: SassScript source.
        line: Line number of the first character, for diagnostics.
        offset: Column of the first character, for diagnostics.
        warn: Deprecation sink; see `Parser`.
    """
    return Parser(Lexer.from_string(text, line, offset), warn).parse()


def parse_tokens(tokens: list[Token], warn: WarnSink | None = None) -> ASTNode:
    """Parse one expression from an already-tokenized list."""
    return Parser(TokenStream(tokens), warn).parse()


__all__ = ["Parser", "parse", "parse_tokens"]
