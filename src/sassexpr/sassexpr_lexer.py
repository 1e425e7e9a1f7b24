"""
Lexical analyzer for SassScript expressions.

This module provides the token sources consumed by the SassScript parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Lazily converts a CharacterStream into tokens, with one token of lookahead.
    TokenStream: The same peek/next/done protocol over an already-built token list.
    TokenSource: Protocol satisfied by both, and by any host-supplied lexer.

Features:
    - Skips whitespace
    - Supports longest-match recognition of operators
    - Recognizes:
        * Identifiers, and the keywords `and`, `or`, `not`, `true`, `false`
        * HTML4 colour names and `#rgb` / `#rrggbb` colours
        * Variables (`!name` or `$name`)
        * Numbers (integer and decimal) with an optional unit (`10px`, `50%`)
        * Double-quoted strings (with backslash escapes)

Raises:
    SassScriptSyntaxError: On unterminated strings, malformed colours, or stray characters.

Example:
    >>> lexer = Lexer(CharacterStream("1 + 2"))
    >>> lexer.next()
    Token(number, 1)
"""

import logging
from typing import Any, Iterator, Protocol

from sassexpr.sassexpr_constants import (
    BOOL_WORDS,
    COLOR_NAMES,
    TokenType,
    token_hashmap,
)
from sassexpr.sassexpr_errors import SassScriptSyntaxError

log = logging.getLogger(__name__)

HEX_DIGITS = "0123456789abcdefABCDEF"


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            SassScriptSyntaxError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise SassScriptSyntaxError(
                "Unexpected end of text.", self.line, self.column
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token of a SassScript expression.

    Attributes:
        type (TokenType): The token's kind.
        value (Any): The literal value (str, int, float, (r, g, b) tuple or bool),
            the variable name for `CONST` tokens, or the source text for operators.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
        unit (str | None): Unit suffix of a number token (e.g. "px"), else None.
    """

    __slots__ = ("type", "value", "line", "col", "unit")

    def __init__(
        self,
        type_: TokenType,
        value: Any,
        line: int = 0,
        col: int = 0,
        unit: str | None = None,
    ):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)
        object.__setattr__(self, "unit", unit)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set '{name}'")

    def __repr__(self) -> str:
        if self.unit:
            return f"Token({self.type}, {self.value}{self.unit})"
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.unit == other.unit
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.unit, self.line, self.col))

    def width(self) -> int:
        """Estimates how many source characters the token spans.

        Exact for names, keywords, operators and plain numbers. Escaped strings,
        short `#rgb` colours and colour names are approximated.
        """
        if self.type is TokenType.CONST:
            return len(self.value) + 1
        if self.type is TokenType.STRING:
            return len(self.value) + 2
        if self.type is TokenType.NUMBER:
            return len(str(self.value)) + len(self.unit or "")
        if self.type is TokenType.BOOL:
            return len(str(self.value))
        if self.type is TokenType.COLOR:
            return 7
        return len(self.value)


class TokenSource(Protocol):
    """What the parser needs from a lexer.

    `line` and `offset` give the position of the next token, or of the end of
    input once the source is exhausted. They are used for error messages.
    """

    @property
    def line(self) -> int: ...  # pragma: no cover

    @property
    def offset(self) -> int: ...  # pragma: no cover

    def peek(self) -> Token | None: ...  # pragma: no cover

    def next(self) -> Token | None: ...  # pragma: no cover

    def done(self) -> bool: ...  # pragma: no cover


class Lexer:
    """Lexical analyzer for SassScript.

    Tokens are produced lazily; at most one token is read ahead, so a host
    grammar can resume from the character stream after the parser returns.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self._peeked: Token | None = None

    @classmethod
    def from_string(cls, source: str, line: int = 1, offset: int = 1) -> "Lexer":
        return cls(CharacterStream(source, 0, line, offset))

    # Token source protocol

    def peek(self) -> Token | None:
        """Returns the next token without consuming it, or None at end of input."""
        if self._peeked is None:
            self._peeked = self.next_token()
        return self._peeked

    def next(self) -> Token | None:
        """Consumes and returns the next token, or None at end of input."""
        tok = self.peek()
        self._peeked = None
        return tok

    def done(self) -> bool:
        return self.peek() is None

    @property
    def line(self) -> int:
        tok = self.peek()
        return tok.line if tok is not None else self.stream.line

    @property
    def offset(self) -> int:
        tok = self.peek()
        return tok.col if tok is not None else self.stream.column

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next()
            if tok is None:
                return
            yield tok

    # Scanning

    def peek_char(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek_char() in " \t\r\n\f":
            self.advance()

    def error(self, message: str, line: int, col: int) -> SassScriptSyntaxError:
        return SassScriptSyntaxError(message, line, col)

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(2):  # longest operator is two characters
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def read_name(self) -> str:
        name = ""
        while not self.stream.end_of_file():
            ch = self.peek_char()
            # A trailing hyphen is an operator, so `!a-!b` is a subtraction
            if ch == "-" and name:
                following = self.peek_char(1)
                if not (following.isalnum() or following == "_"):
                    break
            elif not (ch.isalnum() or ch == "_"):
                break
            name += self.advance()
        return name

    def read_number(self, line: int, col: int) -> Token:
        digits = ""
        has_dot = False
        while not self.stream.end_of_file():
            ch = self.peek_char()
            if ch.isdigit():
                digits += self.advance()
            elif ch == "." and not has_dot and self.peek_char(1).isdigit():
                has_dot = True
                digits += self.advance()
            else:
                break

        unit = None
        if self.peek_char() == "%":
            unit = self.advance()
        elif self.peek_char().isalpha():
            unit = ""
            while not self.stream.end_of_file() and self.peek_char().isalpha():
                unit += self.advance()

        value: int | float = float(digits) if has_dot else int(digits)
        return Token(TokenType.NUMBER, value, line, col, unit)

    def read_string(self, line: int, col: int) -> Token:
        self.advance()  # opening quote
        val = ""
        while not self.stream.end_of_file():
            ch = self.peek_char()
            if ch == "\\":
                self.advance()
                if not self.stream.end_of_file():
                    val += self.advance()
            elif ch == '"':
                self.advance()
                return Token(TokenType.STRING, val, line, col)
            else:
                val += self.advance()
        raise self.error("Unterminated string.", line, col)

    def read_color(self, line: int, col: int) -> Token:
        self.advance()  # '#'
        digits = ""
        while not self.stream.end_of_file() and self.peek_char().isalnum():
            digits += self.advance()
        if len(digits) not in (3, 6) or any(d not in HEX_DIGITS for d in digits):
            raise self.error(f"Invalid color: '#{digits}'.", line, col)
        if len(digits) == 3:
            digits = "".join(d * 2 for d in digits)
        rgb = (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        return Token(TokenType.COLOR, rgb, line, col)

    def read_variable(self, line: int, col: int) -> Token:
        self.advance()  # '!' or '$'
        return Token(TokenType.CONST, self.read_name(), line, col)

    def next_token(self) -> Token | None:
        """Scans and returns the next Token from the stream, or None at end of input.

        Raises:
            SassScriptSyntaxError: If a malformed token is encountered.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return None

        ch = self.peek_char()
        nxt = self.peek_char(1)
        line, col = self.stream.line, self.stream.column

        # 1. Identifier, keyword, boolean or colour name
        if ch.isalpha() or ch == "_":
            ident = self.read_name()
            if ident in token_hashmap:
                return Token(token_hashmap[ident], ident, line, col)
            if ident in BOOL_WORDS:
                return Token(TokenType.BOOL, BOOL_WORDS[ident], line, col)
            if ident in COLOR_NAMES:
                return Token(TokenType.COLOR, COLOR_NAMES[ident], line, col)
            return Token(TokenType.IDENT, ident, line, col)

        # 2. Variable reference
        if ch in "!$" and (nxt.isalpha() or nxt == "_"):
            return self.read_variable(line, col)

        # 3. Number, optionally with a unit
        if ch.isdigit() or (ch == "." and nxt.isdigit()):
            return self.read_number(line, col)

        # 4. String
        if ch == '"':
            return self.read_string(line, col)

        # 5. Colour
        if ch == "#":
            return self.read_color(line, col)

        # 6. Operator or punctuation
        token = self.match_operator()
        if token:
            return token

        raise self.error(f"Unexpected character '{ch}'.", line, col)


class TokenStream:
    """Token source over a list of tokens that were produced elsewhere.

    Args:
        tokens (list[Token]): The tokens, in source order.
        end_line (int | None): Line reported once the list is exhausted.
            Defaults to the last token's line.
        end_offset (int | None): Offset reported once the list is exhausted.
            Defaults to just past the last token, as estimated by `Token.width`.
            Pass it explicitly when the exact end of the source is known.
    """

    def __init__(
        self,
        tokens: list[Token],
        end_line: int | None = None,
        end_offset: int | None = None,
    ) -> None:
        self.tokens: list[Token] = list(tokens)
        self.position: int = 0
        last = self.tokens[-1] if self.tokens else None
        self.end_line = end_line if end_line is not None else (last.line if last else 1)
        if end_offset is None:
            end_offset = last.col + last.width() if last else 1
        self.end_offset = end_offset

    def peek(self) -> Token | None:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def next(self) -> Token | None:
        tok = self.peek()
        if tok is not None:
            self.position += 1
        return tok

    def done(self) -> bool:
        return self.position >= len(self.tokens)

    def remaining(self) -> list[Token]:
        return self.tokens[self.position :]

    @property
    def line(self) -> int:
        tok = self.peek()
        return tok.line if tok is not None else self.end_line

    @property
    def offset(self) -> int:
        tok = self.peek()
        return tok.col if tok is not None else self.end_offset


def tokenize(source: str, line: int = 1, offset: int = 1) -> list[Token]:
    """Lexes `source` completely and returns its tokens."""
    tokens = list(Lexer.from_string(source, line, offset))
    log.debug("tokenized %d tokens from %r", len(tokens), source)
    return tokens


__all__ = [
    "CharacterStream",
    "Lexer",
    "Token",
    "TokenSource",
    "TokenStream",
    "tokenize",
]
