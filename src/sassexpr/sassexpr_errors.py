"""
Exceptions raised while lexing and parsing SassScript expressions.

Classes:
    SassScriptSyntaxError: The single error kind of the lexer and parser.
"""


class SassScriptSyntaxError(SyntaxError):
    """Raised when SassScript text or tokens do not form a valid expression.

    Subclasses the built-in `SyntaxError`, so callers may catch either.

    Attributes:
        message (str): Human-readable description, e.g.
            ``Expected expression, was end of text.``
        line (int): Source line of the offending token (or end of input).
        offset (int): Source column of the offending token (or end of input).

    Example:
        raise SassScriptSyntaxError("Expected rparen token, was end of text.", 1, 5)
    """

    def __init__(self, message: str, line: int = 0, offset: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line
        self.offset = offset

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Returns the message followed by its source position."""
        return f"{self.message} (line {self.line}, offset {self.offset})"


__all__ = ["SassScriptSyntaxError"]
