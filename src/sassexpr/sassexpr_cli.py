"""
SassScript CLI Entrypoint.

This module provides the command-line interface for parsing SassScript expressions.

Features:
    - Read an expression from the command line or from a file.
    - Lex and parse it, then print the AST as a repr, as JSON, or as re-emitted source.
    - Print the token stream instead of the AST.
    - Launch an interactive REPL.

Example usage:
    sassexpr "1 + 2 * 3"
    sassexpr --format json "rgb(255, 0, 0)"
    sassexpr -f expr.txt --format source
    sassexpr --repl --verbose

Functions:
    run_sassexpr(source: str, is_file: bool = False, fmt: str = "repr", tokens: bool = False,
                 deprecations: bool = True, line: int = 1, offset: int = 1) -> int:
        Executes the lex → parse → print pipeline and returns a process exit code.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import logging
import sys

from sassexpr.emitters.inspect_emitter import InspectEmitter
from sassexpr.sassexpr_errors import SassScriptSyntaxError
from sassexpr.sassexpr_lexer import Lexer
from sassexpr.sassexpr_parser import Parser

FORMATS = ("repr", "json", "source")


def discard(message: str) -> None:
    pass


def run_sassexpr(
    source: str,
    is_file: bool = False,
    fmt: str = "repr",
    tokens: bool = False,
    deprecations: bool = True,
    line: int = 1,
    offset: int = 1,
) -> int:
    """
    Run the SassScript toolchain: lex, parse, and print the result.

    Args:
        source (str): The expression text, or a path when `is_file` is True.
        is_file (bool): If True, reads the expression from the file at `source`.
        fmt (str): Output format for the AST: 'repr', 'json' or 'source'.
        tokens (bool): If True, prints the tokens instead of parsing them.
        deprecations (bool): If False, implicit-string warnings are discarded.
        line (int): Line number of the first character, for diagnostics.
        offset (int): Column of the first character, for diagnostics.

    Returns:
        int: 0 on success, 1 if the expression could not be lexed or parsed.

    Raises:
        ValueError: If `fmt` is not a known format.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format: {fmt}")

    # 1. Read source
    if is_file:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    lexer = Lexer.from_string(source, line, offset)
    try:
        # 2. Lexing only
        if tokens:
            for tok in lexer:
                print(f"{tok.line}:{tok.col}\t{tok!r}")
            return 0

        # 3. Parsing
        parser = Parser(lexer, None if deprecations else discard)
        ast = parser.parse()
    except SassScriptSyntaxError as e:
        print(f"error: {e.describe()}", file=sys.stderr)
        return 1

    # 4. Output result
    if fmt == "json":
        print(json.dumps(ast.to_dict(), indent=2))
    elif fmt == "source":
        print(InspectEmitter().emit(ast))
    else:
        print(repr(ast))

    rest = lexer.peek()
    if rest is not None:
        print(f"(unparsed input from line {rest.line}, offset {rest.col})")
    return 0


def main() -> None:
    """
    Entry point for the SassScript CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, parses one expression and prints it.

    Exits with status 1 when the expression is invalid.
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from sassexpr.sassexpr_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="sassexpr")
    parser.add_argument("source", nargs="?", help="Expression, or filename (with -f)")
    parser.add_argument(
        "-f", "--file", action="store_true", help="Read the expression from a file"
    )
    parser.add_argument(
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="repr",
        help="AST output format (default: repr)",
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of the AST"
    )
    parser.add_argument(
        "--no-deprecation-warnings",
        dest="deprecations",
        action="store_false",
        help="Silence implicit-string deprecation warnings",
    )
    parser.add_argument("--line", type=int, default=1, help="Starting line number")
    parser.add_argument("--offset", type=int, default=1, help="Starting column")
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from sassexpr.sassexpr_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    sys.exit(
        run_sassexpr(
            source=args.source,
            is_file=args.file,
            fmt=args.fmt,
            tokens=args.tokens,
            deprecations=args.deprecations,
            line=args.line,
            offset=args.offset,
        )
    )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
