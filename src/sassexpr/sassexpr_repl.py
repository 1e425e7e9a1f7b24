import io
import traceback

from sassexpr.emitters.inspect_emitter import InspectEmitter
from sassexpr.sassexpr_errors import SassScriptSyntaxError
from sassexpr.sassexpr_lexer import Lexer, TokenSource, TokenStream, tokenize
from sassexpr.sassexpr_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_warning(message: str) -> None:
    print(f"[warn] >>> {message}")


def handle_command(src: str, state: dict[str, bool]) -> bool:
    """Handles REPL-only commands. Returns True if `src` was one."""
    command = src.strip().lower()
    if command == "verbose-mode":
        state["verbose"] = not state["verbose"]
        print(f"[mode] >>> Verbose mode {'ON' if state['verbose'] else 'OFF'}")
        return True
    if command == "tokens-mode":
        state["tokens"] = not state["tokens"]
        print(f"[mode] >>> Tokens mode {'ON' if state['tokens'] else 'OFF'}")
        return True
    return False


def evaluate_line(src: str, line_no: int, state: dict[str, bool]) -> None:
    source: TokenSource
    try:
        if state["tokens"]:
            tokens = tokenize(src, line_no, 1)
            for tok in tokens:
                print(f"[token] >>> {tok!r}")
            source = TokenStream(tokens, end_line=line_no, end_offset=len(src) + 1)
        else:
            source = Lexer.from_string(src, line_no, 1)
        ast = Parser(source, print_warning).parse()
    except SassScriptSyntaxError as e:
        print(f"[error] >>> {e.describe()}")
        return

    print(repr(ast))
    if state["verbose"]:
        print(f"[source] >>> {InspectEmitter().emit_expr(ast)}")
    rest = source.peek()
    if rest is not None:
        print(f"[warn] >>> Unparsed input from offset {rest.col}")


def start_repl(verbose: bool = False) -> None:
    print("SassScript REPL. Type 'exit' or 'quit' to leave.")
    state = {"verbose": verbose, "tokens": False}
    line_no = 0

    while True:
        try:
            src = input(">>> ")
            line_no += 1
            if src.strip() in ("exit", "quit"):
                print("Exiting SassScript REPL.")
                return
            if not src.strip():
                continue
            if handle_command(src, state):
                continue
            try:
                evaluate_line(src, line_no, state)
            except Exception:
                print_traceback()

        except (KeyboardInterrupt, EOFError):
            print("\nExiting SassScript REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
