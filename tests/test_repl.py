import builtins
from typing import Iterator

import pytest

import sassexpr.sassexpr_repl
from sassexpr.sassexpr_repl import handle_command, start_repl


def feed(monkeypatch: pytest.MonkeyPatch, *lines: str) -> None:
    it: Iterator[str] = iter(lines)

    def fake_input(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_repl_quit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "Exiting SassScript REPL." in out


def test_repl_eof_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch)
    start_repl()
    assert "Exiting SassScript REPL." in capsys.readouterr().out


def test_repl_keyboard_interrupt_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def interrupt(prompt: str) -> str:
        raise KeyboardInterrupt

    monkeypatch.setattr(builtins, "input", interrupt)
    start_repl()
    assert "Exiting SassScript REPL." in capsys.readouterr().out


def test_repl_prints_ast(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "1 + 2", "", "exit")
    start_repl()
    out = capsys.readouterr().out
    assert "BinaryOp(plus, Literal(number, 1), Literal(number, 2))" in out


def test_repl_verbose_prints_source(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "1 + 2 * 3", "exit")
    start_repl(verbose=True)
    assert "[source] >>> (1 + (2 * 3))" in capsys.readouterr().out


def test_repl_reports_errors_and_continues(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "foo(1,)", "true", "exit")
    start_repl()
    out = capsys.readouterr().out
    assert "[error] >>> Expected expression, was rparen token. (line 1, offset 7)" in out
    assert "Literal(bool, True)" in out


def test_repl_error_line_numbers_advance(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "1", "(", "exit")
    start_repl()
    assert "(line 2, offset 2)" in capsys.readouterr().out


def test_repl_prints_deprecation_warning(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "bold", "exit")
    start_repl()
    out = capsys.readouterr().out
    assert "[warn] >>> Implicit strings are deprecated. 'bold' was not quoted." in out
    assert "Literal(string, 'bold')" in out


def test_repl_reports_unparsed_input(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "1 ) 2", "exit")
    start_repl()
    assert "[warn] >>> Unparsed input from offset 3" in capsys.readouterr().out


def test_repl_tokens_mode(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "tokens-mode", "-1", "exit")
    start_repl()
    out = capsys.readouterr().out
    assert "[mode] >>> Tokens mode ON" in out
    assert "[token] >>> Token(minus, -)" in out
    assert "[token] >>> Token(number, 1)" in out
    assert "UnaryOp(minus, Literal(number, 1))" in out


def test_repl_unexpected_exception_prints_traceback(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def boom(src: str, line_no: int, state: dict[str, bool]) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(sassexpr.sassexpr_repl, "evaluate_line", boom)
    feed(monkeypatch, "1", "exit")
    start_repl()
    out = capsys.readouterr().out
    assert "[error] >>>" in out
    assert "RuntimeError: boom" in out


def test_handle_command_toggles_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    state = {"verbose": False, "tokens": False}
    assert handle_command("verbose-mode", state)
    assert state["verbose"] is True
    assert "[mode] >>> Verbose mode ON" in capsys.readouterr().out
    assert not handle_command("1 + 1", state)


def test_repl_tokens_mode_reports_end_of_text_position(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "foobar +", "tokens-mode", "foobar +", "exit")
    start_repl()
    out = capsys.readouterr().out
    assert "was end of text. (line 1, offset 9)" in out
    assert "was end of text. (line 3, offset 9)" in out
