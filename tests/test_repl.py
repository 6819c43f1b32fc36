from typing import Callable

import pytest

from calculator.repl import main


def fake_input(lines: list[str]) -> Callable[..., str]:
    remaining = iter(lines)

    def input_(prompt: str = "") -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return input_


def run(monkeypatch: pytest.MonkeyPatch, lines: list[str], argv: list[str]) -> int:
    monkeypatch.setattr("builtins.input", fake_input(lines))
    return main(argv)


def test_repl_session(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(monkeypatch, ["2(3+4)", "y", "1..2", "", "   ", "2^3^2", "n", "1 + 1"], argv=[])
    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Result: 14" in out
    assert "Parser error: Malformed number '1..2'" in out
    assert "Result: 512" in out
    assert "Result: 2\n" not in out


def test_uppercase_n_stops(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(monkeypatch, ["1", " N ", "2"], argv=[])
    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.count("Result:") == 1


def test_blank_lines_are_skipped(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(monkeypatch, ["", "  ", "#"], argv=[])
    assert exit_code == 0
    assert capsys.readouterr().out == "\n"


def test_no_confirm(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(monkeypatch, ["1+1", "(1", "2*3"], argv=["--no-confirm"])
    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Result: 2" in out
    assert "Parser error: Unclosed bracket" in out
    assert "Result: 6" in out


def test_eof_at_continue_prompt(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(monkeypatch, ["1/0"], argv=[])
    assert exit_code == 0
    assert "Result: inf" in capsys.readouterr().out


def test_expressions(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-e", "1 + 2", "-e", "   ", "-e", "1/2"]) == 0
    assert capsys.readouterr().out == "Result: 3\nResult: 0.5\n"


def test_failing_expression(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-e", "1 + 2", "-e", "2 *"]) == 1
    out = capsys.readouterr().out
    assert "Result: 3" in out
    assert "Parser error: Operand expected, found end of input" in out
