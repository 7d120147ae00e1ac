import os
import signal

import pytest

from minish.shell import handle_line, init_shell, is_comment, line_is_blank, main, read_config
from minish.state import Environment, Shell


@pytest.fixture
def shell(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return init_shell(
        {"PATH": os.environ.get("PATH", "/usr/bin:/bin"), "HOME": str(tmp_path)}
    )


def fake_input(monkeypatch, lines):
    feed = iter(lines)

    def _input(prompt=""):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", _input)


@pytest.mark.parametrize(
    "line, expected", [(" \t ", True), ("", True), ("  a ", False)]
)
def test_line_is_blank(line, expected):
    assert line_is_blank(line) is expected


@pytest.mark.parametrize(
    "line, expected", [("  # note", True), ("#x", True), ("echo #", False)]
)
def test_is_comment(line, expected):
    assert is_comment(line) is expected


def test_handle_line_runs_command(shell, tmp_path):
    shell.status = 9
    handle_line(shell, "echo hi > out.txt")
    assert shell.status == 0
    assert (tmp_path / "out.txt").read_text() == "hi\n"


def test_handle_line_skips_comment(shell, tmp_path):
    shell.status = 9
    handle_line(shell, "  # echo hi > out.txt")
    assert not (tmp_path / "out.txt").exists()
    assert shell.status == 9


def test_handle_line_reports_syntax_error(shell, capsys):
    handle_line(shell, "|")
    assert capsys.readouterr().err == "error: syntax error\n"


def test_handle_line_quiet_for_empty_expansion(shell, capsys):
    handle_line(shell, "$MINISH_SURELY_UNSET")
    assert capsys.readouterr().err == ""


def test_handle_line_reports_leftover_token(shell, capsys):
    handle_line(shell, "echo a )")
    assert capsys.readouterr().err == "error: syntax error near: )\n"


def test_handle_line_heredoc(shell, tmp_path, monkeypatch):
    shell.status = 9
    fake_input(monkeypatch, ["hello", "EOF"])
    handle_line(shell, "cat << EOF > out.txt")
    assert shell.status == 0
    assert (tmp_path / "out.txt").read_text() == "hello\n"


def test_read_config_runs_rc_lines(tmp_path):
    (tmp_path / ".minishrc").write_text("export RCVAR=yes\n")
    shell = Shell(env=Environment([f"HOME={tmp_path}"]), builtins={})
    shell.builtins = init_shell({"HOME": str(tmp_path / "none")}).builtins
    read_config(shell)
    assert shell.env.get("RCVAR") == "yes"


def test_init_shell_bumps_shlvl_and_registers_builtins(tmp_path):
    shell = init_shell({"HOME": str(tmp_path), "SHLVL": "2"})
    assert shell.env.get("SHLVL") == "3"
    assert set(shell.builtins) == {"echo", "cd", "pwd", "export", "unset", "env", "exit"}


def test_init_shell_reads_rc_file(tmp_path):
    (tmp_path / ".minishrc").write_text("export FROMRC=1\n")
    shell = init_shell({"HOME": str(tmp_path)})
    assert shell.env.get("FROMRC") == "1"


def test_main_c_requires_argument(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert main(["-c"]) == 2
    assert capsys.readouterr().err == "-c: option requires an argument\n"


def test_main_rejects_unknown_flag(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert main(["-x"]) == 127
    assert capsys.readouterr().err == "error: no valid arguments\n"


def test_main_c_exit_status(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert main(["-c", "exit 4"]) == 4


def test_main_c_runs_line(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    assert main(["-c", "echo hi > out.txt"]) == 0
    assert (tmp_path / "out.txt").read_text() == "hi\n"


def test_main_interactive_until_end_of_input(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    fake_input(monkeypatch, ["false"])
    before = signal.getsignal(signal.SIGINT)
    assert main([]) == 1
    assert capsys.readouterr().out.endswith("exit\n")
    assert signal.getsignal(signal.SIGINT) == before