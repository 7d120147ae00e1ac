"""Reading lines and running them: the interactive loop, ``-c`` and the rc file."""

from __future__ import annotations

import os
import signal
import sys
from contextlib import contextmanager
from typing import Iterator, Mapping

from .builtins.cd import cd
from .builtins.export import export_builtin
from .builtins.simple import echo, env_builtin, exit_builtin, pwd
from .builtins.unset import unset_builtin
from .command import dir_join
from .executor import execute
from .heredoc import collect_heredocs
from .lexer import LexError, lex
from .parser import ParseError, parse
from .prompt import read_prompt
from .signals import parent_signals
from .state import Environment, Shell, ShellExit, report

try:
    import readline
except ImportError:
    readline = None

RC_FILE = ".minishrc"
_BLANKS = " \t"


def line_is_blank(line: str) -> bool:
    """Whether ``line`` holds only spaces and tabs."""
    return all(c in _BLANKS for c in line)


def is_comment(line: str) -> bool:
    """Whether the first non-blank character of ``line`` is ``#``."""
    return line.lstrip(_BLANKS).startswith("#")


def _nothing_to_run(line: str) -> bool:
    return not line or line.startswith("\n") or is_comment(line) or line_is_blank(line)


def handle_line(shell: Shell, line: str) -> None:
    """Lex, parse and run one line; problems are reported, not raised."""
    if _nothing_to_run(line):
        return
    try:
        result = lex(line, shell)
    except LexError:
        return
    if result.count <= 0:
        if not shell.tokdel:
            report("error: syntax error\n")
        return
    try:
        tree = parse(result.tokens)
    except ParseError:
        return
    if collect_heredocs(tree, shell):
        execute(tree, shell)


def read_config(shell: Shell) -> None:
    """Run every line of ``$HOME/.minishrc`` if it is readable."""
    home = shell.env.get("HOME")
    if home is None:
        return
    path = dir_join(home, RC_FILE)
    if not os.access(path, os.R_OK):
        return
    try:
        rc = open(path, encoding="utf-8", errors="replace")
    except OSError:
        return
    with rc:
        for line in rc:
            handle_line(shell, line)


def _builtins() -> dict:
    return {
        "echo": echo,
        "cd": cd,
        "pwd": pwd,
        "export": export_builtin,
        "unset": unset_builtin,
        "env": env_builtin,
        "exit": exit_builtin,
    }


def init_shell(environ: Mapping[str, str] | None = None) -> Shell:
    """A new shell over ``environ`` (default: the process environment), rc file read."""
    if environ is None:
        environ = os.environ
    try:
        cwd = os.getcwd()
    except OSError:
        cwd = None
    shell = Shell(env=Environment.from_process(environ, cwd), builtins=_builtins())
    read_config(shell)
    return shell


@contextmanager
def _signals_kept() -> Iterator[None]:
    saved = [(signum, signal.getsignal(signum)) for signum in (signal.SIGINT, signal.SIGQUIT)]
    try:
        yield
    finally:
        for signum, handler in saved:
            if handler is not None:
                signal.signal(signum, handler)


def _run_flags(shell: Shell, args: list[str]) -> int:
    if args[0] == "-c":
        if len(args) < 2:
            report("-c: option requires an argument\n")
            return 2
        handle_line(shell, args[1])
        return shell.status
    report("error: no valid arguments\n")
    return 127


def _interactive(shell: Shell) -> int:
    if readline is not None:
        readline.set_auto_history(False)
    while True:
        parent_signals(shell)
        shell.is_child = False
        try:
            line = read_prompt(shell.env)
        except KeyboardInterrupt:
            continue
        if line is None:
            sys.stdout.write("exit\n")
            sys.stdout.flush()
            return shell.status
        if not line:
            continue
        if readline is not None and not line_is_blank(line):
            readline.add_history(line)
        try:
            handle_line(shell, line)
        except KeyboardInterrupt:
            continue


def main(argv: list[str] | None = None) -> int:
    """Start the shell; ``-c LINE`` runs one line. Returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    with _signals_kept():
        try:
            shell = init_shell()
            if args:
                return _run_flags(shell, args)
            return _interactive(shell)
        except ShellExit as exc:
            return exc.status