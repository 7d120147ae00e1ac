"""The ``echo``, ``env``, ``pwd`` and ``exit`` built-ins."""

from __future__ import annotations

import os
import sys
from itertools import dropwhile

from ..state import ShellExit, report

_DIGITS = "0123456789"


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _is_no_newline_flag(arg: str) -> bool:
    return arg.startswith("-n") and all(c == "n" for c in arg[2:])


def echo(shell, argv: list[str]) -> int:
    """Print the arguments separated by spaces; leading ``-n`` flags drop the newline."""
    args = argv[1:]
    if not args:
        _write("\n")
        return 0
    if _is_no_newline_flag(args[0]):
        _write(" ".join(dropwhile(_is_no_newline_flag, args)))
        return 0
    _write(" ".join(args) + "\n")
    return 0


def env_builtin(shell, argv: list[str]) -> int:
    """Print every variable that has a non-empty value; arguments are refused."""
    if len(argv) > 1:
        report(f"env: {argv[1]}: No such file or directory\n")
        return 127
    lines = []
    for entry in shell.env:
        _, sep, value = entry.partition("=")
        if sep and value:
            lines.append(f"{entry}\n")
    _write("".join(lines))
    return 0


def pwd(shell, argv: list[str]) -> int:
    """Print the working directory, falling back to ``PWD``."""
    try:
        directory = os.getcwd()
    except OSError:
        directory = shell.env.get("PWD")
    if directory is None:
        return 1
    _write(f"{directory}\n")
    return 0


def _announce(shell) -> None:
    if not shell.is_child:
        report("exit\n")


def _numeric_part(arg: str) -> str:
    return arg[1:] if arg.startswith(("+", "-")) else arg


def exit_builtin(shell, argv: list[str]) -> int:
    """Leave the shell by raising ShellExit.

    Returns 1 without leaving when given more than one argument. A
    non-numeric argument leaves with status 2; a numeric one leaves with its
    value modulo 256; no argument leaves with the last status.
    """
    if len(argv) > 2:
        _announce(shell)
        report("exit: too many arguments\n")
        return 1
    if len(argv) > 1:
        arg = argv[1]
        digits = _numeric_part(arg)
        if any(c not in _DIGITS for c in digits):
            _announce(shell)
            report(f"exit: {arg}: numeric argument required\n")
            shell.status = 2
            raise ShellExit(2)
        value = int(digits or "0")
        if arg.startswith("-"):
            value = -value
        code = value & 0xFF
        shell.status = code
        _announce(shell)
        raise ShellExit(code)
    _announce(shell)
    raise ShellExit(shell.status)