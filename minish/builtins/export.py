"""The ``export`` built-in."""

from __future__ import annotations

import sys
from functools import cmp_to_key

from ..state import Environment, report, var_name_length


def _is_name_start(c: str) -> bool:
    return c == "_" or ("A" <= c <= "Z") or ("a" <= c <= "z")


def _is_name_char(c: str) -> bool:
    return _is_name_start(c) or ("0" <= c <= "9")


def valid_export_identifier(arg: str) -> bool:
    """Whether the name part of ``NAME=value`` is a valid identifier."""
    name = arg[:var_name_length(arg)]
    return bool(name) and _is_name_start(name[0]) and all(map(_is_name_char, name[1:]))


def _listing_order(a: str, b: str) -> int:
    width = max(var_name_length(a), var_name_length(b))
    x, y = a[:width], b[:width]
    return (x > y) - (x < y)


def export_listing(env: Environment) -> list[str]:
    """All entries sorted by name, each as ``NAME="value"``."""
    lines = []
    for entry in sorted(env.as_list(), key=cmp_to_key(_listing_order)):
        name, sep, value = entry.partition("=")
        lines.append(f'{name}{sep}"{value}"')
    return lines


def export_builtin(shell, argv: list[str]) -> int:
    """List the environment, or add and update variables; always status 0."""
    args = argv[1:]
    if not args:
        sys.stdout.write("".join(f"{line}\n" for line in export_listing(shell.env)))
        sys.stdout.flush()
        return 0
    for arg in args:
        name = arg[:var_name_length(arg)]
        if shell.env.get(name) is None:
            entry = arg if "=" in arg else f"{arg}="
            if valid_export_identifier(entry):
                shell.env.append(entry)
            else:
                report(f"export: {entry}: not a valid identifier\n")
        else:
            shell.env.set(name, arg.partition("=")[2])
    return 0