"""The ``unset`` built-in."""

from __future__ import annotations

from ..state import report


def valid_unset_identifier(arg: str) -> bool:
    """Whether ``arg`` is a valid variable name."""
    if not arg:
        return False

    def start(c: str) -> bool:
        return c == "_" or ("A" <= c <= "Z") or ("a" <= c <= "z")

    return start(arg[0]) and all(start(c) or "0" <= c <= "9" for c in arg[1:])


def unset_builtin(shell, argv: list[str]) -> int:
    """Remove the named variables; status 1 if any name was invalid."""
    args = argv[1:]
    if not args or not len(shell.env):
        return 0
    status = 0
    for arg in args:
        if valid_unset_identifier(arg):
            shell.env.remove(arg)
        else:
            report(f"unset: {arg}: not a valid identifier\n")
            status = 1
    return status