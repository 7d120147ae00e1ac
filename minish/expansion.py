"""Expansion of ``$NAME``, ``${NAME}`` and ``$?`` references."""

from __future__ import annotations

from .state import Environment, report

_BAD_SUBSTITUTION = "error: bad substitution"


class BadSubstitution(ValueError):
    """A ``${`` reference that is not closed by ``}`` right after the name."""

    def __init__(self) -> None:
        super().__init__(_BAD_SUBSTITUTION)


def _is_name_char(c: str) -> bool:
    return c == "_" or (c.isascii() and c.isalnum())


def expand_at(
    data: str, start: int, in_dquote: bool, env: Environment, status: int
) -> tuple[str, int]:
    """Replace the ``$`` reference whose ``$`` is at ``start``.

    Returns the new text and the index of the last character of the inserted
    value (``start - 1`` when the value is empty), so scanning can resume just
    after it. ``in_dquote`` says whether the reference sits inside double
    quotes; names end at the same characters in both cases. A lone ``$`` is
    left as it is; unset names expand to nothing.
    """
    name_start = start + 1
    lead = data[name_start:name_start + 1]
    braces = 0
    if lead == "?":
        name, value = "?", str(status)
    elif lead == "=":
        name, value = "", "$"
    else:
        end = name_start
        if lead == "{":
            braces = 1
            end += 1
            if data[end:end + 1] == "}":
                report(_BAD_SUBSTITUTION + "\n")
        while end < len(data) and _is_name_char(data[end]):
            end += 1
        if braces and data[end:end + 1] != "}":
            raise BadSubstitution()
        name = data[name_start + braces:end]
        value = "$" if not name else (env.get(name) or "")
    rest = data[name_start + len(name) + 2 * braces:]
    return data[:start] + value + rest, start - 1 + len(value)