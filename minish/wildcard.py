"""Filename expansion of wildcard words against a directory listing."""

from __future__ import annotations

import os
from functools import cmp_to_key
from itertools import zip_longest

from .pattern import contains_wildcard, wildcard_match


class AmbiguousRedirect(ValueError):
    """A redirection target expanded to more than one file."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"{pattern}: ambiguous redirect")
        self.pattern = pattern


def _fold(code: int) -> int:
    return code + 32 if 65 <= code <= 90 else code


def _rank(code: int) -> int:
    code = _fold(code)
    if 97 <= code <= 122:
        code += 1
    if code == ord("~"):
        code = ord("a")
    return code


def compare_names(a: str, b: str) -> int:
    """Case-insensitive order of two names; ``~`` sorts just before letters."""
    for x, y in zip_longest(os.fsencode(a), os.fsencode(b), fillvalue=0):
        if x == 0 or y == 0 or _fold(x) != _fold(y):
            return _rank(x) - _rank(y)
    return 0


def list_directory(directory: str | os.PathLike | None = None) -> list[str]:
    """Every entry of ``directory`` (default: the working one), ``.`` and ``..`` included, sorted."""
    path = os.getcwd() if directory is None else directory
    names = [".", ".."] + os.listdir(path)
    return sorted(names, key=cmp_to_key(compare_names))


def expand_wildcard(
    pattern: str,
    redirect_target: bool = False,
    directory: str | os.PathLike | None = None,
) -> list[str]:
    """Names matching ``pattern``; empty when it has no wildcard or nothing matches.

    Hidden names take part only when the pattern itself starts with a dot.
    A redirection target that matches several names raises AmbiguousRedirect.
    """
    if not contains_wildcard(pattern):
        return []
    names = list_directory(directory)
    if not pattern.startswith("."):
        names = [name for name in names if not name.startswith(".")]
    matches = [name for name in names if wildcard_match(pattern, name)]
    if len(matches) > 1 and redirect_target:
        raise AmbiguousRedirect(pattern)
    return matches