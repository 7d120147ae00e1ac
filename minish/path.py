"""Locating the program a command names."""

from __future__ import annotations

import os

from .command import dir_join
from .state import Environment

_EXPLICIT_PREFIXES = ("/", "~/", "./", "../")


class CommandNotFound(LookupError):
    """No executable of that name on the search path."""

    status = 127

    def __init__(self, name: str) -> None:
        super().__init__(f"{name}: command not found")
        self.name = name


def is_explicit_path(name: str) -> bool:
    """Whether ``name`` is used as a path as written instead of searched for."""
    return name.startswith(_EXPLICIT_PREFIXES)


def _search_dirs(path: str) -> list[str]:
    dirs = path.split(":")
    if dirs[-1] == "":
        dirs.pop()
    return dirs


def find_command(name: str, env: Environment) -> str:
    """Path of the program to run for ``name``; raise CommandNotFound."""
    if is_explicit_path(name):
        return name
    path = env.get("PATH")
    if path is None:
        raise CommandNotFound(name)
    for directory in _search_dirs(path):
        candidate = dir_join(directory, name)
        if os.access(candidate, os.X_OK):
            return candidate
    raise CommandNotFound(name)