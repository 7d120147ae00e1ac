"""The interactive prompt."""

from __future__ import annotations

import os

from .state import Environment

try:
    import readline  # noqa: F401  (line editing and history for input())
except ImportError:
    readline = None


def _current_dir(env: Environment) -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return env.get("PWD")


def prompt_text(env: Environment) -> str:
    """``~$ `` at HOME, otherwise the last path component followed by ``$ ``."""
    directory = _current_dir(env)
    if directory is None:
        label = "error"
    elif env.get("HOME") == directory:
        label = "~"
    elif len(directory) > 1:
        label = directory.rpartition("/")[2]
    else:
        label = directory
    return f"{label}$ "


def read_prompt(env: Environment) -> str | None:
    """Read one line at the prompt; None at end of input."""
    try:
        return input(prompt_text(env))
    except EOFError:
        return None