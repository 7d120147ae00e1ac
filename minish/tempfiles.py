"""Names for here-document temporary files."""

from __future__ import annotations

import os
from typing import Iterator

from .state import Environment

TMPDIR = "/tmp"
_MAX_TRIES = 100


def temp_name(directory: str) -> str | None:
    """First free ``.ms_N.tmp`` name in ``directory`` (N from 1 to 99), or None."""
    for number in range(1, _MAX_TRIES):
        name = f"{directory}/.ms_{number}.tmp"
        if not os.path.exists(name):
            return name
    return None


def _candidates(env: Environment, tmpdir: str) -> Iterator[str | None]:
    yield tmpdir
    yield env.get("HOME")
    try:
        yield os.getcwd()
    except OSError:
        yield None


def new_temp_path(env: Environment, tmpdir: str = TMPDIR) -> str | None:
    """A free temp file path in ``tmpdir``, then HOME, then the working directory."""
    for directory in _candidates(env, tmpdir):
        if directory is None or not os.access(directory, os.R_OK | os.W_OK):
            continue
        name = temp_name(directory)
        if name is not None:
            return name
    return None