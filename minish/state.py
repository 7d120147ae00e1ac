"""Shell-wide state: the environment list, the last status and error reporting."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Mapping

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class ShellExit(Exception):
    """Raised to leave the shell with the given exit status."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


def var_name_length(entry: str) -> int:
    """Length of the variable name in a ``NAME=value`` entry."""
    index = entry.find("=")
    return len(entry) if index < 0 else index


def report(message: str) -> None:
    """Write a message to standard error as it is."""
    sys.stderr.write(message)
    sys.stderr.flush()


def report_os_error(label: str | None, exc: BaseException) -> None:
    """Print ``label: reason`` for an operating-system error."""
    if isinstance(exc, OSError) and exc.strerror:
        reason = exc.strerror
    else:
        reason = str(exc)
    report(f"{label or 'minishell'}: {reason}\n")


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


class Environment:
    """Ordered list of ``NAME=value`` entries."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries = list(entries)

    @classmethod
    def from_process(cls, environ: Mapping[str, str], cwd: str | None) -> "Environment":
        """Build the start-up environment, raising SHLVL by one."""
        if environ:
            env = cls(f"{key}={value}" for key, value in environ.items())
            env._bump_shlvl()
            return env
        env = cls()
        if cwd is not None:
            env.append(f"PWD={cwd}")
        env.append("SHLVL=1")
        return env

    def _find(self, name: str) -> int | None:
        prefix = f"{name}="
        return next(
            (i for i, entry in enumerate(self._entries) if entry.startswith(prefix)),
            None,
        )

    def _bump_shlvl(self) -> None:
        index = self._find("SHLVL")
        if index is None:
            self.append("SHLVL=1")
            return
        level = _atoi(self._entries[index][len("SHLVL="):])
        level = 1 if level < 0 else level + 1
        self._entries[index] = f"SHLVL={level}"

    def get(self, name: str) -> str | None:
        """Value of the first entry called ``name``, or None."""
        index = self._find(name)
        if index is None:
            return None
        return self._entries[index][len(name) + 1:]

    def set(self, name: str, value: str) -> None:
        """Replace the entry called ``name`` or append a new one."""
        entry = f"{name}={value}"
        index = self._find(name)
        if index is None:
            self._entries.append(entry)
        else:
            self._entries[index] = entry

    def append(self, entry: str) -> None:
        """Append a raw entry."""
        self._entries.append(entry)

    def remove(self, name: str) -> bool:
        """Remove the first entry called ``name``; report whether one was found."""
        index = self._find(name)
        if index is None:
            return False
        del self._entries[index]
        return True

    def as_list(self) -> list[str]:
        """A copy of all entries, in order."""
        return list(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class Shell:
    """Everything a running shell carries between commands."""

    env: Environment = field(default_factory=Environment)
    status: int = 0
    is_child: bool = False
    tokdel: bool = False
    builtins: dict[str, Callable] = field(default_factory=dict)