"""A simple command ready to run: its words, pipe ends and redirections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .ast import Node, NodeType


@dataclass
class PipeIO:
    """Pipe file descriptors of one command in a job and its redirection chain."""

    read_fd: int | None = None
    write_fd: int | None = None
    redirections: Node | None = None

    @property
    def reads_pipe(self) -> bool:
        return self.read_fd is not None

    @property
    def writes_pipe(self) -> bool:
        return self.write_fd is not None

    @property
    def in_pipeline(self) -> bool:
        return self.reads_pipe or self.writes_pipe


def _words(node: Node | None) -> Iterator[str]:
    while node is not None and node.kind() in (NodeType.ARG, NodeType.CMD):
        yield node.data or ""
        node = node.right


@dataclass
class Command:
    """Argument vector and I/O of a simple command."""

    argv: list[str]
    io: PipeIO = field(default_factory=PipeIO)

    @property
    def argc(self) -> int:
        return len(self.argv)

    @classmethod
    def from_node(cls, node: Node | None, io: PipeIO | None = None) -> "Command":
        """Build from a CMD node; its left chain becomes the redirections."""
        if node is None or node.kind() != NodeType.CMD:
            raise ValueError("not a command node")
        if io is None:
            io = PipeIO()
        io.redirections = node.left
        if node.data is None:
            return cls([], io)
        return cls(list(_words(node)), io)


def dir_join(dir1: str | None, dir2: str | None) -> str | None:
    """``dir1/dir2``, or None when either part is missing."""
    if dir1 is None or dir2 is None:
        return None
    return f"{dir1}/{dir2}"