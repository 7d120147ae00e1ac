"""Reading here-documents into temporary files before a command line runs."""

from __future__ import annotations

import contextlib
import os
from typing import Callable, Iterator

from .ast import Node, NodeType
from .state import report
from .tempfiles import new_temp_path

ReadLine = Callable[[str], "str | None"]


class HeredocInterrupted(Exception):
    """Input for a here-document was interrupted."""

    def __init__(self, delimiter: str) -> None:
        super().__init__(f"here-document '{delimiter}' interrupted")
        self.delimiter = delimiter


def read_heredoc(delimiter: str, path: str, read_line: ReadLine | None = None) -> None:
    """Write lines read at a ``> `` prompt to ``path`` until ``delimiter``.

    End of input stops reading with a warning; Ctrl-C raises HeredocInterrupted.
    """
    if read_line is None:
        read_line = input
    fd = os.open(path, os.O_RDWR | os.O_TRUNC | os.O_CREAT, 0o644)
    with os.fdopen(fd, "w") as out:
        while True:
            try:
                line = read_line("> ")
            except EOFError:
                line = None
            except KeyboardInterrupt as exc:
                raise HeredocInterrupted(delimiter) from exc
            if line is None:
                report("warning: here-doc delimited by end-of-file\n")
                return
            if line == delimiter:
                return
            out.write(line + "\n")


def _command_line(node: Node | None) -> Iterator[Node]:
    if node is None:
        return
    if node.kind() == NodeType.SEQ:
        yield from _and_or(node.left)
        yield from _command_line(node.right)
    else:
        yield from _and_or(node)


def _and_or(node: Node | None) -> Iterator[Node]:
    if node is None:
        return
    if node.kind() in (NodeType.AND, NodeType.OR, NodeType.SEQ):
        yield from _and_or(node.left)
        yield from _and_or(node.right)
    else:
        yield from _job(node)


def _job(node: Node | None) -> Iterator[Node]:
    if node is None:
        return
    if node.kind() != NodeType.PIPE:
        yield node
        return
    yield node.left
    job = node.right
    while job is not None and job.kind() == NodeType.PIPE:
        yield job.left
        job = job.right
    yield job


def _heredoc_nodes(commands: Iterator[Node | None]) -> Iterator[Node]:
    for command in commands:
        if command is None:
            continue
        redirection = command.left
        while redirection is not None:
            if redirection.kind() & NodeType.RD_HDOC:
                yield redirection
            redirection = redirection.left


def _fill(node: Node, shell, read_line: ReadLine | None) -> bool:
    path = new_temp_path(shell.env)
    if path is None:
        report("error: cannot create file for heredoc\n")
        return False
    try:
        read_heredoc(node.data or "", path, read_line)
    except OSError:
        report("error: cannot open file for heredoc\n")
        return False
    except HeredocInterrupted:
        with contextlib.suppress(OSError):
            os.remove(path)
        return False
    node.data = path
    return True


def collect_heredocs(node: Node | None, shell, read_line: ReadLine | None = None) -> bool:
    """Read every here-document of the tree, in order, into a temporary file.

    Each ``<<`` node's data becomes the path of its file. Returns False, with
    any reason reported, when one could not be read.
    """
    return all(
        _fill(heredoc, shell, read_line)
        for heredoc in _heredoc_nodes(_command_line(node))
    )