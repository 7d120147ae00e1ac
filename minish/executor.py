"""Running a syntax tree: sequences, and/or lists, pipelines and simple commands."""

from __future__ import annotations

import os
import signal
import sys
from contextlib import contextmanager, redirect_stdout, suppress
from typing import Callable, Iterator, NoReturn

from .ast import Node, NodeType
from .command import Command, PipeIO
from .jobs import wait_all
from .path import CommandNotFound, find_command
from .signals import child_signals, ignore_signals
from .state import Environment, ShellExit, report, report_os_error

_FILE_MODE = 0o664
_IN, _OUT = 0, 1

# Checked in this order for every redirection node.
_OPENERS = (
    (NodeType.RD_TRUNC, _OUT, os.O_WRONLY | os.O_CREAT | os.O_TRUNC),
    (NodeType.RD_APPEND, _OUT, os.O_WRONLY | os.O_CREAT | os.O_APPEND),
    (NodeType.RD_INFILE, _IN, os.O_RDONLY),
    (NodeType.RD_HDOC, _IN, os.O_RDONLY),
)


class RedirectError(Exception):
    """A redirection file could not be opened."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def _open(path: str, flags: int) -> int:
    try:
        return os.open(path, flags, _FILE_MODE)
    except OSError as exc:
        raise RedirectError(path, exc.strerror or str(exc)) from exc


def _close_all(*fds: int | None) -> None:
    for fd in fds:
        if fd is not None:
            with suppress(OSError):
                os.close(fd)


def open_redirections(redirections: Node | None) -> tuple[int | None, int | None]:
    """Open the files of a redirection chain in order; return (input fd, output fd).

    A later redirection of the same direction replaces an earlier one.
    Here-document files are removed once opened. Raises RedirectError.
    """
    fds: list[int | None] = [None, None]
    node = redirections
    try:
        while node is not None:
            kind = node.kind()
            for flag, slot, flags in _OPENERS:
                if not kind & flag:
                    continue
                _close_all(fds[slot])
                fds[slot] = None
                path = node.data or ""
                fds[slot] = _open(path, flags)
                if flag == NodeType.RD_HDOC:
                    try:
                        os.unlink(path)
                    except OSError as exc:
                        report_os_error("unlink", exc)
                break
            node = node.left
    except RedirectError:
        _close_all(*fds)
        raise
    return fds[_IN], fds[_OUT]


@contextmanager
def _stdout_to(fd: int | None) -> Iterator[None]:
    """Send ``sys.stdout`` writes to ``fd`` for the duration of the block."""
    if fd is None:
        yield
        return
    with open(fd, "w", closefd=False) as stream, redirect_stdout(stream):
        yield


@contextmanager
def _signals_kept() -> Iterator[None]:
    saved = [(signum, signal.getsignal(signum)) for signum in (signal.SIGINT, signal.SIGQUIT)]
    try:
        yield
    finally:
        for signum, handler in saved:
            if handler is not None:
                signal.signal(signum, handler)


def _environ(env: Environment) -> dict[str, str]:
    pairs = (entry.partition("=") for entry in env)
    return {name: value for name, _, value in pairs if name and "\0" not in name + value}


def _stages(node: Node) -> Iterator[Node | None]:
    yield node.left
    rest = node.right
    while rest is not None and rest.kind() == NodeType.PIPE:
        yield rest.left
        rest = rest.right
    yield rest


class Executor:
    """Runs syntax trees against one shell."""

    def __init__(self, shell) -> None:
        self.shell = shell
        self._pids: list[int] = []
        self._last: int | None = None

    def run(self, node: Node | None) -> int:
        """Run a whole command line; return the resulting status."""
        while node is not None and node.kind() == NodeType.SEQ:
            self._and_or(node.left)
            node = node.right
        self._and_or(node)
        return self.shell.status

    def _and_or(self, node: Node | None) -> None:
        if node is None:
            return
        kind = node.kind()
        if kind == NodeType.AND:
            self._and_or(node.left)
            if self.shell.status == 0:
                self._and_or(node.right)
        elif kind == NodeType.OR:
            self._and_or(node.left)
            if self.shell.status != 0:
                self._and_or(node.right)
        elif kind == NodeType.SEQ:
            self._and_or(node.left)
            self._and_or(node.right)
        else:
            self._job(node)

    def _job(self, node: Node) -> None:
        self._pids = []
        self._last = None
        with _signals_kept():
            if node.kind() == NodeType.PIPE:
                self._pipeline(node)
            else:
                self._simple(node, PipeIO())
            wait_all(self.shell, self._pids, self._last)

    def _pipeline(self, node: Node) -> None:
        stages = list(_stages(node))
        read_fd: int | None = None
        for index, stage in enumerate(stages):
            next_read: int | None = None
            write_fd: int | None = None
            if index < len(stages) - 1:
                try:
                    next_read, write_fd = os.pipe()
                except OSError as exc:
                    report_os_error("pipe", exc)
                    break
            self._simple(stage, PipeIO(read_fd=read_fd, write_fd=write_fd))
            _close_all(read_fd, write_fd)
            read_fd = next_read
        _close_all(read_fd)

    def _simple(self, node: Node | None, io: PipeIO) -> None:
        if node is None or node.kind() != NodeType.CMD:
            return
        cmd = Command.from_node(node, io)
        if not cmd.argv:
            self._start(cmd, self._empty_child)
            return
        if cmd.argv[0] == "":
            report(" : command not found\n")
            return
        builtin = self.shell.builtins.get(cmd.argv[0])
        if builtin is not None and not io.in_pipeline:
            self._run_builtin(cmd, builtin)
            return
        self._start(cmd, self._child, ignore=True)

    def _run_builtin(self, cmd: Command, builtin: Callable) -> None:
        try:
            in_fd, out_fd = open_redirections(cmd.io.redirections)
        except RedirectError as exc:
            report(f"{exc}\n")
            return
        _close_all(in_fd)
        try:
            with _stdout_to(out_fd):
                self.shell.status = builtin(self.shell, cmd.argv)
        finally:
            _close_all(out_fd)

    def _start(self, cmd: Command, work: Callable[[Command], int], ignore: bool = False) -> None:
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            pid = os.fork()
        except OSError as exc:
            report_os_error("fork", exc)
            return
        if pid == 0:
            self._in_child(lambda: work(cmd))
        if ignore:
            ignore_signals()
        self._pids.append(pid)
        if not cmd.io.writes_pipe:
            self._last = pid

    @staticmethod
    def _in_child(work: Callable[[], int]) -> NoReturn:
        code = 1
        try:
            code = work()
        except ShellExit as exc:
            code = exc.status
        except Exception as exc:  # the child must never fall back into the caller
            report_os_error(None, exc)
        finally:
            with suppress(Exception):
                sys.stdout.flush()
            with suppress(Exception):
                sys.stderr.flush()
            os._exit(int(code) & 0xFF)

    @staticmethod
    def _empty_child(cmd: Command) -> int:
        if cmd.io.writes_pipe:
            os.dup2(cmd.io.write_fd, 1)
        try:
            in_fd, out_fd = open_redirections(cmd.io.redirections)
        except RedirectError as exc:
            report(f"{exc}\n")
            return 1
        _close_all(in_fd, out_fd)
        return 0

    def _child(self, cmd: Command) -> int:
        child_signals()
        self.shell.is_child = True
        io = cmd.io
        if io.reads_pipe:
            os.dup2(io.read_fd, 0)
        if io.writes_pipe:
            os.dup2(io.write_fd, 1)
        _close_all(io.read_fd, io.write_fd)
        try:
            in_fd, out_fd = open_redirections(io.redirections)
        except RedirectError as exc:
            report(f"{exc}\n")
            return 1
        for fd, target in ((in_fd, 0), (out_fd, 1)):
            if fd is not None:
                os.dup2(fd, target)
                os.close(fd)
        builtin = self.shell.builtins.get(cmd.argv[0])
        if builtin is not None:
            with _stdout_to(1):
                return builtin(self.shell, cmd.argv)
        return self._exec(cmd)

    def _exec(self, cmd: Command) -> int:
        try:
            path = find_command(cmd.argv[0], self.shell.env)
        except CommandNotFound as exc:
            report(f"{exc}\n")
            return exc.status
        try:
            os.execve(path, cmd.argv, _environ(self.shell.env))
        except (OSError, ValueError) as exc:
            report_os_error(path, exc)
        return 1


def execute(node: Node | None, shell) -> int:
    """Run ``node`` in ``shell``; return the resulting status."""
    return Executor(shell).run(node)