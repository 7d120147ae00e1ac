"""Waiting for started processes and turning their ends into a status."""

from __future__ import annotations

import os
from typing import Iterable

from .state import report

_MESSAGES = {
    0: "",
    1: "",
    129: "Hangup",
    131: "Quit",
    132: "Illegal instruction",
    133: "Trace/BPT trap",
    134: "Aborted",
    135: "Bus error",
    136: "Floating exception",
    137: "Killed",
    138: "User defined signal 1",
    139: "Segmentation fault",
    140: "User defined signal 2",
    141: "Broken pipe",
    142: "Alarm clock",
    143: "Terminated",
    144: "Stack fault",
    152: "Cputime limit exceeded",
    153: "Filesize limit exceeded",
    155: "Profiling timer expired",
    158: "Power failure",
    159: "Bad system call",
}


def signal_message(status: int) -> str | None:
    """Description of a ``128 + signal`` status, or None if it has none."""
    return _MESSAGES.get(status)


def status_from_returncode(returncode: int) -> int:
    """Shell status for a subprocess-style return code (negative means a signal)."""
    return 128 - returncode if returncode < 0 else returncode


def _signal_exit(wait_status: int) -> int:
    status = os.WTERMSIG(wait_status) + 128
    message = signal_message(status) or ""
    suffix = " (core dumped)\n" if os.WCOREDUMP(wait_status) else "\n"
    report(message + suffix)
    return status


def wait_all(shell, processes: Iterable[int], last: int | None = None) -> None:
    """Reap every process id; the end of ``last`` sets the shell status.

    A signalled ``last`` process has its signal described on standard error.
    """
    for pid in processes:
        try:
            _, wait_status = os.waitpid(pid, 0)
        except ChildProcessError:
            continue
        if pid != last:
            continue
        if os.WIFEXITED(wait_status):
            shell.status = os.WEXITSTATUS(wait_status)
        elif os.WIFSIGNALED(wait_status):
            shell.status = _signal_exit(wait_status)