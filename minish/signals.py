"""Signal dispositions for the shell, its children and here-documents."""

from __future__ import annotations

import signal
import sys

SIGINT_EXIT = 130
SIGQUIT_EXIT = 131


def parent_signals(shell) -> None:
    """Interactive handling: Ctrl-C sets status 130 and abandons the current line."""

    def _on_interrupt(signum, frame):
        sys.stdout.write("\n")
        sys.stdout.flush()
        shell.status = SIGINT_EXIT
        raise KeyboardInterrupt

    signal.signal(signal.SIGINT, _on_interrupt)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)


def child_signals() -> None:
    """Default dispositions, as a started command expects."""
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)


def heredoc_signals() -> None:
    """Ctrl-C ends here-document input; Ctrl-\\ is ignored."""
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)


def ignore_signals() -> None:
    """Ignore interrupts while waiting on children."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)