import os
import signal
import subprocess

import pytest

from minish.jobs import signal_message, status_from_returncode, wait_all
from minish.state import Shell


def spawn(script):
    return subprocess.Popen(["sh", "-c", script]).pid


def test_signal_messages():
    assert signal_message(143) == "Terminated"
    assert signal_message(139) == "Segmentation fault"
    assert signal_message(0) == ""
    assert signal_message(200) is None


def test_status_from_returncode_keeps_exit_codes():
    assert status_from_returncode(3) == 3
    assert status_from_returncode(0) == 0


def test_status_from_returncode_for_signal():
    assert signal_message(status_from_returncode(-signal.SIGKILL)) == "Killed"


def test_wait_all_sets_status_of_last():
    shell = Shell()
    pid = spawn("exit 3")
    wait_all(shell, [pid], pid)
    assert shell.status == 3


def test_wait_all_ignores_status_of_others():
    shell = Shell()
    shell.status = 9
    first = spawn("exit 4")
    wait_all(shell, [first], None)
    assert shell.status == 9
    with pytest.raises(ChildProcessError):
        os.waitpid(first, os.WNOHANG)


def test_wait_all_reports_signal(capsys):
    shell = Shell()
    pid = spawn("kill -9 $$")
    wait_all(shell, [pid], pid)
    assert shell.status == status_from_returncode(-signal.SIGKILL)
    assert capsys.readouterr().err == "Killed\n"