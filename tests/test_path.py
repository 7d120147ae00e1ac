import os

import pytest

from minish.path import CommandNotFound, find_command, is_explicit_path
from minish.state import Environment


def _program(directory, name, mode=0o755):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("#!/bin/sh\n")
    os.chmod(path, mode)
    return path


@pytest.mark.parametrize("name", ["/bin/ls", "./a.out", "../tool", "~/bin/x"])
def test_explicit_paths(name):
    assert is_explicit_path(name)


@pytest.mark.parametrize("name", ["ls", ".hidden", "a/b", "~user"])
def test_names_to_search(name):
    assert not is_explicit_path(name)


def test_explicit_path_returned_as_is():
    env = Environment()
    assert find_command("./nothing-here", env) == "./nothing-here"


def test_found_on_path(tmp_path):
    prog = _program(tmp_path / "bin", "tool")
    env = Environment([f"PATH={tmp_path / 'bin'}"])
    assert find_command("tool", env) == str(prog)


def test_first_directory_wins(tmp_path):
    first = _program(tmp_path / "one", "tool")
    _program(tmp_path / "two", "tool")
    env = Environment([f"PATH={tmp_path / 'one'}:{tmp_path / 'two'}:"])
    assert find_command("tool", env) == str(first)


def test_non_executable_is_skipped(tmp_path):
    _program(tmp_path / "one", "tool", mode=0o644)
    second = _program(tmp_path / "two", "tool")
    env = Environment([f"PATH={tmp_path / 'one'}:{tmp_path / 'two'}"])
    assert find_command("tool", env) == str(second)


def test_not_found(tmp_path):
    env = Environment([f"PATH={tmp_path}"])
    with pytest.raises(CommandNotFound) as info:
        find_command("nosuch", env)
    assert str(info.value) == "nosuch: command not found"
    assert info.value.status == 127
    assert info.value.name == "nosuch"


def test_no_path_variable():
    with pytest.raises(CommandNotFound):
        find_command("ls", Environment(["HOME=/tmp"]))