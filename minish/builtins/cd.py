"""The ``cd`` built-in."""

from __future__ import annotations

import os

from ..state import Environment, report


def _cd_error(target: str | None) -> int:
    if target is None:
        report("cd: HOME not set\n")
    else:
        report(f"cd: {target}: no such file or directory:\n")
    return 1


def _chdir(path: str) -> bool:
    try:
        os.chdir(path)
    except OSError:
        return False
    return True


def _refresh_pwd(env: Environment) -> None:
    """Point an existing ``PWD`` at the working directory."""
    if env.get("PWD") is None:
        return
    try:
        env.set("PWD", os.getcwd())
    except OSError:
        pass


def _save_oldpwd(env: Environment) -> None:
    """Record ``PWD`` (or the working directory) as ``OLDPWD``."""
    if not len(env):
        return
    previous = env.get("PWD")
    if previous is None:
        try:
            previous = os.getcwd()
        except OSError:
            return
    env.set("OLDPWD", previous)


def _go_oldpwd(env: Environment) -> int:
    target = env.get("OLDPWD")
    if target is None:
        report("cd: OLDPWD not set\n")
        return 1
    if not _chdir(target):
        report(f"cd: {target}: No such file or directory\n")
        return 1
    _save_oldpwd(env)
    _refresh_pwd(env)
    return 0


def _go_home(env: Environment) -> int:
    home = env.get("HOME")
    if home is None or not _chdir(home):
        return _cd_error(home)
    _refresh_pwd(env)
    return 0


def _go_under_home(env: Environment, arg: str) -> int:
    home = env.get("HOME")
    if home is None:
        return 1
    target = home + arg[1:]
    if not _chdir(target):
        return _cd_error(target)
    return 0


def cd(shell, argv: list[str]) -> int:
    """Change directory: HOME by default, ``-`` for OLDPWD, ``~/`` under HOME."""
    env = shell.env
    arg = argv[1] if len(argv) > 1 else None
    if arg is not None and arg.startswith("-"):
        return _go_oldpwd(env)
    _save_oldpwd(env)
    if arg is None or arg == "~":
        return _go_home(env)
    if arg.startswith("~/"):
        return _go_under_home(env, arg)
    if arg and not _chdir(arg):
        return _cd_error(arg)
    _refresh_pwd(env)
    return 0