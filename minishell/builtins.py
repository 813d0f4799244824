"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from typing import Callable, TextIO

from .environment import Environment
from .textutil import atoi

BUILTIN_NAMES = frozenset({"cd", "exit", "env", "unset", "echo", "pwd", "export"})

_HOME_NOT_SET = "minishell: cd: HOME not set\n"


class ShellExit(Exception):
    """Raised by ``exit``; ``status`` is the process exit status (0-255)."""

    def __init__(self, code: int) -> None:
        self.status = code & 0xFF
        super().__init__(self.status)


def _ascii_alpha(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


def _ascii_alnum(char: str) -> bool:
    return _ascii_alpha(char) or "0" <= char <= "9"


def is_n_option(arg: str | None) -> bool:
    """Whether ``arg`` is a ``-n`` style option: a dash followed only by ``n``."""
    if not arg or arg[0] != "-":
        return False
    return all(char == "n" for char in arg[1:])


def is_number(text: str) -> bool:
    """Whether ``text`` is an optional leading ``-`` followed only by digits."""
    digits = text[1:] if text.startswith("-") else text
    return all("0" <= char <= "9" for char in digits)


def is_valid_identifier(key: str | None) -> bool:
    """Whether ``key`` is a valid variable name."""
    if not key or not (_ascii_alpha(key[0]) or key[0] == "_"):
        return False
    return all(_ascii_alnum(char) or char == "_" for char in key)


def is_builtin(name: str | None) -> bool:
    """Whether ``name`` is handled by the shell itself."""
    return name in BUILTIN_NAMES


def echo(args: list[str], out: TextIO | None = None) -> int:
    """Print the arguments separated by spaces; ``-n`` options drop the newline."""
    out = out or sys.stdout
    words = args[1:]
    newline = True
    while words and is_n_option(words[0]):
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def _change_directory(path: str, err: TextIO) -> int:
    try:
        os.chdir(path)
    except OSError as exc:
        err.write(f"cd: {exc.strerror}\n")
        return 1
    return 0


def cd(args: list[str], env: Environment, err: TextIO | None = None) -> int:
    """Change directory, expanding a leading ``~``, and update PWD and OLDPWD."""
    err = err or sys.stderr
    try:
        oldpwd = os.getcwd()
    except OSError:
        oldpwd = ""
    home = env.get("HOME")
    if len(args) > 1:
        target = args[1]
        if target.startswith("~"):
            if home is None:
                err.write(_HOME_NOT_SET)
                return 1
            if target == "~":
                target = home
            elif target.startswith("~/"):
                target = home + target[1:]
    else:
        if home is None:
            err.write(_HOME_NOT_SET)
            return 1
        target = home
    status = _change_directory(target, err)
    if status == 0:
        env.set("OLDPWD", oldpwd)
        if "PWD" in env:
            env.set("PWD", os.getcwd())
    return status


def pwd(out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Print the current working directory."""
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        path = os.getcwd()
    except OSError:
        err.write("error to path\n")
        return 1
    out.write(f"{path}\n")
    return 0


def print_env(env: Environment, out: TextIO | None = None) -> int:
    """Print every variable that has a value as ``KEY=VALUE``."""
    out = out or sys.stdout
    for key, value in env.items():
        if value is not None:
            out.write(f"{key}={value}\n")
    return 0


def _print_export(env: Environment, out: TextIO) -> int:
    for key, value in sorted(env.items(), key=lambda item: item[0].encode()):
        if value is not None:
            out.write(f'declare -x {key}="{value}"\n')
        else:
            out.write(f"declare -x {key}\n")
    return 0


def export(args: list[str], env: Environment, out: TextIO | None = None) -> int:
    """Set variables from ``KEY=VALUE`` arguments, or list them sorted.

    An argument without ``=`` sets the variable with no value.  Invalid
    names are reported and skipped.
    """
    out = out or sys.stdout
    if len(args) < 2:
        return _print_export(env, out)
    for arg in args[1:]:
        key, sep, value = arg.partition("=")
        if not is_valid_identifier(key):
            out.write(f"minishell: export: `{arg}': not a valid identifier\n")
            continue
        env.set(key, value if sep else None)
    return 0


def unset(args: list[str], env: Environment) -> int:
    """Remove the first variable whose name starts with the first argument."""
    if len(args) > 1:
        env.unset_prefix(args[1])
    return 0


def exit_shell(args: list[str], err: TextIO | None = None) -> int:
    """Leave the shell by raising :class:`ShellExit`.

    Returns 1 without exiting when given more than one numeric argument.
    """
    err = err or sys.stderr
    code = 0
    if len(args) > 1:
        if not is_number(args[1]):
            err.write(f"exit: {args[1]}:numeric argument required\n")
            raise ShellExit(255)
        if len(args) > 2:
            err.write("exit: too many arguments\n")
            return 1
        code = atoi(args[1])
    else:
        err.write("exit\n")
    raise ShellExit(code)


def run_builtin(
    args: list[str],
    env: Environment,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run the builtin named by ``args[0]`` and return its status."""
    out = out or sys.stdout
    err = err or sys.stderr
    handlers: dict[str, Callable[[], int]] = {
        "echo": lambda: echo(args, out),
        "cd": lambda: cd(args, env, err),
        "pwd": lambda: pwd(out, err),
        "env": lambda: print_env(env, out),
        "unset": lambda: unset(args, env),
        "export": lambda: export(args, env, out),
        "exit": lambda: exit_shell(args, err),
    }
    handler = handlers.get(args[0]) if args else None
    return handler() if handler is not None else 1