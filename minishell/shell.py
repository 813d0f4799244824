"""The interactive shell: reads lines, parses them and runs them."""

from __future__ import annotations

import contextlib
import os
import sys
from typing import Sequence

from .builtins import ShellExit
from .environment import Environment
from .executor import ReadLine, execute
from .expansion import expand_tokens, strip_quotes
from .lexer import tokenize
from .parser import parse
from .syntax import ShellSyntaxError, check_syntax

PROMPT = "\033[36mmini\033[31mshell$ \033[0m"


def run_line(line: str, env: Environment, read_line: ReadLine | None = None) -> int:
    """Run one command line and return the resulting exit status.

    Raises :class:`ShellExit` when the line runs ``exit``.
    """
    result = tokenize(line)
    if result.error is not None:
        sys.stdout.write(result.error + "\n")
    tokens = expand_tokens(strip_quotes(result.tokens), env)
    try:
        check_syntax(line, tokens)
    except ShellSyntaxError as exc:
        sys.stderr.write(f"{exc}\n")
        return env.exit_status
    commands = parse(tokens)
    if commands:
        execute(commands, env, read_line)
    return env.exit_status


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive loop; command-line arguments are ignored."""
    with contextlib.suppress(ImportError):
        import readline  # noqa: F401  (gives input() line editing and history)
    env = Environment.from_strings(f"{key}={value}" for key, value in os.environ.items())
    env.increment_shlvl()
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            sys.stdout.write("exit\n")
            return 0
        try:
            run_line(line, env)
        except ShellExit as exc:
            return exc.status


if __name__ == "__main__":
    sys.exit(main())