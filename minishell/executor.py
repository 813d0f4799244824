"""Running parsed commands: redirections, here-documents and pipelines."""

from __future__ import annotations

import contextlib
import copy
import io
import os
import subprocess
import sys
import tempfile
from typing import IO, BinaryIO, Callable, Iterable, Iterator, Optional, Sequence, Union

from .builtins import ShellExit, is_builtin, run_builtin
from .environment import Environment
from .expansion import expand_variables
from .parser import Command
from .textutil import split_fields

HEREDOC_PROMPT = "> "

ReadLine = Callable[[str], Optional[str]]
_Outcome = Union[int, "subprocess.Popen[bytes]"]


class RedirectionError(Exception):
    """A file named in a redirection could not be opened."""


def _default_read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _report(error: Exception) -> None:
    sys.stderr.write(f"{error}\n")


def lookup_path_variable(envp: Iterable[str]) -> str | None:
    """Return the value of the first entry whose name starts with ``PATH``."""
    for entry in envp:
        key, _, value = entry.partition("=")
        if key.startswith("PATH"):
            return value
    return None


def resolve_path(name: str, envp: Iterable[str]) -> str:
    """Find ``name`` in the PATH directories; fall back to ``name`` itself."""
    for directory in split_fields(lookup_path_variable(envp), ":"):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.F_OK | os.X_OK):
            return candidate
    return name


def collect_heredoc(limiter: str, env: Environment, lines: Iterable[str]) -> str:
    """Gather here-document text until a line equal to ``limiter``.

    Each line is expanded before it is compared with the limiter.
    """
    collected = []
    for line in lines:
        expanded = expand_variables(line, env)
        if expanded == limiter:
            break
        collected.append(expanded + "\n")
    return "".join(collected)


def _prompted_lines(read_line: ReadLine) -> Iterator[str]:
    while (line := read_line(HEREDOC_PROMPT)) is not None:
        yield line


def prepare_heredocs(
    commands: Sequence[Command], env: Environment, read_line: ReadLine | None = None
) -> None:
    """Read the here-document of every command that has a limiter."""
    reader = read_line or _default_read_line
    for command in commands:
        if command.limiter is not None:
            command.heredoc = collect_heredoc(command.limiter, env, _prompted_lines(reader))


def _exit_status(returncode: int) -> int:
    return 128 - returncode if returncode < 0 else returncode


def _child_environment(envp: Iterable[str]) -> dict[str, str]:
    return {key: value for key, _, value in (entry.partition("=") for entry in envp)}


def _spool(data: bytes, stack: contextlib.ExitStack) -> BinaryIO:
    handle = stack.enter_context(tempfile.TemporaryFile())
    handle.write(data)
    handle.seek(0)
    return handle


def _open_input(path: str) -> BinaryIO:
    try:
        return open(path, "rb")
    except OSError as exc:
        raise RedirectionError(f"infile error: {exc.strerror}") from exc


def _open_outputs(command: Command) -> BinaryIO | None:
    """Create every output file in order and return the last one, opened."""
    flags = os.O_RDWR | os.O_CREAT | (os.O_APPEND if command.is_append() else os.O_TRUNC)
    handle = None
    for path in command.out_files:
        if handle is not None:
            handle.close()
            handle = None
        try:
            descriptor = os.open(path, flags, 0o777)
        except OSError as exc:
            raise RedirectionError(f"outfile error: {exc.strerror}") from exc
        handle = os.fdopen(descriptor, "wb")
    return handle


def _command_input(
    command: Command, upstream: IO[bytes] | None, stack: contextlib.ExitStack
) -> IO[bytes] | None:
    if command.limiter is not None:
        return _spool((command.heredoc or "").encode(), stack)
    if command.infile is not None:
        return stack.enter_context(_open_input(command.infile))
    return upstream


def _spawn(
    command: Command,
    envp: list[str],
    stdin: IO[bytes] | None,
    stdout: IO[bytes] | int | None,
) -> "subprocess.Popen[bytes] | None":
    name = command.args[0] if command.args else ""
    if command.args:
        path = resolve_path(name, envp)
        if not os.path.dirname(path):
            path = os.path.join(os.curdir, path)
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            return subprocess.Popen(
                command.args,
                executable=path,
                stdin=stdin,
                stdout=stdout,
                env=_child_environment(envp),
            )
        except OSError:
            pass
    sys.stderr.write(f"minishell: {name}: command not found\n")
    return None


def _guarded_builtin(args: list[str], env: Environment, out: IO[str]) -> int:
    try:
        return run_builtin(args, env, out, sys.stderr)
    except ShellExit as exc:
        return exc.status


def _execute_builtin(command: Command, env: Environment) -> None:
    with contextlib.ExitStack() as stack:
        try:
            _command_input(command, None, stack)
            output = _open_outputs(command)
        except RedirectionError as exc:
            _report(exc)
            return
        out: IO[str] = sys.stdout
        if output is not None:
            out = stack.enter_context(io.TextIOWrapper(output, encoding="utf-8"))
        env.exit_status = run_builtin(command.args, env, out, sys.stderr)


def _execute_external(command: Command, env: Environment) -> int:
    envp = env.to_envp()
    with contextlib.ExitStack() as stack:
        try:
            stdin = _command_input(command, None, stack)
            output = _open_outputs(command)
        except RedirectionError as exc:
            _report(exc)
            return 1
        if output is not None:
            stack.enter_context(output)
        process = _spawn(command, envp, stdin, output)
    return 127 if process is None else _exit_status(process.wait())


def _execute_one(command: Command, env: Environment) -> None:
    if not command.args:
        return
    if is_builtin(command.args[0]):
        _execute_builtin(command, env)
    else:
        env.exit_status = _execute_external(command, env)


def _pipeline_builtin(
    command: Command,
    env: Environment,
    output: BinaryIO | None,
    is_last: bool,
    stack: contextlib.ExitStack,
) -> tuple[_Outcome, IO[bytes] | None]:
    # A builtin in a pipeline runs apart from the shell: its changes are lost.
    scratch = copy.deepcopy(env)
    if not is_last:
        buffer = io.StringIO()
        status = _guarded_builtin(command.args, scratch, buffer)
        return status, _spool(buffer.getvalue().encode(), stack)
    if output is None:
        return _guarded_builtin(command.args, scratch, sys.stdout), None
    with io.TextIOWrapper(output, encoding="utf-8") as text:
        return _guarded_builtin(command.args, scratch, text), None


def _run_stage(
    command: Command,
    env: Environment,
    envp: list[str],
    upstream: IO[bytes] | None,
    is_last: bool,
    stack: contextlib.ExitStack,
) -> tuple[_Outcome, IO[bytes] | None]:
    """Start one stage; return its outcome and the stream feeding the next."""
    try:
        stdin = _command_input(command, upstream, stack)
        output = _open_outputs(command) if is_last else None
    except RedirectionError as exc:
        _report(exc)
        return 1, (None if is_last else _spool(b"", stack))
    if output is not None:
        stack.enter_context(output)
    if command.args and is_builtin(command.args[0]):
        return _pipeline_builtin(command, env, output, is_last, stack)
    process = _spawn(command, envp, stdin, output if is_last else subprocess.PIPE)
    if process is None:
        return 127, (None if is_last else _spool(b"", stack))
    return process, (None if is_last else process.stdout)


def _execute_pipeline(commands: Sequence[Command], env: Environment) -> None:
    envp = env.to_envp()
    outcomes: list[_Outcome] = []
    upstream: IO[bytes] | None = None
    with contextlib.ExitStack() as stack:
        for position, command in enumerate(commands, start=1):
            previous = upstream
            try:
                outcome, upstream = _run_stage(
                    command, env, envp, previous, position == len(commands), stack
                )
            finally:
                if previous is not None:
                    previous.close()
            outcomes.append(outcome)
    statuses = [
        _exit_status(outcome.wait()) if isinstance(outcome, subprocess.Popen) else outcome
        for outcome in outcomes
    ]
    env.exit_status = statuses[-1]


def execute(
    commands: Sequence[Command], env: Environment, read_line: ReadLine | None = None
) -> None:
    """Run a parsed pipeline and record its exit status in ``env``."""
    if not commands:
        return
    prepare_heredocs(commands, env, read_line)
    if len(commands) > 1:
        _execute_pipeline(commands, env)
    else:
        _execute_one(commands[0], env)