"""Grouping tokens into the commands of a pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from .lexer import Token, TokenType


@dataclass
class Command:
    """One command of a pipeline with its redirections.

    ``append`` names the last ``>>`` target; when set, every output file is
    opened for appending.  ``heredoc`` holds collected here-document text.
    """

    args: list[str] = field(default_factory=list)
    infile: str | None = None
    out_files: list[str] = field(default_factory=list)
    append: str | None = None
    limiter: str | None = None
    heredoc: str | None = None

    def is_append(self) -> bool:
        """Whether output files are opened in append mode."""
        return self.append is not None

    def _redirect(self, kind: TokenType, target: str) -> None:
        if kind is TokenType.REDIR_IN:
            self.infile = target
        elif kind is TokenType.REDIR_APPEND:
            self.append = target
            self.out_files.append(target)
        elif kind is TokenType.REDIR_OUT:
            self.out_files.append(target)
        elif kind is TokenType.REDIR_HEREDOC:
            self.limiter = target


def parse(tokens: list[Token]) -> list[Command]:
    """Split ``tokens`` at pipes into commands.

    A redirection takes the next token as its target, whatever its kind.
    Empty words are not arguments.  A trailing pipe adds no command.
    """
    commands: list[Command] = []
    current: Command | None = None
    stream = iter(tokens)
    for token in stream:
        if current is None:
            current = Command()
            commands.append(current)
        if token.type is TokenType.PIPE:
            current = None
        elif token.type.is_redirection:
            target = next(stream, None)
            if target is None:
                break
            current._redirect(token.type, target.value)
        elif token.value:
            current.args.append(token.value)
    return commands