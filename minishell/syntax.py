"""Syntax checks run on a tokenized line before it is parsed."""

from __future__ import annotations

from .lexer import Token, TokenType

_BLANKS = " \t\n\v\f\r"


class ShellSyntaxError(Exception):
    """A command line that cannot be run as written."""


def check_tokens(tokens: list[Token]) -> None:
    """Reject a redirection not followed by a word and a trailing pipe."""
    for token, following in zip(tokens, [*tokens[1:], None]):
        if token.type.is_redirection:
            if following is None or following.type is not TokenType.WORD:
                raise ShellSyntaxError("syntax error near unexpected token `newline'")
        elif token.type is TokenType.PIPE and following is None:
            raise ShellSyntaxError("syntax error near unexpected token ")


def check_syntax(line: str, tokens: list[Token]) -> None:
    """Reject a line that starts with a pipe, then check its tokens."""
    if line.lstrip(_BLANKS).startswith("|"):
        raise ShellSyntaxError("syntax error near unexpected token `|'")
    check_tokens(tokens)