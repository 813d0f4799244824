"""Splitting a command line into words, pipes and redirection operators."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

UNCLOSED_QUOTE_MESSAGE = "syntax error near unexpected token "

_BLANKS = " \t\n\v\f\r"
_OPERATOR_CHARS = "|<>"
_QUOTES = "'\""
_WORD = re.compile(r"[^ \t\n|<>]+")


class TokenType(Enum):
    """Kinds of token produced by the lexer."""

    WORD = "word"
    PIPE = "pipe"
    REDIR_IN = "redir_in"
    REDIR_OUT = "redir_out"
    REDIR_APPEND = "redir_append"
    REDIR_HEREDOC = "redir_heredoc"

    @property
    def is_redirection(self) -> bool:
        return self in _REDIRECTIONS


_REDIRECTIONS = frozenset(
    {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.REDIR_APPEND,
        TokenType.REDIR_HEREDOC,
    }
)


@dataclass(frozen=True)
class Token:
    """One lexical unit; ``quote`` is the quote character that enclosed a word."""

    value: str
    type: TokenType
    quote: str | None = None


@dataclass
class TokenizeResult:
    """Tokens read from a line, and the error that stopped reading, if any."""

    tokens: list[Token] = field(default_factory=list)
    error: str | None = None


def classify_operator(line: str, position: int) -> tuple[TokenType, int]:
    """Identify the operator starting at ``position``.

    Returns the token type and the number of characters it spans; a
    character that starts no operator gives ``(TokenType.WORD, 0)``.
    """
    pair = line[position : position + 2]
    if pair == ">>":
        return TokenType.REDIR_APPEND, 2
    if pair == "<<":
        return TokenType.REDIR_HEREDOC, 2
    char = line[position : position + 1]
    if char == "|":
        return TokenType.PIPE, 1
    if char == "<":
        return TokenType.REDIR_IN, 1
    if char == ">":
        return TokenType.REDIR_OUT, 1
    return TokenType.WORD, 0


def tokenize(line: str) -> TokenizeResult:
    """Break ``line`` into tokens.

    A quoted run becomes one word holding the text between the quotes.  An
    unclosed quote stops reading; the tokens before it are kept and the
    result carries an error message.
    """
    tokens: list[Token] = []
    position = 0
    length = len(line)
    while position < length:
        char = line[position]
        if char in _BLANKS:
            position += 1
        elif char in _OPERATOR_CHARS:
            kind, span = classify_operator(line, position)
            tokens.append(Token(line[position : position + span], kind))
            position += span
        elif char in _QUOTES:
            end = line.find(char, position + 1)
            if end == -1:
                return TokenizeResult(tokens, UNCLOSED_QUOTE_MESSAGE)
            tokens.append(Token(line[position + 1 : end], TokenType.WORD, quote=char))
            position = end + 1
        else:
            match = _WORD.match(line, position)
            if match is None:
                # Only blanks such as \v or \r can land here; they end a word.
                position += 1
                continue
            tokens.append(Token(match.group(), TokenType.WORD))
            position = match.end()
    return TokenizeResult(tokens)