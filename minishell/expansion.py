"""Variable expansion and quote handling on token lists."""

from __future__ import annotations

import re
from dataclasses import replace

from .environment import Environment
from .lexer import Token, TokenType

# "$?" may swallow the character after it: either a following "$NAME" or one
# literal character is consumed together with it.
_REFERENCE = re.compile(
    r"\$\?(?:\$(?P<after>[A-Za-z_][A-Za-z0-9_]*)|(?P<literal>.))?"
    r"|\$(?P<name>[A-Za-z_][A-Za-z0-9_]*)",
    re.DOTALL,
)


def expand_variables(text: str, env: Environment) -> str:
    """Replace ``$NAME`` with its value and ``$?`` with the last exit status.

    Unknown or valueless variables expand to nothing; a ``$`` that starts no
    reference is kept as is.
    """

    def lookup(name: str) -> str:
        return env.get(name) or ""

    def substitute(match: re.Match[str]) -> str:
        if match.group("name") is not None:
            return lookup(match.group("name"))
        status = str(env.exit_status)
        if match.group("after") is not None:
            return status + lookup(match.group("after"))
        return status + (match.group("literal") or "")

    return _REFERENCE.sub(substitute, text)


def expand_tokens(tokens: list[Token], env: Environment) -> list[Token]:
    """Expand variables in every word not enclosed in single quotes."""
    return [
        replace(token, value=expand_variables(token.value, env))
        if token.type is TokenType.WORD and token.quote != "'" and "$" in token.value
        else token
        for token in tokens
    ]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in "'\"" and value[-1] == value[0]:
        return value[1:-1]
    return value


def strip_quotes(tokens: list[Token]) -> list[Token]:
    """Remove one pair of matching outer quotes from each word."""
    return [
        replace(token, value=_unquote(token.value)) if token.type is TokenType.WORD else token
        for token in tokens
    ]


def drop_empty_words(tokens: list[Token]) -> list[Token]:
    """Return the tokens without words whose value is empty."""
    return [token for token in tokens if not (token.type is TokenType.WORD and token.value == "")]