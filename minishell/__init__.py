"""A small interactive command shell with pipes, redirections, heredocs and built-in commands."""

__version__ = "0.1.0"
__all__ = [
    "builtins",
    "environment",
    "executor",
    "expansion",
    "lexer",
    "parser",
    "shell",
    "syntax",
    "textutil",
]