"""The shell's environment: an ordered set of variables plus the last exit status."""

from __future__ import annotations

import os
from typing import Iterable, Iterator

from .textutil import atoi


def parse_entry(entry: str) -> tuple[str, str | None]:
    """Split ``KEY=VALUE`` into its key and value.

    Only the first ``=`` separates; an entry without one has no value.
    """
    key, sep, value = entry.partition("=")
    return (key, value) if sep else (entry, None)


class Environment:
    """Ordered shell variables; a variable may exist without a value."""

    def __init__(self) -> None:
        self._vars: dict[str, str | None] = {}
        self.exit_status = 0

    @classmethod
    def from_strings(cls, entries: Iterable[str] | None) -> "Environment":
        """Build an environment from ``KEY=VALUE`` strings, keeping their order."""
        env = cls()
        for entry in entries or ():
            key, value = parse_entry(entry)
            # The first definition of a key is the one that is looked up.
            env._vars.setdefault(key, value)
        return env

    def get(self, key: str) -> str | None:
        """Return the value of ``key``, or ``None`` if unset or valueless."""
        return self._vars.get(key)

    def set(self, key: str, value: str | None) -> None:
        """Set ``key``; an existing key keeps its position, a new one goes last."""
        self._vars[key] = value

    def unset_prefix(self, name: str) -> bool:
        """Remove the first variable whose key starts with ``name``.

        Returns whether a variable was removed.
        """
        for key in self._vars:
            if key.startswith(name):
                del self._vars[key]
                return True
        return False

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vars))

    def __len__(self) -> int:
        return len(self._vars)

    def items(self) -> list[tuple[str, str | None]]:
        """Return ``(key, value)`` pairs in order."""
        return list(self._vars.items())

    def to_envp(self) -> list[str]:
        """Return ``KEY=VALUE`` strings for a child process.

        Variables without a value are not passed on.
        """
        return [f"{key}={value}" for key, value in self._vars.items() if value is not None]

    def increment_shlvl(self) -> None:
        """Raise SHLVL by one, or seed a minimal environment if empty."""
        if not self._vars:
            try:
                cwd = os.getcwd()
            except OSError:
                return
            self._vars["PWD"] = cwd
            self._vars["SHLVL"] = "1"
            self._vars["_"] = "/usr/bin/env"
            return
        if "SHLVL" in self._vars:
            current = self._vars["SHLVL"]
            level = atoi(current) if current is not None else 0
            self._vars["SHLVL"] = str(level + 1)