"""Small text helpers shared by the shell: integer parsing and field splitting."""

from __future__ import annotations

_WHITESPACE = " \t\n\v\f\r"
_U64 = 1 << 64
_OVERFLOW_GUARD = 922337203685477580


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way the shell does.

    Leading whitespace is skipped, one optional sign is accepted, and digits
    are read until the first non-digit.  Text without digits yields 0.
    Values past the 64-bit range collapse to -1 (positive) or 0 (negative),
    and the result is truncated to a signed 32-bit integer.
    """
    stripped = text.lstrip(_WHITESPACE)
    sign = 1
    if stripped[:1] in ("-", "+"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]
    result = 0
    for char in stripped:
        if not "0" <= char <= "9":
            break
        digit = ord(char) - ord("0")
        if result >= _OVERFLOW_GUARD and digit > 7 and sign == 1:
            return -1
        if result >= _OVERFLOW_GUARD and digit > 8 and sign == -1:
            return 0
        result = (result * 10 + digit) % _U64
    return _to_int32((result * sign) % _U64)


def split_fields(text: str | None, separator: str) -> list[str]:
    """Split ``text`` on ``separator``, dropping empty fields.

    A missing text (``None``) gives an empty list.
    """
    if text is None:
        return []
    return [field for field in text.split(separator) if field]