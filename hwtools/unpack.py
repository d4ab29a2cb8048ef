"""Expand strings where a digit repeats the preceding character."""

from __future__ import annotations

from itertools import pairwise

ESCAPE_CHAR = "\\"
_DIGITS = "0123456789"


class InvalidStringError(ValueError):
    """The packed string is malformed."""

    def __init__(self, message: str = "invalid string") -> None:
        super().__init__(message)


def _is_digit(char: str) -> bool:
    return char.isdecimal()


def unpack(text: str) -> str:
    """Unpack ``text`` such as ``a4bc2d5e`` into ``aaaabccddddde``.

    A backslash escapes a digit or another backslash.
    """
    if not text:
        return ""
    if _is_digit(text[0]):
        raise InvalidStringError()

    parts: list[str] = []
    escaped = False
    for char, following in pairwise(text):
        if not escaped and char == ESCAPE_CHAR:
            if not _is_digit(following) and following != ESCAPE_CHAR:
                raise InvalidStringError()
            escaped = True
            continue
        if not escaped and _is_digit(char):
            if _is_digit(following):
                raise InvalidStringError()
            continue
        if _is_digit(following):
            if following not in _DIGITS:
                raise InvalidStringError(f"unsupported digit {following!r}")
            parts.append(char * int(following))
        else:
            parts.append(char)
        escaped = False

    last = text[-1]
    if escaped or not _is_digit(last):
        parts.append(last)
    return "".join(parts)