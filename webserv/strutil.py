"""String helpers used by the request parser and configuration code."""

from __future__ import annotations

import re

_C_SPACES = frozenset(" \t\n\v\f\r")
_HTTP_SPACES = frozenset(" \t")
_DIGITS = frozenset("0123456789")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_RE = re.compile(r"[+-]?(?:0[xX])?[0-9a-fA-F]+")


def has_space(text: str) -> bool:
    """Return True if the text holds a whitespace character before any NUL."""
    head = text.split("\0", 1)[0]
    return any(ch in _C_SPACES for ch in head)


def is_http_space(char: str) -> bool:
    """Return True for the HTTP linear whitespace characters SP and HT."""
    return char in _HTTP_SPACES and len(char) == 1


def is_unsigned_int_str(text: str) -> bool:
    """Return True if every character is an ASCII digit (an empty text counts)."""
    return all(ch in _DIGITS for ch in text)


def pass_lws(text: str) -> str:
    """Return the text without its leading spaces and tabs."""
    return text.lstrip(" \t")


def strtrim(text: str, charset: str) -> str:
    """Drop leading characters in ``charset``, then cut at the first one left.

    A NUL character is treated as belonging to every charset.
    """
    members = set(charset) | {"\0"}
    start = 0
    while start < len(text) and text[start] in members:
        start += 1
    rest = text[start:]
    for offset, ch in enumerate(rest):
        if ch in members:
            return rest[:offset]
    return rest


def split(text: str, sep: str) -> list[str]:
    """Split on any character of ``sep``, dropping empty pieces."""
    separators = set(sep)
    words: list[str] = []
    current: list[str] = []
    for ch in text:
        if ch in separators:
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        words.append("".join(current))
    return words


def consume(text: str, count: int) -> tuple[str, str]:
    """Return the first ``count`` characters and the remainder."""
    if count < 0:
        raise ValueError("count must not be negative")
    return text[:count], text[count:]


def get_extension(filename: str) -> str:
    """Return what follows the last dot of the name, or an empty string."""
    _, dot, ext = filename.rpartition(".")
    return ext if dot else ""


def _parse(text: str, pattern: re.Pattern[str], bad: str, leftover: str) -> str:
    stripped = text.lstrip()
    match = pattern.match(stripped)
    if match is None:
        raise ValueError(bad)
    if stripped[match.end():].strip():
        raise ValueError(leftover)
    return match.group(0)


def to_num(text: str, kind: type = int) -> int | float:
    """Convert a whole numeric text to ``int`` or ``float``.

    Surrounding whitespace is allowed; anything else raises ValueError.
    """
    message = f"Invalid input: '{text}'"
    if kind is int:
        return int(_parse(text, _INT_RE, message, message))
    if kind is float:
        return float(_parse(text, _FLOAT_RE, message, message))
    raise TypeError(f"unsupported numeric kind: {kind!r}")


def to_hex_num(text: str) -> int:
    """Convert a hexadecimal text, with or without a 0x prefix, to an int."""
    token = _parse(
        text,
        _HEX_RE,
        f"String is not representing hex: {text}",
        f"Leftover character after str to hex convertion: {text}",
    )
    return int(token, 16)