"""Decoding of detector text lines into hit words and bar numbers.

Each line of a plane's data file is a comma separated record. The second,
third and fourth columns carry two 12-bit hexadecimal words, one per side of
the plane. Side B is the second column followed by the first character of
the third. Side A is the second character of the third column followed by
the fourth.
"""

from __future__ import annotations

import re

_WORD_MASK = 0xFFFFFFFF
_ULONG_MAX = 2**64 - 1
_HEX_NUMBER = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)"
)


class DecodeError(ValueError):
    """Raised when a line holds a field that cannot be decoded."""


def _parse_hex(text: str) -> int:
    """Read a leading hexadecimal number from *text* as a 32-bit word.

    Leading whitespace, a sign and a ``0x`` prefix are accepted and anything
    after the digits is ignored. A negative number wraps around as an
    unsigned value does.
    """
    match = _HEX_NUMBER.match(text)
    if match is None:
        raise DecodeError(f"no hexadecimal number in {text!r}")
    sign, digits = match.groups()
    value = int(digits, 16)
    if value > _ULONG_MAX:
        raise DecodeError(f"hexadecimal number out of range: {text!r}")
    if sign == "-":
        value = -value & _ULONG_MAX
    return value & _WORD_MASK


def bar_from_bits(value: int, single_hit: bool = True) -> int | None:
    """Return the bar number, counted from 1, of the highest set bit.

    With *single_hit* the word must have exactly one bit set; otherwise the
    result is None. Without it, a word of zero counts as bar 1.
    """
    if value < 0:
        raise ValueError(f"hit word must not be negative: {value}")
    if single_hit and value.bit_count() != 1 if hasattr(int, "bit_count") else (
        single_hit and bin(value).count("1") != 1
    ):
        return None
    return max(1, value.bit_length())


def split_columns(line: str) -> list[str]:
    """Split a record at commas the way a delimited line reader does.

    A trailing empty field after the last comma is not a column, and an
    empty line has no columns. A single trailing newline is dropped.
    """
    if line.endswith("\n"):
        line = line[:-1]
    if not line:
        return []
    columns = line.split(",")
    if columns[-1] == "":
        columns.pop()
    return columns


def hit_words(line: str) -> tuple[int, int] | None:
    """Return the ``(side_a, side_b)`` hit words of a record.

    Records with fewer than six columns yield None. A record whose third
    column is empty, or whose fields are not hexadecimal, raises DecodeError.
    """
    columns = split_columns(line)
    if len(columns) < 6:
        return None
    col2, col3, col4 = columns[1:4]
    if not col3:
        raise DecodeError(f"third column is empty in {line!r}")
    hex_b = col2 + col3[:1]
    hex_a = col3[1:2] + col4
    return _parse_hex(hex_a), _parse_hex(hex_b)


def decode_line(
    line: str, single_hit: bool = True
) -> tuple[int | None, int | None] | None:
    """Return the ``(bar_a, bar_b)`` pair of a record, or None to skip it.

    A bar is None when *single_hit* is set and its side did not fire exactly
    one bar.
    """
    words = hit_words(line)
    if words is None:
        return None
    word_a, word_b = words
    return bar_from_bits(word_a, single_hit), bar_from_bits(word_b, single_hit)