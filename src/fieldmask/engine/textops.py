"""
Primitive string operations used by the masking pipeline.

Design principles
-----------------
- **Pure functions**: no state, no I/O; easy to test and reason about.
- **Total**: every function accepts any string (including empty) and returns a string.
- **Order-sensitive**: block segmentation walks block lengths left to right and
  only emits a delimiter after a block that was filled completely.
"""

from __future__ import annotations

import re
from itertools import zip_longest
from typing import Sequence

_NON_DIGITS = re.compile(r"[^0-9]")


def strip_non_digits(value: str) -> str:
    """Keep ASCII digits only."""
    return _NON_DIGITS.sub("", value)


def is_delimiter(letter: str, delimiter: str, delimiters: Sequence[str]) -> bool:
    """
    True if `letter` is the configured delimiter.

    With per-boundary `delimiters` any of them counts; otherwise only the
    single shared `delimiter` does.
    """
    if not delimiters:
        return letter == delimiter
    return any(letter == current for current in delimiters)


def _delimiter_re(delimiter: str) -> re.Pattern:
    return re.compile(re.escape(delimiter))


def strip_delimiters(value: str, delimiter: str, delimiters: Sequence[str]) -> str:
    """
    Remove every occurrence of the delimiter(s) from `value`.

    Delimiters may contain regex metacharacters ("." or "|"), so they are
    escaped before matching. Each distinct delimiter is removed in turn.
    """
    if not delimiters:
        if not delimiter:
            return value
        return _delimiter_re(delimiter).sub("", value)

    for current in delimiters:
        if current:
            value = _delimiter_re(current).sub("", value)
    return value


def head_str(value: str, length: int) -> str:
    """First `length` characters of `value`."""
    return value[:length]


def get_max_length(blocks: Sequence[int]) -> int:
    return sum(blocks)


def get_first_diff_index(prev: str, current: str) -> int:
    """Index of the first differing character, -1 if the strings are equal."""
    for index, (a, b) in enumerate(zip_longest(prev, current, fillvalue="")):
        if a != b:
            return index
    return -1


def get_prefix_stripped_value(value: str, prefix: str, prefix_length: int) -> str:
    """
    Drop the prefix from `value`, realigning it first if it was edited.

    For prefix "PRE":
      ("PRE123", 3) -> "123"
      ("PR123", 3)  -> "23"   backspace inside the prefix consumes the next
                              content character instead of the prefix
    """
    if value[:prefix_length] != prefix:
        diff_index = get_first_diff_index(prefix, value[:prefix_length])
        repaired = prefix + value[diff_index:diff_index + 1] + value[prefix_length + 1:]
        value = repaired[:prefix_length] + repaired[prefix_length + 1:]

    return value[prefix_length:]


def get_formatted_value(
    value: str,
    blocks: Sequence[int],
    delimiter: str,
    delimiters: Sequence[str],
) -> str:
    """
    Segment `value` into blocks separated by delimiters.

    A delimiter follows a block only when that block is full and is not the
    last one. With per-boundary `delimiters`, boundary i uses delimiters[i]
    and falls back to the last delimiter used when the list runs out.

    Example:
      ("4111111111111111", [4, 4, 4, 4], "-", []) -> "4111-1111-1111-1111"
    """
    if not blocks:
        return value

    result = ""
    multiple_delimiters = len(delimiters) > 0
    current_delimiter = delimiter if not multiple_delimiters else ""
    last_index = len(blocks) - 1

    for index, length in enumerate(blocks):
        if not value:
            break

        sub, value = value[:length], value[length:]
        result += sub

        if multiple_delimiters and index < len(delimiters) and delimiters[index]:
            current_delimiter = delimiters[index]

        if len(sub) == length and index < last_index:
            result += current_delimiter

    return result
