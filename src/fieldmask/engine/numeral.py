"""
Numeral formatting: signed, grouped, scale-clamped numbers.

`format()` never raises. Anything that is not a digit, the first decimal mark
or a leading minus is dropped; the decimal part is truncated (never rounded).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_LETTERS = re.compile(r"[A-Za-z]")
_LEADING_ZEROES = re.compile(r"^(-)?0+(?=[0-9])")
_THOUSANDS = re.compile(r"([0-9])(?=(?:[0-9]{3})+$)")

# Reserved placeholders; letters are stripped first so they cannot collide.
_MARK = "M"
_SIGN = "N"


class GroupStyle:
    thousand = "thousand"
    none = "none"


@dataclass
class NumeralFormatter:
    decimal_mark: str = "."
    integer_scale: int = 0
    decimal_scale: int = 2
    thousands_group_style: str = GroupStyle.thousand
    positive_only: bool = False
    strip_leading_zeroes: bool = True
    delimiter: str = ","

    def __post_init__(self) -> None:
        self.decimal_mark = self.decimal_mark or "."
        self.integer_scale = self.integer_scale if self.integer_scale > 0 else 0
        self.decimal_scale = self.decimal_scale if self.decimal_scale >= 0 else 2
        self.thousands_group_style = self.thousands_group_style or GroupStyle.thousand
        self._keep = re.compile(r"[^0-9" + _MARK + r"\-]")

    @classmethod
    def from_spec(cls, spec) -> "NumeralFormatter":
        return cls(
            decimal_mark=spec.numeral_decimal_mark,
            integer_scale=spec.numeral_integer_scale,
            decimal_scale=spec.numeral_decimal_scale,
            thousands_group_style=spec.numeral_thousands_group_style,
            positive_only=spec.numeral_positive_only,
            strip_leading_zeroes=spec.strip_leading_zeroes,
            delimiter=spec.delimiter,
        )

    def get_raw_value(self, value: str) -> str:
        """Drop grouping and normalize the decimal mark to '.'."""
        if self.delimiter:
            value = value.replace(self.delimiter, "")
        return value.replace(self.decimal_mark, ".", 1)

    def format(self, value: str) -> str:
        value = _LETTERS.sub("", value)
        # protect the first decimal mark from the stripping below
        value = value.replace(self.decimal_mark, _MARK, 1)
        value = self._keep.sub("", value)
        # only a leading minus is meaningful
        value = re.sub(r"^-", _SIGN, value, count=1)
        value = value.replace("-", "")
        value = value.replace(_SIGN, "" if self.positive_only else "-", 1)
        value = value.replace(_MARK, self.decimal_mark, 1)

        if self.strip_leading_zeroes:
            value = _LEADING_ZEROES.sub(lambda m: m.group(1) or "", value)

        part_integer, mark, part_decimal = value.partition(self.decimal_mark)
        if mark:
            part_decimal = self.decimal_mark + part_decimal[: self.decimal_scale]

        if self.integer_scale > 0:
            signed = 1 if value[:1] == "-" else 0
            part_integer = part_integer[: self.integer_scale + signed]

        if self.thousands_group_style != GroupStyle.none and self.delimiter:
            part_integer = _THOUSANDS.sub(lambda m: m.group(1) + self.delimiter, part_integer)

        return part_integer + (part_decimal if self.decimal_scale > 0 else "")
