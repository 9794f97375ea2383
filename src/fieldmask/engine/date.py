"""
Date validation as digits arrive.

The pattern (e.g. ["d", "m", "Y"]) drives both the block widths (4 for the
year, 2 otherwise) and the order in which digits are read. Corrections are
applied per keystroke so the field never shows an impossible day or month:

  day   : "00" -> "01", first digit > 3 -> "0d", > 31 -> "31"
  month : "00" -> "01", first digit > 1 -> "0d", > 12 -> "12"

Once a date is complete it is clamped to a real calendar date (30-day months,
February with leap years) and remembered so it can be read back as ISO.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .textops import strip_non_digits

DateTriple = Tuple[int, int, int]

# months shorter than 31 days
_SHORT_MONTHS = {2, 4, 6, 9, 11}


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def _pad2(number: int) -> str:
    return f"{number:02d}"


class DateFormatter:
    """
    Stateful date formatter for a single field.

    `date` holds the last completed (day, month, year); year is 0 when only
    day and month have been entered. It is reset to None while typing.
    """

    def __init__(self, date_pattern: Sequence[str] = ("d", "m", "Y")) -> None:
        self.date_pattern: Tuple[str, ...] = tuple(date_pattern)
        self.blocks: Tuple[int, ...] = tuple(4 if tag == "Y" else 2 for tag in self.date_pattern)
        self.date: Optional[DateTriple] = None

    def get_blocks(self) -> Tuple[int, ...]:
        return self.blocks

    def get_iso_format_date(self) -> str:
        if not self.date or not self.date[2]:
            return ""
        day, month, year = self.date
        return f"{year:04d}-{_pad2(month)}-{_pad2(day)}"

    def get_validated_date(self, value: str) -> str:
        value = strip_non_digits(value)
        result = ""

        for length, tag in zip(self.blocks, self.date_pattern):
            if not value:
                break

            # slice before correcting: a padded "0d" still consumes one digit only
            sub, rest = value[:length], value[length:]
            sub0 = sub[:1]

            if tag == "d":
                if sub == "00":
                    sub = "01"
                elif int(sub0) > 3:
                    sub = "0" + sub0
                elif int(sub) > 31:
                    sub = "31"
            elif tag == "m":
                if sub == "00":
                    sub = "01"
                elif int(sub0) > 1:
                    sub = "0" + sub0
                elif int(sub) > 12:
                    sub = "12"

            result += sub
            value = rest

        return self.get_fixed_date_string(result)

    def get_fixed_date_string(self, value: str) -> str:
        pattern = self.date_pattern
        date: Optional[DateTriple] = None
        has_year = False

        # dd-mm || mm-dd, no year typed yet
        if len(value) == 4 and len(pattern) >= 2 and "Y" not in pattern[:2]:
            day_start = 0 if pattern[0] == "d" else 2
            month_start = 2 - day_start
            day = int(value[day_start:day_start + 2])
            month = int(value[month_start:month_start + 2])
            date = self.get_fixed_date(day, month, 0)

        # any ordering of the three fields
        elif len(value) == 8 and set(pattern) == {"d", "m", "Y"}:
            day_index = pattern.index("d")
            month_index = pattern.index("m")
            year_index = pattern.index("Y")

            # fields after the year are shifted by its two extra digits
            year_start = year_index * 2
            day_start = day_index * 2 if day_index <= year_index else day_index * 2 + 2
            month_start = month_index * 2 if month_index <= year_index else month_index * 2 + 2

            day = int(value[day_start:day_start + 2])
            month = int(value[month_start:month_start + 2])
            year = int(value[year_start:year_start + 4])
            date = self.get_fixed_date(day, month, year)
            has_year = True

        self.date = date

        if date is None:
            return value

        day, month, year = date
        rendered = ""
        for tag in pattern:
            if tag == "d":
                rendered += _pad2(day)
            elif tag == "m":
                rendered += _pad2(month)
            elif has_year:
                rendered += f"{year:04d}"
        return rendered

    def get_fixed_date(self, day: int, month: int, year: int) -> DateTriple:
        day = min(day, 31)
        month = min(month, 12)
        year = int(year or 0)

        if month in _SHORT_MONTHS:
            if month == 2:
                day = min(day, 29 if is_leap_year(year) else 28)
            else:
                day = min(day, 30)

        return day, month, year

    is_leap_year = staticmethod(is_leap_year)
