from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Tuple

CaseName = Literal["none", "upper", "lower"]


class Mode(str, Enum):
    plain = "plain"
    numeral = "numeral"
    date = "date"


@dataclass(frozen=True)
class FormatSpec:
    """
    Immutable, fully resolved format for one field.

    Built by `FieldOptions.resolve()`; the engine never looks at raw options.
    `max_length` and `prefix_length` are computed once here and never change.
    """
    mode: Mode = Mode.plain
    blocks: Tuple[int, ...] = ()
    delimiter: str = " "
    delimiters: Tuple[str, ...] = ()
    prefix: str = ""
    no_immediate_prefix: bool = False
    raw_value_trim_prefix: bool = False
    copy_delimiter: bool = False
    case: CaseName = "none"
    numeric_only: bool = False
    numeral_decimal_mark: str = "."
    numeral_integer_scale: int = 0
    numeral_decimal_scale: int = 2
    numeral_thousands_group_style: str = "thousand"
    numeral_positive_only: bool = False
    strip_leading_zeroes: bool = True
    date_pattern: Tuple[str, ...] = ("d", "m", "Y")

    max_length: int = field(init=False)
    prefix_length: int = field(init=False)

    def __post_init__(self) -> None:
        # frozen dataclass: derived fields go through object.__setattr__
        object.__setattr__(self, "max_length", sum(self.blocks))
        object.__setattr__(self, "prefix_length", len(self.prefix))

    @property
    def delimiter_length(self) -> int:
        return len(self.delimiter)

    @property
    def is_numeral(self) -> bool:
        return self.mode is Mode.numeral

    @property
    def is_date(self) -> bool:
        return self.mode is Mode.date

    def should_show_prefix(self, value: str) -> bool:
        """A prefix is shown unless it waits for content and there is none."""
        return bool(self.prefix) and (not self.no_immediate_prefix or len(value) > 0)
