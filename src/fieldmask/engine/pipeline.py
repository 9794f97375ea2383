"""
Runs one input cycle: raw text in, canonical masked text out.

Order of operations per cycle:
  1) backspace  -> swallow the digit in front of a just-deleted delimiter
  2) numeral    -> short-circuit through NumeralFormatter (+ prefix)
  3) date       -> validate/correct digits through DateFormatter
  4) strip delimiters
  5) strip prefix (realigning it after edits inside the prefix)
  6) numeric only
  7) case transform
  8) prefix     -> short-circuit when there are no blocks
  9) truncate to max length
 10) segment into blocks

Every step is a total function of its input, so `on_input` never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .date import DateFormatter
from .numeral import NumeralFormatter
from .spec import FormatSpec
from . import textops


@dataclass
class MaskState:
    """Per-field mutable state; one instance per bound field."""
    last_input_value: str = ""
    backspace: bool = False
    result: str = ""
    date_formatter: Optional[DateFormatter] = field(default=None, repr=False)

    @property
    def date(self):
        """Last parsed (day, month, year), or None."""
        return self.date_formatter.date if self.date_formatter else None


class MaskingEngine:
    """
    Applies a FormatSpec to raw text.

    The engine itself is stateless: everything that changes between cycles
    lives in the MaskState passed to `on_input`, so one engine can serve
    several fields.
    """

    def __init__(self, spec: FormatSpec) -> None:
        self.spec = spec
        self.numeral = NumeralFormatter.from_spec(spec) if spec.is_numeral else None

        if spec.is_date:
            self.blocks = DateFormatter(spec.date_pattern).get_blocks()
        else:
            self.blocks = spec.blocks
        self.max_length = textops.get_max_length(self.blocks)

    # ---------------- State ----------------

    def new_state(self, initial_value: str = "") -> MaskState:
        """Create the state for a newly bound field and format its initial value."""
        state = MaskState(
            date_formatter=DateFormatter(self.spec.date_pattern) if self.spec.is_date else None,
        )
        self.on_input(initial_value, state)
        return state

    # ---------------- Public API ----------------

    def on_input(self, value: str, state: MaskState) -> str:
        spec = self.spec

        # 1) "1234-|" + backspace -> "123": the delimiter went, take the digit too
        if (
            not spec.is_numeral
            and state.backspace
            and not textops.is_delimiter(value[-spec.delimiter_length:], spec.delimiter, spec.delimiters)
        ):
            value = textops.head_str(value, max(0, len(value) - spec.delimiter_length))

        # 2) numeral
        if self.numeral is not None:
            formatted = self.numeral.format(value)
            state.result = spec.prefix + formatted if spec.should_show_prefix(value) else formatted
            return state.result

        # 3) date
        if state.date_formatter is not None:
            value = state.date_formatter.get_validated_date(value)

        # 4) delimiters
        value = textops.strip_delimiters(value, spec.delimiter, spec.delimiters)

        # 5) prefix; only a prefix that was on display can have been edited
        if spec.prefix and value and not state.result.startswith(spec.prefix) and not value.startswith(spec.prefix):
            value = spec.prefix + value
        value = textops.get_prefix_stripped_value(value, spec.prefix, spec.prefix_length)

        # 6) numeric only
        if spec.numeric_only:
            value = textops.strip_non_digits(value)

        # 7) case
        if spec.case == "upper":
            value = value.upper()
        elif spec.case == "lower":
            value = value.lower()

        # 8) prefix
        if spec.should_show_prefix(value):
            value = spec.prefix + value
            if not self.blocks:
                state.result = value
                return state.result

        # 9) + 10) blocks
        if self.blocks:
            value = textops.head_str(value, self.max_length)
        state.result = textops.get_formatted_value(value, self.blocks, spec.delimiter, spec.delimiters)
        return state.result

    def format(self, value: str) -> str:
        """Format a raw `value` in a single cycle on a fresh state."""
        return self.new_state(value).result

    def get_raw_value(self, value: str) -> str:
        """Recover the raw value from a formatted one."""
        spec = self.spec
        if spec.raw_value_trim_prefix:
            value = textops.get_prefix_stripped_value(value, spec.prefix, spec.prefix_length)

        if self.numeral is not None:
            return self.numeral.get_raw_value(value)
        return textops.strip_delimiters(value, spec.delimiter, spec.delimiters)

    def get_iso_format_date(self, state: MaskState) -> str:
        if state.date_formatter is None:
            return ""
        return state.date_formatter.get_iso_format_date()
