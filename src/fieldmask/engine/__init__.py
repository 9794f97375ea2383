"""Masking engine: pure text operations, numeral and date formatters, and the per-cycle pipeline."""

from .backspace import BACKSPACE, BackspaceDetector, is_composition_backspace
from .date import DateFormatter, is_leap_year
from .numeral import GroupStyle, NumeralFormatter
from .pipeline import MaskingEngine, MaskState
from .spec import FormatSpec, Mode

__all__ = [
    "BACKSPACE",
    "BackspaceDetector",
    "is_composition_backspace",
    "DateFormatter",
    "is_leap_year",
    "GroupStyle",
    "NumeralFormatter",
    "MaskingEngine",
    "MaskState",
    "FormatSpec",
    "Mode",
]
