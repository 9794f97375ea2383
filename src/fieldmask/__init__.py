"""fieldmask: deterministic input masking for numbers, dates and delimited blocks."""

from .config import FieldOptions, FieldmaskConfig, get_preset, list_presets, load_config
from .engine import (
    BackspaceDetector,
    DateFormatter,
    FormatSpec,
    MaskingEngine,
    MaskState,
    Mode,
    NumeralFormatter,
)
from .field import BindingError, InMemoryClipboard, InMemoryHost, MaskedField, type_keys

__version__ = "0.1.0"

__all__ = [
    "FieldOptions",
    "FieldmaskConfig",
    "get_preset",
    "list_presets",
    "load_config",
    "BackspaceDetector",
    "DateFormatter",
    "FormatSpec",
    "MaskingEngine",
    "MaskState",
    "Mode",
    "NumeralFormatter",
    "BindingError",
    "InMemoryClipboard",
    "InMemoryHost",
    "MaskedField",
    "type_keys",
]
