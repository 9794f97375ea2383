from __future__ import annotations

import logging
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, PositiveInt, field_validator, model_validator

from .engine.spec import FormatSpec, Mode

logger = logging.getLogger(__name__)

# ---- Option vocabulary ----
DateTag = Literal["d", "m", "Y"]
GroupStyle = Literal["thousand", "none"]

# Plain mode has no natural separator; blocks are split by a space.
_PLAIN_DELIMITER = " "
_DATE_DELIMITER = "/"
_NUMERAL_DELIMITER = ","


class CaseTransform(str, Enum):
    none = "none"
    upper = "upper"
    lower = "lower"


# ---- Flat option surface (one per field) ----
class FieldOptions(BaseModel):
    """
    User-facing options for a masked field.

    Mirrors the flat option set of a form-input formatter: everything left
    unset takes a documented default. Call `resolve()` once to obtain the
    immutable FormatSpec the engine runs on.
    """
    # blocks / delimiters
    blocks: List[PositiveInt] = Field(default_factory=list)
    delimiter: Optional[str] = None  # None -> mode dependent default
    delimiters: List[str] = Field(default_factory=list)

    # prefix
    prefix: str = ""
    no_immediate_prefix: bool = False
    raw_value_trim_prefix: bool = False

    # clipboard
    copy_delimiter: bool = False

    # content filters
    numeric_only: bool = False
    uppercase: bool = False
    lowercase: bool = False

    # numeral
    numeral: bool = False
    numeral_decimal_mark: str = "."
    numeral_integer_scale: int = 0    # <= 0 means unlimited
    numeral_decimal_scale: int = 2    # negative falls back to 2
    numeral_thousands_group_style: GroupStyle = "thousand"
    numeral_positive_only: bool = False
    strip_leading_zeroes: bool = True

    # date
    date: bool = False
    date_pattern: List[DateTag] = Field(default_factory=lambda: ["d", "m", "Y"])

    @field_validator("date_pattern")
    @classmethod
    def _unique_tags(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("date_pattern must not be empty")
        if len(set(v)) != len(v):
            raise ValueError(f"date_pattern has duplicate fields: {v}")
        return v

    @field_validator("numeral_decimal_mark")
    @classmethod
    def _single_char_mark(cls, v: str) -> str:
        if len(v) != 1 or v.isalnum() or v == "-":
            raise ValueError("numeral_decimal_mark must be a single non-alphanumeric character")
        return v

    @model_validator(mode="after")
    def _check_modes(self) -> "FieldOptions":
        if self.uppercase and self.lowercase:
            raise ValueError("uppercase and lowercase are mutually exclusive")
        if self.numeral and self.date:
            raise ValueError("numeral and date modes are mutually exclusive")
        return self

    def resolve(self) -> FormatSpec:
        """Freeze these options into a FormatSpec."""
        if self.date:
            mode = Mode.date
        elif self.numeral:
            mode = Mode.numeral
        else:
            mode = Mode.plain

        if self.delimiter is not None:
            delimiter = self.delimiter
        elif mode is Mode.date:
            delimiter = _DATE_DELIMITER
        elif mode is Mode.numeral:
            delimiter = _NUMERAL_DELIMITER
        else:
            delimiter = _PLAIN_DELIMITER if self.blocks else ""

        if mode is Mode.date:
            # date blocks are derived from the pattern, never user supplied
            blocks = tuple(4 if tag == "Y" else 2 for tag in self.date_pattern)
        else:
            blocks = tuple(self.blocks)

        case = CaseTransform.none
        if self.uppercase:
            case = CaseTransform.upper
        elif self.lowercase:
            case = CaseTransform.lower

        return FormatSpec(
            mode=mode,
            blocks=blocks,
            delimiter=delimiter,
            delimiters=tuple(self.delimiters),
            prefix="" if mode is Mode.date else self.prefix,
            no_immediate_prefix=self.no_immediate_prefix,
            raw_value_trim_prefix=self.raw_value_trim_prefix,
            copy_delimiter=self.copy_delimiter,
            case=case.value,
            numeric_only=mode is Mode.date or self.numeric_only,
            numeral_decimal_mark=self.numeral_decimal_mark,
            numeral_integer_scale=self.numeral_integer_scale if self.numeral_integer_scale > 0 else 0,
            numeral_decimal_scale=self.numeral_decimal_scale if self.numeral_decimal_scale >= 0 else 2,
            numeral_thousands_group_style=self.numeral_thousands_group_style,
            numeral_positive_only=self.numeral_positive_only,
            strip_leading_zeroes=self.strip_leading_zeroes,
            date_pattern=tuple(self.date_pattern),
        )


# ---- Root config ----
class FieldmaskConfig(BaseModel):
    formats: Dict[str, FieldOptions] = Field(default_factory=dict)


# ---- Presets shipped with the package ----
def _load_presets() -> Dict[str, FieldOptions]:
    text = resources.files("fieldmask.presets").joinpath("presets.yaml").read_text()
    data = yaml.safe_load(text) or {}
    return {name: FieldOptions(**opts) for name, opts in (data.get("formats", {}) or {}).items()}


def list_presets(cfg: Optional[FieldmaskConfig] = None) -> Dict[str, FieldOptions]:
    """Packaged presets, overridden by formats of the same name in `cfg`."""
    presets = _load_presets()
    if cfg is not None:
        presets.update(cfg.formats)
    return presets


def get_preset(name: str, cfg: Optional[FieldmaskConfig] = None) -> FieldOptions:
    presets = list_presets(cfg)
    if name not in presets:
        raise KeyError(f"unknown format '{name}' (available: {', '.join(sorted(presets))})")
    return presets[name]


# ---- Loader ----
def load_config(path: Optional[Path]) -> FieldmaskConfig:
    if not path:
        return FieldmaskConfig()
    try:
        data = yaml.safe_load(Path(path).read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"cannot read config {path}: {e}") from e
    cfg = FieldmaskConfig(**data)
    logger.debug("Loaded config %s with formats %s", path, sorted(cfg.formats))
    return cfg
