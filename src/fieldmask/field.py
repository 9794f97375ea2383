"""
Headless binding between a text field and the masking engine.

A host is anything exposing the current text, the caret position and focus.
`MaskedField` wires the host's events (key down, change, copy, cut) to the
engine, writes the canonical text back and restores the caret.

Some platforms move the caret visibly when the value is reassigned during the
input event. For those, pass `defer_updates=True` and a `scheduler`: the write
back then runs on the scheduler's next tick instead of immediately. Nothing
else touches the field's state in between, so the deferred write is safe.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Protocol, Union

from .config import FieldOptions
from .engine.backspace import BACKSPACE, BackspaceDetector
from .engine.pipeline import MaskingEngine
from .engine.spec import FormatSpec
from .engine import textops

logger = logging.getLogger(__name__)

Scheduler = Callable[[Callable[[], None]], None]


class BindingError(ValueError):
    """Raised when a field cannot be bound to its host."""


class TextHost(Protocol):
    value: str
    selection_end: int
    has_focus: bool

    def set_selection(self, position: int) -> None: ...


class Clipboard(Protocol):
    def set_text(self, text: str) -> None: ...


@dataclass
class InMemoryHost:
    """A text field living in memory; the caret sits at the end unless moved."""
    value: str = ""
    selection_end: Optional[int] = None
    has_focus: bool = True

    def __post_init__(self) -> None:
        if self.selection_end is None:
            self.selection_end = len(self.value)

    def set_selection(self, position: int) -> None:
        self.selection_end = position


@dataclass
class InMemoryClipboard:
    text: str = ""
    history: List[str] = field(default_factory=list)

    def set_text(self, text: str) -> None:
        self.text = text
        self.history.append(text)


def _immediate(callback: Callable[[], None]) -> None:
    callback()


class MaskedField:
    """
    A host text field with a format applied to it.

    Typical usage:
        host = InMemoryHost()
        masked = MaskedField(host, FieldOptions(blocks=[4, 4, 4, 4], delimiter="-"))
        host.value = "41111"
        masked.on_change()
        host.value  # "4111-1"
    """

    def __init__(
        self,
        host: Optional[TextHost],
        options: Union[FieldOptions, FormatSpec, None] = None,
        composition_quirk: bool = False,
        defer_updates: bool = False,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        if host is None:
            raise BindingError("no host field to bind to")

        if options is None:
            options = FieldOptions()
        self.spec = options.resolve() if isinstance(options, FieldOptions) else options

        self.host = host
        self.engine = MaskingEngine(self.spec)
        self.detector = BackspaceDetector(self.spec, composition_quirk=composition_quirk)
        self.defer_updates = defer_updates
        self.scheduler: Scheduler = scheduler or _immediate
        self.bound = True

        self.state = self.engine.new_state(host.value or "")
        self.update_value_state()
        logger.debug("Bound %s field, blocks=%s", self.spec.mode.value, list(self.engine.blocks))

    # ---------------- Events ----------------

    def on_key_down(self, key_code: int) -> None:
        if not self.bound:
            return
        self.detector.on_key_down(key_code, self.host.value, self.state)

    def on_change(self) -> None:
        if not self.bound:
            return
        self.on_input(self.host.value)

    def on_cut(self, clipboard: Clipboard) -> None:
        if not self.bound:
            return
        self.copy_clipboard_data(clipboard)
        self.on_input("")

    def on_copy(self, clipboard: Clipboard) -> None:
        if not self.bound:
            return
        self.copy_clipboard_data(clipboard)

    def copy_clipboard_data(self, clipboard: Clipboard) -> str:
        spec = self.spec
        text = self.host.value
        if not spec.copy_delimiter:
            text = textops.strip_delimiters(text, spec.delimiter, spec.delimiters)
        clipboard.set_text(text)
        return text

    # ---------------- Value ----------------

    def on_input(self, value: str) -> str:
        result = self.engine.on_input(value, self.state)
        self.update_value_state()
        return result

    def update_value_state(self) -> None:
        end_pos = self.host.selection_end
        old_value = self.host.value
        result = self.state.result

        def write_back() -> None:
            self.host.value = result
            self.set_current_selection(end_pos, old_value)

        if self.defer_updates:
            logger.debug("Deferring write back of %d chars", len(result))
            self.scheduler(write_back)
            return
        write_back()

    def set_current_selection(self, end_pos: Optional[int], old_value: str) -> None:
        # caret at the end follows the new value; anywhere else is put back
        if end_pos is None or len(old_value) == end_pos or not self.host.has_focus:
            self.host.set_selection(len(self.host.value))
            return
        self.host.set_selection(min(end_pos, len(self.host.value)))

    def set_raw_value(self, value: object) -> str:
        value = "" if value is None else str(value)
        if self.spec.is_numeral:
            value = value.replace(".", self.spec.numeral_decimal_mark, 1)

        # a raw value carries no edit of the displayed prefix
        self.state.backspace = False
        self.state.result = ""
        self.host.value = value
        return self.on_input(value)

    def get_raw_value(self) -> str:
        return self.engine.get_raw_value(self.host.value)

    def get_formatted_value(self) -> str:
        return self.host.value

    def get_iso_format_date(self) -> str:
        return self.engine.get_iso_format_date(self.state)

    def destroy(self) -> None:
        self.bound = False
        logger.debug("Field unbound")

    def __repr__(self) -> str:
        return f"MaskedField(mode={self.spec.mode.value!r}, value={self.host.value!r})"


def type_keys(masked: MaskedField, keys: Iterable[str]) -> List[str]:
    """
    Simulate typing at the end of the field; "\\b" is a backspace.

    Returns the field value after every keystroke.
    """
    steps: List[str] = []
    host = masked.host
    for key in keys:
        if key == "\b":
            masked.on_key_down(BACKSPACE)
            host.value = host.value[:-1]
        else:
            masked.on_key_down(ord(key[0]))
            host.value = host.value + key
        host.set_selection(len(host.value))
        masked.on_change()
        steps.append(host.value)
    return steps
