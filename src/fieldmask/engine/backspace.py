from __future__ import annotations

from .pipeline import MaskState
from .spec import FormatSpec
from .textops import is_delimiter

BACKSPACE = 8


def is_composition_backspace(last_input_value: str, current_input_value: str) -> bool:
    """
    Some input methods buffer keystrokes in a composition and report every key
    with the same generic code. A deletion then shows up only as the value
    losing its last character.
    """
    if not last_input_value or not current_input_value:
        return False
    return current_input_value == last_input_value[:-1]


class BackspaceDetector:
    """
    Decides, on key down, whether the next input cycle must also delete the
    character in front of a delimiter.

      "1234-|" + backspace -> "123|"   (flag raised)
      "12|34-" + backspace -> "1|34-"  (flag cleared)
    """

    def __init__(self, spec: FormatSpec, composition_quirk: bool = False) -> None:
        self.spec = spec
        self.composition_quirk = composition_quirk

    def on_key_down(self, key_code: int, current_value: str, state: MaskState) -> bool:
        spec = self.spec

        if self.composition_quirk and is_composition_backspace(state.last_input_value, current_value):
            key_code = BACKSPACE

        state.last_input_value = current_value

        tail = current_value[-spec.delimiter_length:] if spec.delimiter_length else ""
        state.backspace = key_code == BACKSPACE and bool(tail) and is_delimiter(tail, spec.delimiter, spec.delimiters)
        return state.backspace
