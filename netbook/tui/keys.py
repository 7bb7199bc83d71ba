"""Key events as the controller sees them."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyCode(Enum):
    CHAR = "char"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    TAB = "tab"
    BACKTAB = "backtab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press. ``char`` is set only for KeyCode.CHAR."""

    code: KeyCode
    char: Optional[str] = None
    ctrl: bool = False

    @classmethod
    def of(cls, char: str, ctrl: bool = False) -> "KeyEvent":
        return cls(KeyCode.CHAR, char, ctrl)

    def is_char(self, char: str) -> bool:
        return self.code is KeyCode.CHAR and self.char == char and not self.ctrl


# textual key names
NAMED_KEYS = {
    "enter": KeyCode.ENTER,
    "escape": KeyCode.ESC,
    "backspace": KeyCode.BACKSPACE,
    "ctrl+h": KeyCode.BACKSPACE,
    "tab": KeyCode.TAB,
    "shift+tab": KeyCode.BACKTAB,
    "up": KeyCode.UP,
    "down": KeyCode.DOWN,
    "left": KeyCode.LEFT,
    "right": KeyCode.RIGHT,
}


def translate_key(key: str, character: Optional[str]) -> Optional[KeyEvent]:
    """Map a textual key press onto a KeyEvent.

    Returns None for keys the application has no use for.
    """
    if key in NAMED_KEYS:
        return KeyEvent(NAMED_KEYS[key])
    if key.startswith("ctrl+"):
        letter = key[len("ctrl+"):]
        if len(letter) == 1:
            return KeyEvent.of(letter, ctrl=True)
        return None
    if character is not None and character.isprintable():
        return KeyEvent.of(character)
    return None
