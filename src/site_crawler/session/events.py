from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Key(Enum):
    CHAR = "char"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    OTHER = "other"


class MouseKind(Enum):
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    key: Key
    char: Optional[str] = None
    ctrl: bool = False

    @classmethod
    def of(cls, char: str, *, ctrl: bool = False) -> "KeyEvent":
        return cls(Key.CHAR, char, ctrl)

    def is_ctrl(self, char: str) -> bool:
        return self.key is Key.CHAR and self.ctrl and self.char == char


@dataclass(frozen=True, slots=True)
class MouseEvent:
    kind: MouseKind
    column: int
    row: int


InputEvent = Union[KeyEvent, MouseEvent]
