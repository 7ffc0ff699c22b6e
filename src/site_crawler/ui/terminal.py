"""Curses terminal setup and raw input translation."""

from __future__ import annotations

import curses
import os
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from ..session.events import InputEvent, Key, KeyEvent, MouseEvent, MouseKind

HIGHLIGHT_PAIR = 1
EDITING_PAIR = 2

SCROLL_UP_MASK = getattr(curses, "BUTTON4_PRESSED", 0)
SCROLL_DOWN_MASK = getattr(curses, "BUTTON5_PRESSED", 0)

_SPECIAL_KEYS = {
    curses.KEY_ENTER: Key.ENTER,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
}

_CONTROL_CHARS = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x1b": Key.ESCAPE,
    "\x08": Key.BACKSPACE,
    "\x7f": Key.BACKSPACE,
}


def translate_key(code: Union[int, str]) -> Optional[KeyEvent]:
    """Turns a ``get_wch`` result into a :class:`KeyEvent`.

    Raw mode delivers Ctrl+letter as the ASCII control code 1-26.
    """

    if isinstance(code, int):
        if code == curses.KEY_RESIZE:
            return None
        return KeyEvent(_SPECIAL_KEYS.get(code, Key.OTHER))

    if code in _CONTROL_CHARS:
        return KeyEvent(_CONTROL_CHARS[code])
    if len(code) == 1 and 1 <= ord(code) <= 26:
        return KeyEvent.of(chr(ord(code) + 96), ctrl=True)
    if len(code) == 1 and code.isprintable():
        return KeyEvent.of(code)
    return KeyEvent(Key.OTHER)


def translate_mouse(button_state: int, column: int, row: int) -> MouseEvent:
    if SCROLL_UP_MASK and button_state & SCROLL_UP_MASK:
        kind = MouseKind.SCROLL_UP
    elif SCROLL_DOWN_MASK and button_state & SCROLL_DOWN_MASK:
        kind = MouseKind.SCROLL_DOWN
    else:
        kind = MouseKind.OTHER
    return MouseEvent(kind, column, row)


class Terminal:
    """Input side of the curses screen."""

    def __init__(self, screen: "curses.window") -> None:
        self.screen = screen

    def poll_event(self, timeout: float) -> Optional[InputEvent]:
        """Waits at most ``timeout`` seconds for one key or mouse event."""

        self.screen.timeout(max(0, int(timeout * 1000)))
        try:
            code = self.screen.get_wch()
        except curses.error:
            return None

        if code == curses.KEY_MOUSE:
            try:
                _device, column, row, _z, button_state = curses.getmouse()
            except curses.error:
                return None
            return translate_mouse(button_state, column, row)
        return translate_key(code)


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        background = curses.COLOR_BLACK
    curses.init_pair(HIGHLIGHT_PAIR, curses.COLOR_RED, background)
    curses.init_pair(EDITING_PAIR, curses.COLOR_YELLOW, background)


@contextmanager
def terminal_session() -> Iterator[Terminal]:
    """Puts the terminal in raw mode with mouse capture and always restores it."""

    os.environ.setdefault("ESCDELAY", "25")
    screen = curses.initscr()
    try:
        curses.noecho()
        curses.raw()
        screen.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS)
        curses.mouseinterval(0)
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        _init_colors()
        yield Terminal(screen)
    finally:
        screen.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
