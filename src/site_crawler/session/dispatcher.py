"""Maps key and mouse events onto session state transitions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.config import DEFAULT_SCROLL_LINES
from ..core.models import ControlSignal, Rect
from .events import InputEvent, Key, KeyEvent, MouseEvent, MouseKind
from .state import SessionState

QUIT_KEY = "q"
BACK_KEY = "c"
FAST_SCROLL_DOWN_KEY = "d"
FAST_SCROLL_UP_KEY = "u"

HELP_TEXT = (
    " Quit: Ctrl+Q | Back: Ctrl+C | Nav: ↑/↓/j/k | Search: / Enter Esc"
    " | Scroll: PgUp/PgDn/Ctrl+D/Ctrl+U/Mouse "
)


class LastLayout:
    """Content panel rectangle from the most recent frame.

    Written once per frame by the render loop, read by the dispatcher.
    """

    def __init__(self) -> None:
        self._content_area: Optional[Rect] = None

    @property
    def content_area(self) -> Optional[Rect]:
        return self._content_area

    def update(self, content_area: Rect) -> None:
        self._content_area = content_area


@dataclass(slots=True)
class InputDispatcher:
    scroll_lines: int = DEFAULT_SCROLL_LINES

    def dispatch(
        self,
        event: InputEvent,
        state: SessionState,
        content_area: Optional[Rect] = None,
    ) -> ControlSignal:
        if isinstance(event, MouseEvent):
            self.handle_mouse(event, state, content_area)
            return ControlSignal.CONTINUE
        return self.handle_key(event, state)

    def handle_key(self, event: KeyEvent, state: SessionState) -> ControlSignal:
        # Quit and back work in both modes.
        if event.is_ctrl(QUIT_KEY):
            return ControlSignal.EXIT_APPLICATION
        if event.is_ctrl(BACK_KEY):
            return ControlSignal.EXIT_SESSION

        if state.is_editing:
            self._handle_editing_key(event, state)
        else:
            self._handle_normal_key(event, state)
        return ControlSignal.CONTINUE

    def handle_mouse(
        self,
        event: MouseEvent,
        state: SessionState,
        content_area: Optional[Rect],
    ) -> None:
        if content_area is None or not content_area.contains(event.column, event.row):
            return
        if event.kind is MouseKind.SCROLL_DOWN:
            state.scroll_by(self.scroll_lines)
        elif event.kind is MouseKind.SCROLL_UP:
            state.scroll_by(-self.scroll_lines)

    @staticmethod
    def _handle_editing_key(event: KeyEvent, state: SessionState) -> None:
        if event.key is Key.ENTER:
            state.confirm_search()
        elif event.key is Key.BACKSPACE:
            state.backspace_search_buffer()
        elif event.key is Key.ESCAPE:
            state.cancel_search_edit()
        elif event.key is Key.CHAR and not event.ctrl and event.char and event.char.isprintable():
            state.append_to_search_buffer(event.char)

    def _handle_normal_key(self, event: KeyEvent, state: SessionState) -> None:
        key, char = event.key, event.char

        if key is Key.DOWN or (key is Key.CHAR and not event.ctrl and char == "j"):
            state.select_next()
        elif key is Key.UP or (key is Key.CHAR and not event.ctrl and char == "k"):
            state.select_previous()
        elif key is Key.PAGE_DOWN:
            state.scroll_by(self.scroll_lines)
        elif key is Key.PAGE_UP:
            state.scroll_by(-self.scroll_lines)
        elif event.is_ctrl(FAST_SCROLL_DOWN_KEY):
            state.scroll_by(self.scroll_lines * 2)
        elif event.is_ctrl(FAST_SCROLL_UP_KEY):
            state.scroll_by(-self.scroll_lines * 2)
        elif key is Key.CHAR and not event.ctrl and char == "/":
            state.start_search_edit()
        elif key is Key.ESCAPE and state.applied_query:
            state.clear_search()
