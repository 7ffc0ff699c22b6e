"""Curses renderer for the session view and the URL prompt."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from ..core.models import ContentLine, DrawModel, Rect
from .terminal import EDITING_PAIR, HIGHLIGHT_PAIR

MARGIN = 1
SEARCH_BAR_HEIGHT = 3
STATUS_BAR_HEIGHT = 1
URL_LIST_PERCENT = 30
SELECTED_MARKER = ">> "


class Renderer(Protocol):
    def draw(self, model: DrawModel) -> Rect: ...

    def draw_prompt(self, text: str, title: str) -> None: ...


@dataclass(frozen=True, slots=True)
class ScreenLayout:
    search_bar: Rect
    url_list: Rect
    content: Rect
    status_bar: Rect


def compute_layout(width: int, height: int) -> ScreenLayout:
    """Splits the screen into search bar, URL list, content panel and status bar."""

    inner_x, inner_y = MARGIN, MARGIN
    inner_width = max(0, width - 2 * MARGIN)
    inner_height = max(0, height - 2 * MARGIN)

    search_height = min(SEARCH_BAR_HEIGHT, inner_height)
    status_height = min(STATUS_BAR_HEIGHT, max(0, inner_height - search_height))
    main_height = max(0, inner_height - search_height - status_height)
    main_y = inner_y + search_height

    list_width = inner_width * URL_LIST_PERCENT // 100
    content_width = inner_width - list_width

    return ScreenLayout(
        search_bar=Rect(inner_x, inner_y, inner_width, search_height),
        url_list=Rect(inner_x, main_y, list_width, main_height),
        content=Rect(inner_x + list_width, main_y, content_width, main_height),
        status_bar=Rect(inner_x, main_y + main_height, inner_width, status_height),
    )


def format_url_item(position: int, url: str, width: int) -> str:
    if len(url) > max(0, width - 6):
        url = url[: max(0, width - 9)] + "..."
    return f"[{position}] {url}"


def visible_window(lines: Sequence[ContentLine], offset: int, height: int) -> Sequence[ContentLine]:
    """Lines shown for ``offset``, clamped so the offset never passes the last line."""

    start = min(offset, max(0, len(lines) - 1))
    return lines[start : start + height]


def _printable(text: str) -> str:
    return "".join(character if character.isprintable() else " " for character in text)


class CursesRenderer:
    def __init__(self, screen: "curses.window") -> None:
        self._screen = screen
        colors = curses.has_colors()
        self._highlight_attr = (
            curses.color_pair(HIGHLIGHT_PAIR) | curses.A_BOLD
            if colors
            else curses.A_BOLD | curses.A_UNDERLINE
        )
        self._editing_attr = curses.color_pair(EDITING_PAIR) if colors else curses.A_BOLD

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def draw(self, model: DrawModel) -> Rect:
        height, width = self._screen.getmaxyx()
        layout = compute_layout(width, height)

        self._screen.erase()
        self._draw_search_bar(layout.search_bar, model)
        self._draw_url_list(layout.url_list, model)
        self._draw_content(layout.content, model)
        self._put(
            layout.status_bar.y,
            layout.status_bar.x,
            model.status_help_text.ljust(layout.status_bar.width),
            layout.status_bar.width,
            curses.A_REVERSE,
        )
        self._screen.noutrefresh()
        curses.doupdate()
        return layout.content

    def draw_prompt(self, text: str, title: str) -> None:
        height, width = self._screen.getmaxyx()
        area = Rect(0, 0, width, min(height, 3))
        self._screen.erase()
        self._box(area, title)
        self._put(1, 1, text, width - 2)
        self._screen.noutrefresh()
        curses.doupdate()

    # ------------------------------------------------------------------
    # Panels
    # ------------------------------------------------------------------
    def _draw_search_bar(self, area: Rect, model: DrawModel) -> None:
        self._box(area, "Search")
        attr = self._editing_attr if model.search_bar_is_editing else curses.A_NORMAL
        self._put(area.y + 1, area.x + 1, model.search_bar_text, area.width - 2, attr)

    def _draw_url_list(self, area: Rect, model: DrawModel) -> None:
        self._box(area, model.url_list_title)
        inner_height = area.height - 2
        inner_width = area.width - 2
        if inner_height <= 0 or inner_width <= 0:
            return

        selected: Optional[int] = model.selected_index
        first = 0 if selected is None else max(0, selected - inner_height + 1)
        items = model.url_list_items[first : first + inner_height]
        for row, url in enumerate(items):
            position = first + row
            label = format_url_item(position + 1, url, area.width)
            if position == selected:
                text = SELECTED_MARKER + label
                attr = curses.A_BOLD | curses.A_REVERSE
            else:
                text = " " * len(SELECTED_MARKER) + label
                attr = curses.A_NORMAL
            self._put(area.y + 1 + row, area.x + 1, text, inner_width, attr)

    def _draw_content(self, area: Rect, model: DrawModel) -> None:
        self._box(area, model.content_title)
        inner_height = area.height - 2
        inner_width = area.width - 2
        if inner_height <= 0 or inner_width <= 0:
            return

        lines = visible_window(model.content_lines, model.scroll_offset, inner_height)
        for row, line in enumerate(lines):
            self._draw_line(area.y + 1 + row, area.x + 1, line, inner_width)

    def _draw_line(self, y: int, x: int, line: ContentLine, width: int) -> None:
        text = _printable(line.text)
        cursor = 0
        for start, end in line.spans:
            if start > cursor:
                self._put(y, x + cursor, text[cursor:start], width - cursor)
            self._put(y, x + start, text[start:end], width - start, self._highlight_attr)
            cursor = end
        if cursor < len(text):
            self._put(y, x + cursor, text[cursor:], width - cursor)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    def _box(self, area: Rect, title: str) -> None:
        if area.width < 2 or area.height < 2:
            return
        top, left = area.y, area.x
        bottom, right = area.y + area.height - 1, area.x + area.width - 1
        try:
            self._screen.hline(top, left + 1, curses.ACS_HLINE, area.width - 2)
            self._screen.hline(bottom, left + 1, curses.ACS_HLINE, area.width - 2)
            self._screen.vline(top + 1, left, curses.ACS_VLINE, area.height - 2)
            self._screen.vline(top + 1, right, curses.ACS_VLINE, area.height - 2)
            self._screen.addch(top, left, curses.ACS_ULCORNER)
            self._screen.addch(top, right, curses.ACS_URCORNER)
            self._screen.addch(bottom, left, curses.ACS_LLCORNER)
            self._screen.addch(bottom, right, curses.ACS_LRCORNER)
        except curses.error:
            # Writing the bottom-right cell of the screen moves the cursor off-screen.
            pass
        self._put(top, left + 1, title, area.width - 2)

    def _put(self, y: int, x: int, text: str, width: int, attr: int = curses.A_NORMAL) -> None:
        if width <= 0 or not text:
            return
        try:
            self._screen.addnstr(y, x, _printable(text), width, attr)
        except curses.error:
            pass
