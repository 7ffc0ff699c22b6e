"""Shared data structures used across the crawler and the session view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Visible text extracted from a single visited page."""

    url: str
    body_text: str


class ControlSignal(Enum):
    """Outcome of dispatching one input event."""

    CONTINUE = "continue"
    EXIT_SESSION = "exit_session"
    EXIT_APPLICATION = "exit_application"


@dataclass(frozen=True, slots=True)
class Rect:
    """Screen rectangle in terminal cells."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def contains(self, column: int, row: int) -> bool:
        return (
            self.x <= column < self.x + self.width
            and self.y <= row < self.y + self.height
        )


@dataclass(frozen=True, slots=True)
class ContentLine:
    """One line of page text plus the ``(start, end)`` spans to highlight."""

    text: str
    spans: Tuple[Tuple[int, int], ...] = ()


@dataclass(slots=True)
class DrawModel:
    """Declarative description of one frame handed to the renderer."""

    search_bar_text: str
    search_bar_is_editing: bool
    url_list_title: str
    url_list_items: list[str] = field(default_factory=list)
    selected_index: Optional[int] = None
    content_title: str = ""
    content_lines: list[ContentLine] = field(default_factory=list)
    scroll_offset: int = 0
    status_help_text: str = ""
