from __future__ import annotations

import re

from ..core.models import ContentLine, DrawModel
from .dispatcher import HELP_TEXT
from .state import SessionState

NO_SELECTION_TEXT = "Select a URL to view its content."


def search_bar_text(state: SessionState) -> str:
    if state.is_editing:
        return f"Search: {state.search_buffer}"
    if state.applied_query:
        return f'Filtering by: "{state.applied_query}" (Press \'/\' to edit, Esc to clear)'
    return "Press '/' to search"


def highlight_line(line: str, query: str) -> ContentLine:
    """Marks every non-overlapping, case-insensitive occurrence of ``query``."""

    if not query:
        return ContentLine(line)
    spans = tuple(
        match.span() for match in re.finditer(re.escape(query), line, re.IGNORECASE)
    )
    return ContentLine(line, spans)


def build_content_lines(state: SessionState) -> list[ContentLine]:
    text = state.selected_text
    if text is None:
        return [ContentLine(NO_SELECTION_TEXT)]
    return [highlight_line(line, state.applied_query) for line in text.splitlines()]


def build_draw_model(state: SessionState, crawl_status: str = "") -> DrawModel:
    urls = state.displayed_urls
    selected_url = state.selected_url or "<None Selected>"
    status = f"{HELP_TEXT}| {crawl_status} " if crawl_status else HELP_TEXT

    return DrawModel(
        search_bar_text=search_bar_text(state),
        search_bar_is_editing=state.is_editing,
        url_list_title=f"Visited URLs ({len(urls)})",
        url_list_items=urls,
        selected_index=state.selection,
        content_title=f"Content (Scroll: {state.scroll_offset}): {selected_url}",
        content_lines=build_content_lines(state),
        scroll_offset=state.scroll_offset,
        status_help_text=status,
    )
