"""Interactive state of one crawl session: results, search, selection, scroll."""

from __future__ import annotations

from typing import Optional

from ..core.models import CrawlResult


class SessionState:
    """Reconciles arriving crawl results with filtering, selection and scrolling.

    ``selection`` indexes the filter view, not the record list. Everything is
    mutated through the methods below; attributes are read-only from outside.
    """

    def __init__(self) -> None:
        self._records: list[CrawlResult] = []
        self._texts: dict[str, str] = {}
        self._filter_view: list[int] = []
        self._selection: Optional[int] = None
        self._scroll_offset = 0
        self._applied_query = ""
        self._search_buffer = ""
        self._editing = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def records(self) -> tuple[CrawlResult, ...]:
        return tuple(self._records)

    @property
    def filter_view(self) -> tuple[int, ...]:
        return tuple(self._filter_view)

    @property
    def selection(self) -> Optional[int]:
        return self._selection

    @property
    def scroll_offset(self) -> int:
        return self._scroll_offset

    @property
    def applied_query(self) -> str:
        return self._applied_query

    @property
    def search_buffer(self) -> str:
        return self._search_buffer

    @property
    def is_editing(self) -> bool:
        return self._editing

    @property
    def displayed_urls(self) -> list[str]:
        return [self._records[index].url for index in self._filter_view]

    @property
    def selected_url(self) -> Optional[str]:
        index = self._selected_record_index()
        return self._records[index].url if index is not None else None

    @property
    def selected_text(self) -> Optional[str]:
        url = self.selected_url
        return self._texts[url] if url is not None else None

    def text_for(self, url: str) -> Optional[str]:
        return self._texts.get(url)

    # ------------------------------------------------------------------
    # Accumulation & filtering
    # ------------------------------------------------------------------
    def record_result(self, url: str, text: str) -> bool:
        """Appends a result; returns ``False`` if the URL was already recorded."""

        if url in self._texts:
            return False

        previous_url = self.selected_url
        self._records.append(CrawlResult(url=url, body_text=text))
        self._texts[url] = text
        self.recompute_filter_view()
        if self.selected_url != previous_url:
            self.retarget_scroll()
        return True

    def recompute_filter_view(self) -> None:
        previous_index = self._selected_record_index()
        query = self._applied_query.lower()

        self._filter_view = [
            index
            for index, record in enumerate(self._records)
            if not query or query in record.body_text.lower()
        ]

        if previous_index is not None and previous_index in self._filter_view:
            self._selection = self._filter_view.index(previous_index)
        else:
            self._selection = 0 if self._filter_view else None

    def retarget_scroll(self) -> None:
        self._scroll_offset = self._first_match_line() or 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def select_next(self) -> None:
        size = len(self._filter_view)
        if not size:
            return
        self._selection = 0 if self._selection is None else (self._selection + 1) % size
        self.retarget_scroll()

    def select_previous(self) -> None:
        size = len(self._filter_view)
        if not size:
            return
        self._selection = 0 if self._selection is None else (self._selection - 1) % size
        self.retarget_scroll()

    def scroll_by(self, delta: int) -> None:
        self._scroll_offset = max(0, self._scroll_offset + delta)

    # ------------------------------------------------------------------
    # Search editing
    # ------------------------------------------------------------------
    def start_search_edit(self) -> None:
        self._editing = True
        self._search_buffer = self._applied_query

    def append_to_search_buffer(self, char: str) -> None:
        self._search_buffer += char

    def backspace_search_buffer(self) -> None:
        self._search_buffer = self._search_buffer[:-1]

    def confirm_search(self) -> None:
        self._editing = False
        self._applied_query = self._search_buffer
        self.recompute_filter_view()
        self.retarget_scroll()

    def cancel_search_edit(self) -> None:
        self._editing = False
        self._search_buffer = ""

    def clear_search(self) -> None:
        self._editing = False
        self._search_buffer = ""
        self._applied_query = ""
        self.recompute_filter_view()
        self._scroll_offset = 0

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------
    def _selected_record_index(self) -> Optional[int]:
        if self._selection is None or self._selection >= len(self._filter_view):
            return None
        return self._filter_view[self._selection]

    def _first_match_line(self) -> Optional[int]:
        if not self._applied_query:
            return None
        text = self.selected_text
        if text is None:
            return None
        query = self._applied_query.lower()
        for number, line in enumerate(text.splitlines()):
            if query in line.lower():
                return number
        return None
