from site_crawler.core.models import ContentLine  # type: ignore[import]
from site_crawler.session.draw_model import (  # type: ignore[import]
    NO_SELECTION_TEXT,
    build_draw_model,
    highlight_line,
    search_bar_text,
)
from tests.helpers.crawler_imports import SessionState


def test_highlight_line_marks_case_insensitive_matches():
    line = highlight_line("Foo bar FOO baz foo", "foo")

    assert line.spans == ((0, 3), (8, 11), (16, 19))


def test_highlight_line_escapes_regex_characters():
    assert highlight_line("cost: $5 (approx.)", "(approx.)").spans == ((9, 18),)
    assert highlight_line("plain", "").spans == ()


def test_search_bar_text_reflects_mode():
    state = SessionState()
    assert search_bar_text(state) == "Press '/' to search"

    state.start_search_edit()
    state.append_to_search_buffer("abc")
    assert search_bar_text(state) == "Search: abc"

    state.confirm_search()
    assert search_bar_text(state).startswith('Filtering by: "abc"')


def test_draw_model_without_results():
    model = build_draw_model(SessionState(), "Crawling: 0 page(s), 0 failed")

    assert model.url_list_items == []
    assert model.url_list_title == "Visited URLs (0)"
    assert model.selected_index is None
    assert model.content_lines == [ContentLine(NO_SELECTION_TEXT)]
    assert model.content_title.endswith("<None Selected>")
    assert "Crawling: 0 page(s)" in model.status_help_text


def test_draw_model_for_filtered_selection():
    state = SessionState()
    state.record_result("http://x/a", "alpha")
    state.record_result("http://x/b", "intro\nBeta line\nend")
    state.start_search_edit()
    for char in "beta":
        state.append_to_search_buffer(char)
    state.confirm_search()

    model = build_draw_model(state)

    assert model.url_list_items == ["http://x/b"]
    assert model.selected_index == 0
    assert model.scroll_offset == 1
    assert model.content_title == "Content (Scroll: 1): http://x/b"
    assert [line.text for line in model.content_lines] == ["intro", "Beta line", "end"]
    assert model.content_lines[1].spans == ((0, 4),)
    assert model.search_bar_is_editing is False
