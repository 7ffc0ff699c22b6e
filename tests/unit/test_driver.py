from types import SimpleNamespace

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from site_crawler.browser.driver import (  # type: ignore[import]
    ExtractionError,
    NavigationError,
    PlaywrightDriver,
)
from site_crawler.recon.worker import CrawlWorker, WorkerState  # type: ignore[import]
from tests.helpers.crawler_imports import Frontier, ResultChannel

CLOSED = "Target page, context or browser has been closed"


def _raise(exc):
    def _call(*_args, **_kwargs):
        raise exc

    return _call


class StubPage:
    def __init__(self, *, goto=None, settle_error=None, url="http://x.com/"):
        self.url = url
        self.visited = []
        self.closed = False
        self._goto_error = goto
        self._settle_error = settle_error

    def goto(self, url, timeout):
        self.visited.append((url, timeout))
        if self._goto_error:
            raise self._goto_error

    def wait_for_load_state(self, state, timeout):  # noqa: ARG002
        if self._settle_error:
            raise self._settle_error

    def wait_for_timeout(self, timeout):  # noqa: ARG002
        if self._settle_error:
            raise self._settle_error

    def close(self):
        self.closed = True


def _driver(page, *, owns_browser=True):
    calls = []
    playwright = SimpleNamespace(stop=lambda: calls.append("stop"))
    browser = SimpleNamespace(close=lambda: calls.append("browser.close"))
    driver = PlaywrightDriver(
        playwright, browser, page, navigation_timeout_ms=1234, owns_browser=owns_browser
    )
    return driver, calls


def test_navigate_passes_timeout_and_settles():
    page = StubPage()
    driver, _ = _driver(page)

    driver.navigate("http://x.com/a")

    assert page.visited == [("http://x.com/a", 1234)]
    assert driver.current_url() == "http://x.com/"


@pytest.mark.parametrize(
    "error, message",
    [
        (PlaywrightTimeoutError("timeout"), "Timed out"),
        (PlaywrightError("net::ERR_NAME_NOT_RESOLVED"), "Failed to load"),
    ],
)
def test_navigate_translates_goto_errors(error, message):
    driver, _ = _driver(StubPage(goto=error))

    with pytest.raises(NavigationError, match=message):
        driver.navigate("http://x.com/a")


def test_navigate_translates_errors_while_settling():
    driver, _ = _driver(StubPage(settle_error=PlaywrightError(CLOSED)))

    with pytest.raises(NavigationError, match="closed"):
        driver.navigate("http://x.com/a")


def test_query_and_text_errors_become_extraction_errors():
    page = StubPage()
    page.locator = _raise(PlaywrightError(CLOSED))
    page.content = _raise(PlaywrightError(CLOSED))
    driver, _ = _driver(page)
    element = SimpleNamespace(inner_text=_raise(PlaywrightError("detached")))

    with pytest.raises(ExtractionError):
        driver.find_all("body")
    with pytest.raises(ExtractionError):
        driver.text(element)
    with pytest.raises(ExtractionError):
        driver.content()


def test_unreadable_attribute_is_none():
    driver, _ = _driver(StubPage())
    element = SimpleNamespace(get_attribute=_raise(PlaywrightError("detached")))

    assert driver.attribute(element, "href") is None


def test_find_all_returns_locator_matches():
    page = StubPage()
    page.locator = lambda selector: SimpleNamespace(all=lambda: [selector])
    driver, _ = _driver(page)

    assert driver.find_all("a") == ["a"]


def test_close_keeps_a_borrowed_browser_open():
    page = StubPage()
    driver, calls = _driver(page, owns_browser=False)

    driver.close()

    assert page.closed
    assert calls == ["stop"]


def test_close_shuts_down_an_owned_browser():
    page = StubPage()
    driver, calls = _driver(page)

    driver.close()

    assert not page.closed
    assert calls == ["browser.close", "stop"]


def test_worker_survives_a_page_closing_mid_load():
    page = StubPage(settle_error=PlaywrightError(CLOSED))
    driver, _ = _driver(page)
    frontier = Frontier(["http://x.com/", "http://x.com/b"])
    channel = ResultChannel(5)
    worker = CrawlWorker("http://x.com/", frontier, channel, lambda: driver, delay=0)

    worker.run()

    assert [url for url, _ in page.visited] == ["http://x.com/", "http://x.com/b"]
    assert frontier.is_visited("http://x.com/b")
    assert worker.pages_failed == 2
    assert worker.state is WorkerState.STOPPED
    assert channel.drain() == []
