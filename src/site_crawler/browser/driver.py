"""Browser automation adapter built on the Playwright sync API."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from playwright.sync_api import Browser, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..core.config import DEFAULT_NAVIGATION_TIMEOUT_MS

logger = logging.getLogger(__name__)

TEXT_TIMEOUT_MS = 3000


class DriverConnectionError(RuntimeError):
    """Raised when the browser cannot be launched or reached."""


class NavigationError(RuntimeError):
    """Raised when a page fails to load."""


class ExtractionError(RuntimeError):
    """Raised when elements or text cannot be read from the current page."""


class Driver(Protocol):
    """Operations the crawl worker needs from a browser."""

    def navigate(self, url: str) -> None: ...

    def current_url(self) -> str: ...

    def find_all(self, selector: str) -> list[Any]: ...

    def text(self, element: Any) -> str: ...

    def attribute(self, element: Any, name: str) -> Optional[str]: ...

    def content(self) -> str: ...

    def close(self) -> None: ...


class PlaywrightDriver:
    """Single-page Chromium session.

    The sync API binds every object to the thread that started Playwright, so
    instances must be created and used from the crawl worker's own thread.
    """

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        page: Page,
        *,
        navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS,
        owns_browser: bool = True,
    ) -> None:
        self._playwright = playwright
        self._browser = browser
        self._page = page
        self._navigation_timeout_ms = navigation_timeout_ms
        self._owns_browser = owns_browser

    @classmethod
    def connect(
        cls,
        endpoint: Optional[str] = None,
        *,
        headless: bool = True,
        navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS,
    ) -> "PlaywrightDriver":
        """Connects over CDP when ``endpoint`` is given, otherwise launches Chromium."""

        try:
            playwright = sync_playwright().start()
        except PlaywrightError as exc:
            raise DriverConnectionError(f"Playwright failed to start: {exc}") from exc

        try:
            if endpoint:
                browser = playwright.chromium.connect_over_cdp(endpoint)
                context = browser.contexts[0] if browser.contexts else browser.new_context()
            else:
                browser = playwright.chromium.launch(headless=headless)
                context = browser.new_context()
            page = context.new_page()
        except PlaywrightError as exc:
            playwright.stop()
            target = endpoint or "local chromium"
            raise DriverConnectionError(f"Could not connect to {target}: {exc}") from exc

        logger.info("Browser ready (%s)", endpoint or "launched locally")
        return cls(
            playwright,
            browser,
            page,
            navigation_timeout_ms=navigation_timeout_ms,
            owns_browser=not endpoint,
        )

    def navigate(self, url: str) -> None:
        try:
            self._page.goto(url, timeout=self._navigation_timeout_ms)
            self._wait_settled()
        except PlaywrightTimeoutError as exc:
            raise NavigationError(f"Timed out loading {url}") from exc
        except PlaywrightError as exc:
            raise NavigationError(f"Failed to load {url}: {exc}") from exc

    def current_url(self) -> str:
        return self._page.url

    def find_all(self, selector: str) -> list[Any]:
        try:
            return self._page.locator(selector).all()
        except PlaywrightError as exc:
            raise ExtractionError(f"Could not query {selector!r}: {exc}") from exc

    def text(self, element: Any) -> str:
        try:
            return element.inner_text(timeout=TEXT_TIMEOUT_MS)
        except PlaywrightError as exc:
            raise ExtractionError(f"Could not read element text: {exc}") from exc

    def attribute(self, element: Any, name: str) -> Optional[str]:
        try:
            return element.get_attribute(name, timeout=TEXT_TIMEOUT_MS)
        except PlaywrightError:
            return None

    def content(self) -> str:
        try:
            return self._page.content()
        except PlaywrightError as exc:
            raise ExtractionError(f"Could not serialize page: {exc}") from exc

    def close(self) -> None:
        try:
            if self._owns_browser:
                self._browser.close()
            else:
                self._page.close()
        finally:
            self._playwright.stop()

    def _wait_settled(self) -> None:
        try:
            self._page.wait_for_load_state("networkidle", timeout=3000)
        except PlaywrightError:
            try:
                self._page.wait_for_load_state("domcontentloaded", timeout=1500)
            except PlaywrightError:
                self._page.wait_for_timeout(300)
