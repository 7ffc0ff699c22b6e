"""Background crawl worker feeding the session view."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from ..browser.driver import Driver, DriverConnectionError, ExtractionError, NavigationError
from ..core.config import DEFAULT_CRAWL_DELAY
from ..core.models import CrawlResult
from .channel import ChannelClosedError, ResultChannel
from .frontier import Frontier
from .link_collector import LinkCollector
from .targeting import TargetFilter

logger = logging.getLogger(__name__)

BODY_NOT_FOUND = "<Body element not found>"
BODY_EXTRACTION_FAILED = "<Body text extraction failed>"


class WorkerState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class CrawlWorker:
    """Crawls one site through a driver and emits a result per visited page.

    ``run`` is the whole crawl and can be called directly; ``start`` runs it on
    a daemon thread and ``cancel`` stops that thread and waits for it.
    """

    def __init__(
        self,
        root_url: str,
        frontier: Frontier,
        channel: ResultChannel,
        driver_factory: Callable[[], Driver],
        *,
        delay: float = DEFAULT_CRAWL_DELAY,
    ) -> None:
        self.root_url = root_url
        self.frontier = frontier
        self.channel = channel
        self.delay = delay
        self._driver_factory = driver_factory
        self._link_collector = LinkCollector(TargetFilter.for_root(root_url))
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.state = WorkerState.RUNNING
        self.connected = False
        self.pages_crawled = 0
        self.pages_failed = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self._thread:
            return
        self._thread = threading.Thread(target=self.run, name="crawl-worker", daemon=True)
        self._thread.start()

    def cancel(self, timeout: Optional[float] = None) -> bool:
        """Stops the crawl and waits for the worker thread.

        Returns ``True`` once the worker is stopped. A navigation already in
        flight cannot be interrupted, so the wait is bounded by ``timeout``.
        """

        self._stop.set()
        self.channel.close()
        if self._thread:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Crawl worker still busy %ss after cancel", timeout)
                return False
        self.state = WorkerState.STOPPED
        return True

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    def status_text(self) -> str:
        if self.state is WorkerState.RUNNING:
            return f"Crawling: {self.pages_crawled} page(s), {self.pages_failed} failed"
        if not self.connected:
            return "Crawl stopped: browser unavailable"
        return f"Crawl finished: {self.pages_crawled} page(s), {self.pages_failed} failed"

    # ------------------------------------------------------------------
    # Core workflow
    # ------------------------------------------------------------------
    def run(self) -> None:
        try:
            driver = self._driver_factory()
        except DriverConnectionError as exc:
            logger.error("Crawl aborted, driver unavailable: %s", exc)
            self.state = WorkerState.STOPPED
            return

        self.connected = True
        logger.info("Crawl started at %s", self.root_url)
        try:
            while not self._stop.is_set():
                if not self.crawl_next(driver):
                    break
        finally:
            self.state = WorkerState.STOPPED
            try:
                driver.close()
            except Exception:
                logger.debug("Error closing browser driver", exc_info=True)
            logger.info(
                "Crawl stopped after %d page(s), %d failed",
                self.pages_crawled,
                self.pages_failed,
            )

    def crawl_next(self, driver: Driver) -> bool:
        """Processes one frontier entry; returns ``False`` when the crawl is over."""

        url = self.frontier.dequeue()
        if url is None:
            return False
        if self.frontier.is_visited(url):
            return True

        try:
            return self._crawl_page(driver, url)
        except Exception:
            logger.exception("Unexpected error while crawling %s", url)
            self.frontier.mark_visited(url)
            self.pages_failed += 1
            return True

    def _crawl_page(self, driver: Driver, url: str) -> bool:
        try:
            driver.navigate(url)
        except NavigationError as exc:
            logger.warning("Navigation failed for %s: %s", url, exc)
            self.frontier.mark_visited(url)
            self.pages_failed += 1
            return True

        self.frontier.mark_visited(url)
        body_text = self._extract_body(driver, url)

        try:
            self.channel.send(CrawlResult(url=url, body_text=body_text))
        except ChannelClosedError:
            logger.info("Result channel closed; stopping crawl")
            return False
        self.pages_crawled += 1

        for link in self._link_collector.collect(driver, self._current_url(driver, url)):
            self.frontier.enqueue_if_new(link)

        self._stop.wait(self.delay)
        return True

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------
    @staticmethod
    def _extract_body(driver: Driver, url: str) -> str:
        try:
            bodies = driver.find_all("body")
        except ExtractionError as exc:
            logger.warning("Could not locate <body> on %s: %s", url, exc)
            return BODY_EXTRACTION_FAILED
        if not bodies:
            return BODY_NOT_FOUND
        try:
            return driver.text(bodies[0])
        except ExtractionError as exc:
            logger.warning("Text extraction failed for %s: %s", url, exc)
            return BODY_EXTRACTION_FAILED

    @staticmethod
    def _current_url(driver: Driver, fallback: str) -> str:
        try:
            return driver.current_url() or fallback
        except Exception:
            return fallback
