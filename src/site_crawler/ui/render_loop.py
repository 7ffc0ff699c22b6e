"""Foreground loop tying the crawl worker, session state and renderer together."""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Optional

from ..browser.driver import Driver, PlaywrightDriver
from ..core.config import CrawlerConfig
from ..core.models import ControlSignal
from ..recon.channel import ResultChannel
from ..recon.frontier import Frontier
from ..recon.worker import CrawlWorker
from ..session.dispatcher import InputDispatcher, LastLayout
from ..session.draw_model import build_draw_model
from ..session.state import SessionState
from .renderer import Renderer
from .terminal import Terminal

logger = logging.getLogger(__name__)


class RenderLoop:
    """One crawl session's foreground side.

    Each tick drains the result channel, waits briefly for one input event,
    dispatches it and redraws. Nothing here blocks on the worker.
    """

    def __init__(
        self,
        terminal: Terminal,
        renderer: Renderer,
        channel: ResultChannel,
        worker: CrawlWorker,
        *,
        scroll_lines: int,
        poll_interval: float,
    ) -> None:
        self.terminal = terminal
        self.renderer = renderer
        self.channel = channel
        self.worker = worker
        self.poll_interval = poll_interval
        self.state = SessionState()
        self.dispatcher = InputDispatcher(scroll_lines=scroll_lines)
        self.layout = LastLayout()

    def drain_results(self) -> int:
        received = 0
        for result in self.channel.drain():
            if self.state.record_result(result.url, result.body_text):
                received += 1
        return received

    def tick(self) -> ControlSignal:
        self.drain_results()
        event = self.terminal.poll_event(self.poll_interval)
        if event is not None:
            signal = self.dispatcher.dispatch(event, self.state, self.layout.content_area)
            if signal is not ControlSignal.CONTINUE:
                return signal
        self.draw()
        return ControlSignal.CONTINUE

    def draw(self) -> None:
        model = build_draw_model(self.state, self.worker.status_text())
        self.layout.update(self.renderer.draw(model))


def default_driver_factory(config: CrawlerConfig) -> Callable[[], Driver]:
    return partial(
        PlaywrightDriver.connect,
        config.endpoint,
        headless=config.headless,
        navigation_timeout_ms=config.navigation_timeout_ms,
    )


def run_session(
    terminal: Terminal,
    renderer: Renderer,
    config: CrawlerConfig,
    root_url: str,
    *,
    driver_factory: Optional[Callable[[], Driver]] = None,
) -> ControlSignal:
    """Crawls ``root_url`` until the user leaves; returns the exit signal.

    The worker is cancelled and joined before this returns.
    """

    channel = ResultChannel(config.channel_capacity)
    worker = CrawlWorker(
        root_url,
        Frontier([root_url]),
        channel,
        driver_factory or default_driver_factory(config),
        delay=config.crawl_delay,
    )
    loop = RenderLoop(
        terminal,
        renderer,
        channel,
        worker,
        scroll_lines=config.scroll_lines,
        poll_interval=config.poll_interval,
    )

    logger.info("Session started for %s", root_url)
    worker.start()
    try:
        loop.draw()
        while True:
            signal = loop.tick()
            if signal is not ControlSignal.CONTINUE:
                logger.info("Session for %s ended (%s)", root_url, signal.value)
                return signal
    finally:
        worker.cancel(config.cancel_timeout)
