"""Bounded hand-off between the crawl worker and the session view."""

from __future__ import annotations

import queue
import threading
from typing import Optional

from ..core.models import CrawlResult

SEND_POLL_INTERVAL = 0.1


class ChannelClosedError(RuntimeError):
    """Raised when sending on a channel whose consumer has gone away."""


class ResultChannel:
    """Single-producer, single-consumer FIFO with a fixed capacity.

    ``send`` blocks while the channel is full and re-checks for closure every
    ``SEND_POLL_INTERVAL`` seconds, so a closed channel releases a blocked
    producer promptly.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._queue: queue.Queue[CrawlResult] = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        self._closed.set()

    def send(self, result: CrawlResult) -> None:
        while True:
            if self._closed.is_set():
                raise ChannelClosedError("result channel is closed")
            try:
                self._queue.put(result, timeout=SEND_POLL_INTERVAL)
                return
            except queue.Full:
                continue

    def try_receive(self) -> Optional[CrawlResult]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def drain(self) -> list[CrawlResult]:
        """Returns every result currently buffered without blocking."""

        results: list[CrawlResult] = []
        while True:
            result = self.try_receive()
            if result is None:
                return results
            results.append(result)

    def __len__(self) -> int:
        return self._queue.qsize()
