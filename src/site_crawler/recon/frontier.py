from __future__ import annotations

import threading
from collections import deque
from typing import Iterable, Optional


class Frontier:
    """Deduplicated FIFO of pending URLs plus the set of visited URLs.

    A URL accepted once is never accepted again, so it can be dequeued at most
    once. Every method takes the same lock; the underlying collections are
    never handed out.
    """

    def __init__(self, seeds: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._pending: deque[str] = deque()
        self._seen_urls: set[str] = set()
        self._visited_urls: set[str] = set()
        for url in seeds:
            self.enqueue_if_new(url)

    def enqueue_if_new(self, url: str) -> bool:
        with self._lock:
            if url in self._visited_urls or url in self._seen_urls:
                return False
            self._seen_urls.add(url)
            self._pending.append(url)
            return True

    def dequeue(self) -> Optional[str]:
        with self._lock:
            if not self._pending:
                return None
            return self._pending.popleft()

    def mark_visited(self, url: str) -> None:
        with self._lock:
            if url in self._visited_urls:
                return
            self._visited_urls.add(url)
            self._seen_urls.add(url)
            try:
                self._pending.remove(url)
            except ValueError:
                pass

    def is_visited(self, url: str) -> bool:
        with self._lock:
            return url in self._visited_urls

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def visited_count(self) -> int:
        with self._lock:
            return len(self._visited_urls)
