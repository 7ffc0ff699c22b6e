"""Configuration loading for crawl sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_CHANNEL_CAPACITY = 100
DEFAULT_POLL_INTERVAL = 0.1
DEFAULT_SCROLL_LINES = 3
DEFAULT_CRAWL_DELAY = 0.05
DEFAULT_NAVIGATION_TIMEOUT_MS = 8000


@dataclass(slots=True)
class CrawlerConfig:
    """Holds runtime options for the crawler and the terminal session."""

    root_url: Optional[str] = None
    endpoint: Optional[str] = None
    headless: bool = True
    crawl_delay: float = DEFAULT_CRAWL_DELAY
    navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY
    poll_interval: float = DEFAULT_POLL_INTERVAL
    scroll_lines: int = DEFAULT_SCROLL_LINES
    log_file: Optional[Path] = None

    @property
    def cancel_timeout(self) -> float:
        """Upper bound for waiting on the worker after a cancel request."""

        return self.navigation_timeout_ms / 1000 + 2.0


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def load_configuration(
    root_url: Optional[str] = None,
    *,
    endpoint: Optional[str] = None,
    headless: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> CrawlerConfig:
    """Builds a ``CrawlerConfig`` from CLI input and environment variables.

    Explicit arguments win over the environment; the environment wins over the
    module defaults.
    """

    load_dotenv()  # Loads .env values if present

    endpoint_value = endpoint or os.getenv("BROWSER_ENDPOINT") or None
    headless_value = headless if headless is not None else _env_flag("HEADLESS", "true")
    log_value = log_file or os.getenv("CRAWLER_LOG_FILE") or None

    return CrawlerConfig(
        root_url=root_url.strip() if root_url else None,
        endpoint=endpoint_value.rstrip("/") if endpoint_value else None,
        headless=headless_value,
        crawl_delay=float(os.getenv("CRAWL_DELAY", str(DEFAULT_CRAWL_DELAY))),
        navigation_timeout_ms=int(
            os.getenv("NAVIGATION_TIMEOUT", str(DEFAULT_NAVIGATION_TIMEOUT_MS))
        ),
        log_file=Path(log_value).resolve() if log_value else None,
    )
