"""Centralized imports for the site crawler package used in tests."""

from site_crawler.core.config import CrawlerConfig, load_configuration  # type: ignore[import]
from site_crawler.core.models import ControlSignal, CrawlResult, Rect  # type: ignore[import]
from site_crawler.recon.channel import ChannelClosedError, ResultChannel  # type: ignore[import]
from site_crawler.recon.frontier import Frontier  # type: ignore[import]
from site_crawler.session.events import Key, KeyEvent, MouseEvent, MouseKind  # type: ignore[import]
from site_crawler.session.state import SessionState  # type: ignore[import]

__all__ = [
    "ChannelClosedError",
    "ControlSignal",
    "CrawlResult",
    "CrawlerConfig",
    "Frontier",
    "Key",
    "KeyEvent",
    "MouseEvent",
    "MouseKind",
    "Rect",
    "ResultChannel",
    "SessionState",
    "load_configuration",
]
