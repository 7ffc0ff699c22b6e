from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from ..browser.driver import Driver, ExtractionError
from .targeting import LinkResolutionError, TargetFilter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LinkCollector:
    """Collects same-domain links from the page currently loaded in a driver."""

    target_filter: TargetFilter

    def collect(self, driver: Driver, current_url: str) -> List[str]:
        """Returns resolved links in discovery order without duplicates.

        Live anchors are read first; the serialized HTML is parsed afterwards to
        pick up anchors the locator pass could not read.
        """

        links: List[str] = []
        seen: set[str] = set()

        for url in self.collect_from_driver(driver, current_url):
            if url not in seen:
                seen.add(url)
                links.append(url)

        try:
            html = driver.content()
        except ExtractionError as exc:
            logger.debug("Skipping HTML link pass for %s: %s", current_url, exc)
            html = ""

        if html:
            soup = BeautifulSoup(html, "html.parser")
            for url in self.gather_from_soup(soup, current_url):
                if url not in seen:
                    seen.add(url)
                    links.append(url)

        return links

    def collect_from_driver(self, driver: Driver, current_url: str) -> List[str]:
        try:
            anchors = driver.find_all("a")
        except ExtractionError as exc:
            logger.warning("Could not enumerate links on %s: %s", current_url, exc)
            return []
        return self._resolve_all(
            current_url, (driver.attribute(anchor, "href") for anchor in anchors)
        )

    def gather_from_soup(self, soup: BeautifulSoup, current_url: str) -> List[str]:
        return self._resolve_all(
            current_url, (anchor.get("href") for anchor in soup.find_all("a"))
        )

    def _resolve_all(self, current_url: str, hrefs: Iterable[Optional[str]]) -> List[str]:
        resolved: List[str] = []
        for href in hrefs:
            try:
                normalized = self.target_filter.normalize_link(current_url, href)
            except LinkResolutionError as exc:
                logger.debug("%s", exc)
                continue
            if normalized:
                resolved.append(normalized)
        return resolved
