"""Dependency checks for the browser the crawler drives."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import requests
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

ENDPOINT_PROBE_TIMEOUT = 3


def check_chromium() -> bool:
    """Returns ``True`` if Playwright's bundled Chromium is installed."""

    try:
        with sync_playwright() as playwright:
            return Path(playwright.chromium.executable_path).exists()
    except PlaywrightError:
        return False


def check_endpoint(endpoint: str) -> bool:
    """Returns ``True`` if a CDP endpoint answers its version probe."""

    try:
        response = requests.get(
            f"{endpoint.rstrip('/')}/json/version",
            timeout=ENDPOINT_PROBE_TIMEOUT,
        )
    except requests.RequestException:
        return False
    return response.status_code == 200


def verify_dependencies(endpoint: Optional[str] = None) -> dict[str, bool]:
    """Checks the browser the session will use and returns a mapping with the result."""

    if endpoint:
        return {f"browser endpoint {endpoint}": check_endpoint(endpoint)}
    return {"chromium (playwright install chromium)": check_chromium()}
