"""Helper script to execute the crawl engine without the terminal view.

Prints one line per visited page. Useful for quick smoke tests or for
debugging the worker against a real site.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path

# Guarantee imports resolve to the local source tree when running from a checkout.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    src_str = str(SRC_PATH)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)

from site_crawler.core.config import load_configuration
from site_crawler.recon.channel import ResultChannel
from site_crawler.recon.frontier import Frontier
from site_crawler.recon.targeting import normalize_root_url
from site_crawler.recon.worker import CrawlWorker, WorkerState
from site_crawler.ui.render_loop import default_driver_factory


def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Runs only the crawl worker against a root URL"
    )
    parser.add_argument("url", help="Root URL of the site to crawl")
    parser.add_argument(
        "--max-pages",
        type=int,
        default=20,
        help="Stop after this many pages. Default: 20",
    )
    parser.add_argument(
        "--headless",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force headless mode (default comes from .env/environment)",
    )
    parser.add_argument("--endpoint", help="CDP endpoint of a running Chromium")
    return parser.parse_args()


def first_line(text: str, width: int = 60) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()[:width]
    return ""


def main() -> None:
    args = parse_arguments()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    root_url = normalize_root_url(args.url)
    if root_url is None:
        print(f"[!] Invalid URL: {args.url}")
        return

    config = load_configuration(root_url, endpoint=args.endpoint, headless=args.headless)
    channel = ResultChannel(config.channel_capacity)
    worker = CrawlWorker(
        root_url,
        Frontier([root_url]),
        channel,
        default_driver_factory(config),
        delay=config.crawl_delay,
    )

    print(f"[*] Crawling {root_url}")
    worker.start()
    received = 0
    done = threading.Event()
    try:
        while received < args.max_pages and not done.is_set():
            for result in channel.drain():
                received += 1
                print(f"[{received}] {result.url} :: {first_line(result.body_text)}")
            if worker.state is WorkerState.STOPPED and not len(channel):
                done.set()
            done.wait(config.poll_interval)
    except KeyboardInterrupt:
        print("[!] Interrupted by user")
    finally:
        worker.cancel(config.cancel_timeout)

    print(f"[+] {received} page(s) received; {worker.status_text()}")


if __name__ == "__main__":
    main()
