"""Command line interface for the site crawler."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from .core.config import CrawlerConfig, load_configuration
from .core.dependencies import verify_dependencies
from .core.models import ControlSignal
from .recon.targeting import normalize_root_url
from .ui.prompt import prompt_for_url
from .ui.render_loop import run_session
from .ui.renderer import CursesRenderer, Renderer
from .ui.terminal import Terminal, terminal_session

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Crawl one website in a real browser and browse its text live"
    )
    parser.add_argument("url", nargs="?", help="Root URL; skips the first prompt")
    parser.add_argument(
        "--endpoint",
        help="CDP endpoint of a running Chromium (default: launch one locally)",
    )
    parser.add_argument(
        "--headless",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run the launched browser headless (default comes from .env/HEADLESS)",
    )
    parser.add_argument("--log-file", help="Write crawl logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[Path], verbose: bool = False) -> None:
    """Routes logs to ``log_file``; without one, logs are discarded.

    Anything written to stderr would land on top of the curses screen.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def print_dependency_status(endpoint: Optional[str]) -> bool:
    status = verify_dependencies(endpoint)
    missing = [name for name, ok in status.items() if not ok]
    for name, ok in status.items():
        print(f"[{'+' if ok else '!'}] {name} {'found' if ok else 'not found'}")
    if missing:
        print("[!] Crawls will return no pages until the browser is available.")
        return False
    return True


def run_application(
    terminal: Terminal,
    renderer: Renderer,
    config: CrawlerConfig,
    *,
    session_runner: Callable[..., ControlSignal] = run_session,
    prompt: Callable[..., Optional[str]] = prompt_for_url,
) -> None:
    """Alternates between the URL prompt and crawl sessions until the user quits."""

    pending_url = normalize_root_url(config.root_url) if config.root_url else None
    while True:
        root_url = pending_url or prompt(terminal, renderer, config.poll_interval)
        pending_url = None
        if root_url is None:
            return

        signal = session_runner(terminal, renderer, config, root_url)
        if signal is ControlSignal.EXIT_APPLICATION:
            return


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    config = load_configuration(
        args.url,
        endpoint=args.endpoint,
        headless=args.headless,
        log_file=args.log_file,
    )
    configure_logging(config.log_file, args.verbose)

    if config.root_url and normalize_root_url(config.root_url) is None:
        print(f"[!] Ignoring invalid URL {config.root_url!r}; expected http(s)://host/...")

    print("[*] Checking browser...")
    print_dependency_status(config.endpoint)

    with terminal_session() as terminal:
        run_application(terminal, CursesRenderer(terminal.screen), config)

    print("[*] Bye.")
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
