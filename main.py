#!/usr/bin/env python3
"""Runs the crawler straight from a checkout: ``python main.py [URL]``."""

from __future__ import annotations

import sys
from pathlib import Path

SRC_PATH = Path(__file__).resolve().parent / "src"
if SRC_PATH.is_dir():
    sys.path.insert(0, str(SRC_PATH))

from site_crawler.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
