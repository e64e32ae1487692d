"""Timestamped diagnostics on stderr; stdout is reserved for the summary."""

from __future__ import annotations

import sys
from datetime import datetime


def log(msg: str) -> None:
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[sleep-stats {ts}] {msg}", file=sys.stderr, flush=True)
