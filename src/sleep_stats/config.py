"""
config.py

Env-driven defaults for the CLI. A local .env is loaded first.
Command-line flags override every value here.

Env vars:
  - SLEEP_STATS_OUTPUT          chart path (default: sleep_statistics.svg)
  - SLEEP_STATS_DEVICE_PREFIX   productType prefix to keep (default: Watch)
  - SLEEP_STATS_BOUNDARY        as-is | shift-before-noon (default: as-is)
  - SLEEP_STATS_SESSION_STAGE   stage counted per night (default: inBed)
  - SLEEP_STATS_ZERO_FLOOR      hours plotted for a zero duration (default: 0.01)
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


OUTPUT_PATH = os.getenv("SLEEP_STATS_OUTPUT", "sleep_statistics.svg")
DEVICE_PREFIX = os.getenv("SLEEP_STATS_DEVICE_PREFIX", "Watch")
BOUNDARY_POLICY = os.getenv("SLEEP_STATS_BOUNDARY", "as-is").strip().lower()
SESSION_STAGE = os.getenv("SLEEP_STATS_SESSION_STAGE", "inBed")
ZERO_FLOOR = os.getenv("SLEEP_STATS_ZERO_FLOOR", "0.01")
