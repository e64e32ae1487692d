"""
errors.py

Every failure in this tool is fatal: the CLI prints the message and exits non-zero.
There is no retry tier.
"""

from __future__ import annotations

from typing import Iterable, Optional


class SleepStatsError(Exception):
    """Base class for all fatal errors raised by sleep_stats."""


class UsageError(SleepStatsError):
    """Missing or invalid command-line input."""


class SourceReadError(SleepStatsError):
    """The export could not be opened or read to completion."""


class MalformedRecordError(SleepStatsError):
    """A retained row could not be turned into a SleepInterval."""

    def __init__(self, message: str, *, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class MissingColumnsError(MalformedRecordError):
    """The header row does not name every required column."""

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"header is missing required column(s): {', '.join(self.missing)}")


class ChartRenderError(SleepStatsError):
    """matplotlib failed to build or save the chart."""
