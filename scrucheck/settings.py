"""
Run settings for scrucheck.
"""

import time
from dataclasses import dataclass, field
from typing import Callable

from scrucheck.context.formats import SCRU128
from scrucheck.models import IdFormat

STATS_INTERVAL_MS = 10 * 1000


def system_clock_ms() -> int:
    """Current Unix time in milliseconds"""
    return time.time_ns() // 1_000_000


@dataclass
class CheckerSettings:
    """Settings of one checker run (no files, no environment variables)."""
    fmt: IdFormat = SCRU128
    report_interval_ms: int = STATS_INTERVAL_MS
    clock: Callable[[], int] = field(default=system_clock_ms, repr=False)

    def __post_init__(self):
        if self.report_interval_ms <= 0:
            raise ValueError(f"report_interval_ms must be positive, got {self.report_interval_ms}")
