"""
Edge detector with interval accumulator.

Each field that is refreshed at its own cadence gets one EdgeTracker. A change
event records the time since the previous event (from the second event on)
and, when the tracker has a bit width, the new value's set bits.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from scrucheck.context.statistics.bits import count_ones_by_bit


@dataclass
class EdgeTracker:
    """Interval and bit-population bookkeeping for one field."""
    name: str
    bit_width: int = 0
    n_changes: int = 0
    sum_intervals: int = 0
    ts_last_change: Optional[int] = None
    n_samples: int = 0
    ones_by_bit: List[int] = field(default_factory=list)

    def __post_init__(self):
        if not self.ones_by_bit:
            self.ones_by_bit = [0] * self.bit_width

    def record(self, timestamp: int, value: Optional[int] = None):
        """Register a change event at timestamp, sampling value's bits if given."""
        if self.ts_last_change is not None:
            self.n_changes += 1
            self.sum_intervals += timestamp - self.ts_last_change
        self.ts_last_change = timestamp

        if value is not None and self.bit_width:
            count_ones_by_bit(self.ones_by_bit, value)
            self.n_samples += 1

    @property
    def n_events(self) -> int:
        """All recorded events, including the first one that has no interval."""
        if self.ts_last_change is None:
            return 0
        return self.n_changes + 1

    @property
    def mean_interval(self) -> float:
        if self.n_changes == 0:
            return math.nan
        return self.sum_intervals / self.n_changes
