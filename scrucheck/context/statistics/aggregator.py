"""
Online statistics over accepted identifiers.

Per record:
    processed count, first/last timestamp, entropy bit population.
Per fast-tier reset (counter did not advance by exactly one):
    reset interval and bit population of the new counter value.
Per slow-tier change:
    carry from a fast-tier overflow is counted on its own; any other change
    is treated like a fast-tier reset.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from scrucheck.context.statistics.bits import count_ones_by_bit
from scrucheck.context.statistics.tracker import EdgeTracker
from scrucheck.models import IdFormat, Identifier


@dataclass
class Status:
    """Aggregate state of one run. Owned and mutated by Aggregator only."""
    n_processed: int = 0
    n_errors: int = 0
    ts_first: Optional[int] = None
    ts_last: Optional[int] = None
    n_ones_by_bit_entropy: List[int] = field(default_factory=list)
    fast_tier: EdgeTracker = field(default_factory=lambda: EdgeTracker("fast"))
    slow_tier: EdgeTracker = field(default_factory=lambda: EdgeTracker("slow"))
    carries: EdgeTracker = field(default_factory=lambda: EdgeTracker("carry"))
    ts_last_report: Optional[int] = None

    @classmethod
    def for_format(cls, fmt: IdFormat) -> 'Status':
        fast = fmt.layout(fmt.fast_tier)
        slow = fmt.layout(fmt.slow_tier)
        return cls(
            n_ones_by_bit_entropy=[0] * fmt.layout(fmt.entropy).width,
            fast_tier=EdgeTracker(fast.name, fast.width),
            slow_tier=EdgeTracker(slow.name, slow.width),
            carries=EdgeTracker(f"{slow.name} increment"),
        )

    @property
    def time_elapsed(self) -> int:
        if self.ts_first is None or self.ts_last is None:
            return 0
        return self.ts_last - self.ts_first


class Aggregator:
    """
    Updates Status from accepted identifiers.

    observe() must be called exactly once per accepted identifier and in input
    order, since every update compares against the previous accepted one.
    """

    def __init__(self, fmt: IdFormat):
        self.fmt = fmt
        self.status = Status.for_format(fmt)
        self.prev: Optional[Identifier] = None

        self._fast = fmt.index_of(fmt.fast_tier)
        self._slow = fmt.index_of(fmt.slow_tier)
        self._entropy = fmt.index_of(fmt.entropy)
        self._wrap = fmt.counter_wrap

    def count_error(self):
        self.status.n_errors += 1

    def observe(self, curr: Identifier):
        """Fold one accepted identifier into the statistics."""
        st = self.status
        prev = self.prev
        ts = curr.timestamp

        st.n_processed += 1
        if st.ts_first is None:
            st.ts_first = ts
        st.ts_last = ts

        count_ones_by_bit(st.n_ones_by_bit_entropy, curr.fields[self._entropy])

        fast = curr.fields[self._fast]
        slow = curr.fields[self._slow]

        if prev is None:
            st.fast_tier.record(ts, fast)
            st.slow_tier.record(ts, slow)
            self.prev = curr
            return

        prev_fast = prev.fields[self._fast]
        prev_slow = prev.fields[self._slow]

        # Triggered per millisecond
        if not self._fast_tier_advanced(prev_fast, fast):
            st.fast_tier.record(ts, fast)

        # Triggered per second or per fast-tier overflow
        if slow != prev_slow:
            if self._is_carry(prev, curr):
                st.carries.record(ts)
            else:
                st.slow_tier.record(ts, slow)

        self.prev = curr

    def _fast_tier_advanced(self, prev_fast: int, fast: int) -> bool:
        if fast == prev_fast + 1:
            return True
        return self._wrap is not None and prev_fast == self._wrap and fast == 0

    def _is_carry(self, prev: Identifier, curr: Identifier) -> bool:
        if not self.fmt.slow_tier_carries or curr.timestamp != prev.timestamp:
            return False
        if curr.fields[self._slow] != prev.fields[self._slow] + 1 or curr.fields[self._fast] != 0:
            return False
        return self._wrap is None or prev.fields[self._fast] == self._wrap

    def report_due(self, timestamp: int, interval_ms: int) -> bool:
        """
        Advance the periodic report mark.

        The first call only sets the mark so the first interval warms up the
        statistics; later calls return True once more than interval_ms passed.
        """
        st = self.status
        if st.ts_last_report is None:
            st.ts_last_report = timestamp
            return False
        if timestamp - st.ts_last_report > interval_ms:
            st.ts_last_report = timestamp
            return True
        return False
