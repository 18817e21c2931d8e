"""
Unit tests for bit counting, edge trackers and the aggregator
"""

import math
import random
import pytest
from dataclasses import replace

from scrucheck.context.encoding import decode, encode_fields
from scrucheck.context.formats import SCRU128, SCRU128_V1
from scrucheck.context.statistics import (
    Aggregator,
    EdgeTracker,
    count_ones_by_bit,
    ones_ratio_range,
    summarize_ones_by_bit,
)


class TestBitCounting:
    """Test per-bit population counts"""

    def test_msb_first_indexing(self):
        counts = [0] * 8
        count_ones_by_bit(counts, 0b1000_0001)
        count_ones_by_bit(counts, 0b1100_0000)
        assert counts == [2, 1, 0, 0, 0, 0, 0, 1]

    def test_bits_above_width_are_ignored(self):
        counts = [0] * 4
        count_ones_by_bit(counts, 0b1_0000)
        assert counts == [0, 0, 0, 0]

    def test_ratio_range(self):
        assert ones_ratio_range([1, 3, 2], 4) == (0.25, 0.75)
        assert summarize_ones_by_bit([1, 3, 2], 4) == "0.250-0.750"

    def test_no_samples_is_not_available(self):
        lo, hi = ones_ratio_range([0, 0], 0)
        assert math.isnan(lo) and math.isnan(hi)
        assert summarize_ones_by_bit([0, 0], 0) == "n/a"

    def test_uniform_source_converges_to_half(self):
        rng = random.Random(1)
        counts = [0] * 32
        for _ in range(10_000):
            count_ones_by_bit(counts, rng.getrandbits(32))
        lo, hi = ones_ratio_range(counts, 10_000)
        assert 0.45 <= lo <= hi <= 0.55

    def test_biased_source_fails_the_bound(self):
        rng = random.Random(1)
        counts = [0] * 32
        for _ in range(10_000):
            # each bit set with probability 1/4
            count_ones_by_bit(counts, rng.getrandbits(32) & rng.getrandbits(32))
        lo, hi = ones_ratio_range(counts, 10_000)
        assert not (0.45 <= lo <= hi <= 0.55)


class TestEdgeTracker:
    """Test interval accumulation"""

    def test_first_event_only_sets_baseline(self):
        tracker = EdgeTracker("counter", 4)
        tracker.record(100, 0b1010)
        assert tracker.n_changes == 0
        assert tracker.n_events == 1
        assert tracker.n_samples == 1
        assert tracker.ones_by_bit == [1, 0, 1, 0]
        assert math.isnan(tracker.mean_interval)

    def test_intervals_accumulate(self):
        tracker = EdgeTracker("counter", 4)
        for ts in (100, 101, 103, 106):
            tracker.record(ts, 0)
        assert tracker.n_changes == 3
        assert tracker.sum_intervals == 6
        assert tracker.mean_interval == 2.0

    def test_tracker_without_bits(self):
        tracker = EdgeTracker("carry")
        tracker.record(1, 0xFF)
        tracker.record(2)
        assert tracker.ones_by_bit == []
        assert tracker.n_samples == 0
        assert tracker.n_events == 2


def _observe_all(aggregator, fmt, rows):
    for row in rows:
        aggregator.observe(decode(encode_fields(fmt, **row), fmt))
    return aggregator.status


class TestAggregator:
    """Test event-triggered statistics"""

    def test_per_record_counts(self, make_id):
        agg = Aggregator(SCRU128)
        agg.observe(make_id(timestamp=1000, counter_lo=1, entropy=0xFFFFFFFF))
        agg.observe(make_id(timestamp=1005, counter_lo=2, entropy=0))

        st = agg.status
        assert st.n_processed == 2
        assert st.ts_first == 1000
        assert st.ts_last == 1005
        assert st.time_elapsed == 5
        assert st.n_ones_by_bit_entropy == [1] * 32

    def test_increment_by_one_records_no_reset(self, make_id):
        agg = Aggregator(SCRU128)
        for lo in range(100, 110):
            agg.observe(make_id(timestamp=1000, counter_lo=lo))

        assert agg.status.fast_tier.n_changes == 0
        assert agg.status.fast_tier.n_events == 1

    def test_counter_jump_records_one_reset(self, make_id):
        agg = Aggregator(SCRU128)
        agg.observe(make_id(timestamp=1000, counter_lo=100))
        agg.observe(make_id(timestamp=1000, counter_lo=101))
        agg.observe(make_id(timestamp=1003, counter_lo=7))

        fast = agg.status.fast_tier
        assert fast.n_changes == 1
        assert fast.sum_intervals == 3
        assert fast.n_samples == 2

    def test_wraparound_is_not_a_reset(self, make_id):
        agg = Aggregator(SCRU128)
        agg.observe(make_id(timestamp=1000, counter_hi=5, counter_lo=0xFFFFFF))
        agg.observe(make_id(timestamp=1000, counter_hi=6, counter_lo=0))

        st = agg.status
        assert st.fast_tier.n_changes == 0
        assert st.carries.n_events == 1
        assert st.slow_tier.n_changes == 0
        assert st.slow_tier.n_samples == 1

    def test_slow_tier_refresh_is_a_change_event(self, make_id):
        agg = Aggregator(SCRU128)
        agg.observe(make_id(timestamp=1000, counter_hi=5, counter_lo=10))
        agg.observe(make_id(timestamp=2000, counter_hi=900, counter_lo=20))

        st = agg.status
        assert st.carries.n_events == 0
        assert st.slow_tier.n_changes == 1
        assert st.slow_tier.sum_intervals == 1000
        assert st.slow_tier.n_samples == 2

    def test_increment_across_timestamps_is_not_a_carry(self, make_id):
        agg = Aggregator(SCRU128)
        agg.observe(make_id(timestamp=1000, counter_hi=5, counter_lo=0xFFFFFF))
        agg.observe(make_id(timestamp=1001, counter_hi=6, counter_lo=0))

        assert agg.status.carries.n_events == 0
        assert agg.status.slow_tier.n_changes == 1

    def test_increment_without_wrap_is_not_a_carry(self, make_id):
        agg = Aggregator(SCRU128)
        agg.observe(make_id(timestamp=1000, counter_hi=5, counter_lo=0x10))
        agg.observe(make_id(timestamp=1000, counter_hi=6, counter_lo=0))

        st = agg.status
        assert st.carries.n_events == 0
        assert st.slow_tier.n_changes == 1
        assert st.fast_tier.n_changes == 1

    def test_single_counter_format_has_no_carries(self):
        agg = Aggregator(SCRU128_V1)
        st = _observe_all(agg, SCRU128_V1, [
            dict(timestamp=1000, counter=0xFFFFFFF, per_sec_random=5),
            dict(timestamp=1000, counter=0, per_sec_random=6),
        ])
        assert st.fast_tier.n_changes == 1
        assert st.slow_tier.n_changes == 1
        assert st.carries.n_events == 0

    def test_wrap_boundary_comes_from_format(self):
        # without a configured boundary 0xFFFFFF -> 0 is a reset
        fmt = replace(SCRU128, counter_wrap=None)
        agg = Aggregator(fmt)
        st = _observe_all(agg, fmt, [
            dict(timestamp=1000, counter_hi=5, counter_lo=0xFFFFFF),
            dict(timestamp=1000, counter_hi=6, counter_lo=0),
        ])
        assert st.fast_tier.n_changes == 1
        assert st.carries.n_events == 1

    def test_generated_stream_statistics(self, scru128_tokens):
        agg = Aggregator(SCRU128)
        for token in scru128_tokens:
            agg.observe(decode(token, SCRU128))

        st = agg.status
        assert st.n_processed == len(scru128_tokens)
        assert st.fast_tier.mean_interval == pytest.approx(1.0, abs=0.01)
        assert st.slow_tier.mean_interval == pytest.approx(1000.0, abs=1.0)
        lo, hi = ones_ratio_range(st.n_ones_by_bit_entropy, st.n_processed)
        assert 0.45 <= lo <= hi <= 0.55


class TestReportTrigger:
    """Test periodic report scheduling"""

    def test_first_interval_is_warm_up(self):
        agg = Aggregator(SCRU128)
        assert not agg.report_due(1000, 100)
        assert not agg.report_due(1100, 100)
        assert agg.report_due(1101, 100)
        assert agg.status.ts_last_report == 1101
        assert not agg.report_due(1150, 100)
