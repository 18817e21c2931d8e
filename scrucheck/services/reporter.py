"""
Report rendering.

Turns a Status snapshot into rows of (statistic, expected, observed). Values
that cannot be computed yet, such as a mean over zero intervals, are shown as
"n/a" instead of failing the report.
"""

import math
from typing import Callable, Optional

from scrucheck.context.statistics import Status, summarize_ones_by_bit
from scrucheck.models import FieldKind, IdFormat, Report

NOT_AVAILABLE = "n/a"


def format_number(value: float, precision: int) -> str:
    """Fixed-point text for value, or 'n/a' for NaN and infinities"""
    if math.isnan(value) or math.isinf(value):
        return NOT_AVAILABLE
    return f"{value:.{precision}f}"


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan
    return numerator / denominator


def _clock_lag(status: Status, fmt: IdFormat, clock: Optional[Callable[[], int]]) -> str:
    if clock is None or status.ts_last is None:
        return NOT_AVAILABLE
    try:
        now = clock()
    except Exception:
        # a failing clock blanks this row only
        return NOT_AVAILABLE
    return str(now - (status.ts_last + fmt.epoch_ms))


def render(status: Status, fmt: IdFormat, clock: Optional[Callable[[], int]] = None) -> Report:
    """
    Build a report from status without modifying it.

    Args:
        status: Aggregate state
        fmt: Format the identifiers were decoded with (labels, epoch)
        clock: Returns current Unix ms; a failing clock only blanks its own row

    Returns:
        Report
    """
    report = Report()
    elapsed = status.time_elapsed
    fast = status.fast_tier
    slow = status.slow_tier

    report.add("Seconds from first input ID to last (sec)", "NA", format_number(elapsed / 1000, 1))
    report.add("Number of valid IDs processed", "NA", str(status.n_processed))
    report.add("Number of invalid IDs skipped", "0", str(status.n_errors))
    report.add("Mean number of IDs per millisecond", "NA",
               format_number(_ratio(status.n_processed, elapsed), 1))
    report.add("Current time less last timestamp (msec)", "~0", _clock_lag(status, fmt, clock))

    if fmt.slow_tier_carries:
        report.add(f"Number of {slow.name} increments", "NA", str(status.carries.n_events))

    report.add(f"Mean interval of {fast.name} updates (msec)", fmt.expected_fast_interval,
               format_number(fast.mean_interval, 3))
    report.add(f"Mean interval of {slow.name} updates (msec)", fmt.expected_slow_interval,
               format_number(slow.mean_interval, 3))

    report.add(f"1/0 ratio of each bit in {fast.name} at reset (min-max)", "~0.500",
               summarize_ones_by_bit(fast.ones_by_bit, fast.n_samples))
    slow_when = " at reset" if fmt.layout(fmt.slow_tier).kind is FieldKind.COUNTER else ""
    report.add(f"1/0 ratio of each bit in {slow.name}{slow_when} (min-max)", "~0.500",
               summarize_ones_by_bit(slow.ones_by_bit, slow.n_samples))
    report.add(f"1/0 ratio of each bit in {fmt.entropy} (min-max)", "~0.500",
               summarize_ones_by_bit(status.n_ones_by_bit_entropy, status.n_processed))

    return report
