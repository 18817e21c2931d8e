"""
Bit-population counting.

For a healthy random source every bit position is set in about half of the
samples; the min and max of the per-bit ratios are the anomaly signal.
"""

import math
from typing import List, Sequence, Tuple


def count_ones_by_bit(counts: List[int], value: int):
    """
    Add the set bits of value to counts, index 0 being the most significant bit

    Examples:
        >>> counts = [0, 0, 0, 0]
        >>> count_ones_by_bit(counts, 0b1001)
        >>> counts
        [1, 0, 0, 1]
    """
    width = len(counts)
    for i in range(width):
        if (value >> i) & 1:
            counts[width - 1 - i] += 1


def ones_ratio_range(counts: Sequence[int], n_samples: int) -> Tuple[float, float]:
    """Min and max ratio of set bits per position; (nan, nan) without samples"""
    if n_samples <= 0 or not counts:
        return math.nan, math.nan
    ratios = [c / n_samples for c in counts]
    return min(ratios), max(ratios)


def summarize_ones_by_bit(counts: Sequence[int], n_samples: int) -> str:
    """Format the ratio range as 'min-max', or 'n/a' without samples"""
    lo, hi = ones_ratio_range(counts, n_samples)
    if math.isnan(lo):
        return "n/a"
    return f"{lo:.3f}-{hi:.3f}"
