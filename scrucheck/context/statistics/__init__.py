"""
Statistics: online aggregation of identifier fields.
"""

from scrucheck.context.statistics.aggregator import Aggregator, Status
from scrucheck.context.statistics.bits import count_ones_by_bit, ones_ratio_range, summarize_ones_by_bit
from scrucheck.context.statistics.tracker import EdgeTracker

__all__ = [
    'Aggregator',
    'Status',
    'EdgeTracker',
    'count_ones_by_bit',
    'ones_ratio_range',
    'summarize_ones_by_bit',
]
