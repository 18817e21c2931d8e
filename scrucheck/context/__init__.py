"""
Context layer - domain-specific implementations.
"""

from scrucheck.context.encoding import TokenDecoder, decode, encode, encode_fields
from scrucheck.context.formats import SCRU128, SCRU128_V1
from scrucheck.context.statistics import Aggregator, EdgeTracker, Status
from scrucheck.context.validation import OrderValidator, validate

__all__ = [
    'TokenDecoder',
    'decode',
    'encode',
    'encode_fields',
    'SCRU128',
    'SCRU128_V1',
    'Aggregator',
    'EdgeTracker',
    'Status',
    'OrderValidator',
    'validate',
]
