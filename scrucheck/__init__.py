"""
scrucheck - Conformance and health checks for SCRU128 identifier streams

Reads identifiers one per line, verifies their monotonic ordering at text,
integer and field level, and tracks statistics (bit symmetry of random
fields, counter reset intervals) that expose subtle generator defects.

MCP Architecture:
- Models: Pure data structures (IdFormat, Identifier, ValidationOutcome, Report)
- Protocols: Interface contracts (DecoderProtocol, ValidatorProtocol)
- Context: Domain implementations (Encoding, Validation, Statistics)
- Services: Application orchestration (IdentifierChecker, reporter)
- CLI: User interface (scru128-test, scru128-test-v1)
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Core MCP layers
from scrucheck import models, protocols
from scrucheck.context import (
    SCRU128,
    SCRU128_V1,
    Aggregator,
    OrderValidator,
    TokenDecoder,
    decode,
    encode,
)
from scrucheck.services import IdentifierChecker, Checker, render, run
from scrucheck.settings import CheckerSettings

__all__ = [
    # MCP Architecture
    'models',
    'protocols',
    'SCRU128',
    'SCRU128_V1',
    'TokenDecoder',
    'OrderValidator',
    'Aggregator',
    'IdentifierChecker',
    'CheckerSettings',
    'decode',
    'encode',
    'render',
    'run',
    # Aliases
    'Checker',
]
