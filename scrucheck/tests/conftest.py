"""
Pytest configuration and shared fixtures for scrucheck tests
"""

import random
import pytest
from typing import Callable, List

from scrucheck.context.encoding import decode, encode_fields
from scrucheck.context.formats import SCRU128, SCRU128_V1
from scrucheck.models import Identifier

MAX_24 = 0xFFFFFF
START_TS = 1_700_000_000_000


def generate_scru128(count: int, seed: int = 0, start_ts: int = START_TS, ids_per_ms: int = 4,
                     entropy_source: Callable[[random.Random], int] = None) -> List[bytes]:
    """
    Simulate a SCRU128 generator producing ids_per_ms IDs every millisecond.

    counter_lo is reset to a random value every millisecond, counter_hi every
    second; a counter_lo overflow carries into counter_hi.
    """
    rng = random.Random(seed)
    entropy_source = entropy_source or (lambda r: r.getrandbits(32))

    ts = start_ts
    ts_counter_hi = ts
    counter_hi = rng.getrandbits(24)
    counter_lo = rng.getrandbits(24)
    tokens = []
    for i in range(count):
        if i and i % ids_per_ms == 0:
            ts += 1
            counter_lo = rng.getrandbits(24)
            if ts - ts_counter_hi >= 1000:
                ts_counter_hi = ts
                counter_hi = rng.getrandbits(24)
        elif i:
            counter_lo += 1
            if counter_lo > MAX_24:
                counter_lo = 0
                counter_hi += 1
                if counter_hi > MAX_24:
                    counter_hi = 0
                    ts += 1
        tokens.append(encode_fields(SCRU128, timestamp=ts, counter_hi=counter_hi,
                                    counter_lo=counter_lo, entropy=entropy_source(rng)))
    return tokens


def generate_scru128_v1(count: int, seed: int = 0, start_ts: int = 100_000_000_000,
                        ids_per_ms: int = 4) -> List[bytes]:
    """Same as generate_scru128 for the 26-digit single counter format."""
    rng = random.Random(seed)
    ts = start_ts
    ts_per_sec = ts
    counter = rng.getrandbits(27)
    per_sec_random = rng.getrandbits(24)
    tokens = []
    for i in range(count):
        if i and i % ids_per_ms == 0:
            ts += 1
            counter = rng.getrandbits(27)
            if ts - ts_per_sec >= 1000:
                ts_per_sec = ts
                per_sec_random = rng.getrandbits(24)
        elif i:
            counter += 1
        tokens.append(encode_fields(SCRU128_V1, timestamp=ts, counter=counter,
                                    per_sec_random=per_sec_random,
                                    per_gen_random=rng.getrandbits(32)))
    return tokens


@pytest.fixture
def make_id() -> Callable[..., Identifier]:
    """Build a decoded SCRU128 identifier from field values"""
    def _make(timestamp=START_TS, counter_hi=0, counter_lo=0, entropy=0) -> Identifier:
        token = encode_fields(SCRU128, timestamp=timestamp, counter_hi=counter_hi,
                              counter_lo=counter_lo, entropy=entropy)
        return decode(token, SCRU128)
    return _make


@pytest.fixture
def scru128_tokens() -> List[bytes]:
    """3 seconds of a well-behaved generator"""
    return generate_scru128(12_000)


@pytest.fixture
def scru128_v1_tokens() -> List[bytes]:
    return generate_scru128_v1(4_000)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant Unix time in milliseconds"""
    return lambda: START_TS + 5_000


@pytest.fixture
def broken_clock():
    """Clock that fails like an unavailable system clock"""
    def _clock():
        raise OSError("clock unavailable")
    return _clock


@pytest.fixture
def generator() -> Callable[..., List[bytes]]:
    """Synthetic SCRU128 stream factory, see generate_scru128"""
    return generate_scru128
