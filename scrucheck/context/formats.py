"""
Known identifier formats.

SCRU128 (current):
    25 base-36 digits, 48-bit Unix-ms timestamp, 24-bit counter_hi,
    24-bit counter_lo, 32-bit entropy. counter_lo is reset every millisecond,
    counter_hi every second or when counter_lo overflows.

SCRU128_V1 (early 26-digit generation):
    26 base-32 digits, 44-bit timestamp since 2020-01-01, 28-bit counter,
    24-bit per_sec_random, 32-bit per_gen_random.
"""

from scrucheck.models import FieldKind, FieldLayout, IdFormat

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
BASE32_ALPHABET = "0123456789abcdefghijklmnopqrstuv"

SCRU128 = IdFormat(
    name="scru128",
    width=25,
    radix=36,
    alphabet=BASE36_ALPHABET,
    fields=(
        FieldLayout("timestamp", 48, FieldKind.TIMESTAMP),
        FieldLayout("counter_hi", 24, FieldKind.COUNTER),
        FieldLayout("counter_lo", 24, FieldKind.COUNTER),
        FieldLayout("entropy", 32, FieldKind.RANDOM),
    ),
    fast_tier="counter_lo",
    slow_tier="counter_hi",
    entropy="entropy",
    counter_wrap=0xFFFFFF,
    slow_tier_carries=True,
)

SCRU128_V1 = IdFormat(
    name="scru128-v1",
    width=26,
    radix=32,
    alphabet=BASE32_ALPHABET,
    fields=(
        FieldLayout("timestamp", 44, FieldKind.TIMESTAMP),
        FieldLayout("counter", 28, FieldKind.COUNTER),
        FieldLayout("per_sec_random", 24, FieldKind.RANDOM),
        FieldLayout("per_gen_random", 32, FieldKind.RANDOM),
    ),
    fast_tier="counter",
    slow_tier="per_sec_random",
    entropy="per_gen_random",
    epoch_ms=1577836800000,
)
