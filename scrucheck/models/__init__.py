"""
Data models and schemas for scrucheck.

This module contains pure data structures with no business logic.
"""

from dataclasses import dataclass, field as dataclass_field
from typing import Dict, List, Optional, Tuple
from enum import Enum

__all__ = [
    'FieldKind',
    'FieldLayout',
    'IdFormat',
    'Identifier',
    'RejectReason',
    'ValidationOutcome',
    'ReportLine',
    'Report',
]

ID_BITS = 128
MAX_ID_VALUE = (1 << ID_BITS) - 1
LABEL_WIDTH = 56


class FieldKind(Enum):
    """Role of a bit field inside an identifier."""
    TIMESTAMP = "timestamp"
    COUNTER = "counter"
    RANDOM = "random"


@dataclass(frozen=True)
class FieldLayout:
    """A contiguous bit range of an identifier, listed MSB-first in a format."""
    name: str
    width: int
    kind: FieldKind

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1


@dataclass(frozen=True)
class IdFormat:
    """
    Describes one generation of the identifier text format.

    The fields are listed from the most significant bit down and must cover
    all 128 bits exactly once. ``fast_tier``, ``slow_tier`` and ``entropy``
    name the fields the statistics are collected for.
    """
    name: str
    width: int
    radix: int
    alphabet: str
    fields: Tuple[FieldLayout, ...]
    fast_tier: str
    slow_tier: str
    entropy: str
    case_insensitive: bool = True
    counter_wrap: Optional[int] = None   # fast-tier value followed by 0 on carry
    slow_tier_carries: bool = False
    epoch_ms: int = 0
    expected_fast_interval: str = "~1"
    expected_slow_interval: str = "~1000"
    shifts: Tuple[int, ...] = dataclass_field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.alphabet) != self.radix:
            raise ValueError(f"{self.name}: alphabet has {len(self.alphabet)} symbols, radix is {self.radix}")
        if sum(f.width for f in self.fields) != ID_BITS:
            raise ValueError(f"{self.name}: field widths must sum to {ID_BITS} bits")
        if not self.fields or self.fields[0].kind is not FieldKind.TIMESTAMP:
            raise ValueError(f"{self.name}: timestamp must be the most significant field")
        if self.radix ** self.width <= MAX_ID_VALUE:
            raise ValueError(f"{self.name}: {self.width} base-{self.radix} symbols cannot hold {ID_BITS} bits")

        names = [f.name for f in self.fields]
        for role in (self.fast_tier, self.slow_tier, self.entropy):
            if role not in names:
                raise ValueError(f"{self.name}: unknown field {role!r}")

        shifts = []
        remaining = ID_BITS
        for f in self.fields:
            remaining -= f.width
            shifts.append(remaining)
        object.__setattr__(self, 'shifts', tuple(shifts))

    def index_of(self, name: str) -> int:
        for i, f in enumerate(self.fields):
            if f.name == name:
                return i
        raise KeyError(name)

    def layout(self, name: str) -> FieldLayout:
        return self.fields[self.index_of(name)]

    @property
    def counter_indices(self) -> Tuple[int, ...]:
        """Positions of the counter fields, high tier first."""
        return tuple(i for i, f in enumerate(self.fields) if f.kind is FieldKind.COUNTER)

    def unpack(self, value: int) -> Tuple[int, ...]:
        """Split a 128-bit integer into field values by shift and mask."""
        return tuple((value >> shift) & f.mask for f, shift in zip(self.fields, self.shifts))

    def pack(self, **values: int) -> int:
        """Inverse of :meth:`unpack`; omitted fields are zero."""
        unknown = set(values) - {f.name for f in self.fields}
        if unknown:
            raise ValueError(f"{self.name}: unknown fields {sorted(unknown)}")

        result = 0
        for f, shift in zip(self.fields, self.shifts):
            v = values.get(f.name, 0)
            if v < 0 or v > f.mask:
                raise ValueError(f"{f.name}={v} does not fit in {f.width} bits")
            result |= v << shift
        return result


@dataclass(frozen=True)
class Identifier:
    """A decoded identifier: its text, its integer value and its fields in layout order."""
    raw_text: bytes
    raw_int: int
    fields: Tuple[int, ...]

    @property
    def timestamp(self) -> int:
        return self.fields[0]

    def as_dict(self, fmt: IdFormat) -> Dict[str, int]:
        return {f.name: v for f, v in zip(fmt.fields, self.fields)}


class RejectReason(Enum):
    """Why a record was skipped."""
    MALFORMED_TOKEN = "malformed_token"
    STRING_ORDER = "string_order"
    INTEGER_ORDER = "integer_order"
    CLOCK_REGRESSION = "clock_regression"
    COUNTER_NOT_MONOTONIC = "counter_not_monotonic"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of checking one record against the last accepted one."""
    accepted: bool
    reason: Optional[RejectReason] = None
    message: str = ""

    @classmethod
    def ok(cls) -> 'ValidationOutcome':
        return cls(True)

    @classmethod
    def rejected(cls, reason: RejectReason, message: str) -> 'ValidationOutcome':
        return cls(False, reason, message)


@dataclass(frozen=True)
class ReportLine:
    """One row of a report: statistic, expected value, observed value."""
    label: str
    expected: str
    actual: str


@dataclass
class Report:
    """Ordered report rows ready to be formatted."""
    lines: List[ReportLine] = dataclass_field(default_factory=list)

    def add(self, label: str, expected: str, actual: str):
        self.lines.append(ReportLine(label, expected, actual))

    def find(self, label_prefix: str) -> Optional[ReportLine]:
        for line in self.lines:
            if line.label.startswith(label_prefix):
                return line
        return None

    def format(self) -> str:
        rows = [""]
        rows.append(f"{'STAT':<{LABEL_WIDTH}} {'EXPECTED':>8} {'ACTUAL':>12}")
        for line in self.lines:
            rows.append(f"{line.label:<{LABEL_WIDTH}} {line.expected:>8} {line.actual:>12}")
        return "\n".join(rows)
