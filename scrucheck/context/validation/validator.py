"""
Ordering checks between consecutive identifiers.

Each record is compared with the last accepted one at three granularities:
text, integer and structured fields. The first failing check wins.
"""

from typing import Optional

from scrucheck.models import IdFormat, Identifier, RejectReason, ValidationOutcome
from scrucheck.protocols import ValidatorProtocol


class OrderValidator(ValidatorProtocol):
    """Checks the monotonic ordering guarantees of one IdFormat."""

    def __init__(self, fmt: IdFormat):
        self.fmt = fmt
        self._counters = fmt.counter_indices
        names = [fmt.fields[i].name for i in self._counters]
        if len(names) > 1:
            self._counter_message = f"{'/'.join(names)} not monotonically ordered within same timestamp"
        else:
            self._counter_message = "counter not monotonically ordered within same timestamp"

    def validate(self, prev: Optional[Identifier], curr: Identifier) -> ValidationOutcome:
        """
        Check curr against the last accepted identifier.

        Args:
            prev: Last accepted identifier (None before the first acceptance)
            curr: Decoded identifier to check

        Returns:
            ValidationOutcome.ok() or a rejection with its reason
        """
        if prev is None:
            return ValidationOutcome.ok()

        if curr.raw_text <= prev.raw_text:
            return ValidationOutcome.rejected(
                RejectReason.STRING_ORDER, "string representation not monotonically ordered")
        if curr.raw_int <= prev.raw_int:
            return ValidationOutcome.rejected(
                RejectReason.INTEGER_ORDER, "integer representation not monotonically ordered")
        if curr.timestamp < prev.timestamp:
            return ValidationOutcome.rejected(RejectReason.CLOCK_REGRESSION, "clock went backwards")

        if curr.timestamp == prev.timestamp:
            # tuple comparison: high tier first, low tier breaks ties
            curr_counters = tuple(curr.fields[i] for i in self._counters)
            prev_counters = tuple(prev.fields[i] for i in self._counters)
            if curr_counters <= prev_counters:
                return ValidationOutcome.rejected(RejectReason.COUNTER_NOT_MONOTONIC, self._counter_message)

        return ValidationOutcome.ok()


def validate(prev: Optional[Identifier], curr: Identifier, fmt: IdFormat) -> ValidationOutcome:
    """Functional form of OrderValidator.validate"""
    return OrderValidator(fmt).validate(prev, curr)
