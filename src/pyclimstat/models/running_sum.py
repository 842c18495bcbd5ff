"""Compensated running sum.

Averages are computed from sums over every record of a state, which for a
year of hourly observations means tens of thousands of small float
additions. A plain float accumulator drifts; this one carries the lost
low-order bits separately (Neumaier's variant of Kahan summation).
"""

from __future__ import annotations

import dataclasses
import math


@dataclasses.dataclass(slots=True)
class RunningSum:
    """Float accumulator with a compensation term."""

    total: float = 0.0
    compensation: float = 0.0

    def add(self, value: float) -> None:
        total = self.total + value
        if not math.isfinite(total):
            # Overflow or an infinite addend; the compensation is meaningless.
            self.total = total
            return
        if abs(self.total) >= abs(value):
            self.compensation += (self.total - total) + value
        else:
            self.compensation += (value - total) + self.total
        self.total = total

    def merge(self, other: RunningSum) -> None:
        """Fold another running sum into this one."""
        self.add(other.total)
        self.add(other.compensation)

    @property
    def value(self) -> float:
        if not math.isfinite(self.total):
            return self.total
        return self.total + self.compensation

    def __float__(self) -> float:
        return self.value
