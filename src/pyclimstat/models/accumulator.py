"""Per-state running aggregate."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

from pyclimstat.models.running_sum import RunningSum


class Accumulator(BaseModel):
    """Mutable running aggregate for one state code.

    Extrema start outside any plausible reading so the first folded record
    always sets both. Extremum timestamps are whole seconds since epoch.
    ``lightning_count`` and ``snow_cover_count`` are sums of the raw flag
    values, not guarded 0/1 increments.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(..., frozen=True)
    record_count: int = 0
    temperature_sum: RunningSum = Field(default_factory=RunningSum)
    humidity_sum: RunningSum = Field(default_factory=RunningSum)
    cloud_cover_sum: RunningSum = Field(default_factory=RunningSum)
    max_temperature_f: float = -math.inf
    max_temperature_at: int | None = None
    min_temperature_f: float = math.inf
    min_temperature_at: int | None = None
    lightning_count: float = 0.0
    snow_cover_count: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.record_count == 0

    def merge(self, other: Accumulator) -> None:
        """Fold a later partial aggregate for the same code into this one.

        *other* is treated as coming after ``self`` in processing order, so
        on equal extrema the values already held here are kept.
        """
        if other.code != self.code:
            raise ValueError(f"cannot merge accumulator {other.code!r} into {self.code!r}")
        if other.is_empty:
            return

        self.record_count += other.record_count
        self.temperature_sum.merge(other.temperature_sum)
        self.humidity_sum.merge(other.humidity_sum)
        self.cloud_cover_sum.merge(other.cloud_cover_sum)
        self.lightning_count += other.lightning_count
        self.snow_cover_count += other.snow_cover_count

        if other.max_temperature_f > self.max_temperature_f:
            self.max_temperature_f = other.max_temperature_f
            self.max_temperature_at = other.max_temperature_at
        if other.min_temperature_f < self.min_temperature_f:
            self.min_temperature_f = other.min_temperature_f
            self.min_temperature_at = other.min_temperature_at
