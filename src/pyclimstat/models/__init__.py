"""Data models for pyclimstat."""

from pyclimstat.models.accumulator import Accumulator
from pyclimstat.models.record import Record
from pyclimstat.models.running_sum import RunningSum

__all__ = [
    "Accumulator",
    "Record",
    "RunningSum",
]
