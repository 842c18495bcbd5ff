"""State layer.

Owns the per-state accumulators. Only the aggregation engine mutates them;
report code reads the finalized table.
"""

from pyclimstat.state.table import AccumulatorTable

__all__ = ["AccumulatorTable"]
