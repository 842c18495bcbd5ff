"""Report extraction and rendering.

Reads a finalized :class:`AccumulatorTable` and derives the per-state values
shown to the operator. Nothing here mutates accumulators.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, tzinfo
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pyclimstat.exceptions import EmptyAccumulatorError
from pyclimstat.models.accumulator import Accumulator
from pyclimstat.state.table import AccumulatorTable


class StateSummary(BaseModel):
    """Derived, read-only view of one state's accumulator."""

    model_config = ConfigDict(frozen=True)

    code: str
    record_count: int
    average_humidity: float = Field(..., description="Percent")
    average_temperature_f: float
    average_cloud_cover: float = Field(..., description="Percent")
    max_temperature_f: float
    max_temperature_at: int = Field(..., description="Epoch seconds")
    min_temperature_f: float
    min_temperature_at: int = Field(..., description="Epoch seconds")
    lightning_strikes: int
    snow_cover_records: int

    @classmethod
    def from_accumulator(cls, accumulator: Accumulator) -> StateSummary:
        """Compute averages from *accumulator*.

        Raises
        ------
        EmptyAccumulatorError
            The accumulator has no folded records.
        """
        count = accumulator.record_count
        if count == 0 or accumulator.max_temperature_at is None or accumulator.min_temperature_at is None:
            raise EmptyAccumulatorError(f"no records folded for state {accumulator.code!r}")
        return cls(
            code=accumulator.code,
            record_count=count,
            average_humidity=accumulator.humidity_sum.value / count,
            average_temperature_f=accumulator.temperature_sum.value / count,
            average_cloud_cover=accumulator.cloud_cover_sum.value / count,
            max_temperature_f=accumulator.max_temperature_f,
            max_temperature_at=accumulator.max_temperature_at,
            min_temperature_f=accumulator.min_temperature_f,
            min_temperature_at=accumulator.min_temperature_at,
            # Flag columns are summed as floats; counts are their truncation.
            lightning_strikes=int(accumulator.lightning_count),
            snow_cover_records=int(accumulator.snow_cover_count),
        )


def summarize(table: AccumulatorTable) -> list[StateSummary]:
    """Summaries for every state with at least one record, in table order."""
    return [
        StateSummary.from_accumulator(accumulator)
        for _, accumulator in table.iterate()
        if not accumulator.is_empty
    ]


def _ctime(timestamp: int, tz: tzinfo) -> str:
    """ctime-style rendering; raw epoch seconds when outside datetime's range."""
    try:
        return datetime.fromtimestamp(timestamp, tz=tz).ctime()
    except (ValueError, OverflowError, OSError):
        return str(timestamp)


def format_summary(summary: StateSummary, *, tz: tzinfo = UTC) -> list[str]:
    """Return the report block lines for one state."""
    return [
        f" -- State: {summary.code} --",
        f"Number of Records: {summary.record_count}",
        f"Average Humidity: {summary.average_humidity:.1f}%",
        f"Average Temperature: {summary.average_temperature_f:.1f}F",
        f"Max Temperature: {summary.max_temperature_f:.1f}F",
        f"Max Temperature on: {_ctime(summary.max_temperature_at, tz)}",
        f"Min Temperature: {summary.min_temperature_f:.1f}F",
        f"Min Temperature on: {_ctime(summary.min_temperature_at, tz)}",
        f"Lightning Strikes: {summary.lightning_strikes}",
        f"Records with Snow Cover: {summary.snow_cover_records}",
        f"Average Cloud Cover: {summary.average_cloud_cover:.1f}%",
    ]


def render_text(table: AccumulatorTable, *, tz: tzinfo = UTC) -> str:
    """Render the plain-text report: the list of states, then one block each."""
    summaries = summarize(table)
    lines = ["States found:", " ".join(s.code for s in summaries)]
    for summary in summaries:
        lines.extend(format_summary(summary, tz=tz))
    return "\n".join(lines) + "\n"


def render_json(table: AccumulatorTable, *, indent: int | None = 2) -> str:
    """Render the summaries as a JSON document, one entry per state in table order."""
    payload: dict[str, Any] = {
        "states": [summary.model_dump(mode="json") for summary in summarize(table)],
    }
    return json.dumps(payload, indent=indent)
