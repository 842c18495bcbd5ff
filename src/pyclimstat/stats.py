"""Diagnostic counters for a single aggregation run."""

from __future__ import annotations

import dataclasses
from collections import Counter


@dataclasses.dataclass
class RunStats:
    """Cumulative counts for one :func:`pyclimstat.engine.process` call."""

    streams_opened: int = 0
    failed_streams: list[str] = dataclasses.field(default_factory=list)
    lines_read: int = 0
    records_folded: int = 0
    malformed_lines: int = 0
    rejected_lines: int = 0
    # Field name -> number of values read leniently because they did not parse
    coerced_fields: Counter[str] = dataclasses.field(default_factory=Counter)

    @property
    def streams_failed(self) -> int:
        return len(self.failed_streams)

    @property
    def skipped_lines(self) -> int:
        return self.malformed_lines + self.rejected_lines

    @property
    def total_coerced(self) -> int:
        return sum(self.coerced_fields.values())

    def merge(self, other: RunStats) -> None:
        """Add all counters from *other* into self."""
        self.streams_opened += other.streams_opened
        self.failed_streams.extend(other.failed_streams)
        self.lines_read += other.lines_read
        self.records_folded += other.records_folded
        self.malformed_lines += other.malformed_lines
        self.rejected_lines += other.rejected_lines
        self.coerced_fields.update(other.coerced_fields)

    def format_summary(self) -> list[str]:
        """Return a list of lines forming the human-readable run summary."""
        lines = ["--- pyclimstat summary ---"]
        lines.append(f"streams opened:  {self.streams_opened}")
        lines.append(f"streams failed:  {self.streams_failed}")
        lines.append(f"lines read:      {self.lines_read}")
        lines.append(f"records folded:  {self.records_folded}")
        lines.append(f"malformed lines: {self.malformed_lines}")
        lines.append(f"rejected lines:  {self.rejected_lines}")
        if self.coerced_fields:
            detail = ", ".join(f"{name}={count}" for name, count in sorted(self.coerced_fields.items()))
            lines.append(f"coerced fields ({self.total_coerced}): {detail}")
        else:
            lines.append("coerced fields: none")
        return lines
