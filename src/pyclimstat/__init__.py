"""pyclimstat - Streaming per-state summaries of NOAA climate observations."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyclimstat")
except PackageNotFoundError:
    __version__ = "0+local"
from pyclimstat.config import ClimateConfig
from pyclimstat.engine import aggregate_lines, aggregate_stream, fold, process
from pyclimstat.exceptions import (
    ClimateConfigError,
    ClimateError,
    EmptyAccumulatorError,
    MalformedRecordError,
    RecordError,
    StreamUnavailableError,
    UnparseableFieldError,
)
from pyclimstat.models import Accumulator, Record, RunningSum
from pyclimstat.normalize import CoercionPolicy
from pyclimstat.parser import parse_line
from pyclimstat.report import StateSummary, render_json, render_text, summarize
from pyclimstat.state import AccumulatorTable
from pyclimstat.stats import RunStats

__all__ = [
    "__version__",
    "Accumulator",
    "AccumulatorTable",
    "ClimateConfig",
    "ClimateConfigError",
    "ClimateError",
    "CoercionPolicy",
    "EmptyAccumulatorError",
    "MalformedRecordError",
    "Record",
    "RecordError",
    "RunStats",
    "RunningSum",
    "StateSummary",
    "StreamUnavailableError",
    "UnparseableFieldError",
    "aggregate_lines",
    "aggregate_stream",
    "fold",
    "parse_line",
    "process",
    "render_json",
    "render_text",
    "summarize",
]
