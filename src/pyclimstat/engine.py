"""Streaming aggregation engine.

Drives the record parser over input streams and folds every parsed record
into the accumulator of its state code. All streams of a run share one
:class:`AccumulatorTable`, so records for the same state merge across files.
"""

from __future__ import annotations

import dataclasses
import logging
import multiprocessing as mp
import os
from collections.abc import Callable, Iterable, Sequence

from pyclimstat.config import ClimateConfig
from pyclimstat.exceptions import MalformedRecordError, StreamUnavailableError, UnparseableFieldError
from pyclimstat.models.accumulator import Accumulator
from pyclimstat.models.record import Record
from pyclimstat.normalize import CoercionPolicy
from pyclimstat.parser import parse_line
from pyclimstat.state.table import AccumulatorTable
from pyclimstat.stats import RunStats

_logger = logging.getLogger(__name__)

StreamPath = str | os.PathLike[str]


def fold(accumulator: Accumulator, record: Record) -> None:
    """Incorporate one record into *accumulator*.

    Extrema move only on a strictly greater (max) or strictly smaller (min)
    temperature, so the first record reaching an extreme keeps its timestamp.
    """
    temperature = record.temperature_f
    timestamp = record.timestamp

    accumulator.record_count += 1
    accumulator.humidity_sum.add(record.humidity_pct)
    accumulator.cloud_cover_sum.add(record.cloud_cover_pct)
    accumulator.temperature_sum.add(temperature)
    accumulator.snow_cover_count += record.snow_flag
    accumulator.lightning_count += record.lightning_flag

    if temperature > accumulator.max_temperature_f:
        accumulator.max_temperature_f = temperature
        accumulator.max_temperature_at = timestamp
    if temperature < accumulator.min_temperature_f:
        accumulator.min_temperature_f = temperature
        accumulator.min_temperature_at = timestamp


def aggregate_lines(
    lines: Iterable[str],
    table: AccumulatorTable,
    *,
    policy: CoercionPolicy = CoercionPolicy.COERCE_TO_ZERO,
    stats: RunStats | None = None,
) -> RunStats:
    """Fold every parseable line of *lines* into *table*.

    Malformed and rejected lines are skipped and counted; they never abort
    the run. Returns the (possibly newly created) run statistics.
    """
    if stats is None:
        stats = RunStats()

    for line_number, line in enumerate(lines, start=1):
        stats.lines_read += 1
        try:
            record = parse_line(line, policy=policy, line_number=line_number)
        except MalformedRecordError as exc:
            stats.malformed_lines += 1
            _logger.debug("Skipping malformed line %d: %s", line_number, exc)
            continue
        except UnparseableFieldError as exc:
            stats.rejected_lines += 1
            _logger.debug("Rejecting line %d: %s", line_number, exc)
            continue

        if record.coerced_fields:
            stats.coerced_fields.update(record.coerced_fields)
        fold(table.get_or_create(record.state_code), record)
        stats.records_folded += 1

    return stats


def _stream_unavailable(path: str, exc: OSError | UnicodeDecodeError) -> StreamUnavailableError:
    if isinstance(exc, FileNotFoundError):
        return StreamUnavailableError(f'File "{path}" does not exist.', path=path, reason="does not exist")
    if isinstance(exc, OSError) and exc.strerror:
        reason = exc.strerror
    else:
        reason = str(exc)
    return StreamUnavailableError(f'File "{path}" could not be read ({reason}).', path=path, reason=reason)


def aggregate_stream(
    path: StreamPath,
    table: AccumulatorTable,
    *,
    config: ClimateConfig | None = None,
    stats: RunStats | None = None,
) -> RunStats:
    """Open *path* and fold its lines into *table*.

    Raises
    ------
    StreamUnavailableError
        The file could not be opened or a read failed part way through.
        Records read before a mid-stream failure stay folded.
    """
    if config is None:
        config = ClimateConfig()
    if stats is None:
        stats = RunStats()
    name = os.fspath(path)

    try:
        fh = open(name, encoding=config.encoding, errors=config.errors)  # noqa: SIM115
    except OSError as exc:
        raise _stream_unavailable(name, exc) from exc

    stats.streams_opened += 1
    with fh:
        try:
            aggregate_lines(fh, table, policy=config.coercion_policy, stats=stats)
        except (OSError, UnicodeDecodeError) as exc:
            raise _stream_unavailable(name, exc) from exc
    return stats


@dataclasses.dataclass
class _PartialResult:
    path: str
    table: AccumulatorTable
    stats: RunStats
    error_reason: str | None = None
    error_message: str | None = None


def _aggregate_partial(path: str, config: ClimateConfig) -> _PartialResult:
    """Aggregate one stream into its own table (worker process entry point)."""
    table = AccumulatorTable()
    stats = RunStats()
    try:
        aggregate_stream(path, table, config=config, stats=stats)
    except StreamUnavailableError as exc:
        return _PartialResult(path, table, stats, error_reason=exc.reason, error_message=str(exc))
    return _PartialResult(path, table, stats)


def process(
    stream_paths: Sequence[StreamPath],
    *,
    config: ClimateConfig | None = None,
    stats: RunStats | None = None,
    on_stream_open: Callable[[str], None] | None = None,
    on_stream_error: Callable[[StreamUnavailableError], None] | None = None,
) -> AccumulatorTable:
    """Aggregate every stream in *stream_paths* into one table.

    Streams are folded in argument order. A stream that cannot be opened is
    reported (logged, counted in *stats*, passed to *on_stream_error*) and
    skipped. With ``config.workers > 1`` each stream is aggregated in a
    separate process and the partial tables are merged in argument order,
    which yields the same result as sequential processing. In that mode
    every path is passed to *on_stream_open* before the pool starts, and
    stream errors are reported once all workers have finished.
    """
    if config is None:
        config = ClimateConfig()
    if stats is None:
        stats = RunStats()
    paths = [os.fspath(p) for p in stream_paths]

    def _report_error(exc: StreamUnavailableError) -> None:
        stats.failed_streams.append(exc.path)
        if on_stream_error is None:
            _logger.error("Skipping stream: %s", exc)
        else:
            _logger.debug("Skipping stream: %s", exc)
            on_stream_error(exc)

    table = AccumulatorTable()
    if config.workers > 1 and len(paths) > 1:
        num_workers = min(config.workers, len(paths))
        _logger.debug("Aggregating %d streams with %d workers", len(paths), num_workers)
        if on_stream_open is not None:
            for path in paths:
                on_stream_open(path)
        with mp.Pool(num_workers) as pool:
            results = pool.starmap(_aggregate_partial, [(path, config) for path in paths])

        for result in results:
            stats.merge(result.stats)
            table.merge(result.table)
            if result.error_message is not None:
                _report_error(
                    StreamUnavailableError(
                        result.error_message,
                        path=result.path,
                        reason=result.error_reason or "",
                    )
                )
    else:
        for path in paths:
            if on_stream_open is not None:
                on_stream_open(path)
            _logger.debug("Opening file: %s", path)
            try:
                aggregate_stream(path, table, config=config, stats=stats)
            except StreamUnavailableError as exc:
                _report_error(exc)

    if stats.skipped_lines:
        _logger.info(
            "Skipped %d malformed and %d rejected lines",
            stats.malformed_lines,
            stats.rejected_lines,
        )
    if stats.total_coerced:
        _logger.warning("%d numeric fields did not parse and were read leniently", stats.total_coerced)
    _logger.debug("Aggregated %d records for %d states", stats.records_folded, len(table))
    return table
