"""Command line entry point: aggregates TDV files and prints the report."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from pyclimstat.config import ClimateConfig
from pyclimstat.engine import process
from pyclimstat.exceptions import ClimateConfigError, StreamUnavailableError
from pyclimstat.normalize import CoercionPolicy
from pyclimstat.report import render_json, render_text
from pyclimstat.stats import RunStats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyclimstat",
        description="Summarize NOAA tab-delimited climate observations per state.",
    )
    parser.add_argument("files", nargs="*", metavar="tdv_file", help="TDV files to analyze")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Skip lines with non-numeric values instead of reading them as zero",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: 1)")
    parser.add_argument("--time-zone", default=None, help="IANA zone for timestamps (default: UTC)")
    parser.add_argument("--stats", action="store_true", help="Print run statistics to stderr")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.files:
        parser.print_usage(sys.stderr)
        return 1

    overrides: dict[str, object] = {}
    if args.strict:
        overrides["coercion_policy"] = CoercionPolicy.REJECT
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.time_zone is not None:
        overrides["time_zone"] = args.time_zone
    if args.verbose:
        overrides["log_level"] = "DEBUG" if args.verbose > 1 else "INFO"

    try:
        config = ClimateConfig.from_env(**overrides)
    except ClimateConfigError as exc:
        print(f"pyclimstat: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level_number,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Keep stdout clean for JSON consumers.
    out = sys.stderr if args.json else sys.stdout

    def _on_open(path: str) -> None:
        print(f"Opening file: {path}", file=out)

    def _on_error(exc: StreamUnavailableError) -> None:
        print(f"Error: {exc}", file=out)

    run_stats = RunStats()
    table = process(
        args.files,
        config=config,
        stats=run_stats,
        on_stream_open=_on_open,
        on_stream_error=_on_error,
    )

    if args.json:
        print(render_json(table))
    else:
        sys.stdout.write(render_text(table, tz=config.tzinfo))

    if args.stats:
        for line in run_stats.format_summary():
            print(line, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
