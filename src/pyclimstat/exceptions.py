"""Custom exception hierarchy for pyclimstat."""

from __future__ import annotations


class ClimateError(Exception):
    """Base exception for all pyclimstat errors."""


class ClimateConfigError(ClimateError):
    """Invalid or missing configuration."""


class StreamUnavailableError(ClimateError):
    """An input stream could not be opened or read.

    The engine reports the failure and moves on to the next stream; it is
    never fatal to the run.
    """

    def __init__(self, message: str, *, path: str = "", reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(message)


class RecordError(ClimateError):
    """A single input line could not be turned into a record."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        self.line_number = line_number
        super().__init__(message)


class MalformedRecordError(RecordError):
    """Line has fewer than the nine tab-separated fields."""


class UnparseableFieldError(RecordError):
    """Numeric field could not be parsed under the ``reject`` policy."""

    def __init__(
        self,
        message: str,
        *,
        field: str = "",
        line_number: int | None = None,
    ) -> None:
        self.field = field
        super().__init__(message, line_number=line_number)


class EmptyAccumulatorError(ClimateError):
    """Averages were requested for an accumulator with no folded records."""
