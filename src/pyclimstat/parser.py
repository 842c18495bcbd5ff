"""TDV record parser.

Each input line carries nine tab-separated fields::

    CA  1428300000000  9prcjqk3yc80  93.0  0.0  100.0  0.0  95644.0  277.58716

state code, timestamp (ms), geohash, humidity (%), snow (0/1), cloud cover
(%), lightning (0/1), pressure (Pa) and surface temperature (K).
"""

from __future__ import annotations

from pyclimstat.exceptions import MalformedRecordError, UnparseableFieldError
from pyclimstat.models.record import Record
from pyclimstat.normalize import CoercionPolicy, leading_float, leading_int, safe_float, safe_int

FIELD_DELIMITER = "\t"

FIELD_NAMES: tuple[str, ...] = (
    "state_code",
    "timestamp_ms",
    "geolocation",
    "humidity_pct",
    "snow_flag",
    "cloud_cover_pct",
    "lightning_flag",
    "pressure_pa",
    "surface_temp_kelvin",
)

_FLOAT_FIELDS: tuple[str, ...] = (
    "humidity_pct",
    "snow_flag",
    "cloud_cover_pct",
    "lightning_flag",
    "pressure_pa",
    "surface_temp_kelvin",
)


def split_fields(line: str) -> list[str]:
    """Strip the line terminator and split on tabs."""
    return line.rstrip("\r\n").split(FIELD_DELIMITER)


def parse_line(
    line: str,
    *,
    policy: CoercionPolicy = CoercionPolicy.COERCE_TO_ZERO,
    line_number: int | None = None,
) -> Record:
    """Parse one TDV line into a :class:`Record`.

    Raises
    ------
    MalformedRecordError
        Fewer than nine fields (e.g. a trailing empty line). Extra trailing
        fields are ignored.
    UnparseableFieldError
        A numeric field did not parse as a whole and *policy* is ``REJECT``.
        Under ``COERCE_TO_ZERO`` the field is read from its longest numeric
        prefix (``"12abc"`` is ``12``), or as ``0`` when it has none, and its
        name is listed in ``Record.coerced_fields``.
    """
    fields = split_fields(line)
    if len(fields) < len(FIELD_NAMES):
        raise MalformedRecordError(
            f"expected {len(FIELD_NAMES)} fields, got {len(fields)}",
            line_number=line_number,
        )
    raw = dict(zip(FIELD_NAMES, fields, strict=False))
    coerced: list[str] = []

    def _reject(name: str) -> UnparseableFieldError:
        return UnparseableFieldError(
            f"field {name} is not a number: {raw[name]!r}",
            field=name,
            line_number=line_number,
        )

    timestamp_ms = safe_int(raw["timestamp_ms"])
    if timestamp_ms is None:
        if policy == CoercionPolicy.REJECT:
            raise _reject("timestamp_ms")
        coerced.append("timestamp_ms")
        timestamp_ms = leading_int(raw["timestamp_ms"])
        if timestamp_ms is None:
            timestamp_ms = 0

    values: dict[str, float] = {}
    for name in _FLOAT_FIELDS:
        parsed = safe_float(raw[name])
        if parsed is None:
            if policy == CoercionPolicy.REJECT:
                raise _reject(name)
            coerced.append(name)
            parsed = leading_float(raw[name])
            if parsed is None:
                parsed = 0.0
        values[name] = parsed

    return Record(
        state_code=raw["state_code"],
        timestamp_ms=timestamp_ms,
        geolocation=raw["geolocation"],
        coerced_fields=tuple(coerced),
        **values,
    )
