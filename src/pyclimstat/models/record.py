"""Parsed observation record."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pyclimstat.normalize import kelvin_to_fahrenheit, ms_to_seconds


class Record(BaseModel):
    """One TDV line, typed.

    Field order matches the column order of the input files.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    state_code: str = Field(..., description="Grouping key, case as given")
    timestamp_ms: int = Field(..., description="Observation time, ms since epoch")
    geolocation: str = Field(default="", description="Geohash (unused)")
    humidity_pct: float = 0.0
    snow_flag: float = 0.0
    cloud_cover_pct: float = 0.0
    lightning_flag: float = 0.0
    pressure_pa: float = Field(default=0.0, description="Surface pressure (unused)")
    surface_temp_kelvin: float = 0.0
    coerced_fields: tuple[str, ...] = Field(
        default=(),
        description="Numeric fields read from a numeric prefix or as zero",
    )

    @property
    def temperature_f(self) -> float:
        """Surface temperature in degrees Fahrenheit."""
        return kelvin_to_fahrenheit(self.surface_temp_kelvin)

    @property
    def timestamp(self) -> int:
        """Observation time in whole seconds since epoch."""
        return ms_to_seconds(self.timestamp_ms)
