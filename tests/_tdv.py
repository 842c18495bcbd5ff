"""Builders for TDV test input."""

from __future__ import annotations

from pathlib import Path

# Kelvin readings that convert to round Fahrenheit values.
BOILING_K = 373.15  # 212.0F
FREEZING_K = 273.15  # 32.0F

# 2015-08-03 11:00:00 UTC
AUG_3_2015_11H_MS = 1_438_599_600_000


def tdv_line(
    state: str = "CA",
    timestamp_ms: int | str = AUG_3_2015_11H_MS,
    *,
    geolocation: str = "9prcjqk3yc80",
    humidity: float | str = 50.0,
    snow: float | str = 0.0,
    cloud: float | str = 0.0,
    lightning: float | str = 0.0,
    pressure: float | str = 101325.0,
    kelvin: float | str = FREEZING_K,
) -> str:
    fields = [state, timestamp_ms, geolocation, humidity, snow, cloud, lightning, pressure, kelvin]
    return "\t".join(str(f) for f in fields) + "\n"


def fahrenheit_to_kelvin(fahrenheit: float) -> float:
    return (fahrenheit + 459.67) / 1.8


def write_tdv(path: Path, lines: list[str]) -> Path:
    path.write_text("".join(lines), encoding="utf-8")
    return path
