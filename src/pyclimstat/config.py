"""Run configuration for pyclimstat."""

from __future__ import annotations

import dataclasses
import logging
import os
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pyclimstat.exceptions import ClimateConfigError
from pyclimstat.normalize import CoercionPolicy

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclasses.dataclass(frozen=True)
class ClimateConfig:
    """Aggregation and reporting configuration.

    Parameters
    ----------
    coercion_policy : CoercionPolicy
        How numeric fields that do not parse are handled. The default
        ``coerce-to-zero`` reads them as ``0``; ``reject`` skips the line.
    encoding : str
        Text encoding of the input files.
    errors : str
        Decode error handler passed to :func:`open`.
    workers : int
        Number of processes used to aggregate input files. ``1`` processes
        files sequentially in the calling process.
    time_zone : str
        IANA time zone used to render extremum timestamps in the text report.
    log_level : str
        Level name used by the command line entry point.
    """

    coercion_policy: CoercionPolicy = CoercionPolicy.COERCE_TO_ZERO
    encoding: str = "utf-8"
    errors: str = "replace"
    workers: int = 1
    time_zone: str = "UTC"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "coercion_policy", CoercionPolicy(self.coercion_policy))
        except ValueError as exc:
            choices = ", ".join(p.value for p in CoercionPolicy)
            raise ClimateConfigError(
                f"unknown coercion policy {self.coercion_policy!r} (expected one of: {choices})"
            ) from exc
        if self.workers < 1:
            raise ClimateConfigError(f"workers must be >= 1, got {self.workers}")
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise ClimateConfigError(f"unknown log level {self.log_level!r}")
        object.__setattr__(self, "log_level", level)
        try:
            ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ClimateConfigError(f"unknown time zone {self.time_zone!r}") from exc

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, **overrides: Any) -> ClimateConfig:
        """Create configuration from ``CLIMATE_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CLIMATE_COERCION_POLICY": "coercion_policy",
            "CLIMATE_ENCODING": "encoding",
            "CLIMATE_DECODE_ERRORS": "errors",
            "CLIMATE_TIME_ZONE": "time_zone",
            "CLIMATE_LOG_LEVEL": "log_level",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # workers is numeric, handle separately
        workers_env = env.get("CLIMATE_WORKERS")
        if workers_env is not None and "workers" not in overrides:
            try:
                config_kwargs["workers"] = int(workers_env)
            except ValueError as exc:
                raise ClimateConfigError(f"CLIMATE_WORKERS must be an integer, got {workers_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
