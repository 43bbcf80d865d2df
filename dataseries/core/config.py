# dataseries/core/config.py
"""Runtime configuration for dataseries.

All environment variable parsing happens here; other modules consume the
typed SeriesConfig instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from .exceptions import ConfigError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class SeriesConfig:
    """
    Validated runtime configuration.

    - log_level: minimum level emitted by the package loggers
    - log_json : render log records as JSON (False: console renderer)
    """
    log_level: str = "WARNING"
    log_json: bool = True

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{self.log_level}'."
            )

    @classmethod
    def from_env(cls) -> "SeriesConfig":
        """
        Build config from process environment variables.

        Raises ConfigError if a value cannot be parsed.
        """
        level = os.getenv("DATASERIES_LOG_LEVEL", "WARNING").strip().upper()
        log_json = _parse_flag("DATASERIES_LOG_JSON", os.getenv("DATASERIES_LOG_JSON", "1"))
        return cls(log_level=level, log_json=log_json)


def _parse_flag(name: str, raw_value: str) -> bool:
    value = raw_value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(
        f"Invalid {name} value: expected a boolean flag (1/0, true/false), got '{raw_value}'."
    )
