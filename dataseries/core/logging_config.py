# dataseries/core/logging_config.py
"""Structured logging configuration.

Loggers render through structlog with an ISO timestamp, the log level and
either a JSON or a console renderer, filtered at the configured level.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from .config import SeriesConfig


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # resolve sys.stderr per call so redirected streams are honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(config: SeriesConfig | None = None) -> SeriesConfig:
    """
    Apply `config` (default: read from the environment) to structlog.

    Returns the config that is now active.
    """
    cfg = config if config is not None else SeriesConfig.from_env()
    renderer: Any
    if cfg.log_json:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(cfg.log_level)
        ),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    return cfg


def get_logger(name: str) -> Any:
    """
    Return a structlog logger for `name`.

    Nothing is configured here; the host application (or configure_logging)
    owns the structlog setup.
    """
    return structlog.get_logger(name)
