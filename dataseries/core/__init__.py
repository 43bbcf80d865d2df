# dataseries/core/__init__.py
"""
Core domain objects for dataseries.

This module defines the heterogeneous series model:
- ValueCell: type-erased slot holding one value and its TypeDescriptor
- SeriesIndex: (label, identity key) entry defining one logical position
- DataSeries: label-indexed, re-sortable column of ValueCells
- CellHandle: mutable, invalidation-checked view returned by DataSeries.get_mut

The core layer has no I/O beyond rendering entries as text lines.
"""

from .value_cell import ValueCell, TypeDescriptor
from .series_index import SeriesIndex
from .data_series import DataSeries, CellHandle
from .config import SeriesConfig
from .logging_config import configure_logging, get_logger
from .exceptions import (
    CoreError,
    InvalidLabel,
    ConfigError,
    TypeContractViolation,
    StaleHandle,
)


__all__ = [
    # cells
    "ValueCell",
    "TypeDescriptor",

    # series
    "SeriesIndex",
    "DataSeries",
    "CellHandle",

    # configuration / logging
    "SeriesConfig",
    "configure_logging",
    "get_logger",

    # exceptions
    "CoreError",
    "InvalidLabel",
    "ConfigError",
    "TypeContractViolation",
    "StaleHandle",
]
