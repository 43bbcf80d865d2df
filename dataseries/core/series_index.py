# dataseries/core/series_index.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class SeriesIndex:
    """One logical position: the user label and the identity key of its cell."""
    label: Any
    key: int
