# dataseries/core/value_cell.py
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """
    Runtime record of a stored value's type.

    - type_: exact Python type of the value
    - dtype: numpy dtype, only for numpy.ndarray values
    """
    type_: type
    dtype: np.dtype | None = field(default=None, compare=False)

    @classmethod
    def of(cls, value: Any) -> "TypeDescriptor":
        if isinstance(value, np.ndarray):
            return cls(type_=type(value), dtype=value.dtype)
        return cls(type_=type(value))

    @property
    def name(self) -> str:
        t = self.type_
        if t.__module__ == "builtins":
            base = t.__qualname__
        else:
            base = f"{t.__module__}.{t.__qualname__}"
        if self.dtype is not None:
            return f"{base}[{self.dtype}]"
        return base

    def matches(self, expected: "type | TypeDescriptor") -> bool:
        """Exact match: subclasses and sibling numeric widths do not match."""
        if isinstance(expected, TypeDescriptor):
            if self.type_ is not expected.type_:
                return False
            # a descriptor without dtype accepts any array dtype
            return expected.dtype is None or (self.dtype is not None and self.dtype == expected.dtype)
        return self.type_ is expected

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeDescriptor):
            return NotImplemented
        if self.type_ is not other.type_:
            return False
        # numpy reads a None dtype as float64, so compare None explicitly
        if self.dtype is None or other.dtype is None:
            return self.dtype is other.dtype
        return self.dtype == other.dtype

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True, eq=False)
class ValueCell:
    """Type-erased slot: one value of any type plus the descriptor recorded for it."""

    _value: Any = field(repr=False)
    _descriptor: TypeDescriptor

    @classmethod
    def wrap(cls, value: Any) -> "ValueCell":
        return cls(value, TypeDescriptor.of(value))

    @property
    def value(self) -> Any:
        return self._value

    @property
    def descriptor(self) -> TypeDescriptor:
        return self._descriptor

    @property
    def type_name(self) -> str:
        return self._descriptor.name

    def downcast(self, expected: type | TypeDescriptor) -> Any | None:
        """Return the value if it is exactly of `expected`, else None."""
        if self._descriptor.matches(expected):
            return self._value
        return None

    def format_value(self) -> str:
        v = self._value
        if isinstance(v, np.ndarray):
            # keep arrays on a single line
            return np.array2string(v, separator=", ", max_line_width=sys.maxsize)
        return repr(v)

    def _replace(self, value: Any) -> None:
        # Only DataSeries writes through here, after checking the type contract.
        self._value = value
        self._descriptor = TypeDescriptor.of(value)

    def __repr__(self) -> str:
        return f"ValueCell({self.type_name}: {self.format_value()})"
