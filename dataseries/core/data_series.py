# dataseries/core/data_series.py
from __future__ import annotations

import operator
import sys
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, TextIO

from .exceptions import InvalidLabel, StaleHandle, TypeContractViolation
from .logging_config import get_logger
from .series_index import SeriesIndex
from .value_cell import TypeDescriptor, ValueCell


_LOGGER = get_logger(__name__)

_by_label = operator.attrgetter("label")

# types with no total order even though some define `<`
_UNORDERED_TYPES = (dict, set, frozenset, complex)


def _orderable_type(t: type) -> bool:
    if getattr(t, "__lt__", None) is object.__lt__:
        return False
    return not issubclass(t, _UNORDERED_TYPES)


def _expected_name(expected: type | TypeDescriptor) -> str:
    if isinstance(expected, TypeDescriptor):
        return expected.name
    return TypeDescriptor(type_=expected).name


@dataclass(slots=True, eq=False)
class DataSeries:
    """
    Single column of heterogeneously typed values, indexed by label.

    Storage layout:
    - data     : identity key -> ValueCell (never indexed by position)
    - type_map : identity key -> TypeDescriptor recorded for that cell
    - index    : ordered (label, key) entries; list position is the logical index

    Keys are allocated from a counter that only grows, so a key is never
    reused after removal. sort() permutes `index` only; keys, cells and the
    counter are untouched.

    Positional access follows a simple rule: out-of-range positions and type
    mismatches both yield None. Writing a value of another type into an
    existing slot raises TypeContractViolation.
    """
    label_type: type | None = None

    _data: dict[int, ValueCell] = field(default_factory=dict, init=False, repr=False)
    _type_map: dict[int, TypeDescriptor] = field(default_factory=dict, init=False, repr=False)
    _index: list[SeriesIndex] = field(default_factory=list, init=False, repr=False)
    _next_key: int = field(default=0, init=False, repr=False)
    # bumped on every structural change; used to invalidate CellHandles
    _generation: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.label_type is not None and not isinstance(self.label_type, type):
            raise InvalidLabel("DataSeries.label_type must be a type or None.")
        if self.label_type is not None and not _orderable_type(self.label_type):
            raise InvalidLabel(
                f"DataSeries.label_type {self.label_type.__name__} has no total order."
            )

    # ---- read-only views ----
    @property
    def data(self) -> Mapping[int, ValueCell]:
        return MappingProxyType(self._data)

    @property
    def type_map(self) -> Mapping[int, TypeDescriptor]:
        return MappingProxyType(self._type_map)

    @property
    def index(self) -> tuple[SeriesIndex, ...]:
        return tuple(self._index)

    @property
    def next_key_value(self) -> int:
        return self._next_key

    def __len__(self) -> int:
        return len(self._index)

    def labels(self) -> list[Any]:
        return [entry.label for entry in self._index]

    def items(self) -> Iterator[tuple[Any, ValueCell]]:
        """(label, cell) pairs in logical order."""
        for entry in self._index:
            yield entry.label, self._data[entry.key]

    def key_at(self, i: int) -> int | None:
        """Identity key at logical position `i`, or None if out of range."""
        i = operator.index(i)
        if 0 <= i < len(self._index):
            return self._index[i].key
        return None

    def label_at(self, i: int) -> Any | None:
        key = self.key_at(i)
        return None if key is None else self._index[i].label

    # ---- insertion ----
    def push(self, label: Any, value: Any) -> int:
        """
        Append `value` under `label` and return the identity key allocated for it.

        The first pushed label fixes `label_type` if it was not given.
        """
        self._check_label(label)
        if self.label_type is None:
            self.label_type = type(label)

        key = self._next_key
        cell = ValueCell.wrap(value)
        self._index.append(SeriesIndex(label=label, key=key))
        self._data[key] = cell
        self._type_map[key] = cell.descriptor
        self._next_key += 1
        self._generation += 1

        _LOGGER.debug("series_push", label=label, key=key, type_name=cell.type_name)
        return key

    def _check_label(self, label: Any) -> None:
        if self.label_type is not None:
            if not isinstance(label, self.label_type):
                raise InvalidLabel(
                    f"Label {label!r} is {type(label).__name__}, "
                    f"series labels are {self.label_type.__name__}."
                )
        elif not _orderable_type(type(label)):
            raise InvalidLabel(f"Labels must be orderable, got {type(label).__name__}.")

        # labels must compare with themselves and with the labels already stored
        try:
            label < label
            if self._index:
                label < self._index[-1].label
                self._index[-1].label < label
        except TypeError as e:
            raise InvalidLabel(
                f"Label {label!r} cannot be ordered against the labels of this series."
            ) from e

    # ---- typed access ----
    def get(self, i: int, expected: type | TypeDescriptor) -> Any | None:
        """Value at position `i` if it is exactly of type `expected`, else None."""
        key = self.key_at(i)
        if key is None:
            return None
        return self._data[key].downcast(expected)

    def get_mut(self, i: int, expected: type | TypeDescriptor) -> "CellHandle | None":
        """
        Mutable handle on the value at position `i`, or None (same rule as get()).

        The handle is valid until the next structural change of this series.
        """
        key = self.key_at(i)
        if key is None or not self._data[key].descriptor.matches(expected):
            return None
        return CellHandle(self, key, expected, self._generation)

    def update(
        self,
        i: int,
        new_value: Any,
        as_type: type | TypeDescriptor | None = None,
    ) -> bool:
        """
        Overwrite the value at position `i` with `new_value`.

        as_type defaults to type(new_value). Both the stored value and
        `new_value` must be exactly of that type, otherwise
        TypeContractViolation is raised and the slot is left as it was.

        Returns False if `i` is out of range (nothing updated).
        """
        key = self.key_at(i)
        if key is None:
            return False

        expected = type(new_value) if as_type is None else as_type
        cell = self._data[key]
        if not (cell.descriptor.matches(expected) and TypeDescriptor.of(new_value).matches(expected)):
            _LOGGER.error(
                "series_update_type_violation",
                position=i,
                key=key,
                stored_type=cell.type_name,
                requested_type=_expected_name(expected),
                value_type=TypeDescriptor.of(new_value).name,
            )
            raise TypeContractViolation(
                f"Position {i} holds {cell.type_name}; cannot update it with "
                f"{TypeDescriptor.of(new_value).name} as {_expected_name(expected)}."
            )

        cell._replace(new_value)
        self._type_map[key] = cell.descriptor
        self._generation += 1

        _LOGGER.debug("series_update", position=i, key=key, type_name=cell.type_name)
        return True

    # ---- removal ----
    def remove(self, i: int) -> ValueCell | None:
        """
        Remove the entry at position `i` and return its (still type-erased) cell.

        Later positions shift down by one. Returns None if `i` is out of range.
        """
        key = self.key_at(i)
        if key is None:
            return None

        del self._index[i]
        del self._type_map[key]
        cell = self._data.pop(key)
        self._generation += 1

        _LOGGER.debug("series_remove", position=i, key=key, type_name=cell.type_name)
        return cell

    def clear(self) -> None:
        """Drop all entries. The key counter keeps its value."""
        self._index.clear()
        self._data.clear()
        self._type_map.clear()
        self._generation += 1

    # ---- ordering ----
    def sort(self, *, reverse: bool = False) -> None:
        """Reorder logical positions by label (stable on equal labels)."""
        self._index.sort(key=_by_label, reverse=reverse)
        self._generation += 1
        _LOGGER.debug("series_sort", n=len(self._index), reverse=reverse)

    # ---- rendering ----
    def lines(self, *, reverse: bool = False) -> list[str]:
        """
        One text line per entry: `<label repr>  <type name>: <value repr>`.

        reverse=False: current logical order
        reverse=True : descending by label, without touching the stored order
        """
        entries = sorted(self._index, key=_by_label, reverse=True) if reverse else self._index
        out: list[str] = []
        for entry in entries:
            cell = self._data[entry.key]
            descriptor = self._type_map[entry.key]
            out.append(f"{entry.label!r}  {descriptor.name}: {cell.format_value()}")
        return out

    def print(self, file: TextIO | None = None) -> None:
        stream = sys.stdout if file is None else file
        for line in self.lines():
            stream.write(line + "\n")

    def print_reverse(self, file: TextIO | None = None) -> None:
        stream = sys.stdout if file is None else file
        for line in self.lines(reverse=True):
            stream.write(line + "\n")

    def __repr__(self) -> str:
        label_type = None if self.label_type is None else self.label_type.__name__
        return f"DataSeries(label_type={label_type}, n={len(self)}, next_key={self._next_key})"


@dataclass(slots=True, eq=False)
class CellHandle:
    """
    Mutable view on one cell of a DataSeries, as returned by DataSeries.get_mut().

    Reading or writing `value` after the series changed shape (push, remove,
    sort, update, clear) raises StaleHandle. Writes must keep the exact type
    the handle was opened with.
    """
    _series: DataSeries = field(repr=False)
    _key: int
    _expected: type | TypeDescriptor
    _generation: int = field(repr=False)

    def _cell(self) -> ValueCell:
        if self._generation != self._series._generation:
            _LOGGER.warning("series_stale_handle", key=self._key)
            raise StaleHandle(
                f"Handle on key {self._key} was invalidated by a later change of its series."
            )
        return self._series._data[self._key]

    @property
    def key(self) -> int:
        return self._key

    @property
    def value(self) -> Any:
        return self._cell().value

    @value.setter
    def value(self, new_value: Any) -> None:
        cell = self._cell()
        if not TypeDescriptor.of(new_value).matches(self._expected):
            raise TypeContractViolation(
                f"Handle expects {_expected_name(self._expected)}, "
                f"got {TypeDescriptor.of(new_value).name}."
            )
        cell._replace(new_value)
        self._series._type_map[self._key] = cell.descriptor

    def release(self) -> None:
        """Invalidate this handle."""
        self._generation = -1

    def __enter__(self) -> "CellHandle":
        self._cell()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()
