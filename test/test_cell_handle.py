import io

import numpy as np
import pytest

from dataseries.core import DataSeries, StaleHandle, TypeContractViolation


def _series() -> DataSeries:
    series = DataSeries(label_type=str)
    series.push("a", np.int32(1))
    series.push("b", "text")
    return series


def test_handle_write_updates_value_and_descriptor():
    series = DataSeries()
    series.push("a", np.array([1, 2], dtype=np.int64))

    handle = series.get_mut(0, np.ndarray)
    handle.value = np.array([0.5], dtype=np.float64)

    assert series.type_map[handle.key].name == "numpy.ndarray[float64]"
    assert np.allclose(series.get(0, np.ndarray), [0.5])


def test_handle_rejects_other_type():
    series = _series()
    handle = series.get_mut(0, np.int32)

    with pytest.raises(TypeContractViolation):
        handle.value = np.float32(1.1)

    assert series.get(0, np.int32) == 1


@pytest.mark.parametrize(
    "mutate",
    [
        lambda s: s.push("c", 3),
        lambda s: s.remove(1),
        lambda s: s.sort(),
        lambda s: s.update(1, "other"),
        lambda s: s.clear(),
    ],
)
def test_handle_is_invalidated_by_structural_changes(mutate):
    series = _series()
    handle = series.get_mut(0, np.int32)

    mutate(series)

    with pytest.raises(StaleHandle):
        _ = handle.value
    with pytest.raises(StaleHandle):
        handle.value = np.int32(5)


def test_handle_survives_reads():
    series = _series()
    handle = series.get_mut(0, np.int32)

    series.get(1, str)
    series.lines()
    series.print_reverse(file=io.StringIO())

    assert handle.value == 1


def test_handle_released_after_context():
    series = _series()

    with series.get_mut(1, str) as handle:
        handle.value = "changed"

    assert series.get(1, str) == "changed"
    with pytest.raises(StaleHandle):
        _ = handle.value
