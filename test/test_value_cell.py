import numpy as np

from dataseries.core import ValueCell, TypeDescriptor


def test_wrap_records_exact_type():
    cell = ValueCell.wrap(np.int32(7))

    assert cell.descriptor.type_ is np.int32
    assert cell.descriptor.dtype is None
    assert cell.type_name == "numpy.int32"
    assert cell.value == 7


def test_downcast_exact_match_only():
    cell = ValueCell.wrap(True)

    assert cell.downcast(bool) is True
    assert cell.downcast(int) is None
    assert cell.downcast(object) is None


def test_builtin_type_names_are_bare():
    assert ValueCell.wrap("x").type_name == "str"
    assert ValueCell.wrap([1]).type_name == "list"
    assert ValueCell.wrap((1.2, 3.4)).type_name == "tuple"


def test_array_descriptor_carries_dtype():
    cell = ValueCell.wrap(np.zeros(3, dtype=np.float32))

    assert cell.type_name == "numpy.ndarray[float32]"
    assert cell.downcast(np.ndarray) is not None

    # descriptor matching: dtype must agree when given, any dtype otherwise
    assert cell.downcast(TypeDescriptor(np.ndarray, np.dtype(np.float32))) is not None
    assert cell.downcast(TypeDescriptor(np.ndarray, np.dtype(np.float64))) is None
    assert cell.downcast(TypeDescriptor(np.ndarray)) is not None


def test_format_value_uses_debug_form():
    assert ValueCell.wrap("test").format_value() == "'test'"
    assert ValueCell.wrap([1, 3, 4]).format_value() == "[1, 3, 4]"
    assert ValueCell.wrap(np.arange(20)).format_value().count("\n") == 0


def test_repr_includes_type_and_value():
    text = repr(ValueCell.wrap(1))
    assert "int" in text
    assert "1" in text


def test_descriptor_equality_and_str():
    a = TypeDescriptor.of(3)
    b = TypeDescriptor.of(4)
    assert a == b
    assert str(a) == "int"
    assert TypeDescriptor.of(3.0) != a


def test_descriptor_equality_distinguishes_missing_dtype():
    typed = TypeDescriptor(np.ndarray, np.dtype(np.float64))
    untyped = TypeDescriptor(np.ndarray)

    assert typed != untyped
    assert untyped != typed
    assert typed == TypeDescriptor.of(np.zeros(2))
    assert untyped == TypeDescriptor(np.ndarray)
    assert hash(typed) == hash(untyped)


def test_cells_compare_by_identity():
    a = ValueCell.wrap(np.arange(3))
    b = ValueCell.wrap(np.arange(3))

    assert a != b
    assert a == a
