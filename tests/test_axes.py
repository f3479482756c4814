import pytest

from ndview import (
    InvalidIndexSpecError,
    OutOfBoundsIndexError,
    UnknownAxisNameError,
    find_axis,
    normalize_index,
)


def test_find_axis_resolves_names_and_passes_positions_through():
    names = ("a", "b", None)
    assert find_axis(names, "b") == 1
    assert find_axis(names, 2) == 2
    # Positions are not range checked here; the resolver reports them.
    assert find_axis(names, 7) == 7


def test_find_axis_unknown_name_lists_available_names():
    with pytest.raises(UnknownAxisNameError, match=r"'z' not found .* \['a', 'b', None\]") as info:
        find_axis(("a", "b", None), "z")
    assert info.value.name == "z"
    assert info.value.names == ("a", "b", None)


def test_find_axis_rejects_other_key_types():
    with pytest.raises(InvalidIndexSpecError, match="names or integer positions"):
        find_axis(("a",), 1.5)


@pytest.mark.parametrize(
    "index,expected",
    [(0, 0), (2, 2), (-1, 2), (-3, 0)],
)
def test_normalize_index_wraps_negatives(index, expected):
    assert normalize_index(index, 1, (5, 3)) == expected


@pytest.mark.parametrize("index", [3, 4, -4, -10])
def test_normalize_index_out_of_bounds_cites_axis_and_shape(index):
    with pytest.raises(OutOfBoundsIndexError) as info:
        normalize_index(index, 1, (5, 3))
    err = info.value
    assert isinstance(err, IndexError)
    assert (err.index, err.axis, err.shape) == (index, 1, (5, 3))
    assert f"index {index} is out of bounds for axis 1 in shape (5, 3)" in str(err)
