import numpy as np
import pytest

import ndview
from ndview import (
    InvalidIndexSpecError,
    InvalidRangeError,
    OutOfBoundsIndexError,
    Range,
    UnknownOrDuplicateAxisError,
    resolve_axes,
)

SHAPE = (3, 4, 5)


def test_missing_axes_default_to_full_pass_through():
    plan = resolve_axes(SHAPE, [])
    assert plan.starts == (0, 0, 0)
    assert plan.lengths == SHAPE
    assert plan.squeeze_axes == ()


def test_integer_index_is_normalized_and_squeezed():
    plan = resolve_axes(SHAPE, [(2, -1)])
    assert plan.starts == (0, 0, 4)
    assert plan.lengths == (3, 4, 1)
    assert plan.squeeze_axes == (2,)


def test_range_keeps_axis():
    plan = resolve_axes(SHAPE, [(1, Range(1, -1))])
    assert plan.starts == (0, 1, 0)
    assert plan.lengths == (3, 3, 5)
    assert plan.squeeze_axes == ()


def test_squeeze_axes_are_sorted():
    plan = resolve_axes(SHAPE, [(0, 1), (2, 0)])
    assert plan.squeeze_axes == (0, 2)


def test_scalar_tensor_start_is_deferred():
    idx = ndview.tensor(np.int64(2))
    plan = resolve_axes(SHAPE, [(1, idx)])
    assert plan.starts[1] is idx
    assert plan.lengths == (3, 1, 5)
    assert plan.squeeze_axes == (1,)


@pytest.mark.parametrize("spec", [Range(2, 1), Range(0, 2, 2), Range(0, 2, -1)])
def test_invalid_ranges(spec):
    with pytest.raises(InvalidRangeError, match="non-empty range with a step of 1") as info:
        resolve_axes(SHAPE, [(0, spec)])
    assert info.value.axis == 0
    assert info.value.value == spec


def test_range_bounds_are_checked_before_the_step():
    with pytest.raises(OutOfBoundsIndexError):
        resolve_axes(SHAPE, [(0, Range(0, 3, 2))])


def test_single_element_range_is_valid():
    plan = resolve_axes(SHAPE, [(0, Range(-1, -1))])
    assert plan.starts[0] == 2
    assert plan.lengths[0] == 1
    assert plan.squeeze_axes == ()


@pytest.mark.parametrize("spec", ["x", 1.0, None, [0, 1], True])
def test_per_axis_spec_must_be_index_like(spec):
    with pytest.raises(InvalidIndexSpecError, match="integer, a scalar tensor or a range") as info:
        resolve_axes(SHAPE, [(1, spec)])
    assert info.value.axis == 1


def test_duplicate_axis_is_reported():
    with pytest.raises(UnknownOrDuplicateAxisError) as info:
        resolve_axes(SHAPE, [(0, 0), (0, 1)])
    assert info.value.axis == 0
    assert info.value.shape == SHAPE


@pytest.mark.parametrize("axis", [3, -1, 10])
def test_unknown_axis_is_reported(axis):
    with pytest.raises(UnknownOrDuplicateAxisError, match=f"axis {axis} found when slicing shape"):
        resolve_axes(SHAPE, [(axis, 0)])


def test_axes_are_resolved_right_to_left():
    # Axis 2 is visited first, so its error wins over the one on axis 0.
    with pytest.raises(OutOfBoundsIndexError) as info:
        resolve_axes(SHAPE, [(0, 99), (2, 99)])
    assert info.value.axis == 2


def test_per_axis_errors_win_over_leftover_specs():
    with pytest.raises(OutOfBoundsIndexError):
        resolve_axes(SHAPE, [(7, 0), (1, 4)])
