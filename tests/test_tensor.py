from dataclasses import replace

import numpy as np
import pytest

import ndview
from ndview import BackendError


def test_tensor_builds_a_descriptor():
    t = ndview.tensor(np.ones((2, 3), dtype=np.float32), names=["x", None])
    assert t.shape == (2, 3)
    assert t.rank == 2
    assert t.names == ("x", None)
    assert t.type == "float32"
    assert t.vectorized_axes == ()
    assert t.backend is ndview.get_backend("numpy")


def test_names_must_match_rank():
    with pytest.raises(ValueError, match="expected 2 names"):
        ndview.tensor(np.ones((2, 3)), names=["x"])
    t = ndview.tensor(np.ones((2, 3)))
    with pytest.raises(ValueError, match="expected 2 names"):
        replace(t, names=("x",))


def test_descriptor_validation():
    t = ndview.tensor([1, 2])
    with pytest.raises(ValueError, match="non-negative"):
        replace(t, shape=(-1,))
    with pytest.raises(ValueError, match="unique"):
        replace(t, vectorized_axes=(("v", 1), ("v", 1)))


def test_tensor_copies_its_input():
    source = np.zeros(3)
    t = ndview.tensor(source)
    source[0] = 5
    np.testing.assert_array_equal(t.to_numpy(), np.zeros(3))


def test_vectorize_and_devectorize_round_trip():
    t = ndview.tensor(np.zeros((2, 3, 4)), names=["a", "b", "c"])
    v = ndview.vectorize(t, ["a", ("b", 3)])
    assert v.shape == (4,)
    assert v.names == ("c",)
    assert v.vectorized_axes == (("a", 2), ("b", 3))
    assert v.physical_shape == (2, 3, 4)
    back = ndview.devectorize(v)
    assert back.shape == (2, 3, 4)
    assert back.names == ("a", "b", "c")
    assert back.vectorized_axes == ()


def test_vectorize_appends_to_existing_axes():
    t = ndview.tensor(np.zeros((2, 3, 4)), vectorized_axes=["outer"])
    v = ndview.vectorize(t, ["inner"])
    assert v.vectorized_axes == (("outer", 2), ("inner", 3))
    assert v.shape == (4,)


def test_vectorize_checks_sizes():
    t = ndview.tensor(np.zeros((2, 3)))
    with pytest.raises(ValueError, match="expects size 5"):
        ndview.vectorize(t, [("v", 5)])
    with pytest.raises(ValueError, match="cannot vectorize 3 axes"):
        ndview.vectorize(t, ["a", "b", "c"])


def test_squeeze_by_name_position_and_default():
    t = ndview.tensor(np.zeros((1, 3, 1)), names=["a", "b", "c"])
    assert ndview.squeeze(t).shape == (3,)
    out = ndview.squeeze(t, ["c"])
    assert out.shape == (1, 3)
    assert out.names == ("a", "b")
    assert out.to_numpy().shape == (1, 3)
    assert ndview.squeeze(t, [0]).names == ("b", "c")


def test_squeeze_rejects_wide_axes():
    t = ndview.tensor(np.zeros((1, 3)))
    with pytest.raises(ValueError, match="dimension 3"):
        ndview.squeeze(t, [1])
    with pytest.raises(ValueError, match="cannot squeeze axis 4"):
        ndview.squeeze(t, [4])


def test_squeeze_leaves_vectorized_axes_alone():
    t = ndview.tensor(np.zeros((1, 1, 2)), vectorized_axes=["v"])
    out = ndview.squeeze(t)
    assert out.shape == (2,)
    assert out.vectorized_axes == (("v", 1),)
    assert out.to_numpy().shape == (1, 2)


def test_unknown_backend():
    with pytest.raises(BackendError, match="Unknown backend 'fortran'"):
        ndview.tensor([1], backend="fortran")


def test_numpy_is_always_available():
    assert ndview.available_backends()[0] == "numpy"
