import numpy as np
import pytest

import ndview
from ndview import IndexingConfig, OutOfBoundsIndexError, Range
from _backend_utils import require_backend


BACKENDS = ["numpy", "torch", "jax"]


@pytest.fixture(params=BACKENDS)
def backend(request):
    require_backend(request.param)
    return request.param


def _data():
    return np.arange(2 * 3 * 4, dtype=np.int32).reshape(2, 3, 4)


def test_backend_conformance_static_slices(backend):
    data = _data()
    t = ndview.tensor(data, names=["a", "b", "c"], backend=backend)
    assert t.backend.name == backend
    cases = [
        (0, data[0]),
        ([0, -1], data[0, -1]),
        ([("c", Range(1, 2))], data[:, :, 1:3]),
        ([("b", -1), ("a", Range(0, 1))], data[:, -1, :]),
    ]
    for index, expected in cases:
        out = t[index]
        assert out.backend is t.backend
        assert out.shape == expected.shape
        np.testing.assert_array_equal(out.to_numpy(), expected)


def test_backend_conformance_vectorized(backend):
    data = _data()
    t = ndview.tensor(data, names=["b", "c"], vectorized_axes=["batch"], backend=backend)
    out = t[[("c", 3), ("b", Range(1, 2))]]
    assert out.vectorized_axes == (("batch", 2),)
    assert out.shape == (2,)
    np.testing.assert_array_equal(out.to_numpy(), data[:, 1:3, 3])


def test_backend_conformance_dynamic_index(backend):
    data = _data()
    t = ndview.tensor(data, backend=backend)
    idx = ndview.tensor(np.int32(1), backend=backend)
    np.testing.assert_array_equal(t[[0, idx]].to_numpy(), data[0, 1])
    clamped = t[[0, ndview.tensor(np.int32(7), backend=backend)]]
    np.testing.assert_array_equal(clamped.to_numpy(), data[0, 2])
    strict = IndexingConfig(dynamic_index="strict")
    with pytest.raises(OutOfBoundsIndexError):
        ndview.get(t, [0, ndview.tensor(np.int32(7), backend=backend)], config=strict)


def test_backend_conformance_put_slice(backend):
    data = _data()
    t = ndview.tensor(data, backend=backend)
    patch = ndview.tensor(np.full((1, 2, 2), -1, dtype=np.int32), backend=backend)
    out = ndview.put_slice(t, [1, 1, 2], patch)
    expected = data.copy()
    expected[1, 1:3, 2:4] = -1
    np.testing.assert_array_equal(out.to_numpy(), expected)
    np.testing.assert_array_equal(t.to_numpy(), data)


def test_put_slice_moves_updates_across_backends(backend):
    data = _data()
    t = ndview.tensor(data, backend=backend)
    patch = ndview.tensor(np.zeros((2, 1, 1), dtype=np.int32))
    out = ndview.put_slice(t, [0, 2, 3], patch)
    assert out.backend is t.backend
    assert out.to_numpy()[:, 2, 3].tolist() == [0, 0]


def test_scalar_index_from_another_backend(backend):
    data = _data()
    t = ndview.tensor(data, backend=backend)
    out = t[ndview.tensor(np.int64(1))]
    np.testing.assert_array_equal(out.to_numpy(), data[1])
