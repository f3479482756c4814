import os
import sys

import numpy as np
import pytest

import ndview


def pytest_sessionstart(session):  # noqa: D401 - test harness helper
    """Ensure the current Python's bin directory is on PATH for subprocesses.

    The CLI smoke test launches ``python -m ndview``; environments without a
    global 'python' shim need the running interpreter's directory on PATH.
    """

    bin_dir = os.path.dirname(sys.executable)
    path = os.environ.get("PATH", "")
    if bin_dir and bin_dir not in path.split(os.pathsep):
        os.environ["PATH"] = os.pathsep.join([bin_dir, path]) if path else bin_dir


@pytest.fixture
def abc_array():
    return np.arange(3 * 4 * 5).reshape(3, 4, 5)


@pytest.fixture
def abc(abc_array):
    return ndview.tensor(abc_array, names=["a", "b", "c"])
