"""
Shared fixtures for the sincfilter test suite.
"""

import logging
import os

# Plots must never open a window during tests
os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest

from sincfilter.model.stack import ImageStack


@pytest.fixture
def random_stack():
    """Factory for stacks of random 16-bit frames."""

    def _make(n_slices=10, height=4, width=6, seed=0, title="random.tif"):
        rng = np.random.default_rng(seed)
        frames = rng.integers(0, 4096, size=(n_slices, height, width), dtype=np.uint16)
        return ImageStack(frames, title=title)

    return _make


@pytest.fixture
def ramp_stack():
    """Factory for stacks whose slice j (1-based) is filled with the value j."""

    def _make(n_slices=10, height=3, width=5):
        values = np.arange(1, n_slices + 1, dtype=np.float64)
        frames = np.broadcast_to(values[:, None, None], (n_slices, height, width)).copy()
        return ImageStack(frames, title="ramp.tif")

    return _make


@pytest.fixture
def constant_stack():
    """Factory for stacks with every pixel of every slice equal to `value`."""

    def _make(n_slices=12, value=7.5, height=3, width=4):
        return ImageStack(np.full((n_slices, height, width), value), title="constant.tif")

    return _make


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo setup_logging() calls made by CLI tests."""
    yield
    logger = logging.getLogger("sincfilter")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
