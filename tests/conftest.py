"""
Conftest: shared fixtures for all Liquid Glass test modules.

Frames are deterministic RGBA surfaces so pixel-exact assertions hold.
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _make_test_frame(width=32, height=24, alpha=255):
    """Generate a synthetic RGBA test frame (gradient, not blank)."""
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    frame[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)  # R gradient
    frame[:, :, 1] = np.linspace(0, 255, height, dtype=np.uint8).reshape(-1, 1)  # G vertical
    frame[:, :, 2] = np.linspace(255, 0, width, dtype=np.uint8)  # B inverse
    frame[:, :, 3] = alpha
    return frame


def _make_row_frame(width=8):
    """Single-row frame with distinct per-column channel values.

    R = 10*x, G = 100, B = 10*x + 1, A = 200.
    """
    xs = np.arange(width, dtype=np.uint8)
    frame = np.zeros((1, width, 4), dtype=np.uint8)
    frame[0, :, 0] = xs * 10
    frame[0, :, 1] = 100
    frame[0, :, 2] = xs * 10 + 1
    frame[0, :, 3] = 200
    return frame


@pytest.fixture
def frame():
    """A 24x32 gradient RGBA frame."""
    return _make_test_frame()


@pytest.fixture
def random_frame():
    """A 40x48 random RGBA frame with random alpha."""
    rng = np.random.RandomState(42)
    return rng.randint(0, 256, (40, 48, 4), dtype=np.uint8)


@pytest.fixture
def white_frame():
    """4x4 fully opaque white."""
    return np.full((4, 4, 4), 255, dtype=np.uint8)


@pytest.fixture
def row_frame():
    """1x8 row frame, see _make_row_frame."""
    return _make_row_frame()
