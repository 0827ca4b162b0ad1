"""
Liquid Glass -- Surface Sampling
Every effect reads the source surface through sample(), which applies
clamp-to-edge before the gather. Nothing else indexes a source surface
with derived coordinates.
"""

import numpy as np


def pixel_grid(h: int, w: int) -> tuple[np.ndarray, np.ndarray]:
    """Integer (ys, xs) coordinate grids for an (h, w) surface."""
    ys, xs = np.mgrid[0:h, 0:w]
    return ys.astype(np.int64), xs.astype(np.int64)


def clamp_coords(xs: np.ndarray, ys: np.ndarray, w: int, h: int) -> tuple[np.ndarray, np.ndarray]:
    """Clamp-to-edge: pull coordinates into [0, w-1] x [0, h-1]."""
    xs = np.clip(np.asarray(xs, dtype=np.int64), 0, w - 1)
    ys = np.clip(np.asarray(ys, dtype=np.int64), 0, h - 1)
    return xs, ys


def sample(frame: np.ndarray, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Gather colors from frame at (xs, ys).

    Args:
        frame: (H, W, C) source surface.
        xs, ys: Integer coordinate arrays of the same shape. May be out of
            range; they are clamped before lookup.

    Returns:
        Array of shape xs.shape + (C,).
    """
    h, w = frame.shape[:2]
    xs, ys = clamp_coords(xs, ys, w, h)
    return frame[ys, xs]


def sample_channel(frame: np.ndarray, channel: int, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Gather a single channel from frame at (xs, ys), clamped."""
    h, w = frame.shape[:2]
    xs, ys = clamp_coords(xs, ys, w, h)
    return frame[ys, xs, channel]
