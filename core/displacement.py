"""
Liquid Glass -- Displacement Field
Radial distance from the image center -> smooth falloff -> displacement.
Shared by the dispersion and refraction samplers.
"""

import numpy as np

# Falloff direction -> (edge0, edge1) for smoothstep.
# center_weighted: 0 at the center, rising to 1 at dist >= 1.
# edge_weighted:   1 at the center, falling to 0 at dist >= 1.
FALLOFF_EDGES = {
    "center_weighted": (0.0, 1.0),
    "edge_weighted": (1.0, 0.0),
}


def smoothstep(edge0: float, edge1: float, x):
    """Clamped Hermite interpolation, same as the shader builtin.

    Works with edge0 > edge1, which mirrors the curve.
    """
    t = np.clip((np.asarray(x, dtype=np.float32) - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def centered_coords(h: int, w: int) -> tuple[np.ndarray, np.ndarray]:
    """Normalized coordinates in [-1, 1], zero at the image middle.

    Returns:
        (cx, cy) float32 arrays of shape (h, w).
    """
    ys, xs = np.mgrid[0:h, 0:w].astype(np.float32)
    cx = (xs / np.float32(w)) * 2.0 - 1.0
    cy = (ys / np.float32(h)) * 2.0 - 1.0
    return cx.astype(np.float32), cy.astype(np.float32)


def radial_distance(cx: np.ndarray, cy: np.ndarray) -> np.ndarray:
    """Euclidean norm of the centered coordinate."""
    return np.sqrt(cx * cx + cy * cy)


def falloff(dist, direction: str = "center_weighted"):
    """Falloff in [0, 1] as a function of distance from center."""
    edge0, edge1 = FALLOFF_EDGES[direction]
    return smoothstep(edge0, edge1, dist)


def to_pixel_offset(normalized, size: int) -> np.ndarray:
    """Scale a normalized offset to whole pixels, truncated toward zero.

    Offsets beyond one full surface span all land on the edge after
    clamping, so they are limited to [-1, 1] first.
    """
    normalized = np.clip(np.asarray(normalized, dtype=np.float64), -1.0, 1.0)
    return np.trunc(normalized * size).astype(np.int64)


def displacement_magnitude(h: int, w: int, intensity: float,
                           direction: str = "center_weighted",
                           depth_effect: bool = False) -> np.ndarray:
    """Scalar displacement field: falloff(dist) * intensity.

    With depth_effect the field is scaled by (1 - v), v = y / h, so it is
    strongest along the top row and fades toward the bottom.

    Returns:
        (h, w) float64 array.
    """
    cx, cy = centered_coords(h, w)
    # float64: any finite intensity must stay finite here
    disp = falloff(radial_distance(cx, cy), direction).astype(np.float64) * float(intensity)
    if depth_effect:
        v = np.arange(h, dtype=np.float64).reshape(-1, 1) / h
        disp = disp * (1.0 - v)
    return disp


def displacement_vector(h: int, w: int, intensity: float,
                        direction: str = "center_weighted",
                        depth_effect: bool = False,
                        strength: float = 1.0) -> tuple[np.ndarray, np.ndarray]:
    """Pixel offsets along the centered-coordinate direction.

    offset = centered * disp * strength * (w, h), truncated toward zero.

    Returns:
        (dx, dy) int64 arrays of shape (h, w).
    """
    cx, cy = centered_coords(h, w)
    disp = displacement_magnitude(h, w, intensity, direction, depth_effect) * float(strength)
    dx = to_pixel_offset(cx * disp, w)
    dy = to_pixel_offset(cy * disp, h)
    return dx, dy
