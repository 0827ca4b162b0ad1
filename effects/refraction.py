"""
Liquid Glass -- Refraction Effect
Lens-like spatial warp: one displacement per pixel, all color channels
sampled together, so there is no color fringing.
"""

import numpy as np

from core.displacement import FALLOFF_EDGES, centered_coords, displacement_vector, to_pixel_offset
from core.safety import validate_surface, validate_intensity, validate_choice, validate_depth_bias
from core.sampling import pixel_grid, sample

DEPTH_BIAS = 0.02


def refraction_coords(h: int, w: int, intensity: float,
                      depth_effect: bool = False,
                      falloff: str = "center_weighted",
                      depth_bias: float = DEPTH_BIAS) -> tuple[np.ndarray, np.ndarray]:
    """Sample coordinates for every output pixel, before clamping.

    offset = centered * falloff(dist) * intensity, in pixels. With
    depth_effect the field also fades toward the bottom and a constant
    parallax bias of depth_bias * centered is added.

    Returns:
        (xs, ys) int64 arrays of shape (h, w).
    """
    ys, xs = pixel_grid(h, w)
    dx, dy = displacement_vector(h, w, intensity, falloff, depth_effect)

    if depth_effect:
        cx, cy = centered_coords(h, w)
        dx = dx + to_pixel_offset(cx.astype(np.float64) * depth_bias, w)
        dy = dy + to_pixel_offset(cy.astype(np.float64) * depth_bias, h)

    return xs + dx, ys + dy


def refraction(frame: np.ndarray, intensity: float = 0.05,
               depth_effect: bool = False, falloff: str = "center_weighted",
               depth_bias: float = DEPTH_BIAS,
               width: int | None = None, height: int | None = None) -> np.ndarray:
    """Warp the surface through a radial lens displacement.

    Args:
        frame: (H, W, 4) uint8 RGBA array.
        intensity: Displacement strength (>= 0). 0 = no-op.
        depth_effect: Fade the warp toward the bottom and add a small
            parallax push away from the center.
        falloff: 'center_weighted' or 'edge_weighted'.
        depth_bias: Parallax bias in normalized units (used with depth_effect).
        width, height: Optional expected dimensions, checked against frame.

    Returns:
        New array, same shape as frame. Alpha passes through unchanged.
    """
    h, w = validate_surface(frame, width, height)
    intensity = validate_intensity(intensity)
    validate_choice("falloff", falloff, FALLOFF_EDGES)
    depth_bias = validate_depth_bias(depth_bias)

    if intensity == 0.0:
        return frame.copy()

    xs, ys = refraction_coords(h, w, intensity, bool(depth_effect), falloff, depth_bias)
    result = frame.copy()
    result[:, :, :3] = sample(frame[:, :, :3], xs, ys)
    return result
