"""
Liquid Glass -- Dispersion Effect
Radial chromatic aberration: R/G/B channels are displaced and sampled
independently, so colors fringe toward the edges of the glass.
"""

import numpy as np

from core.displacement import FALLOFF_EDGES, displacement_magnitude, displacement_vector, to_pixel_offset
from core.safety import validate_surface, validate_intensity, validate_choice
from core.sampling import pixel_grid, sample_channel

STRATEGIES = ("axis_split", "radial_split")

# radial_split offset strength per channel (blue is the anchor)
RADIAL_SPLIT_STRENGTH = {"r": 1.0, "g": 0.5}


def dispersion_coords(h: int, w: int, intensity: float,
                      strategy: str = "axis_split",
                      falloff: str = "center_weighted",
                      depth_effect: bool = False) -> dict:
    """Per-channel sample coordinates, before clamping.

    Returns:
        {"r": (xs, ys), "g": (xs, ys), "b": (xs, ys)} int64 arrays.
    """
    ys, xs = pixel_grid(h, w)

    if strategy == "radial_split":
        coords = {"b": (xs, ys)}
        for ch, strength in RADIAL_SPLIT_STRENGTH.items():
            dx, dy = displacement_vector(h, w, intensity, falloff, depth_effect, strength=strength)
            coords[ch] = (xs + dx, ys + dy)
        return coords

    # axis_split: horizontal shift, green anchored
    disp = displacement_magnitude(h, w, intensity, falloff, depth_effect)
    shift = to_pixel_offset(disp, w)
    return {
        "r": (xs + shift, ys),
        "g": (xs, ys),
        "b": (xs - shift, ys),
    }


def dispersion(frame: np.ndarray, intensity: float = 0.05,
               strategy: str = "axis_split", falloff: str = "center_weighted",
               depth_effect: bool = False,
               width: int | None = None, height: int | None = None) -> np.ndarray:
    """Split color channels along a radial displacement field.

    Strategies:
        axis_split: red sampled at x + disp*width, blue at x - disp*width
            (same row), green and alpha from the unshifted pixel.
        radial_split: red offset along the centered direction at full
            strength, green at half strength, blue and alpha unshifted.

    Args:
        frame: (H, W, 4) uint8 RGBA array.
        intensity: Displacement strength (>= 0). 0 = no-op.
        strategy: 'axis_split' or 'radial_split'.
        falloff: 'center_weighted' or 'edge_weighted'.
        depth_effect: Fade the field toward the bottom of the surface.
        width, height: Optional expected dimensions, checked against frame.

    Returns:
        New array, same shape as frame.
    """
    h, w = validate_surface(frame, width, height)
    intensity = validate_intensity(intensity)
    validate_choice("strategy", strategy, STRATEGIES)
    validate_choice("falloff", falloff, FALLOFF_EDGES)

    if intensity == 0.0:
        return frame.copy()

    coords = dispersion_coords(h, w, intensity, strategy, falloff, bool(depth_effect))
    result = frame.copy()
    for ch_idx, ch in enumerate("rgb"):
        xs, ys = coords[ch]
        result[:, :, ch_idx] = sample_channel(frame, ch_idx, xs, ys)
    return result
