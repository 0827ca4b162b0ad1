"""
Liquid Glass -- Gamma Effect
Per-pixel power-law tone remap. No spatial sampling.
"""

import numpy as np

from core.safety import validate_surface, validate_gamma_power


def gamma(frame: np.ndarray, power: float = 1.0) -> np.ndarray:
    """Raise normalized R, G, B to the given power.

    Args:
        frame: (H, W, 4) uint8 RGBA array.
        power: Exponent (> 0). 1.0 = identity, < 1 brightens, > 1 darkens.

    Returns:
        New array, same shape as frame. Alpha is untouched.
    """
    validate_surface(frame)
    power = validate_gamma_power(power)

    if power == 1.0:
        return frame.copy()

    rgb = frame[:, :, :3].astype(np.float32) / 255.0
    rgb = np.power(rgb, np.float32(power))
    result = frame.copy()
    result[:, :, :3] = np.clip(rgb * 255.0 + 0.5, 0, 255).astype(np.uint8)
    return result
