"""
Liquid Glass -- Color Adjust Effect
Saturation, brightness and contrast as one per-pixel color matrix.
No spatial sampling; alpha is never touched.
"""

import numpy as np

from core.safety import validate_surface, validate_color_factor

# Luminance weights used for the saturation matrix
LUMA_WEIGHTS = np.array([0.213, 0.715, 0.072], dtype=np.float32)


def color_adjust(frame: np.ndarray, saturation: float = 1.0,
                 brightness: float = 1.0, contrast: float = 1.0) -> np.ndarray:
    """Desaturate/boost, lift/darken and stretch/flatten the RGB channels.

    Saturation is applied first (blend toward luminance), then
    v * contrast + (1 - contrast) / 2 * 255 + (brightness - 1) * 255.

    Args:
        frame: (H, W, 4) uint8 RGBA array.
        saturation: 0.0 (grayscale) to 5.0. 1.0 = no change.
        brightness: 0.0 (black) to 5.0. 1.0 = no change.
        contrast: 0.0 (flat mid-gray) to 5.0. 1.0 = no change.

    Returns:
        New array, same shape as frame. Alpha is untouched.
    """
    validate_surface(frame)
    saturation = validate_color_factor("saturation", saturation)
    brightness = validate_color_factor("brightness", brightness)
    contrast = validate_color_factor("contrast", contrast)

    if saturation == 1.0 and brightness == 1.0 and contrast == 1.0:
        return frame.copy()

    rgb = frame[:, :, :3].astype(np.float32)
    luma = (rgb @ LUMA_WEIGHTS)[:, :, np.newaxis]
    rgb = luma + (rgb - luma) * np.float32(saturation)

    offset = (1.0 - contrast) / 2.0 * 255.0 + (brightness - 1.0) * 255.0
    rgb = rgb * np.float32(contrast) + np.float32(offset)

    result = frame.copy()
    result[:, :, :3] = np.clip(rgb + 0.5, 0, 255).astype(np.uint8)
    return result
