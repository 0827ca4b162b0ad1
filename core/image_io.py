"""
Liquid Glass -- Image I/O
Decodes image files into RGBA surfaces and encodes surfaces back to disk.
"""

from pathlib import Path

import numpy as np
from PIL import Image

from core.safety import preflight, validate_surface


def load_surface(path: str) -> np.ndarray:
    """Load an image as a numpy array (H, W, 4) uint8 RGBA.

    Runs the file preflight first (existence, size, extension).
    """
    info = preflight(path)
    with Image.open(info["path"]) as img:
        return np.array(img.convert("RGBA"))


def save_surface(array: np.ndarray, output_path: str) -> Path:
    """Save an (H, W, 4) or (H, W, 3) uint8 array as an image.

    The format follows the output extension; RGBA is flattened to RGB for
    formats without alpha (JPEG).
    """
    validate_surface(array)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.fromarray(array)
    if output_path.suffix.lower() in (".jpg", ".jpeg") and img.mode == "RGBA":
        img = img.convert("RGB")
    img.save(str(output_path))
    return output_path
