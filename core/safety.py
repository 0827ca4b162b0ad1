"""
Liquid Glass -- Safety & Parameter Guards
Centralized preflight checks run before any pixel work.
Rejects degenerate surfaces and parameters so no kernel ever sees them.
"""

import math
import os
from pathlib import Path

import numpy as np

# --- Configurable Limits ---
MAX_FILE_MB = 100          # Maximum input image size
MAX_CHAIN_DEPTH = 10       # Maximum effects in a chain
MAX_COLOR_FACTOR = 5.0     # Ceiling for saturation, brightness, contrast
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"}


class SafetyError(Exception):
    """Raised when a host-side preflight check fails."""
    pass


class InvalidParameterError(ValueError):
    """Raised when a surface or effect parameter is degenerate.

    Always raised before any pixel is computed, so callers never see
    partial output.
    """
    pass


def _is_finite_number(value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def validate_surface(frame, width: int | None = None, height: int | None = None) -> tuple[int, int]:
    """Check a surface and return its (height, width).

    Args:
        frame: (H, W, 4) or (H, W, 3) uint8 array.
        width: Expected width. None = take it from the array.
        height: Expected height. None = take it from the array.

    Raises:
        InvalidParameterError: On a malformed array, non-positive dimensions,
            or dimensions that disagree with the array.
    """
    if not isinstance(frame, np.ndarray):
        raise InvalidParameterError(f"Surface must be a numpy array, got {type(frame).__name__}")
    if frame.ndim != 3 or frame.shape[2] not in (3, 4):
        raise InvalidParameterError(f"Surface must be (H, W, 4) RGBA or (H, W, 3) RGB, got shape {frame.shape}")
    if frame.dtype != np.uint8:
        raise InvalidParameterError(f"Surface must be uint8, got {frame.dtype}")

    h, w = frame.shape[:2]
    for label, given, actual in (("width", width, w), ("height", height, h)):
        if given is None:
            continue
        if isinstance(given, bool) or not isinstance(given, (int, np.integer)):
            raise InvalidParameterError(f"{label} must be an integer, got {given!r}")
        if given <= 0:
            raise InvalidParameterError(f"{label} must be positive, got {given}")
        if given != actual:
            raise InvalidParameterError(f"{label}={given} does not match surface {label} {actual}")
    if h <= 0 or w <= 0:
        raise InvalidParameterError(f"Surface must have positive dimensions, got {w}x{h}")
    return h, w


def validate_intensity(intensity) -> float:
    """Intensity must be a finite float >= 0."""
    if not _is_finite_number(intensity):
        raise InvalidParameterError(f"Intensity must be a finite number, got {intensity!r}")
    intensity = float(intensity)
    if intensity < 0:
        raise InvalidParameterError(f"Intensity must be >= 0, got {intensity}")
    return intensity


def validate_gamma_power(power) -> float:
    """Gamma power must be a finite float > 0."""
    if not _is_finite_number(power):
        raise InvalidParameterError(f"Gamma power must be a finite number, got {power!r}")
    power = float(power)
    if power <= 0:
        raise InvalidParameterError(f"Gamma power must be > 0, got {power}")
    return power


def validate_depth_bias(bias) -> float:
    """Parallax bias must be a finite float (sign picks push direction)."""
    if not _is_finite_number(bias):
        raise InvalidParameterError(f"depth_bias must be a finite number, got {bias!r}")
    return float(bias)


def validate_color_factor(label: str, value) -> float:
    """Color factors must be finite and >= 0; clamped to MAX_COLOR_FACTOR."""
    if not _is_finite_number(value):
        raise InvalidParameterError(f"{label} must be a finite number, got {value!r}")
    value = float(value)
    if value < 0:
        raise InvalidParameterError(f"{label} must be >= 0, got {value}")
    return min(value, MAX_COLOR_FACTOR)


def validate_choice(label: str, value, choices) -> str:
    """Check a string selector against its allowed values."""
    if value not in choices:
        raise InvalidParameterError(
            f"Unknown {label}: {value!r}. Available: {', '.join(sorted(choices))}"
        )
    return value


def validate_chain_depth(effects_list: list) -> None:
    """Check that effect chain isn't too deep.

    Raises:
        SafetyError: If chain exceeds MAX_CHAIN_DEPTH.
    """
    if len(effects_list) > MAX_CHAIN_DEPTH:
        raise SafetyError(
            f"Effect chain has {len(effects_list)} effects, max is {MAX_CHAIN_DEPTH}. "
            f"Split into multiple passes."
        )


def preflight(input_path: str) -> dict:
    """Run file checks before decoding an image.

    Returns:
        dict with file metadata (path, size_mb, extension).

    Raises:
        SafetyError: If any check fails.
        FileNotFoundError: If input doesn't exist.
    """
    input_path = str(input_path)
    real_path = os.path.realpath(input_path)

    if not os.path.isfile(real_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    size_mb = os.path.getsize(real_path) / (1024 * 1024)
    if size_mb > MAX_FILE_MB:
        raise SafetyError(
            f"Input file is {size_mb:.0f}MB, exceeds {MAX_FILE_MB}MB limit."
        )

    ext = Path(real_path).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise SafetyError(
            f"File type '{ext}' not allowed. "
            f"Supported: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    return {
        "path": real_path,
        "size_mb": size_mb,
        "extension": ext,
    }
