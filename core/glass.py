"""
Liquid Glass -- Glass Pipeline
The glass overlay's fixed effect stack:
refraction -> dispersion -> color -> gamma.
Order matters: dispersion fringes the already-warped image, and the tone
stages are applied last.
"""

import logging

import numpy as np

from core.displacement import FALLOFF_EDGES
from core.safety import (
    validate_surface,
    validate_intensity,
    validate_gamma_power,
    validate_color_factor,
    validate_choice,
    InvalidParameterError,
)
from effects import apply_chain
from effects.dispersion import STRATEGIES

logger = logging.getLogger(__name__)

# Recommended ceiling for refraction/dispersion intensity.
MAX_INTENSITY = 0.1

GLASS_DEFAULTS = {
    "refraction_intensity": 0.0,
    "depth_effect": False,
    "dispersion_intensity": 0.0,
    "dispersion_strategy": "axis_split",
    "falloff": "center_weighted",
    "saturation": 1.0,
    "brightness": 1.0,
    "contrast": 1.0,
    "gamma": 1.0,
}

COLOR_SETTINGS = ("saturation", "brightness", "contrast")


def _coerce_intensity(value) -> float:
    return min(validate_intensity(value), MAX_INTENSITY)


def build_glass_chain(settings: dict | None = None) -> list[dict]:
    """Turn glass settings into an effect chain for apply_chain().

    Every setting is checked here, before any stage runs. Intensities are
    clamped to MAX_INTENSITY. Stages that would be identities (zero
    intensity, neutral color factors, gamma 1.0) are left out.

    Raises:
        InvalidParameterError: On unknown keys or degenerate values.
    """
    settings = settings or {}
    unknown = set(settings) - set(GLASS_DEFAULTS)
    if unknown:
        raise InvalidParameterError(
            f"Unknown glass setting(s): {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(GLASS_DEFAULTS)}"
        )
    s = {**GLASS_DEFAULTS, **settings}

    refraction_intensity = _coerce_intensity(s["refraction_intensity"])
    dispersion_intensity = _coerce_intensity(s["dispersion_intensity"])
    strategy = validate_choice("strategy", s["dispersion_strategy"], STRATEGIES)
    direction = validate_choice("falloff", s["falloff"], FALLOFF_EDGES)
    if not isinstance(s["depth_effect"], (bool, np.bool_)):
        raise InvalidParameterError(f"depth_effect must be True or False, got {s['depth_effect']!r}")
    color = {key: validate_color_factor(key, s[key]) for key in COLOR_SETTINGS}
    power = validate_gamma_power(s["gamma"])

    chain = []
    if refraction_intensity > 0:
        chain.append({"name": "refraction", "params": {
            "intensity": refraction_intensity,
            "depth_effect": bool(s["depth_effect"]),
            "falloff": direction,
        }})
    if dispersion_intensity > 0:
        chain.append({"name": "dispersion", "params": {
            "intensity": dispersion_intensity,
            "strategy": strategy,
            "falloff": direction,
        }})
    if any(v != 1.0 for v in color.values()):
        chain.append({"name": "color", "params": color})
    if power != 1.0:
        chain.append({"name": "gamma", "params": {"power": power}})
    return chain


def render_glass(frame, settings: dict | None = None):
    """Run the glass stack over one frame and return the new frame."""
    validate_surface(frame)
    chain = build_glass_chain(settings)
    logger.debug("glass chain: %s", [e["name"] for e in chain])
    if not chain:
        return frame.copy()
    return apply_chain(frame, chain)
