"""
Liquid Glass -- Effects Registry
Every effect is a function: (frame: np.ndarray, **params) -> np.ndarray
Frames are (H, W, 4) uint8 RGBA. Effects never modify their input.
"""

import logging

import numpy as np

from effects.dispersion import dispersion, STRATEGIES
from effects.refraction import refraction
from effects.gamma import gamma
from effects.color import color_adjust
from core.displacement import FALLOFF_EDGES
from core.safety import validate_chain_depth, validate_surface

logger = logging.getLogger(__name__)

# Master registry: name -> (function, default_params, description)
EFFECTS = {
    # === GLASS ===
    "refraction": {
        "fn": refraction,
        "category": "glass",
        "params": {"intensity": 0.05, "depth_effect": False, "falloff": "center_weighted"},
        "param_ranges": {"intensity": {"min": 0.0, "max": 0.1}},
        "description": "Lens-like radial warp, all channels displaced together",
    },
    "dispersion": {
        "fn": dispersion,
        "category": "glass",
        "params": {"intensity": 0.05, "strategy": "axis_split", "falloff": "center_weighted"},
        "param_ranges": {"intensity": {"min": 0.0, "max": 0.1}},
        "choices": {"strategy": list(STRATEGIES), "falloff": list(FALLOFF_EDGES)},
        "description": "Radial chromatic aberration (axis_split or radial_split channel offsets)",
    },

    # === TONE ===
    "color": {
        "fn": color_adjust,
        "category": "tone",
        "params": {"saturation": 1.0, "brightness": 1.0, "contrast": 1.0},
        "param_ranges": {
            "saturation": {"min": 0.0, "max": 5.0},
            "brightness": {"min": 0.0, "max": 5.0},
            "contrast": {"min": 0.0, "max": 5.0},
        },
        "description": "Saturation, brightness and contrast color matrix on RGB",
    },
    "gamma": {
        "fn": gamma,
        "category": "tone",
        "params": {"power": 1.0},
        "param_ranges": {"power": {"min": 0.1, "max": 4.0}},
        "description": "Power-law tone curve on RGB (<1 brightens, >1 darkens)",
    },
}

CATEGORIES = {
    "glass": "GLASS",
    "tone": "TONE",
}


def get_effect(name: str):
    """Get an effect by name. Returns (fn, default_params).

    Raises ValueError if effect doesn't exist.
    """
    if name not in EFFECTS:
        available = ", ".join(sorted(EFFECTS.keys()))
        raise ValueError(f"Unknown effect: {name}. Available: {available}")
    entry = EFFECTS[name]
    return entry["fn"], entry["params"].copy()


def list_effects(category: str = None) -> list[dict]:
    """List all available effects with descriptions.

    Args:
        category: Optional filter, only return effects in this category.
    """
    results = []
    for name, entry in EFFECTS.items():
        if category and entry.get("category") != category:
            continue
        results.append({
            "name": name,
            "description": entry["description"],
            "params": entry["params"],
            "category": entry.get("category", "other"),
        })
    return results


def list_categories() -> list[str]:
    """Return ordered list of category keys."""
    return list(CATEGORIES.keys())


def search_effects(query: str, max_query_len: int = 200) -> list[dict]:
    """Search effects by name or description substring."""
    if len(query) > max_query_len:
        raise ValueError(f"Search query too long (max {max_query_len} chars)")
    query_lower = query.lower()
    return [
        e for e in list_effects()
        if query_lower in e["name"] or query_lower in e["description"].lower()
    ]


def apply_dispersion(surface, width, height, intensity, strategy="axis_split",
                     falloff_direction="center_weighted"):
    """Dispersion entry point with explicit surface dimensions."""
    return dispersion(surface, intensity=intensity, strategy=strategy,
                      falloff=falloff_direction, width=width, height=height)


def apply_refraction(surface, width, height, intensity, depth_effect=False):
    """Refraction entry point with explicit surface dimensions."""
    return refraction(surface, intensity=intensity, depth_effect=depth_effect,
                      width=width, height=height)


def apply_gamma(surface, power):
    """Gamma entry point."""
    return gamma(surface, power=power)


def apply_effect(frame, effect_name: str, **params):
    """Apply a named effect to a frame with given params.

    RGB frames get an opaque alpha for the duration of the effect and are
    returned as RGB.
    """
    fn, defaults = get_effect(effect_name)
    merged = {**defaults, **params}

    validate_surface(frame)
    rgb_input = frame.shape[2] == 3
    if rgb_input:
        alpha = np.full(frame.shape[:2] + (1,), 255, dtype=np.uint8)
        frame = np.concatenate([frame, alpha], axis=2)

    result = fn(frame, **merged)

    if rgb_input:
        return result[:, :, :3].copy()
    return result


def apply_chain(frame, effects_list: list[dict]):
    """Apply a chain of effects sequentially.

    effects_list: [{"name": "refraction", "params": {"intensity": 0.05}}, ...]

    Each stage reads the fully materialized output of the previous one;
    no stage ever writes into the array it is reading. Entries with
    "bypassed": True are skipped.
    """
    validate_chain_depth(effects_list)

    for idx, effect in enumerate(effects_list):
        if effect.get("bypassed", False):
            logger.debug("stage %d (%s) bypassed", idx, effect.get("name"))
            continue
        name = effect["name"]
        params = dict(effect.get("params", {}))
        logger.debug("stage %d: %s %s", idx, name, params)
        frame = apply_effect(frame, name, **params)

    return frame
