"""
Liquid Glass -- Built-in Presets
Named glass looks. Each preset is a recipe: a chain of effects with tuned
parameters, applied in order with apply_chain().

Categories:
    Clear       -- Mostly transparent glass, light warp
    Prism       -- Strong color fringing
    Tinted      -- Tone-shifted glass
"""

BUILT_IN_PRESETS = [
    # =========================================================================
    # CLEAR
    # =========================================================================
    {
        "name": "Clear Lens",
        "description": "Thin glass pane. Soft outward warp toward the edges, no fringing.",
        "category": "Clear",
        "effects": [
            {"name": "refraction", "params": {"intensity": 0.03, "depth_effect": False}},
        ],
        "tags": ["subtle", "lens", "clean"],
    },
    {
        "name": "Tilted Pane",
        "description": "Glass viewed at an angle. Warp fades toward the bottom with a slight parallax push.",
        "category": "Clear",
        "effects": [
            {"name": "refraction", "params": {"intensity": 0.05, "depth_effect": True}},
        ],
        "tags": ["depth", "parallax"],
    },
    # =========================================================================
    # PRISM
    # =========================================================================
    {
        "name": "Liquid Glass",
        "description": "The default glass overlay: lens warp with a light red/blue fringe.",
        "category": "Prism",
        "effects": [
            {"name": "refraction", "params": {"intensity": 0.05, "depth_effect": True}},
            {"name": "dispersion", "params": {"intensity": 0.02, "strategy": "axis_split"}},
        ],
        "tags": ["default", "glass", "fringe"],
    },
    {
        "name": "Prism Core",
        "description": "Fringing strongest at the center of the pane, red and green pulled outward.",
        "category": "Prism",
        "effects": [
            {"name": "dispersion", "params": {"intensity": 0.05, "strategy": "radial_split",
                                              "falloff": "edge_weighted"}},
        ],
        "tags": ["prism", "center", "chromatic"],
    },
    # =========================================================================
    # TINTED
    # =========================================================================
    {
        "name": "Smoked Glass",
        "description": "Muted, darkened tone behind a gentle lens.",
        "category": "Tinted",
        "effects": [
            {"name": "refraction", "params": {"intensity": 0.04}},
            {"name": "color", "params": {"saturation": 0.7, "brightness": 0.95}},
            {"name": "gamma", "params": {"power": 1.6}},
        ],
        "tags": ["dark", "tint"],
    },
    {
        "name": "Frosted Bright",
        "description": "Lifted shadows with edge fringing.",
        "category": "Tinted",
        "effects": [
            {"name": "dispersion", "params": {"intensity": 0.03}},
            {"name": "gamma", "params": {"power": 0.7}},
        ],
        "tags": ["bright", "airy"],
    },
]


def get_preset(name: str) -> dict:
    """Look up a built-in preset by name (case-insensitive)."""
    for preset in BUILT_IN_PRESETS:
        if preset["name"].lower() == name.lower():
            return preset
    available = ", ".join(p["name"] for p in BUILT_IN_PRESETS)
    raise ValueError(f"Unknown preset: {name}. Available: {available}")
