#!/usr/bin/env python3
"""
Liquid Glass -- Glass Overlay Renderer
CLI entry point. Also importable as a library.

Usage:
    python liquidglass.py apply in.png out.png --effect refraction --params intensity=0.05
    python liquidglass.py glass in.png out.png --refraction 0.05 --dispersion 0.02 --depth-effect
    python liquidglass.py glass in.png out.png --preset "Liquid Glass"
    python liquidglass.py list-effects
    python liquidglass.py info dispersion
    python liquidglass.py search fringe
    python liquidglass.py list-presets
"""

import sys
import os
import argparse
import logging

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.glass import render_glass, GLASS_DEFAULTS
from core.image_io import load_surface, save_surface
from effects import EFFECTS, CATEGORIES, apply_effect, apply_chain, list_effects, search_effects
from presets import BUILT_IN_PRESETS, get_preset

__version__ = "0.1.0"

logger = logging.getLogger("liquidglass")


def _parse_param_value(val: str):
    """Safely parse a CLI parameter value (bool, number, or string)."""
    lowered = val.lower().strip()
    if lowered in ("true", "false"):
        return lowered == "true"

    # Reject NaN/Inf as standalone strings
    if lowered in ('nan', 'inf', '-inf', '+inf', 'infinity', '-infinity'):
        raise ValueError(f"NaN/Inf not allowed: {val}")

    # Float
    if '.' in val or 'e' in lowered:
        try:
            f = float(val)
        except ValueError:
            return val  # Keep as string (e.g. "edge_weighted")
        if f != f or f == float('inf') or f == float('-inf'):
            raise ValueError(f"NaN/Inf not allowed: {val}")
        return f

    # Integer
    try:
        return int(val)
    except (ValueError, TypeError):
        return val  # Keep as string


def _parse_params(pairs) -> dict:
    params = {}
    for p in pairs or []:
        if "=" not in p:
            raise ValueError(f"Param must be key=value, got '{p}'")
        key, val = p.split("=", 1)
        params[key.strip()] = _parse_param_value(val)
    return params


def cmd_apply(args):
    """Apply a single effect to an image."""
    if args.effect not in EFFECTS:
        matches = [n for n in EFFECTS if args.effect in n]
        if matches:
            print(f"Error: Unknown effect: {args.effect}. Did you mean: {', '.join(matches)}?", file=sys.stderr)
        else:
            print(f"Error: Unknown effect: {args.effect}. Use 'liquidglass list-effects' to see all.", file=sys.stderr)
        sys.exit(1)

    params = _parse_params(args.params)
    if not params:
        entry = EFFECTS[args.effect]
        params_str = ", ".join(f"{k}={v}" for k, v in entry["params"].items())
        print(f"Using defaults: {params_str}")

    frame = load_surface(args.input)
    result = apply_effect(frame, args.effect, **params)
    out = save_surface(result, args.output)
    print(f"Wrote {out} ({result.shape[1]}x{result.shape[0]})")


def cmd_glass(args):
    """Render the glass stack (refraction -> dispersion -> color -> gamma) over an image."""
    frame = load_surface(args.input)

    if args.preset:
        preset = get_preset(args.preset)
        print(f"Preset: {preset['name']} ({len(preset['effects'])} effects)")
        result = apply_chain(frame, preset["effects"])
    else:
        settings = {
            "refraction_intensity": args.refraction,
            "depth_effect": args.depth_effect,
            "dispersion_intensity": args.dispersion,
            "dispersion_strategy": args.strategy,
            "falloff": args.falloff,
            "saturation": args.saturation,
            "brightness": args.brightness,
            "contrast": args.contrast,
            "gamma": args.gamma,
        }
        result = render_glass(frame, settings)

    out = save_surface(result, args.output)
    print(f"Wrote {out} ({result.shape[1]}x{result.shape[0]})")


def cmd_list_effects(args):
    """List all available effects, grouped by category."""
    compact = getattr(args, "compact", False)
    total = 0
    for cat_key, cat_label in CATEGORIES.items():
        effects = list_effects(category=cat_key)
        if not effects:
            continue
        total += len(effects)
        print(f"\n  {cat_label} ({len(effects)})")
        print(f"  {'-' * 50}")
        for e in effects:
            print(f"    {e['name']:12s} - {e['description']}")
            if not compact:
                params_str = ", ".join(f"{k}={v}" for k, v in e["params"].items())
                print(f"    {'':12s}   Params: {params_str}")
    print(f"\n  Total: {total} effects across {len(CATEGORIES)} categories\n")


def cmd_info(args):
    """Show detailed info about a single effect."""
    name = args.effect_name
    if name not in EFFECTS:
        matches = [n for n in EFFECTS if name in n]
        if matches:
            print(f"Unknown effect: {name}. Did you mean: {', '.join(matches)}?")
        else:
            print(f"Unknown effect: {name}. Use 'liquidglass list-effects' to see all.")
        return

    entry = EFFECTS[name]
    cat = entry.get("category", "other")
    print(f"\n  {name}")
    print(f"  {'-' * 40}")
    print(f"  Category:    {CATEGORIES.get(cat, cat)}")
    print(f"  Description: {entry['description']}")
    print(f"\n  Parameters:")
    for k, v in entry["params"].items():
        rng = entry.get("param_ranges", {}).get(k)
        choices = entry.get("choices", {}).get(k)
        hint = ""
        if rng:
            hint = f"  [{rng['min']} .. {rng['max']}]"
        elif choices:
            hint = f"  ({' | '.join(choices)})"
        print(f"    {k:20s} = {v}{hint}")
    print()


def cmd_search(args):
    """Search effects by name or description."""
    results = search_effects(args.query)
    if not results:
        print(f"No effects matching '{args.query}'.")
        return
    print(f"\n  Results for '{args.query}' ({len(results)} found):")
    for e in results:
        print(f"    {e['name']:12s} [{e['category'].upper():6s}] - {e['description']}")
    print()


def cmd_list_presets(args):
    """List built-in glass presets."""
    for preset in BUILT_IN_PRESETS:
        chain = " -> ".join(e["name"] for e in preset["effects"])
        print(f"  {preset['name']:16s} [{preset['category']}] {chain}")
        print(f"  {'':16s} {preset['description']}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="liquidglass",
        description="Liquid Glass -- refraction, dispersion and tone effects for glass overlays",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("apply", help="Apply a single effect to an image")
    p.add_argument("input", help="Input image")
    p.add_argument("output", help="Output image")
    p.add_argument("--effect", required=True, help="Effect name")
    p.add_argument("--params", nargs="*", help="Effect params as key=value pairs")

    p = sub.add_parser("glass", help="Render the glass stack over an image")
    p.add_argument("input", help="Input image")
    p.add_argument("output", help="Output image")
    p.add_argument("--refraction", type=float, default=GLASS_DEFAULTS["refraction_intensity"],
                   help="Refraction intensity (0-0.1)")
    p.add_argument("--dispersion", type=float, default=GLASS_DEFAULTS["dispersion_intensity"],
                   help="Dispersion intensity (0-0.1)")
    p.add_argument("--strategy", choices=EFFECTS["dispersion"]["choices"]["strategy"],
                   default=GLASS_DEFAULTS["dispersion_strategy"])
    p.add_argument("--falloff", choices=EFFECTS["dispersion"]["choices"]["falloff"],
                   default=GLASS_DEFAULTS["falloff"])
    p.add_argument("--saturation", type=float, default=GLASS_DEFAULTS["saturation"], help="Saturation (1 = unchanged)")
    p.add_argument("--brightness", type=float, default=GLASS_DEFAULTS["brightness"], help="Brightness (1 = unchanged)")
    p.add_argument("--contrast", type=float, default=GLASS_DEFAULTS["contrast"], help="Contrast (1 = unchanged)")
    p.add_argument("--gamma", type=float, default=GLASS_DEFAULTS["gamma"], help="Gamma power (> 0)")
    p.add_argument("--depth-effect", action="store_true", help="Fade warp toward the bottom with parallax")
    p.add_argument("--preset", help="Use a built-in preset instead of the flags above")

    p = sub.add_parser("list-effects", help="List all available effects")
    p.add_argument("--compact", action="store_true", help="Compact view (names only)")

    p = sub.add_parser("info", help="Show detailed info about an effect")
    p.add_argument("effect_name", help="Effect name")

    p = sub.add_parser("search", help="Search effects by name or description")
    p.add_argument("query", help="Search term")

    sub.add_parser("list-presets", help="List built-in glass presets")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "apply": cmd_apply,
        "glass": cmd_glass,
        "list-effects": cmd_list_effects,
        "info": cmd_info,
        "search": cmd_search,
        "list-presets": cmd_list_presets,
    }

    if args.command in commands:
        try:
            commands[args.command](args)
        except Exception as e:
            logger.debug("command %s failed", args.command, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
