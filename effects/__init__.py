"""
Hush — Effects Registry
Backdrop painters behind a uniform interface.
Every effect is a function: (frame: np.ndarray, **params) -> np.ndarray
"""

import inspect

from effects.backdrop import animated_gradient, side_tint, vignette, texture_cover

# Master registry: name -> (function, default_params, description)
EFFECTS = {
    # === BACKDROP ===
    "gradient": {
        "fn": animated_gradient,
        "category": "backdrop",
        "params": {},
        "description": "Two-color vertical gradient with slowly breathing end colors",
    },
    "sidetint": {
        "fn": side_tint,
        "category": "backdrop",
        "params": {"max_alpha": 80},
        "description": "Soft aqua tint fading from the left edge to the right",
    },
    "vignette": {
        "fn": vignette,
        "category": "backdrop",
        "params": {"alpha": 70, "weight": 120, "blur": 26.0},
        "description": "Blurred white glow bleeding in from the viewport edges",
    },
    "texture": {
        "fn": texture_cover,
        "category": "backdrop",
        "params": {"texture": None, "alpha": 80, "key": None},
        "description": "Texture image scaled to cover the frame (skipped if not loaded)",
    },
}

CATEGORIES = {
    "backdrop": "BACKDROP",
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


def apply_effect(frame, effect_name: str, frame_index: int = 0, **params):
    """Apply a named effect to a frame with given params."""
    fn, defaults = get_effect(effect_name)
    merged = {**defaults, **params}

    # Inject temporal context for effects that need it
    if "frame_index" in inspect.signature(fn).parameters:
        merged["frame_index"] = frame_index

    return fn(frame, **merged)


def apply_chain(frame, effects_list: list[dict], frame_index: int = 0):
    """Apply a chain of effects sequentially.

    effects_list: [{"name": "vignette", "params": {"alpha": 70}}, ...]
    Entries with "bypassed": True are skipped.
    """
    from core.safety import validate_chain_depth
    validate_chain_depth(effects_list)

    for effect in effects_list:
        if effect.get("bypassed", False):
            continue
        params = dict(effect.get("params", {}))
        frame = apply_effect(frame, effect["name"], frame_index=frame_index, **params)

    return frame
