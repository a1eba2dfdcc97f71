#!/usr/bin/env python3
"""
Hush — Responsive Type Motion
CLI entry point. Also importable as a library.

Usage:
    python hush.py play
    python hush.py play --size 1920x1080 --texture A1.png --font EBGaramond-Regular.ttf
    python hush.py still --seed 7 --frame 120 --out exports
    python hush.py render --frames 300 --out frames --pointer 640,400
    python hush.py info --seed 7
    python hush.py list-effects
"""

import sys
import os
import math
import logging
import argparse

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.safety import validate_viewport
from core.scene import SceneConfig, DEFAULT_VIEWPORT, TARGET_FPS, create_scene
from effects import list_effects, list_categories, CATEGORIES

__version__ = "0.1.0"


def _parse_size(val: str) -> tuple:
    """Parse 'WxH' → (W, H)."""
    parts = val.lower().replace(" ", "").split("x")
    if len(parts) != 2:
        raise ValueError(f"Size must be WxH (e.g. 1920x1080), got: {val}")
    w, h = int(parts[0]), int(parts[1])
    validate_viewport(w, h)
    return w, h


def _parse_pointer(val: str) -> tuple:
    """Parse 'x,y' → (x, y) floats, rejecting NaN/Inf."""
    parts = val.replace(" ", "").split(",")
    if len(parts) != 2:
        raise ValueError(f"Pointer must be x,y, got: {val}")
    x, y = float(parts[0]), float(parts[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"NaN/Inf not allowed: {val}")
    return x, y


def _config_from_args(args) -> SceneConfig:
    w, h = _parse_size(args.size)
    return SceneConfig(
        width=w,
        height=h,
        seed=args.seed,
        fps=args.fps,
        font_path=args.font,
        texture_path=args.texture,
    )


def cmd_play(args):
    """Open the live window."""
    from core.performer import HushPerformer
    performer = HushPerformer(_config_from_args(args), output_dir=args.out)
    performer.run()


def cmd_still(args):
    """Render one frame and save it."""
    from core.render import render_still
    from core.image_io import export_frame
    pointer = _parse_pointer(args.pointer) if args.pointer else None
    frame = render_still(_config_from_args(args), frame_index=args.frame, pointer=pointer)
    path = export_frame(frame, args.out)
    print(f"Saved frame {args.frame}: {path}")


def cmd_render(args):
    """Render a PNG sequence."""
    from core.render import render_sequence
    if args.frames <= 0:
        print(f"Nothing to render (--frames {args.frames}).", file=sys.stderr)
        return
    pointer = _parse_pointer(args.pointer) if args.pointer else None
    paths = render_sequence(_config_from_args(args), args.frames, args.out, pointer=pointer)
    print(f"Wrote {len(paths)} frames to {args.out}")


def cmd_info(args):
    """Show the session parameters a seed produces."""
    state = create_scene(_config_from_args(args))
    t = state.params.tracking
    print(f"\n  Seed {state.params.seed} @ {state.width}x{state.height}")
    print(f"  {'—' * 50}")
    print(f"  Tracking: hush={t.hush:.4f} soft={t.soft:.4f} breathe={t.breathe:.4f} symbol={t.symbol:.4f}")
    for i, h in enumerate(state.hushes):
        print(f"  hush {i}: ({h.x:.1f}, {h.y:.1f}) size {h.size:.1f}")
    fallbacks = sum(1 for f in state.floaters if f.fallback)
    print(f"  Floaters: {len(state.floaters)} "
          f"({state.params.breathe_count} breathe), {fallbacks} placed by fallback")
    for f in state.floaters:
        print(f"    {f.text.value:8s} ({f.x:7.1f}, {f.y:7.1f}) size {f.size:.1f}")
    print(f"  Symbols: {len(state.symbols)}")
    print()


def cmd_list_effects(args):
    """List backdrop effects."""
    for cat in list_categories():
        effects = list_effects(cat)
        if not effects:
            continue
        print(f"\n  {CATEGORIES[cat]}")
        for e in effects:
            print(f"    {e['name']:12s} — {e['description']}")
    print()


def _add_scene_args(p):
    p.add_argument("--size", default=f"{DEFAULT_VIEWPORT[0]}x{DEFAULT_VIEWPORT[1]}",
                   help="Viewport size WxH")
    p.add_argument("--seed", type=int, default=None, help="Session seed (random if omitted)")
    p.add_argument("--fps", type=int, default=TARGET_FPS, help="Target frame rate")
    p.add_argument("--font", default=None, help="Path to a .ttf/.otf font (EB Garamond recommended)")
    p.add_argument("--texture", default=None, help="Background texture image")


def main():
    parser = argparse.ArgumentParser(
        prog="hush",
        description="Hush — generative type motion",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    # play
    p = sub.add_parser("play", help="Open the live window (hover to fade, S to save)")
    _add_scene_args(p)
    p.add_argument("--out", default=".", help="Directory for saved frames")

    # still
    p = sub.add_parser("still", help="Render a single frame to PNG")
    _add_scene_args(p)
    p.add_argument("--frame", type=int, default=0, help="Frame number")
    p.add_argument("--pointer", help="Pointer position 'x,y' (default: off-canvas)")
    p.add_argument("--out", default=".", help="Output directory")

    # render
    p = sub.add_parser("render", help="Render a PNG sequence")
    _add_scene_args(p)
    p.add_argument("--frames", type=int, default=TARGET_FPS * 5, help="Number of frames")
    p.add_argument("--pointer", help="Pointer position 'x,y' (default: off-canvas)")
    p.add_argument("--out", default="frames", help="Output directory")

    # info
    p = sub.add_parser("info", help="Show the parameters a seed generates")
    _add_scene_args(p)

    # list-effects
    sub.add_parser("list-effects", help="List backdrop effects")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "play": cmd_play,
        "still": cmd_still,
        "render": cmd_render,
        "info": cmd_info,
        "list-effects": cmd_list_effects,
    }

    if args.command in commands:
        try:
            commands[args.command](args)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
