"""
Hush — Safety & Resource Guards
Preflight checks for the files the animation touches: the texture asset
it loads and the directory exported frames are written to.
"""

import os
from pathlib import Path

# --- Configurable Limits ---
MAX_TEXTURE_MB = 50        # Maximum texture file size
MIN_DISK_MB = 50           # Minimum free disk space for exports
MAX_CHAIN_DEPTH = 10       # Maximum effects in a chain
MAX_VIEWPORT_PX = 8192     # Largest accepted viewport edge
ALLOWED_TEXTURE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif", ".tif", ".tiff"}


class SafetyError(Exception):
    """Raised when a preflight check fails."""
    pass


def preflight_texture(texture_path: str) -> dict:
    """Run all checks before loading a texture image.

    Returns:
        dict with file metadata (path, size_mb, extension).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SafetyError: If the file is too large or not a supported image type.
    """
    real_path = os.path.realpath(str(texture_path))

    if not os.path.isfile(real_path):
        raise FileNotFoundError(f"Texture not found: {texture_path}")

    size_mb = os.path.getsize(real_path) / (1024 * 1024)
    if size_mb > MAX_TEXTURE_MB:
        raise SafetyError(
            f"Texture is {size_mb:.0f}MB, exceeds {MAX_TEXTURE_MB}MB limit."
        )

    ext = Path(real_path).suffix.lower()
    if ext not in ALLOWED_TEXTURE_EXTENSIONS:
        raise SafetyError(
            f"Texture type '{ext}' not supported. "
            f"Supported: {', '.join(sorted(ALLOWED_TEXTURE_EXTENSIONS))}"
        )

    return {
        "path": real_path,
        "size_mb": size_mb,
        "extension": ext,
    }


def preflight_output(output_dir: str) -> Path:
    """Make sure exported frames can be written to `output_dir`.

    Creates the directory if needed.

    Raises:
        SafetyError: If the path is not a writable directory or the disk is full.
    """
    output_dir = Path(output_dir)
    if output_dir.exists() and not output_dir.is_dir():
        raise SafetyError(f"Output path is not a directory: {output_dir}")
    output_dir.mkdir(parents=True, exist_ok=True)

    if not os.access(output_dir, os.W_OK):
        raise SafetyError(f"Output directory is not writable: {output_dir}")

    try:
        stat = os.statvfs(output_dir)
        free_mb = (stat.f_bavail * stat.f_frsize) / (1024 ** 2)
        if free_mb < MIN_DISK_MB:
            raise SafetyError(
                f"Only {free_mb:.0f}MB free disk space, need {MIN_DISK_MB}MB minimum."
            )
    except (OSError, AttributeError):
        pass  # Can't check disk space (no statvfs on Windows)

    return output_dir


def validate_viewport(width: int, height: int) -> None:
    """Check a requested viewport size.

    Raises:
        SafetyError: If either edge is non-positive or larger than MAX_VIEWPORT_PX.
    """
    for name, value in (("width", width), ("height", height)):
        if value <= 0:
            raise SafetyError(f"Viewport {name} must be positive, got {value}")
        if value > MAX_VIEWPORT_PX:
            raise SafetyError(f"Viewport {name} {value} exceeds {MAX_VIEWPORT_PX}px limit")


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
