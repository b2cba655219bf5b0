"""Flag badges: loading, resizing and compositing."""

import os

from PIL import Image, UnidentifiedImageError

from .errors import BadgeNotFound, DecodeError, RenderError


BADGE_WIDTH = 80


def badge_path(flags_dir: str, country_code: str) -> str:
    return os.path.join(flags_dir, f"{country_code}.png")


def load_badge(flags_dir: str, country_code: str, width: int = BADGE_WIDTH) -> Image.Image:
    """
    Load the flag for ``country_code`` and scale it to ``width`` pixels,
    keeping its aspect ratio.
    """
    path = badge_path(flags_dir, country_code)
    if not os.path.isfile(path):
        raise BadgeNotFound(path)

    try:
        with Image.open(path) as img:
            flag = img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise DecodeError(f"Cannot decode badge {path}: {exc}") from exc

    height = max(1, round(flag.height * width / flag.width))
    return flag.resize((width, height), Image.Resampling.LANCZOS)


def draw_badge(canvas: Image.Image, badge: Image.Image, x: int, y: int) -> None:
    """Alpha-composite ``badge`` over the canvas with its top-left corner at (x, y)."""
    if canvas is None or badge is None:
        raise RenderError("nil image or badge")
    try:
        canvas.alpha_composite(badge, dest=(x, y))
    except ValueError as exc:
        raise RenderError(f"Cannot place badge at ({x}, {y}): {exc}") from exc
