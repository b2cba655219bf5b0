"""Text rasterization onto a certificate canvas."""

import os
from typing import Optional, Tuple

import arabic_reshaper
from bidi.algorithm import get_display
from PIL import Image, ImageDraw, ImageFont

from .errors import FontLoadError, FontNotFound, NilTargetError, RenderError


# 40 pt at 72 DPI
FONT_SIZE_PT = 40
DPI = 72
BLACK = (0, 0, 0, 255)


def point_to_pixels(points: float, dpi: int = DPI) -> int:
    return int(round(points * dpi / 72))


def visual_text(text: str) -> str:
    """Reshape and reorder right-to-left scripts into left-to-right drawing order."""
    return get_display(arabic_reshaper.reshape(text))


class GlyphRenderer:
    """
    Holds one parsed font and draws strings with it.

    The font is read once; the renderer can be shared by every certificate
    of a batch since drawing never mutates it.
    """

    def __init__(self, font_path: str, size_pt: int = FONT_SIZE_PT):
        if not os.path.isfile(font_path):
            raise FontNotFound(font_path)

        self.size_px = point_to_pixels(size_pt)
        try:
            self.font = ImageFont.truetype(font_path, self.size_px)
        except OSError as exc:
            raise FontLoadError(f"Cannot parse font {font_path}: {exc}") from exc

    def draw(
        self,
        canvas: Optional[Image.Image],
        text: str,
        x: int,
        y: int,
        fill: Tuple[int, int, int, int] = BLACK,
    ) -> None:
        """
        Draw ``text`` starting at (x, y). The anchor is the top of the line:
        the baseline sits one em below it, at ``y + size_px``.
        """
        if canvas is None:
            raise NilTargetError("nil canvas")

        baseline = (x, y + self.size_px)
        try:
            ImageDraw.Draw(canvas).text(baseline, visual_text(text), font=self.font, fill=fill, anchor="ls")
        except (ValueError, OSError) as exc:
            raise RenderError(f"Cannot draw {text!r}: {exc}") from exc
