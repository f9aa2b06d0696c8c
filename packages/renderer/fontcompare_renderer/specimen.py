"""Sample-line rendering at a font's display size and letter spacing."""

from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw

from .models import AlphaBitmap, Color, FontConfig
from .rasterizer import FontSpec, PillowBackend, shear_image, colorize


def _spec(font: FontConfig) -> FontSpec:
    return FontSpec(
        style="italic" if font.italic else "normal",
        weight=int(font.weight),
        pixel_size=float(font.size),
        family=font.family,
    )


def render_specimen(
    text: str,
    font: FontConfig,
    color: Color,
    backend: PillowBackend,
    padding: int = 8,
) -> AlphaBitmap:
    """Draw ``text`` on one line, advancing each character by its width plus spacing.

    Characters are placed independently, no kerning pairs are applied.
    """
    spec = _spec(font)
    pil_font, oblique = backend.font_for(spec)

    advances = [pil_font.getlength(ch) + font.letter_spacing for ch in text]
    ascent, descent = pil_font.getmetrics() if hasattr(pil_font, "getmetrics") else (int(font.size), 0)
    line_width = max(0.0, sum(advances) - (font.letter_spacing if text else 0.0))

    width = int(np.ceil(line_width)) + padding * 2
    height = ascent + descent + padding * 2
    slant = int(np.ceil(height * PillowBackend.OBLIQUE_SHEAR)) if oblique else 0
    width += slant

    canvas = Image.new("L", (max(width, 1), max(height, 1)), 0)
    draw = ImageDraw.Draw(canvas)
    x = float(padding + slant // 2)
    for ch, advance in zip(text, advances):
        draw.text((x, padding + ascent), ch, font=pil_font, fill=255, anchor="ls")
        x += advance

    if oblique:
        canvas = shear_image(canvas, PillowBackend.OBLIQUE_SHEAR)

    return colorize(AlphaBitmap.from_alpha(np.array(canvas, dtype=np.uint8)), color)
