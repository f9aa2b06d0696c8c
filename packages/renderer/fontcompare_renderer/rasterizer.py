"""Glyph rasterization into square alpha bitmaps plus single-font colorization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .compositor import ShapeMismatchError
from .fonts import FontFace, FontRegistry
from .models import AlphaBitmap, Color, FontConfig
from .palette import FONT_SIZE_RATIO, GENERIC_FAMILIES

_log = logging.getLogger("fontcompare.renderer.rasterizer")


@dataclass(frozen=True)
class FontSpec:
    style: str
    weight: int
    pixel_size: float
    family: str

    @property
    def italic(self) -> bool:
        return self.style == "italic"

    def family_token(self) -> str:
        if self.family.strip().lower() in GENERIC_FAMILIES:
            return self.family.strip()
        escaped = self.family.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    def css(self) -> str:
        return f"{self.style} {self.weight} {self.pixel_size:g}px {self.family_token()}"


def build_font_spec(font: FontConfig, canvas_size: int) -> FontSpec:
    """Raster font spec for a square canvas; ``font.size`` does not affect it."""
    return FontSpec(
        style="italic" if font.italic else "normal",
        weight=int(font.weight),
        pixel_size=canvas_size * FONT_SIZE_RATIO,
        family=font.family,
    )


class RasterBackend(Protocol):
    def render_coverage(self, text: str, spec: FontSpec, canvas_size: int) -> np.ndarray:
        """Draw ``text`` in black ink centred on a cleared square canvas.

        Returns either an (N, N) coverage array or an (N, N, 4) RGBA read-back.
        """
        ...


def shear_image(image: Image.Image, shear: float) -> Image.Image:
    # Shear around the vertical centre so the glyph stays centred.
    _, height = image.size
    return image.transform(
        image.size,
        Image.Transform.AFFINE,
        (1, shear, -shear * height / 2, 0, 1, 0),
        resample=Image.Resampling.BILINEAR,
    )


class PillowBackend:
    """FreeType rasterization through Pillow, resolving families via a registry."""

    OBLIQUE_SHEAR = 0.2

    def __init__(self, registry: FontRegistry | None = None) -> None:
        self.registry = registry if registry is not None else FontRegistry()
        self._fonts: dict[tuple[str | None, int], ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def font_for(self, spec: FontSpec) -> tuple[ImageFont.FreeTypeFont | ImageFont.ImageFont, bool]:
        """Return the loaded font and whether an oblique must be synthesized."""
        face = self.registry.resolve(spec.family, spec.weight, spec.italic)
        size = max(1, int(round(spec.pixel_size)))
        key = (str(face.path) if face is not None else None, size)
        font = self._fonts.get(key)
        if font is None:
            font = self._load(spec, face, size)
            self._fonts[key] = font
        synthesize_oblique = spec.italic and (face is None or not face.italic)
        return font, synthesize_oblique

    def _load(self, spec: FontSpec, face: FontFace | None, size: int):
        if face is not None:
            try:
                return ImageFont.truetype(str(face.path), size)
            except OSError as exc:
                _log.warning(
                    "cannot open %s for %s: %s",
                    face.path,
                    spec.css(),
                    exc,
                    extra={"event": "font_open_failed", "font": spec.css(), "font_path": str(face.path)},
                )
        else:
            _log.debug(
                "family not registered, using default font for %s",
                spec.css(),
                extra={"event": "font_fallback", "font": spec.css()},
            )
        return ImageFont.load_default(size)

    def render_coverage(self, text: str, spec: FontSpec, canvas_size: int) -> np.ndarray:
        font, oblique = self.font_for(spec)
        canvas = Image.new("L", (canvas_size, canvas_size), 0)
        draw = ImageDraw.Draw(canvas)
        centre = canvas_size / 2
        draw.text((centre, centre), text, font=font, fill=255, anchor="mm")
        if oblique:
            canvas = shear_image(canvas, self.OBLIQUE_SHEAR)
        return np.array(canvas, dtype=np.uint8)


def colorize(bitmap: AlphaBitmap, color: Color) -> AlphaBitmap:
    """Paint every inked pixel in ``color``; alpha and empty pixels are kept."""
    pixels = np.array(bitmap.pixels, dtype=np.uint8, copy=True)
    inked = pixels[..., 3] > 0
    pixels[inked, 0:3] = color.as_tuple()
    return AlphaBitmap(pixels)


class GlyphRasterizer:
    def __init__(self, backend: RasterBackend) -> None:
        self.backend = backend

    def rasterize(self, unit: str, font: FontConfig, canvas_size: int) -> AlphaBitmap:
        if isinstance(canvas_size, bool) or not isinstance(canvas_size, int) or canvas_size <= 0:
            raise ValueError(f"Canvas size must be a positive integer, got {canvas_size!r}")

        spec = build_font_spec(font, canvas_size)
        buffer = np.asarray(self.backend.render_coverage(unit, spec, canvas_size))
        if buffer.ndim == 3:
            buffer = buffer[..., 3]
        if buffer.shape != (canvas_size, canvas_size):
            raise ShapeMismatchError((canvas_size, canvas_size), (int(buffer.shape[0]), int(buffer.shape[-1])))
        return AlphaBitmap.from_alpha(buffer.astype(np.uint8, copy=False))

    def render(self, unit: str, font: FontConfig, canvas_size: int, color: Color) -> AlphaBitmap:
        return colorize(self.rasterize(unit, font, canvas_size), color)
