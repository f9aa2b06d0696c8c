"""One comparison row: font A, the presence diff, and font B."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable

from .compositor import ShapeMismatchError, composite, coverage
from .models import ComparisonResult, CoverageStats, FontConfig, Palette, RenderScale
from .palette import CANVAS_SIZE, DEFAULT_PALETTE
from .rasterizer import GlyphRasterizer, RasterBackend, colorize

_log = logging.getLogger("fontcompare.renderer.frame")


@dataclass(frozen=True)
class FrameRow:
    unit: str
    result: ComparisonResult | None
    stats: CoverageStats | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class ComparisonFrame:
    """Renders the A / diff / B triple for a display unit at any canvas size.

    Thumbnail and enlarged views go through the same code path; the scale
    only selects the canvas size.
    """

    def __init__(self, backend: RasterBackend, palette: Palette = DEFAULT_PALETTE) -> None:
        self.rasterizer = GlyphRasterizer(backend)
        self.palette = palette

    def render(
        self,
        unit: str,
        font_a: FontConfig,
        font_b: FontConfig,
        canvas_size: int = CANVAS_SIZE,
        scale: RenderScale | None = None,
    ) -> ComparisonResult:
        raw_a = self.rasterizer.rasterize(unit, font_a, canvas_size)
        raw_b = self.rasterizer.rasterize(unit, font_b, canvas_size)

        return ComparisonResult(
            unit=unit,
            canvas_size=canvas_size,
            scale=scale,
            bitmap_a=colorize(raw_a, self.palette.font_a),
            bitmap_diff=composite(raw_a, raw_b, self.palette),
            bitmap_b=colorize(raw_b, self.palette.font_b),
        )

    def render_scaled(
        self,
        unit: str,
        font_a: FontConfig,
        font_b: FontConfig,
        scale: RenderScale = RenderScale.THUMBNAIL,
        base: int = CANVAS_SIZE,
    ) -> ComparisonResult:
        scale = RenderScale(scale)
        return self.render(unit, font_a, font_b, scale.canvas_size(base), scale=scale)

    def render_many(
        self,
        units: Iterable[str],
        font_a: FontConfig,
        font_b: FontConfig,
        scale: RenderScale = RenderScale.THUMBNAIL,
        base: int = CANVAS_SIZE,
    ) -> list[FrameRow]:
        """Render units one after another.

        A size mismatch fails only its own row; the remaining units still render.
        """
        rows: list[FrameRow] = []
        started = time.perf_counter()
        for unit in units:
            try:
                result = self.render_scaled(unit, font_a, font_b, scale=scale, base=base)
            except ShapeMismatchError as exc:
                _log.warning("frame for %r failed: %s", unit, exc, extra={"event": "frame_shape_mismatch", "unit": unit})
                rows.append(FrameRow(unit=unit, result=None, error=str(exc)))
                continue
            rows.append(FrameRow(unit=unit, result=result, stats=coverage(result.bitmap_a, result.bitmap_b)))

        _log.info(
            "rendered %d units at %s in %.1f ms",
            len(rows),
            RenderScale(scale).value,
            (time.perf_counter() - started) * 1000,
            extra={"event": "frames_rendered", "scale": RenderScale(scale).value},
        )
        return rows
