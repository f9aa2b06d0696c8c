"""Glyph rasterization and presence-diff comparison engine."""

from .compositor import ShapeMismatchError, classify, composite, coverage
from .export import build_sheet, save_result, save_sheet
from .fonts import FontFace, FontRegistry, read_font_name
from .frame import ComparisonFrame, FrameRow
from .models import (
    AlphaBitmap,
    Color,
    ComparisonResult,
    CoverageStats,
    FontConfig,
    Palette,
    PixelClass,
    RenderScale,
)
from .palette import (
    ALPHA_THRESHOLD,
    CANVAS_SIZE,
    COLOR_A,
    COLOR_B,
    COLOR_OVERLAP,
    DEFAULT_PALETTE,
    ENLARGE_FACTOR,
    FONT_SIZE_RATIO,
)
from .rasterizer import FontSpec, GlyphRasterizer, PillowBackend, RasterBackend, build_font_spec, colorize
from .specimen import render_specimen
from .tokenizer import DEFAULT_CHARACTERS, tokenize

__all__ = [
    "ALPHA_THRESHOLD",
    "AlphaBitmap",
    "CANVAS_SIZE",
    "COLOR_A",
    "COLOR_B",
    "COLOR_OVERLAP",
    "Color",
    "ComparisonFrame",
    "ComparisonResult",
    "CoverageStats",
    "DEFAULT_CHARACTERS",
    "DEFAULT_PALETTE",
    "ENLARGE_FACTOR",
    "FONT_SIZE_RATIO",
    "FontConfig",
    "FontFace",
    "FontRegistry",
    "FontSpec",
    "FrameRow",
    "GlyphRasterizer",
    "Palette",
    "PillowBackend",
    "PixelClass",
    "RasterBackend",
    "RenderScale",
    "ShapeMismatchError",
    "build_font_spec",
    "build_sheet",
    "classify",
    "colorize",
    "composite",
    "coverage",
    "read_font_name",
    "render_specimen",
    "save_result",
    "save_sheet",
    "tokenize",
]
