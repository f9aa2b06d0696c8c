"""Role colors and raster constants shared with every consumer of the bitmaps."""

from __future__ import annotations

from .models import Color, Palette

CANVAS_SIZE = 120
FONT_SIZE_RATIO = 0.7
ALPHA_THRESHOLD = 20
ENLARGE_FACTOR = 2

COLOR_A = Color(0, 188, 212)
COLOR_B = Color(233, 30, 99)
COLOR_OVERLAP = Color(0, 0, 0)

DEFAULT_PALETTE = Palette(font_a=COLOR_A, font_b=COLOR_B, overlap=COLOR_OVERLAP)

# Families a font-spec parser understands without quoting.
GENERIC_FAMILIES: frozenset[str] = frozenset(
    {
        "serif",
        "sans-serif",
        "monospace",
        "cursive",
        "fantasy",
        "system-ui",
        "ui-serif",
        "ui-sans-serif",
        "ui-monospace",
        "ui-rounded",
        "math",
        "emoji",
        "fangsong",
    }
)
