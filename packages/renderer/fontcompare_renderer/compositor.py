"""Per-pixel presence classification of two glyph bitmaps."""

from __future__ import annotations

import numpy as np

from .models import AlphaBitmap, CoverageStats, Palette, PixelClass
from .palette import ALPHA_THRESHOLD, DEFAULT_PALETTE


class ShapeMismatchError(ValueError):
    def __init__(self, shape_a: tuple[int, int], shape_b: tuple[int, int]) -> None:
        super().__init__(f"Bitmap sizes differ: {shape_a[0]}x{shape_a[1]} vs {shape_b[0]}x{shape_b[1]}")
        self.shape_a = shape_a
        self.shape_b = shape_b


def _check_shapes(bitmap_a: AlphaBitmap, bitmap_b: AlphaBitmap) -> None:
    if bitmap_a.shape != bitmap_b.shape:
        raise ShapeMismatchError(bitmap_a.shape, bitmap_b.shape)


def classify(bitmap_a: AlphaBitmap, bitmap_b: AlphaBitmap) -> np.ndarray:
    """Return a ``PixelClass`` code for every pixel.

    A pixel counts as present only when its alpha is strictly above
    ``ALPHA_THRESHOLD``, so faint anti-aliasing fringes read as empty.
    """
    _check_shapes(bitmap_a, bitmap_b)
    present_a = bitmap_a.alpha > ALPHA_THRESHOLD
    present_b = bitmap_b.alpha > ALPHA_THRESHOLD

    classes = np.full(present_a.shape, PixelClass.NEITHER, dtype=np.uint8)
    classes[present_a & ~present_b] = PixelClass.ONLY_A
    classes[present_b & ~present_a] = PixelClass.ONLY_B
    classes[present_a & present_b] = PixelClass.OVERLAP
    return classes


def composite(bitmap_a: AlphaBitmap, bitmap_b: AlphaBitmap, palette: Palette = DEFAULT_PALETTE) -> AlphaBitmap:
    classes = classify(bitmap_a, bitmap_b)
    alpha_a = bitmap_a.alpha
    alpha_b = bitmap_b.alpha

    out = np.zeros(bitmap_a.pixels.shape, dtype=np.uint8)

    overlap = classes == PixelClass.OVERLAP
    out[overlap, 0:3] = palette.overlap.as_tuple()
    out[overlap, 3] = np.maximum(alpha_a, alpha_b)[overlap]

    only_a = classes == PixelClass.ONLY_A
    out[only_a, 0:3] = palette.font_a.as_tuple()
    out[only_a, 3] = alpha_a[only_a]

    only_b = classes == PixelClass.ONLY_B
    out[only_b, 0:3] = palette.font_b.as_tuple()
    out[only_b, 3] = alpha_b[only_b]

    return AlphaBitmap(out)


def coverage(bitmap_a: AlphaBitmap, bitmap_b: AlphaBitmap) -> CoverageStats:
    counts = np.bincount(classify(bitmap_a, bitmap_b).ravel(), minlength=len(PixelClass))
    return CoverageStats(
        only_a=int(counts[PixelClass.ONLY_A]),
        only_b=int(counts[PixelClass.ONLY_B]),
        overlap=int(counts[PixelClass.OVERLAP]),
        neither=int(counts[PixelClass.NEITHER]),
    )
