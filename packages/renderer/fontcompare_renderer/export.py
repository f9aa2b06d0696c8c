"""PNG output for comparison frames and whole comparison sheets."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from PIL import Image

from .models import ComparisonResult

SHEET_BACKGROUND = (255, 255, 255)
SHEET_GAP = 8


def unit_stem(unit: str) -> str:
    """Filesystem-safe name for a display unit; non-alphanumerics become code points."""
    parts = []
    for ch in unit:
        if ch.isascii() and ch.isalnum():
            parts.append(ch)
        else:
            parts.append(f"U+{ord(ch):04X}")
    return "_".join(parts) if any(not p.isalnum() for p in parts) else "".join(parts)


def save_result(result: ComparisonResult, out_dir: Path, index: int | None = None) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = unit_stem(result.unit)
    if index is not None:
        stem = f"{index:03d}_{stem}"

    paths = []
    for suffix, bitmap in (("a", result.bitmap_a), ("diff", result.bitmap_diff), ("b", result.bitmap_b)):
        path = out_dir / f"{stem}_{suffix}.png"
        bitmap.to_image().save(path, format="PNG")
        paths.append(path)
    return paths


def build_sheet(results: Sequence[ComparisonResult], gap: int = SHEET_GAP) -> Image.Image:
    """Stack rows of (A | diff | B) on a white background."""
    if not results:
        return Image.new("RGB", (gap, gap), SHEET_BACKGROUND)

    cell = max(r.canvas_size for r in results)
    width = gap + 3 * (cell + gap)
    height = gap + len(results) * (cell + gap)
    sheet = Image.new("RGBA", (width, height), SHEET_BACKGROUND + (255,))

    for row, result in enumerate(results):
        y = gap + row * (cell + gap)
        for col, bitmap in enumerate(result.bitmaps()):
            x = gap + col * (cell + gap)
            tile = bitmap.to_image()
            sheet.alpha_composite(tile, (x, y))

    return sheet.convert("RGB")


def save_sheet(results: Sequence[ComparisonResult], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    build_sheet(results).save(path, format="PNG")
    return path
