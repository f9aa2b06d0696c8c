"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class FontConfig:
    family: str
    weight: int = 400
    size: float = 48
    italic: bool = False
    letter_spacing: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.family, str) or not self.family.strip():
            raise ValueError("Font family must be a non-empty string")
        if isinstance(self.weight, bool) or not isinstance(self.weight, int):
            raise ValueError(f"Font weight must be an integer, got {self.weight!r}")
        if not 100 <= self.weight <= 900:
            raise ValueError(f"Font weight must be within 100..900, got {self.weight}")
        if isinstance(self.size, bool) or not isinstance(self.size, (int, float)) or self.size <= 0:
            raise ValueError(f"Font size must be a positive number, got {self.size!r}")


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
                raise ValueError(f"Color channels must be integers within 0..255, got {channel!r}")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


@dataclass(frozen=True)
class Palette:
    font_a: Color
    font_b: Color
    overlap: Color


@dataclass(frozen=True, eq=False)
class AlphaBitmap:
    """RGBA pixel buffer, row-major with the origin at the top-left corner.

    The wrapped array is switched to read-only on construction so a bitmap
    never changes once built.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) pixel array, got shape {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        self.pixels.setflags(write=False)

    @classmethod
    def blank(cls, width: int, height: int | None = None) -> "AlphaBitmap":
        height = width if height is None else height
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @classmethod
    def from_alpha(cls, alpha: np.ndarray) -> "AlphaBitmap":
        pixels = np.zeros((alpha.shape[0], alpha.shape[1], 4), dtype=np.uint8)
        pixels[..., 3] = alpha
        return cls(pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> "AlphaBitmap":
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    def is_blank(self) -> bool:
        return not bool(self.alpha.any())

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AlphaBitmap):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and bool(np.array_equal(self.pixels, other.pixels))

    __hash__ = None  # type: ignore[assignment]


class RenderScale(str, Enum):
    THUMBNAIL = "thumbnail"
    ENLARGED = "enlarged"

    def canvas_size(self, base: int | None = None) -> int:
        from .palette import CANVAS_SIZE, ENLARGE_FACTOR

        base = CANVAS_SIZE if base is None else base
        if self is RenderScale.ENLARGED:
            return base * ENLARGE_FACTOR
        return base


class PixelClass(IntEnum):
    NEITHER = 0
    ONLY_A = 1
    ONLY_B = 2
    OVERLAP = 3


@dataclass(frozen=True)
class CoverageStats:
    only_a: int
    only_b: int
    overlap: int
    neither: int

    @property
    def total(self) -> int:
        return self.only_a + self.only_b + self.overlap + self.neither

    @property
    def agreement(self) -> float:
        inked = self.only_a + self.only_b + self.overlap
        if inked == 0:
            return 1.0
        return self.overlap / inked


@dataclass(frozen=True)
class ComparisonResult:
    unit: str
    canvas_size: int
    scale: RenderScale | None
    bitmap_a: AlphaBitmap
    bitmap_diff: AlphaBitmap
    bitmap_b: AlphaBitmap

    def bitmaps(self) -> tuple[AlphaBitmap, AlphaBitmap, AlphaBitmap]:
        return (self.bitmap_a, self.bitmap_diff, self.bitmap_b)
