import sys
import unittest
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from fontcompare_renderer.compositor import ShapeMismatchError
from fontcompare_renderer.models import AlphaBitmap, Color, FontConfig
from fontcompare_renderer.palette import COLOR_A, FONT_SIZE_RATIO
from fontcompare_renderer.rasterizer import GlyphRasterizer, PillowBackend, build_font_spec, colorize


class BoxBackend:
    """Draws an RGBA read-back with a centred box sized from the font spec."""

    def __init__(self):
        self.specs = []

    def render_coverage(self, text, spec, canvas_size):
        self.specs.append(spec)
        out = np.zeros((canvas_size, canvas_size, 4), dtype=np.uint8)
        if not text.strip():
            return out
        half = int(spec.pixel_size) // 4
        c = canvas_size // 2
        out[c - half : c + half, c - half : c + half] = (0, 0, 0, 255)
        out[c - half - 1, c - half : c + half] = (12, 34, 56, 10)
        return out


class FontSpecTests(unittest.TestCase):
    def test_quoted_family(self):
        spec = build_font_spec(FontConfig(family="Open Sans", weight=700, italic=True), 120)
        self.assertEqual(spec.css(), 'italic 700 84px "Open Sans"')

    def test_generic_family_unquoted(self):
        for family in ("serif", "sans-serif", "monospace", "system-ui", "ui-monospace"):
            spec = build_font_spec(FontConfig(family=family), 120)
            self.assertEqual(spec.css(), f"normal 400 84px {family}")

    def test_raster_size_follows_canvas_not_display_size(self):
        small = build_font_spec(FontConfig(family="Inter", size=12), 240)
        large = build_font_spec(FontConfig(family="Inter", size=96), 240)
        self.assertEqual(small.pixel_size, 240 * FONT_SIZE_RATIO)
        self.assertEqual(small, large)
        self.assertEqual(small.css(), 'normal 400 168px "Inter"')

    def test_quotes_in_family_are_escaped(self):
        spec = build_font_spec(FontConfig(family='My "Odd" Font'), 100)
        self.assertEqual(spec.family_token(), '"My \\"Odd\\" Font"')


class ColorizeTests(unittest.TestCase):
    def test_colorize_keeps_alpha_and_skips_empty_pixels(self):
        alpha = np.array([[0, 1], [128, 255]], dtype=np.uint8)
        colored = colorize(AlphaBitmap.from_alpha(alpha), Color(10, 20, 30))
        self.assertEqual(tuple(colored.pixels[0, 0]), (0, 0, 0, 0))
        self.assertEqual(tuple(colored.pixels[0, 1]), (10, 20, 30, 1))
        self.assertEqual(tuple(colored.pixels[1, 0]), (10, 20, 30, 128))
        self.assertEqual(tuple(colored.pixels[1, 1]), (10, 20, 30, 255))

    def test_colorize_returns_new_bitmap(self):
        source = AlphaBitmap.from_alpha(np.full((3, 3), 200, dtype=np.uint8))
        colorize(source, COLOR_A)
        self.assertFalse(source.pixels[..., :3].any())


class GlyphRasterizerTests(unittest.TestCase):
    def test_rgb_is_discarded_from_read_back(self):
        rasterizer = GlyphRasterizer(BoxBackend())
        bitmap = rasterizer.rasterize("a", FontConfig(family="Inter"), 120)
        self.assertEqual(bitmap.shape, (120, 120))
        self.assertFalse(bitmap.pixels[..., :3].any())
        self.assertEqual(int(bitmap.alpha.max()), 255)
        self.assertTrue((bitmap.alpha[bitmap.alpha > 0] >= 10).all())

    def test_spec_passed_to_backend(self):
        backend = BoxBackend()
        GlyphRasterizer(backend).rasterize("a", FontConfig(family="Inter", weight=300, italic=True), 120)
        self.assertEqual(backend.specs[0].css(), 'italic 300 84px "Inter"')

    def test_render_colorizes(self):
        bitmap = GlyphRasterizer(BoxBackend()).render("a", FontConfig(family="Inter"), 60, COLOR_A)
        inked = bitmap.alpha > 0
        self.assertTrue((bitmap.pixels[inked, 0] == COLOR_A.r).all())
        self.assertTrue((bitmap.pixels[inked, 2] == COLOR_A.b).all())

    def test_invalid_canvas_size(self):
        rasterizer = GlyphRasterizer(BoxBackend())
        for size in (0, -5, 12.5, True):
            with self.assertRaises(ValueError):
                rasterizer.rasterize("a", FontConfig(family="Inter"), size)

    def test_backend_size_contract(self):
        class WrongSize:
            def render_coverage(self, text, spec, canvas_size):
                return np.zeros((canvas_size, canvas_size + 1), dtype=np.uint8)

        with self.assertRaises(ShapeMismatchError):
            GlyphRasterizer(WrongSize()).rasterize("a", FontConfig(family="Inter"), 10)

    def test_bitmap_is_read_only(self):
        bitmap = GlyphRasterizer(BoxBackend()).rasterize("a", FontConfig(family="Inter"), 20)
        with self.assertRaises(ValueError):
            bitmap.pixels[0, 0, 3] = 1


class PillowBackendTests(unittest.TestCase):
    def test_unregistered_family_falls_back_to_default_font(self):
        rasterizer = GlyphRasterizer(PillowBackend())
        bitmap = rasterizer.rasterize("A", FontConfig(family="Not Installed Anywhere"), 120)
        self.assertEqual(bitmap.shape, (120, 120))
        self.assertFalse(bitmap.is_blank())
        self.assertFalse(bitmap.pixels[..., :3].any())

    def test_glyph_is_centred(self):
        bitmap = GlyphRasterizer(PillowBackend()).rasterize("H", FontConfig(family="sans-serif"), 120)
        ys, xs = np.nonzero(bitmap.alpha > 20)
        self.assertLess(abs(float(xs.mean()) - 60), 12)
        self.assertLess(abs(float(ys.mean()) - 60), 12)

    def test_space_rasterizes_blank(self):
        bitmap = GlyphRasterizer(PillowBackend()).rasterize(" ", FontConfig(family="serif"), 120)
        self.assertTrue(bitmap.is_blank())

    def test_synthesized_oblique_differs_from_upright(self):
        rasterizer = GlyphRasterizer(PillowBackend())
        upright = rasterizer.rasterize("l", FontConfig(family="serif"), 120)
        slanted = rasterizer.rasterize("l", FontConfig(family="serif", italic=True), 120)
        self.assertNotEqual(upright.tobytes(), slanted.tobytes())

    def test_deterministic(self):
        rasterizer = GlyphRasterizer(PillowBackend())
        first = rasterizer.rasterize("g", FontConfig(family="serif", weight=700), 120)
        second = GlyphRasterizer(PillowBackend()).rasterize("g", FontConfig(family="serif", weight=700), 120)
        self.assertEqual(first.tobytes(), second.tobytes())


if __name__ == "__main__":
    unittest.main()
