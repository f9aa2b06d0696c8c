import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from fontcompare_renderer.tokenizer import DEFAULT_CHARACTERS, tokenize


class TokenizerTests(unittest.TestCase):
    def test_character_mode(self):
        self.assertEqual(tokenize("abc"), ["a", "b", "c"])

    def test_word_mode(self):
        self.assertEqual(tokenize("the quick"), ["the", "quick"])

    def test_punctuation_kept_in_word_mode(self):
        self.assertEqual(tokenize("a, b"), ["a,", "b"])

    def test_word_mode_drops_empty_segments(self):
        self.assertEqual(tokenize("  fi   fl "), ["fi", "fl"])

    def test_character_mode_drops_whitespace(self):
        self.assertEqual(tokenize("a\tb\nc"), ["a", "b", "c"])

    def test_empty_input(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("   "), [])

    def test_default_set(self):
        self.assertEqual(tokenize(DEFAULT_CHARACTERS), ["a", "f", "r", "t", "c", "G", "Q", "R", "1", "%"])

    def test_combining_marks_are_split(self):
        # Code points, not grapheme clusters.
        self.assertEqual(tokenize("e\u0301"), ["e", "\u0301"])


if __name__ == "__main__":
    unittest.main()
