"""Split a character-set input into display units."""

from __future__ import annotations

DEFAULT_CHARACTERS = "afrtcGQR1%"


def tokenize(raw: str) -> list[str]:
    """Word mode when the input holds a space, character mode otherwise.

    Punctuation is kept as part of its token. Characters are code points,
    not grapheme clusters, so combining sequences may be split apart.
    """
    if " " in raw:
        return [part for part in raw.split(" ") if part]
    return [ch for ch in raw if ch.strip()]
