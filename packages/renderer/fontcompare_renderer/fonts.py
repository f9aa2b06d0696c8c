"""Local font registry mapping family names to font files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import ImageFont

_log = logging.getLogger("fontcompare.renderer.fonts")


def read_font_name(path: str | Path) -> tuple[str, str]:
    """Open a font file with FreeType and return its (family, style) names.

    Raises OSError when the file is missing or is not a font Pillow can load.
    """
    font = ImageFont.truetype(str(path), 12)
    family, style = font.getname()
    return family or "", style or ""


@dataclass(frozen=True)
class FontFace:
    family: str
    path: Path
    weight: int = 400
    italic: bool = False


class FontRegistry:
    """Faces available to the raster backend, keyed by case-insensitive family.

    A family only becomes resolvable once at least one face is registered for
    it; rendering an unregistered family silently uses the backend default.
    """

    def __init__(self, faces: list[FontFace] | None = None) -> None:
        self._faces: dict[str, list[FontFace]] = {}
        for face in faces or []:
            self.add(face)

    def register(self, family: str, path: str | Path, weight: int = 400, italic: bool = False) -> FontFace:
        face = FontFace(family=family, path=Path(path).expanduser(), weight=int(weight), italic=bool(italic))
        self.add(face)
        return face

    def add(self, face: FontFace) -> None:
        if not face.family.strip():
            raise ValueError("Font family must be a non-empty string")
        key = face.family.strip().casefold()
        faces = [f for f in self._faces.get(key, []) if (f.weight, f.italic) != (face.weight, face.italic)]
        faces.append(face)
        self._faces[key] = faces
        _log.debug("registered face %s %s%s -> %s", face.family, face.weight, " italic" if face.italic else "", face.path)

    def remove(self, family: str) -> int:
        removed = self._faces.pop(family.strip().casefold(), [])
        return len(removed)

    def families(self) -> list[str]:
        return sorted({faces[0].family for faces in self._faces.values() if faces})

    def faces(self, family: str | None = None) -> list[FontFace]:
        if family is not None:
            return list(self._faces.get(family.strip().casefold(), []))
        return [face for faces in self._faces.values() for face in faces]

    def is_available(self, family: str) -> bool:
        return bool(self._faces.get(family.strip().casefold()))

    def resolve(self, family: str, weight: int = 400, italic: bool = False) -> FontFace | None:
        """Pick the registered face closest to the requested weight and style.

        Faces with the requested style win over faces without it; ties on
        weight distance go to the heavier face when asking for bold-ish
        weights (above 400) and the lighter face otherwise.
        """
        candidates = self._faces.get(family.strip().casefold())
        if not candidates:
            return None

        def rank(face: FontFace) -> tuple[int, int, int]:
            style_penalty = 0 if face.italic == italic else 1
            distance = abs(face.weight - weight)
            if weight > 400:
                tie_break = -face.weight
            else:
                tie_break = face.weight
            return (style_penalty, distance, tie_break)

        return min(candidates, key=rank)
