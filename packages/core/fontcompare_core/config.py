"""Persistent comparison settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 2
SCALES = ("thumbnail", "enlarged")


@dataclass
class FontSlotConfig:
    family: str = "Inter"
    weight: int = 400
    size: float = 48
    italic: bool = False
    letter_spacing: float = 0.0


@dataclass
class CompareConfig:
    characters: str = "afrtcGQR1%"
    sample_text: str = "The quick brown fox jumps over the lazy dog"
    scale: str = "thumbnail"


@dataclass
class ExportConfig:
    output_dir: str | None = None


@dataclass
class LoggingConfig:
    keep_log_files: int = 7


@dataclass
class CustomFont:
    family: str = ""
    path: str = ""
    weight: int = 400
    italic: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    font_a: FontSlotConfig = field(default_factory=FontSlotConfig)
    font_b: FontSlotConfig = field(default_factory=lambda: FontSlotConfig(family="Roboto"))
    compare: CompareConfig = field(default_factory=CompareConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    custom_fonts: list[CustomFont] = field(default_factory=list)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "FontCompare"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "FontCompare"
    return Path.home() / ".config" / "fontcompare"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(defaults, raw: Any):
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_weight(value: Any) -> int:
    try:
        weight = int(value)
    except (TypeError, ValueError):
        weight = 400
    return max(100, min(900, int(round(weight / 100.0)) * 100))


def _normalize_slot(slot: FontSlotConfig, fallback_family: str) -> None:
    if not isinstance(slot.family, str) or not slot.family.strip():
        slot.family = fallback_family
    slot.weight = _normalize_weight(slot.weight)
    try:
        slot.size = max(1.0, float(slot.size))
    except (TypeError, ValueError):
        slot.size = 48.0
    slot.italic = bool(slot.italic)
    try:
        slot.letter_spacing = float(slot.letter_spacing)
    except (TypeError, ValueError):
        slot.letter_spacing = 0.0


def _normalize_compare(cfg: AppConfig) -> None:
    if cfg.compare.scale not in SCALES:
        cfg.compare.scale = "thumbnail"
    if not isinstance(cfg.compare.characters, str):
        cfg.compare.characters = CompareConfig().characters
    if not isinstance(cfg.compare.sample_text, str):
        cfg.compare.sample_text = CompareConfig().sample_text
    if not isinstance(cfg.export.output_dir, str) or not cfg.export.output_dir.strip():
        cfg.export.output_dir = None
    try:
        cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))
    except (TypeError, ValueError):
        cfg.logging.keep_log_files = LoggingConfig().keep_log_files


def _load_custom_fonts(raw: Any) -> list[CustomFont]:
    fonts: list[CustomFont] = []
    if not isinstance(raw, list):
        return fonts
    for entry in raw:
        font = _merge(CustomFont(), entry)
        if not isinstance(font.family, str) or not font.family.strip():
            continue
        if not isinstance(font.path, str) or not font.path.strip():
            continue
        font.weight = _normalize_weight(font.weight)
        font.italic = bool(font.italic)
        fonts.append(font)
    return fonts


def _version(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 1


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = _version(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept custom fonts as a family -> path mapping with a single face each.
        legacy = data.get("custom_fonts", {}) or {}
        if isinstance(legacy, dict):
            data["custom_fonts"] = [{"family": family, "path": path} for family, path in legacy.items()]
        data.setdefault("export", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=_version(data.get("config_version", CONFIG_VERSION)),
        font_a=_merge(FontSlotConfig(), data.get("font_a", {})),
        font_b=_merge(FontSlotConfig(family="Roboto"), data.get("font_b", {})),
        compare=_merge(CompareConfig(), data.get("compare", {})),
        export=_merge(ExportConfig(), data.get("export", {})),
        logging=_merge(LoggingConfig(), data.get("logging", {})),
        custom_fonts=_load_custom_fonts(data.get("custom_fonts")),
    )

    _normalize_slot(cfg.font_a, "Inter")
    _normalize_slot(cfg.font_b, "Roboto")
    _normalize_compare(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def add_custom_font(cfg: AppConfig, family: str, path: str, weight: int = 400, italic: bool = False) -> CustomFont:
    entry = CustomFont(family=family, path=path, weight=weight, italic=italic)
    cfg.custom_fonts = [
        f for f in cfg.custom_fonts if (f.family.casefold(), f.weight, f.italic) != (family.casefold(), weight, italic)
    ]
    cfg.custom_fonts.append(entry)
    return entry


def remove_custom_font(cfg: AppConfig, family: str) -> int:
    before = len(cfg.custom_fonts)
    cfg.custom_fonts = [f for f in cfg.custom_fonts if f.family.casefold() != family.casefold()]
    return before - len(cfg.custom_fonts)
