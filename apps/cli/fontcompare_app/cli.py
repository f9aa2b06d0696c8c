"""CLI entrypoints for font comparison, inspection, specimens, and the font registry."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from fontcompare_core import (
    AppConfig,
    FontSlotConfig,
    add_custom_font,
    load_config,
    remove_custom_font,
    save_config,
)
from fontcompare_core.logging_setup import configure_logging, get_logger
from fontcompare_renderer import (
    COLOR_A,
    COLOR_B,
    ComparisonFrame,
    CoverageStats,
    FontConfig,
    FontRegistry,
    PillowBackend,
    RenderScale,
    build_font_spec,
    coverage,
    read_font_name,
    render_specimen,
    save_result,
    save_sheet,
    tokenize,
)

DEFAULT_OUT_DIR = "fontcompare-out"


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _weight(value: str) -> int:
    try:
        weight = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid weight: {value!r}") from None
    if not 100 <= weight <= 900:
        raise argparse.ArgumentTypeError("weight must be within 100..900")
    return weight


def _font_config(slot: FontSlotConfig, args: argparse.Namespace, suffix: str) -> FontConfig:
    family = getattr(args, f"family_{suffix}", None) or slot.family
    weight = getattr(args, f"weight_{suffix}", None) or slot.weight
    italic = getattr(args, f"italic_{suffix}", None)
    return FontConfig(
        family=family,
        weight=int(weight),
        size=slot.size,
        italic=slot.italic if italic is None else bool(italic),
        letter_spacing=slot.letter_spacing,
    )


def _build_backend(cfg: AppConfig) -> PillowBackend:
    registry = FontRegistry()
    for font in cfg.custom_fonts:
        registry.register(font.family, font.path, weight=font.weight, italic=font.italic)
    return PillowBackend(registry)


def _out_dir(args: argparse.Namespace, cfg: AppConfig) -> Path:
    raw = getattr(args, "out_dir", None) or cfg.export.output_dir or DEFAULT_OUT_DIR
    return Path(raw).expanduser().resolve()


def _stats_payload(stats: CoverageStats) -> dict[str, object]:
    payload: dict[str, object] = asdict(stats)
    payload["agreement"] = round(stats.agreement, 4)
    return payload


def cmd_compare(args: argparse.Namespace) -> int:
    cfg = load_config()
    font_a = _font_config(cfg.font_a, args, "a")
    font_b = _font_config(cfg.font_b, args, "b")
    units = tokenize(cfg.compare.characters if args.chars is None else args.chars)
    scale = RenderScale(args.scale or cfg.compare.scale)
    out_dir = _out_dir(args, cfg)

    backend = _build_backend(cfg)
    frame = ComparisonFrame(backend)
    rows = frame.render_many(units, font_a, font_b, scale=scale)

    results = []
    for index, row in enumerate(rows):
        if row.result is not None:
            save_result(row.result, out_dir, index=index)
            results.append(row.result)
    sheet = save_sheet(results, out_dir / "sheet.png")

    _print_json(
        {
            "success": all(row.ok for row in rows),
            "scale": scale.value,
            "canvas_size": scale.canvas_size(),
            "font_a": build_font_spec(font_a, scale.canvas_size()).css(),
            "font_b": build_font_spec(font_b, scale.canvas_size()).css(),
            "out_dir": str(out_dir),
            "sheet": str(sheet),
            "units": [
                {
                    "unit": row.unit,
                    "error": row.error,
                    "coverage": _stats_payload(row.stats) if row.stats is not None else None,
                }
                for row in rows
            ],
        }
    )
    return 0 if all(row.ok for row in rows) else 2


def cmd_inspect(args: argparse.Namespace) -> int:
    cfg = load_config()
    font_a = _font_config(cfg.font_a, args, "a")
    font_b = _font_config(cfg.font_b, args, "b")

    frame = ComparisonFrame(_build_backend(cfg))
    result = frame.render_scaled(args.unit, font_a, font_b, scale=RenderScale.ENLARGED)

    payload: dict[str, object] = {
        "unit": result.unit,
        "canvas_size": result.canvas_size,
        "coverage": _stats_payload(coverage(result.bitmap_a, result.bitmap_b)),
    }
    if args.out_dir:
        paths = save_result(result, _out_dir(args, cfg))
        payload["files"] = [str(p) for p in paths]
    _print_json(payload)
    return 0


def cmd_tokenize(args: argparse.Namespace) -> int:
    _print_json(tokenize(args.text))
    return 0


def cmd_specimen(args: argparse.Namespace) -> int:
    cfg = load_config()
    text = cfg.compare.sample_text if args.text is None else args.text
    out_dir = _out_dir(args, cfg)
    out_dir.mkdir(parents=True, exist_ok=True)
    backend = _build_backend(cfg)

    files = {}
    for suffix, slot, color in (("a", cfg.font_a, COLOR_A), ("b", cfg.font_b, COLOR_B)):
        bitmap = render_specimen(text, _font_config(slot, args, suffix), color, backend)
        path = out_dir / f"specimen_{suffix}.png"
        bitmap.to_image().save(path, format="PNG")
        files[suffix] = str(path)

    _print_json({"text": text, "files": files})
    return 0


def cmd_fonts_list(_args: argparse.Namespace) -> int:
    cfg = load_config()
    _print_json([asdict(f) for f in cfg.custom_fonts])
    return 0


def cmd_fonts_add(args: argparse.Namespace) -> int:
    path = Path(args.path).expanduser().resolve()
    if not path.is_file():
        _print_json({"success": False, "error": f"font file not found: {path}"})
        return 2
    try:
        face_name = read_font_name(path)
    except OSError as exc:
        get_logger().warning(
            "rejected font file %s: %s", path, exc, extra={"event": "custom_font_rejected", "font_path": str(path)}
        )
        _print_json({"success": False, "error": f"not a readable font file: {path} ({exc})"})
        return 2

    cfg = load_config()
    entry = add_custom_font(cfg, args.family, str(path), weight=args.weight, italic=args.italic)
    save_config(cfg)
    get_logger().info(
        "custom font added: %s", entry.family, extra={"event": "custom_font_added", "font_path": entry.path}
    )
    _print_json({"success": True, "font": asdict(entry), "face_name": " ".join(part for part in face_name if part)})
    return 0


def cmd_fonts_remove(args: argparse.Namespace) -> int:
    cfg = load_config()
    removed = remove_custom_font(cfg, args.family)
    save_config(cfg)
    _print_json({"success": removed > 0, "removed": removed})
    return 0 if removed else 2


def cmd_config_show(_args: argparse.Namespace) -> int:
    _print_json(asdict(load_config()))
    return 0


def _add_font_overrides(cmd: argparse.ArgumentParser) -> None:
    for suffix in ("a", "b"):
        label = suffix.upper()
        cmd.add_argument(f"--family-{suffix}", default=None, help=f"Font {label} family override")
        cmd.add_argument(f"--weight-{suffix}", type=_weight, default=None, help=f"Font {label} weight (100-900)")
        cmd.add_argument(
            f"--italic-{suffix}",
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Render font {label} italic",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fontcompare", description="Compare glyphs of two font configurations")
    sub = parser.add_subparsers(dest="command", required=True)

    compare_cmd = sub.add_parser("compare", help="Render the comparison table for a character set")
    compare_cmd.add_argument("--chars", default=None, help="Characters, or space separated words, to compare")
    compare_cmd.add_argument("--scale", choices=[s.value for s in RenderScale], default=None)
    compare_cmd.add_argument("--out-dir", default=None, help="Directory for PNG output")
    _add_font_overrides(compare_cmd)
    compare_cmd.set_defaults(func=cmd_compare)

    inspect_cmd = sub.add_parser("inspect", help="Render one unit enlarged")
    inspect_cmd.add_argument("unit")
    inspect_cmd.add_argument("--out-dir", default=None, help="Write the enlarged PNGs here")
    _add_font_overrides(inspect_cmd)
    inspect_cmd.set_defaults(func=cmd_inspect)

    tok_cmd = sub.add_parser("tokenize", help="Show how input text splits into display units")
    tok_cmd.add_argument("text")
    tok_cmd.set_defaults(func=cmd_tokenize)

    spec_cmd = sub.add_parser("specimen", help="Render a sample line in both fonts")
    spec_cmd.add_argument("--text", default=None)
    spec_cmd.add_argument("--out-dir", default=None)
    _add_font_overrides(spec_cmd)
    spec_cmd.set_defaults(func=cmd_specimen)

    fonts_cmd = sub.add_parser("fonts", help="Manage registered font files")
    fonts_sub = fonts_cmd.add_subparsers(dest="fonts_cmd", required=True)
    list_cmd = fonts_sub.add_parser("list", help="List registered fonts")
    list_cmd.set_defaults(func=cmd_fonts_list)
    add_cmd = fonts_sub.add_parser("add", help="Register a font file under a family name")
    add_cmd.add_argument("family")
    add_cmd.add_argument("path")
    add_cmd.add_argument("--weight", type=_weight, default=400)
    add_cmd.add_argument("--italic", action="store_true")
    add_cmd.set_defaults(func=cmd_fonts_add)
    remove_cmd = fonts_sub.add_parser("remove", help="Forget every face of a family")
    remove_cmd.add_argument("family")
    remove_cmd.set_defaults(func=cmd_fonts_remove)

    config_cmd = sub.add_parser("config", help="Settings")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print effective settings")
    show_cmd.set_defaults(func=cmd_config_show)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(keep_files=load_config().logging.keep_log_files, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
