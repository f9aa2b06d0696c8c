from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from PIL import ImageFont

import fontcompare_app.cli as cli
from fontcompare_core import config as config_mod


def _isolate(monkeypatch, tmp_path: Path) -> Path:
    cfg_path = tmp_path / "config.json"
    monkeypatch.setattr(config_mod, "config_path", lambda: cfg_path)
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)
    return cfg_path


def test_tokenize_prints_units(monkeypatch, tmp_path, capsys) -> None:
    _isolate(monkeypatch, tmp_path)
    assert cli.main(["tokenize", "a, b"]) == 0
    assert json.loads(capsys.readouterr().out) == ["a,", "b"]


def test_compare_writes_pngs_and_sheet(monkeypatch, tmp_path, capsys) -> None:
    _isolate(monkeypatch, tmp_path)
    out_dir = tmp_path / "out"

    rc = cli.main(["compare", "--chars", "ab", "--out-dir", str(out_dir), "--italic-b"])
    payload = json.loads(capsys.readouterr().out)

    assert rc == 0
    assert payload["success"] is True
    assert payload["canvas_size"] == 120
    assert payload["font_a"] == 'normal 400 84px "Inter"'
    assert payload["font_b"] == 'italic 400 84px "Roboto"'
    assert [u["unit"] for u in payload["units"]] == ["a", "b"]
    assert (out_dir / "sheet.png").exists()
    assert (out_dir / "000_a_diff.png").exists()
    assert (out_dir / "001_b_b.png").exists()


def test_inspect_is_enlarged(monkeypatch, tmp_path, capsys) -> None:
    _isolate(monkeypatch, tmp_path)
    assert cli.main(["inspect", "Q"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["canvas_size"] == 240
    assert payload["coverage"]["neither"] < 240 * 240


def test_fonts_add_list_remove(monkeypatch, tmp_path, capsys) -> None:
    cfg_path = _isolate(monkeypatch, tmp_path)
    font_file = tmp_path / "Fake.ttf"
    font_file.write_bytes(ImageFont.load_default(12).font_bytes)

    assert cli.main(["fonts", "add", "Fake", str(font_file), "--weight", "700"]) == 0
    added = json.loads(capsys.readouterr().out)
    assert added["success"] is True
    assert added["face_name"]
    assert cfg_path.exists()

    assert cli.main(["fonts", "list"]) == 0
    listed = json.loads(capsys.readouterr().out)
    assert listed[0]["family"] == "Fake"
    assert listed[0]["weight"] == 700

    assert cli.main(["fonts", "remove", "fake"]) == 0
    assert json.loads(capsys.readouterr().out)["removed"] == 1


def test_fonts_add_missing_file(monkeypatch, tmp_path, capsys) -> None:
    _isolate(monkeypatch, tmp_path)
    assert cli.main(["fonts", "add", "Ghost", str(tmp_path / "nope.ttf")]) == 2
    assert json.loads(capsys.readouterr().out)["success"] is False


def test_fonts_add_rejects_non_font_file(monkeypatch, tmp_path, capsys) -> None:
    cfg_path = _isolate(monkeypatch, tmp_path)
    bogus = tmp_path / "Bogus.ttf"
    bogus.write_bytes(b"not a font")

    assert cli.main(["fonts", "add", "Bogus", str(bogus)]) == 2
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is False
    assert "not a readable font file" in payload["error"]
    assert not cfg_path.exists()


def test_compare_survives_hand_edited_config(monkeypatch, tmp_path, capsys) -> None:
    cfg_path = _isolate(monkeypatch, tmp_path)
    cfg_path.write_text(
        json.dumps({"config_version": 2, "font_b": "Roboto", "custom_fonts": [{"family": "X", "path": "/x.ttf", "weight": "bold"}]}),
        encoding="utf-8",
    )

    assert cli.main(["compare", "--chars", "a", "--out-dir", str(tmp_path / "out")]) == 0
    assert json.loads(capsys.readouterr().out)["success"] is True

def test_specimen_writes_both_lines(monkeypatch, tmp_path, capsys) -> None:
    _isolate(monkeypatch, tmp_path)
    assert cli.main(["specimen", "--text", "Hello", "--out-dir", str(tmp_path)]) == 0
    files = json.loads(capsys.readouterr().out)["files"]
    assert Path(files["a"]).exists()
    assert Path(files["b"]).exists()
