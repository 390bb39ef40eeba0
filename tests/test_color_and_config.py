from __future__ import annotations

from pathlib import Path

import pytest

from wavepng.errors import ArgumentError, ConfigError, ParseColorError
from wavepng.model.types import Rgba
from wavepng.util.color import format_hex_color, parse_hex_color
from wavepng.util.config import AppConfig, load_config, save_config


def test_parse_hex_color() -> None:
    assert parse_hex_color("1e1e1eff") == Rgba(0x1E, 0x1E, 0x1E, 0xFF)
    assert parse_hex_color("#00FFFF80") == Rgba(0, 255, 255, 128)
    assert parse_hex_color("00000000") == Rgba.TRANSPARENT_BLACK
    assert format_hex_color(Rgba(0, 255, 255, 128)) == "#00ffff80"


@pytest.mark.parametrize("bad", ["", "fff", "ffffff", "fffffffff", "gg0000ff", "12 456 8"])
def test_malformed_color_is_an_error_not_black(bad: str) -> None:
    with pytest.raises(ParseColorError):
        parse_hex_color(bad)
    # surfaced through the CLI as an argument error
    assert issubclass(ParseColorError, ArgumentError)


def test_config_defaults_when_no_file(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("WAVEPNG_CONFIG", raising=False)
    cfg = load_config()
    assert cfg == AppConfig()
    assert (cfg.width, cfg.height) == (1920, 300)


def test_config_yaml_round_trip(tmp_path: Path) -> None:
    p = save_config(AppConfig(width=640, height=120, background="1e1e1eff", foreground="00ffffff"), tmp_path / "c.yaml")
    cfg = load_config(p)
    assert cfg.width == 640
    assert cfg.height == 120
    assert cfg.background == "1e1e1eff"
    assert cfg.foreground == "00ffffff"


def test_config_from_env(monkeypatch, tmp_path: Path) -> None:
    p = tmp_path / "env.yaml"
    p.write_text("width: 64\nforeground: \"ff0000ff\"\nunknown_key: 1\n", encoding="utf-8")
    monkeypatch.setenv("WAVEPNG_CONFIG", str(p))
    cfg = load_config()
    assert cfg.width == 64
    assert cfg.height == 300
    assert cfg.foreground == "ff0000ff"


def test_bad_config_files_raise(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")

    lst = tmp_path / "list.yaml"
    lst.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(lst)

    unquoted = tmp_path / "unquoted.yaml"
    unquoted.write_text("background: 00000000\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(unquoted)

    width = tmp_path / "width.yaml"
    width.write_text("width: wide\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(width)
