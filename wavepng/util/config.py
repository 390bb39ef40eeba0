from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from wavepng.errors import ConfigError
from wavepng.util.limits import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND, DEFAULT_HEIGHT, DEFAULT_WIDTH

CONFIG_ENV = "WAVEPNG_CONFIG"


def default_config_dir() -> Path:
    return Path.home() / ".config" / "wavepng"


def default_config_path() -> Path:
    return default_config_dir() / "config.yaml"


@dataclass
class AppConfig:
    """Render defaults; command-line flags override them."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    background: str = DEFAULT_BACKGROUND  # RRGGBBAA
    foreground: str = DEFAULT_FOREGROUND

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "background": self.background,
            "foreground": self.foreground,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "AppConfig":
        def _color(key: str, default: str) -> str:
            v = d.get(key, default)
            # Unquoted 00000000 loads as an int in YAML; the digits are gone by then.
            if not isinstance(v, str):
                raise ConfigError(f"{key} must be a quoted RRGGBBAA string, got {v!r}")
            return v.strip()

        try:
            width = int(d.get("width", DEFAULT_WIDTH))
            height = int(d.get("height", DEFAULT_HEIGHT))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid config value: {e}") from e

        return AppConfig(
            width=width,
            height=height,
            background=_color("background", DEFAULT_BACKGROUND),
            foreground=_color("foreground", DEFAULT_FOREGROUND),
        )


def _resolve_path(path: Path | None) -> Path | None:
    if path is not None:
        return Path(path).expanduser()
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    p = default_config_path()
    return p if p.exists() else None


def load_config(path: Path | None = None) -> AppConfig:
    """Load render defaults.

    Lookup: explicit path, then $WAVEPNG_CONFIG, then ~/.config/wavepng/config.yaml.
    An explicit (or env) path that does not exist is an error; a missing default
    file just means built-in defaults.
    """

    p = _resolve_path(path)
    if p is None:
        return AppConfig()
    if not p.is_file():
        raise ConfigError(f"config file not found: {p}")

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping/object: {p}")
    return AppConfig.from_dict(data)


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    p = Path(path) if path is not None else default_config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(yaml.safe_dump(cfg.to_dict(), sort_keys=True), encoding="utf-8")
    return p
