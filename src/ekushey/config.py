"""
Keyboard settings loaded from a TOML file.

Example ``ekushey.toml``:

    [keyboard]
    default_layout = "Avro"
    enabled_layouts = ["English", "Avro", "Jatiyo"]

    [typing]
    auto_vowel_forming = true
    double_space_period = true
    double_space_interval = 0.3
"""

from __future__ import annotations

import dataclasses
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ekushey.engine import EngineConfig
from ekushey.layouts import Layout

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "ekushey.toml"


def _default_layouts() -> list[Layout]:
    return [Layout.ENGLISH, Layout.BANGLA_AVRO, Layout.BANGLA_JATIYO]


@dataclass(slots=True)
class KeyboardSettings:
    default_layout: Layout = Layout.ENGLISH
    enabled_layouts: list[Layout] = field(default_factory=_default_layouts)
    engine: EngineConfig = field(default_factory=EngineConfig)

    @classmethod
    def from_dict(cls, cfg: dict[str, Any]) -> KeyboardSettings:
        """Build settings from parsed TOML; missing keys keep their defaults."""
        settings = cls()

        kb_cfg = cfg.get("keyboard", {})
        enabled = kb_cfg.get("enabled_layouts")
        if enabled is not None:
            if not isinstance(enabled, list):
                raise ValueError("[keyboard] enabled_layouts must be a list of layout names")
            settings.enabled_layouts = [Layout.from_name(name) for name in enabled]
        default = kb_cfg.get("default_layout")
        if default is not None:
            settings.default_layout = Layout.from_name(default)
        elif settings.enabled_layouts:
            settings.default_layout = settings.enabled_layouts[0]

        typing_cfg = cfg.get("typing", {})
        options = {}
        for f in dataclasses.fields(EngineConfig):
            if f.name not in typing_cfg:
                continue
            value = typing_cfg[f.name]
            expected = type(f.default)
            if expected is float and isinstance(value, int) and not isinstance(value, bool):
                value = float(value)
            if not isinstance(value, expected):
                raise ValueError(
                    f"[typing] {f.name} must be {expected.__name__}, got {value!r}"
                )
            options[f.name] = value
        unknown = set(typing_cfg) - {f.name for f in dataclasses.fields(EngineConfig)}
        if unknown:
            log.debug("ignoring unknown [typing] keys: %s", ", ".join(sorted(unknown)))
        settings.engine = EngineConfig(**options)

        return settings


def load_settings(config_path: str | Path = DEFAULT_CONFIG_NAME) -> KeyboardSettings:
    """Read keyboard settings from a TOML file."""
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with config_path.open("rb") as f:
        cfg = tomllib.load(f)

    return KeyboardSettings.from_dict(cfg)
