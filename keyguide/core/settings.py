"""Highlight engine settings loaded from YAML."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "data" / "settings.yaml"


@dataclass
class HighlightSettings:
    """Tunables for the highlight engines and the practice session."""

    case_sensitive: bool = False
    press_clear_ms: int = 200
    reveal_delay_ms: int = 1000
    progressive_reveal: bool = False
    ghost_speed: float = 2.0  # characters per second


def load_settings(path: Optional[Path] = None) -> HighlightSettings:
    """Load settings from YAML. Unknown keys are ignored.

    A missing or unreadable file falls back to defaults with a warning; a file
    with a value of the wrong type raises ``ValueError``.
    """
    path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not path.exists():
        logger.warning("Settings file not found: %s, using defaults", path)
        return HighlightSettings()
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Could not load settings from %s: %s", path, e)
        return HighlightSettings()

    if raw is None:
        return HighlightSettings()
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name}: expected a YAML mapping")
    return _from_mapping(raw, path.name)


def _from_mapping(raw: Dict[str, Any], source: str) -> HighlightSettings:
    settings = HighlightSettings()
    for f in fields(HighlightSettings):
        if f.name not in raw:
            continue
        value = raw[f.name]
        default = getattr(settings, f.name)
        if isinstance(default, bool):
            if not isinstance(value, bool):
                raise ValueError(f"{source}: '{f.name}' must be true or false")
        elif isinstance(default, int):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{source}: '{f.name}' must be a non-negative integer")
        elif isinstance(default, float):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(f"{source}: '{f.name}' must be a positive number")
            value = float(value)
        setattr(settings, f.name, value)
    return settings
