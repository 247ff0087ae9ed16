"""User settings stored as JSON under ~/.config/evo.

Only keys known to ``evo config`` are written; unknown keys found in the
file are kept as they are.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def global_config_dir() -> Path:
    directory = Path.home() / ".config" / "evo"
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _config_file() -> Path:
    return global_config_dir() / CONFIG_FILENAME


def load_global_config() -> dict[str, Any]:
    """Settings from the config file; an unreadable file counts as empty."""
    path = _config_file()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def save_global_config(config: dict[str, Any]) -> None:
    _config_file().write_text(json.dumps(config, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def config_value(key: str, default: Any = None) -> Any:
    return load_global_config().get(key, default)
