"""
App settings — JSON on disk, merged over defaults on load.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "settings.json"

# Default settings (used if JSON doesn't exist yet)
DEFAULT_CONFIG: Dict[str, Any] = {
    "db_path": None,
    "log_file": "productivity_hub.log",
    "log_level": "INFO",
    "start_view": "DASHBOARD",
    "pomodoro": {
        "work_minutes": 25,
        "short_break_minutes": 5,
        "long_break_minutes": 15,
        "sessions_before_long_break": 4,
    },
    "sound": {
        "enabled": True,
        "volume": 0.5,
    },
    "assistant": {
        "model": "gemini-1.5-flash",
    },
}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or CONFIG_PATH
    merged = copy.deepcopy(DEFAULT_CONFIG)
    if not path.exists():
        return merged
    try:
        with open(path, encoding="utf-8") as f:
            cfg = json.load(f)
        if not isinstance(cfg, dict):
            raise ValueError("top level must be an object")
    except (json.JSONDecodeError, ValueError, OSError):
        logger.warning("Bad settings file at %s, using defaults.", path)
        return merged

    # Merge nested sections key-by-key so a partial file keeps the rest
    for key, value in cfg.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
