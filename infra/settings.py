# -*- coding: utf-8 -*-
"""
User settings stored in a per-user writable folder (no admin).

Values are coerced to the type of their default once, when loaded, so the
rest of the app can read them without further checks.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from infra.paths import drafts_dir, user_data_dir

SETTINGS_FILENAME = "tidyco_settings.json"
log = logging.getLogger(__name__)


def settings_file() -> Path:
    return user_data_dir() / SETTINGS_FILENAME


def _defaults() -> Dict[str, Any]:
    return {
        "drafts_enabled": True,
        "draft_debounce_ms": 1000,
        "draft_max_age_hours": 24.0,
        "route_history_limit": 50,
    }


def get_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def get_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def get_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off", ""):
            return False
        return bool(default)
    if isinstance(value, (int, float)):
        return bool(value)
    return bool(default)


def normalize_settings(data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge *data* over the defaults, coercing known keys to the default's type."""
    out = _defaults()
    for key, raw in (data or {}).items():
        if raw is None:
            continue
        default = out.get(key)
        if isinstance(default, bool):
            out[key] = get_bool(raw, default)
        elif isinstance(default, int):
            out[key] = get_int(raw, default)
        elif isinstance(default, float):
            out[key] = get_float(raw, default)
        else:
            out[key] = raw
        if key in ("draft_debounce_ms", "route_history_limit") and out[key] < 0:
            out[key] = default
    return out


def load_settings() -> Dict[str, Any]:
    defaults = _defaults()
    path = settings_file()
    if not path.exists():
        save_settings(defaults.copy())
        return defaults.copy()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        # Recover from corruption gracefully
        log.warning("Settings file unreadable; restoring defaults", exc_info=True)
        save_settings(defaults.copy())
        return defaults.copy()
    if not isinstance(data, dict):
        log.warning("Settings file is not an object; using defaults")
        return defaults.copy()
    return normalize_settings(data)


def save_settings(data: Dict[str, Any]) -> None:
    path = settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def repair_user_space() -> None:
    """Repair per-user writable data.

    Safe to run without admin rights; wired to the ``--repair`` flag. It:
    - Resets settings to defaults
    - Deletes every stored draft
    """
    try:
        path = settings_file()
        if path.exists():
            path.unlink()
    except OSError:
        log.warning("Could not remove settings file", exc_info=True)
    # Best-effort: drop drafts so a corrupt one can't keep prompting
    try:
        for p in drafts_dir().glob("*.json"):
            try:
                p.unlink()
            except OSError:
                log.debug("Could not remove draft %s", p, exc_info=True)
    except OSError:
        log.debug("Drafts folder not accessible", exc_info=True)
    save_settings(_defaults())
