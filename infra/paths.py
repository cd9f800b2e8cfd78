# -*- coding: utf-8 -*-
"""
Centralized path resolver for per-user writable data: settings, logs and
drafts (no admin required).
"""
from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "TidyCo"
HOME_ENV = "TIDYCO_HOME"


def user_data_dir() -> Path:
    """
    Per-user writable directory (no admin).

    ``TIDYCO_HOME`` wins (tests, portable installs), then LOCALAPPDATA (non-roaming).
    """
    override = os.getenv(HOME_ENV)
    if override:
        p = Path(override)
    else:
        base = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA") or str(Path.home())
        p = Path(base) / APP_NAME
    p.mkdir(parents=True, exist_ok=True)
    return p


def ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p


def logs_dir() -> Path:
    return ensure_dir(user_data_dir() / "logs")


def drafts_dir() -> Path:
    return ensure_dir(user_data_dir() / "drafts")
