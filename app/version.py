# -*- coding: utf-8 -*-
"""Desk version: version.json beside the sources, else installed metadata."""

from __future__ import annotations

import json
from importlib import metadata
from pathlib import Path

DIST_NAME = "tidyco-desk"
_FALLBACK = "0.0.0"


def _from_version_file() -> str:
    path = Path(__file__).resolve().parents[1] / "version.json"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return ""
    if not isinstance(data, dict):
        return ""
    return str(data.get("version") or "")


def _from_metadata() -> str:
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return ""


__version__ = _from_version_file() or _from_metadata() or _FALLBACK
