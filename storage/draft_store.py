# -*- coding: utf-8 -*-
"""Draft snapshot storage.

Each draft is a small JSON file in the per-user drafts folder:

    <prefix><key>.json  ->  {"data": {...}, "timestamp": <epoch ms>}

Overwrite semantics (last write wins). Drafts older than ``max_age_hours``
are deleted when read or purged at startup.

Best-effort: a failing disk must never block form editing, so write errors
are logged and reported as ``False``.
"""
from __future__ import annotations

import json
import logging
import os
import re
import tempfile
import time
from pathlib import Path
from typing import Any, List, Optional

log = logging.getLogger(__name__)

DEFAULT_PREFIX = "tidyco_draft_"
DEFAULT_MAX_AGE_HOURS = 24.0

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]+")


def _now_ms(now: Optional[float]) -> int:
    return int((time.time() if now is None else float(now)) * 1000)


class DraftStore:
    def __init__(
        self,
        directory: Path | str,
        *,
        max_age_hours: float = DEFAULT_MAX_AGE_HOURS,
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._dir = Path(directory)
        self._prefix = str(prefix or "")
        try:
            self._max_age_ms = int(float(max_age_hours) * 3600 * 1000)
        except (TypeError, ValueError):
            self._max_age_ms = int(DEFAULT_MAX_AGE_HOURS * 3600 * 1000)

    @property
    def directory(self) -> Path:
        return self._dir

    def storage_key(self, key: str) -> str:
        return self._prefix + _SAFE_KEY.sub("_", str(key or "").strip())

    def path_for(self, key: str) -> Path:
        return self._dir / f"{self.storage_key(key)}.json"

    # --------- write ---------
    def save(self, key: str, data: Any, *, now: Optional[float] = None) -> bool:
        payload = {"data": data, "timestamp": _now_ms(now)}
        path = self.path_for(key)
        tmp_name = ""
        try:
            text = json.dumps(payload, ensure_ascii=False, indent=2)
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=path.stem, suffix=".tmp", dir=str(self._dir))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, path)
            tmp_name = ""
            return True
        except (OSError, TypeError, ValueError):
            log.warning("Error saving draft %s", key, exc_info=True)
            return False
        finally:
            if tmp_name:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

    def delete(self, key: str) -> bool:
        try:
            self.path_for(key).unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError:
            log.warning("Error clearing draft %s", key, exc_info=True)
            return False

    # --------- read ---------
    def _read_payload(self, path: Path) -> Optional[dict]:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError):
            log.warning("Unreadable draft %s; removing it", path.name, exc_info=True)
            self._remove(path)
            return None
        if not isinstance(payload, dict) or "data" not in payload:
            log.warning("Malformed draft %s; removing it", path.name)
            self._remove(path)
            return None
        return payload

    def _is_expired(self, payload: dict, now: Optional[float]) -> bool:
        try:
            ts = int(payload.get("timestamp") or 0)
        except (TypeError, ValueError):
            return True
        if ts <= 0:
            return True
        return _now_ms(now) - ts >= self._max_age_ms

    def load(self, key: str, *, now: Optional[float] = None) -> Any:
        path = self.path_for(key)
        payload = self._read_payload(path)
        if payload is None:
            return None
        if self._is_expired(payload, now):
            log.info("Draft %s expired; removing it", key)
            self._remove(path)
            return None
        return payload.get("data")

    def exists(self, key: str, *, now: Optional[float] = None) -> bool:
        return self.load(key, now=now) is not None

    def keys(self) -> List[str]:
        if not self._dir.exists():
            return []
        out = []
        for p in sorted(self._dir.glob(f"{self._prefix}*.json")):
            out.append(p.stem[len(self._prefix):])
        return out

    def purge_expired(self, *, now: Optional[float] = None) -> int:
        removed = 0
        for key in self.keys():
            path = self.path_for(key)
            payload = self._read_payload(path)
            if payload is None:
                removed += 1
                continue
            if self._is_expired(payload, now) and self._remove(path):
                removed += 1
        if removed:
            log.info("Purged %d stale draft(s)", removed)
        return removed

    def clear(self) -> int:
        removed = 0
        for key in self.keys():
            if self.delete(key):
                removed += 1
        return removed

    @staticmethod
    def _remove(path: Path) -> bool:
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError:
            log.debug("Could not remove draft file %s", path, exc_info=True)
            return False
