# -*- coding: utf-8 -*-
"""Form diff engine (pure, test-friendly).

Decides whether a form's live values differ from a baseline snapshot.

Normalization rules (applied recursively):
- ``""`` and ``None`` are the same value, and a dict key holding either
  compares equal to a missing key.
- lists, tuples and sets are compared order-independently.
- integral floats compare equal to ints (spin boxes report ``2.0`` for ``2``).
- everything else is compared structurally; ``0`` and ``False`` stay distinct
  from ``None``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def normalize_for_comparison(value: Any) -> Any:
    """Return a normalized copy of *value* suitable for structural comparison."""
    if _is_empty(value):
        return None
    if isinstance(value, Mapping):
        out: Dict[str, Any] = {}
        for key, raw in value.items():
            norm = normalize_for_comparison(raw)
            if norm is None:
                continue
            out[str(key)] = norm
        return out
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [normalize_for_comparison(v) for v in value]
        return sorted(items, key=_canonical)
    if isinstance(value, float) and not isinstance(value, bool) and value.is_integer():
        return int(value)
    return value


def _canonical(value: Any) -> str:
    # bool is serialized as true/false and int as digits, so 0/False/None never collide
    return json.dumps(value, sort_keys=True, ensure_ascii=False, default=str)


def is_form_dirty(current: Any, baseline: Any) -> bool:
    """True if *current* differs from *baseline* after normalization."""
    return _canonical(normalize_for_comparison(current)) != _canonical(normalize_for_comparison(baseline))


def changed_fields(current: Mapping[str, Any] | None, baseline: Mapping[str, Any] | None) -> List[str]:
    """Top-level keys whose normalized values differ, sorted by name."""
    cur = current or {}
    base = baseline or {}
    keys = set(cur.keys()) | set(base.keys())
    out = []
    for key in keys:
        if is_form_dirty(cur.get(key), base.get(key)):
            out.append(str(key))
    return sorted(out)
