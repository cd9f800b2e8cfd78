# -*- coding: utf-8 -*-
"""Simple event bus for dirty-state and navigation notifications (no UI dependency)."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Type


@dataclass(frozen=True)
class DirtyStateChanged:
    snapshot: Any
    form_id: Optional[str] = None


@dataclass(frozen=True)
class GuardStateChanged:
    old_state: Any
    new_state: Any


@dataclass(frozen=True)
class DraftSaved:
    key: str
    ok: bool = True
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class DraftCleared:
    key: str
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class DraftDiscarded:
    """The user chose Discard on the draft dialog for ``form_id``."""

    form_id: str


class EventBus:
    """Minimal in-process event bus (best-effort)."""

    def __init__(self) -> None:
        self._subs: Dict[Type[Any], List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[Any], callback: Callable[[Any], None]) -> None:
        self._subs.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: Type[Any], callback: Callable[[Any], None]) -> None:
        subs = self._subs.get(event_type) or []
        if callback in subs:
            subs.remove(callback)

    def emit(self, event: Any) -> None:
        for cb in list(self._subs.get(type(event), []) or []):
            try:
                cb(event)
            except Exception:
                # Best-effort: never break a state transition for event handlers
                logging.getLogger(__name__).debug("Event handler failed.", exc_info=True)

