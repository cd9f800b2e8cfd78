# -*- coding: utf-8 -*-
"""Draft autosave for new-entity forms (no-Qt).

Used by forms whose entity has no id yet. The live values are written to the
DraftStore after ``debounce_ms`` of inactivity, so a user who leaves halfway
through can pick up later. The form is registered as a DRAFT form; it counts
as dirty whenever any field differs from the empty/default form.

Timing is expressed with explicit ``now`` values so the debounce can be
tested without an event loop. ui/common/draft_timer.py drives it with a
single-shot QTimer.
"""
from __future__ import annotations

import copy
import logging
import time
from typing import Any, Optional

from app.events import DraftCleared, DraftDiscarded, DraftSaved
from app.unsaved_changes import FormKind, FormRegistration, UnsavedChangesRegistry
from core.form_diff import is_form_dirty
from storage.draft_store import DraftStore

log = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 1000


class DraftAutosave:
    def __init__(
        self,
        store: DraftStore,
        registry: Optional[UnsavedChangesRegistry],
        key: str,
        data: Any = None,
        *,
        enabled: bool = True,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        entity_label: Optional[str] = None,
        default_data: Any = None,
        now: Optional[float] = None,
    ) -> None:
        self._store = store
        self._registry = registry
        self._key = str(key)
        self._enabled = bool(enabled)
        try:
            self._debounce_ms = max(0, int(debounce_ms))
        except (TypeError, ValueError):
            self._debounce_ms = DEFAULT_DEBOUNCE_MS
        self._entity_label = entity_label
        self._default = copy.deepcopy(default_data if default_data is not None else {})
        self._data = copy.deepcopy(data if data is not None else self._default)
        self._pending_since: Optional[float] = None
        self._has_draft = False
        self._draft_data: Any = None
        self._registration: Optional[FormRegistration] = None

        if self._enabled:
            stored = self._store.load(self._key, now=now)
            if stored is not None:
                self._has_draft = True
                self._draft_data = stored

    # --------- properties ---------
    @property
    def key(self) -> str:
        return self._key

    @property
    def form_id(self) -> str:
        return self._key

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def attached(self) -> bool:
        return self._registration is not None

    @property
    def has_draft(self) -> bool:
        return self._has_draft

    @property
    def draft_data(self) -> Any:
        return copy.deepcopy(self._draft_data)

    @property
    def debounce_ms(self) -> int:
        return self._debounce_ms

    @property
    def has_pending_write(self) -> bool:
        return self._pending_since is not None

    @property
    def is_dirty(self) -> bool:
        if not self._enabled:
            return False
        return is_form_dirty(self._data, self._default)

    # --------- lifecycle ---------
    def attach(self) -> "DraftAutosave":
        if not self._enabled or self.attached or self._registry is None:
            return self
        self._registration = self._registry.register(self._key, FormKind.DRAFT, self._entity_label, self.save_draft)
        self._registry.event_bus.subscribe(DraftDiscarded, self._on_discarded)
        self._registry.mark_dirty(self._key, self.is_dirty)
        return self

    def detach(self) -> None:
        if not self.attached or self._registry is None:
            return
        self._registry.event_bus.unsubscribe(DraftDiscarded, self._on_discarded)
        self._registry.unregister(self._key, self._registration)
        self._registration = None

    def __enter__(self) -> "DraftAutosave":
        return self.attach()

    def __exit__(self, *_exc: Any) -> None:
        self.detach()

    # --------- updates ---------
    def update(self, data: Any, *, now: Optional[float] = None) -> None:
        """Record the live values and schedule a debounced write."""
        self._data = copy.deepcopy(data)
        if not self._enabled:
            return
        self._pending_since = float(time.time() if now is None else now)
        if self.attached and self._registry is not None:
            self._registry.mark_dirty(self._key, self.is_dirty)

    def due_in_ms(self, *, now: Optional[float] = None) -> Optional[int]:
        if self._pending_since is None:
            return None
        ts = float(time.time() if now is None else now)
        elapsed = (ts - self._pending_since) * 1000.0
        return max(0, int(self._debounce_ms - elapsed))

    def flush_due(self, *, now: Optional[float] = None) -> bool:
        """Write the pending snapshot if the debounce window has passed."""
        remaining = self.due_in_ms(now=now)
        if remaining is None or remaining > 0:
            return False
        return self.save_draft(now=now)

    def save_draft(self, *, now: Optional[float] = None) -> bool:
        """Write the current snapshot right away."""
        if not self._enabled:
            return False
        self._pending_since = None
        ok = self._store.save(self._key, copy.deepcopy(self._data), now=now)
        if ok:
            log.debug("draft %s saved", self._key)
        self._emit(DraftSaved(key=self._key, ok=ok))
        return ok

    def restore_draft(self) -> Any:
        """Return the stored draft and hide the restore prompt."""
        data = copy.deepcopy(self._draft_data)
        if data is not None:
            self._has_draft = False
            self.update(data)
        return data

    def clear_draft(self) -> None:
        """Drop the stored snapshot (after a successful submit or an explicit discard)."""
        self._pending_since = None
        self._store.delete(self._key)
        self._has_draft = False
        self._draft_data = None
        self._emit(DraftCleared(key=self._key))

    def _on_discarded(self, event: DraftDiscarded) -> None:
        if event.form_id == self._key:
            self.clear_draft()

    def _emit(self, event: Any) -> None:
        if self._registry is not None:
            self._registry.event_bus.emit(event)
