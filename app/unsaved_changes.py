# -*- coding: utf-8 -*-
"""Centralized unsaved-changes registry (UI-agnostic).

One entry per mounted form, keyed by ``form_id``. Each form binding owns
exactly one entry; nothing outside this module touches ``_forms`` directly.

``snapshot()`` always reflects the last mutation. Synchronous handlers
(window close, mouse back button) must read it through the getter instead of
keeping a copy around.

Keep this module free of PyQt imports.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from app.events import DirtyStateChanged, EventBus

log = logging.getLogger(__name__)

SaveDraftCallback = Callable[[], None]


class FormKind(str, Enum):
    EDIT = "edit"
    DRAFT = "draft"


@dataclass
class FormRegistration:
    form_id: str
    kind: FormKind = FormKind.EDIT
    dirty: bool = False
    entity_label: Optional[str] = None
    save_draft_callback: Optional[SaveDraftCallback] = None


@dataclass(frozen=True)
class DirtySnapshot:
    is_dirty: bool = False
    dirty_form_ids: Tuple[str, ...] = ()
    active_draft: Optional[FormRegistration] = None
    has_dirty_edit: bool = False


class UnsavedChangesRegistry:
    """Single source of truth for which forms are dirty."""

    def __init__(self, event_bus: Optional[EventBus] = None) -> None:
        self._forms: Dict[str, FormRegistration] = {}
        self._bus = event_bus if event_bus is not None else EventBus()
        self._snapshot = DirtySnapshot()

    # --------- queries ---------
    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def is_dirty(self) -> bool:
        return self._snapshot.is_dirty

    def snapshot(self) -> DirtySnapshot:
        return self._snapshot

    def get(self, form_id: str) -> Optional[FormRegistration]:
        return self._forms.get(form_id)

    def form_ids(self) -> Tuple[str, ...]:
        return tuple(self._forms.keys())

    def __contains__(self, form_id: object) -> bool:
        return form_id in self._forms

    def __len__(self) -> int:
        return len(self._forms)

    # --------- mutations ---------
    def register(
        self,
        form_id: str,
        kind: FormKind = FormKind.EDIT,
        entity_label: Optional[str] = None,
        save_draft_callback: Optional[SaveDraftCallback] = None,
    ) -> FormRegistration:
        reg = FormRegistration(
            form_id=form_id,
            kind=FormKind(kind),
            dirty=False,
            entity_label=entity_label,
            save_draft_callback=save_draft_callback,
        )
        self._forms[form_id] = reg
        log.debug("register form=%s kind=%s", form_id, reg.kind.value)
        self._refresh(form_id)
        return reg

    def unregister(self, form_id: str, owner: Optional[FormRegistration] = None) -> None:
        """Remove *form_id*; with *owner*, only if that entry is still the registered one."""
        current = self._forms.get(form_id)
        if current is None:
            return
        if owner is not None and current is not owner:
            log.debug("unregister ignored, form=%s was registered again", form_id)
            return
        del self._forms[form_id]
        log.debug("unregister form=%s", form_id)
        self._refresh(form_id)

    def update_save_callback(self, form_id: str, callback: Optional[SaveDraftCallback]) -> None:
        reg = self._forms.get(form_id)
        if reg is None:
            log.debug("update_save_callback ignored, unknown form=%s", form_id)
            return
        reg.save_draft_callback = callback
        self._refresh(form_id)

    def mark_dirty(self, form_id: str, dirty: bool) -> None:
        reg = self._forms.get(form_id)
        if reg is None:
            log.debug("mark_dirty ignored, unknown form=%s", form_id)
            return
        if reg.dirty == bool(dirty):
            return
        reg.dirty = bool(dirty)
        self._refresh(form_id)

    def clear_all_dirty(self) -> None:
        """Reset every registration to clean; registrations stay in place."""
        changed = False
        for reg in self._forms.values():
            if reg.dirty:
                reg.dirty = False
                changed = True
        if changed:
            log.info("All dirty flags cleared")
        self._refresh(None)

    # Spelling used by the form hosts
    register_form = register
    unregister_form = unregister
    update_form_callback = update_save_callback
    mark_form_dirty = mark_dirty

    # --------- listeners ---------
    def subscribe(self, callback: Callable[[DirtyStateChanged], None]) -> None:
        self._bus.subscribe(DirtyStateChanged, callback)

    def unsubscribe(self, callback: Callable[[DirtyStateChanged], None]) -> None:
        self._bus.unsubscribe(DirtyStateChanged, callback)

    # --------- internals ---------
    def _compute_snapshot(self) -> DirtySnapshot:
        dirty = [reg for reg in self._forms.values() if reg.dirty]
        active_draft = next((replace(reg) for reg in dirty if reg.kind is FormKind.DRAFT), None)
        return DirtySnapshot(
            is_dirty=bool(dirty),
            dirty_form_ids=tuple(reg.form_id for reg in dirty),
            active_draft=active_draft,
            has_dirty_edit=any(reg.kind is FormKind.EDIT for reg in dirty),
        )

    def _refresh(self, form_id: Optional[str]) -> None:
        previous = self._snapshot
        self._snapshot = self._compute_snapshot()
        if previous != self._snapshot:
            self._bus.emit(DirtyStateChanged(snapshot=self._snapshot, form_id=form_id))
