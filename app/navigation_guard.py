# -*- coding: utf-8 -*-
"""Navigation guard (no-Qt).

Every route change in the desk funnels through ``confirm_navigation``:

- nothing dirty: the navigation runs right away
- a dirty draft form: wait for Stay / Discard / Save draft
- only dirty edit forms: wait for Stay / Leave without saving

At most one navigation is pending. A second request while a decision is
pending replaces the pending callback; the dialog already shown stays.

Keep this module free of PyQt imports.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from app.events import DraftDiscarded, GuardStateChanged
from app.unsaved_changes import FormRegistration, UnsavedChangesRegistry

log = logging.getLogger(__name__)

NavigationIntent = Callable[[], None]


class GuardState(str, Enum):
    IDLE = "idle"
    AWAITING_EDIT_DECISION = "awaiting_edit_decision"
    AWAITING_DRAFT_DECISION = "awaiting_draft_decision"


class GuardError(Exception):
    """Base error for navigation guard misuse."""


class InvalidGuardTransition(GuardError):
    def __init__(self, action: str, state: GuardState) -> None:
        super().__init__(f"Cannot {action} while guard is {state.value}")
        self.action = action
        self.state = state


@dataclass(frozen=True)
class DialogCopy:
    title: str
    message: str


def dialog_copy(state: GuardState, entity_label: Optional[str] = None) -> Optional[DialogCopy]:
    """Text shown by the confirmation dialog for *state* (None when idle)."""
    if state is GuardState.AWAITING_EDIT_DECISION:
        return DialogCopy(
            title="You have unsaved changes",
            message="Your changes will be lost if you leave this page. Are you sure you want to leave?",
        )
    if state is GuardState.AWAITING_DRAFT_DECISION:
        entity = (entity_label or "").strip() or "form"
        return DialogCopy(
            title="Save as draft?",
            message=(
                f"You have unsaved changes to this {entity}. "
                "Would you like to save them as a draft to continue later?"
            ),
        )
    return None


class NavigationGuard:
    """Arbitrates navigation requests against the unsaved-changes registry."""

    def __init__(self, registry: UnsavedChangesRegistry) -> None:
        self._registry = registry
        self._state = GuardState.IDLE
        self._pending: Optional[NavigationIntent] = None
        self._active_draft: Optional[FormRegistration] = None

    # --------- queries ---------
    @property
    def registry(self) -> UnsavedChangesRegistry:
        return self._registry

    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def active_draft(self) -> Optional[FormRegistration]:
        return self._active_draft

    @property
    def dialog_entity_label(self) -> Optional[str]:
        reg = self._active_draft
        return reg.entity_label if reg is not None else None

    def current_copy(self) -> Optional[DialogCopy]:
        return dialog_copy(self._state, self.dialog_entity_label)

    def should_block_close(self) -> bool:
        """Read the live dirty state; safe to call from synchronous event handlers."""
        return self._registry.snapshot().is_dirty

    # --------- requests ---------
    def confirm_navigation(self, proceed: NavigationIntent) -> None:
        if self._state is not GuardState.IDLE:
            self._pending = proceed
            log.debug("Navigation requested while %s; pending intent replaced", self._state.value)
            return

        snap = self._registry.snapshot()
        if not snap.is_dirty:
            proceed()
            return

        self._pending = proceed
        if snap.active_draft is not None:
            self._active_draft = snap.active_draft
            self._set_state(GuardState.AWAITING_DRAFT_DECISION)
        else:
            self._active_draft = None
            self._set_state(GuardState.AWAITING_EDIT_DECISION)

    def allow_navigation(self) -> None:
        """Full reset of every dirty flag (bypass guarding)."""
        self._registry.clear_all_dirty()

    # --------- decisions ---------
    def stay(self) -> None:
        if self._state is GuardState.IDLE:
            raise InvalidGuardTransition("stay", self._state)
        log.info("Navigation cancelled by user")
        self._pending = None
        self._active_draft = None
        self._set_state(GuardState.IDLE)

    def leave(self) -> None:
        if self._state is not GuardState.AWAITING_EDIT_DECISION:
            raise InvalidGuardTransition("leave", self._state)
        log.info("Leaving without saving")
        self._proceed()

    def discard(self) -> None:
        if self._state is not GuardState.AWAITING_DRAFT_DECISION:
            raise InvalidGuardTransition("discard", self._state)
        log.info("Draft discarded on navigation")
        draft = self._active_draft
        if draft is not None:
            self._registry.event_bus.emit(DraftDiscarded(form_id=draft.form_id))
        self._proceed()

    def save_and_leave(self) -> None:
        if self._state is not GuardState.AWAITING_DRAFT_DECISION:
            raise InvalidGuardTransition("save draft", self._state)
        draft = self._active_draft
        callback = None
        if draft is not None:
            current = self._registry.get(draft.form_id)
            callback = (current or draft).save_draft_callback
        if callback is not None:
            try:
                callback()
                log.info("Draft saved before navigation (form=%s)", draft.form_id if draft else "?")
            except Exception:
                log.exception("Saving draft before navigation failed")
        self._proceed()

    # --------- subscriptions ---------
    def subscribe(self, callback: Callable[[GuardStateChanged], None]) -> None:
        self._registry.event_bus.subscribe(GuardStateChanged, callback)

    def unsubscribe(self, callback: Callable[[GuardStateChanged], None]) -> None:
        self._registry.event_bus.unsubscribe(GuardStateChanged, callback)

    # --------- internals ---------
    def _proceed(self) -> None:
        intent = self._pending
        self._pending = None
        self._active_draft = None
        self._registry.clear_all_dirty()
        self._set_state(GuardState.IDLE)
        if intent is not None:
            intent()

    def _set_state(self, new_state: GuardState) -> None:
        old_state = self._state
        if old_state is new_state:
            return
        self._state = new_state
        log.debug("guard %s -> %s", old_state.value, new_state.value)
        self._registry.event_bus.emit(GuardStateChanged(old_state=old_state, new_state=new_state))
