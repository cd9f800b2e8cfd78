# -*- coding: utf-8 -*-
"""Per-form dirty tracking for edit forms.

A FormChangeTracker binds one form to the UnsavedChangesRegistry:

- attach() registers the form, detach() removes it
- update(data) diffs the live values against the baseline and reports the result
- mark_clean() is called by the save handler right before leaving after a
  successful save; it also rebases the baseline to the saved values

The baseline is captured once, from the entity being edited, and is never
recomputed from the live form state.

Keep this module free of PyQt imports.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Callable, List, Optional

from app.unsaved_changes import FormKind, FormRegistration, UnsavedChangesRegistry
from core.form_diff import changed_fields, is_form_dirty

log = logging.getLogger(__name__)


class FormChangeTracker:
    def __init__(
        self,
        registry: UnsavedChangesRegistry,
        form_id: str,
        initial_data: Any,
        *,
        enabled: bool = True,
        form_type: FormKind = FormKind.EDIT,
        entity_type: Optional[str] = None,
        on_save_draft: Optional[Callable[[], None]] = None,
    ) -> None:
        self._registry = registry
        self._form_id = str(form_id)
        self._baseline = copy.deepcopy(initial_data)
        self._data = copy.deepcopy(initial_data)
        self._enabled = bool(enabled)
        self._form_type = FormKind(form_type)
        self._entity_type = entity_type
        self._on_save_draft = on_save_draft
        self._registration: Optional[FormRegistration] = None

    # --------- properties ---------
    @property
    def form_id(self) -> str:
        return self._form_id

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def attached(self) -> bool:
        return self._registration is not None

    @property
    def baseline(self) -> Any:
        return copy.deepcopy(self._baseline)

    @property
    def is_dirty(self) -> bool:
        if not self._enabled:
            return False
        return is_form_dirty(self._data, self._baseline)

    def changed_fields(self) -> List[str]:
        if not self._enabled or not isinstance(self._data, dict):
            return []
        return changed_fields(self._data, self._baseline if isinstance(self._baseline, dict) else {})

    # --------- lifecycle ---------
    def attach(self) -> "FormChangeTracker":
        if not self._enabled or self.attached:
            return self
        self._registration = self._registry.register(
            self._form_id,
            self._form_type,
            self._entity_type,
            self._call_save_draft,
        )
        # Data may have changed before the form was attached
        self._registry.mark_dirty(self._form_id, self.is_dirty)
        return self

    def detach(self) -> None:
        if not self.attached:
            return
        self._registry.unregister(self._form_id, self._registration)
        self._registration = None

    def __enter__(self) -> "FormChangeTracker":
        return self.attach()

    def __exit__(self, *_exc: Any) -> None:
        self.detach()

    # --------- updates ---------
    def set_on_save_draft(self, callback: Optional[Callable[[], None]]) -> None:
        self._on_save_draft = callback
        if self.attached and callback is not None:
            self._registry.update_save_callback(self._form_id, self._call_save_draft)

    def update(self, form_data: Any) -> bool:
        """Record the live form values and push the dirty flag. Returns the local flag."""
        self._data = copy.deepcopy(form_data)
        if not self._enabled:
            return False
        dirty = is_form_dirty(self._data, self._baseline)
        if self.attached:
            self._registry.mark_dirty(self._form_id, dirty)
        return dirty

    def mark_clean(self) -> None:
        if not self._enabled:
            return
        self._baseline = copy.deepcopy(self._data)
        if self.attached:
            self._registry.mark_dirty(self._form_id, False)
        log.debug("form %s marked clean", self._form_id)

    def _call_save_draft(self) -> None:
        # Always the latest callback, even if it was replaced after attach()
        callback = self._on_save_draft
        if callback is not None:
            callback()
