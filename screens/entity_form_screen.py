# -*- coding: utf-8 -*-
"""Create/edit page for a CRM entity (client, job, lead).

Two dirty-tracking policies:
- editing an existing record: FormChangeTracker diffs against the record
- creating a new record: DraftAutosave keeps a draft and offers to restore it
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from PyQt5.QtCore import QTimer
from PyQt5.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from app.draft_autosave import DraftAutosave
from app.form_tracker import FormChangeTracker
from app.routes import HOME, RouteMatch
from core.entities import (
    EntityForm,
    FieldSpec,
    choice_items,
    default_form,
    form_from_record,
    get_form,
    missing_required,
)
from screens.base import ScreenBase
from ui.common import dialogs
from ui.common.draft_timer import QtDraftAutosaveDriver
from ui.common.error_handler import run_guarded
from ui.unsaved_changes_dialogs import DraftIndicator, DraftRestoreDialog

log = logging.getLogger(__name__)


def _split_tags(text: str) -> list:
    return [t.strip() for t in str(text or "").split(",") if t.strip()]


class EntityFormScreen(ScreenBase):
    def __init__(self, services, repository, router, match: RouteMatch, parent=None):
        super().__init__(services, repository, router, parent)
        self.match = match
        self.form: EntityForm = get_form(match.entity)
        self._widgets: Dict[str, QWidget] = {}
        self._populating = False
        self.tracker: Optional[FormChangeTracker] = None
        self.autosave: Optional[DraftAutosave] = None
        self._autosave_driver: Optional[QtDraftAutosaveDriver] = None

        if match.is_new:
            initial = default_form(match.entity)
        else:
            initial = form_from_record(match.entity, repository.get(match.entity, match.record_id))

        self._build_ui()
        self._populating = True
        try:
            self.set_values(initial)
        finally:
            self._populating = False

        cfg = services.settings
        if match.is_new:
            self.autosave = DraftAutosave(
                services.drafts,
                services.registry,
                match.form_id,
                initial,
                enabled=cfg["drafts_enabled"],
                debounce_ms=cfg["draft_debounce_ms"],
                entity_label=self.form.label,
                default_data=default_form(match.entity),
            ).attach()
            self._autosave_driver = QtDraftAutosaveDriver(self.autosave, self)
            self.draft_indicator.set_has_draft(self.autosave.has_draft)
            if self.autosave.has_draft:
                QTimer.singleShot(0, self._ask_restore_draft)
        else:
            self.tracker = FormChangeTracker(
                services.registry,
                match.form_id,
                initial,
                entity_type=self.form.label,
            ).attach()

    # ---------------- UI ----------------
    def _build_ui(self) -> None:
        v = QVBoxLayout(self)
        verb = "New" if self.match.is_new else "Edit"
        title = QLabel(f"{verb} {self.form.label}")
        title.setObjectName("PageTitle")
        v.addWidget(title)

        self.draft_indicator = DraftIndicator(self.form.label, self)
        self.draft_indicator.restore_requested.connect(self.restore_draft)
        self.draft_indicator.delete_requested.connect(self.delete_draft)
        v.addWidget(self.draft_indicator)

        fl = QFormLayout()
        for spec in self.form.fields:
            w = self._make_widget(spec)
            self._widgets[spec.name] = w
            label = spec.label + (" *" if spec.required else "")
            fl.addRow(label, w)
        v.addLayout(fl)

        self.lbl_status = QLabel("")
        self.lbl_status.setObjectName("FormStatus")
        v.addWidget(self.lbl_status)

        row = QHBoxLayout()
        self.btn_cancel = QPushButton("Cancel", self)
        self.btn_save = QPushButton("Save" if not self.match.is_new else f"Create {self.form.label}", self)
        self.btn_cancel.clicked.connect(self._on_cancel)
        self.btn_save.clicked.connect(self._on_save)
        row.addStretch(1)
        row.addWidget(self.btn_cancel)
        row.addWidget(self.btn_save)
        v.addLayout(row)
        v.addStretch(1)

    def _make_widget(self, spec: FieldSpec) -> QWidget:
        if spec.kind == "choice":
            w = QComboBox(self)
            w.addItems(list(spec.choices))
            w.currentTextChanged.connect(self._on_field_changed)
            return w
        if spec.kind == "number":
            w = QSpinBox(self)
            w.setRange(0, 999)
            w.valueChanged.connect(self._on_field_changed)
            return w
        if spec.kind == "notes":
            w = QPlainTextEdit(self)
            w.setFixedHeight(80)
            w.textChanged.connect(self._on_field_changed)
            return w
        w = QLineEdit(self)
        if spec.kind == "tags":
            w.setPlaceholderText("comma separated")
        w.textChanged.connect(self._on_field_changed)
        return w

    # ---------------- values ----------------
    def values(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for spec in self.form.fields:
            w = self._widgets[spec.name]
            if isinstance(w, QComboBox):
                out[spec.name] = w.currentText()
            elif isinstance(w, QSpinBox):
                out[spec.name] = int(w.value())
            elif isinstance(w, QPlainTextEdit):
                out[spec.name] = w.toPlainText()
            elif spec.kind == "tags":
                out[spec.name] = _split_tags(w.text())
            else:
                out[spec.name] = w.text()
        return out

    def set_values(self, values: Dict[str, Any]) -> None:
        for spec in self.form.fields:
            w = self._widgets[spec.name]
            val = values.get(spec.name)
            if isinstance(w, QComboBox):
                text = "" if val is None else str(val)
                for item in choice_items(spec, text):
                    if w.findText(item) < 0:
                        w.addItem(item)
                w.setCurrentIndex(w.findText(text))
            elif isinstance(w, QSpinBox):
                try:
                    w.setValue(int(val or 0))
                except (TypeError, ValueError):
                    w.setValue(0)
            elif isinstance(w, QPlainTextEdit):
                w.setPlainText(str(val or ""))
            elif spec.kind == "tags":
                w.setText(", ".join(str(t) for t in (val or [])))
            else:
                w.setText(str(val or ""))

    def _on_field_changed(self, *_args) -> None:
        if self._populating:
            return
        data = self.values()
        if self.tracker is not None:
            self.tracker.update(data)
            changed = self.tracker.changed_fields()
            self.lbl_status.setText(f"Unsaved changes: {', '.join(changed)}" if changed else "")
        elif self._autosave_driver is not None:
            self._autosave_driver.update(data)
            self.lbl_status.setText("Draft autosaves while you type" if self.autosave.is_dirty else "")

    # ---------------- drafts ----------------
    def _ask_restore_draft(self) -> None:
        if self.autosave is None or not self.autosave.has_draft:
            return
        dlg = DraftRestoreDialog(self.form.label, self)
        if dlg.exec_() == DraftRestoreDialog.Accepted:
            self.restore_draft()
        else:
            self.delete_draft()

    def restore_draft(self) -> None:
        if self.autosave is None:
            return
        data = self.autosave.restore_draft()
        if data is not None:
            self._populating = True
            try:
                self.set_values(data)
            finally:
                self._populating = False
            self._on_field_changed()
        self.draft_indicator.set_has_draft(False)

    def delete_draft(self) -> None:
        if self.autosave is None:
            return
        self.autosave.clear_draft()
        self.draft_indicator.set_has_draft(False)

    # ---------------- actions ----------------
    def _on_cancel(self) -> None:
        if self.router.can_go_back:
            self.router.back()
        else:
            self.router.push(HOME)

    def _on_save(self) -> None:
        data = self.values()
        missing = missing_required(self.match.entity, data)
        if missing:
            dialogs.warn(self, "Missing fields", "Please fill in: " + ", ".join(missing))
            return
        run_guarded(lambda: self._save(data), parent=self, title="Save failed",
                    user_message=f"The {self.form.label} could not be saved.")

    def _save(self, data: Dict[str, Any]) -> None:
        if self.match.is_new:
            self.repository.create(self.match.entity, data)
            if self.autosave is not None:
                if self._autosave_driver is not None:
                    self._autosave_driver.stop()
                self.autosave.clear_draft()
        else:
            self.repository.update(self.match.entity, self.match.record_id, data)
            if self.tracker is not None:
                self.tracker.mark_clean()
        self.router.navigate_unguarded(HOME)

    def teardown(self) -> None:
        if self._autosave_driver is not None:
            self._autosave_driver.stop()
        if self.tracker is not None:
            self.tracker.detach()
        if self.autosave is not None:
            self.autosave.detach()
