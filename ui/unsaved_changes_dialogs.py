# -*- coding: utf-8 -*-
"""Unsaved-changes dialogs.

- UnsavedChangesDialog: Stay / Leave Without Saving (edit forms)
- DraftSaveDialog: Stay / Discard / Save Draft (new-entity forms)
- DraftRestoreDialog: Start Fresh / Restore Draft (when a new form opens)
- DraftIndicator: inline banner shown while a stored draft is available
- GuardDialogHost: shows whichever dialog the NavigationGuard is waiting on

The dialogs hold no state of their own; every button calls back into the guard.
"""
from __future__ import annotations

from typing import Any, Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from app.events import GuardStateChanged
from app.navigation_guard import GuardState, NavigationGuard, dialog_copy


class _ChoiceDialog(QDialog):
    """Modal with a title line, a message and a row of buttons."""

    def __init__(self, title: str, message: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumWidth(420)

        v = QVBoxLayout(self)
        self.lbl_title = QLabel(title)
        self.lbl_title.setObjectName("DialogTitle")
        v.addWidget(self.lbl_title)

        self.lbl_message = QLabel(message)
        self.lbl_message.setWordWrap(True)
        self.lbl_message.setTextInteractionFlags(Qt.TextSelectableByMouse)
        v.addWidget(self.lbl_message)

        self._row = QHBoxLayout()
        self._row.addStretch(1)
        v.addLayout(self._row)

    def _add_button(self, text: str, slot: Any, *, default: bool = False) -> QPushButton:
        btn = QPushButton(text, self)
        btn.setAutoDefault(default)
        btn.setDefault(default)
        btn.clicked.connect(slot)
        self._row.addWidget(btn)
        return btn

    def set_copy(self, title: str, message: str) -> None:
        self.setWindowTitle(title)
        self.lbl_title.setText(title)
        self.lbl_message.setText(message)


class UnsavedChangesDialog(_ChoiceDialog):
    stay_requested = pyqtSignal()
    leave_requested = pyqtSignal()

    def __init__(self, parent=None):
        copy = dialog_copy(GuardState.AWAITING_EDIT_DECISION)
        super().__init__(copy.title, copy.message, parent)
        self.btn_stay = self._add_button("Stay", self.stay_requested, default=True)
        self.btn_leave = self._add_button("Leave Without Saving", self.leave_requested)

    def reject(self) -> None:
        # Esc / window close means Stay
        self.stay_requested.emit()


class DraftSaveDialog(_ChoiceDialog):
    stay_requested = pyqtSignal()
    discard_requested = pyqtSignal()
    save_requested = pyqtSignal()

    def __init__(self, entity_label: Optional[str] = None, parent=None):
        copy = dialog_copy(GuardState.AWAITING_DRAFT_DECISION, entity_label)
        super().__init__(copy.title, copy.message, parent)
        self.btn_stay = self._add_button("Stay", self.stay_requested)
        self.btn_discard = self._add_button("Discard", self.discard_requested)
        self.btn_save = self._add_button("Save Draft", self.save_requested, default=True)

    def set_entity_label(self, entity_label: Optional[str]) -> None:
        copy = dialog_copy(GuardState.AWAITING_DRAFT_DECISION, entity_label)
        self.set_copy(copy.title, copy.message)

    def reject(self) -> None:
        self.stay_requested.emit()


class DraftRestoreDialog(_ChoiceDialog):
    """Asked when a new-entity form opens and a stored draft exists."""

    def __init__(self, entity_label: str, parent=None):
        super().__init__(
            "Restore unsaved changes?",
            f"You have an unsaved draft for this {entity_label}. "
            "Would you like to restore your previous changes or start fresh?",
            parent,
        )
        self.btn_fresh = self._add_button("Start Fresh", self.reject)
        self.btn_restore = self._add_button("Restore Draft", self.accept, default=True)


class DraftIndicator(QFrame):
    restore_requested = pyqtSignal()
    delete_requested = pyqtSignal()

    def __init__(self, entity_label: str, parent=None):
        super().__init__(parent)
        self.setObjectName("DraftIndicator")
        row = QHBoxLayout(self)
        row.setContentsMargins(8, 6, 8, 6)

        text = QVBoxLayout()
        title = QLabel("Draft available")
        title.setObjectName("DraftIndicatorTitle")
        text.addWidget(title)
        text.addWidget(QLabel(f"You have a saved draft for this {entity_label}"))
        row.addLayout(text)
        row.addStretch(1)

        self.btn_restore = QPushButton("Restore", self)
        self.btn_delete = QPushButton("Delete", self)
        self.btn_restore.clicked.connect(self.restore_requested)
        self.btn_delete.clicked.connect(self.delete_requested)
        row.addWidget(self.btn_restore)
        row.addWidget(self.btn_delete)
        self.setVisible(False)

    def set_has_draft(self, has_draft: bool) -> None:
        self.setVisible(bool(has_draft))


class GuardDialogHost:
    """Keeps the two confirmation dialogs in step with the guard state.

    Nothing is visible while the guard is idle; at most one dialog is open.
    """

    def __init__(self, guard: NavigationGuard, parent: Optional[QWidget] = None) -> None:
        self._guard = guard
        self._edit_dialog = UnsavedChangesDialog(parent)
        self._draft_dialog = DraftSaveDialog(parent=parent)

        self._edit_dialog.stay_requested.connect(self._stay)
        self._edit_dialog.leave_requested.connect(self._guard.leave)
        self._draft_dialog.stay_requested.connect(self._stay)
        self._draft_dialog.discard_requested.connect(self._guard.discard)
        self._draft_dialog.save_requested.connect(self._guard.save_and_leave)

        self._guard.subscribe(self._on_guard_state)

    @property
    def edit_dialog(self) -> UnsavedChangesDialog:
        return self._edit_dialog

    @property
    def draft_dialog(self) -> DraftSaveDialog:
        return self._draft_dialog

    def close(self) -> None:
        self._guard.unsubscribe(self._on_guard_state)
        self._edit_dialog.hide()
        self._draft_dialog.hide()

    def _stay(self) -> None:
        if self._guard.state is not GuardState.IDLE:
            self._guard.stay()

    def _on_guard_state(self, event: GuardStateChanged) -> None:
        state = event.new_state
        if state is GuardState.AWAITING_EDIT_DECISION:
            self._draft_dialog.hide()
            self._edit_dialog.open()
        elif state is GuardState.AWAITING_DRAFT_DECISION:
            self._edit_dialog.hide()
            self._draft_dialog.set_entity_label(self._guard.dialog_entity_label)
            self._draft_dialog.open()
        else:
            self._edit_dialog.hide()
            self._draft_dialog.hide()
