# -*- coding: utf-8 -*-
"""Qt-backed debounce for DraftAutosave (single-shot QTimer)."""
from __future__ import annotations

import logging
from typing import Any, Optional

from PyQt5.QtCore import QObject, QTimer

from app.draft_autosave import DraftAutosave

log = logging.getLogger(__name__)


class QtDraftAutosaveDriver(QObject):
    def __init__(self, autosave: DraftAutosave, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._autosave = autosave
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(autosave.debounce_ms))
        self._timer.timeout.connect(self._flush)

    @property
    def autosave(self) -> DraftAutosave:
        return self._autosave

    def update(self, data: Any) -> None:
        self._autosave.update(data)
        if self._autosave.enabled:
            # restart: only the last change in a burst is written
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def _flush(self) -> None:
        if self._autosave.flush_due():
            return
        remaining = self._autosave.due_in_ms()
        if remaining:
            log.debug("draft %s rescheduled in %d ms", self._autosave.key, remaining)
            self._timer.start(remaining)
