# -*- coding: utf-8 -*-
"""screens/base.py

Base class for desk pages.

Goal:
- One place to keep the shared services (registry, guard, drafts, repository)
- A teardown() hook called by SafeRouter when the page is left, so forms
  unregister exactly when their page goes away
"""

from __future__ import annotations

from PyQt5.QtWidgets import QWidget

from app.bootstrap import AppServices
from storage.repository import RecordRepository


class ScreenBase(QWidget):
    """Common base for pages shown by the SafeRouter.

    Screens may override:
    - teardown(): release registrations/timers before the page is destroyed
    """

    def __init__(self, services: AppServices, repository: RecordRepository, router, parent=None):
        super().__init__(parent)
        if __debug__:
            assert services is not None, "ScreenBase requires the app services"
        self.services = services
        self.repository = repository
        self.router = router

    def teardown(self) -> None:
        pass
