# -*- coding: utf-8 -*-
"""Application UI controller.

Centralizes creation of the main window, the page stack, the guarded router
and the confirmation dialogs. Keeps main.py a thin entrypoint.

NOTE: This module intentionally contains PyQt5 imports and screen wiring.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtWidgets import QApplication, QHBoxLayout, QMainWindow, QStackedWidget, QWidget

from app.bootstrap import AppServices, bootstrap
from app.events import DirtyStateChanged
from app.routes import HOME, parse_route
from app.version import __version__ as APP_VERSION
from infra.crash_handler import add_crash_callback, remove_crash_callback
from screens.entity_form_screen import EntityFormScreen
from screens.home_screen import HomeScreen
from storage.repository import RecordNotFound, RecordRepository, sample_repository
from ui.common.safe_navigation import BackForwardFilter, CloseGuard, SafeRouter
from ui.unsaved_changes_dialogs import GuardDialogHost
from ui.widgets.sidebar import Sidebar

log = logging.getLogger(__name__)

WINDOW_TITLE = "TidyCo"


class MainWindow(QMainWindow):
    def __init__(self, services: AppServices, repository: Optional[RecordRepository] = None):
        super().__init__()
        self.services = services
        self.repository = repository if repository is not None else sample_repository()

        self._stack = QStackedWidget(self)
        self.sidebar = Sidebar(self)

        central = QWidget(self)
        row = QHBoxLayout(central)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(self.sidebar)
        row.addWidget(self._stack, 1)
        self.setCentralWidget(central)

        self.router = SafeRouter(
            services.guard,
            self._stack,
            self._build_page,
            history_limit=services.settings["route_history_limit"],
            parent=self,
        )
        self.dialog_host = GuardDialogHost(services.guard, self)
        self._close_guard = CloseGuard(services.guard, self)
        self._nav_filter = BackForwardFilter(self.router, self)
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self._nav_filter)

        self.sidebar.navigate_requested.connect(self.router.push)
        self.router.route_changed.connect(self._on_route_changed)
        services.registry.subscribe(self._on_dirty_changed)
        add_crash_callback(self._flush_open_draft)

        self.setMinimumSize(900, 640)
        self._update_title()
        self.router.push(HOME)

    # ---------------- pages ----------------
    def _build_page(self, route: str) -> QWidget:
        match = parse_route(route)
        if match.is_form:
            try:
                return EntityFormScreen(self.services, self.repository, self.router, match)
            except RecordNotFound:
                log.warning("Record not found for route %s; showing home", route)
        return HomeScreen(self.services, self.repository, self.router)

    def _on_route_changed(self, route: str) -> None:
        self.sidebar.set_active(route)
        self._update_title()

    # ---------------- dirty state ----------------
    def _on_dirty_changed(self, _event: DirtyStateChanged) -> None:
        self._update_title()

    def _update_title(self) -> None:
        star = " *" if self.services.registry.is_dirty else ""
        route = self.router.current_route or HOME
        self.setWindowTitle(f"{WINDOW_TITLE} {APP_VERSION} - {route}{star}")

    def _flush_open_draft(self) -> None:
        page = self.router.current_page
        autosave = getattr(page, "autosave", None)
        if autosave is not None and autosave.is_dirty:
            autosave.save_draft()

    # ---------------------------------------------------------
    # Close with unsaved-changes control
    # ---------------------------------------------------------
    def closeEvent(self, event):
        self._close_guard.handle(event)
        if not event.isAccepted():
            return
        page = self.router.current_page
        teardown = getattr(page, "teardown", None)
        if callable(teardown):
            teardown()
        self.dialog_host.close()
        remove_crash_callback(self._flush_open_draft)
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self._nav_filter)


def create_main_window() -> MainWindow:
    """Factory used by main.py."""
    return MainWindow(bootstrap())
