# -*- coding: utf-8 -*-
"""ui/common/safe_navigation.py

Qt entry points that route every navigation through the NavigationGuard:

- SafeRouter: page stack with push/replace/back/forward
- SafeLink: link-styled button that asks the router
- BackForwardFilter: mouse back/forward buttons and Alt+Left/Alt+Right
- CloseGuard: window close (the only vector the OS can start on its own)

A page is built when its route is shown and torn down when left, so forms
register on show and unregister on leave.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt5.QtCore import QEvent, QObject, Qt, pyqtSignal
from PyQt5.QtWidgets import QApplication, QPushButton, QStackedWidget, QWidget

from app.guarded_router import GuardedRouter
from app.navigation_guard import NavigationGuard
from app.route_history import RouteHistory

log = logging.getLogger(__name__)

PageFactory = Callable[[str], QWidget]


class SafeRouter(QObject):
    route_changed = pyqtSignal(str)

    def __init__(
        self,
        guard: NavigationGuard,
        stack: QStackedWidget,
        page_factory: PageFactory,
        *,
        history_limit: int = 50,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._stack = stack
        self._page_factory = page_factory
        self._page: Optional[QWidget] = None
        self._router = GuardedRouter(
            guard,
            self._show_route,
            history=RouteHistory(limit=history_limit),
            on_route_changed=self.route_changed.emit,
        )

    @property
    def guard(self) -> NavigationGuard:
        return self._router.guard

    @property
    def current_route(self) -> Optional[str]:
        return self._router.current_route

    @property
    def current_page(self) -> Optional[QWidget]:
        return self._page

    @property
    def can_go_back(self) -> bool:
        return self._router.can_go_back

    def push(self, route: str) -> None:
        self._router.push(route)

    def replace(self, route: str) -> None:
        self._router.replace(route)

    def back(self) -> None:
        self._router.back()

    def forward(self) -> None:
        self._router.forward()

    def navigate_unguarded(self, route: str) -> None:
        self._router.navigate_unguarded(route)

    def _show_route(self, route: str) -> None:
        # Build first: if the page cannot be built the old one stays registered and visible
        page = self._page_factory(route)
        old = self._page
        self._stack.addWidget(page)
        self._stack.setCurrentWidget(page)
        self._page = page
        if old is not None:
            teardown = getattr(old, "teardown", None)
            if callable(teardown):
                try:
                    teardown()
                except Exception:
                    log.debug("Page teardown failed (%s)", type(old).__name__, exc_info=True)
            self._stack.removeWidget(old)
            old.deleteLater()


class SafeLink(QPushButton):
    """Flat, link-styled button; clicking asks the router to push ``route``."""

    def __init__(self, router: SafeRouter, route: str, text: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(text, parent)
        self._router = router
        self._route = route
        self.setObjectName("SafeLink")
        self.setFlat(True)
        self.setCursor(Qt.PointingHandCursor)
        self.clicked.connect(self._on_clicked)

    @property
    def route(self) -> str:
        return self._route

    def _on_clicked(self, _checked: bool = False) -> None:
        self._router.push(self._route)


class BackForwardFilter(QObject):
    """Route mouse back/forward buttons and Alt+Left/Right through the router.

    Inactive while a modal dialog is open; the dialog owns the input then.
    """

    def __init__(self, router: SafeRouter, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._router = router

    def eventFilter(self, obj, event) -> bool:
        etype = event.type()
        if etype not in (QEvent.MouseButtonRelease, QEvent.KeyPress):
            return super().eventFilter(obj, event)
        if QApplication.activeModalWidget() is not None:
            return super().eventFilter(obj, event)
        if etype == QEvent.MouseButtonRelease:
            if event.button() == Qt.BackButton:
                self._router.back()
                return True
            if event.button() == Qt.ForwardButton:
                self._router.forward()
                return True
        elif etype == QEvent.KeyPress and event.modifiers() & Qt.AltModifier:
            if event.key() == Qt.Key_Left:
                self._router.back()
                return True
            if event.key() == Qt.Key_Right:
                self._router.forward()
                return True
        return super().eventFilter(obj, event)


class CloseGuard:
    """Hook for QMainWindow.closeEvent.

    Reads the live dirty state at the instant of the event. When something
    is dirty the close is ignored and the normal dialog flow decides; the
    window is closed for real only once the user chooses to leave.
    """

    def __init__(self, guard: NavigationGuard, window: QWidget) -> None:
        self._guard = guard
        self._window = window
        self._closing = False

    def handle(self, event) -> None:
        if self._closing or not self._guard.should_block_close():
            event.accept()
            return
        event.ignore()
        self._guard.confirm_navigation(self._close_now)

    def _close_now(self) -> None:
        self._closing = True
        self._window.close()
