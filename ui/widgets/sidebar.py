# -*- coding: utf-8 -*-
from __future__ import annotations

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import QFrame, QToolButton, QVBoxLayout

from app.routes import HOME, new_route


class Sidebar(QFrame):
    navigate_requested = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Sidebar")
        self._active_route = ""
        self._collapsed = False
        self._buttons = {}
        self._labels = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._collapse_btn = QToolButton(self)
        self._collapse_btn.setObjectName("SidebarItem")
        self._collapse_btn.setText("Hide")
        self._collapse_btn.clicked.connect(self._toggle_collapsed)
        layout.addWidget(self._collapse_btn)

        items = [
            (HOME, "Home"),
            (new_route("client"), "New client"),
            (new_route("job"), "New job"),
            (new_route("lead"), "New lead"),
        ]
        for route, label in items:
            btn = QToolButton(self)
            btn.setObjectName("SidebarItem")
            btn.setText(label)
            # Every click goes through the router, which asks the guard first
            btn.clicked.connect(lambda _=False, r=route: self.navigate_requested.emit(r))
            layout.addWidget(btn)
            self._buttons[route] = btn
            self._labels[route] = label

        layout.addStretch(1)
        self.setMinimumWidth(180)
        self.setMaximumWidth(180)

    def _toggle_collapsed(self) -> None:
        self.set_collapsed(not self._collapsed)

    def set_active(self, route: str) -> None:
        self._active_route = str(route or "")
        for key, btn in self._buttons.items():
            btn.setProperty("active", key == self._active_route)
            btn.style().unpolish(btn)
            btn.style().polish(btn)
            btn.update()

    def set_collapsed(self, collapsed: bool) -> None:
        self._collapsed = bool(collapsed)
        width = 56 if self._collapsed else 180
        self.setMinimumWidth(width)
        self.setMaximumWidth(width)
        self._collapse_btn.setText(">" if self._collapsed else "Hide")
        for key, btn in self._buttons.items():
            txt = self._labels.get(key, "")
            btn.setText(txt[:1] if self._collapsed else txt)
            btn.setToolTip(txt if self._collapsed else "")
