# -*- coding: utf-8 -*-
"""Home page: recent records with links to their edit forms."""

from __future__ import annotations

from PyQt5.QtWidgets import QGroupBox, QHBoxLayout, QLabel, QVBoxLayout

from app.routes import edit_route, new_route
from core.entities import ENTITY_FORMS
from screens.base import ScreenBase
from ui.common.safe_navigation import SafeLink


def _record_title(entity: str, row: dict) -> str:
    if entity == "client":
        return " ".join(p for p in (row.get("firstName"), row.get("lastName")) if p) or row["id"]
    if entity == "job":
        return f"{row.get('client') or '?'} · {row.get('date') or 'unscheduled'} · {row.get('status') or ''}"
    return str(row.get("name") or row["id"])


class HomeScreen(ScreenBase):
    def __init__(self, services, repository, router, parent=None):
        super().__init__(services, repository, router, parent)
        v = QVBoxLayout(self)
        title = QLabel("TidyCo")
        title.setObjectName("PageTitle")
        v.addWidget(title)

        for entity, form in ENTITY_FORMS.items():
            box = QGroupBox(form.label.capitalize() + "s", self)
            bv = QVBoxLayout(box)
            rows = repository.list(entity)
            if not rows:
                bv.addWidget(QLabel(f"No {form.label}s yet."))
            for row in rows:
                bv.addWidget(SafeLink(router, edit_route(entity, row["id"]), _record_title(entity, row), box))
            actions = QHBoxLayout()
            actions.addWidget(SafeLink(router, new_route(entity), f"+ New {form.label}", box))
            actions.addStretch(1)
            bv.addLayout(actions)
            v.addWidget(box)
        v.addStretch(1)
