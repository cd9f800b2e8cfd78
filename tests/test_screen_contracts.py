# -*- coding: utf-8 -*-
"""
Contract tests for the guard layering.

These tests are intentionally static (no Qt QApplication):
- app/ stays importable without PyQt5 (controller.py is the Qt seam)
- screens and widgets talk to the registry through its public API only
- every page releases its form registration on teardown
"""
from __future__ import annotations

import re
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

_QT_IMPORT = re.compile(r"^\s*(from|import)\s+PyQt5", re.M)
_QT_MODULES = {"controller.py"}


def _iter_py(folder: str):
    yield from sorted((ROOT / folder).rglob("*.py"))


def test_app_layer_is_qt_free():
    offenders = []
    for p in _iter_py("app"):
        if p.name in _QT_MODULES:
            continue
        if _QT_IMPORT.search(p.read_text(encoding="utf-8", errors="ignore")):
            offenders.append(str(p.relative_to(ROOT)))
    assert not offenders, "PyQt5 imported outside the Qt seam:\n- " + "\n- ".join(offenders)


def test_ui_does_not_reach_into_registry_internals():
    offenders = []
    for folder in ("screens", "ui"):
        for p in _iter_py(folder):
            if "._forms" in p.read_text(encoding="utf-8", errors="ignore"):
                offenders.append(str(p.relative_to(ROOT)))
    assert not offenders, "Registry internals used directly:\n- " + "\n- ".join(offenders)


def test_screens_define_teardown():
    txt = (ROOT / "screens" / "base.py").read_text(encoding="utf-8")
    assert "def teardown(self)" in txt

    form = (ROOT / "screens" / "entity_form_screen.py").read_text(encoding="utf-8")
    m = re.search(r"def teardown\(self\)[^:]*:(.+?)(\n    def |\Z)", form, flags=re.S)
    assert m, "EntityFormScreen must override teardown()"
    assert ".detach()" in m.group(1)


def test_successful_save_bypasses_the_guard():
    form = (ROOT / "screens" / "entity_form_screen.py").read_text(encoding="utf-8")
    m = re.search(r"def _save\(self[^)]*\)[^:]*:(.+?)\n    def ", form, flags=re.S)
    assert m, "Could not locate _save in entity_form_screen.py"
    body = m.group(1)
    assert "navigate_unguarded" in body
    assert ".push(" not in body


def test_router_builds_the_new_page_before_tearing_down_the_old():
    nav = (ROOT / "ui" / "common" / "safe_navigation.py").read_text(encoding="utf-8")
    m = re.search(r"def _show_route\(self[^)]*\)[^:]*:(.+?)\n\n\nclass ", nav, flags=re.S)
    assert m, "SafeRouter._show_route not found"
    body = m.group(1)
    assert body.index("self._page_factory(route)") < body.index("teardown()")


def test_back_forward_filter_yields_to_modal_dialogs():
    nav = (ROOT / "ui" / "common" / "safe_navigation.py").read_text(encoding="utf-8")
    m = re.search(r"def eventFilter\(self[^)]*\)[^:]*:(.+?)\n\n\nclass ", nav, flags=re.S)
    assert m, "BackForwardFilter.eventFilter not found"
    body = m.group(1)
    assert "activeModalWidget()" in body
    assert body.index("activeModalWidget()") < body.index("self._router.back()")


def test_combo_values_outside_the_choices_are_kept():
    form = (ROOT / "screens" / "entity_form_screen.py").read_text(encoding="utf-8")
    m = re.search(r"def set_values\(self[^)]*\)[^:]*:(.+?)\n    def ", form, flags=re.S)
    assert m, "set_values not found"
    assert "choice_items(" in m.group(1)
    assert "max(0" not in m.group(1)


def test_layer_boundaries():
    import importlib.util

    spec = importlib.util.spec_from_file_location("check_architecture", ROOT / "tools" / "check_architecture.py")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    violations = mod.find_violations()
    assert not violations, "\n".join(violations)
