# -*- coding: utf-8 -*-

"""Pytest configuration.

This project is a simple app folder layout. For local testing we add the
repository root to sys.path so that imports like `from app...` work reliably.

Per-user data (settings, logs, drafts) is redirected to a temporary folder.
"""

from __future__ import annotations

import os
import sys

import pytest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app.navigation_guard import NavigationGuard  # noqa: E402
from app.unsaved_changes import UnsavedChangesRegistry  # noqa: E402
from storage.draft_store import DraftStore  # noqa: E402


@pytest.fixture(autouse=True)
def _user_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("TIDYCO_HOME", str(home))
    return home


@pytest.fixture
def registry() -> UnsavedChangesRegistry:
    return UnsavedChangesRegistry()


@pytest.fixture
def guard(registry) -> NavigationGuard:
    return NavigationGuard(registry)


@pytest.fixture
def draft_store(tmp_path) -> DraftStore:
    return DraftStore(tmp_path / "drafts")
