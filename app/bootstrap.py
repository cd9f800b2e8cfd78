# -*- coding: utf-8 -*-
"""
Application bootstrap (runs before UI):
- Init logging
- Load per-user settings
- Drop drafts that expired while the app was closed
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.navigation_guard import NavigationGuard
from app.unsaved_changes import UnsavedChangesRegistry
from infra.logging_setup import init_drafts_logging, init_logging
from infra.paths import drafts_dir
from infra.settings import load_settings, normalize_settings
from storage.draft_store import DraftStore

log = logging.getLogger(__name__)


@dataclass
class AppServices:
    """Objects shared by every screen for the lifetime of the main window."""

    settings: Dict[str, Any]
    registry: UnsavedChangesRegistry
    guard: NavigationGuard
    drafts: DraftStore


def build_services(settings: Optional[Dict[str, Any]] = None, *, drafts: Optional[DraftStore] = None) -> AppServices:
    cfg = normalize_settings(settings) if settings is not None else load_settings()
    if drafts is None:
        drafts = DraftStore(drafts_dir(), max_age_hours=cfg["draft_max_age_hours"])
    registry = UnsavedChangesRegistry()
    return AppServices(settings=cfg, registry=registry, guard=NavigationGuard(registry), drafts=drafts)


def bootstrap() -> AppServices:
    init_logging()
    init_drafts_logging()
    services = build_services()
    try:
        services.drafts.purge_expired()
    except OSError:
        log.warning("Draft purge skipped", exc_info=True)
    return services
