# -*- coding: utf-8 -*-
"""Guarded router (no-Qt).

Wraps a "navigate now" primitive so that push/replace/back/forward all ask
the NavigationGuard first. The Qt page stack in ui/common/safe_navigation.py
supplies the primitive; tests supply a plain callable.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from app.navigation_guard import NavigationGuard
from app.route_history import RouteHistory

log = logging.getLogger(__name__)

ShowRoute = Callable[[str], None]


class GuardedRouter:
    def __init__(
        self,
        guard: NavigationGuard,
        show_route: ShowRoute,
        *,
        history: Optional[RouteHistory] = None,
        on_route_changed: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._guard = guard
        self._show_route = show_route
        self._on_route_changed = on_route_changed
        self._history = history if history is not None else RouteHistory()

    @property
    def guard(self) -> NavigationGuard:
        return self._guard

    @property
    def history(self) -> RouteHistory:
        return self._history

    @property
    def current_route(self) -> Optional[str]:
        return self._history.current

    @property
    def can_go_back(self) -> bool:
        return self._history.can_go_back

    @property
    def can_go_forward(self) -> bool:
        return self._history.can_go_forward

    def push(self, route: str) -> None:
        if route == self._history.current:
            return
        self._guard.confirm_navigation(lambda: self._commit(self._history.push, route))

    def replace(self, route: str) -> None:
        self._guard.confirm_navigation(lambda: self._commit(self._history.replace, route))

    def back(self) -> None:
        if not self._history.can_go_back:
            return
        self._guard.confirm_navigation(lambda: self._commit_step(self._history.peek_back, self._history.back))

    def forward(self) -> None:
        if not self._history.can_go_forward:
            return
        self._guard.confirm_navigation(lambda: self._commit_step(self._history.peek_forward, self._history.forward))

    def navigate_unguarded(self, route: str) -> None:
        """Go to *route* after a successful save; clears every dirty flag first."""
        self._guard.allow_navigation()
        self._commit(self._history.push, route)

    # The history only moves once the page was shown; a failing show leaves it untouched
    def _commit(self, move: Callable[[str], str], route: str) -> None:
        self._guard.allow_navigation()
        self._show_route(route)
        move(route)
        self._changed(route)

    def _commit_step(self, peek: Callable[[], Optional[str]], step: Callable[[], Optional[str]]) -> None:
        route = peek()
        if route is None:
            return
        self._guard.allow_navigation()
        self._show_route(route)
        step()
        self._changed(route)

    def _changed(self, route: str) -> None:
        log.debug("route -> %s", route)
        if self._on_route_changed is not None:
            self._on_route_changed(route)
