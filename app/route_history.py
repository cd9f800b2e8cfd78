# -*- coding: utf-8 -*-
"""Browser-like route history for the desk's page stack (no-Qt)."""
from __future__ import annotations

from typing import List, Optional


class RouteHistory:
    """Linear back/forward history.

    ``push`` drops any forward entries, ``replace`` swaps the current entry.
    """

    def __init__(self, initial: Optional[str] = None, *, limit: int = 50) -> None:
        self._entries: List[str] = [initial] if initial else []
        self._index = len(self._entries) - 1
        try:
            self._limit = max(2, int(limit))
        except Exception:
            self._limit = 50

    @property
    def current(self) -> Optional[str]:
        if 0 <= self._index < len(self._entries):
            return self._entries[self._index]
        return None

    @property
    def can_go_back(self) -> bool:
        return self._index > 0

    @property
    def can_go_forward(self) -> bool:
        return self._index < len(self._entries) - 1

    def entries(self) -> List[str]:
        return list(self._entries)

    def push(self, route: str) -> str:
        del self._entries[self._index + 1:]
        self._entries.append(route)
        if len(self._entries) > self._limit:
            del self._entries[0]
        self._index = len(self._entries) - 1
        return route

    def replace(self, route: str) -> str:
        if self._index < 0:
            return self.push(route)
        self._entries[self._index] = route
        return route

    def peek_back(self) -> Optional[str]:
        return self._entries[self._index - 1] if self.can_go_back else None

    def peek_forward(self) -> Optional[str]:
        return self._entries[self._index + 1] if self.can_go_forward else None

    def back(self) -> Optional[str]:
        if not self.can_go_back:
            return None
        self._index -= 1
        return self.current

    def forward(self) -> Optional[str]:
        if not self.can_go_forward:
            return None
        self._index += 1
        return self.current
