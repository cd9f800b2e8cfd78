# -*- coding: utf-8 -*-
"""Route names used by the desk page stack.

    home
    clients/new            jobs/new            leads/new
    clients/<id>/edit      jobs/<id>/edit      leads/<id>/edit
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

HOME = "home"

_COLLECTIONS = {"clients": "client", "jobs": "job", "leads": "lead"}
_ENTITY_TO_COLLECTION = {v: k for k, v in _COLLECTIONS.items()}


@dataclass(frozen=True)
class RouteMatch:
    name: str
    entity: Optional[str] = None
    record_id: Optional[str] = None

    @property
    def is_form(self) -> bool:
        return self.entity is not None

    @property
    def is_new(self) -> bool:
        return self.entity is not None and self.record_id is None

    @property
    def form_id(self) -> Optional[str]:
        """Registration id of the form hosted by this route."""
        if self.entity is None:
            return None
        if self.record_id is None:
            return f"new-{self.entity}"
        return f"{self.entity}-{self.record_id}"


def parse_route(route: str) -> RouteMatch:
    parts = [p for p in str(route or "").strip("/").split("/") if p]
    if not parts or parts == [HOME]:
        return RouteMatch(name=HOME)
    entity = _COLLECTIONS.get(parts[0])
    if entity is None:
        raise ValueError(f"Unknown route: {route!r}")
    if parts[1:] == ["new"]:
        return RouteMatch(name=f"{parts[0]}/new", entity=entity)
    if len(parts) == 3 and parts[2] == "edit":
        return RouteMatch(name=f"{parts[0]}/edit", entity=entity, record_id=parts[1])
    raise ValueError(f"Unknown route: {route!r}")


def new_route(entity: str) -> str:
    return f"{_ENTITY_TO_COLLECTION[entity]}/new"


def edit_route(entity: str, record_id: str) -> str:
    return f"{_ENTITY_TO_COLLECTION[entity]}/{record_id}/edit"
