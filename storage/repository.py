# -*- coding: utf-8 -*-
"""In-process record repository used by the desk screens.

Stands in for the remote CRM tables: records are plain dicts keyed by
entity ("client", "job", "lead") and record id.
"""
from __future__ import annotations

import copy
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional

log = logging.getLogger(__name__)


class RecordNotFound(KeyError):
    pass


class RecordRepository:
    def __init__(self, seed: Optional[Mapping[str, Mapping[str, Mapping[str, Any]]]] = None) -> None:
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = {}
        for entity, rows in (seed or {}).items():
            self._tables[entity] = {rid: dict(row) for rid, row in rows.items()}

    def list(self, entity: str) -> List[Dict[str, Any]]:
        rows = self._tables.get(entity, {})
        return [dict(row, id=rid) for rid, row in rows.items()]

    def get(self, entity: str, record_id: str) -> Dict[str, Any]:
        try:
            return copy.deepcopy(self._tables[entity][record_id])
        except KeyError:
            raise RecordNotFound(f"{entity}/{record_id}") from None

    def create(self, entity: str, values: Mapping[str, Any]) -> str:
        record_id = "rec" + uuid.uuid4().hex[:12]
        self._tables.setdefault(entity, {})[record_id] = copy.deepcopy(dict(values))
        log.info("Created %s %s", entity, record_id)
        return record_id

    def update(self, entity: str, record_id: str, values: Mapping[str, Any]) -> None:
        table = self._tables.get(entity, {})
        if record_id not in table:
            raise RecordNotFound(f"{entity}/{record_id}")
        table[record_id] = copy.deepcopy(dict(values))
        log.info("Updated %s %s", entity, record_id)


def sample_repository() -> RecordRepository:
    return RecordRepository(
        {
            "client": {
                "recClient001": {
                    "firstName": "Dana",
                    "lastName": "Whitfield",
                    "email": "dana@example.com",
                    "phone": "555-0134",
                    "status": "Active",
                    "preferences": ["pet friendly", "no bleach"],
                },
            },
            "job": {
                "recJob123": {
                    "client": "Dana Whitfield",
                    "date": "2026-10-21",
                    "time": "09:00",
                    "serviceType": "Deep Clean",
                    "selectedCleaners": ["Maria", "Ana"],
                    "bedrooms": 3,
                    "bathrooms": 2,
                    "durationHours": 3,
                    "status": "Scheduled",
                },
            },
            "lead": {},
        }
    )
