# -*- coding: utf-8 -*-
"""CRM form definitions (pure, test-friendly).

Each entity form is a flat dict of field values. The field specs drive both
the Qt form builder and the default (empty) form used for draft dirtiness.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str = "text"  # text | choice | number | notes | tags
    choices: Tuple[str, ...] = ()
    default: Any = ""
    required: bool = False


@dataclass(frozen=True)
class EntityForm:
    entity: str
    label: str
    fields: Tuple[FieldSpec, ...] = field(default_factory=tuple)

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def get(self, name: str) -> Optional[FieldSpec]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


CLIENT_FORM = EntityForm(
    entity="client",
    label="client",
    fields=(
        FieldSpec("firstName", "First name", required=True),
        FieldSpec("lastName", "Last name"),
        FieldSpec("email", "Email"),
        FieldSpec("phone", "Phone"),
        FieldSpec("address", "Address"),
        FieldSpec("zipCode", "Zip code"),
        FieldSpec("status", "Status", "choice", ("Active", "Inactive", "Churned"), "Active"),
        FieldSpec("leadSource", "Lead source", "choice", ("", "Angi", "Google", "Referral", "Website", "Other")),
        FieldSpec("preferences", "Preferences", "tags"),
        FieldSpec("notes", "Notes", "notes"),
    ),
)

JOB_FORM = EntityForm(
    entity="job",
    label="job",
    fields=(
        FieldSpec("client", "Client", required=True),
        FieldSpec("date", "Date"),
        FieldSpec("time", "Time"),
        FieldSpec(
            "serviceType",
            "Service type",
            "choice",
            ("General Clean", "Deep Clean", "Move In/Out", "Post Construction"),
            "General Clean",
        ),
        FieldSpec("selectedCleaners", "Cleaners", "tags"),
        FieldSpec("bedrooms", "Bedrooms", "number", default=0),
        FieldSpec("bathrooms", "Bathrooms", "number", default=0),
        FieldSpec("durationHours", "Duration (h)", "number", default=2),
        FieldSpec(
            "status",
            "Status",
            "choice",
            ("Pending", "Scheduled", "In Progress", "Completed", "Cancelled"),
            "Scheduled",
        ),
        FieldSpec("notes", "Notes", "notes"),
    ),
)

LEAD_FORM = EntityForm(
    entity="lead",
    label="lead",
    fields=(
        FieldSpec("name", "Name", required=True),
        FieldSpec("email", "Email"),
        FieldSpec("phone", "Phone"),
        FieldSpec("city", "City"),
        FieldSpec("leadSource", "Lead source", "choice", ("Angi", "Google", "Referral", "Website", "Other"), "Angi"),
        FieldSpec(
            "status",
            "Status",
            "choice",
            ("New", "Contacted", "Qualified", "Quote Sent", "Won", "Lost", "Churned"),
            "New",
        ),
        FieldSpec("nextFollowUp", "Next follow-up"),
        FieldSpec("notes", "Notes", "notes"),
    ),
)

ENTITY_FORMS: Dict[str, EntityForm] = {f.entity: f for f in (CLIENT_FORM, JOB_FORM, LEAD_FORM)}


def get_form(entity: str) -> EntityForm:
    try:
        return ENTITY_FORMS[entity]
    except KeyError:
        raise KeyError(f"Unknown entity form: {entity!r}") from None


def default_form(entity: str) -> Dict[str, Any]:
    """Values of a brand-new, untouched form."""
    out: Dict[str, Any] = {}
    for spec in get_form(entity).fields:
        if spec.kind == "tags":
            out[spec.name] = []
        else:
            out[spec.name] = copy.deepcopy(spec.default)
    return out


def form_from_record(entity: str, record: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Form values for an existing record; missing fields fall back to defaults."""
    values = default_form(entity)
    if not record:
        return values
    for name in values:
        raw = record.get(name)
        if raw is None or raw == "":
            continue
        values[name] = copy.deepcopy(raw)
    return values


def missing_required(entity: str, values: Mapping[str, Any]) -> List[str]:
    out = []
    for spec in get_form(entity).fields:
        if not spec.required:
            continue
        val = values.get(spec.name)
        if val is None or (isinstance(val, str) and not val.strip()):
            out.append(spec.label)
    return out


def choice_items(spec: FieldSpec, value: Any) -> List[str]:
    """Items for a choice field; a stored value outside the list is kept as an extra item."""
    items = [str(c) for c in spec.choices]
    text = "" if value is None else str(value)
    if text not in items:
        items.append(text)
    return items
