# -*- coding: utf-8 -*-
from __future__ import annotations

from app.form_tracker import FormChangeTracker
from app.navigation_guard import GuardState
from app.unsaved_changes import FormKind


def test_round_trip_edit_is_clean(registry) -> None:
    tracker = FormChangeTracker(registry, "client-1", {"firstName": "Dana", "email": ""}).attach()

    assert tracker.update({"firstName": "Dan", "email": ""}) is True
    assert registry.is_dirty is True

    assert tracker.update({"firstName": "Dana", "email": None}) is False
    assert registry.is_dirty is False


def test_baseline_is_a_copy(registry) -> None:
    initial = {"selectedCleaners": ["recA"]}
    tracker = FormChangeTracker(registry, "job-1", initial).attach()
    initial["selectedCleaners"].append("recB")
    assert tracker.baseline == {"selectedCleaners": ["recA"]}
    assert tracker.is_dirty is False


def test_disabled_tracker_never_registers(registry) -> None:
    tracker = FormChangeTracker(registry, "client-1", {"a": 1}, enabled=False).attach()
    assert tracker.update({"a": 2}) is False
    assert "client-1" not in registry
    assert registry.is_dirty is False


def test_detach_unregisters(registry) -> None:
    with FormChangeTracker(registry, "lead-1", {"name": "x"}) as tracker:
        tracker.update({"name": "y"})
        assert registry.is_dirty is True
    assert "lead-1" not in registry
    assert registry.is_dirty is False


def test_old_page_detach_keeps_the_new_page_registered(registry) -> None:
    old = FormChangeTracker(registry, "client-9", {"firstName": "Dana"}).attach()
    new = FormChangeTracker(registry, "client-9", {"firstName": "Dana"}).attach()
    new.update({"firstName": "Dan"})

    old.detach()
    assert old.attached is False
    assert "client-9" in registry
    assert registry.is_dirty is True

    new.detach()
    assert "client-9" not in registry


def test_changes_before_attach_are_reported(registry) -> None:
    tracker = FormChangeTracker(registry, "client-1", {"a": 1})
    tracker.update({"a": 2})
    tracker.attach()
    assert registry.is_dirty is True


def test_save_callback_is_latest(registry) -> None:
    calls = []
    tracker = FormChangeTracker(
        registry,
        "new-job",
        {},
        form_type=FormKind.DRAFT,
        entity_type="job",
        on_save_draft=lambda: calls.append("v1"),
    ).attach()
    tracker.set_on_save_draft(lambda: calls.append("v2"))
    registry.get("new-job").save_draft_callback()
    assert calls == ["v2"]


def test_mark_clean_rebases_baseline(registry) -> None:
    tracker = FormChangeTracker(registry, "job-1", {"status": "Scheduled"}).attach()
    tracker.update({"status": "Completed"})
    tracker.mark_clean()
    assert registry.is_dirty is False
    assert tracker.baseline == {"status": "Completed"}
    assert tracker.update({"status": "Scheduled"}) is True


def test_editing_a_job_then_leaving(registry, guard) -> None:
    job = {"status": "Scheduled", "selectedCleaners": ["recA", "recB"], "notes": ""}
    tracker = FormChangeTracker(registry, "job-recJob123", job, entity_type="job").attach()
    assert tracker.update({"status": "Scheduled", "selectedCleaners": ["recB", "recA"], "notes": None}) is False

    tracker.update({"status": "Completed", "selectedCleaners": ["recA", "recB"], "notes": ""})
    assert tracker.changed_fields() == ["status"]

    visited = []
    guard.confirm_navigation(lambda: visited.append("clients"))
    assert guard.state is GuardState.AWAITING_EDIT_DECISION
    guard.leave()
    assert visited == ["clients"]
    assert registry.is_dirty is False
