# -*- coding: utf-8 -*-
from __future__ import annotations

from app.unsaved_changes import FormKind, UnsavedChangesRegistry


def test_aggregate_is_union_of_registrations(registry: UnsavedChangesRegistry) -> None:
    registry.register("A", FormKind.EDIT)
    registry.register("B", FormKind.DRAFT)
    assert registry.is_dirty is False

    registry.mark_dirty("A", True)
    assert registry.is_dirty is True

    registry.unregister("B")
    assert registry.is_dirty is True

    registry.mark_dirty("A", False)
    assert registry.is_dirty is False


def test_register_starts_clean_and_overwrites(registry: UnsavedChangesRegistry) -> None:
    registry.register("job-1")
    registry.mark_dirty("job-1", True)
    registry.register("job-1", FormKind.EDIT, "job")
    reg = registry.get("job-1")
    assert reg is not None
    assert reg.dirty is False
    assert reg.entity_label == "job"
    assert registry.is_dirty is False


def test_unregister_only_dirty_form_flips_aggregate(registry: UnsavedChangesRegistry) -> None:
    registry.register("A")
    registry.register("B")
    registry.mark_dirty("A", True)
    registry.unregister("A")
    assert registry.is_dirty is False
    assert "B" in registry


def test_unknown_form_operations_are_silent(registry: UnsavedChangesRegistry) -> None:
    registry.register("A")
    registry.mark_dirty("A", True)
    before = registry.get("A")

    registry.mark_form_dirty("nonexistent", True)
    registry.update_form_callback("nonexistent", lambda: None)
    registry.unregister("nonexistent")

    assert registry.form_ids() == ("A",)
    assert registry.get("A") == before
    assert registry.snapshot().dirty_form_ids == ("A",)


def test_update_save_callback_keeps_dirty_flag(registry: UnsavedChangesRegistry) -> None:
    calls = []
    registry.register("new-job", FormKind.DRAFT, "job", lambda: calls.append("old"))
    registry.mark_dirty("new-job", True)
    registry.update_save_callback("new-job", lambda: calls.append("new"))

    reg = registry.get("new-job")
    assert reg.dirty is True
    reg.save_draft_callback()
    assert calls == ["new"]


def test_out_of_order_lifecycles_do_not_cross_talk(registry: UnsavedChangesRegistry) -> None:
    registry.mark_dirty("late", True)  # before register: ignored
    registry.register("early")
    registry.register("late")
    registry.mark_dirty("early", True)
    registry.unregister("late")
    registry.mark_dirty("late", True)  # after unregister: ignored
    assert registry.snapshot().dirty_form_ids == ("early",)


def test_snapshot_prefers_draft_and_reports_edits(registry: UnsavedChangesRegistry) -> None:
    registry.register("client-1", FormKind.EDIT, "client")
    registry.register("new-lead", FormKind.DRAFT, "lead")
    registry.mark_dirty("client-1", True)
    snap = registry.snapshot()
    assert snap.active_draft is None
    assert snap.has_dirty_edit is True

    registry.mark_dirty("new-lead", True)
    snap = registry.snapshot()
    assert snap.active_draft is not None
    assert snap.active_draft.form_id == "new-lead"
    assert snap.has_dirty_edit is True


def test_snapshot_is_current_without_waiting(registry: UnsavedChangesRegistry) -> None:
    registry.register("A")
    seen = []
    registry.subscribe(lambda ev: seen.append(registry.snapshot().is_dirty))
    registry.mark_dirty("A", True)
    assert registry.snapshot().is_dirty is True
    assert seen == [True]


def test_clear_all_dirty_keeps_registrations(registry: UnsavedChangesRegistry) -> None:
    registry.register("A")
    registry.register("C")
    registry.mark_dirty("A", True)
    registry.mark_dirty("C", True)
    registry.clear_all_dirty()
    assert registry.is_dirty is False
    assert set(registry.form_ids()) == {"A", "C"}


def test_stale_owner_cannot_unregister_a_newer_registration(registry: UnsavedChangesRegistry) -> None:
    old = registry.register("client-7", FormKind.EDIT, "client")
    new = registry.register("client-7", FormKind.EDIT, "client")
    registry.mark_dirty("client-7", True)

    registry.unregister("client-7", old)
    assert registry.get("client-7") is new
    assert registry.is_dirty is True

    registry.unregister("client-7", new)
    assert registry.get("client-7") is None
    assert registry.is_dirty is False


def test_listener_errors_do_not_break_mutations(registry: UnsavedChangesRegistry) -> None:
    def boom(_event):
        raise RuntimeError("listener failed")

    registry.subscribe(boom)
    registry.register("A")
    registry.mark_dirty("A", True)
    assert registry.is_dirty is True

    registry.unsubscribe(boom)
    registry.mark_dirty("A", False)
    assert registry.is_dirty is False
