# -*- coding: utf-8 -*-
from __future__ import annotations

from app.draft_autosave import DraftAutosave
from app.events import DraftCleared, DraftSaved
from app.navigation_guard import GuardState
from core.entities import default_form

T0 = 1_700_000_000.0


def _client_autosave(store, registry, **kw) -> DraftAutosave:
    empty = default_form("client")
    return DraftAutosave(
        store,
        registry,
        "new-client",
        empty,
        entity_label="client",
        default_data=empty,
        now=kw.pop("now", T0),
        **kw,
    )


def test_debounced_write(draft_store, registry) -> None:
    autosave = _client_autosave(draft_store, registry).attach()
    data = default_form("client")
    data["firstName"] = "Dana"

    autosave.update(data, now=T0)
    assert 599 <= autosave.due_in_ms(now=T0 + 0.4) <= 600
    assert autosave.flush_due(now=T0 + 0.4) is False
    assert draft_store.load("new-client", now=T0) is None

    data["lastName"] = "Whitfield"
    autosave.update(data, now=T0 + 0.5)
    assert autosave.flush_due(now=T0 + 1.0) is False
    assert autosave.flush_due(now=T0 + 1.5) is True
    assert draft_store.load("new-client", now=T0 + 2)["lastName"] == "Whitfield"
    assert autosave.has_pending_write is False


def test_new_client_scenario(draft_store, registry, guard) -> None:
    autosave = _client_autosave(draft_store, registry).attach()
    assert registry.is_dirty is False

    data = default_form("client")
    data["firstName"] = "Dana"
    autosave.update(data, now=T0)
    assert registry.snapshot().active_draft.form_id == "new-client"

    visited = []
    guard.confirm_navigation(lambda: visited.append("home"))
    assert guard.state is GuardState.AWAITING_DRAFT_DECISION
    assert "this client." in guard.current_copy().message

    guard.save_and_leave()
    assert visited == ["home"]
    assert draft_store.load("new-client", now=T0 + 1) == data
    autosave.detach()

    again = _client_autosave(draft_store, registry, now=T0 + 60)
    assert again.has_draft is True
    assert again.draft_data["firstName"] == "Dana"


def test_clearing_fields_makes_form_clean(draft_store, registry) -> None:
    autosave = _client_autosave(draft_store, registry).attach()
    data = default_form("client")
    data["firstName"] = "Dana"
    autosave.update(data, now=T0)
    data["firstName"] = ""
    autosave.update(data, now=T0 + 0.1)
    assert registry.is_dirty is False


def test_restore_draft(draft_store, registry) -> None:
    draft_store.save("new-client", {"firstName": "Dana", "status": "Active"}, now=T0)
    autosave = _client_autosave(draft_store, registry, now=T0 + 5).attach()
    assert autosave.has_draft is True

    restored = autosave.restore_draft()
    assert restored["firstName"] == "Dana"
    assert autosave.has_draft is False
    assert registry.is_dirty is True


def test_expired_draft_is_not_offered(draft_store, registry) -> None:
    draft_store.save("new-client", {"firstName": "Dana"}, now=T0)
    autosave = _client_autosave(draft_store, registry, now=T0 + 25 * 3600)
    assert autosave.has_draft is False


def test_clear_draft_after_submit(draft_store, registry) -> None:
    events = []
    registry.event_bus.subscribe(DraftCleared, events.append)
    autosave = _client_autosave(draft_store, registry).attach()
    autosave.update({"firstName": "Dana"}, now=T0)
    autosave.save_draft(now=T0)

    autosave.clear_draft()
    assert draft_store.load("new-client", now=T0) is None
    assert autosave.has_pending_write is False
    assert [e.key for e in events] == ["new-client"]


def test_discard_on_dialog_clears_stored_draft(draft_store, registry, guard) -> None:
    autosave = _client_autosave(draft_store, registry).attach()
    autosave.update({"firstName": "Dana", "status": "Active"}, now=T0)
    autosave.save_draft(now=T0)

    guard.confirm_navigation(lambda: None)
    guard.discard()
    assert draft_store.load("new-client", now=T0) is None


def test_disabled_autosave_does_nothing(draft_store, registry) -> None:
    draft_store.save("new-client", {"firstName": "Dana"}, now=T0)
    autosave = _client_autosave(draft_store, registry, enabled=False).attach()
    assert autosave.has_draft is False
    autosave.update({"firstName": "Other"}, now=T0)
    assert autosave.save_draft(now=T0) is False
    assert "new-client" not in registry
    assert draft_store.load("new-client", now=T0) == {"firstName": "Dana"}


def test_failed_write_is_reported(tmp_path, registry) -> None:
    from storage.draft_store import DraftStore

    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    events = []
    registry.event_bus.subscribe(DraftSaved, events.append)
    autosave = _client_autosave(DraftStore(blocker), registry).attach()
    autosave.update({"firstName": "Dana"}, now=T0)
    assert autosave.save_draft(now=T0) is False
    assert [e.ok for e in events] == [False]
    assert registry.is_dirty is True
