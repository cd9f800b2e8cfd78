# -*- coding: utf-8 -*-
from __future__ import annotations

import json

from storage.draft_store import DraftStore

HOUR = 3600.0
T0 = 1_700_000_000.0


def test_save_and_load(draft_store: DraftStore) -> None:
    assert draft_store.save("new-client", {"firstName": "Dana"}, now=T0) is True
    assert draft_store.load("new-client", now=T0 + 10) == {"firstName": "Dana"}
    assert draft_store.keys() == ["new-client"]


def test_file_format(draft_store: DraftStore) -> None:
    draft_store.save("new-job", {"bedrooms": 3}, now=T0)
    path = draft_store.path_for("new-job")
    assert path.name == "tidyco_draft_new-job.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {"data": {"bedrooms": 3}, "timestamp": int(T0 * 1000)}


def test_last_write_wins(draft_store: DraftStore) -> None:
    draft_store.save("k", {"v": 1}, now=T0)
    draft_store.save("k", {"v": 2}, now=T0 + 1)
    assert draft_store.load("k", now=T0 + 2) == {"v": 2}


def test_expired_draft_is_removed(draft_store: DraftStore) -> None:
    draft_store.save("k", {"v": 1}, now=T0)
    assert draft_store.load("k", now=T0 + 23 * HOUR) == {"v": 1}
    assert draft_store.load("k", now=T0 + 24 * HOUR) is None
    assert not draft_store.path_for("k").exists()


def test_corrupt_draft_is_removed(draft_store: DraftStore) -> None:
    draft_store.directory.mkdir(parents=True)
    path = draft_store.path_for("k")
    path.write_text("{not json", encoding="utf-8")
    assert draft_store.load("k") is None
    assert not path.exists()


def test_unwritable_directory_degrades(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = DraftStore(blocker)
    assert store.save("k", {"v": 1}) is False
    assert store.load("k") is None


def test_unserializable_data_is_reported(draft_store: DraftStore) -> None:
    assert draft_store.save("k", {"v": object()}) is False
    assert not draft_store.path_for("k").exists()


def test_keys_are_sanitized(draft_store: DraftStore) -> None:
    assert draft_store.storage_key("../x y") == "tidyco_draft_.._x_y"
    draft_store.save("../x y", {"v": 1}, now=T0)
    assert draft_store.path_for("../x y").parent == draft_store.directory


def test_purge_expired_and_clear(draft_store: DraftStore) -> None:
    draft_store.save("old", {"v": 1}, now=T0)
    draft_store.save("fresh", {"v": 2}, now=T0 + 30 * HOUR)
    assert draft_store.purge_expired(now=T0 + 31 * HOUR) == 1
    assert draft_store.keys() == ["fresh"]
    assert draft_store.clear() == 1
    assert draft_store.keys() == []
