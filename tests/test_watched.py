import json
from datetime import datetime, timezone

import pytest

from ytviewer.core.watched import WatchedTracker
from ytviewer.core.youtube.video import Video
from ytviewer.errors import PersistenceError
from ytviewer.shared.storage.storage_manager import WatchedStore


def test_mark_then_check(watched_store):
    tracker = WatchedTracker(watched_store)

    tracker.mark_watched("v1")

    assert tracker.is_watched("v1") is True
    assert tracker.is_watched("v2") is False


def test_watched_set_survives_restart(watched_store):
    WatchedTracker(watched_store).mark_watched("v1")

    assert WatchedTracker(WatchedStore(watched_store.path)).is_watched("v1")
    assert json.loads(watched_store.path.read_text(encoding="utf-8")) == {"v1": True}


def test_failed_write_is_not_reflected(tmp_path):
    class BrokenStore:
        def load(self):
            return {}

        def save(self, watched):
            raise PersistenceError("read-only filesystem")

    tracker = WatchedTracker(BrokenStore())

    with pytest.raises(PersistenceError):
        tracker.mark_watched("v1")

    assert tracker.is_watched("v1") is False


def test_malformed_store_is_kept_aside_before_first_write(tmp_path):
    path = tmp_path / "watched.json"
    path.write_text('["v1", "v2", "v3"]', encoding="utf-8")

    tracker = WatchedTracker(WatchedStore(path))
    tracker.mark_watched("v9")

    backup = tmp_path / "watched.json.bak"
    assert json.loads(backup.read_text(encoding="utf-8")) == ["v1", "v2", "v3"]
    assert json.loads(path.read_text(encoding="utf-8")) == {"v9": True}


def test_invalid_json_does_not_overwrite_an_earlier_backup(tmp_path):
    path = tmp_path / "watched.json"
    (tmp_path / "watched.json.bak").write_text("older", encoding="utf-8")
    path.write_text("{not json", encoding="utf-8")

    assert WatchedTracker(WatchedStore(path)).is_watched("v1") is False

    assert (tmp_path / "watched.json.bak").read_text(encoding="utf-8") == "older"
    assert (tmp_path / "watched.json.bak.1").read_text(encoding="utf-8") == "{not json"
    assert not path.exists()


def test_unreadable_store_raises_persistence_error(tmp_path):
    path = tmp_path / "watched.json"
    path.mkdir()

    with pytest.raises(PersistenceError):
        WatchedStore(path).load()


def test_store_write_error_raises_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = WatchedStore(blocker / "watched.json")

    with pytest.raises(PersistenceError):
        store.save({"v1": True})


def test_annotate_pairs_videos_with_state(watched_store):
    tracker = WatchedTracker(watched_store)
    tracker.mark_watched("seen")
    videos = [
        Video("seen", "Old", "UC1", "Alpha", datetime(2024, 1, 1, tzinfo=timezone.utc)),
        Video("new", "New", "UC1", "Alpha", datetime(2024, 1, 2, tzinfo=timezone.utc)),
    ]

    assert [flag for _, flag in tracker.annotate(videos)] == [True, False]
