"""Tests for taskmatch/selection.py — idempotent, id-unique selection store."""

import threading

import pytest

from taskmatch.catalog import TaskType

HARVESTING = TaskType(id="t1", name="Harvesting")
PRUNING = TaskType(id="t4", name="Pruning")


class TestToggle:
    def test_appends_tagged_entry(self, store, directory):
        """toggle() records the worker with the task name."""
        store.toggle(directory.get("w1"), HARVESTING)
        (entry,) = store.list()
        assert entry.id == "w1"
        assert entry.task == "Harvesting"
        assert entry.worker is directory.get("w1")

    def test_appends_at_end(self, store, directory):
        """New entries go to the end in toggle order."""
        for wid in ["w4", "w1", "w2"]:
            store.toggle(directory.get(wid), HARVESTING)
        assert [e.id for e in store.list()] == ["w4", "w1", "w2"]

    def test_idempotent(self, store, directory):
        """Toggling the same worker twice equals toggling once."""
        store.toggle(directory.get("w1"), HARVESTING)
        once = store.list()
        store.toggle(directory.get("w1"), HARVESTING)
        assert store.list() == once

    def test_first_task_wins(self, store, directory):
        """A later toggle for a different task neither duplicates nor re-tags."""
        store.toggle(directory.get("w1"), HARVESTING)
        store.toggle(directory.get("w1"), PRUNING)
        assert len(store) == 1
        assert store.list()[0].task == "Harvesting"

    def test_tag_survives_browsing(self, store, directory):
        """The task tag is fixed at selection time."""
        store.toggle(directory.get("w6"), PRUNING)
        store.toggle(directory.get("w1"), HARVESTING)
        assert {e.id: e.task for e in store.list()} == {"w6": "Pruning", "w1": "Harvesting"}


class TestRemoveAndClear:
    def test_remove(self, store, directory):
        """remove() drops only the given id."""
        store.toggle(directory.get("w1"), HARVESTING)
        store.toggle(directory.get("w6"), PRUNING)
        store.remove("w1")
        assert [e.id for e in store.list()] == ["w6"]

    def test_remove_absent_is_noop(self, store, directory):
        """Removing an unknown id is not an error."""
        store.toggle(directory.get("w1"), HARVESTING)
        store.remove("w99")
        assert [e.id for e in store.list()] == ["w1"]

    def test_remove_then_reselect_other_task(self, store, directory):
        """After removal a worker can be selected for another task."""
        store.toggle(directory.get("w1"), HARVESTING)
        store.remove("w1")
        store.toggle(directory.get("w1"), PRUNING)
        assert store.list()[0].task == "Pruning"

    def test_clear(self, store, directory):
        """clear() empties the store."""
        store.toggle(directory.get("w1"), HARVESTING)
        store.clear()
        assert store.is_empty
        assert store.list() == ()

    def test_worked_example(self, store, directory):
        """Ahmad/Harvesting, Maya/Pruning, remove Ahmad -> [Maya(Pruning)]."""
        store.toggle(directory.get("w1"), HARVESTING)
        store.toggle(directory.get("w6"), PRUNING)
        store.remove("w1")
        assert [(e.name, e.task) for e in store.list()] == [("Maya", "Pruning")]


class TestReadOnlyView:
    def test_list_is_snapshot(self, store, directory):
        """list() returns an immutable snapshot."""
        store.toggle(directory.get("w1"), HARVESTING)
        snapshot = store.list()
        store.clear()
        assert len(snapshot) == 1
        with pytest.raises(AttributeError):
            snapshot.append(None)

    def test_contains_and_iter(self, store, directory):
        """contains() and iteration reflect the current selection."""
        store.toggle(directory.get("w1"), HARVESTING)
        assert store.contains("w1")
        assert not store.contains("w2")
        assert [e.id for e in store] == ["w1"]

    def test_to_dict_includes_task(self, store, directory):
        """SelectedWorker.to_dict() is the worker record plus task."""
        store.toggle(directory.get("w6"), PRUNING)
        data = store.list()[0].to_dict()
        assert data["task"] == "Pruning"
        assert data["name"] == "Maya"
        assert data["suitability_score"] == 88


class TestDiscard:
    def test_discards_given_entries(self, store, directory):
        """discard() drops the passed entries and keeps the rest."""
        store.toggle(directory.get("w1"), HARVESTING)
        store.toggle(directory.get("w6"), PRUNING)
        first = store.list()[:1]
        assert store.discard(first) == 1
        assert [e.id for e in store.list()] == ["w6"]

    def test_matches_by_identity(self, store, directory):
        """An equal but newer entry for the same worker is kept."""
        store.toggle(directory.get("w1"), HARVESTING)
        old = store.list()
        store.remove("w1")
        store.toggle(directory.get("w1"), HARVESTING)
        assert store.discard(old) == 0
        assert [e.id for e in store.list()] == ["w1"]

    def test_concurrent_toggles_not_lost(self, store, directory):
        """Toggles racing a discard on another thread all land."""
        workers = [directory.get(wid) for wid in ["w1", "w2", "w4", "w6", "w9"]]
        store.toggle(workers[0], HARVESTING)
        committed = store.list()

        thread = threading.Thread(target=store.discard, args=(committed,))
        thread.start()
        for worker in workers[1:]:
            store.toggle(worker, HARVESTING)
        thread.join(timeout=5)

        assert [e.id for e in store.list()] == ["w2", "w4", "w6", "w9"]
