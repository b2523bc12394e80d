"""Tests for SelectionStore."""

import pytest

from iconografix.catalog.models import ItemRecord
from iconografix.selection import SelectionMode, SelectionStore

A = ItemRecord.from_file_name("P", "a.svg")
B = ItemRecord.from_file_name("P", "b.svg")
C = ItemRecord.from_file_name("P", "c.svg")


def ids(items):
    return [i.id for i in items]


@pytest.fixture
def store():
    return SelectionStore()


@pytest.fixture
def multi():
    return SelectionStore(SelectionMode.MULTI)


class TestSingleMode:
    """Tests for single-selection semantics."""

    def test_initial_state(self, store):
        assert store.mode is SelectionMode.SINGLE
        assert store.snapshot() == []
        assert store.count() == 0

    def test_toggle_replaces(self, store):
        """toggle(B) after toggle(A) selects only B."""
        store.toggle(A)
        store.toggle(B)
        assert ids(store.snapshot()) == [B.id]

    def test_toggle_same_item_keeps_it(self, store):
        store.toggle(A)
        store.toggle(A)
        assert ids(store.snapshot()) == [A.id]

    def test_add_replaces(self, store):
        store.add(A)
        store.add(B)
        assert ids(store.snapshot()) == [B.id]

    def test_remove_clears_regardless_of_item(self, store):
        store.add(A)
        store.remove(B)
        assert store.snapshot() == []


class TestMultiMode:
    """Tests for multi-selection semantics."""

    def test_toggle_twice_restores(self, multi):
        multi.toggle(A)
        multi.toggle(B)
        before = ids(multi.snapshot())
        multi.toggle(C)
        multi.toggle(C)
        assert ids(multi.snapshot()) == before

    def test_insertion_order(self, multi):
        for item in (C, A, B):
            multi.toggle(item)
        assert ids(multi.snapshot()) == [C.id, A.id, B.id]

    def test_add_is_idempotent(self, multi):
        multi.add(A)
        multi.add(A)
        assert multi.count() == 1
        assert multi.is_selected(A)

    def test_remove(self, multi):
        multi.add(A)
        multi.add(B)
        multi.remove(A)
        assert ids(multi.snapshot()) == [B.id]
        multi.remove(C)
        assert ids(multi.snapshot()) == [B.id]

    def test_clear(self, multi):
        multi.add(A)
        multi.add(B)
        multi.clear()
        assert len(multi) == 0


class TestModeSwitch:
    """Tests for set_mode."""

    def test_multi_to_single_keeps_earliest(self, multi):
        for item in (A, B, C):
            multi.add(item)
        multi.set_mode(SelectionMode.SINGLE)
        assert multi.mode is SelectionMode.SINGLE
        assert ids(multi.snapshot()) == [A.id]

    def test_single_to_multi_preserves(self, store):
        store.add(A)
        store.set_mode(SelectionMode.MULTI)
        assert ids(store.snapshot()) == [A.id]
        store.toggle(B)
        assert ids(store.snapshot()) == [A.id, B.id]

    def test_accepts_string_mode(self, store):
        store.set_mode("multi")
        assert store.mode is SelectionMode.MULTI


class TestNotifications:
    """Tests for subscriber notifications."""

    def test_every_mutation_notifies(self, multi):
        seen = []
        multi.subscribe(lambda snap: seen.append(ids(snap)))

        multi.add(A)
        multi.toggle(B)
        multi.add(A)
        multi.remove(A)
        multi.set_mode(SelectionMode.SINGLE)
        multi.clear()

        assert seen == [[A.id], [A.id, B.id], [A.id, B.id], [B.id], [B.id], []]

    def test_notified_before_return(self, store):
        """Subscribers see the new state synchronously."""
        observed = []
        store.subscribe(lambda snap: observed.append(store.count()))
        store.toggle(A)
        assert observed == [1]

    def test_snapshot_is_a_copy(self, multi):
        captured = []
        multi.subscribe(captured.append)
        multi.add(A)
        captured[0].append(B)
        assert ids(multi.snapshot()) == [A.id]

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append)
        store.add(A)
        unsubscribe()
        unsubscribe()
        store.add(B)
        assert len(seen) == 1

    def test_multiple_subscribers(self, store):
        first, second = [], []
        store.subscribe(first.append)
        store.subscribe(second.append)
        store.toggle(A)
        assert ids(first[0]) == ids(second[0]) == [A.id]
