import pytest

from snapdraw.history import HistoryManager
from snapdraw.model import Stroke


def _stroke(i):
    return Stroke(points=((float(i), 0.0), (float(i), 10.0)))


def _commit(history, collection, stroke):
    history.push_snapshot(collection)
    collection.append(stroke)
    return collection


def test_undo_redo_round_trip():
    history = HistoryManager()
    s1, s2 = _stroke(1), _stroke(2)
    c0 = []
    live = list(c0)
    live = _commit(history, live, s1)
    c1 = list(live)
    live = _commit(history, live, s2)
    c2 = list(live)

    live = history.undo(live)
    assert live == c1
    live = history.undo(live)
    assert live == c0
    live = history.redo(live)
    assert live == c1
    live = history.redo(live)
    assert live == c2


def test_new_commit_after_undo_clears_redo():
    history = HistoryManager()
    live = _commit(history, [], _stroke(1))
    live = _commit(history, live, _stroke(2))
    live = history.undo(live)
    assert history.can_redo

    live = _commit(history, live, _stroke(3))

    assert not history.can_redo
    assert history.redo(live) == live
    assert live == [_stroke(1), _stroke(3)]


def test_undo_and_redo_on_empty_stacks_are_noops():
    history = HistoryManager()
    live = [_stroke(1)]

    assert history.undo(live) == live
    assert history.redo(live) == live
    assert history.undo_depth == 0
    assert history.redo_depth == 0


def test_capacity_evicts_oldest_snapshots():
    history = HistoryManager()
    live = []
    for i in range(25):
        live = _commit(history, live, _stroke(i))

    assert history.undo_depth == 20

    undos = 0
    while history.can_undo:
        live = history.undo(live)
        undos += 1

    assert undos == 20
    # The floor is the collection after the first five commits.
    assert live == [_stroke(i) for i in range(5)]
    assert history.undo(live) == live


def test_undo_then_redo_restores_exact_state():
    history = HistoryManager(capacity=5)
    live = []
    for i in range(8):
        live = _commit(history, live, _stroke(i))
        if i % 3 == 2:
            live = history.undo(live)

    before = list(live)
    assert history.redo(history.undo(live)) == before
    live = history.undo(live)
    after_undo = list(live)
    assert history.undo(history.redo(live)) == after_undo


def test_snapshots_do_not_alias_live_collection():
    history = HistoryManager()
    live = [_stroke(1)]
    history.push_snapshot(live)

    live.append(_stroke(2))
    live.clear()

    assert history.snapshots() == [(_stroke(1),)]
    restored = history.undo(live)
    restored.append(_stroke(9))
    assert history.redo_depth == 1
    assert history.redo(restored) == []


def test_reset_drops_both_stacks():
    history = HistoryManager()
    live = _commit(history, [], _stroke(1))
    history.undo(live)

    history.reset()

    assert not history.can_undo
    assert not history.can_redo


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        HistoryManager(capacity=0)
