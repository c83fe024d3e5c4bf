"""
Tests for replaying an event history into a store.

Replay must produce identical store content across runs.
"""

import os
import tempfile

from registry.core.canonical import canonical_json_str
from registry.core.clock import FixedClock
from registry.log import FileEventLog
from registry.query import get_recipient, list_recipients, visible_recipients
from registry.replay import replay
from registry.store import MemoryRecipientStore
from registry.stream import RemovalStrategy, StreamReconciler

from .factories import added, removed, rid

HISTORY = [
    added(1, timestamp=10, block=1),
    added(2, timestamp=20, block=2),
    added(3, timestamp=30, block=3),
    removed(2, timestamp=40, block=4),
    added(4, timestamp=150, block=5),
    removed(3, timestamp=75, block=6),
]


def _replayed(strategy):
    store = MemoryRecipientStore()
    result = replay(HISTORY, StreamReconciler(store, strategy=strategy, clock=FixedClock(7)))
    return store, result


def test_replay_counts():
    _, result = _replayed(RemovalStrategy.DELETE)
    assert result.applied == 6
    assert result.added == 4
    assert result.removed == 2


def test_replay_determinism():
    results = set()
    for _ in range(10):
        store, _ = _replayed(RemovalStrategy.FLAG)
        results.add(canonical_json_str([r.to_dict() for r in store.list()]))
    assert len(results) == 1


def test_replay_delete_strategy():
    store, _ = _replayed(RemovalStrategy.DELETE)
    assert [r.id for r in store.list()] == [rid(1), rid(4)]


def test_replay_from_file_log():
    with tempfile.TemporaryDirectory() as tmpdir:
        log = FileEventLog(os.path.join(tmpdir, "events.log"))
        log.extend(HISTORY)

        store = MemoryRecipientStore()
        result = replay(log.read(), StreamReconciler(store, clock=FixedClock(7)))

        assert result.applied == len(HISTORY)
        assert [r.id for r in store.list()] == [rid(1), rid(4)]


def test_flagged_store_matches_window_rules():
    store, _ = _replayed(RemovalStrategy.FLAG)
    flags = {r.id: (r.is_hidden, r.is_locked) for r in list_recipients(store, start_time=50, end_time=100)}

    assert flags == {
        rid(1): (False, False),
        rid(2): (True, False),   # removed before start
        rid(3): (False, True),   # removed during round
        rid(4): (True, False),   # added after end
    }
    visible = visible_recipients(list_recipients(store, start_time=50, end_time=100))
    assert [r.id for r in visible] == [rid(1), rid(3)]


def test_store_lookup_validates_id():
    store, _ = _replayed(RemovalStrategy.FLAG)
    assert get_recipient(store, rid(1)).id == rid(1)
    assert get_recipient(store, "0x01") is None
