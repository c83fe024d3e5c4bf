"""
Tests for the stream reconciler.

Critical: handlers must be idempotent under at-least-once delivery.
"""

import pytest

from registry.core.clock import FixedClock
from registry.core.errors import InvalidEventError, InvalidTransitionError
from registry.core.events import RecipientRemoved
from registry.store import MemoryRecipientStore
from registry.stream import RemovalStrategy, StreamReconciler

from .factories import added, removed, rid


def _reconciler(strategy=RemovalStrategy.DELETE, now=1000):
    store = MemoryRecipientStore()
    return store, StreamReconciler(store, strategy=strategy, clock=FixedClock(now))


def test_added_creates_record():
    store, r = _reconciler()
    r.handle_added(added(1, timestamp=42))

    rec = store.get(rid(1))
    assert rec is not None
    assert rec.submitted_at == 42
    assert rec.created_at == 1000
    assert len(store) == 1


def test_duplicate_add_is_idempotent():
    once, r1 = _reconciler()
    r1.handle(added(1))

    twice, r2 = _reconciler()
    r2.handle(added(1))
    r2.handle(added(1))

    assert twice.list() == once.list()
    assert len(twice) == 1


def test_repeated_add_last_write_wins():
    store, r = _reconciler()
    r.handle(added(1, timestamp=10, index=1))
    r.handle(added(1, timestamp=30, index=5))

    rec = store.get(rid(1))
    assert rec.submitted_at == 30
    assert rec.index == 5
    assert len(store) == 1


def test_remove_unknown_id_leaves_store_unchanged():
    store, r = _reconciler()
    r.handle(added(1))
    before = store.list()

    r.handle_removed(removed(2))

    assert store.list() == before


def test_remove_unknown_id_flag_strategy():
    store, r = _reconciler(RemovalStrategy.FLAG)
    r.handle(removed(3))
    assert len(store) == 0


def test_remove_deletes_record():
    store, r = _reconciler()
    r.handle(added(1))
    r.handle(added(2))
    r.handle(removed(1, timestamp=77))

    assert store.get(rid(1)) is None
    assert store.get(rid(2)) is not None


def test_duplicate_remove_is_safe():
    store, r = _reconciler()
    r.handle(added(1))
    r.handle(removed(1))
    r.handle(removed(1))
    assert len(store) == 0


def test_remove_flags_record():
    store, r = _reconciler(RemovalStrategy.FLAG)
    r.handle(added(1))
    r.handle(removed(1, timestamp=77))

    rec = store.get(rid(1))
    assert rec.removed
    assert rec.removed_at == 77


def test_flagged_record_is_terminal():
    store, r = _reconciler(RemovalStrategy.FLAG)
    r.handle(added(1, timestamp=10))
    r.handle(removed(1, timestamp=77))
    r.handle(removed(1, timestamp=99))
    r.handle(added(1, timestamp=120))

    rec = store.get(rid(1))
    assert rec.removed
    assert rec.removed_at == 77
    assert rec.submitted_at == 10


def test_strategy_from_string():
    _, r = _reconciler("flag")
    assert r.strategy is RemovalStrategy.FLAG


def test_malformed_event_raises():
    _, r = _reconciler()
    bad = RecipientRemoved(registry="0x" + "ab" * 20, recipient_id="0x12", timestamp=1)
    with pytest.raises(InvalidEventError):
        r.handle(bad)


def test_unknown_event_type_raises():
    _, r = _reconciler()
    r.reducer = type(r.reducer)()
    with pytest.raises(InvalidTransitionError):
        r.handle(added(1))


def test_created_at_follows_clock():
    store = MemoryRecipientStore()
    clock = FixedClock(100)
    StreamReconciler(store, clock=clock).handle(added(1))
    StreamReconciler(store, clock=clock.tick(5)).handle(added(2))

    assert store.get(rid(1)).created_at == 100
    assert store.get(rid(2)).created_at == 105


class _TickingClock:
    """Advances one second on every read."""

    def __init__(self, start=100):
        self.current = start

    def now(self):
        self.current += 1
        return self.current


def test_redelivered_add_keeps_created_at():
    store = MemoryRecipientStore()
    r = StreamReconciler(store, clock=_TickingClock())
    r.handle(added(1))
    once = store.list()

    r.handle(added(1))
    assert store.list() == once
    assert store.get(rid(1)).created_at == once[0].created_at


def test_changed_add_is_restamped():
    store = MemoryRecipientStore()
    r = StreamReconciler(store, clock=_TickingClock())
    r.handle(added(1, timestamp=10))
    first = store.get(rid(1))

    r.handle(added(1, timestamp=30))
    rec = store.get(rid(1))
    assert rec.submitted_at == 30
    assert rec.created_at > first.created_at
