"""Threading shim tests."""

import pytest

from corlib.core import INT32_MAX, INT32_MIN, NObject
from corlib.concurrency import Interlocked, Monitor, Thread, ThreadPool
from corlib.errors import NotImplementedException


def test_current_thread_is_first_and_stable():
    assert Thread.CurrentThread.ManagedThreadId == 1
    assert Thread.CurrentThread is Thread.CurrentThread


def test_new_threads_get_increasing_ids():
    a = Thread()
    b = Thread(lambda: None)
    assert 1 < a.ManagedThreadId < b.ManagedThreadId
    assert a.Name is None


def test_start_and_join_are_unported():
    t = Thread(lambda: None)
    with pytest.raises(NotImplementedException):
        t.Start()
    with pytest.raises(NotImplementedException):
        t.Join()
    with pytest.raises(NotImplementedException):
        ThreadPool.QueueUserWorkItem(lambda state: None)


def test_monitor_is_a_no_op():
    gate = NObject()
    Monitor.Enter(gate)
    Monitor.Exit(gate)
    assert Monitor.TryEnter(gate)
    with Monitor.Lock(gate) as held:
        assert held is gate


def test_monitor_lock_releases_on_error():
    with pytest.raises(ValueError):
        with Monitor.Lock(NObject()):
            raise ValueError("boom")


def test_interlocked_counters_wrap():
    slot = [0]
    assert Interlocked.Increment(slot) == 1
    assert Interlocked.Decrement(slot) == 0
    assert Interlocked.Add(slot, 5) == 5
    slot = [INT32_MAX]
    assert Interlocked.Increment(slot) == INT32_MIN


def test_interlocked_exchange():
    slot = ["a"]
    assert Interlocked.Exchange(slot, "b") == "a"
    assert slot == ["b"]


def test_compare_exchange_primitives_by_value():
    slot = [3]
    assert Interlocked.CompareExchange(slot, 4, 2) == 3
    assert slot == [3]
    assert Interlocked.CompareExchange(slot, 4, 3) == 3
    assert slot == [4]


def test_compare_exchange_references_by_identity():
    class Box(NObject):
        def Equals(self, other):
            return isinstance(other, Box)

        def GetHashCode(self):
            return 0

    first = Box()
    slot = [first]
    Interlocked.CompareExchange(slot, "new", Box())
    assert slot[0] is first
    Interlocked.CompareExchange(slot, "new", first)
    assert slot == ["new"]
