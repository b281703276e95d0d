"""Container tests: List, Stack, HashSet, Dictionary, NArray."""

import pytest

from corlib.collections import (
    Dictionary,
    HashSet,
    KeyCollection,
    List,
    NArray,
    Stack,
    ValueCollection,
)
from corlib.core import KeyValuePair, NObject, to_int32
from corlib.enumeration import CursorState, DeferredEnumerable
from corlib.errors import (
    ArgumentException,
    ArgumentOutOfRangeException,
    InvalidOperationException,
    KeyNotFoundException,
)
from corlib.linq import Enumerable
from corlib.regex import Regex


class Point(NObject):
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def Equals(self, other):
        return isinstance(other, Point) and (other.x, other.y) == (self.x, self.y)

    def GetHashCode(self):
        return to_int32(self.x * 31 + self.y)

    def ToString(self):
        return "P"


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------


def test_list_constructors():
    assert List().Count == 0
    assert List(10).Count == 0
    assert List([1, 2]).ToArray() == [1, 2]
    assert List(List([3])).ToArray() == [3]
    with pytest.raises(ArgumentOutOfRangeException):
        List(-1)


def test_list_add_and_index():
    xs = List()
    xs.Add("a")
    xs.Add("b")
    assert xs.Count == 2
    assert xs.get_Item(1) == "b"
    xs[0] = "z"
    assert xs[0] == "z"
    with pytest.raises(ArgumentOutOfRangeException):
        xs.get_Item(2)
    with pytest.raises(ArgumentOutOfRangeException):
        xs[-1]


def test_list_insert_bounds():
    xs = List([1, 3])
    xs.Insert(1, 2)
    xs.Insert(3, 4)
    assert xs.ToArray() == [1, 2, 3, 4]
    with pytest.raises(ArgumentOutOfRangeException):
        xs.Insert(5, 0)
    with pytest.raises(ArgumentOutOfRangeException):
        xs.Insert(-1, 0)


def test_list_remove_at_shifts_tail():
    xs = List([1, 2, 3, 4])
    xs.RemoveAt(1)
    assert xs.ToArray() == [1, 3, 4]
    with pytest.raises(ArgumentOutOfRangeException):
        xs.RemoveAt(3)


def test_list_remove_range_and_remove():
    xs = List([1, 2, 3, 4, 5])
    xs.RemoveRange(1, 2)
    assert xs.ToArray() == [1, 4, 5]
    with pytest.raises(ArgumentException):
        xs.RemoveRange(2, 5)
    assert xs.Remove(4)
    assert not xs.Remove(42)
    assert xs.ToArray() == [1, 5]


def test_list_remove_all_counts():
    xs = List([1, 2, 3, 4, 5, 6])
    assert xs.RemoveAll(lambda x: x % 2 == 0) == 3
    assert xs.ToArray() == [1, 3, 5]


def test_list_clear_and_to_array_independent():
    xs = List([1, 2])
    snapshot = xs.ToArray()
    snapshot.append(3)
    assert xs.Count == 2
    xs.Clear()
    assert xs.Count == 0


def test_list_index_of_uses_generic_equals():
    xs = List([Point(1, 2), Point(3, 4)])
    assert xs.IndexOf(Point(3, 4)) == 1
    assert xs.Contains(Point(1, 2))
    assert Point(9, 9) not in xs
    assert List([1, True]).IndexOf(True) == 1


def test_list_add_range_self_and_null():
    xs = List([1, 2])
    xs.AddRange(xs)
    assert xs.ToArray() == [1, 2, 1, 2]
    with pytest.raises(ArgumentException):
        xs.AddRange(None)


def test_list_reverse_and_sort():
    xs = List([3, 1, 2])
    xs.Sort()
    assert xs.ToArray() == [1, 2, 3]
    xs.Reverse()
    assert xs.ToArray() == [3, 2, 1]
    xs.Sort(lambda a, b: a - b)
    assert xs.ToArray() == [1, 2, 3]
    ys = List(["b", None, "a"])
    ys.Sort()
    assert ys.ToArray() == [None, "a", "b"]


def test_list_sort_incomparable_raises():
    xs = List([1, "a"])
    with pytest.raises(InvalidOperationException):
        xs.Sort()


def test_list_enumerator_is_live_view():
    xs = List([1, 2])
    e = xs.GetEnumerator()
    assert e.MoveNext()
    xs.Add(3)
    seen = [e.Current]
    while e.MoveNext():
        seen.append(e.Current)
    assert seen == [1, 2, 3]
    assert list(xs) == [1, 2, 3]
    assert len(xs) == 3


# ---------------------------------------------------------------------------
# Stack
# ---------------------------------------------------------------------------


def test_stack_lifo():
    s = Stack()
    s.Push(1)
    s.Push(2)
    assert s.Peek() == 2
    assert s.Pop() == 2
    assert s.Pop() == 1
    assert s.Count == 0


def test_stack_empty_raises():
    s = Stack()
    with pytest.raises(InvalidOperationException, match="Stack empty."):
        s.Pop()
    with pytest.raises(InvalidOperationException, match="Stack empty."):
        s.Peek()


def test_stack_enumerates_in_insertion_order():
    s = Stack()
    for x in (1, 2, 3):
        s.Push(x)
    assert list(s) == [1, 2, 3]


# ---------------------------------------------------------------------------
# HashSet
# ---------------------------------------------------------------------------


def test_hash_set_add_contains_remove():
    s = HashSet()
    assert s.Add("a")
    assert not s.Add("a")
    assert s.Contains("a")
    assert s.Count == 1
    assert s.Remove("a")
    assert not s.Remove("a")
    assert s.Count == 0


def test_hash_set_value_semantics_and_null():
    s = HashSet([Point(1, 1), Point(1, 1), None, None])
    assert s.Count == 2
    assert Point(1, 1) in s
    assert s.Contains(None)


def test_hash_set_enumerator_snapshots():
    s = HashSet([1, 2])
    e = s.GetEnumerator()
    s.Add(3)
    s.Remove(1)
    seen = []
    while e.MoveNext():
        seen.append(e.Current)
    assert sorted(seen) == [1, 2]
    assert e.State is CursorState.Exhausted


def test_hash_set_clear():
    s = HashSet([1, 2, 3])
    s.Clear()
    assert s.Count == 0
    assert list(s) == []


# ---------------------------------------------------------------------------
# Dictionary
# ---------------------------------------------------------------------------


def test_dictionary_get_set():
    d = Dictionary()
    d.set_Item("a", 1)
    d["b"] = 2
    d["a"] = 3
    assert d.Count == 2
    assert d.get_Item("a") == 3
    assert d["b"] == 2


def test_dictionary_missing_key_raises():
    d = Dictionary()
    with pytest.raises(KeyNotFoundException, match="The given key 'x' was not present"):
        d["x"]


def test_dictionary_add_duplicate_raises():
    d = Dictionary()
    d.Add("k", 1)
    with pytest.raises(InvalidOperationException, match="same key"):
        d.Add("k", 2)
    assert d["k"] == 1


def test_dictionary_try_get_value():
    d = Dictionary({"a": 1})
    holder = [None]
    assert d.TryGetValue("a", holder)
    assert holder[0] == 1
    assert not d.TryGetValue("z", holder)
    assert holder[0] is None


def test_dictionary_null_key():
    d = Dictionary()
    d[None] = "null"
    d[""] = "empty"
    assert d.Count == 2
    assert d[None] == "null"
    assert d.ContainsKey(None)
    assert d.Remove(None)
    assert not d.ContainsKey(None)


def test_dictionary_value_semantic_keys():
    d = Dictionary()
    d[Point(1, 2)] = "a"
    assert d[Point(1, 2)] == "a"
    assert Point(1, 2) in d


def test_dictionary_same_display_string_does_not_collide():
    d = Dictionary()
    d[Point(1, 2)] = "a"
    d[Point(2, 1)] = "b"
    assert d.Count == 2


def test_dictionary_remove_and_clear():
    d = Dictionary({"a": 1, "b": 2})
    assert d.Remove("a")
    assert not d.Remove("a")
    assert d.ContainsValue(2)
    assert not d.ContainsValue(1)
    d.Clear()
    assert d.Count == 0


def test_dictionary_remove_entry_holding_none():
    d = Dictionary()
    d["k"] = None
    assert d.Remove("k")
    assert d.Count == 0


def test_dictionary_keys_values_are_snapshots():
    d = Dictionary({"a": 1, "b": 2})
    keys = d.Keys
    values = d.Values
    assert isinstance(keys, KeyCollection)
    assert isinstance(values, ValueCollection)
    d["c"] = 3
    assert sorted(keys.ToArray()) == ["a", "b"]
    assert sorted(values.ToArray()) == [1, 2]


def test_dictionary_enumerates_key_value_pairs():
    d = Dictionary({"a": 1})
    pairs = list(d)
    assert pairs == [KeyValuePair("a", 1)]
    assert pairs[0].Key == "a"
    assert pairs[0].Value == 1


def test_dictionary_copy_constructor():
    src = Dictionary({"a": 1})
    copy = Dictionary(src)
    copy["b"] = 2
    assert src.Count == 1
    assert copy.Count == 2
    with pytest.raises(ArgumentException):
        Dictionary("nope")


# ---------------------------------------------------------------------------
# NArray
# ---------------------------------------------------------------------------


def test_array_index_of():
    assert NArray.IndexOf([1, 2, 3], 2) == 1
    assert NArray.IndexOf([Point(0, 0)], Point(0, 0)) == 0
    assert NArray.IndexOf([], 1) == -1
    a = [1, 2]
    assert NArray.IndexOf([[1, 2], a], a) == 1
    assert NArray.IndexOf([[1, 2]], [1, 2]) == -1


def test_array_to_enumerable():
    assert list(NArray.ToEnumerable([1, 2])) == [1, 2]


def test_array_resize():
    holder = [None]
    NArray.Resize(holder, 2)
    assert holder[0] == [None, None]
    holder = [[1, 2, 3]]
    original = holder[0]
    NArray.Resize(holder, 3)
    assert holder[0] is original
    NArray.Resize(holder, 5)
    assert holder[0] == [1, 2, 3, None, None]
    NArray.Resize(holder, 1)
    assert holder[0] == [1]
    with pytest.raises(ArgumentOutOfRangeException):
        NArray.Resize(holder, -1)


def test_arrays_as_keys_and_members():
    a, b = [1, 2], [1, 2]
    d = Dictionary()
    d.Add(a, "a")
    d.Add(b, "b")
    assert d.Count == 2
    assert d[a] == "a"
    assert d[b] == "b"
    assert not d.ContainsKey([1, 2])
    s = HashSet()
    assert s.Add(a)
    assert not s.Add(a)
    assert s.Add(b)
    assert s.Count == 2
    xs = List([a])
    assert xs.Contains(a)
    assert not xs.Contains([1, 2])
    assert xs.IndexOf(b) == -1


# ---------------------------------------------------------------------------
# Enumerator contract across containers
# ---------------------------------------------------------------------------


def _dictionary():
    d = Dictionary()
    d["a"] = 1
    d[None] = 2
    d[3] = 3
    return d


def _generator():
    yield from range(3)


@pytest.mark.parametrize(
    "make",
    [
        lambda: List([1, 2, 3]),
        lambda: Stack([1, 2, 3]),
        lambda: HashSet([1, "1", None]),
        _dictionary,
        lambda: _dictionary().Keys,
        lambda: _dictionary().Values,
        lambda: Regex("(a)(?<x>b)").Match("ab").Groups,
        lambda: DeferredEnumerable(_generator),
        lambda: Enumerable.Select(List([1, 2, 3]), str),
    ],
    ids=[
        "list",
        "stack",
        "hash_set",
        "dictionary",
        "keys",
        "values",
        "groups",
        "generator",
        "select",
    ],
)
def test_enumerator_advances_exactly_count_times(make):
    e = make().GetEnumerator()
    assert e.State is CursorState.NotStarted
    for _ in range(3):
        assert e.MoveNext()
        assert e.State is CursorState.Positioned
    assert not e.MoveNext()
    assert e.State is CursorState.Exhausted
    assert not e.MoveNext()
    assert not e.MoveNext()
    with pytest.raises(InvalidOperationException):
        e.Current
