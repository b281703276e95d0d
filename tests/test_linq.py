"""Query operator tests."""

import pytest

from corlib.collections import Dictionary, List
from corlib.errors import ArgumentNullException, InvalidOperationException
from corlib.linq import Enumerable


def test_select_where_are_lazy_and_restartable():
    calls = []

    def double(x):
        calls.append(x)
        return x * 2

    q = Enumerable.Select(List([1, 2, 3]), double)
    assert calls == []
    assert list(q) == [2, 4, 6]
    assert list(q) == [2, 4, 6]
    assert list(Enumerable.Where([1, 2, 3, 4], lambda x: x % 2 == 0)) == [2, 4]


def test_select_many():
    pairs = Enumerable.SelectMany([1, 2], lambda x: [x, x * 10])
    assert list(pairs) == [1, 10, 2, 20]
    combined = Enumerable.SelectMany([1, 2], lambda x: ["a"], lambda x, y: f"{y}{x}")
    assert list(combined) == ["a1", "a2"]


def test_select_many_with_index():
    assert list(Enumerable.SelectMany([10, 20], lambda x, i: [x + i])) == [10, 21]
    assert list(Enumerable.SelectMany(List(["a", "b"]), lambda s, i: [s] * i)) == ["b"]
    # A defaulted second parameter is not an index.
    assert list(Enumerable.SelectMany([1], lambda x, k=5: [x, k])) == [1, 5]

    def pair(x, i):
        return [(x, i)]

    assert list(Enumerable.SelectMany([7, 8], pair, lambda x, y: y)) == [(7, 0), (8, 1)]


def test_concat_take_skip_reverse():
    assert list(Enumerable.Concat([1], List([2, 3]))) == [1, 2, 3]
    assert list(Enumerable.Take([1, 2, 3], 2)) == [1, 2]
    assert list(Enumerable.Take([1, 2, 3], -1)) == []
    assert list(Enumerable.Skip([1, 2, 3], 2)) == [3]
    assert list(Enumerable.Reverse([1, 2, 3])) == [3, 2, 1]


def test_distinct_uses_generic_equality():
    assert list(Enumerable.Distinct([1, 1.0, True, None, None, "a"])) == [1, True, None, "a"]


def test_order_by_is_stable_with_then_by():
    people = [("bob", 30), ("amy", 25), ("cat", 30), ("dan", 25)]
    q = Enumerable.ThenBy(Enumerable.OrderBy(people, lambda p: p[1]), lambda p: p[0])
    assert [p[0] for p in q] == ["amy", "dan", "bob", "cat"]
    q = Enumerable.ThenByDescending(
        Enumerable.OrderByDescending(people, lambda p: p[1]), lambda p: p[0]
    )
    assert [p[0] for p in q] == ["cat", "bob", "dan", "amy"]


def test_first_last():
    assert Enumerable.First([3, 4]) == 3
    assert Enumerable.First([3, 4], lambda x: x > 3) == 4
    assert Enumerable.Last([3, 4]) == 4
    assert Enumerable.FirstOrDefault([], None) is None
    with pytest.raises(InvalidOperationException, match="no elements"):
        Enumerable.First([])
    with pytest.raises(InvalidOperationException, match="no matching element"):
        Enumerable.Last([1], lambda x: x > 1)


def test_quantifiers():
    assert Enumerable.Any([1])
    assert not Enumerable.Any([])
    assert Enumerable.Any([1, 2], lambda x: x > 1)
    assert Enumerable.All([2, 4], lambda x: x % 2 == 0)
    assert Enumerable.Contains(List(["a"]), "a")
    row = [1]
    assert Enumerable.Contains([row], row)
    assert not Enumerable.Contains([[1]], [1])
    assert Enumerable.Count([1, 2, 3], lambda x: x > 1) == 2


def test_aggregates():
    assert Enumerable.Sum([1, 2, 3]) == 6
    assert Enumerable.Sum(["ab", "c"], len) == 3
    assert Enumerable.Max([3, 9, 2]) == 9
    assert Enumerable.Min([3, 9, 2]) == 2
    assert Enumerable.Max(["aa", "b"], len) == 2
    with pytest.raises(InvalidOperationException):
        Enumerable.Max([])


def test_conversions():
    xs = Enumerable.ToList(x for x in range(3))
    assert isinstance(xs, List)
    assert xs.ToArray() == [0, 1, 2]
    assert Enumerable.ToArray(List([1])) == [1]
    d = Enumerable.ToDictionary(["a", "bb"], len)
    assert isinstance(d, Dictionary)
    assert d[2] == "bb"
    with pytest.raises(InvalidOperationException):
        Enumerable.ToDictionary(["a", "b"], len)
    assert Enumerable.Empty().Count == 0


def test_null_source_raises():
    with pytest.raises(ArgumentNullException):
        Enumerable.Select(None, lambda x: x)
    with pytest.raises(ArgumentNullException):
        Enumerable.Count(None)
