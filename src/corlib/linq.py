"""Query operators over any IEnumerable or Python iterable.

Operators that return sequences are lazy and restartable; terminal operators
(Count, First, Sum, ...) enumerate immediately.
"""

from __future__ import annotations

import functools
import inspect
import itertools
from typing import Callable, Iterable, TypeVar, Union

from .collections import Dictionary, HashSet, List, default_compare
from .core import NObject
from .enumeration import DeferredEnumerable, IEnumerable, iterate
from .errors import ArgumentNullException, InvalidOperationException

T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K")
V = TypeVar("V")

Source = Union[IEnumerable[T], Iterable[T]]

_NO_ELEMENTS = "Sequence contains no elements"
_NO_MATCH = "Sequence contains no matching element"


def _require(source: object, name: str = "source") -> None:
    if source is None:
        raise ArgumentNullException(name)


def _takes_index(f: Callable) -> bool:
    """True when f declares a second positional parameter (the element index)."""
    try:
        params = inspect.signature(f).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = [
        p
        for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    return len(positional) >= 2


class OrderedEnumerable(DeferredEnumerable[T]):
    """Result of OrderBy; ThenBy appends a subordinate key."""

    def __init__(self, source: Source[T], keys: list[tuple[Callable[[T], object], bool]]):
        self._source = source
        self._keys = keys
        super().__init__(self._sorted)

    def _sorted(self) -> list[T]:
        items = list(iterate(self._source))
        # Stable sorts applied from the least significant key up.
        for selector, descending in reversed(self._keys):
            items.sort(
                key=functools.cmp_to_key(
                    lambda a, b, s=selector: default_compare(s(a), s(b))
                ),
                reverse=descending,
            )
        return items


class Enumerable:
    @staticmethod
    def Empty() -> List:
        return List()

    @staticmethod
    def ToList(e: Source[T]) -> List[T]:
        _require(e)
        return List(e)

    @staticmethod
    def ToArray(e: Source[T]) -> list[T]:
        _require(e)
        return list(iterate(e))

    @staticmethod
    def ToDictionary(
        e: Source[T], k: Callable[[T], K], v: Callable[[T], V] | None = None
    ) -> Dictionary[K, V]:
        _require(e)
        d: Dictionary = Dictionary()
        for x in iterate(e):
            d.Add(k(x), v(x) if v is not None else x)
        return d

    @staticmethod
    def Cast(e: Source[T]) -> Source[T]:
        return e

    # -- projection and filtering --

    @staticmethod
    def Select(e: Source[T], selector: Callable[[T], U]) -> DeferredEnumerable[U]:
        _require(e)
        return DeferredEnumerable(lambda: (selector(x) for x in iterate(e)))

    @staticmethod
    def SelectMany(
        e: Source[T],
        selector: Callable[[T], Source[U]] | Callable[[T, int], Source[U]],
        comb: Callable[[T, U], V] | None = None,
    ) -> DeferredEnumerable:
        """Flatten selector results; a two-argument selector also receives the index."""
        _require(e)
        indexed = _takes_index(selector)

        def run():
            for i, x in enumerate(iterate(e)):
                for y in iterate(selector(x, i) if indexed else selector(x)):
                    yield comb(x, y) if comb is not None else y

        return DeferredEnumerable(run)

    @staticmethod
    def Where(e: Source[T], p: Callable[[T], bool]) -> DeferredEnumerable[T]:
        _require(e)
        return DeferredEnumerable(lambda: (x for x in iterate(e) if p(x)))

    @staticmethod
    def Concat(x: Source[T], y: Source[T]) -> DeferredEnumerable[T]:
        _require(x, "first")
        _require(y, "second")
        return DeferredEnumerable(lambda: itertools.chain(iterate(x), iterate(y)))

    @staticmethod
    def Take(x: Source[T], count: int) -> DeferredEnumerable[T]:
        _require(x)
        return DeferredEnumerable(lambda: itertools.islice(iterate(x), max(count, 0)))

    @staticmethod
    def Skip(x: Source[T], count: int) -> DeferredEnumerable[T]:
        _require(x)
        return DeferredEnumerable(lambda: itertools.islice(iterate(x), max(count, 0), None))

    @staticmethod
    def Distinct(e: Source[T]) -> DeferredEnumerable[T]:
        _require(e)

        def run():
            seen: HashSet = HashSet()
            for x in iterate(e):
                if seen.Add(x):
                    yield x

        return DeferredEnumerable(run)

    @staticmethod
    def Reverse(e: Source[T]) -> DeferredEnumerable[T]:
        _require(e)
        return DeferredEnumerable(lambda: reversed(list(iterate(e))))

    # -- ordering --

    @staticmethod
    def OrderBy(e: Source[T], s: Callable[[T], object]) -> OrderedEnumerable[T]:
        _require(e)
        return OrderedEnumerable(e, [(s, False)])

    @staticmethod
    def OrderByDescending(e: Source[T], s: Callable[[T], object]) -> OrderedEnumerable[T]:
        _require(e)
        return OrderedEnumerable(e, [(s, True)])

    @staticmethod
    def ThenBy(e: Source[T], s: Callable[[T], object]) -> OrderedEnumerable[T]:
        if isinstance(e, OrderedEnumerable):
            return OrderedEnumerable(e._source, e._keys + [(s, False)])
        return Enumerable.OrderBy(e, s)

    @staticmethod
    def ThenByDescending(e: Source[T], s: Callable[[T], object]) -> OrderedEnumerable[T]:
        if isinstance(e, OrderedEnumerable):
            return OrderedEnumerable(e._source, e._keys + [(s, True)])
        return Enumerable.OrderByDescending(e, s)

    # -- element access --

    @staticmethod
    def First(e: Source[T], p: Callable[[T], bool] | None = None) -> T:
        _require(e)
        for x in iterate(e):
            if p is None or p(x):
                return x
        raise InvalidOperationException(_NO_ELEMENTS if p is None else _NO_MATCH)

    @staticmethod
    def FirstOrDefault(e: Source[T], p: Callable[[T], bool] | None = None) -> T | None:
        _require(e)
        for x in iterate(e):
            if p is None or p(x):
                return x
        return None

    @staticmethod
    def Last(e: Source[T], p: Callable[[T], bool] | None = None) -> T:
        _require(e)
        found = False
        last = None
        for x in iterate(e):
            if p is None or p(x):
                found = True
                last = x
        if not found:
            raise InvalidOperationException(_NO_ELEMENTS if p is None else _NO_MATCH)
        return last  # type: ignore[return-value]

    # -- quantifiers and aggregates --

    @staticmethod
    def Any(e: Source[T], s: Callable[[T], bool] | None = None) -> bool:
        _require(e)
        return any(s is None or s(x) for x in iterate(e))

    @staticmethod
    def All(e: Source[T], s: Callable[[T], bool]) -> bool:
        _require(e)
        return all(s(x) for x in iterate(e))

    @staticmethod
    def Contains(e: Source[T], value: T) -> bool:
        _require(e)
        return any(NObject.GenericEquals(x, value) for x in iterate(e))

    @staticmethod
    def Count(e: Source[T], p: Callable[[T], bool] | None = None) -> int:
        _require(e)
        return sum(1 for x in iterate(e) if p is None or p(x))

    @staticmethod
    def Sum(e: Source[T], s: Callable[[T], float] | None = None) -> float:
        _require(e)
        total = 0
        for x in iterate(e):
            total += s(x) if s is not None else x  # type: ignore[operator]
        return total

    @staticmethod
    def Max(e: Source[T], s: Callable[[T], float] | None = None) -> float:
        return _extreme(e, s, 1)

    @staticmethod
    def Min(e: Source[T], s: Callable[[T], float] | None = None) -> float:
        return _extreme(e, s, -1)


def _extreme(e: Source[T], s: Callable[[T], float] | None, direction: int):
    _require(e)
    best = None
    found = False
    for x in iterate(e):
        value = s(x) if s is not None else x
        if not found or default_compare(value, best) * direction > 0:
            best = value
            found = True
    if not found:
        raise InvalidOperationException(_NO_ELEMENTS)
    return best
