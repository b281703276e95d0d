"""Generic containers: List, Stack, HashSet, Dictionary."""

from __future__ import annotations

import functools
from typing import Callable, Generic, Iterable, Mapping, TypeVar

from .core import KeyValuePair, NObject, canonical_key
from .enumeration import ArrayEnumerable, ArrayEnumerator, IEnumerable, iterate
from .errors import (
    ArgumentException,
    ArgumentOutOfRangeException,
    InvalidOperationException,
    KeyNotFoundException,
)

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


def default_compare(a: object, b: object) -> int:
    """Three-way comparison: None first, CompareTo when defined, host ordering otherwise."""
    if a is None or b is None:
        return (a is not None) - (b is not None)
    compare_to = getattr(a, "CompareTo", None)
    if compare_to is not None:
        return compare_to(b)
    try:
        return (a > b) - (a < b)  # type: ignore[operator]
    except TypeError as e:
        raise InvalidOperationException("Failed to compare two elements in the array.") from e


# ============================================================
# List
# ============================================================


class List(NObject, IEnumerable[T]):
    """Ordered, index-addressable, growable sequence."""

    def __init__(self, items_or_capacity: IEnumerable[T] | Iterable[T] | int | None = None):
        self._array: list[T] = []
        if items_or_capacity is None:
            return
        if isinstance(items_or_capacity, int) and not isinstance(items_or_capacity, bool):
            if items_or_capacity < 0:
                raise ArgumentOutOfRangeException("capacity")
            return
        self.AddRange(items_or_capacity)

    @property
    def Count(self) -> int:
        return len(self._array)

    def _check_index(self, index: int, limit: int, name: str = "index") -> None:
        if index < 0 or index >= limit:
            raise ArgumentOutOfRangeException(
                name, "Index was out of range. Must be non-negative and less than the size of the collection."
            )

    def get_Item(self, index: int) -> T:
        self._check_index(index, len(self._array))
        return self._array[index]

    def set_Item(self, index: int, value: T) -> None:
        self._check_index(index, len(self._array))
        self._array[index] = value

    def Add(self, item: T) -> None:
        self._array.append(item)

    def AddRange(self, items: IEnumerable[T] | Iterable[T]) -> None:
        if items is None:
            raise ArgumentException("Value cannot be null.", "collection")
        if items is self:
            self._array.extend(list(self._array))
            return
        self._array.extend(iterate(items))

    def Insert(self, index: int, item: T) -> None:
        self._check_index(index, len(self._array) + 1)
        self._array.insert(index, item)

    def RemoveAt(self, index: int) -> None:
        self._check_index(index, len(self._array))
        del self._array[index]

    def RemoveRange(self, index: int, count: int) -> None:
        if index < 0:
            raise ArgumentOutOfRangeException("index")
        if count < 0:
            raise ArgumentOutOfRangeException("count")
        if len(self._array) - index < count:
            raise ArgumentException(
                "Offset and length were out of bounds for the array or count is greater "
                "than the number of elements from index to the end of the source collection."
            )
        del self._array[index : index + count]

    def Remove(self, item: T) -> bool:
        index = self.IndexOf(item)
        if index < 0:
            return False
        del self._array[index]
        return True

    def RemoveAll(self, predicate: Callable[[T], bool]) -> int:
        kept = [x for x in self._array if not predicate(x)]
        removed = len(self._array) - len(kept)
        self._array = kept
        return removed

    def Clear(self) -> None:
        self._array = []

    def ToArray(self) -> list[T]:
        return list(self._array)

    def IndexOf(self, item: T) -> int:
        for i, x in enumerate(self._array):
            if NObject.GenericEquals(x, item):
                return i
        return -1

    def Contains(self, item: T) -> bool:
        return self.IndexOf(item) >= 0

    def Reverse(self) -> None:
        self._array.reverse()

    def Sort(self, comparison: Callable[[T, T], int] | None = None) -> None:
        compare = comparison if comparison is not None else default_compare
        self._array.sort(key=functools.cmp_to_key(compare))

    def GetEnumerator(self) -> ListEnumerator[T]:
        return ListEnumerator(self)

    # Python protocol

    def __len__(self) -> int:
        return len(self._array)

    def __getitem__(self, index: int) -> T:
        return self.get_Item(index)

    def __setitem__(self, index: int, value: T) -> None:
        self.set_Item(index, value)

    def __contains__(self, item: object) -> bool:
        return self.Contains(item)  # type: ignore[arg-type]


class ListEnumerator(ArrayEnumerator[T]):
    def __init__(self, items: List[T]):
        super().__init__(items._array)


class Stack(List[T]):
    """LIFO layered over List; enumeration stays in insertion order."""

    def Push(self, item: T) -> None:
        self.Add(item)

    def Pop(self) -> T:
        if not self._array:
            raise InvalidOperationException("Stack empty.")
        return self._array.pop()

    def Peek(self) -> T:
        if not self._array:
            raise InvalidOperationException("Stack empty.")
        return self._array[-1]


# ============================================================
# HashSet
# ============================================================


class HashSet(NObject, IEnumerable[T]):
    """Unordered unique members, canonicalized like Dictionary keys."""

    def __init__(self, items: IEnumerable[T] | Iterable[T] | None = None):
        self._store: dict[object, T] = {}
        if items is not None:
            for item in iterate(items):
                self.Add(item)

    @property
    def Count(self) -> int:
        return len(self._store)

    def Add(self, item: T) -> bool:
        token = canonical_key(item)
        if token in self._store:
            return False
        self._store[token] = item
        return True

    def Contains(self, item: T) -> bool:
        return canonical_key(item) in self._store

    def Remove(self, item: T) -> bool:
        return self._store.pop(canonical_key(item), _MISSING) is not _MISSING

    def Clear(self) -> None:
        self._store = {}

    def GetEnumerator(self) -> HashSetEnumerator[T]:
        return HashSetEnumerator(self)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, item: object) -> bool:
        return self.Contains(item)  # type: ignore[arg-type]


class HashSetEnumerator(ArrayEnumerator[T]):
    """Cursor over the members present when it was created."""

    def __init__(self, items: HashSet[T]):
        super().__init__(list(items._store.values()))


_MISSING = object()


# ============================================================
# Dictionary
# ============================================================


class Dictionary(NObject, IEnumerable[KeyValuePair[K, V]], Generic[K, V]):
    """Unique-key map.

    Keys are stored under a token derived from the key's GetHashCode/Equals
    (None has a reserved token), so equal keys collide and merely similar
    ones don't. Add refuses a bound key; set_Item overwrites. Iteration order
    is not part of the contract.
    """

    def __init__(self, other: Dictionary[K, V] | Mapping[K, V] | int | None = None):
        self._entries: dict[object, tuple[K, V]] = {}
        if other is None or (isinstance(other, int) and not isinstance(other, bool)):
            return
        if isinstance(other, Dictionary):
            self._entries = dict(other._entries)
        elif isinstance(other, Mapping):
            for k, v in other.items():
                self.Add(k, v)
        else:
            raise ArgumentException("Expected a dictionary to copy.", "dictionary")

    @property
    def Count(self) -> int:
        return len(self._entries)

    def get_Item(self, key: K) -> V:
        entry = self._entries.get(canonical_key(key))
        if entry is None:
            raise KeyNotFoundException(
                f"The given key '{NObject.GenericToString(key)}' was not present in the dictionary."
            )
        return entry[1]

    def set_Item(self, key: K, value: V) -> None:
        token = canonical_key(key)
        entry = self._entries.get(token)
        if entry is not None:
            key = entry[0]
        self._entries[token] = (key, value)

    def Add(self, key: K, value: V) -> None:
        token = canonical_key(key)
        if token in self._entries:
            raise InvalidOperationException(
                f"An item with the same key has already been added. Key: {NObject.GenericToString(key)}"
            )
        self._entries[token] = (key, value)

    def TryGetValue(self, key: K, holder: list) -> bool:
        """Write the value (or None) into holder[0]; never raises for a missing key."""
        entry = self._entries.get(canonical_key(key))
        if entry is None:
            holder[0] = None
            return False
        holder[0] = entry[1]
        return True

    def ContainsKey(self, key: K) -> bool:
        return canonical_key(key) in self._entries

    def ContainsValue(self, value: V) -> bool:
        return any(NObject.GenericEquals(v, value) for _, v in self._entries.values())

    def Remove(self, key: K) -> bool:
        return self._entries.pop(canonical_key(key), None) is not None

    def Clear(self) -> None:
        self._entries = {}

    @property
    def Keys(self) -> KeyCollection[K]:
        return KeyCollection(k for k, _ in self._entries.values())

    @property
    def Values(self) -> ValueCollection[V]:
        return ValueCollection(v for _, v in self._entries.values())

    def GetEnumerator(self) -> DictionaryEnumerator[K, V]:
        return DictionaryEnumerator(self)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, key: K) -> V:
        return self.get_Item(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.set_Item(key, value)

    def __contains__(self, key: object) -> bool:
        return self.ContainsKey(key)  # type: ignore[arg-type]


class DictionaryEnumerator(ArrayEnumerator[KeyValuePair[K, V]]):
    """Cursor over KeyValuePair snapshots taken at creation."""

    def __init__(self, d: Dictionary[K, V]):
        super().__init__([KeyValuePair(k, v) for k, v in d._entries.values()])


class KeyCollection(List[K]):
    pass


class ValueCollection(List[V]):
    pass


# ============================================================
# Arrays
# ============================================================


class NArray:
    """Static helpers over host lists used as origin arrays."""

    @staticmethod
    def IndexOf(values: list[T], value: T) -> int:
        for i, x in enumerate(values):
            if NObject.GenericEquals(x, value):
                return i
        return -1

    @staticmethod
    def ToEnumerable(array: list[T]) -> ArrayEnumerable[T]:
        return ArrayEnumerable(array)

    @staticmethod
    def Resize(holder: list, newLength: int) -> None:
        """Resize the array held in holder[0]; None becomes a fresh array."""
        if newLength < 0:
            raise ArgumentOutOfRangeException("newSize")
        array = holder[0]
        if array is None:
            holder[0] = [None] * newLength
            return
        if len(array) == newLength:
            return
        resized = list(array[:newLength])
        resized.extend([None] * (newLength - len(resized)))
        holder[0] = resized
