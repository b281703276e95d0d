"""Pull-based enumeration protocol: IEnumerable / IEnumerator cursors.

Every cursor follows the same state machine:

    NotStarted --MoveNext (item)--> Positioned --MoveNext (item)--> Positioned
    NotStarted --MoveNext (none)--> Exhausted
    Positioned --MoveNext (none)--> Exhausted

Exhausted is terminal: MoveNext keeps returning False with no side effects.
Current outside Positioned raises InvalidOperationException. Dispose may be
called in any state, any number of times, and leaves the cursor Exhausted.
"""

from __future__ import annotations

import enum
from typing import Callable, Generic, Iterable, Iterator, TypeVar

from .core import NObject
from .errors import InvalidOperationException

T = TypeVar("T")


class CursorState(enum.Enum):
    NotStarted = "not-started"
    Positioned = "positioned"
    Exhausted = "exhausted"


# ============================================================
# Interfaces
# ============================================================


class IDisposable:
    """Release resources; `with` calls Dispose on exit."""

    def Dispose(self) -> None:
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, *exc: object) -> None:
        self.Dispose()


class IEnumerator(IDisposable, Generic[T]):
    def MoveNext(self) -> bool:
        raise NotImplementedError

    @property
    def Current(self) -> T:
        raise NotImplementedError

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self.MoveNext():
            return self.Current
        raise StopIteration


class IEnumerable(Generic[T]):
    def GetEnumerator(self) -> IEnumerator[T]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[T]:
        return iterate(self)


# ============================================================
# Cursors
# ============================================================


class Cursor(NObject, IEnumerator[T]):
    """State machine shared by every adapter; subclasses supply _advance."""

    def __init__(self) -> None:
        self._state = CursorState.NotStarted
        self._current: T | None = None

    @property
    def State(self) -> CursorState:
        return self._state

    def MoveNext(self) -> bool:
        if self._state is CursorState.Exhausted:
            return False
        found, value = self._advance()
        if found:
            self._state = CursorState.Positioned
            self._current = value
            return True
        self._finish()
        return False

    @property
    def Current(self) -> T:
        if self._state is CursorState.NotStarted:
            raise InvalidOperationException("Enumeration has not started. Call MoveNext.")
        if self._state is CursorState.Exhausted:
            raise InvalidOperationException("Enumeration already finished.")
        return self._current  # type: ignore[return-value]

    def Dispose(self) -> None:
        if self._state is not CursorState.Exhausted:
            self._finish()

    def _finish(self) -> None:
        self._state = CursorState.Exhausted
        self._current = None
        self._release()

    def _advance(self) -> tuple[bool, T | None]:
        raise NotImplementedError

    def _release(self) -> None:
        pass


class ArrayEnumerator(Cursor[T]):
    """Cursor over a Python list, read live by index."""

    def __init__(self, array: list[T]):
        super().__init__()
        self._array = array
        self._index = -1

    def _advance(self) -> tuple[bool, T | None]:
        self._index += 1
        if self._index < len(self._array):
            return True, self._array[self._index]
        return False, None

    def _release(self) -> None:
        self._index = len(self._array)


class IteratorEnumerator(Cursor[T]):
    """One-shot cursor over any Python iterable."""

    def __init__(self, items: Iterable[T]):
        super().__init__()
        self._it: Iterator[T] | None = iter(items)

    def _advance(self) -> tuple[bool, T | None]:
        if self._it is None:
            return False, None
        try:
            return True, next(self._it)
        except StopIteration:
            return False, None

    def _release(self) -> None:
        close = getattr(self._it, "close", None)
        if close is not None:
            close()
        self._it = None


# ============================================================
# Enumerables
# ============================================================


class ArrayEnumerable(NObject, IEnumerable[T]):
    def __init__(self, array: list[T]):
        self._array = array

    def GetEnumerator(self) -> ArrayEnumerator[T]:
        return ArrayEnumerator(self._array)


class DeferredEnumerable(NObject, IEnumerable[T]):
    """Restartable lazy sequence: each GetEnumerator re-runs the factory."""

    def __init__(self, factory: Callable[[], Iterable[T]]):
        self._factory = factory

    def GetEnumerator(self) -> IteratorEnumerator[T]:
        return IteratorEnumerator(self._factory())


# ============================================================
# Python bridge
# ============================================================


def get_enumerator(source: IEnumerable[T] | Iterable[T]) -> IEnumerator[T]:
    """Cursor over either protocol."""
    if isinstance(source, IEnumerable):
        return source.GetEnumerator()
    if isinstance(source, list):
        return ArrayEnumerator(source)
    return IteratorEnumerator(source)


def iterate(source: IEnumerable[T] | Iterable[T]) -> Iterator[T]:
    """Python iterator over either protocol; the cursor is disposed when done."""
    e = get_enumerator(source)
    try:
        while e.MoveNext():
            yield e.Current
    finally:
        e.Dispose()
