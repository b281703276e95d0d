"""Threading shims for a single-threaded host.

Monitor and Interlocked keep the origin call-site shapes but perform no
synchronization: there is only ever one thread of execution.
"""

from __future__ import annotations

from contextlib import contextmanager
import itertools
from typing import Callable, Iterator

from .core import NObject, to_int32
from .errors import unported_member


class _ThreadRegistry(type):
    @property
    def CurrentThread(cls) -> Thread:
        if cls._current is None:
            cls._current = cls()
        return cls._current


class Thread(NObject, metaclass=_ThreadRegistry):
    """ManagedThreadId comes from a process-wide counter starting at 1."""

    _ids = itertools.count(1)
    _current: Thread | None = None

    def __init__(self, start: Callable[[], None] | None = None):
        self.ManagedThreadId = next(Thread._ids)
        self.Name: str | None = None
        self._start = start

    @unported_member
    def Start(self) -> None: ...

    @unported_member
    def Join(self) -> None: ...


# The first thread constructed is the current one.
Thread._current = Thread()


class Monitor(NObject):
    @staticmethod
    def Enter(obj: object) -> None:
        pass

    @staticmethod
    def Exit(obj: object) -> None:
        pass

    @staticmethod
    def TryEnter(obj: object, timeout: int = 0) -> bool:
        return True

    @staticmethod
    @contextmanager
    def Lock(obj: object) -> Iterator[object]:
        """`with Monitor.Lock(x):` in place of a lock statement."""
        Monitor.Enter(obj)
        try:
            yield obj
        finally:
            Monitor.Exit(obj)


class Interlocked(NObject):
    """Read-modify-write on holder[0], a one-slot list standing in for a ref argument."""

    @staticmethod
    def CompareExchange(location: list, value: object, comparand: object) -> object:
        original = location[0]
        # References compare by identity, primitives by value.
        if isinstance(original, NObject):
            same = original is comparand
        else:
            same = NObject.GenericEquals(original, comparand)
        if same:
            location[0] = value
        return original

    @staticmethod
    def Exchange(location: list, value: object) -> object:
        original = location[0]
        location[0] = value
        return original

    @staticmethod
    def Increment(location: list) -> int:
        return Interlocked.Add(location, 1)

    @staticmethod
    def Decrement(location: list) -> int:
        return Interlocked.Add(location, -1)

    @staticmethod
    def Add(location: list, value: int) -> int:
        location[0] = to_int32(location[0] + value)
        return location[0]


class ThreadPool(NObject):
    @staticmethod
    @unported_member
    def QueueUserWorkItem(callBack: Callable[[object], None], state: object = None) -> bool: ...
