"""Process environment, text encodings and events."""

from __future__ import annotations

import os
import time
from typing import Callable, Generic, TypeVar

from .config import get_options
from .core import NObject, to_int32
from .errors import ArgumentException, ArgumentNullException

T = TypeVar("T")

_STARTED = time.monotonic()


class _EnvironmentInfo(type):
    @property
    def NewLine(cls) -> str:
        return get_options().new_line

    @property
    def TickCount(cls) -> int:
        """Milliseconds since the runtime was loaded, wrapping as an int32."""
        return to_int32(int((time.monotonic() - _STARTED) * 1000))

    @property
    def ProcessorCount(cls) -> int:
        return 1


class Environment(metaclass=_EnvironmentInfo):
    @staticmethod
    def GetEnvironmentVariable(variable: str) -> str | None:
        if variable is None:
            raise ArgumentNullException("variable")
        return os.environ.get(variable)


# ============================================================
# Encoding
# ============================================================


class Encoding(NObject):
    """Codec between strings and byte arrays (lists of ints, as origin arrays are)."""

    UTF8: Encoding
    ASCII: Encoding
    Unicode: Encoding

    def __init__(self, codec: str = "utf-8"):
        self._codec = codec

    @property
    def WebName(self) -> str:
        return {"utf-16-le": "utf-16"}.get(self._codec, self._codec)

    def GetBytes(self, s: str) -> list[int]:
        if s is None:
            raise ArgumentNullException("s")
        return list(s.encode(self._codec, errors="replace"))

    def GetString(self, data: bytes | list[int]) -> str:
        if data is None:
            raise ArgumentNullException("bytes")
        try:
            raw = bytes(data)
        except ValueError as e:
            raise ArgumentException("Byte values must be in 0..255.", "bytes") from e
        return raw.decode(self._codec, errors="replace")

    def Equals(self, other: object) -> bool:
        return isinstance(other, Encoding) and other._codec == self._codec

    def GetHashCode(self) -> int:
        return NObject.GenericGetHashCode(self._codec)

    def ToString(self) -> str:
        return self.WebName


Encoding.UTF8 = Encoding("utf-8")
Encoding.ASCII = Encoding("ascii")
Encoding.Unicode = Encoding("utf-16-le")


# ============================================================
# Events
# ============================================================


class NEvent(Generic[T]):
    """Ordered listener list behind an origin event field."""

    def __init__(self) -> None:
        self._listeners: list[T] = []

    def Add(self, listener: T) -> None:
        self._listeners.append(listener)

    def Remove(self, listener: T) -> None:
        """Drop the first registration equal to listener; absent ones are ignored."""
        for i, x in enumerate(self._listeners):
            if x == listener:
                del self._listeners[i]
                return

    def ToMulticastFunction(self) -> Callable[..., None] | None:
        if not self._listeners:
            return None

        def invoke(*args: object) -> None:
            for listener in list(self._listeners):
                listener(*args)  # type: ignore[operator]

        return invoke

    def __len__(self) -> int:
        return len(self._listeners)


class EventArgs(NObject):
    Empty: EventArgs


EventArgs.Empty = EventArgs()


class EventHandler(NObject):
    def Invoke(self, sender: object, e: EventArgs) -> None:
        pass


class PropertyChangedEventArgs(EventArgs):
    def __init__(self, propertyName: str | None):
        self.PropertyName = propertyName


class INotifyPropertyChanged:
    PropertyChanged: NEvent[Callable[[object, PropertyChangedEventArgs], None]]
