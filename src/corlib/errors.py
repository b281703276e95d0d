"""Exception taxonomy: argument/state contracts, capability gaps, overflow."""

from __future__ import annotations

import functools
import logging
from typing import Callable, NoReturn, TypeVar

from .core import NObject

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., object])


class NException(NObject, Exception):
    """Base of every failure raised by the runtime."""

    default_message: str = ""

    def __init__(self, message: str | None = None):
        if message is None:
            message = self.default_message or (
                f"Exception of type '{type(self).__name__}' was thrown."
            )
        super().__init__(message)
        self._message = message

    @property
    def Message(self) -> str:
        return self._message

    def ToString(self) -> str:
        return f"{type(self).__name__}: {self.Message}"

    def __str__(self) -> str:
        return self.Message

    __repr__ = Exception.__repr__


# ============================================================
# Argument contract
# ============================================================


class ArgumentException(NException):
    default_message = "Value does not fall within the expected range."

    def __init__(self, message: str | None = None, paramName: str | None = None):
        super().__init__(message)
        self._param_name = paramName

    @property
    def ParamName(self) -> str | None:
        return self._param_name

    @property
    def Message(self) -> str:
        if self._param_name:
            return f"{self._message} (Parameter '{self._param_name}')"
        return self._message


class ArgumentNullException(ArgumentException):
    default_message = "Value cannot be null."

    def __init__(self, paramName: str | None = None, message: str | None = None):
        super().__init__(message, paramName)


class ArgumentOutOfRangeException(ArgumentException):
    default_message = "Specified argument was out of the range of valid values."

    def __init__(self, paramName: str | None = None, message: str | None = None):
        super().__init__(message, paramName)


class FormatException(ArgumentException):
    default_message = "One of the identified items was in an invalid format."

    def __init__(self, message: str | None = None):
        super().__init__(message)


class KeyNotFoundException(ArgumentException):
    default_message = "The given key was not present in the dictionary."

    def __init__(self, message: str | None = None):
        super().__init__(message)


# ============================================================
# State contract
# ============================================================


class InvalidOperationException(NException):
    default_message = "Operation is not valid due to the current state of the object."


# ============================================================
# Capability gaps
# ============================================================


class NotSupportedException(NException):
    """Permanently unavailable on this host."""

    default_message = "Specified method is not supported."


class NotImplementedException(NException):
    """Not yet ported."""

    default_message = "The method or operation is not implemented."


# ============================================================
# Numeric
# ============================================================


class OverflowException(NException):
    default_message = "Arithmetic operation resulted in an overflow."


# ============================================================
# Unported markers
# ============================================================


def unported(member: str) -> NoReturn:
    """Fail loudly for a member that has not been ported yet."""
    from .config import get_options

    if get_options().trace_unported:
        logger.warning("unported member called: %s", member)
    raise NotImplementedException(f"{member} is not implemented")


def unported_member(fn: F) -> F:
    """Mark fn as an unported stub; every call raises NotImplementedException."""
    member = fn.__qualname__

    @functools.wraps(fn)
    def stub(*args: object, **kwargs: object) -> NoReturn:
        unported(member)

    stub.__unported__ = True  # type: ignore[attr-defined]
    return stub  # type: ignore[return-value]


def is_unported(obj: object) -> bool:
    if isinstance(obj, (staticmethod, classmethod)):
        obj = obj.__func__
    elif isinstance(obj, property):
        obj = obj.fget
    return bool(getattr(obj, "__unported__", False))
