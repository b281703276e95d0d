"""Identity and equality kernel shared by every emulated value."""

from __future__ import annotations

from decimal import Decimal
import math
from typing import Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")

INT32_MIN: int = -0x80000000
INT32_MAX: int = 0x7FFFFFFF


# ============================================================
# Integer and hash primitives
# ============================================================


def to_int32(n: int) -> int:
    """Wrap an arbitrary integer to a signed 32-bit value."""
    n &= 0xFFFFFFFF
    if n & 0x80000000:
        return n - 0x100000000
    return n


def utf16_units(s: str) -> list[int]:
    """Return the UTF-16 code units of s (astral characters become surrogate pairs)."""
    data = s.encode("utf-16-le", "surrogatepass")
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


def string_hash(s: str) -> int:
    """Rolling string hash: h = int32((h << 5) - h + c) over UTF-16 units, seed 0."""
    h = 0
    for c in utf16_units(s):
        h = to_int32((h << 5) - h + c)
    return h


def number_hash(num: int | float) -> int:
    if isinstance(num, float):
        if math.isfinite(num) and num == int(num):
            num = int(num)
        else:
            return string_hash(display_number(num))
    if INT32_MIN <= num <= INT32_MAX:
        return num
    return to_int32(num ^ (num >> 32))


def display_number(num: int | float) -> str:
    """Shortest round-trip display of a number, in the origin's notation."""
    if isinstance(num, int):
        return str(num)
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    d = Decimal(repr(num)).normalize()
    exp = d.adjusted()
    if -5 < exp < 15:
        return format(d, "f")
    sign, digits, _ = d.as_tuple()
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(x) for x in digits[1:])
    exp_sign = "+" if exp >= 0 else "-"
    return ("-" if sign else "") + mantissa + "E" + exp_sign + f"{abs(exp):02d}"


# ============================================================
# Capability protocols
# ============================================================


@runtime_checkable
class Equatable(Protocol):
    def Equals(self, other: object) -> bool: ...


@runtime_checkable
class Hashable(Protocol):
    def GetHashCode(self) -> int: ...


@runtime_checkable
class Displayable(Protocol):
    def ToString(self) -> str: ...


# ============================================================
# Root value
# ============================================================

# Host containers that stand in for origin arrays and objects: compared and
# hashed by identity.
_HOST_REFERENCES = (list, bytearray, dict)


class NObject:
    """Ancestor of every emulated instance.

    Equality defaults to reference identity. Subtypes with value semantics
    override Equals and GetHashCode together so that equal instances hash
    equally; containers depend on it. Python's ==, hash() and str() route
    through the same three members.
    """

    def Equals(self, other: object) -> bool:
        return self is other

    def GetHashCode(self) -> int:
        return to_int32(id(self) >> 4)

    def ToString(self) -> str:
        return self.GetType().Name

    def GetType(self) -> Type:
        return Type(type(self).__name__)

    def __eq__(self, other: object) -> bool:
        return self.Equals(other)

    def __ne__(self, other: object) -> bool:
        return not self.Equals(other)

    def __hash__(self) -> int:
        return self.GetHashCode()

    def __str__(self) -> str:
        return self.ToString()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.ToString()}>"

    @staticmethod
    def ReferenceEquals(x: object, y: object) -> bool:
        return x is y

    @staticmethod
    def GenericEquals(x: object, y: object) -> bool:
        if isinstance(x, NObject):
            return x.Equals(y)
        if x is None or y is None:
            return x is y
        if isinstance(x, _HOST_REFERENCES) or isinstance(y, _HOST_REFERENCES):
            return x is y
        if isinstance(x, bool) != isinstance(y, bool):
            return False
        if isinstance(x, float) and isinstance(y, float):
            if math.isnan(x) and math.isnan(y):
                return True
        return x == y

    @staticmethod
    def GenericToString(x: object) -> str:
        if isinstance(x, NObject):
            return x.ToString()
        if x is None:
            return ""
        if isinstance(x, bool):
            return "True" if x else "False"
        if isinstance(x, (int, float)):
            return display_number(x)
        return str(x)

    @staticmethod
    def GenericGetHashCode(x: object) -> int:
        if isinstance(x, NObject):
            return x.GetHashCode()
        if x is None:
            return 0
        if isinstance(x, bool):
            return 1 if x else 0
        if isinstance(x, (int, float)):
            return number_hash(x)
        if isinstance(x, str):
            return string_hash(x)
        if isinstance(x, _HOST_REFERENCES):
            return to_int32(id(x) >> 4)
        return to_int32(hash(x))


class Type(NObject):
    """Names a runtime type. Equal iff names match; not interned."""

    def __init__(self, name: str):
        self.Name = name

    def Equals(self, other: object) -> bool:
        return isinstance(other, Type) and other.Name == self.Name

    def GetHashCode(self) -> int:
        return string_hash(self.Name)

    def ToString(self) -> str:
        return self.Name


class Nullable(NObject, Generic[T]):
    def __init__(self, value: T | None = None):
        self.Value = value

    @property
    def HasValue(self) -> bool:
        return self.Value is not None

    def GetValueOrDefault(self, default: T | None = None) -> T | None:
        if self.Value is None:
            return default
        return self.Value

    def Equals(self, other: object) -> bool:
        if isinstance(other, Nullable):
            other = other.Value
        return NObject.GenericEquals(self.Value, other)

    def GetHashCode(self) -> int:
        return NObject.GenericGetHashCode(self.Value)

    def ToString(self) -> str:
        return NObject.GenericToString(self.Value)


class KeyValuePair(NObject, Generic[K, V]):
    def __init__(self, key: K, value: V):
        self.Key = key
        self.Value = value

    def Equals(self, other: object) -> bool:
        return (
            isinstance(other, KeyValuePair)
            and NObject.GenericEquals(self.Key, other.Key)
            and NObject.GenericEquals(self.Value, other.Value)
        )

    def GetHashCode(self) -> int:
        h = NObject.GenericGetHashCode(self.Key)
        return to_int32(h * 31 + NObject.GenericGetHashCode(self.Value))

    def ToString(self) -> str:
        key = NObject.GenericToString(self.Key)
        return f"[{key}, {NObject.GenericToString(self.Value)}]"


# ============================================================
# Key canonicalization
# ============================================================


class KeyToken:
    """Hashable projection of an arbitrary key, using the kernel's Equals/GetHashCode."""

    __slots__ = ("value", "_hash")

    def __init__(self, value: object):
        self.value = value
        self._hash = NObject.GenericGetHashCode(value)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyToken) or other._hash != self._hash:
            return False
        return NObject.GenericEquals(self.value, other.value)

    def __repr__(self) -> str:
        return f"KeyToken({self.value!r})"


class _NullToken:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NULL_KEY"


NULL_KEY = _NullToken()


def canonical_key(key: object) -> object:
    """Map a key to its storage token; None gets a reserved token of its own."""
    if key is None:
        return NULL_KEY
    return KeyToken(key)
