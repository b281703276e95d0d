"""String and character helpers with origin semantics, plus StringBuilder.

Python `str` stands in for the origin string type. Character arguments are
integer character codes; a one-character `str` is accepted wherever a code
is expected.
"""

from __future__ import annotations

import enum
import re
from typing import Iterable

from .config import get_options
from .core import NObject, string_hash
from .enumeration import IEnumerable, iterate
from .errors import (
    ArgumentException,
    ArgumentNullException,
    ArgumentOutOfRangeException,
    FormatException,
)
from .numeric import IFormatProvider, format_number


class StringComparison(enum.Enum):
    CurrentCulture = 0
    CurrentCultureIgnoreCase = 1
    InvariantCulture = 2
    InvariantCultureIgnoreCase = 3
    Ordinal = 4
    OrdinalIgnoreCase = 5


_IGNORE_CASE = (
    StringComparison.CurrentCultureIgnoreCase,
    StringComparison.InvariantCultureIgnoreCase,
    StringComparison.OrdinalIgnoreCase,
)


def _code(ch: int | str) -> int:
    if isinstance(ch, str):
        if len(ch) != 1:
            raise ArgumentException("Expected a single character.", "ch")
        return ord(ch)
    return ch


def _text(value: int | str) -> str:
    """A char code or a string, as a string."""
    if isinstance(value, int) and not isinstance(value, bool):
        return chr(value)
    return value  # type: ignore[return-value]


# ============================================================
# Characters
# ============================================================


class NChar:
    @staticmethod
    def IsWhiteSpace(ch: int | str) -> bool:
        c = _code(ch)
        return c == 32 or 9 <= c <= 13 or c == 133 or c == 160

    @staticmethod
    def IsLetter(ch: int | str) -> bool:
        c = _code(ch)
        return 65 <= c <= 90 or 97 <= c <= 122 or (c >= 128 and c != 133 and c != 160)

    @staticmethod
    def IsLetterOrDigit(ch: int | str) -> bool:
        return NChar.IsDigit(ch) or NChar.IsLetter(ch)

    @staticmethod
    def IsDigit(ch: int | str, index: int | None = None) -> bool:
        if index is not None:
            if not isinstance(ch, str):
                raise ArgumentException("Expected a string with an index.", "s")
            if index < 0 or index >= len(ch):
                raise ArgumentOutOfRangeException("index")
            ch = ch[index]
        c = _code(ch)
        return 48 <= c <= 57

    @staticmethod
    def IsUpper(ch: int | str) -> bool:
        c = _code(ch)
        if c < 128:
            return 65 <= c <= 90
        return chr(c).isupper()

    @staticmethod
    def IsLower(ch: int | str) -> bool:
        c = _code(ch)
        if c < 128:
            return 97 <= c <= 122
        return chr(c).islower()

    @staticmethod
    def ToUpper(ch: int | str) -> int:
        return ord(_fold_char(chr(_code(ch)), str.upper))

    @staticmethod
    def ToLower(ch: int | str) -> int:
        return ord(_fold_char(chr(_code(ch)), str.lower))


def _fold_char(c: str, fold) -> str:
    # Only single-character mappings apply; "ß".upper() == "SS" is skipped.
    mapped = fold(c)
    return mapped if len(mapped) == 1 else c


def _fold(s: str, fold) -> str:
    return "".join(_fold_char(c, fold) for c in s)


# ============================================================
# Composite formatting
# ============================================================

_BAD_FORMAT = "Input string was not in a correct format."


def _format_item(value: object, fmt: str, provider: object | None) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value, fmt or None, provider)
    formattable = getattr(value, "ToFormattedString", None)
    if fmt and formattable is not None:
        return formattable(fmt)
    return NObject.GenericToString(value)


def composite_format(fmt: str, args: list[object], provider: object | None = None) -> str:
    """Expand `{index[,alignment][:formatString]}` items; `{{` and `}}` are literal braces."""
    if fmt is None:
        raise ArgumentNullException("format")
    out: list[str] = []
    i = 0
    n = len(fmt)
    while i < n:
        ch = fmt[i]
        if ch == "}":
            if i + 1 < n and fmt[i + 1] == "}":
                out.append("}")
                i += 2
                continue
            raise FormatException(_BAD_FORMAT)
        if ch != "{":
            out.append(ch)
            i += 1
            continue
        if i + 1 < n and fmt[i + 1] == "{":
            out.append("{")
            i += 2
            continue
        end = fmt.find("}", i + 1)
        if end < 0:
            raise FormatException(_BAD_FORMAT)
        out.append(_expand_item(fmt[i + 1 : end], args, provider))
        i = end + 1
    return "".join(out)


_ITEM = re.compile(r"\s*(\d+)\s*(?:,\s*(-?\d+)\s*)?(?::(.*))?", re.DOTALL)


def _expand_item(item: str, args: list[object], provider: object | None) -> str:
    m = _ITEM.fullmatch(item)
    if m is None:
        raise FormatException(_BAD_FORMAT)
    index = int(m.group(1))
    if index >= len(args):
        raise FormatException(
            "Index (zero based) must be greater than or equal to zero and less than "
            "the size of the argument list."
        )
    text = _format_item(args[index], m.group(3) or "", provider)
    if m.group(2) is not None:
        width = int(m.group(2))
        text = text.ljust(-width) if width < 0 else text.rjust(width)
    return text


def _format_args(rest: tuple[object, ...]) -> list[object]:
    # Format(fmt, [a, b]) passes an argument array, as the origin params overload does.
    if len(rest) == 1 and isinstance(rest[0], list):
        return rest[0]
    return list(rest)


# ============================================================
# Strings
# ============================================================


class NString:
    """Static string helpers.

    Indices, lengths and counts are in code points, as Python `str` indexes.
    The origin counts UTF-16 units, so offsets after a character outside the
    Basic Multilingual Plane are one smaller here than there. Hashing is the
    exception: GetHashCode runs over UTF-16 units to stay bit-compatible.
    """

    Empty = ""

    @staticmethod
    def IndexOf(s: str, value: int | str, startIndex: int = 0) -> int:
        if startIndex < 0 or startIndex > len(s):
            raise ArgumentOutOfRangeException("startIndex", "Index was out of range.")
        return s.find(_text(value), startIndex)

    @staticmethod
    def LastIndexOf(s: str, value: int | str) -> int:
        return s.rfind(_text(value))

    @staticmethod
    def IndexOfAny(s: str, anyOf: list[int], startIndex: int = 0) -> int:
        codes = {_code(c) for c in anyOf}
        for i in range(startIndex, len(s)):
            if ord(s[i]) in codes:
                return i
        return -1

    @staticmethod
    def GetHashCode(s: str) -> int:
        return string_hash(s)

    @staticmethod
    def Replace(s: str, oldValue: int | str, newValue: int | str | None) -> str:
        old = _text(oldValue)
        if old is None:
            raise ArgumentNullException("oldValue")
        if old == "":
            raise ArgumentException("String cannot be of zero length.", "oldValue")
        return s.replace(old, "" if newValue is None else _text(newValue))

    @staticmethod
    def Substring(s: str, startIndex: int, length: int = -1) -> str:
        if startIndex < 0 or startIndex > len(s):
            raise ArgumentOutOfRangeException(
                "startIndex", "startIndex cannot be larger than length of string."
            )
        if length < 0:
            return s[startIndex:]
        if startIndex + length > len(s):
            raise ArgumentOutOfRangeException(
                "length", "Index and length must refer to a location within the string."
            )
        return s[startIndex : startIndex + length]

    @staticmethod
    def Remove(s: str, startIndex: int, count: int = -1) -> str:
        if startIndex < 0 or startIndex > len(s):
            raise ArgumentOutOfRangeException("startIndex")
        if count < 0:
            return s[:startIndex]
        if startIndex + count > len(s):
            raise ArgumentOutOfRangeException(
                "count", "Index and count must refer to a location within the string."
            )
        return s[:startIndex] + s[startIndex + count :]

    @staticmethod
    def Trim(s: str, trimChars: Iterable[int] | None = None) -> str:
        return NString.TrimEnd(NString.TrimStart(s, trimChars), trimChars)

    @staticmethod
    def TrimStart(s: str, trimChars: Iterable[int] | None = None) -> str:
        i = 0
        strip = _trim_test(trimChars)
        while i < len(s) and strip(s[i]):
            i += 1
        return s[i:]

    @staticmethod
    def TrimEnd(s: str, trimChars: Iterable[int] | None = None) -> str:
        i = len(s)
        strip = _trim_test(trimChars)
        while i > 0 and strip(s[i - 1]):
            i -= 1
        return s[:i]

    @staticmethod
    def ToUpperInvariant(s: str) -> str:
        return _fold(s, str.upper)

    @staticmethod
    def ToLowerInvariant(s: str) -> str:
        return _fold(s, str.lower)

    @staticmethod
    def StartsWith(
        s: str, value: str, comparisonType: StringComparison = StringComparison.Ordinal
    ) -> bool:
        if value is None:
            raise ArgumentNullException("value")
        if comparisonType in _IGNORE_CASE:
            return NString.ToLowerInvariant(s).startswith(NString.ToLowerInvariant(value))
        return s.startswith(value)

    @staticmethod
    def EndsWith(
        s: str, value: str, comparisonType: StringComparison = StringComparison.Ordinal
    ) -> bool:
        if value is None:
            raise ArgumentNullException("value")
        if comparisonType in _IGNORE_CASE:
            return NString.ToLowerInvariant(s).endswith(NString.ToLowerInvariant(value))
        return s.endswith(value)

    @staticmethod
    def Contains(s: str, value: int | str) -> bool:
        if value is None:
            raise ArgumentNullException("value")
        return _text(value) in s

    @staticmethod
    def Split(s: str, *separators: int | str | list) -> list[str]:
        """Split on any separator; no separators means whitespace. Empty entries are kept."""
        if len(separators) == 1 and isinstance(separators[0], list):
            separators = tuple(separators[0])
        seps = [_text(x) for x in separators if x is not None and _text(x) != ""]
        if not seps:
            return re.split(r"[\t\n\x0b\x0c\r \x85\xa0]", s)
        seps.sort(key=len, reverse=True)
        return re.split("|".join(re.escape(x) for x in seps), s)

    @staticmethod
    def Compare(a: str | None, b: str | None, ignoreCase: bool | StringComparison = False) -> int:
        if a is None or b is None:
            return (a is not None) - (b is not None)
        if ignoreCase is True or ignoreCase in _IGNORE_CASE:
            a, b = NString.ToLowerInvariant(a), NString.ToLowerInvariant(b)
        return (a > b) - (a < b)

    @staticmethod
    def CompareOrdinal(a: str | None, b: str | None) -> int:
        if a is None or b is None:
            return (a is not None) - (b is not None)
        for x, y in zip(a, b):
            if x != y:
                return ord(x) - ord(y)
        return len(a) - len(b)

    @staticmethod
    def Format(*args: object) -> str:
        """Format(fmt, arg0, ...) or Format(provider, fmt, args)."""
        if not args:
            raise ArgumentNullException("format")
        if isinstance(args[0], IFormatProvider) or (args[0] is None and len(args) > 1):
            return composite_format(args[1], _format_args(args[2:]), args[0])  # type: ignore[arg-type]
        return composite_format(args[0], _format_args(args[1:]))  # type: ignore[arg-type]

    @staticmethod
    def IsNullOrEmpty(s: str | None) -> bool:
        return not s

    @staticmethod
    def IsNullOrWhiteSpace(s: str | None) -> bool:
        return s is None or all(NChar.IsWhiteSpace(c) for c in s)

    @staticmethod
    def Join(separator: str | None, parts: IEnumerable | Iterable[object]) -> str:
        if parts is None:
            raise ArgumentNullException("values")
        return (separator or "").join(NObject.GenericToString(p) for p in iterate(parts))

    @staticmethod
    def Concat(*parts: object) -> str:
        if len(parts) == 1 and isinstance(parts[0], (list, IEnumerable)):
            parts = tuple(iterate(parts[0]))  # type: ignore[arg-type]
        return "".join(NObject.GenericToString(p) for p in parts)

    @staticmethod
    def FromChars(chars: int | str | list[int], count: int = 1) -> str:
        if isinstance(chars, list):
            return "".join(chr(_code(c)) for c in chars)
        if count < 0:
            raise ArgumentOutOfRangeException("count", "Count cannot be less than zero.")
        return chr(_code(chars)) * count


def _trim_test(trimChars: Iterable[int] | None):
    codes = {_code(c) for c in trimChars} if trimChars is not None else set()
    if not codes:
        return NChar.IsWhiteSpace
    return lambda c: ord(c) in codes


# ============================================================
# StringBuilder
# ============================================================


class StringBuilder(NObject):
    """Mutable text buffer; Append* return the builder so calls chain."""

    def __init__(self, value: str | int | None = None):
        self._parts: list[str] = []
        if isinstance(value, str):
            self._parts.append(value)

    def _flatten(self) -> str:
        text = "".join(self._parts)
        self._parts = [text] if text else []
        return text

    def Append(self, value: object) -> StringBuilder:
        if value is None:
            return self
        if isinstance(value, int) and not isinstance(value, bool):
            self._parts.append(chr(value))
        else:
            self._parts.append(NObject.GenericToString(value))
        return self

    def AppendLine(self, text: str | None = None) -> StringBuilder:
        if text is not None:
            self._parts.append(text)
        self._parts.append(get_options().new_line)
        return self

    def AppendFormat(self, *args: object) -> StringBuilder:
        self._parts.append(NString.Format(*args))
        return self

    def Insert(self, index: int, value: object) -> StringBuilder:
        text = self._flatten()
        if index < 0 or index > len(text):
            raise ArgumentOutOfRangeException("index", "Index was out of range.")
        insert = chr(value) if isinstance(value, int) and not isinstance(value, bool) else (
            NObject.GenericToString(value)
        )
        self._parts = [text[:index] + insert + text[index:]]
        return self

    def Clear(self) -> StringBuilder:
        self._parts = []
        return self

    @property
    def Length(self) -> int:
        return sum(len(p) for p in self._parts)

    @Length.setter
    def Length(self, value: int) -> None:
        if value < 0:
            raise ArgumentOutOfRangeException("value")
        text = self._flatten()
        self._parts = [text[:value].ljust(value, "\0")]

    def get_Item(self, index: int) -> int:
        """Char code at index; 0 past the end."""
        if index < 0:
            raise ArgumentOutOfRangeException("index", "Index was out of range.")
        offset = 0
        for part in self._parts:
            if index < offset + len(part):
                return ord(part[index - offset])
            offset += len(part)
        return 0

    def ToString(self) -> str:
        return self._flatten()
