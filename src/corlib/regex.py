"""Pattern façade over the host `re` engine.

Matching itself is delegated. What this module owns is the shape of the
result: group numbering (unnamed groups first, then named ones, as the
origin numbers them), group offsets, origin syntax spellings that the host
engine spells differently, and origin replacement tokens.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Callable, Union

from .collections import List
from .core import NObject
from .enumeration import ArrayEnumerator, IEnumerable
from .errors import (
    ArgumentException,
    ArgumentNullException,
    ArgumentOutOfRangeException,
    NotSupportedException,
)

logger = logging.getLogger(__name__)


class RegexOptions(enum.IntFlag):
    None_ = 0
    IgnoreCase = 1
    Multiline = 2
    ExplicitCapture = 4
    Compiled = 8
    Singleline = 16
    IgnorePatternWhitespace = 32
    RightToLeft = 64
    ECMAScript = 256
    CultureInvariant = 512


_FLAGS = {
    RegexOptions.IgnoreCase: re.IGNORECASE,
    RegexOptions.Multiline: re.MULTILINE,
    RegexOptions.Singleline: re.DOTALL,
    RegexOptions.IgnorePatternWhitespace: re.VERBOSE,
    RegexOptions.ECMAScript: re.ASCII,
}


# ============================================================
# Syntax translation
# ============================================================


def translate_pattern(pattern: str, explicit_capture: bool = False) -> str:
    """Rewrite origin-only spellings into host syntax.

    (?<name>...) and (?'name'...) become (?P<name>...); \\k<name> and
    \\k'name' become (?P=name). Lookbehinds are left alone, as is anything
    inside a character class. With explicit_capture, bare groups become
    non-capturing.
    """
    out: list[str] = []
    i = 0
    n = len(pattern)
    in_class = False
    while i < n:
        ch = pattern[i]
        if ch == "\\" and i + 1 < n:
            nxt = pattern[i + 1]
            if not in_class and nxt == "k" and i + 2 < n and pattern[i + 2] in "<'":
                close = ">" if pattern[i + 2] == "<" else "'"
                end = pattern.find(close, i + 3)
                if end > 0:
                    name = pattern[i + 3 : end]
                    out.append(f"(?:\\{name})" if name.isdigit() else f"(?P={name})")
                    i = end + 1
                    continue
            out.append(pattern[i : i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
            out.append(ch)
            i += 1
            continue
        if ch == "[":
            in_class = True
            out.append(ch)
            # A leading ] (or ^]) is a literal member, not the end of the class.
            j = i + 1
            if j < n and pattern[j] == "^":
                out.append("^")
                j += 1
            if j < n and pattern[j] == "]":
                out.append("]")
                j += 1
            i = j
            continue
        if ch == "(" and pattern.startswith("(?<", i) and i + 3 < n and pattern[i + 3] not in "=!":
            out.append("(?P<")
            i += 3
            continue
        if ch == "(" and pattern.startswith("(?'", i):
            end = pattern.find("'", i + 3)
            if end > 0:
                out.append(f"(?P<{pattern[i + 3 : end]}>")
                i = end + 1
                continue
        if ch == "(" and explicit_capture and not pattern.startswith("(?", i):
            out.append("(?:")
            i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)


# ============================================================
# Results
# ============================================================


class Group(NObject):
    """One capture: Value, Index, Length, Success. Immutable."""

    def __init__(self, value: str, index: int, length: int, success: bool, name: str = "0"):
        self._value = value
        self._index = index
        self._length = length
        self._success = success
        self._name = name

    @property
    def Value(self) -> str:
        return self._value

    @property
    def Index(self) -> int:
        return self._index

    @property
    def Length(self) -> int:
        return self._length

    @property
    def Success(self) -> bool:
        return self._success

    @property
    def Name(self) -> str:
        return self._name

    def ToString(self) -> str:
        return self._value


class GroupCollection(NObject, IEnumerable[Group]):
    def __init__(self, groups: list[Group], names: dict[str, int]):
        self._groups = groups
        self._names = names

    @property
    def Count(self) -> int:
        return len(self._groups)

    def get_Item(self, key: int | str) -> Group:
        """Group by number or name; an unknown key yields an unsuccessful group."""
        if isinstance(key, str):
            if key in self._names:
                return self._groups[self._names[key]]
            if key.isdigit():
                key = int(key)
            else:
                return Group("", 0, 0, False, key)
        if 0 <= key < len(self._groups):
            return self._groups[key]
        return Group("", 0, 0, False, str(key))

    def ContainsKey(self, key: int | str) -> bool:
        if isinstance(key, str):
            return key in self._names
        return 0 <= key < len(self._groups)

    def GetEnumerator(self) -> ArrayEnumerator[Group]:
        return ArrayEnumerator(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __getitem__(self, key: int | str) -> Group:
        return self.get_Item(key)


class Match(Group):
    """A pattern application. Group 0 is the whole match.

    Group offsets are reconstructed: group k (k >= 1) starts at the match
    start plus the lengths of the groups numbered before it. That is the
    origin layout, and it agrees with the host offsets whenever the groups
    tile the match left to right.
    """

    def __init__(self, regex: Regex, text: str, m: re.Match | None):
        self._regex = regex
        self._text = text
        self._host = m
        if m is None:
            super().__init__("", 0, 0, False)
            self._groups = GroupCollection(
                [Group("", 0, 0, False, name) for name in regex._names], regex._numbers
            )
            return
        super().__init__(m.group(0), m.start(), m.end() - m.start(), True)
        groups = [Group(m.group(0), m.start(), m.end() - m.start(), True, "0")]
        offset = m.start()
        for number in range(1, len(regex._order)):
            name = regex._names[number]
            value = m.group(regex._order[number])
            if value is None:
                groups.append(Group("", 0, 0, False, name))
                continue
            groups.append(Group(value, offset, len(value), True, name))
            offset += len(value)
        self._groups = GroupCollection(groups, regex._numbers)

    @property
    def Groups(self) -> GroupCollection:
        return self._groups

    def NextMatch(self) -> Match:
        if self._host is None:
            return self
        start = self._host.end()
        if self._host.end() == self._host.start():
            if start >= len(self._text):
                return Match(self._regex, self._text, None)
            start += 1
        return self._regex.Match(self._text, start)

    def Result(self, replacement: str) -> str:
        return expand_replacement(replacement, self, self._text)


# ============================================================
# Replacement tokens
# ============================================================


def expand_replacement(replacement: str, match: Match, text: str) -> str:
    """Expand $n, ${name}, $&, $0, $$, $`, $', $+ and $_ against match."""
    groups = match.Groups
    out: list[str] = []
    i = 0
    n = len(replacement)
    while i < n:
        ch = replacement[i]
        if ch != "$" or i + 1 >= n:
            out.append(ch)
            i += 1
            continue
        nxt = replacement[i + 1]
        if nxt == "$":
            out.append("$")
            i += 2
        elif nxt == "&":
            out.append(match.Value)
            i += 2
        elif nxt == "`":
            out.append(text[: match.Index])
            i += 2
        elif nxt == "'":
            out.append(text[match.Index + match.Length :])
            i += 2
        elif nxt == "_":
            out.append(text)
            i += 2
        elif nxt == "+":
            out.append(groups[groups.Count - 1].Value if groups.Count > 1 else "")
            i += 2
        elif nxt == "{":
            end = replacement.find("}", i + 2)
            key = replacement[i + 2 : end] if end > 0 else ""
            if end > 0 and groups.ContainsKey(int(key) if key.isdigit() else key):
                out.append(groups[int(key) if key.isdigit() else key].Value)
                i = end + 1
            else:
                out.append("$")
                i += 1
        elif nxt.isdigit():
            j = i + 1
            while j < n and replacement[j].isdigit():
                j += 1
            # Longest digit run that names an existing group.
            while j > i + 1 and not groups.ContainsKey(int(replacement[i + 1 : j])):
                j -= 1
            if j > i + 1:
                out.append(groups[int(replacement[i + 1 : j])].Value)
                i = j
            else:
                out.append("$")
                i += 1
        else:
            out.append("$")
            i += 1
    return "".join(out)


# ============================================================
# Regex
# ============================================================

MatchEvaluator = Callable[[Match], str]


class Regex(NObject):
    def __init__(self, pattern: str, options: RegexOptions = RegexOptions.None_):
        if pattern is None:
            raise ArgumentNullException("pattern")
        if options & RegexOptions.RightToLeft:
            raise NotSupportedException("RegexOptions.RightToLeft is not supported.")
        self._pattern = pattern
        self._options = options
        host = translate_pattern(pattern, bool(options & RegexOptions.ExplicitCapture))
        if host != pattern:
            logger.debug("regex rewritten: %r -> %r", pattern, host)
        flags = 0
        for option, flag in _FLAGS.items():
            if options & option:
                flags |= flag
        try:
            self._re = re.compile(host, flags)
        except re.error as e:
            raise ArgumentException(
                f"Invalid pattern '{pattern}' at offset {e.pos}. {e.msg}", "pattern"
            ) from e
        self._number_groups()

    def _number_groups(self) -> None:
        named = {index: name for name, index in self._re.groupindex.items()}
        unnamed = [i for i in range(1, self._re.groups + 1) if i not in named]
        # _order[k] is the host group index of origin group k.
        self._order = [0] + unnamed + sorted(named)
        self._names = ["0"] + [str(k) for k in range(1, len(unnamed) + 1)]
        self._names += [named[i] for i in sorted(named)]
        self._numbers = {name: k for k, name in enumerate(self._names)}

    @property
    def Options(self) -> RegexOptions:
        return self._options

    def GetGroupNames(self) -> list[str]:
        return list(self._names)

    def GetGroupNumbers(self) -> list[int]:
        return list(range(len(self._names)))

    def _check(self, text: str, startat: int) -> None:
        if text is None:
            raise ArgumentNullException("input")
        if startat < 0 or startat > len(text):
            raise ArgumentOutOfRangeException(
                "startat", "Start index cannot be less than 0 or greater than input length."
            )

    def Match(self, text: str, startat: int = 0) -> Match:
        self._check(text, startat)
        return Match(self, text, self._re.search(text, startat))

    def Matches(self, text: str, startat: int = 0) -> List[Match]:
        self._check(text, startat)
        found: List[Match] = List()
        m = self.Match(text, startat)
        while m.Success:
            found.Add(m)
            m = m.NextMatch()
        return found

    def IsMatch(self, text: str, startat: int = 0) -> bool:
        self._check(text, startat)
        return self._re.search(text, startat) is not None

    def Replace(
        self,
        text: str,
        replacement: Union[str, MatchEvaluator],
        count: int = -1,
        startat: int = 0,
    ) -> str:
        """Replace up to count matches (all when negative) from startat on."""
        self._check(text, startat)
        if replacement is None:
            raise ArgumentNullException("replacement")
        if count == 0:
            return text

        def substitute(m: re.Match) -> str:
            match = Match(self, text, m)
            if callable(replacement):
                return replacement(match)
            return expand_replacement(replacement, match, text)

        out: list[str] = []
        last = 0
        for done, m in enumerate(self._re.finditer(text, startat)):
            if 0 <= count <= done:
                break
            out.append(text[last : m.start()])
            out.append(substitute(m))
            last = m.end()
        out.append(text[last:])
        return "".join(out)

    def Split(self, text: str, count: int = 0) -> list[str]:
        """Split around matches; captured groups are included, as in the origin."""
        if text is None:
            raise ArgumentNullException("input")
        if count < 0:
            raise ArgumentOutOfRangeException("count")
        if count == 1:
            return [text]
        parts = self._re.split(text, maxsplit=max(count - 1, 0))
        return [p for p in parts if p is not None]

    @staticmethod
    def Escape(text: str) -> str:
        if text is None:
            raise ArgumentNullException("str")
        out: list[str] = []
        for ch in text:
            if ch in _ESCAPED:
                out.append("\\" + ch)
            elif ch in _WHITESPACE_ESCAPES:
                out.append(_WHITESPACE_ESCAPES[ch])
            else:
                out.append(ch)
        return "".join(out)

    def ToString(self) -> str:
        return self._pattern


_ESCAPED = frozenset("\\*+?|{[()^$.# ")
_WHITESPACE_ESCAPES = {"\t": "\\t", "\n": "\\n", "\f": "\\f", "\r": "\\r", "\v": "\\v"}
