"""DateTime and TimeSpan on a 100-nanosecond tick."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import enum
import math

from .core import NObject, number_hash
from .errors import (
    ArgumentException,
    ArgumentOutOfRangeException,
    OverflowException,
    unported_member,
)

TICKS_PER_MILLISECOND = 10_000
TICKS_PER_SECOND = TICKS_PER_MILLISECOND * 1000
TICKS_PER_MINUTE = TICKS_PER_SECOND * 60
TICKS_PER_HOUR = TICKS_PER_MINUTE * 60
TICKS_PER_DAY = TICKS_PER_HOUR * 24

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_EPOCH = datetime(1, 1, 1)
_MAX_DATE_TICKS = 3_155_378_975_999_999_999


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_mod(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


# ============================================================
# TimeSpan
# ============================================================


class TimeSpan(NObject):
    """Signed duration in ticks (10 000 000 per second), within the int64 range."""

    TicksPerMillisecond = TICKS_PER_MILLISECOND
    TicksPerSecond = TICKS_PER_SECOND
    TicksPerMinute = TICKS_PER_MINUTE
    TicksPerHour = TICKS_PER_HOUR
    TicksPerDay = TICKS_PER_DAY

    Zero: TimeSpan
    MaxValue: TimeSpan
    MinValue: TimeSpan

    def __init__(self, *args: int):
        """TimeSpan(ticks), (hours, minutes, seconds), (days, h, m, s) or (days, h, m, s, ms)."""
        if len(args) == 1:
            ticks = args[0]
        elif len(args) == 3:
            h, m, s = args
            ticks = (h * 3600 + m * 60 + s) * TICKS_PER_SECOND
        elif len(args) in (4, 5):
            d, h, m, s = args[:4]
            ms = args[4] if len(args) == 5 else 0
            ticks = ((d * 86400 + h * 3600 + m * 60 + s) * 1000 + ms) * TICKS_PER_MILLISECOND
        else:
            raise ArgumentException("TimeSpan takes 1, 3, 4 or 5 arguments.")
        self._ticks = _checked_ticks(int(ticks))

    @property
    def Ticks(self) -> int:
        return self._ticks

    @property
    def Days(self) -> int:
        return _trunc_div(self._ticks, TICKS_PER_DAY)

    @property
    def Hours(self) -> int:
        return _trunc_mod(_trunc_div(self._ticks, TICKS_PER_HOUR), 24)

    @property
    def Minutes(self) -> int:
        return _trunc_mod(_trunc_div(self._ticks, TICKS_PER_MINUTE), 60)

    @property
    def Seconds(self) -> int:
        return _trunc_mod(_trunc_div(self._ticks, TICKS_PER_SECOND), 60)

    @property
    def Milliseconds(self) -> int:
        return _trunc_mod(_trunc_div(self._ticks, TICKS_PER_MILLISECOND), 1000)

    @property
    def TotalDays(self) -> float:
        return self._ticks / TICKS_PER_DAY

    @property
    def TotalHours(self) -> float:
        return self._ticks / TICKS_PER_HOUR

    @property
    def TotalMinutes(self) -> float:
        return self._ticks / TICKS_PER_MINUTE

    @property
    def TotalSeconds(self) -> float:
        return self._ticks / TICKS_PER_SECOND

    @property
    def TotalMilliseconds(self) -> float:
        return self._ticks / TICKS_PER_MILLISECOND

    # -- factories --

    @staticmethod
    def FromTicks(ticks: int) -> TimeSpan:
        return TimeSpan(ticks)

    @staticmethod
    def FromMilliseconds(value: float) -> TimeSpan:
        return _interval(value, TICKS_PER_MILLISECOND)

    @staticmethod
    def FromSeconds(value: float) -> TimeSpan:
        return _interval(value, TICKS_PER_SECOND)

    @staticmethod
    def FromMinutes(value: float) -> TimeSpan:
        return _interval(value, TICKS_PER_MINUTE)

    @staticmethod
    def FromHours(value: float) -> TimeSpan:
        return _interval(value, TICKS_PER_HOUR)

    @staticmethod
    def FromDays(value: float) -> TimeSpan:
        return _interval(value, TICKS_PER_DAY)

    # -- arithmetic --

    def Add(self, other: TimeSpan) -> TimeSpan:
        return TimeSpan(self._ticks + other._ticks)

    def Subtract(self, other: TimeSpan) -> TimeSpan:
        return TimeSpan(self._ticks - other._ticks)

    def Negate(self) -> TimeSpan:
        if self._ticks == _INT64_MIN:
            raise OverflowException(
                "Negating the minimum value of a twos complement number is invalid."
            )
        return TimeSpan(-self._ticks)

    def Duration(self) -> TimeSpan:
        return self.Negate() if self._ticks < 0 else self

    @staticmethod
    def op_Addition(x: TimeSpan, y: TimeSpan) -> TimeSpan:
        return x.Add(y)

    @staticmethod
    def op_Subtraction(x: TimeSpan, y: TimeSpan) -> TimeSpan:
        return x.Subtract(y)

    @staticmethod
    def op_UnaryNegation(x: TimeSpan) -> TimeSpan:
        return x.Negate()

    def __add__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.Add(other)

    def __sub__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.Subtract(other)

    def __neg__(self) -> TimeSpan:
        return self.Negate()

    def __abs__(self) -> TimeSpan:
        return self.Duration()

    # -- comparison --

    def CompareTo(self, other: TimeSpan | None) -> int:
        if other is None:
            return 1
        return (self._ticks > other._ticks) - (self._ticks < other._ticks)

    def Equals(self, other: object) -> bool:
        return isinstance(other, TimeSpan) and other._ticks == self._ticks

    def GetHashCode(self) -> int:
        return number_hash(self._ticks)

    @staticmethod
    def op_Equality(x: TimeSpan, y: TimeSpan) -> bool:
        return x._ticks == y._ticks

    @staticmethod
    def op_Inequality(x: TimeSpan, y: TimeSpan) -> bool:
        return x._ticks != y._ticks

    @staticmethod
    def op_LessThan(x: TimeSpan, y: TimeSpan) -> bool:
        return x._ticks < y._ticks

    @staticmethod
    def op_LessThanOrEqual(x: TimeSpan, y: TimeSpan) -> bool:
        return x._ticks <= y._ticks

    @staticmethod
    def op_GreaterThan(x: TimeSpan, y: TimeSpan) -> bool:
        return x._ticks > y._ticks

    @staticmethod
    def op_GreaterThanOrEqual(x: TimeSpan, y: TimeSpan) -> bool:
        return x._ticks >= y._ticks

    def __lt__(self, other: TimeSpan) -> bool:
        return self._ticks < other._ticks

    def __le__(self, other: TimeSpan) -> bool:
        return self._ticks <= other._ticks

    def __gt__(self, other: TimeSpan) -> bool:
        return self._ticks > other._ticks

    def __ge__(self, other: TimeSpan) -> bool:
        return self._ticks >= other._ticks

    def ToString(self) -> str:
        """[-][d.]hh:mm:ss[.fffffff]"""
        ticks = self._ticks
        sign = "-" if ticks < 0 else ""
        ticks = abs(ticks)
        days, rest = divmod(ticks, TICKS_PER_DAY)
        hours, rest = divmod(rest, TICKS_PER_HOUR)
        minutes, rest = divmod(rest, TICKS_PER_MINUTE)
        seconds, fraction = divmod(rest, TICKS_PER_SECOND)
        text = f"{sign}{days}." if days else sign
        text += f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        if fraction:
            text += f".{fraction:07d}"
        return text


def _checked_ticks(ticks: int) -> int:
    if ticks < _INT64_MIN or ticks > _INT64_MAX:
        raise OverflowException("TimeSpan overflowed because the duration is too long.")
    return ticks


def _interval(value: float, scale: int) -> TimeSpan:
    if isinstance(value, float) and math.isnan(value):
        raise ArgumentException("TimeSpan does not accept floating point Not-a-Number values.")
    ticks = value * scale
    if isinstance(ticks, float) and (math.isinf(ticks) or not _INT64_MIN <= ticks <= _INT64_MAX):
        raise OverflowException("TimeSpan overflowed because the duration is too long.")
    return TimeSpan(int(ticks))


TimeSpan.Zero = TimeSpan(0)
TimeSpan.MaxValue = TimeSpan(_INT64_MAX)
TimeSpan.MinValue = TimeSpan(_INT64_MIN)


# ============================================================
# DateTime
# ============================================================


class DateTimeKind(enum.Enum):
    Local = 0
    Unspecified = 1
    Utc = 2


class DayOfWeek(enum.IntEnum):
    Sunday = 0
    Monday = 1
    Tuesday = 2
    Wednesday = 3
    Thursday = 4
    Friday = 5
    Saturday = 6


class _DateTimeClock(type):
    """Class-level clock properties: DateTime.Now, DateTime.UtcNow, DateTime.Today."""

    @property
    def Now(cls) -> DateTime:
        return DateTime._from_wall(datetime.now(), DateTimeKind.Local)

    @property
    def UtcNow(cls) -> DateTime:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        return DateTime._from_wall(now, DateTimeKind.Utc)

    @property
    def Today(cls) -> DateTime:
        return cls.Now.Date


class DateTime(NObject, metaclass=_DateTimeClock):
    """Wall-clock ticks since 0001-01-01 plus a kind.

    Two values of the same kind compare and subtract by wall clock. Values
    of different kinds are first converted to UTC instants; Local and
    Unspecified are both read as host-local time for that purpose.
    """

    MinValue: DateTime
    MaxValue: DateTime

    def __init__(
        self,
        year: int = 1,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
        kind: DateTimeKind = DateTimeKind.Unspecified,
    ):
        if isinstance(hour, DateTimeKind):
            hour, kind = 0, hour
        if not 0 <= millisecond < 1000:
            raise ArgumentOutOfRangeException("millisecond")
        try:
            wall = datetime(year, month, day, hour, minute, second)
        except ValueError as e:
            raise ArgumentOutOfRangeException(
                None, "Year, Month, and Day parameters describe an un-representable DateTime."
            ) from e
        self._ticks = _wall_ticks(wall) + millisecond * TICKS_PER_MILLISECOND
        self._kind = kind

    @classmethod
    def _from_ticks(cls, ticks: int, kind: DateTimeKind) -> DateTime:
        if ticks < 0 or ticks > _MAX_DATE_TICKS:
            raise ArgumentOutOfRangeException(
                "value", "The added or subtracted value results in an un-representable DateTime."
            )
        d = cls.__new__(cls)
        d._ticks = ticks
        d._kind = kind
        return d

    @classmethod
    def _from_wall(cls, wall: datetime, kind: DateTimeKind) -> DateTime:
        return cls._from_ticks(_wall_ticks(wall), kind)

    # -- fields --

    def _wall(self) -> datetime:
        return _EPOCH + timedelta(microseconds=self._ticks // 10)

    @property
    def Kind(self) -> DateTimeKind:
        return self._kind

    @property
    def Ticks(self) -> int:
        return self._ticks

    @property
    def Year(self) -> int:
        return self._wall().year

    @property
    def Month(self) -> int:
        return self._wall().month

    @property
    def Day(self) -> int:
        return self._wall().day

    @property
    def Hour(self) -> int:
        return self._wall().hour

    @property
    def Minute(self) -> int:
        return self._wall().minute

    @property
    def Second(self) -> int:
        return self._wall().second

    @property
    def Millisecond(self) -> int:
        return (self._ticks // TICKS_PER_MILLISECOND) % 1000

    @property
    def DayOfWeek(self) -> DayOfWeek:
        return DayOfWeek(self._wall().isoweekday() % 7)

    @property
    def DayOfYear(self) -> int:
        return self._wall().timetuple().tm_yday

    @property
    def Date(self) -> DateTime:
        return DateTime._from_ticks(self._ticks - self._ticks % TICKS_PER_DAY, self._kind)

    @property
    def TimeOfDay(self) -> TimeSpan:
        return TimeSpan(self._ticks % TICKS_PER_DAY)

    # -- instants --

    def _instant(self) -> int:
        """UTC ticks of this value."""
        if self._kind is DateTimeKind.Utc:
            return self._ticks
        wall = self._wall()
        try:
            offset = wall.astimezone().utcoffset()
        except (OverflowError, ValueError, OSError):
            # Outside the host's local-time range; use the current offset.
            offset = datetime.now().astimezone().utcoffset()
        return self._ticks - int(offset.total_seconds()) * TICKS_PER_SECOND  # type: ignore[union-attr]

    def _pair(self, other: DateTime) -> tuple[int, int]:
        if self._kind is other._kind:
            return self._ticks, other._ticks
        return self._instant(), other._instant()

    # -- arithmetic --

    def Add(self, value: TimeSpan) -> DateTime:
        return DateTime._from_ticks(self._ticks + value.Ticks, self._kind)

    def AddTicks(self, ticks: int) -> DateTime:
        return DateTime._from_ticks(self._ticks + ticks, self._kind)

    def AddMilliseconds(self, value: float) -> DateTime:
        return self._add_scaled(value, TICKS_PER_MILLISECOND)

    def AddSeconds(self, value: float) -> DateTime:
        return self._add_scaled(value, TICKS_PER_SECOND)

    def AddMinutes(self, value: float) -> DateTime:
        return self._add_scaled(value, TICKS_PER_MINUTE)

    def AddHours(self, value: float) -> DateTime:
        return self._add_scaled(value, TICKS_PER_HOUR)

    def AddDays(self, value: float) -> DateTime:
        return self._add_scaled(value, TICKS_PER_DAY)

    def _add_scaled(self, value: float, scale: int) -> DateTime:
        if isinstance(value, float) and not math.isfinite(value):
            raise ArgumentOutOfRangeException("value")
        # Whole milliseconds, rounded half away from zero.
        millis = value * (scale / TICKS_PER_MILLISECOND)
        millis = math.floor(millis + 0.5) if millis >= 0 else -math.floor(-millis + 0.5)
        return self.AddTicks(int(millis) * TICKS_PER_MILLISECOND)

    def Subtract(self, other: DateTime | TimeSpan) -> DateTime | TimeSpan:
        return DateTime.op_Subtraction(self, other)

    @staticmethod
    def op_Addition(x: DateTime, y: TimeSpan) -> DateTime:
        return x.Add(y)

    @staticmethod
    def op_Subtraction(x: DateTime, y: DateTime | TimeSpan) -> DateTime | TimeSpan:
        if isinstance(y, TimeSpan):
            return DateTime._from_ticks(x._ticks - y.Ticks, x._kind)
        a, b = x._pair(y)
        return TimeSpan(a - b)

    def __add__(self, other: TimeSpan) -> DateTime:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.Add(other)

    def __sub__(self, other: DateTime | TimeSpan) -> DateTime | TimeSpan:
        if not isinstance(other, (DateTime, TimeSpan)):
            return NotImplemented
        return DateTime.op_Subtraction(self, other)

    # -- comparison --

    def CompareTo(self, other: DateTime | None) -> int:
        if other is None:
            return 1
        a, b = self._pair(other)
        return (a > b) - (a < b)

    def Equals(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return False
        a, b = self._pair(other)
        return a == b

    def GetHashCode(self) -> int:
        return number_hash(self._instant())

    @staticmethod
    def op_Equality(x: DateTime, y: DateTime) -> bool:
        return x.CompareTo(y) == 0

    @staticmethod
    def op_Inequality(x: DateTime, y: DateTime) -> bool:
        return x.CompareTo(y) != 0

    @staticmethod
    def op_LessThan(x: DateTime, y: DateTime) -> bool:
        return x.CompareTo(y) < 0

    @staticmethod
    def op_LessThanOrEqual(x: DateTime, y: DateTime) -> bool:
        return x.CompareTo(y) <= 0

    @staticmethod
    def op_GreaterThan(x: DateTime, y: DateTime) -> bool:
        return x.CompareTo(y) > 0

    @staticmethod
    def op_GreaterThanOrEqual(x: DateTime, y: DateTime) -> bool:
        return x.CompareTo(y) >= 0

    def __lt__(self, other: DateTime) -> bool:
        return self.CompareTo(other) < 0

    def __le__(self, other: DateTime) -> bool:
        return self.CompareTo(other) <= 0

    def __gt__(self, other: DateTime) -> bool:
        return self.CompareTo(other) > 0

    def __ge__(self, other: DateTime) -> bool:
        return self.CompareTo(other) >= 0

    # -- display --

    def ToString(self) -> str:
        """Invariant general format: MM/dd/yyyy HH:mm:ss."""
        w = self._wall()
        return f"{w.month:02d}/{w.day:02d}/{w.year:04d} {w:%H:%M:%S}"

    def ToFormattedString(self, fmt: str) -> str:
        """Standard formats o, s, u, d, D, t, T, g and G."""
        w = self._wall()
        date = f"{w.month:02d}/{w.day:02d}/{w.year:04d}"
        if fmt == "o":
            suffix = "Z" if self._kind is DateTimeKind.Utc else ""
            fraction = self._ticks % TICKS_PER_SECOND
            return f"{w.year:04d}-{w.month:02d}-{w.day:02d}T{w:%H:%M:%S}.{fraction:07d}{suffix}"
        if fmt == "s":
            return f"{w.year:04d}-{w.month:02d}-{w.day:02d}T{w:%H:%M:%S}"
        if fmt == "u":
            return f"{w.year:04d}-{w.month:02d}-{w.day:02d} {w:%H:%M:%S}Z"
        if fmt == "d":
            return date
        if fmt == "D":
            return f"{w:%A}, {w.day:02d} {w:%B} {w.year:04d}"
        if fmt == "t":
            return f"{w:%H:%M}"
        if fmt == "T":
            return f"{w:%H:%M:%S}"
        if fmt == "g":
            return f"{date} {w:%H:%M}"
        if fmt == "G":
            return f"{date} {w:%H:%M:%S}"
        raise ArgumentException(f"Unsupported DateTime format '{fmt}'.", "format")

    # -- unported --

    @unported_member
    def ToLocalTime(self) -> DateTime: ...

    @unported_member
    def ToUniversalTime(self) -> DateTime: ...

    @staticmethod
    @unported_member
    def Parse(s: str) -> DateTime: ...


def _wall_ticks(wall: datetime) -> int:
    delta = wall - _EPOCH
    return (delta.days * 86400 + delta.seconds) * TICKS_PER_SECOND + delta.microseconds * 10


DateTime.MinValue = DateTime._from_ticks(0, DateTimeKind.Unspecified)
DateTime.MaxValue = DateTime._from_ticks(_MAX_DATE_TICKS, DateTimeKind.Unspecified)
