"""Numeric helpers reproducing origin rounding, parsing and formatting rules.

Decimal arithmetic over a float's shortest repr is used wherever the origin
rounds "at a decimal scale", so 2.345 rounds like the digits it prints as,
not like its binary expansion.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Context, Decimal
import enum
import math
import re

from .config import get_options
from .core import INT32_MAX, INT32_MIN, NObject, Type, display_number, number_hash, to_int32
from .errors import (
    ArgumentException,
    ArgumentNullException,
    ArgumentOutOfRangeException,
    FormatException,
    OverflowException,
)

_WIDE = Context(prec=1200)


class MidpointRounding(enum.Enum):
    AwayFromZero = ROUND_HALF_UP
    ToEven = ROUND_HALF_EVEN


class NumberStyles(enum.IntFlag):
    None_ = 0
    AllowLeadingWhite = 1
    AllowTrailingWhite = 2
    AllowLeadingSign = 4
    AllowDecimalPoint = 32
    AllowThousands = 64
    AllowExponent = 128
    AllowHexSpecifier = 512
    Integer = 7
    HexNumber = 515
    Float = 167
    Number = 111
    Any = 511


def to_decimal(num: int | float | Decimal) -> Decimal:
    if isinstance(num, (int, Decimal)):
        return Decimal(num)
    return Decimal(repr(num))


def round_decimal(num: int | float | Decimal, decimals: int, mode: MidpointRounding) -> Decimal:
    exp = Decimal(1).scaleb(-decimals)
    return to_decimal(num).quantize(exp, rounding=mode.value, context=_WIDE)


# ============================================================
# Culture
# ============================================================


class IFormatProvider:
    def GetFormat(self, type: Type) -> object:
        raise NotImplementedError


class NumberFormatInfo(NObject, IFormatProvider):
    def __init__(self) -> None:
        self.NumberDecimalSeparator = "."
        self.NumberGroupSeparator = ","
        self.PercentSymbol = "%"
        self.CurrencySymbol = "¤"
        self.NegativeSign = "-"

    def GetFormat(self, type: Type) -> object:
        if type.Name == "NumberFormatInfo":
            return self
        return None


class CultureInfo(NObject, IFormatProvider):
    InvariantCulture: CultureInfo
    CurrentCulture: CultureInfo

    def __init__(self, name: str = "Invariant"):
        self.Name = name
        self.NumberFormat = NumberFormatInfo()

    def GetFormat(self, type: Type) -> object:
        if type.Name == "NumberFormatInfo":
            return self.NumberFormat
        return None

    def ToString(self) -> str:
        return self.Name


CultureInfo.InvariantCulture = CultureInfo("Invariant")
CultureInfo.CurrentCulture = CultureInfo.InvariantCulture


def number_format(provider: object | None) -> NumberFormatInfo:
    if isinstance(provider, IFormatProvider):
        nfi = provider.GetFormat(Type("NumberFormatInfo"))
        if isinstance(nfi, NumberFormatInfo):
            return nfi
    return CultureInfo.CurrentCulture.NumberFormat


# ============================================================
# Formatting
# ============================================================


def _localize(text: str, nfi: NumberFormatInfo) -> str:
    if nfi.NumberDecimalSeparator == "." and nfi.NumberGroupSeparator == ",":
        return text
    return (
        text.replace(",", "\0")
        .replace(".", nfi.NumberDecimalSeparator)
        .replace("\0", nfi.NumberGroupSeparator)
    )


def _precision(spec: str, default: int) -> int:
    if spec == "":
        return default
    if not spec.isdigit() or int(spec) > 999:
        raise FormatException("Format specifier was invalid.")
    return int(spec)


def _require_integral(num: int | float) -> int:
    if isinstance(num, float):
        if not math.isfinite(num) or num != int(num):
            raise FormatException("Format specifier was invalid.")
        return int(num)
    return num


def _scientific(num: int | float, digits: int, letter: str, exp_width: int) -> str:
    d = to_decimal(num)
    if d == 0:
        exp = 0
        mantissa = Decimal(0).quantize(Decimal(1).scaleb(-digits))
    else:
        exp = d.adjusted()
        mantissa = d.scaleb(-exp).quantize(
            Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP, context=_WIDE
        )
        if abs(mantissa) >= 10:
            exp += 1
            mantissa = d.scaleb(-exp).quantize(
                Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP, context=_WIDE
            )
    sign = "+" if exp >= 0 else "-"
    return f"{mantissa:f}{letter}{sign}{abs(exp):0{exp_width}d}"


def _custom(num: int | float, fmt: str, nfi: NumberFormatInfo) -> str:
    if any(ch not in "0#.," for ch in fmt):
        raise FormatException(f"Format string '{fmt}' is not supported.")
    int_part, _, frac_part = fmt.partition(".")
    grouping = "," in int_part
    min_int = int_part.count("0")
    min_frac = frac_part.count("0")
    max_frac = len(frac_part.replace(",", ""))
    q = round_decimal(num, max_frac, MidpointRounding.AwayFromZero)
    text = format(abs(q), ",f" if grouping else "f")
    whole, _, frac = text.partition(".")
    frac = frac.rstrip("0")
    frac = frac + "0" * (min_frac - len(frac))
    if whole.replace(",", "") == "0" and min_int == 0:
        whole = ""
    digits = len(whole.replace(",", ""))
    if digits < min_int:
        whole = "0" * (min_int - digits) + whole
    out = whole + ("." + frac if frac else "")
    if q < 0 and out.strip("0.,") != "":
        out = "-" + out
    return _localize(out or "0", nfi)


def format_number(num: int | float, fmt: str | None = None, provider: object | None = None) -> str:
    """Format num with an origin standard or simple custom numeric format string."""
    nfi = number_format(provider)
    if isinstance(num, bool):
        return "True" if num else "False"
    if not fmt:
        return _localize(display_number(num), nfi)
    if isinstance(num, float) and not math.isfinite(num):
        return display_number(num)
    letter, spec = fmt[0], fmt[1:]
    kind = letter.upper()
    if kind not in "NFDXEPGCR" or not (spec == "" or spec.isdigit()):
        return _custom(num, fmt, nfi)
    if kind == "R":
        return _localize(display_number(num), nfi)
    if kind == "G":
        if spec == "" or int(spec) == 0:
            return _localize(display_number(num), nfi)
        text = format(to_decimal(num), f".{int(spec)}g").replace("e", "E")
        return _localize(text, nfi)
    if kind == "F":
        q = round_decimal(num, _precision(spec, 2), MidpointRounding.AwayFromZero)
        return _localize(f"{q:f}", nfi)
    if kind == "N":
        q = round_decimal(num, _precision(spec, 2), MidpointRounding.AwayFromZero)
        return _localize(f"{q:,f}", nfi)
    if kind == "P":
        q = round_decimal(to_decimal(num) * 100, _precision(spec, 2), MidpointRounding.AwayFromZero)
        return _localize(f"{q:,f}", nfi) + " " + nfi.PercentSymbol
    if kind == "C":
        q = round_decimal(num, _precision(spec, 2), MidpointRounding.AwayFromZero)
        body = _localize(f"{abs(q):,f}", nfi)
        return ("-" if q < 0 else "") + nfi.CurrencySymbol + body
    if kind == "E":
        text = _scientific(num, _precision(spec, 6), letter, 3)
        return _localize(text, nfi)
    if kind == "D":
        n = _require_integral(num)
        body = str(abs(n)).zfill(_precision(spec, 0))
        return ("-" if n < 0 else "") + body
    # X
    n = _require_integral(num)
    if n < 0:
        n &= 0xFFFFFFFF if n >= INT32_MIN else 0xFFFFFFFFFFFFFFFF
    text = format(n, "X" if letter == "X" else "x")
    return text.zfill(_precision(spec, 0))


# ============================================================
# Number / Boolean
# ============================================================

_WHITE = " \t\n\x0b\x0c\r"
_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]+")
_DECIMAL_NUMBER = re.compile(
    r"(?P<sign>[+-]?)(?P<int>[0-9]*)(?P<point>\.(?P<frac>[0-9]*))?(?P<exp>[eE][+-]?[0-9]+)?"
)
_SYMBOLS = ("NaN", "Infinity", "-Infinity", "∞", "-∞")


class NNumber:
    @staticmethod
    def Parse(text: str, styleOrProvider: object = None, provider: object = None) -> float:
        """Parse text under a NumberStyles mask (Float by default).

        Whitespace, a leading sign, a decimal point, an exponent and group
        separators are each accepted only when the style allows them.
        """
        if text is None:
            raise ArgumentNullException("s")
        style = styleOrProvider if isinstance(styleOrProvider, NumberStyles) else NumberStyles.Float
        if not isinstance(styleOrProvider, NumberStyles) and styleOrProvider is not None:
            provider = styleOrProvider
        nfi = number_format(provider)
        bad = FormatException(f"The input string '{text}' was not in a correct format.")
        s = text
        if style & NumberStyles.AllowLeadingWhite:
            s = s.lstrip(_WHITE)
        if style & NumberStyles.AllowTrailingWhite:
            s = s.rstrip(_WHITE)
        if style & NumberStyles.AllowHexSpecifier:
            if _HEX_DIGITS.fullmatch(s) is None:
                raise bad
            return int(s, 16)
        if nfi.NumberGroupSeparator and style & NumberStyles.AllowThousands:
            s = s.replace(nfi.NumberGroupSeparator, "")
        if nfi.NumberDecimalSeparator != ".":
            s = s.replace(nfi.NumberDecimalSeparator, ".")
        if s in _SYMBOLS:
            if s.startswith("-") and not style & NumberStyles.AllowLeadingSign:
                raise bad
            return float(s.replace("∞", "Infinity"))
        m = _DECIMAL_NUMBER.fullmatch(s)
        if m is None or not (m.group("int") or m.group("frac")):
            raise bad
        if m.group("sign") and not style & NumberStyles.AllowLeadingSign:
            raise bad
        if m.group("point") and not style & NumberStyles.AllowDecimalPoint:
            raise bad
        if m.group("exp") and not style & NumberStyles.AllowExponent:
            raise bad
        return float(s)

    @staticmethod
    def TryParse(text: str, holder: list) -> bool:
        try:
            holder[0] = NNumber.Parse(text)
        except FormatException:
            holder[0] = 0
            return False
        return True

    @staticmethod
    def ToString(num: int | float, providerOrFormat: object = None, provider: object = None) -> str:
        if isinstance(providerOrFormat, str):
            return format_number(num, providerOrFormat, provider)
        return format_number(num, None, providerOrFormat)

    @staticmethod
    def GetHashCode(num: int | float) -> int:
        return number_hash(num)

    @staticmethod
    def IsInfinity(num: float) -> bool:
        return math.isinf(num)

    @staticmethod
    def IsPositiveInfinity(num: float) -> bool:
        return num == math.inf

    @staticmethod
    def IsNegativeInfinity(num: float) -> bool:
        return num == -math.inf

    @staticmethod
    def IsNaN(num: float) -> bool:
        return math.isnan(num)


class NBoolean:
    TrueString = "True"
    FalseString = "False"

    @staticmethod
    def Parse(text: str) -> bool:
        s = (text or "").strip().lower()
        if s == "true":
            return True
        if s == "false":
            return False
        raise FormatException(f"String '{text}' was not recognized as a valid Boolean.")

    @staticmethod
    def TryParse(text: str, holder: list) -> bool:
        try:
            holder[0] = NBoolean.Parse(text)
        except FormatException:
            holder[0] = False
            return False
        return True

    @staticmethod
    def ToString(value: bool) -> str:
        return NBoolean.TrueString if value else NBoolean.FalseString

    @staticmethod
    def GetHashCode(value: bool) -> int:
        return 1 if value else 0


# ============================================================
# Math
# ============================================================


def _check_finite(value: float, member: str) -> None:
    if get_options().strict_math and isinstance(value, float) and not math.isfinite(value):
        raise ArgumentException(f"{member} on non-finite value", "value")


class NMath(NObject):
    E = math.e
    PI = math.pi

    @staticmethod
    def Round(a: float, decimals: int = 0, mode: MidpointRounding = MidpointRounding.AwayFromZero) -> float:
        """Round half away from zero (by default) at the given decimal scale."""
        if isinstance(decimals, MidpointRounding):
            decimals, mode = 0, decimals
        if decimals < 0 or decimals > 15:
            raise ArgumentOutOfRangeException(
                "digits", "Rounding digits must be between 0 and 15, inclusive."
            )
        _check_finite(a, "Round")
        if isinstance(a, float) and not math.isfinite(a):
            return a
        result = float(round_decimal(a, decimals, mode))
        if result == 0:
            return math.copysign(0.0, a)
        return result

    @staticmethod
    def Truncate(value: float) -> float:
        _check_finite(value, "Truncate")
        if isinstance(value, float) and not math.isfinite(value):
            return value
        if value >= 0:
            return float(math.floor(value))
        return float(math.ceil(value))

    @staticmethod
    def Log(a: float, newBase: float = math.e) -> float:
        if newBase == math.e:
            return _ln(a)
        if newBase == 1 or newBase <= 0 or math.isnan(newBase) or math.isinf(newBase):
            return math.nan
        return _ln(a) / _ln(newBase)

    @staticmethod
    def Log10(a: float) -> float:
        if a <= 0:
            return _ln(a)
        return math.log10(a)

    @staticmethod
    def Exp(a: float) -> float:
        try:
            return math.exp(a)
        except OverflowError:
            return math.inf

    @staticmethod
    def Pow(x: float, y: float) -> float:
        try:
            return math.pow(x, y)
        except OverflowError:
            return math.inf
        except ValueError:
            return math.nan

    @staticmethod
    def Sqrt(a: float) -> float:
        if a < 0 or math.isnan(a):
            return math.nan
        return math.sqrt(a)

    @staticmethod
    def Abs(value: int | float) -> int | float:
        if isinstance(value, int) and value == INT32_MIN:
            raise OverflowException("Negating the minimum value of a twos complement number is invalid.")
        return abs(value)

    @staticmethod
    def Sign(value: float) -> int:
        if isinstance(value, float) and math.isnan(value):
            raise ArgumentException("Function does not accept floating point Not-a-Number values.")
        return (value > 0) - (value < 0)

    @staticmethod
    def Floor(value: float) -> float:
        if isinstance(value, float) and not math.isfinite(value):
            return value
        return float(math.floor(value))

    @staticmethod
    def Ceiling(value: float) -> float:
        if isinstance(value, float) and not math.isfinite(value):
            return value
        return float(math.ceil(value))

    @staticmethod
    def Min(a: float, b: float) -> float:
        if isinstance(a, float) and math.isnan(a):
            return a
        return b if b < a else a

    @staticmethod
    def Max(a: float, b: float) -> float:
        if isinstance(a, float) and math.isnan(a):
            return a
        return b if b > a else a

    @staticmethod
    def Cosh(x: float) -> float:
        try:
            return math.cosh(x)
        except OverflowError:
            return math.inf

    @staticmethod
    def Sinh(x: float) -> float:
        try:
            return math.sinh(x)
        except OverflowError:
            return math.copysign(math.inf, x)

    @staticmethod
    def Tanh(x: float) -> float:
        return math.tanh(x)


def _ln(a: float) -> float:
    if math.isnan(a) or a < 0:
        return math.nan
    if a == 0:
        return -math.inf
    if math.isinf(a):
        return math.inf
    return math.log(a)


# ============================================================
# Convert
# ============================================================


class Convert(NObject):
    @staticmethod
    def ToString(num: int | float | bool, radixOrProvider: object = None) -> str:
        if isinstance(radixOrProvider, int) and not isinstance(radixOrProvider, bool):
            n = _require_integral(num) if not isinstance(num, bool) else int(num)
            if radixOrProvider == 10:
                return str(n)
            if radixOrProvider not in (2, 8, 16):
                raise ArgumentException("Invalid Base.", "toBase")
            if n < 0:
                n = to_int32(n) & 0xFFFFFFFF
            return format(n, {2: "b", 8: "o", 16: "x"}[radixOrProvider])
        if isinstance(num, bool):
            return NBoolean.ToString(num)
        return format_number(num, None, radixOrProvider)

    @staticmethod
    def ToInt32(value: object, fromBase: int | None = None) -> int:
        if isinstance(value, str):
            if fromBase is not None:
                try:
                    n = int(value.strip(), fromBase)
                except ValueError:
                    raise FormatException(
                        f"The input string '{value}' was not in a correct format."
                    ) from None
                if fromBase != 10 and 0x80000000 <= n <= 0xFFFFFFFF:
                    return to_int32(n)
            else:
                n = NNumber.Parse(value)
                if isinstance(n, float) and math.isinf(n):
                    raise OverflowException("Value was either too large or too small for an Int32.")
                if isinstance(n, float) and (math.isnan(n) or n != int(n)):
                    raise FormatException(
                        f"The input string '{value}' was not in a correct format."
                    )
            return _checked_int32(n)
        if value is None:
            return 0
        if isinstance(value, bool):
            return 1 if value else 0
        if isinstance(value, float):
            if not math.isfinite(value):
                raise OverflowException("Value was either too large or too small for an Int32.")
            value = int(round_decimal(value, 0, MidpointRounding.ToEven))
        return _checked_int32(value)  # type: ignore[arg-type]

    @staticmethod
    def ToDouble(value: object) -> float:
        if isinstance(value, str):
            return float(NNumber.Parse(value))
        if value is None:
            return 0.0
        return float(value)  # type: ignore[arg-type]

    @staticmethod
    def ToBoolean(value: object) -> bool:
        if isinstance(value, str):
            return NBoolean.Parse(value)
        return bool(value)


def _checked_int32(n: int | float) -> int:
    if n < INT32_MIN or n > INT32_MAX:
        raise OverflowException("Value was either too large or too small for an Int32.")
    return int(n)
