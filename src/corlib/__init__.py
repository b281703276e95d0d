"""Compatibility runtime for programs translated from the origin object runtime."""

from .collections import (
    Dictionary,
    DictionaryEnumerator,
    HashSet,
    HashSetEnumerator,
    KeyCollection,
    List,
    ListEnumerator,
    NArray,
    Stack,
    ValueCollection,
)
from .concurrency import Interlocked, Monitor, Thread, ThreadPool
from .config import RuntimeOptions, configure, get_options, reset_options
from .core import KeyValuePair, NObject, Nullable, Type
from .dates import DateTime, DateTimeKind, DayOfWeek, TimeSpan
from .enumeration import (
    ArrayEnumerable,
    ArrayEnumerator,
    CursorState,
    IDisposable,
    IEnumerable,
    IEnumerator,
    iterate,
)
from .environment import (
    Encoding,
    Environment,
    EventArgs,
    EventHandler,
    INotifyPropertyChanged,
    NEvent,
    PropertyChangedEventArgs,
)
from .errors import (
    ArgumentException,
    ArgumentNullException,
    ArgumentOutOfRangeException,
    FormatException,
    InvalidOperationException,
    KeyNotFoundException,
    NException,
    NotImplementedException,
    NotSupportedException,
    OverflowException,
)
from .io import (
    BinaryWriter,
    Console,
    Debug,
    MemoryStream,
    Stream,
    StreamWriter,
    StringReader,
    StringWriter,
    TextReader,
    TextWriter,
    WebClient,
)
from .linq import Enumerable
from .numeric import (
    Convert,
    CultureInfo,
    IFormatProvider,
    MidpointRounding,
    NBoolean,
    NMath,
    NNumber,
    NumberFormatInfo,
    NumberStyles,
)
from .regex import Group, GroupCollection, Match, Regex, RegexOptions
from .text import NChar, NString, StringBuilder, StringComparison

__version__ = "0.1.0"

__all__ = [
    "ArgumentException",
    "ArgumentNullException",
    "ArgumentOutOfRangeException",
    "ArrayEnumerable",
    "ArrayEnumerator",
    "BinaryWriter",
    "Console",
    "Convert",
    "CultureInfo",
    "CursorState",
    "DateTime",
    "DateTimeKind",
    "DayOfWeek",
    "Debug",
    "Dictionary",
    "DictionaryEnumerator",
    "Encoding",
    "Enumerable",
    "Environment",
    "EventArgs",
    "EventHandler",
    "FormatException",
    "Group",
    "GroupCollection",
    "HashSet",
    "HashSetEnumerator",
    "IDisposable",
    "IEnumerable",
    "IEnumerator",
    "IFormatProvider",
    "INotifyPropertyChanged",
    "Interlocked",
    "InvalidOperationException",
    "KeyCollection",
    "KeyNotFoundException",
    "KeyValuePair",
    "List",
    "ListEnumerator",
    "Match",
    "MemoryStream",
    "MidpointRounding",
    "Monitor",
    "NArray",
    "NBoolean",
    "NChar",
    "NEvent",
    "NException",
    "NMath",
    "NNumber",
    "NObject",
    "NString",
    "NotImplementedException",
    "NotSupportedException",
    "NumberFormatInfo",
    "NumberStyles",
    "Nullable",
    "OverflowException",
    "PropertyChangedEventArgs",
    "Regex",
    "RegexOptions",
    "RuntimeOptions",
    "Stack",
    "Stream",
    "StreamWriter",
    "StringBuilder",
    "StringComparison",
    "StringReader",
    "StringWriter",
    "TextReader",
    "TextWriter",
    "Thread",
    "ThreadPool",
    "TimeSpan",
    "Type",
    "ValueCollection",
    "WebClient",
    "configure",
    "get_options",
    "iterate",
    "reset_options",
]
