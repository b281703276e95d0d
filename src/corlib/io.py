"""Readers, writers, streams and the console."""

from __future__ import annotations

import logging
import struct
import sys

from .config import get_options
from .core import NObject, to_int32
from .enumeration import IDisposable
from .errors import (
    ArgumentException,
    ArgumentNullException,
    ArgumentOutOfRangeException,
    NotSupportedException,
    OverflowException,
    unported_member,
)
from .text import NString, StringBuilder

debug_logger = logging.getLogger("corlib.debug")


def _render(value: object, args: tuple[object, ...]) -> str:
    if args:
        return NString.Format(value, *args)
    return NObject.GenericToString(value)


# ============================================================
# Readers
# ============================================================


class TextReader(NObject, IDisposable):
    def ReadLine(self) -> str | None:
        raise NotSupportedException()

    def ReadToEnd(self) -> str:
        raise NotSupportedException()

    def Dispose(self) -> None:
        pass


class StringReader(TextReader):
    def __init__(self, s: str):
        if s is None:
            raise ArgumentNullException("s")
        self._s = s
        self._pos = 0

    def ReadLine(self) -> str | None:
        """Next line without its terminator (\\n, or \\r\\n); None at end."""
        p = self._pos
        if p >= len(self._s):
            return None
        end = self._s.find("\n", p)
        if end < 0:
            end = len(self._s)
        tend = end
        if tend > p and self._s[tend - 1] == "\r":
            tend -= 1
        self._pos = end + 1
        return self._s[p:tend]

    def ReadToEnd(self) -> str:
        rest = self._s[self._pos :]
        self._pos = len(self._s)
        return rest

    def Peek(self) -> int:
        if self._pos >= len(self._s):
            return -1
        return ord(self._s[self._pos])

    def Read(self) -> int:
        c = self.Peek()
        if c >= 0:
            self._pos += 1
        return c


# ============================================================
# Writers
# ============================================================


class TextWriter(NObject, IDisposable):
    """Write renders its arguments (composite format when given) and hands the text on."""

    def __init__(self) -> None:
        self._new_line: str | None = None

    @property
    def NewLine(self) -> str:
        if self._new_line is None:
            return get_options().new_line
        return self._new_line

    @NewLine.setter
    def NewLine(self, value: str | None) -> None:
        self._new_line = value

    def _write_text(self, text: str) -> None:
        raise NotSupportedException()

    def Write(self, value: object, *args: object) -> None:
        self._write_text(_render(value, args))

    def WriteLine(self, value: object = None, *args: object) -> None:
        self._write_text(_render(value, args) + self.NewLine)

    def Flush(self) -> None:
        pass

    def Dispose(self) -> None:
        self.Flush()


class StringWriter(TextWriter):
    def __init__(self, sb: StringBuilder | None = None):
        super().__init__()
        self._sb = sb if sb is not None else StringBuilder()

    def _write_text(self, text: str) -> None:
        self._sb.Append(text)

    def GetStringBuilder(self) -> StringBuilder:
        return self._sb

    def ToString(self) -> str:
        return self._sb.ToString()


class HostWriter(TextWriter):
    """Writer over a host text stream; a name is looked up on sys at each write."""

    def __init__(self, name: str = "stdout"):
        super().__init__()
        self._name = name

    def _stream(self):
        return getattr(sys, self._name)

    def _write_text(self, text: str) -> None:
        self._stream().write(text)

    def Flush(self) -> None:
        self._stream().flush()


class _ConsoleStreams(type):
    @property
    def Out(cls) -> TextWriter:
        return cls._out


class Console(NObject, metaclass=_ConsoleStreams):
    _out: TextWriter = HostWriter("stdout")

    @staticmethod
    def SetOut(writer: TextWriter) -> None:
        if writer is None:
            raise ArgumentNullException("newOut")
        Console._out = writer

    @staticmethod
    def Write(value: object, *args: object) -> None:
        Console._out.Write(value, *args)

    @staticmethod
    def WriteLine(value: object = None, *args: object) -> None:
        Console._out.WriteLine(value, *args)


class Debug(NObject):
    @staticmethod
    def WriteLine(value: object, *args: object) -> None:
        debug_logger.debug("%s", _render(value, args))


# ============================================================
# Streams
# ============================================================


class Stream(NObject, IDisposable):
    def Write(self, buffer: bytes | list[int], offset: int = 0, count: int | None = None) -> None:
        raise NotSupportedException()

    def WriteByte(self, value: int) -> None:
        self.Write(bytes([value]))

    def Flush(self) -> None:
        pass

    def Dispose(self) -> None:
        self.Flush()


class MemoryStream(Stream):
    """Growable in-memory byte buffer with a write position."""

    def __init__(self, initial: bytes | list[int] | None = None):
        self._buffer = bytearray(initial or b"")
        self._position = 0

    @property
    def Length(self) -> int:
        return len(self._buffer)

    @property
    def Position(self) -> int:
        return self._position

    @Position.setter
    def Position(self, value: int) -> None:
        if value < 0:
            raise ArgumentOutOfRangeException("value", "Non-negative number required.")
        self._position = value

    def Write(self, buffer: bytes | list[int], offset: int = 0, count: int | None = None) -> None:
        if buffer is None:
            raise ArgumentNullException("buffer")
        if count is None:
            count = len(buffer) - offset
        if offset < 0 or count < 0 or offset + count > len(buffer):
            raise ArgumentException(
                "Offset and length were out of bounds for the array or count is greater "
                "than the number of elements from index to the end of the source collection."
            )
        try:
            data = bytes(buffer[offset : offset + count])
        except ValueError as e:
            raise ArgumentOutOfRangeException("buffer", "Byte values must be in 0..255.") from e
        end = self._position + len(data)
        if self._position > len(self._buffer):
            self._buffer.extend(b"\0" * (self._position - len(self._buffer)))
        self._buffer[self._position : end] = data
        self._position = end

    def ToArray(self) -> list[int]:
        return list(self._buffer)


class BinaryWriter(NObject, IDisposable):
    """Little-endian primitive writer over a Stream.

    int -> 4-byte int32, float -> 8-byte double, bool -> 1 byte,
    str -> 7-bit-encoded length prefix plus UTF-8, bytes/list -> raw bytes.
    """

    def __init__(self, output: Stream, encoding: object = None):
        if output is None:
            raise ArgumentNullException("output")
        self.BaseStream = output

    def Write(self, value: object) -> None:
        if isinstance(value, bool):
            data = b"\1" if value else b"\0"
        elif isinstance(value, int):
            if to_int32(value) != value:
                raise OverflowException("Value was either too large or too small for an Int32.")
            data = struct.pack("<i", value)
        elif isinstance(value, float):
            data = struct.pack("<d", value)
        elif isinstance(value, str):
            encoded = value.encode("utf-8")
            data = _seven_bit(len(encoded)) + encoded
        elif isinstance(value, (bytes, bytearray, list)):
            data = bytes(value)
        else:
            raise ArgumentException(f"Cannot write a value of type {type(value).__name__}.", "value")
        self.BaseStream.Write(data)

    def WriteByte(self, value: int) -> None:
        self.BaseStream.WriteByte(value)

    def Flush(self) -> None:
        self.BaseStream.Flush()

    def Dispose(self) -> None:
        self.Flush()


def _seven_bit(n: int) -> bytes:
    out = bytearray()
    while n >= 0x80:
        out.append((n & 0x7F) | 0x80)
        n >>= 7
    out.append(n)
    return bytes(out)


class StreamWriter(TextWriter):
    """TextWriter encoding UTF-8 onto a Stream. There is no file system surface."""

    def __init__(self, stream: Stream | str, encoding: object = None):
        super().__init__()
        if isinstance(stream, str):
            raise NotSupportedException("StreamWriter over a file path is not supported.")
        if stream is None:
            raise ArgumentNullException("stream")
        self.BaseStream = stream

    def _write_text(self, text: str) -> None:
        self.BaseStream.Write(text.encode("utf-8"))

    def Flush(self) -> None:
        self.BaseStream.Flush()


class WebClient(NObject):
    @unported_member
    def DownloadString(self, address: str) -> str: ...
