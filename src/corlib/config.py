"""Runtime options, read once from the process environment."""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from typing import Mapping

from .errors import ArgumentException

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("", "0", "false", "no", "off")

NEWLINES: dict[str, str] = {"lf": "\n", "crlf": "\r\n"}


@dataclass(frozen=True)
class RuntimeOptions:
    """Process-wide knobs.

    new_line:        Environment.NewLine and every WriteLine/AppendLine
    strict_math:     Round/Truncate reject NaN and infinities instead of passing them through
    trace_unported:  log a warning whenever an unported member is called
    """

    new_line: str = "\n"
    strict_math: bool = False
    trace_unported: bool = False

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> RuntimeOptions:
        new_line = "\n"
        raw = env.get("CORLIB_NEWLINE")
        if raw is not None:
            key = raw.strip().lower()
            if key not in NEWLINES:
                raise ArgumentException(
                    "CORLIB_NEWLINE must be 'lf' or 'crlf', got " + repr(raw),
                    "CORLIB_NEWLINE",
                )
            new_line = NEWLINES[key]
        return cls(
            new_line=new_line,
            strict_math=_flag(env, "CORLIB_STRICT_MATH"),
            trace_unported=_flag(env, "CORLIB_TRACE_UNPORTED"),
        )


def _flag(env: Mapping[str, str], name: str) -> bool:
    raw = env.get(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ArgumentException(f"{name} must be a boolean flag, got {raw!r}", name)


_options: RuntimeOptions | None = None


def get_options() -> RuntimeOptions:
    global _options
    if _options is None:
        _options = RuntimeOptions.from_env(os.environ)
    return _options


def configure(**changes: object) -> RuntimeOptions:
    """Replace selected options for the rest of the process."""
    global _options
    _options = replace(get_options(), **changes)  # type: ignore[arg-type]
    return _options


def reset_options() -> None:
    """Forget the current options; the next read goes back to the environment."""
    global _options
    _options = None
