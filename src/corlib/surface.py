"""API-surface registry: which origin types and members this runtime provides.

Members are discovered by introspection of the exported classes. Only
PascalCase names count; Python-side helpers are lowercase or underscored.
Class-level properties (DateTime.Now, Console.Out, ...) live on metaclasses
and are included.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum
import importlib
import inspect
import re
from types import ModuleType

from .errors import is_unported

_PASCAL = re.compile(r"[A-Z][A-Za-z0-9_]*")

# Origin spellings of types whose names collide with the host.
ALIASES: dict[str, str] = {
    "Object": "NObject",
    "String": "NString",
    "Char": "NChar",
    "Math": "NMath",
    "Array": "NArray",
    "Boolean": "NBoolean",
    "Double": "NNumber",
    "Single": "NNumber",
    "Int32": "NNumber",
    "Int64": "NNumber",
    "Exception": "NException",
    "NConsole": "Console",
}

CONSTRUCTOR = ".ctor"


@dataclass(frozen=True)
class Member:
    type_name: str
    name: str
    kind: str
    unported: bool

    @property
    def reference(self) -> str:
        return f"{self.type_name}.{self.name}"

    @property
    def status(self) -> str:
        return "unported" if self.unported else "ok"


def exported_types(module: ModuleType | None = None) -> dict[str, type]:
    if module is None:
        module = importlib.import_module("corlib")
    types: dict[str, type] = {}
    for name in module.__all__:
        obj = getattr(module, name)
        if inspect.isclass(obj):
            types[name] = obj
    return types


def _kind(attr: object) -> str:
    if isinstance(attr, property):
        return "property"
    if isinstance(attr, (staticmethod, classmethod)) or inspect.isfunction(attr):
        return "method"
    return "field"


def members_of(cls: type) -> list[Member]:
    found: dict[str, Member] = {}
    meta = type(cls)
    if meta is not type and not issubclass(meta, enum.EnumMeta):
        for name, attr in vars(meta).items():
            if _PASCAL.fullmatch(name) and isinstance(attr, property):
                found[name] = Member(cls.__name__, name, "property", is_unported(attr))
    if isinstance(cls, enum.EnumMeta):
        for name in cls.__members__:
            found[name] = Member(cls.__name__, name, "field", False)
        return sorted(found.values(), key=lambda m: m.name)
    for name in dir(cls):
        if name in found or not _PASCAL.fullmatch(name):
            continue
        attr = inspect.getattr_static(cls, name)
        found[name] = Member(cls.__name__, name, _kind(attr), is_unported(attr))
    return sorted(found.values(), key=lambda m: m.name)


def surface(module: ModuleType | None = None) -> list[Member]:
    """Every exported member, ordered by type then member name."""
    out: list[Member] = []
    for name, cls in sorted(exported_types(module).items()):
        out.extend(members_of(cls))
    return out


def split_reference(reference: str) -> tuple[str, str]:
    """'System.Collections.Generic.List`1.Add' -> ('List', 'Add')."""
    ref = reference.strip()
    if ref.endswith("." + CONSTRUCTOR):
        owner, member = ref[: -len(CONSTRUCTOR) - 1], CONSTRUCTOR
    else:
        owner, _, member = ref.rpartition(".")
    type_name = owner.rpartition(".")[2]
    type_name = type_name.split("`", 1)[0]
    member = member.split("`", 1)[0]
    return ALIASES.get(type_name, type_name), member


def check_reference(reference: str, module: ModuleType | None = None) -> str:
    """Status of a Type.Member reference: ok, unported or missing."""
    type_name, member = split_reference(reference)
    cls = exported_types(module).get(type_name)
    if cls is None or not member:
        return "missing"
    if member == CONSTRUCTOR:
        return "ok"
    for m in members_of(cls):
        if m.name == member:
            return m.status
    return "missing"
