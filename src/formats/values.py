"""Canonical value tree shared by every parser and serializer.

Leaves are kept as text so that numbers survive a conversion without being
reformatted. Mappings keep insertion order, which drives serialization order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "#text"
RESERVED_KEYS = (ATTRIBUTES_KEY, TEXT_KEY)


@dataclass
class VNull:
    def __str__(self) -> str:
        return "null"


@dataclass
class VBool:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class VScalar:
    text: str
    # Set by the JSON parser for number literals; only affects JSON rendering.
    numeric: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        return self.text


@dataclass
class VSequence:
    items: list["Value"] = field(default_factory=list)

    def append(self, item: "Value") -> None:
        self.items.append(item)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass(eq=False)
class VMapping:
    """Ordered, duplicate-free string-keyed node.

    Re-inserting a key replaces its value in place without moving it.
    """

    entries: dict[str, "Value"] = field(default_factory=dict)

    def set(self, key: str, value: "Value") -> None:
        self.entries[key] = value

    def get(self, key: str, default: "Value | None" = None) -> "Value | None":
        return self.entries.get(key, default)

    def keys(self) -> list[str]:
        return list(self.entries.keys())

    def items(self) -> list[tuple[str, "Value"]]:
        return list(self.entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VMapping):
            return NotImplemented
        return list(self.entries.items()) == list(other.entries.items())


Value = Union[VNull, VBool, VScalar, VSequence, VMapping]


def from_native(obj: Any) -> Value:
    """Lift plain Python data into a value tree.

    Args:
        obj: None, bool, int, float, str, list/tuple or dict

    Returns:
        Equivalent Value; ints and floats become numeric scalars

    Raises:
        TypeError: If obj contains an unsupported type
    """
    if obj is None:
        return VNull()
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, (int, float)):
        return VScalar(repr(obj), numeric=True)
    if isinstance(obj, str):
        return VScalar(obj)
    if isinstance(obj, (list, tuple)):
        return VSequence([from_native(item) for item in obj])
    if isinstance(obj, dict):
        mapping = VMapping()
        for key, value in obj.items():
            mapping.set(str(key), from_native(value))
        return mapping
    raise TypeError(f"Cannot convert {type(obj).__name__} to a value")


def to_native(value: Value) -> Any:
    """Lower a value tree into plain Python data (scalars stay strings)."""
    if isinstance(value, VNull):
        return None
    if isinstance(value, VBool):
        return value.value
    if isinstance(value, VScalar):
        return value.text
    if isinstance(value, VSequence):
        return [to_native(item) for item in value.items]
    return {key: to_native(item) for key, item in value.entries.items()}


def equivalent(a: Value, b: Value) -> bool:
    """Compare two trees, ignoring where the reserved XML keys sit in a mapping."""
    if isinstance(a, VMapping) and isinstance(b, VMapping):
        if set(a.entries) != set(b.entries):
            return False
        ordinary_a = [k for k in a.entries if k not in RESERVED_KEYS]
        ordinary_b = [k for k in b.entries if k not in RESERVED_KEYS]
        if ordinary_a != ordinary_b:
            return False
        return all(equivalent(a.entries[k], b.entries[k]) for k in a.entries)
    if isinstance(a, VSequence) and isinstance(b, VSequence):
        return len(a.items) == len(b.items) and all(
            equivalent(x, y) for x, y in zip(a.items, b.items)
        )
    return a == b
