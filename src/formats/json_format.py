"""JSON format handler."""

import json
import re
from typing import Any, Optional

from .base import FormatHandler
from .errors import ParseError
from .values import Value, VBool, VMapping, VNull, VScalar, VSequence

# Any surrogate left in a decoded str is unpaired
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _quote(text: str) -> str:
    """Quote a JSON string, escaping lone surrogates as \\uXXXX."""
    return _LONE_SURROGATE.sub(
        lambda match: f"\\u{ord(match.group()):04x}", json.dumps(text, ensure_ascii=False)
    )


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Invalid JSON: {name} is not a valid JSON value")


def _lift(obj: Any) -> Value:
    # Numbers already arrive as numeric VScalar via parse_int/parse_float.
    if isinstance(obj, (VScalar, VMapping)):
        return obj
    if obj is None:
        return VNull()
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, str):
        return VScalar(obj)
    if isinstance(obj, list):
        return VSequence([_lift(item) for item in obj])
    raise ParseError(f"Unexpected JSON value: {obj!r}")


def _build_object(pairs: list[tuple[str, Any]]) -> VMapping:
    mapping = VMapping()
    for key, value in pairs:
        mapping.set(key, _lift(value))
    return mapping


def loads(text: str) -> Value:
    """Parse JSON text into a value tree, keeping number literals verbatim.

    Raises:
        ParseError: If the text is not valid JSON
    """
    try:
        raw = json.loads(
            text,
            object_pairs_hook=_build_object,
            parse_int=lambda literal: VScalar(literal, numeric=True),
            parse_float=lambda literal: VScalar(literal, numeric=True),
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    return _lift(raw)


def dumps(value: Value, indent: Optional[int] = 2) -> str:
    """Render a value tree as JSON.

    Args:
        value: Root of the value tree
        indent: Spaces per nesting level, or None for compact output

    Returns:
        JSON text
    """
    return _render(value, indent, 0)


def render_inline(value: Value) -> str:
    """Render a value on one line: leaves as text, containers as compact JSON."""
    if isinstance(value, (VNull, VBool, VScalar)):
        return str(value)
    return dumps(value, indent=None)


def _render(value: Value, indent: Optional[int], depth: int) -> str:
    if isinstance(value, VNull):
        return "null"
    if isinstance(value, VBool):
        return str(value)
    if isinstance(value, VScalar):
        if value.numeric:
            return value.text
        return _quote(value.text)

    if isinstance(value, VSequence):
        parts = [_render(item, indent, depth + 1) for item in value.items]
        open_, close = "[", "]"
    else:
        parts = [
            f"{_quote(key)}:"
            f"{'' if indent is None else ' '}"
            f"{_render(item, indent, depth + 1)}"
            for key, item in value.entries.items()
        ]
        open_, close = "{", "}"

    if not parts:
        return open_ + close
    if indent is None:
        return open_ + ",".join(parts) + close

    inner = " " * (indent * (depth + 1))
    outer = " " * (indent * depth)
    return open_ + "\n" + ",\n".join(inner + p for p in parts) + "\n" + outer + close


class JSONFormat(FormatHandler):
    """Parse and pretty-print JSON documents."""

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["json"]

    def parse(self, text: str) -> Value:
        """Parse strict JSON.

        Args:
            text: JSON source text

        Returns:
            Parsed value tree

        Raises:
            ParseError: If the JSON is malformed
        """
        return loads(text)

    def serialize(self, value: Value, metadata: dict[str, Any]) -> str:
        """Pretty-print with 2-space indentation.

        Bare scalars (for example plain text sources) are wrapped as
        ``{"content": ...}`` so the output is always a JSON document.
        """
        if isinstance(value, (VScalar, VBool)):
            wrapper = VMapping()
            wrapper.set("content", value)
            value = wrapper
        return dumps(value)
