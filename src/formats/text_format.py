"""Plain text format handler."""

from typing import Any

from .base import FormatHandler
from .json_format import dumps
from .values import Value, VBool, VScalar


def render_text(value: Value) -> str:
    """Render a value as plain text.

    Scalars render as their raw text; containers and null render as
    pretty-printed JSON.
    """
    if isinstance(value, (VScalar, VBool)):
        return str(value)
    return dumps(value)


class TextFormat(FormatHandler):
    """Plain text files.

    Parsing wraps the whole document in a single scalar, so any text
    extension without a dedicated parser can still be converted.
    """

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["txt"]

    def parse(self, text: str) -> Value:
        """Wrap text content as a scalar."""
        return VScalar(text)

    def serialize(self, value: Value, metadata: dict[str, Any]) -> str:
        """Render the value as plain text."""
        return render_text(value)
