"""HTML format handler."""

from typing import Any

from .base import FormatHandler
from .text_format import render_text
from .values import Value

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            font-family: Arial, sans-serif;
            max-width: 800px;
            margin: 40px auto;
            padding: 20px;
            line-height: 1.6;
        }}
        pre {{
            background: #f4f4f4;
            padding: 15px;
            border-radius: 5px;
            overflow-x: auto;
        }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <pre>{content}</pre>
</body>
</html>"""


def escape_html(text: str) -> str:
    """Escape the five HTML special characters."""
    return text.translate(_ESCAPES)


class HTMLFormat(FormatHandler):
    """Present a value tree as a standalone HTML page.

    HTML is output only; HTML sources are read as plain text.
    """

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["html"]

    def serialize(self, value: Value, metadata: dict[str, Any]) -> str:
        """Wrap the plain text rendering in a fixed page template.

        Args:
            value: Root of the value tree
            metadata: Conversion metadata; ``filename`` is used as the title

        Returns:
            HTML document text
        """
        title = escape_html(metadata.get("filename", ""))
        return HTML_TEMPLATE.format(title=title, content=escape_html(render_text(value)))
