"""CSV format handler.

The parser is deliberately naive: rows are split on every comma, so quoted
fields and embedded commas are not supported. The serializer quotes values
containing a comma but does not escape embedded quotes.
"""

import logging
from typing import Any, Optional

from .base import FormatHandler
from .json_format import dumps, render_inline
from .values import Value, VMapping, VNull, VScalar, VSequence

logger = logging.getLogger(__name__)


def _split_row(line: str) -> list[str]:
    return [field.strip() for field in line.split(",")]


class CSVFormat(FormatHandler):
    """Convert between CSV text and a sequence of row mappings."""

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["csv"]

    def parse(self, text: str) -> Value:
        """Parse CSV into a sequence of mappings keyed by the header row.

        The first non-empty line is the header. Short rows are padded with
        empty strings and extra fields are dropped.

        Args:
            text: CSV source text

        Returns:
            VSequence of VMapping rows
        """
        lines = [line for line in text.split("\n") if line.strip()]
        rows = VSequence()
        if not lines:
            return rows

        headers = _split_row(lines[0])
        for line in lines[1:]:
            values = _split_row(line)
            row = VMapping()
            for index, header in enumerate(headers):
                row.set(header, VScalar(values[index] if index < len(values) else ""))
            rows.append(row)

        logger.debug(f"Parsed {len(rows)} CSV rows with headers {headers}")
        return rows

    def serialize(self, value: Value, metadata: dict[str, Any]) -> str:
        """Serialize a sequence of mappings as CSV.

        Header order comes from the first row's keys. Anything that is not
        a non-empty sequence of mappings falls back to a textual rendering.
        """
        if not (
            isinstance(value, VSequence)
            and value.items
            and isinstance(value.items[0], VMapping)
        ):
            if isinstance(value, VScalar):
                return value.text
            return dumps(value, indent=None)

        headers = value.items[0].keys()
        lines = [",".join(headers)]
        for item in value.items:
            cells = []
            for header in headers:
                cell = item.get(header) if isinstance(item, VMapping) else None
                cells.append(self._format_cell(cell))
            lines.append(",".join(cells))
        return "\n".join(lines)

    @staticmethod
    def _format_cell(cell: Optional[Value]) -> str:
        if cell is None or isinstance(cell, VNull):
            return ""
        text = render_inline(cell)
        if "," in text:
            return f'"{text}"'
        return text
