"""YAML format handler.

Only a flat, line-oriented subset of YAML is understood: ``key: value``
pairs and ``- item`` lists under a key declared with an empty value or
``[]``. Indentation is ignored, nested mappings are not parsed, and quoted
scalars are kept verbatim.
"""

import logging
from typing import Any, Optional

from .base import FormatHandler
from .json_format import render_inline
from .values import Value, VMapping, VScalar, VSequence

logger = logging.getLogger(__name__)


class YAMLFormat(FormatHandler):
    """Convert between the flat YAML subset and value trees."""

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["yaml", "yml"]

    def parse(self, text: str) -> Value:
        """Parse the flat YAML subset into a mapping.

        Args:
            text: YAML source text

        Returns:
            VMapping of scalars and lists
        """
        result = VMapping()
        current_array: Optional[VSequence] = None

        for raw_line in text.strip().split("\n"):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            if line.startswith("- "):
                if current_array is not None:
                    current_array.append(VScalar(line[2:].strip()))
                else:
                    logger.debug(f"Dropping list item outside a list: {line!r}")
            elif ":" in line:
                key, _, value = line.partition(":")
                key = key.strip()
                value = value.strip()
                if value in ("", "[]"):
                    current_array = VSequence()
                    result.set(key, current_array)
                else:
                    result.set(key, VScalar(value))
                    current_array = None

        return result

    def serialize(self, value: Value, metadata: dict[str, Any]) -> str:
        """Serialize a mapping one level deep.

        Lists become ``- item`` lines and nested mappings become indented
        ``subkey: subvalue`` lines. A top-level sequence is written keyed
        by item index.
        """
        if isinstance(value, VSequence):
            entries = [(str(index), item) for index, item in enumerate(value.items)]
        elif isinstance(value, VMapping):
            entries = value.items()
        else:
            return f"content: {value}"

        yaml = ""
        for key, item in entries:
            if isinstance(item, VSequence):
                yaml += f"{key}:\n"
                for element in item.items:
                    yaml += f"  - {render_inline(element)}\n"
            elif isinstance(item, VMapping):
                yaml += f"{key}:\n"
                for sub_key, sub_value in item.items():
                    yaml += f"  {sub_key}: {render_inline(sub_value)}\n"
            else:
                yaml += f"{key}: {item}\n"
        return yaml
