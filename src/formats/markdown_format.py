"""Markdown format handler."""

from typing import Any

from .base import FormatHandler
from .json_format import render_inline
from .values import Value, VMapping, VSequence


class MarkdownFormat(FormatHandler):
    """Present a value tree as a Markdown document.

    Markdown is output only; Markdown sources are read as plain text.
    """

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["md"]

    def serialize(self, value: Value, metadata: dict[str, Any]) -> str:
        """Render the value under a level-1 heading named after the source file.

        Args:
            value: Root of the value tree
            metadata: Conversion metadata; ``filename`` is used as the title

        Returns:
            Markdown text
        """
        markdown = f"# {metadata.get('filename', '')}\n\n"

        if isinstance(value, VSequence):
            for index, item in enumerate(value.items):
                markdown += f"## Item {index + 1}\n\n"
                if isinstance(item, VMapping):
                    markdown += self._labelled_lines(item)
                else:
                    markdown += f"{render_inline(item)}\n\n"
        elif isinstance(value, VMapping):
            for key, item in value.items():
                markdown += f"## {key}\n\n"
                if isinstance(item, VSequence):
                    for element in item.items:
                        markdown += f"- {render_inline(element)}\n"
                    markdown += "\n"
                elif isinstance(item, VMapping):
                    markdown += self._labelled_lines(item)
                else:
                    markdown += f"{item}\n\n"
        else:
            markdown += str(value)

        return markdown

    @staticmethod
    def _labelled_lines(mapping: VMapping) -> str:
        return "".join(
            f"**{key}**: {render_inline(item)}\n\n" for key, item in mapping.items()
        )
