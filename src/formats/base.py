"""Base class for format handlers."""

from abc import ABC, abstractmethod
from typing import Any

from .values import Value


class FormatHandler(ABC):
    """Abstract base class for format handlers.

    A handler owns one structured text format and exposes up to two
    capabilities: parsing text into a value tree and serializing a value
    tree back into text. Handlers that only present data (Markdown, HTML)
    leave parsing unsupported.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Return list of supported file extensions.

        Returns:
            List of file extensions without dots (e.g., ['yaml', 'yml'])
        """
        pass

    @property
    def can_parse(self) -> bool:
        """Return True if this handler implements parse()."""
        return type(self).parse is not FormatHandler.parse

    @property
    def can_serialize(self) -> bool:
        """Return True if this handler implements serialize()."""
        return type(self).serialize is not FormatHandler.serialize

    def parse(self, text: str) -> Value:
        """Parse source text into a value tree.

        Args:
            text: Decoded source content

        Returns:
            Root of the parsed value tree

        Raises:
            ParseError: If the content is malformed
        """
        raise NotImplementedError(f"{self.name} does not support parsing")

    def serialize(self, value: Value, metadata: dict[str, Any]) -> str:
        """Serialize a value tree into text.

        Args:
            value: Root of the value tree
            metadata: Conversion metadata (``filename`` is the source name)

        Returns:
            Serialized text
        """
        raise NotImplementedError(f"{self.name} does not support serialization")

    @property
    def requires_dependencies(self) -> list[str]:
        """Return list of required Python packages.

        Returns:
            List of package names required for this handler
        """
        return []

    def is_available(self) -> bool:
        """Check if handler dependencies are available.

        Returns:
            True if all required dependencies are installed
        """
        for dep in self.requires_dependencies:
            try:
                __import__(dep)
            except ImportError:
                return False
        return True

    @property
    def name(self) -> str:
        """Return handler name.

        Returns:
            Human-readable handler name
        """
        return self.__class__.__name__.replace("Format", "")
