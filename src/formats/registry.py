"""Format registry for managing parsers and serializers."""

import logging
from typing import Optional

from .base import FormatHandler
from .detector import FormatDetector
from .errors import UnsupportedFormatError

logger = logging.getLogger(__name__)


class FormatRegistry:
    """Registry for format handlers.

    Maps each file extension to the handler that owns it. Parsing falls
    back to the ``text`` handler for extensions without a parser of their
    own; serializing never falls back.
    """

    FALLBACK = "text"

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._handlers: dict[str, FormatHandler] = {}
        self._extension_map: dict[str, str] = {}

    def register(self, name: str, handler: FormatHandler) -> None:
        """Register a format handler.

        Args:
            name: Unique name for the handler
            handler: FormatHandler instance to register
        """
        if not handler.is_available():
            logger.warning(
                f"Format '{name}' dependencies not available, skipping registration"
            )
            return

        self._handlers[name] = handler

        for ext in handler.supported_extensions:
            self._extension_map[ext.lower()] = name

        logger.debug(f"Registered format '{name}' for {handler.supported_extensions}")

    def get_handler(self, extension: str) -> Optional[FormatHandler]:
        """Get the handler registered for an extension.

        Args:
            extension: File extension (with or without leading dot)

        Returns:
            FormatHandler instance or None if the extension is unknown
        """
        name = self._extension_map.get(FormatDetector.normalize(extension))
        if name:
            return self._handlers.get(name)
        return None

    def get_parser(self, extension: str) -> FormatHandler:
        """Get the handler used to parse a source extension.

        Args:
            extension: Source file extension

        Returns:
            Handler with parsing support, or the plain text handler

        Raises:
            UnsupportedFormatError: If no fallback handler is registered
        """
        handler = self.get_handler(extension)
        if handler is not None and handler.can_parse:
            return handler

        fallback = self._handlers.get(self.FALLBACK)
        if fallback is None:
            raise UnsupportedFormatError(f"No parser available for '{extension}'")
        logger.debug(f"No parser for '{extension}', reading it as plain text")
        return fallback

    def get_serializer(self, extension: str) -> FormatHandler:
        """Get the handler used to serialize to a target extension.

        Args:
            extension: Target format extension

        Returns:
            Handler with serialization support

        Raises:
            UnsupportedFormatError: If no serializer is registered
        """
        handler = self.get_handler(extension)
        if handler is None or not handler.can_serialize:
            raise UnsupportedFormatError(
                f"Unsupported output format: '{FormatDetector.normalize(extension)}'"
            )
        return handler

    def has_serializer(self, extension: str) -> bool:
        """Return True if the extension can be used as a conversion target."""
        handler = self.get_handler(extension)
        return handler is not None and handler.can_serialize

    def list_formats(self) -> list[str]:
        """List all registered handler names.

        Returns:
            List of handler names
        """
        return list(self._handlers.keys())

    def get_supported_extensions(self) -> list[str]:
        """Get all supported file extensions.

        Returns:
            List of supported extensions
        """
        return list(self._extension_map.keys())


# Global registry instance
_global_registry: Optional[FormatRegistry] = None


def get_format_registry() -> FormatRegistry:
    """Get the global format registry instance.

    Returns:
        Global FormatRegistry instance
    """
    global _global_registry
    if _global_registry is None:
        _global_registry = FormatRegistry()
        register_default_formats(_global_registry)
    return _global_registry


def register_default_formats(registry: FormatRegistry) -> None:
    """Register the built-in format handlers.

    Args:
        registry: FormatRegistry to register handlers with
    """
    # Imported here to avoid circular imports with the handler modules
    from .csv_format import CSVFormat
    from .html_format import HTMLFormat
    from .json_format import JSONFormat
    from .markdown_format import MarkdownFormat
    from .text_format import TextFormat
    from .xml_format import XMLFormat
    from .yaml_format import YAMLFormat

    registry.register("text", TextFormat())
    registry.register("json", JSONFormat())
    registry.register("csv", CSVFormat())
    registry.register("xml", XMLFormat())
    registry.register("yaml", YAMLFormat())
    registry.register("markdown", MarkdownFormat())
    registry.register("html", HTMLFormat())
