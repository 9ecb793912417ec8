"""Exceptions raised by the conversion engine."""


class ConversionError(Exception):
    """Base exception for conversion operations."""


class UnsupportedFormatError(ConversionError):
    """No parser or serializer is registered for the requested format pair."""


class ParseError(ConversionError, ValueError):
    """Source content could not be parsed into a value tree."""


class SourceReadError(ConversionError, OSError):
    """Source content could not be read."""


class EncodeError(ConversionError):
    """An image or audio codec failed to decode or encode content."""
