"""Structured text format package.

This package provides the canonical value tree and pluggable parsers and
serializers for CSV, JSON, XML, YAML, Markdown, HTML and plain text.
"""

from .base import FormatHandler
from .detector import FormatDetector, format_file_size
from .errors import (
    ConversionError,
    EncodeError,
    ParseError,
    SourceReadError,
    UnsupportedFormatError,
)
from .registry import FormatRegistry, get_format_registry
from .values import Value, VBool, VMapping, VNull, VScalar, VSequence

__all__ = [
    "FormatHandler",
    "FormatDetector",
    "format_file_size",
    "FormatRegistry",
    "get_format_registry",
    "ConversionError",
    "EncodeError",
    "ParseError",
    "SourceReadError",
    "UnsupportedFormatError",
    "Value",
    "VBool",
    "VMapping",
    "VNull",
    "VScalar",
    "VSequence",
]
