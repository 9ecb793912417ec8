"""Conversion orchestration package.

This package wires the format registry and media codecs into a single
conversion pipeline, with a session object holding the current input and
output.
"""

from .config import ConverterConfig, load_env_file
from .engine import ConversionEngine
from .fetcher import SourceFetcher
from .models import ConversionResult, SourceDocument, output_filename
from .session import ConversionSession

__all__ = [
    "ConverterConfig",
    "load_env_file",
    "ConversionEngine",
    "SourceFetcher",
    "ConversionResult",
    "SourceDocument",
    "output_filename",
    "ConversionSession",
]
