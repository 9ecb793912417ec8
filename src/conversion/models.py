# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Data passed between conversion stages."""

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Optional

from src.formats.detector import FormatDetector, format_file_size
from src.formats.values import Value


@dataclass(frozen=True)
class SourceDocument:
    """A named blob of source content."""

    filename: str
    content: bytes
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def extension(self) -> str:
        return FormatDetector.extension(self.filename)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def size_label(self) -> str:
        return format_file_size(self.size)

    def text(self) -> str:
        """Decode the content as UTF-8, dropping a BOM and replacing bad bytes."""
        return self.content.decode("utf-8-sig", errors="replace")


@dataclass(frozen=True)
class ConversionResult:
    """Output of a successful conversion."""

    data: bytes
    mime_type: str
    target_format: str
    filename: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ConversionContext:
    """State threaded through the text pipeline.

    Each stage returns a new context rather than mutating the previous one.
    """

    source: SourceDocument
    target_format: str
    value: Optional[Value] = None
    text: Optional[str] = None


def output_filename(source_name: str, target_format: str) -> str:
    """Replace the last extension of a file name with the target format.

    Args:
        source_name: Source file name (``report.data.csv``)
        target_format: Target extension (``json``)

    Returns:
        Output file name (``report.data.json``)
    """
    name = PurePath(source_name).name
    stem = name.rsplit(".", 1)[0] if "." in name else name
    return f"{stem}.{target_format}"
