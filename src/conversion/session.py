# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Single-file conversion session."""

import logging
from typing import Optional

from src.formats.detector import FormatDetector

from .engine import ConversionEngine, ProgressCallback
from .fetcher import SourceFetcher
from .models import ConversionResult, SourceDocument

logger = logging.getLogger(__name__)


class ConversionSession:
    """Hold the current input and output of an interactive conversion.

    Loading a new input clears the previous output; a conversion only
    stores its output when it succeeds.
    """

    def __init__(
        self,
        engine: Optional[ConversionEngine] = None,
        fetcher: Optional[SourceFetcher] = None,
    ) -> None:
        self.engine = engine or ConversionEngine()
        self.fetcher = fetcher
        self.current_input: Optional[SourceDocument] = None
        self.current_output: Optional[ConversionResult] = None

    async def load(self, location: str) -> SourceDocument:
        """Read a local file and make it the current input.

        Args:
            location: Local file path or file:// URL

        Returns:
            The loaded source document
        """
        if self.fetcher is None:
            self.fetcher = SourceFetcher(allowed_paths=self.engine.config.allowed_paths)
        source = await self.fetcher.fetch(location)
        return self.open(source.filename, source.content, source.metadata)

    def open(
        self, filename: str, content: bytes, metadata: Optional[dict] = None
    ) -> SourceDocument:
        """Make in-memory content the current input."""
        self.current_input = SourceDocument(filename, content, metadata or {})
        self.current_output = None
        logger.debug(
            f"Loaded {filename} ({self.current_input.size_label}), "
            f"targets: {self.target_options()}"
        )
        return self.current_input

    def target_options(self) -> list[str]:
        """List the formats the current input can be converted to."""
        if self.current_input is None:
            return []
        return FormatDetector.target_options(self.current_input.filename)

    async def convert(
        self, target_format: str, on_progress: Optional[ProgressCallback] = None
    ) -> ConversionResult:
        """Convert the current input.

        Args:
            target_format: Target extension
            on_progress: Optional progress callback

        Returns:
            The conversion result, also kept as current_output

        Raises:
            ValueError: If no input has been loaded
        """
        if self.current_input is None:
            raise ValueError("No file loaded; call load() or open() first")

        self.current_output = None
        result = await self.engine.convert(self.current_input, target_format, on_progress)
        self.current_output = result
        return result

    def reset(self) -> None:
        """Clear the current input and output."""
        self.current_input = None
        self.current_output = None
