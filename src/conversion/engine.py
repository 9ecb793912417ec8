# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Conversion orchestrator.

Routes a source document through the pipeline for its format family:

- text: parser -> value tree -> serializer
- image: image codec decode -> encode
- audio: audio codec decode -> WAV packaging
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Optional

from src.formats.base import FormatHandler
from src.formats.detector import AUDIO, IMAGE, TEXT, FormatDetector
from src.formats.errors import ConversionError, EncodeError, UnsupportedFormatError
from src.formats.registry import FormatRegistry, get_format_registry
from src.media.audio_codec import AUDIO_FORMATS, OUTPUT_MIME, AudioCodec, PydubAudioCodec
from src.media.image_codec import IMAGE_FORMATS, ImageCodec, PillowImageCodec
from src.media.wav import encode_wav

from .config import ConverterConfig
from .fetcher import SourceFetcher
from .models import ConversionContext, ConversionResult, SourceDocument, output_filename

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def _noop_progress(percent: int) -> None:
    pass


class ConversionEngine:
    """Select and run the pipeline for a source/target format pair."""

    def __init__(
        self,
        registry: Optional[FormatRegistry] = None,
        image_codec: Optional[ImageCodec] = None,
        audio_codec: Optional[AudioCodec] = None,
        config: Optional[ConverterConfig] = None,
    ) -> None:
        """Initialize engine.

        Args:
            registry: Format registry; defaults to the global registry
            image_codec: Image codec; defaults to Pillow
            audio_codec: Audio decoder; defaults to pydub with a format hint
                         taken from the source extension
            config: Converter configuration; defaults to the environment
        """
        self.registry = registry or get_format_registry()
        self.image_codec = image_codec or PillowImageCodec()
        self.audio_codec = audio_codec
        self.config = config or ConverterConfig.from_env()

    def resolve_target(self, filename: str, target_format: str) -> tuple[str, str]:
        """Check that a source file can be converted to a target format.

        This is a pure table lookup; nothing is read or parsed.

        Args:
            filename: Source file name
            target_format: Requested target extension

        Returns:
            Tuple of (family, normalized_target)

        Raises:
            UnsupportedFormatError: If the pair is not supported
        """
        target = FormatDetector.normalize(target_format)
        source_ext = FormatDetector.extension(filename)
        family = FormatDetector.family(source_ext)

        if family is None:
            raise UnsupportedFormatError(f"Unsupported file type: '{source_ext or filename}'")
        if FormatDetector.family(target) != family:
            raise UnsupportedFormatError(
                f"Cannot convert {family} file '{filename}' to '{target}'"
            )

        if family == TEXT and not self.registry.has_serializer(target):
            raise UnsupportedFormatError(f"Unsupported output format: '{target}'")
        if family == IMAGE and target not in IMAGE_FORMATS:
            raise UnsupportedFormatError(f"Unsupported image output format: '{target}'")
        if family == AUDIO and target not in AUDIO_FORMATS:
            raise UnsupportedFormatError(f"Unsupported audio output format: '{target}'")

        return family, target

    async def convert(
        self,
        source: SourceDocument,
        target_format: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ConversionResult:
        """Convert a source document to the target format.

        Args:
            source: Source document
            target_format: Target extension (e.g. 'json', 'png', 'wav')
            on_progress: Called with coarse percentages as stages complete

        Returns:
            ConversionResult with output bytes and MIME type

        Raises:
            UnsupportedFormatError: If the format pair is not supported
            ParseError: If the source text is malformed
            EncodeError: If an image or audio codec fails
        """
        family, target = self.resolve_target(source.filename, target_format)
        progress = on_progress or _noop_progress
        progress(0)

        logger.debug(f"Converting {source.filename} ({family}) to {target}")

        try:
            if family == TEXT:
                result = self._convert_text(ConversionContext(source, target), progress)
            elif family == IMAGE:
                result = await self._convert_image(source, target, progress)
            else:
                result = await self._convert_audio(source, target, progress)
        except ConversionError as e:
            logger.error(f"Conversion of {source.filename} to {target} failed: {e}")
            raise

        progress(100)
        logger.info(
            f"Converted {source.filename} to {result.filename} "
            f"({result.size} bytes, {result.mime_type})"
        )
        return result

    async def convert_location(
        self,
        fetcher: SourceFetcher,
        location: str,
        target_format: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ConversionResult:
        """Fetch a local file and convert it.

        The target is validated before the file is read.
        """
        self.resolve_target(location, target_format)
        source = await fetcher.fetch(location)
        return await self.convert(source, target_format, on_progress)

    def _convert_text(
        self, context: ConversionContext, progress: ProgressCallback
    ) -> ConversionResult:
        context = self._parse_stage(context)
        progress(30)

        serializer = self.registry.get_serializer(context.target_format)
        progress(60)

        context = self._serialize_stage(context, serializer)
        progress(90)

        try:
            data = context.text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodeError(
                f"Cannot encode {context.target_format} output as UTF-8: {e}"
            ) from e

        return ConversionResult(
            data=data,
            mime_type=FormatDetector.mime_type(context.target_format),
            target_format=context.target_format,
            filename=output_filename(context.source.filename, context.target_format),
        )

    def _parse_stage(self, context: ConversionContext) -> ConversionContext:
        parser = self.registry.get_parser(context.source.extension)
        logger.debug(f"Parsing {context.source.filename} with {parser.name}")
        return replace(context, value=parser.parse(context.source.text()))

    def _serialize_stage(
        self, context: ConversionContext, serializer: FormatHandler
    ) -> ConversionContext:
        logger.debug(f"Serializing to {context.target_format} with {serializer.name}")
        metadata = {**context.source.metadata, "filename": context.source.filename}
        return replace(context, text=serializer.serialize(context.value, metadata))

    async def _convert_image(
        self, source: SourceDocument, target: str, progress: ProgressCallback
    ) -> ConversionResult:
        pixels, width, height = await asyncio.to_thread(
            self.image_codec.decode, source.content
        )
        progress(50)

        data = await asyncio.to_thread(
            self.image_codec.encode,
            pixels,
            width,
            height,
            target,
            self.config.image_quality,
        )
        _, mime_type = IMAGE_FORMATS[target]
        return ConversionResult(
            data=data,
            mime_type=mime_type,
            target_format=target,
            filename=output_filename(source.filename, target),
        )

    async def _convert_audio(
        self, source: SourceDocument, target: str, progress: ProgressCallback
    ) -> ConversionResult:
        progress(20)
        codec = self.audio_codec or PydubAudioCodec(source_format=source.extension)
        progress(40)

        channels, sample_rate = await asyncio.to_thread(codec.decode, source.content)
        progress(60)

        data = await asyncio.to_thread(encode_wav, channels, sample_rate)
        progress(90)

        return ConversionResult(
            data=data,
            mime_type=OUTPUT_MIME,
            target_format=target,
            filename=output_filename(source.filename, target),
        )
