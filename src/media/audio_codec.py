# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Audio codec collaborator backed by pydub."""

import logging
from io import BytesIO
from typing import Optional, Protocol

from src.formats.errors import EncodeError

logger = logging.getLogger(__name__)

# Audio targets are always packaged as WAV
AUDIO_FORMATS = ["mp3", "wav", "ogg"]
OUTPUT_MIME = "audio/wav"


class AudioCodec(Protocol):
    """Decode compressed or PCM audio into float channel planes."""

    def decode(self, content: bytes) -> tuple[list[list[float]], int]:
        ...


class PydubAudioCodec:
    """Audio decoder using pydub.

    WAV sources decode natively; MP3 and OGG sources need ffmpeg on PATH.
    """

    def __init__(self, source_format: Optional[str] = None) -> None:
        """Initialize decoder.

        Args:
            source_format: Container hint passed to pydub (e.g. 'mp3')
        """
        self.source_format = source_format

    def decode(self, content: bytes) -> tuple[list[list[float]], int]:
        """Decode audio bytes.

        Args:
            content: Encoded audio bytes

        Returns:
            Tuple of (channel_planes, sample_rate) with samples in [-1, 1]

        Raises:
            EncodeError: If the audio cannot be decoded
        """
        from pydub import AudioSegment
        from pydub.exceptions import CouldntDecodeError

        try:
            segment = AudioSegment.from_file(BytesIO(content), format=self.source_format)
        except (CouldntDecodeError, OSError) as e:
            raise EncodeError(f"Failed to decode audio: {e}") from e

        scale = float(1 << (8 * segment.sample_width - 1))
        samples = segment.get_array_of_samples()
        channel_count = segment.channels
        planes = [
            [sample / scale for sample in samples[channel::channel_count]]
            for channel in range(channel_count)
        ]

        logger.debug(
            f"Decoded {len(planes[0]) if planes else 0} frames x {channel_count} "
            f"channels at {segment.frame_rate} Hz"
        )
        return planes, segment.frame_rate
