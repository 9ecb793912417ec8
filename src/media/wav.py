# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""16-bit PCM WAV container writer."""

import struct
from collections.abc import Sequence

from src.formats.errors import EncodeError

HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8


def _to_int16(sample: float) -> int:
    sample = max(-1.0, min(1.0, float(sample)))
    # Truncate toward zero after scaling
    return int(sample * 0x8000) if sample < 0 else int(sample * 0x7FFF)


def encode_wav(channels: Sequence[Sequence[float]], sample_rate: int) -> bytes:
    """Package decoded float samples as a 16-bit PCM WAV file.

    Args:
        channels: One plane of float samples in [-1, 1] per channel
        sample_rate: Samples per second

    Returns:
        WAV bytes: a 44-byte RIFF header followed by interleaved samples

    Raises:
        EncodeError: If there are no channels or planes differ in length
    """
    if not channels:
        raise EncodeError("Cannot encode WAV without audio channels")

    channel_count = len(channels)
    length = len(channels[0])
    if any(len(plane) != length for plane in channels):
        raise EncodeError("Audio channels have different lengths")

    data_size = length * channel_count * BYTES_PER_SAMPLE
    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        1,
        channel_count,
        sample_rate,
        sample_rate * channel_count * BYTES_PER_SAMPLE,
        channel_count * BYTES_PER_SAMPLE,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )

    interleaved = [
        _to_int16(channels[channel][i])
        for i in range(length)
        for channel in range(channel_count)
    ]
    return header + struct.pack(f"<{len(interleaved)}h", *interleaved)
