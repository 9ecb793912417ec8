"""Tests for the WAV container writer."""

import struct

import pytest

from src.formats.errors import EncodeError
from src.media.wav import HEADER_SIZE, encode_wav


def samples(data: bytes) -> tuple[int, ...]:
    body = data[HEADER_SIZE:]
    return struct.unpack(f"<{len(body) // 2}h", body)


class TestEncodeWav:
    """Test 16-bit PCM packaging."""

    def test_header_fields(self) -> None:
        """Test the RIFF header describes the sample data."""
        data = encode_wav([[0.0] * 10, [0.0] * 10], 44100)

        (
            riff, riff_size, wave, fmt, fmt_size, audio_format, channels,
            sample_rate, byte_rate, block_align, bits, data_tag, data_size,
        ) = struct.unpack("<4sI4s4sIHHIIHH4sI", data[:HEADER_SIZE])

        assert (riff, wave, fmt, data_tag) == (b"RIFF", b"WAVE", b"fmt ", b"data")
        assert riff_size == 36 + 40
        assert fmt_size == 16
        assert audio_format == 1
        assert channels == 2
        assert sample_rate == 44100
        assert byte_rate == 44100 * 2 * 2
        assert block_align == 4
        assert bits == 16
        assert data_size == 40

    def test_length(self) -> None:
        """Test the file is the header plus two bytes per sample per channel."""
        assert len(encode_wav([[0.1] * 7], 8000)) == HEADER_SIZE + 7 * 2
        assert len(encode_wav([[0.1] * 5] * 3, 8000)) == HEADER_SIZE + 5 * 3 * 2

    def test_scaling_and_clamping(self) -> None:
        """Test samples are clamped to [-1, 1] and scaled asymmetrically."""
        data = encode_wav([[-1.0, 1.0, 0.0, 0.5, -0.5, 3.0, -7.5]], 8000)

        assert samples(data) == (-32768, 32767, 0, 16383, -16384, 32767, -32768)

    def test_channels_are_interleaved(self) -> None:
        """Test samples alternate between channels frame by frame."""
        data = encode_wav([[1.0, 0.0], [-1.0, 0.5]], 8000)

        assert samples(data) == (32767, -32768, 0, 16383)

    def test_empty_channel_list(self) -> None:
        """Test encoding without channels raises EncodeError."""
        with pytest.raises(EncodeError):
            encode_wav([], 8000)

    def test_uneven_channels(self) -> None:
        """Test planes of different lengths raise EncodeError."""
        with pytest.raises(EncodeError):
            encode_wav([[0.0, 0.0], [0.0]], 8000)

    def test_zero_length_audio(self) -> None:
        """Test silent zero-length input still yields a valid header."""
        data = encode_wav([[]], 8000)

        assert len(data) == HEADER_SIZE
        assert struct.unpack("<I", data[40:44])[0] == 0
