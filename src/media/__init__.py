"""Media codec collaborators for image and audio conversions."""

from .audio_codec import AUDIO_FORMATS, AudioCodec, PydubAudioCodec
from .image_codec import IMAGE_FORMATS, ImageCodec, PillowImageCodec
from .wav import encode_wav

__all__ = [
    "AUDIO_FORMATS",
    "AudioCodec",
    "PydubAudioCodec",
    "IMAGE_FORMATS",
    "ImageCodec",
    "PillowImageCodec",
    "encode_wav",
]
