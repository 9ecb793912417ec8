# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Image codec collaborator backed by Pillow."""

import logging
from io import BytesIO
from typing import Protocol

from src.formats.errors import EncodeError

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 0.9

# Target format tag -> (Pillow format name, MIME type)
IMAGE_FORMATS = {
    "png": ("PNG", "image/png"),
    "jpg": ("JPEG", "image/jpeg"),
    "jpeg": ("JPEG", "image/jpeg"),
    "webp": ("WEBP", "image/webp"),
    "bmp": ("BMP", "image/bmp"),
    "gif": ("GIF", "image/gif"),
}

# Formats that cannot store an alpha channel
_OPAQUE_FORMATS = {"JPEG", "BMP"}


class ImageCodec(Protocol):
    """Decode images to RGBA pixel buffers and encode them back."""

    def decode(self, content: bytes) -> tuple[bytes, int, int]:
        ...

    def encode(
        self, pixels: bytes, width: int, height: int, target: str, quality: float
    ) -> bytes:
        ...


class PillowImageCodec:
    """Image codec using Pillow."""

    def decode(self, content: bytes) -> tuple[bytes, int, int]:
        """Decode image bytes into an RGBA pixel buffer.

        Args:
            content: Encoded image bytes

        Returns:
            Tuple of (rgba_pixels, width, height)

        Raises:
            EncodeError: If the image cannot be decoded
        """
        from PIL import Image, UnidentifiedImageError

        try:
            with Image.open(BytesIO(content)) as img:
                rgba = img.convert("RGBA")
                return rgba.tobytes(), rgba.width, rgba.height
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise EncodeError(f"Failed to load image: {e}") from e

    def encode(
        self,
        pixels: bytes,
        width: int,
        height: int,
        target: str,
        quality: float = DEFAULT_QUALITY,
    ) -> bytes:
        """Encode an RGBA pixel buffer into the target format.

        Args:
            pixels: RGBA pixel buffer, row-major
            width: Image width in pixels
            height: Image height in pixels
            target: Target format tag (png, jpg, jpeg, webp, bmp, gif)
            quality: Lossy quality in (0, 1]

        Returns:
            Encoded image bytes

        Raises:
            EncodeError: If the target is unknown or encoding fails
        """
        from PIL import Image

        if target not in IMAGE_FORMATS:
            raise EncodeError(f"Unsupported image format: '{target}'")
        pil_format, _ = IMAGE_FORMATS[target]

        try:
            img = Image.frombytes("RGBA", (width, height), pixels)
            if pil_format in _OPAQUE_FORMATS:
                img = img.convert("RGB")

            out = BytesIO()
            img.save(out, format=pil_format, quality=int(round(quality * 100)))
        except (ValueError, OSError) as e:
            raise EncodeError(f"Failed to encode {target} image: {e}") from e

        logger.debug(f"Encoded {width}x{height} image as {pil_format}")
        return out.getvalue()
