"""Format family and MIME type detection utilities."""

from pathlib import PurePath
from typing import Optional
from urllib.parse import urlparse

IMAGE = "image"
TEXT = "text"
AUDIO = "audio"


class FormatDetector:
    """Detect format families and MIME types from file names."""

    # Extensions per family, in the order targets are offered
    FAMILIES = {
        IMAGE: ["png", "jpg", "jpeg", "webp", "bmp", "gif", "svg"],
        TEXT: ["txt", "json", "csv", "html", "md", "xml", "yaml", "yml"],
        AUDIO: ["mp3", "wav", "ogg"],
    }

    # MIME type mappings for output formats
    MIME_MAP = {
        "txt": "text/plain",
        "json": "application/json",
        "csv": "text/csv",
        "html": "text/html",
        "md": "text/markdown",
        "xml": "application/xml",
        "yaml": "text/yaml",
        "yml": "text/yaml",
        "mp3": "audio/mpeg",
        "wav": "audio/wav",
        "ogg": "audio/ogg",
    }

    DEFAULT_MIME = "text/plain"

    @staticmethod
    def extension(filename: str) -> str:
        """Return the lowercased last extension of a file name or URL.

        Args:
            filename: File name, path or ``file://`` URL

        Returns:
            Extension without the dot, or an empty string
        """
        path = urlparse(filename).path if "://" in filename else filename
        return PurePath(path).suffix.lstrip(".").lower()

    @staticmethod
    def normalize(fmt: str) -> str:
        """Normalize a format tag (``.JSON`` -> ``json``)."""
        return fmt.strip().lower().lstrip(".")

    @staticmethod
    def family(extension: str) -> Optional[str]:
        """Return the format family for an extension, or None if unknown."""
        ext = FormatDetector.normalize(extension)
        for family, extensions in FormatDetector.FAMILIES.items():
            if ext in extensions:
                return family
        return None

    @staticmethod
    def mime_type(extension: str) -> str:
        """Return the MIME type for an extension, defaulting to text/plain."""
        return FormatDetector.MIME_MAP.get(
            FormatDetector.normalize(extension), FormatDetector.DEFAULT_MIME
        )

    @staticmethod
    def target_options(filename: str) -> list[str]:
        """List the formats a file can be converted to.

        Args:
            filename: Source file name

        Returns:
            Extensions of the same family, excluding the source's own
        """
        ext = FormatDetector.extension(filename)
        family = FormatDetector.family(ext)
        if family is None:
            return []
        return [fmt for fmt in FormatDetector.FAMILIES[family] if fmt != ext]


def format_file_size(size: int) -> str:
    """Format a byte count for display (e.g. ``1.5 KB``)."""
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"
