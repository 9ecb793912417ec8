# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Source fetcher for local files."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from src.formats.errors import SourceReadError

from .config import ConverterConfig
from .models import SourceDocument

logger = logging.getLogger(__name__)


class SourceFetcher:
    """Read source documents from local files.

    Security: file access is restricted to allowed directories to prevent
    unauthorized file system access (e.g., /etc/passwd). Configure allowed
    paths via the FILECONV_ALLOWED_FILE_PATHS environment variable.
    """

    def __init__(self, allowed_paths: Optional[list[str]] = None) -> None:
        """Initialize fetcher.

        Args:
            allowed_paths: List of allowed directory paths. If None, uses
                          FILECONV_ALLOWED_FILE_PATHS, falling back to the
                          current working directory.
        """
        if allowed_paths is None:
            allowed_paths = ConverterConfig.from_env().allowed_paths

        # Convert to absolute paths and resolve symlinks
        self.allowed_paths = [str(Path(p).resolve()) for p in allowed_paths]

        logger.info(f"File access restricted to: {self.allowed_paths}")

    async def fetch(self, location: str) -> SourceDocument:
        """Read a source document.

        Args:
            location: Local file path or file:// URL

        Returns:
            SourceDocument with the file's name and bytes

        Raises:
            ValueError: If the URL scheme is not supported
            PermissionError: If the path is outside allowed directories
            SourceReadError: If the file cannot be read
        """
        parsed = urlparse(location)
        if parsed.scheme == "file":
            path = location.replace("file://", "", 1)
        elif not parsed.scheme or len(parsed.scheme) == 1:
            # No scheme, or a Windows drive letter
            path = location
        else:
            raise ValueError(f"Unsupported URL scheme: {parsed.scheme}")

        abs_path = str(Path(path).resolve())

        # Security check: Ensure path is within allowed directories
        if not self._is_path_allowed(abs_path):
            allowed_str = ", ".join(self.allowed_paths)
            raise PermissionError(
                f"Access denied: '{abs_path}' is outside allowed directories. "
                f"Allowed paths: {allowed_str}. "
                f"Configure via FILECONV_ALLOWED_FILE_PATHS environment variable."
            )

        logger.debug(f"Reading local file: {abs_path}")

        try:
            with open(abs_path, "rb") as f:
                content = f.read()
            stat = os.stat(abs_path)
        except OSError as e:
            raise SourceReadError(f"Failed to read file '{abs_path}': {e}") from e

        metadata = {
            "path": abs_path,
            "content_length": str(stat.st_size),
            "last_modified": datetime.fromtimestamp(stat.st_mtime).isoformat(),
        }

        logger.debug(f"Read {len(content)} bytes from {abs_path}")

        return SourceDocument(
            filename=os.path.basename(abs_path), content=content, metadata=metadata
        )

    def _is_path_allowed(self, path: str) -> bool:
        """Check if a path is within allowed directories.

        Args:
            path: Absolute path to check

        Returns:
            True if path is within an allowed directory
        """
        path_obj = Path(path)

        for allowed in self.allowed_paths:
            try:
                path_obj.relative_to(Path(allowed))
                return True
            except ValueError:
                continue

        return False
