# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Converter configuration loaded from the environment."""

import os

from pydantic import BaseModel, Field

ENV_PREFIX = "FILECONV_"


def load_env_file(env_file: str | None = None) -> None:
    """Load environment variables from a .env file.

    Args:
        env_file: Path to the file; defaults to ``.env`` at the project root
    """
    if env_file is None:
        env_file = os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env"
        )
    if os.path.exists(env_file):
        with open(env_file, "r") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ[key] = value


def _split_paths(value: str) -> list[str]:
    # Split on : (Unix) or ; (Windows)
    separator = ";" if os.name == "nt" else ":"
    return [p.strip() for p in value.split(separator) if p.strip()]


class ConverterConfig(BaseModel):
    """Settings shared by the fetcher and the conversion engine."""

    allowed_paths: list[str] = Field(
        default_factory=lambda: [os.getcwd()],
        description="Directories local source files may be read from",
    )
    image_quality: float = Field(
        default=0.9,
        gt=0,
        le=1,
        description="Quality passed to lossy image encoders",
    )
    log_level: str = Field(default="INFO", description="Logging level name")

    @classmethod
    def from_env(cls) -> "ConverterConfig":
        """Build a configuration from FILECONV_* environment variables.

        Returns:
            ConverterConfig with unset variables left at their defaults
        """
        values: dict[str, object] = {}
        paths = os.getenv(f"{ENV_PREFIX}ALLOWED_FILE_PATHS", "")
        if paths:
            values["allowed_paths"] = _split_paths(paths)
        quality = os.getenv(f"{ENV_PREFIX}IMAGE_QUALITY")
        if quality:
            values["image_quality"] = quality
        level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if level:
            values["log_level"] = level.upper()
        return cls(**values)
