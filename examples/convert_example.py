#!/usr/bin/env python3
# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""
File conversion example.

This example demonstrates the conversion session:
- Loading a local file
- Listing the formats it can be converted to
- Converting with progress reporting
- Writing the result next to the source file

Usage:
    python examples/convert_example.py data.csv json
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.conversion import (
    ConversionEngine,
    ConversionSession,
    ConverterConfig,
    SourceFetcher,
    load_env_file,
)
from src.formats import ConversionError


async def main(source: str, target: str) -> int:
    """Convert one file and save the output."""
    load_env_file()
    source_path = Path(source).resolve()
    config = ConverterConfig.from_env()
    config = config.model_copy(
        update={"allowed_paths": config.allowed_paths + [str(source_path.parent)]}
    )
    logging.basicConfig(level=config.log_level)

    session = ConversionSession(
        engine=ConversionEngine(config=config),
        fetcher=SourceFetcher(allowed_paths=config.allowed_paths),
    )

    print("=" * 70)
    print("File Conversion Example")
    print("=" * 70)

    print("\n1. Loading source file...")
    try:
        document = await session.load(str(source_path))
    except (ConversionError, PermissionError) as e:
        print(f"✗ Failed to load {source_path}: {e}")
        return 1
    print(f"✓ Loaded {document.filename} ({document.size_label})")
    print(f"  Available targets: {', '.join(session.target_options()) or 'none'}")

    print(f"\n2. Converting to {target}...")
    try:
        result = await session.convert(
            target, on_progress=lambda percent: print(f"  Converting... {percent}%")
        )
    except ConversionError as e:
        print(f"✗ Conversion failed: {e}")
        return 1
    print(f"✓ Produced {result.filename} ({result.mime_type}, {result.size} bytes)")

    output_path = source_path.parent / result.filename
    output_path.write_bytes(result.data)
    print(f"\n3. Saved {output_path}")

    session.reset()
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)
    try:
        sys.exit(asyncio.run(main(sys.argv[1], sys.argv[2])))
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
