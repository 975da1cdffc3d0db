#!/usr/bin/env python3
"""
Filename utilities for generating output filenames.
"""

import logging
import os

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 100
INPUT_EXTENSIONS = (".gpx", ".json")


def generate_output_filename(input_filename: str) -> str:
    """
    Generates an output HTML filename and reserves it by creating an empty file.

    Strategy:
    1. If input ends with .gpx or .json (case-insensitive), drop it
    2. Append " map.html"
    3. If file exists, try " (1).html", " (2).html", etc.
    4. Use exclusive open (`open(path, 'x')`) to reserve the name.

    Args:
        input_filename: Path to the input positions file

    Returns:
        Filename that has been created as an empty file to reserve its name

    Raises:
        RuntimeError: If no available filename is found
        ValueError: If a filename cannot be created (e.g. permissions)
    """
    input_dir = os.path.dirname(input_filename)
    base_name = os.path.basename(input_filename)

    root, ext = os.path.splitext(base_name)
    if ext.lower() in INPUT_EXTENSIONS:
        base_name = root

    base_output = base_name + " map"
    candidates = [os.path.join(input_dir, base_output + ".html")] + [
        os.path.join(input_dir, f"{base_output} ({i}).html")
        for i in range(1, MAX_ATTEMPTS + 1)
    ]

    for candidate in candidates:
        try:
            with open(candidate, "x"):
                pass
            return candidate
        except FileExistsError:
            continue
        except OSError as e:
            logger.error(f"Cannot create file {candidate}: {e}")
            raise ValueError(f"Cannot create file: {e}") from e

    logger.error(
        f"Could not find an available filename after {MAX_ATTEMPTS + 1} attempts. "
        f"Please clean up your output directory or specify --output explicitly."
    )
    raise RuntimeError(f"No available filename found after {MAX_ATTEMPTS + 1} attempts")
