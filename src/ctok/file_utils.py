#!/usr/bin/env python3
"""
Filename utilities for deriving input and output filenames from a base path.
"""

import os
import logging

logger = logging.getLogger(__name__)

CSV_EXTENSION = ".csv"
CYCLE_EXTENSION = ".cyc"
TSP_EXTENSION = ".tsp"
KML_EXTENSION = ".kml"
GPX_EXTENSION = ".gpx"


def strip_extension(filename: str) -> str:
    """Remove the extension, if any, from the last path component."""
    return os.path.splitext(filename)[0]


def sibling_path(filename: str, extension: str) -> str:
    """Replace the extension of filename with the given one."""
    return strip_extension(filename) + extension


def derive_name(filename: str) -> str:
    """Return the base name of filename with directory and extension removed."""
    return strip_extension(os.path.basename(filename))


def generate_output_filename(input_filename: str) -> str:
    """
    Generates an output HTML filename and reserves it by creating an empty file.

    Strategy:
    1. Drop any extension from the input
    2. Append " map.html"
    3. If file exists, try " map (1).html", " map (2).html", etc.
    4. Stop at 180 attempts
    5. Use exclusive open (`open(path, 'x')`) to reserve the name.

    Args:
        input_filename: Base path of the input files

    Returns:
        Safe output filename that has been created as an empty file to reserve its name

    Raises:
        RuntimeError: If no available filename found after 180 attempts
        ValueError: If a filename cannot be created (e.g., due to permissions)
    """
    base_output = strip_extension(input_filename) + " map"

    candidates = [base_output + ".html"] + [
        f"{base_output} ({i}).html" for i in range(1, 181)
    ]
    for candidate in candidates:
        try:
            with open(candidate, "x"):
                pass
            return candidate
        except FileExistsError:
            continue
        except (PermissionError, OSError) as e:
            logger.error(f"Cannot create file {candidate}: {e}")
            raise ValueError(f"Cannot create file: {e}")

    logger.error(
        "Could not find an available filename after 180 attempts. "
        "Please clean up your output directory."
    )
    raise RuntimeError("No available filename found after 180 attempts")
