"""
Image details for the scanner package.

Reads the display metadata (size, resolution, format) shown next to each
duplicate. This is presentation data only; duplicate detection never opens
files as images.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..models import FileRecord, format_size

_logger = logging.getLogger(__name__)


def read_image_details(filepath: str | Path) -> dict:
    """
    Read display details for an image file.

    Args:
        filepath: Path to the image

    Returns:
        Dict with file_size, file_size_formatted, width, height, resolution
        and format. Image fields are empty when the file cannot be decoded,
        and an 'error' key describes why.
    """
    details = {
        'file_size': 0,
        'file_size_formatted': format_size(0),
        'width': 0,
        'height': 0,
        'resolution': '',
        'format': '',
    }

    try:
        size = os.path.getsize(filepath)
    except OSError as e:
        details['error'] = f"File not accessible: {e}"
        return details

    details['file_size'] = size
    details['file_size_formatted'] = format_size(size)

    try:
        # Header only; no pixel data is decoded
        with Image.open(filepath) as img:
            details['width'] = img.width
            details['height'] = img.height
            details['resolution'] = f"{img.width}x{img.height}"
            details['format'] = img.format or ''
    except UnidentifiedImageError as e:
        details['error'] = f"Not a valid image file: {e}"
    except (OSError, ValueError) as e:
        _logger.debug(f"Failed to read image details for {filepath}: {e}")
        details['error'] = f"Failed to open image: {e}"

    return details


def describe_record(record: FileRecord) -> dict:
    """Return a record's JSON form merged with its image details."""
    data = record.to_dict()
    data.update(read_image_details(record.absolute_path))
    return data


__all__ = ['read_image_details', 'describe_record']
