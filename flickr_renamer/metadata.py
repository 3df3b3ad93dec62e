"""Capture time extraction from EXIF metadata."""

import logging
from pathlib import Path

import exifread

from .errors import ExtractionFailed

logger = logging.getLogger(__name__)

CAPTURE_TAG = 'EXIF DateTimeOriginal'


def read_captured_at(file_path: Path) -> str:
    """
    Read the raw EXIF capture time of a file.

    Args:
        file_path: Path to an image file

    Returns:
        Raw timestamp string, e.g. "2019:06:19 15:02:27"

    Raises:
        ExtractionFailed: If the file cannot be read or carries no capture time
    """
    try:
        with open(file_path, 'rb') as f:
            tags = exifread.process_file(f, stop_tag='DateTimeOriginal', details=False)
    except Exception as e:
        raise ExtractionFailed(file_path, str(e)) from e

    tag = tags.get(CAPTURE_TAG)
    if tag is None:
        raise ExtractionFailed(file_path, f"no {CAPTURE_TAG} tag")

    value = str(tag).strip()
    if not value:
        raise ExtractionFailed(file_path, f"empty {CAPTURE_TAG} tag")

    logger.debug(f"{file_path.name}: captured at {value}")
    return value
