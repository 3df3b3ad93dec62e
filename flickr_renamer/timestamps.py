"""Normalization of capture timestamps into a comparable canonical form."""

import re

from .errors import MalformedTimestamp

# EXIF DateTimeOriginal, e.g. "2019:06:19 15:02:27"
LOCAL_FORMAT = 'exif'
# Flickr datetaken, e.g. "2019-06-19 15:02:27"
REMOTE_FORMAT = 'flickr'

_PATTERNS = {
    LOCAL_FORMAT: re.compile(r'^(\d{4}):(\d{2}):(\d{2}) (\d{2}:\d{2}:\d{2})$'),
    REMOTE_FORMAT: re.compile(r'^(\d{4})-(\d{2})-(\d{2}) (\d{2}:\d{2}:\d{2})$'),
}


def normalize(raw: str, source_format: str, context: str = '') -> str:
    """
    Convert a raw timestamp into canonical ``YYYY-MM-DD HH:MM:SS`` form.

    Only the date separators are rewritten; the time of day is returned
    exactly as given. No calendar validation or timezone handling is done,
    two timestamps are equal iff their canonical strings are equal.

    Args:
        raw: Timestamp string as produced by the source
        source_format: LOCAL_FORMAT or REMOTE_FORMAT
        context: Optional description of the record, used in the error

    Returns:
        Canonical timestamp string

    Raises:
        MalformedTimestamp: If raw does not match the source format
    """
    pattern = _PATTERNS.get(source_format)
    if pattern is None:
        raise ValueError(f"Unknown timestamp format: {source_format}")

    if not isinstance(raw, str):
        raise MalformedTimestamp(raw, source_format, context)

    match = pattern.match(raw.strip())
    if match is None:
        raise MalformedTimestamp(raw, source_format, context)

    year, month, day, time_of_day = match.groups()
    return f"{year}-{month}-{day} {time_of_day}"
