"""Loading of local and remote records."""

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from tqdm import tqdm

from .errors import OriginalsDirectoryError
from .flickr_client import FlickrClient
from .metadata import read_captured_at
from .models import LocalRecord, PhotosetListing

logger = logging.getLogger(__name__)


def is_original(file_path: Path, supported_extensions: Sequence[str]) -> bool:
    """Check if a directory entry is a visible file with a supported extension."""
    if file_path.name.startswith('.') or not file_path.is_file():
        return False
    extension = file_path.suffix.lower().lstrip('.')
    return extension in supported_extensions


def list_originals(directory: Path, supported_extensions: Sequence[str]) -> List[Path]:
    """
    List originals directly inside directory, sorted by name.

    Subdirectories are not descended into.

    Raises:
        OriginalsDirectoryError: If directory is missing or not a directory
    """
    if not directory.exists():
        raise OriginalsDirectoryError(f"Originals directory does not exist: {directory}")
    if not directory.is_dir():
        raise OriginalsDirectoryError(f"Originals path is not a directory: {directory}")

    originals = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if is_original(entry, supported_extensions):
            originals.append(entry)
        else:
            logger.debug(f"Skipping {entry.name}")

    logger.info(f"Found {len(originals)} originals in {directory}")
    return originals


async def load_local_records(
    paths: Sequence[Path],
    parallel_jobs: int = 4,
    progress: bool = False,
    reader: Optional[Callable[[Path], str]] = None,
) -> List[LocalRecord]:
    """
    Read capture times for all paths concurrently.

    Reads run in worker threads, at most ``parallel_jobs`` at a time. The
    result follows the order of ``paths`` regardless of completion order.
    Any failure fails the whole batch: the first ExtractionFailed propagates
    and outstanding reads are cancelled.

    Returns:
        One LocalRecord per path, in input order
    """
    reader = reader or read_captured_at
    semaphore = asyncio.Semaphore(parallel_jobs)

    with tqdm(total=len(paths), desc="Reading EXIF", unit="files", disable=not progress) as bar:

        async def load_one(path: Path) -> LocalRecord:
            async with semaphore:
                captured_at = await asyncio.to_thread(reader, path)
            bar.update()
            return LocalRecord(name=path.name, path=path, captured_at=captured_at)

        tasks = [asyncio.ensure_future(load_one(path)) for path in paths]
        try:
            records = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    return list(records)


async def load_remote_listing(client: FlickrClient, username: str, set_id: str) -> PhotosetListing:
    """Fetch the remote set without blocking the event loop."""
    return await asyncio.to_thread(client.list_set, username, set_id)
