"""Matching of local originals to remote photos by capture time."""

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence

from .models import LocalRecord, MatchResult, ReconciliationResult, RemoteRecord
from .timestamps import LOCAL_FORMAT, REMOTE_FORMAT, normalize

logger = logging.getLogger(__name__)


def check_counts(local_count: int, remote_count: int) -> Optional[str]:
    """Return a warning message when the two sides differ in size."""
    if local_count == remote_count:
        return None
    return (
        f"Number on Flickr ({remote_count}) doesn't match number of "
        f"originals ({local_count}). Maybe some aren't public?"
    )


def _index_remotes(remotes: Sequence[RemoteRecord]) -> Dict[str, Deque[RemoteRecord]]:
    """Group remotes by canonical timestamp, keeping input order per key."""
    index: Dict[str, Deque[RemoteRecord]] = {}
    for remote in remotes:
        key = normalize(remote.captured_at, REMOTE_FORMAT, context=f"photo {remote.id}")
        index.setdefault(key, deque()).append(remote)
    return index


def reconcile(
    locals_: Sequence[LocalRecord],
    remotes: Sequence[RemoteRecord],
    exclusive: bool = False,
) -> ReconciliationResult:
    """
    Pair each local record with the first remote sharing its capture time.

    By default a remote photo may be the match for several originals that
    share a capture time. With ``exclusive`` each remote is consumed by the
    first original it matches, so later originals fall through to the next
    candidate or end up unmatched.

    Args:
        locals_: Local records in directory-listing order
        remotes: Remote records in API order
        exclusive: Consume remote candidates once matched

    Returns:
        ReconciliationResult with matches and unmatched in input order

    Raises:
        MalformedTimestamp: If any timestamp on either side is malformed
    """
    index = _index_remotes(remotes)

    matches: List[MatchResult] = []
    unmatched: List[LocalRecord] = []

    for local in locals_:
        key = normalize(local.captured_at, LOCAL_FORMAT, context=local.name)
        candidates = index.get(key)

        if not candidates:
            logger.debug(f"No match for {local.name} ({key})")
            unmatched.append(local)
            continue

        remote = candidates.popleft() if exclusive else candidates[0]
        logger.debug(f"Matched {local.name} -> {remote.id} ({key})")
        matches.append(MatchResult(local=local, remote=remote))

    logger.info(f"Reconciled {len(locals_)} originals: "
                f"{len(matches)} matched, {len(unmatched)} unmatched")

    return ReconciliationResult(matches=matches, unmatched=unmatched)
