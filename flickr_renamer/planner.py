"""Rename planning and application."""

import logging
import os
from pathlib import Path
from typing import Collection, Iterable, List, Set

from tqdm import tqdm

from .errors import (
    InvalidTargetName,
    RenameConflict,
    RenameError,
    RenameFailed,
    SourceMissing,
)
from .models import MatchResult, RenameOutcome, RenamePlan

logger = logging.getLogger(__name__)


def target_path(source: Path, title: str) -> Path:
    """Path next to source, named after title, keeping source's extension."""
    return source.parent / (title + source.suffix)


def plan(matches: Iterable[MatchResult]) -> List[RenamePlan]:
    """Build one rename plan per matched original, in match order."""
    plans = []
    for match in matches:
        if match.remote is None:
            continue
        source = Path(match.local.path)
        plans.append(RenamePlan(
            source=source,
            target=target_path(source, match.remote.title),
            remote_id=match.remote.id,
            title=match.remote.title,
        ))
    return plans


def _same_file(source: Path, target: Path) -> bool:
    try:
        return source.samefile(target)
    except OSError:
        return False


def _check_plan(rename_plan: RenamePlan, claimed: Collection[Path] = ()) -> None:
    """Raise the RenameError that would stop this plan, if any."""
    title = rename_plan.title
    separators = [os.sep] + ([os.altsep] if os.altsep else [])
    if not title.strip() or title in ('.', '..') or any(sep in title for sep in separators):
        raise InvalidTargetName(title)
    if not rename_plan.source.exists():
        raise SourceMissing(rename_plan.source)
    if rename_plan.target in claimed:
        raise RenameConflict(rename_plan.target)
    # Case-only renames see the source itself on case-insensitive filesystems
    if rename_plan.target.exists() and not _same_file(rename_plan.source, rename_plan.target):
        raise RenameConflict(rename_plan.target)


def apply_plan(rename_plan: RenamePlan, dry_run: bool = True,
               claimed: Collection[Path] = ()) -> RenameOutcome:
    """
    Apply a single plan.

    Args:
        rename_plan: Plan to apply
        dry_run: Only report the rename, never touch the filesystem
        claimed: Targets already taken by earlier plans of the same batch

    Returns:
        RenameOutcome for the plan

    Raises:
        RenameError: If the plan cannot be applied
    """
    source, target = rename_plan.source, rename_plan.target
    logger.debug(f'Rename "{source.name}"   to   "{target.name}"')

    if source == target:
        logger.debug(f"Already named: {source}")
        return RenameOutcome(plan=rename_plan, status=RenameOutcome.UNCHANGED)

    _check_plan(rename_plan, claimed)

    if dry_run:
        return RenameOutcome(plan=rename_plan, status=RenameOutcome.DRY_RUN)

    try:
        source.rename(target)
    except OSError as e:
        raise RenameFailed(f"Failed to rename {source} -> {target}: {e}") from e

    return RenameOutcome(plan=rename_plan, status=RenameOutcome.RENAMED)


def apply_plans(plans: List[RenamePlan], dry_run: bool = True,
                progress: bool = False) -> List[RenameOutcome]:
    """
    Apply every plan independently; a failing plan never stops the rest.

    A target taken by an earlier plan conflicts in dry run as well, so a dry
    run reports the same outcomes as the real run.

    Returns:
        One RenameOutcome per plan, in plan order
    """
    outcomes = []
    claimed: Set[Path] = set()
    for rename_plan in tqdm(plans, desc="Renaming", unit="files", disable=not progress):
        try:
            outcome = apply_plan(rename_plan, dry_run=dry_run, claimed=claimed)
        except RenameError as e:
            logger.warning(str(e))
            outcome = RenameOutcome(plan=rename_plan, status=RenameOutcome.FAILED, error=e)
        else:
            claimed.add(rename_plan.target)
        outcomes.append(outcome)

    failed = sum(1 for o in outcomes if o.failed)
    logger.info(f"{'DRY RUN: ' if dry_run else ''}Applied {len(plans)} plans, {failed} failed")
    return outcomes
