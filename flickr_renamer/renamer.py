"""Pipeline orchestration for renaming originals after their Flickr titles."""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config
from .flickr_client import FlickrClient
from .loader import list_originals, load_local_records, load_remote_listing
from .models import RenameOutcome
from .planner import apply_plans, plan
from .reconciler import check_counts, reconcile

logger = logging.getLogger(__name__)


class OriginalsRenamer:
    """Runs one reconciliation of an originals directory against a Flickr set."""

    def __init__(self, config: Config, client: Optional[FlickrClient] = None):
        """
        Initialize renamer with configuration.

        Args:
            config: Configuration instance
            client: Flickr client; built from config when omitted
        """
        self.config = config
        self.originals_dir = Path(config.get_originals_dir()).expanduser()
        self.client = client or FlickrClient(
            api_key=config.get_api_key(),
            endpoint=config.get_endpoint(),
            timeout=config.get_timeout(),
            per_page=config.get_per_page(),
        )

    def run(self, dry_run: Optional[bool] = None, progress: bool = False) -> Dict[str, Any]:
        """Synchronous entry point; see run_async."""
        return asyncio.run(self.run_async(dry_run, progress))

    async def run_async(self, dry_run: Optional[bool] = None,
                        progress: bool = False) -> Dict[str, Any]:
        """
        Fetch, load, reconcile, plan and apply.

        The remote set is fetched first so an API failure aborts the run
        before any local work. Fatal errors propagate; per-file rename
        failures are collected into the results.

        Args:
            dry_run: Whether to only report renames (defaults to config setting)
            progress: Show progress bars

        Returns:
            Dictionary with run results
        """
        if dry_run is None:
            dry_run = self.config.is_dry_run()

        logger.info(f"{'DRY RUN: ' if dry_run else ''}Renaming originals in {self.originals_dir}")
        warnings: List[str] = []

        listing = await load_remote_listing(
            self.client, self.config.get_username(), self.config.get_set_id()
        )
        if listing.truncated:
            warnings.append(f"Acting on first {listing.per_page} photos only "
                            f"({listing.total} in set)")

        paths = list_originals(self.originals_dir, self.config.get_supported_extensions())
        originals = await load_local_records(
            paths, parallel_jobs=self.config.get_parallel_jobs(), progress=progress
        )

        count_warning = check_counts(len(originals), len(listing.photos))
        if count_warning:
            logger.warning(count_warning)
            warnings.append(count_warning)

        result = reconcile(originals, listing.photos,
                           exclusive=self.config.is_exclusive_matching())

        if result.unmatched:
            message = f"No match found on Flickr for {len(result.unmatched)} originals"
            logger.warning(message)
            warnings.append(message)

        plans = plan(result.matches)
        outcomes = apply_plans(plans, dry_run=dry_run, progress=progress)

        return self._build_results(listing, originals, result, outcomes, warnings, dry_run)

    def _build_results(self, listing, originals, result, outcomes: List[RenameOutcome],
                       warnings: List[str], dry_run: bool) -> Dict[str, Any]:
        failed = [o for o in outcomes if o.failed]
        return {
            'dry_run': dry_run,
            'timestamp': datetime.now().isoformat(timespec='seconds'),
            'set': {
                'id': listing.id,
                'title': listing.title,
                'total': listing.total,
                'per_page': listing.per_page,
                'fetched': len(listing.photos),
            },
            'statistics': {
                'originals': len(originals),
                'matched': len(result.matches),
                'unmatched': len(result.unmatched),
                'renamed': sum(1 for o in outcomes if o.status == RenameOutcome.RENAMED),
                'planned': sum(1 for o in outcomes if o.status == RenameOutcome.DRY_RUN),
                'unchanged': sum(1 for o in outcomes if o.status == RenameOutcome.UNCHANGED),
                'failed': len(failed),
            },
            'paths': {
                'originals_dir': str(self.originals_dir),
            },
            'unmatched': [local.name for local in result.unmatched],
            'renames': [o.to_dict() for o in outcomes],
            'warnings': warnings,
            'errors': [str(o.error) for o in failed],
            'success': not failed,
        }
