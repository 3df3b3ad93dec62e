"""Reporting for rename runs."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class RenameReporter:
    """Generates summaries and saved reports for a rename run."""

    def generate_summary_report(self, results: Dict[str, Any]) -> str:
        """
        Generate human-readable summary report.

        Args:
            results: Results from OriginalsRenamer.run

        Returns:
            Formatted summary report
        """
        stats = results.get('statistics', {})
        photoset = results.get('set', {})

        report = []
        report.append("=" * 50)
        report.append("ORIGINALS RENAME SUMMARY")
        report.append("=" * 50)
        report.append(f"Completed: {results.get('timestamp', 'Unknown')}")
        report.append(f"Mode: {'DRY RUN' if results.get('dry_run', False) else 'LIVE RUN'}")
        report.append(f"Set: {photoset.get('title', 'N/A')} ({photoset.get('id', 'N/A')})")
        report.append(f"Originals: {results.get('paths', {}).get('originals_dir', 'N/A')}")
        report.append("")

        report.append("=== FILE STATISTICS ===")
        report.append(f"• Photos on Flickr: {photoset.get('fetched', 0):,} "
                      f"of {photoset.get('total', 0):,}")
        report.append(f"• Originals found: {stats.get('originals', 0):,}")
        report.append(f"• Matched: {stats.get('matched', 0):,}")
        report.append(f"• Unmatched: {stats.get('unmatched', 0):,}")
        if results.get('dry_run', False):
            report.append(f"• Planned renames: {stats.get('planned', 0):,}")
        else:
            report.append(f"• Renamed: {stats.get('renamed', 0):,}")
        report.append(f"• Already named: {stats.get('unchanged', 0):,}")
        report.append(f"• Failed: {stats.get('failed', 0):,}")
        report.append("")

        warnings = results.get('warnings', [])
        if warnings:
            report.append("=== WARNINGS ===")
            for warning in warnings:
                report.append(f"! {warning}")
            report.append("")

        errors = results.get('errors', [])
        if errors:
            report.append("=== ERRORS ENCOUNTERED ===")
            for error in errors:
                report.append(f"x {error}")
            report.append("")

        success = results.get('success', True) and not errors
        report.append(f"STATUS: {'COMPLETE SUCCESS' if success else 'COMPLETED WITH ISSUES'}")

        return "\n".join(report)

    def save_report(self, results: Dict[str, Any], filename: Optional[str] = None) -> str:
        """
        Save the full results, every rename included, as JSON.

        Args:
            results: Results dictionary
            filename: Optional path (auto-generated in the originals dir if None)

        Returns:
            Path to saved report file
        """
        if filename is None:
            timestamp = results.get('timestamp', 'unknown').replace(':', '-')
            originals_dir = results.get('paths', {}).get('originals_dir', '.')
            report_file = Path(originals_dir) / f"rename_report_{timestamp}.json"
        else:
            report_file = Path(filename)

        report_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(report_file, 'w') as f:
                json.dump(results, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save report: {e}")
            raise

        logger.info(f"Report saved: {report_file}")
        return str(report_file)
