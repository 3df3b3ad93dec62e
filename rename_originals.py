#!/usr/bin/env python3
"""
Flickr Originals Renamer CLI

Renames original image files after the titles of the matching photos in a
Flickr set, pairing them by EXIF capture time.
"""

import logging
import sys

import click
from colorama import init, Fore, Style

from flickr_renamer import Config, FlickrClient, OriginalsRenamer, RenameReporter
from flickr_renamer.errors import RenamerError

# Initialize colorama for cross-platform colored output
init()

# Replaced on every setup_logging call
_console_handler = None


def setup_logging(level: str = 'INFO'):
    """Set up logging configuration."""
    global _console_handler
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler(sys.stdout)
    _console_handler.setFormatter(formatter)

    root_logger.setLevel(numeric_level)
    root_logger.addHandler(_console_handler)

    # Reduce noise from libraries
    logging.getLogger('exifread').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def print_header(title: str):
    """Print a formatted header."""
    click.echo(f"\n{Fore.CYAN}{'=' * 60}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}{title.center(60)}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}{'=' * 60}{Style.RESET_ALL}\n")


def print_success(message: str):
    click.echo(f"{Fore.GREEN}OK: {message}{Style.RESET_ALL}")


def print_warning(message: str):
    click.echo(f"{Fore.YELLOW}WARN: {message}{Style.RESET_ALL}")


def print_error(message: str):
    click.echo(f"{Fore.RED}ERROR: {message}{Style.RESET_ALL}", err=True)


def print_info(message: str):
    click.echo(f"{Fore.BLUE}INFO: {message}{Style.RESET_ALL}")


def flickr_options(func):
    """Options shared by every command that talks to Flickr."""
    func = click.option('--set-id', '-s', help='Set (album) id - grab it from the URL')(func)
    func = click.option('--username', '-u', help='Flickr username')(func)
    func = click.option('--api-key', '-k', help='Flickr API key')(func)
    return func


def load_config(ctx, overrides, require_originals=True) -> Config:
    """Build the run configuration from the config file and CLI overrides."""
    try:
        config = Config(ctx.obj['config_path'], overrides=overrides)
    except RenamerError as e:
        print_error(f"{e.stage} failed: {e}")
        sys.exit(1)

    if ctx.obj['log_level'] is None:
        setup_logging(config.get_log_level())

    errors = config.validate_config(require_originals=require_originals)
    if errors:
        print_error("Configuration validation failed:")
        for error in errors:
            click.echo(f"  - {error}")
        sys.exit(1)

    return config


@click.group()
@click.option('--config', '-c', 'config_path', help='Path to configuration file')
@click.option('--log-level', '-l', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Logging level')
@click.pass_context
def cli(ctx, config_path, log_level):
    """Flickr Originals Renamer - name originals after their Flickr titles."""
    setup_logging(log_level or 'INFO')
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['log_level'] = log_level


@cli.command()
@flickr_options
@click.option('--originals-dir', '-o', help='Path to folder containing originals')
@click.option('--dry-run/--no-dry-run', default=None,
              help='Only report the renames; do not carry them out (override config)')
@click.option('--exclusive/--first-match', default=None,
              help='Let each Flickr photo match at most one original')
@click.option('--jobs', '-j', type=int, help='Concurrent EXIF reads')
@click.option('--progress', is_flag=True, help='Show progress bars')
@click.option('--report', '-r', help='Save a JSON report to this file')
@click.option('--strict', is_flag=True, help='Exit non-zero when any rename fails')
@click.pass_context
def rename(ctx, api_key, username, set_id, originals_dir, dry_run, exclusive,
           jobs, progress, report, strict):
    """Match originals to a Flickr set and rename them after photo titles."""

    print_header("RENAME ORIGINALS")

    config = load_config(ctx, {
        'flickr': {'api_key': api_key, 'username': username, 'set_id': set_id},
        'originals': {'dir': originals_dir},
        'process': {'dry_run': dry_run, 'parallel_jobs': jobs},
        'matching': {'exclusive': exclusive},
    })
    renamer = OriginalsRenamer(config)
    reporter = RenameReporter()

    try:
        results = renamer.run(progress=progress)
    except RenamerError as e:
        print_error(f"{e.stage} failed: {e}")
        sys.exit(1)

    for warning in results['warnings']:
        print_warning(warning)
    for name in results['unmatched']:
        click.echo(f"  {name}")

    if results['dry_run']:
        print_info("Dry run was specified; will not carry out renames")

    for entry in results['renames']:
        line = f'Rename "{entry["from"]}"   to   "{entry["to"]}"'
        if entry['status'] == 'failed':
            print_warning(f"{line}: {entry['error']}")
        else:
            click.echo(line)

    if report:
        report_file = reporter.save_report(results, report)
        print_success(f"Report saved: {report_file}")

    click.echo("\n" + reporter.generate_summary_report(results))

    if results['errors']:
        print_warning(f"{len(results['errors'])} renames failed")
        if strict:
            sys.exit(1)

    click.echo("Done")


@cli.command('list-set')
@flickr_options
@click.pass_context
def list_set(ctx, api_key, username, set_id):
    """Show the photos of a Flickr set with their capture times."""

    config = load_config(ctx, {
        'flickr': {'api_key': api_key, 'username': username, 'set_id': set_id},
    }, require_originals=False)
    client = FlickrClient(
        api_key=config.get_api_key(),
        endpoint=config.get_endpoint(),
        timeout=config.get_timeout(),
        per_page=config.get_per_page(),
    )

    try:
        listing = client.list_set(config.get_username(), config.get_set_id())
    except RenamerError as e:
        print_error(f"{e.stage} failed: {e}")
        sys.exit(1)

    print_info(f"Set: {listing.title}")
    print_info(f"Photos: {listing.total}")
    if listing.truncated:
        print_warning(f"Acting on first {listing.per_page} photos only")

    for photo in listing.photos:
        click.echo(f"{photo.id}  {photo.captured_at}  {photo.title}")


if __name__ == '__main__':
    cli()
