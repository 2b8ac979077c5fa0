"""CLI interface for pysync."""

import logging
from typing import Any

import click

from . import __version__
from .exceptions import PysyncError
from .log_config import configure_logging
from .output import OutputFormatter
from .sync import SyncConfig, SyncEngine, SyncResult
from .utils import format_duration

logger = logging.getLogger(__name__)


def _print_header(out: OutputFormatter, config: SyncConfig) -> None:
    out.print("-- PySync ---")
    out.info(f"Source: {config.source}")
    out.info(f"Destination: {config.destination}")
    out.info(f"Workers: {config.workers}")
    out.info(f"Dry Run: {config.dry_run}")
    out.info(f"Delete Extra Files: {config.delete}")
    out.print("-" * 50)


def _print_summary(out: OutputFormatter, result: SyncResult) -> None:
    stats = result.stats
    rows = [
        ("Files checked", stats.files_checked),
        ("Files copied" if not result.dry_run else "Files to copy", stats.files_copied),
        ("Up to date", stats.files_up_to_date),
        ("Data copied", out.format_size(stats.bytes_copied)),
        ("Directories", stats.directories),
    ]
    if stats.deleted or stats.delete_failed:
        rows.append(
            ("Deleted" if not result.dry_run else "To delete", stats.deleted)
        )
    if stats.files_failed:
        rows.append(("Failed", stats.files_failed))
    if stats.walk_errors:
        rows.append(("Walk errors", stats.walk_errors))
    if stats.delete_failed:
        rows.append(("Delete errors", stats.delete_failed))

    out.print("")
    out.print_summary("Summary", rows)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--source",
    "-s",
    required=True,
    type=click.Path(file_okay=False, path_type=str),
    help="The path to the source directory.",
)
@click.option(
    "--dest",
    "-d",
    "destination",
    required=True,
    type=click.Path(file_okay=False, path_type=str),
    help="The path to the destination directory.",
)
@click.option(
    "--delete",
    is_flag=True,
    help="Delete extra files and folders from the destination.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be done without changing anything.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable detailed logging of every operation.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=0),
    default=0,
    envvar="PYSYNC_WORKERS",
    show_envvar=True,
    help="Number of concurrent file copy workers (default: number of CPUs).",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", "json_output", is_flag=True, help="Output stats in JSON format")
@click.version_option(version=__version__, prog_name="pysync")
@click.pass_context
def main(
    ctx: Any,
    source: str,
    destination: str,
    delete: bool,
    dry_run: bool,
    verbose: bool,
    workers: int,
    quiet: bool,
    json_output: bool,
) -> None:
    """PySync - one-way synchronization of directories.

    Copies new or modified files from the source directory to the
    destination. Files are considered modified when the source is newer
    than the destination or the sizes differ. Paths listed in a
    .gosyncignore file in the source root are skipped.

    Examples:
        pysync -s ./photos -d /mnt/backup/photos
        pysync -s ./photos -d /mnt/backup/photos --delete --dry-run
        pysync -s ./src -d ./mirror --workers 8 -v
    """
    out = OutputFormatter(json_output=json_output, quiet=quiet)
    configure_logging(verbose=verbose, dry_run=dry_run)

    try:
        config = SyncConfig.from_paths(
            source,
            destination,
            dry_run=dry_run,
            delete=delete,
            verbose=verbose,
            workers=workers,
        )
    except PysyncError as e:
        out.error(str(e))
        ctx.exit(1)
        return  # Unreachable, but helps type checker

    _print_header(out, config)

    try:
        engine = SyncEngine()
        result = engine.run(config)
    except KeyboardInterrupt:
        out.warning("Sync cancelled by user")
        ctx.exit(130)
        return
    except PysyncError as e:
        out.error(f"Synchronization failed: {e}")
        ctx.exit(1)
        return
    except Exception as e:
        logger.debug("Unexpected error during sync", exc_info=True)
        out.error(f"Unexpected error: {e}")
        ctx.exit(1)
        return

    if out.json_output:
        out.output_json(result.to_dict())
        return

    _print_summary(out, result)
    out.print("")
    out.success(f"Synchronization completed in {format_duration(result.elapsed)}")

    if result.stats.files_failed and not out.quiet:
        out.warning(
            f"{result.stats.files_failed} file(s) could not be synchronized. "
            "Run with --verbose for details."
        )
