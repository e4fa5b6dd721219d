from pathlib import Path
from typing import List, Optional

import typer

from . import __version__
from .cleanup import delete_files, plan_deletions
from .config import Settings
from .dedup.model import find_duplicate_images
from .dedup.ranking import DuplicateGroup
from .errors import DuplicateFinderError, InvalidSettingsError
from .logging import get_logger

app = typer.Typer(help="img-duplicates – find duplicate images by visual similarity")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def format_results(groups: List[DuplicateGroup], show_delete: bool = False) -> None:
    """Print each duplicate group, marking the image that would be kept."""
    if not groups:
        typer.echo("No duplicate images found.")
        return

    typer.echo(f"Found {len(groups)} group(s) of duplicate images:\n")

    for number, group in enumerate(groups, start=1):
        typer.echo(f"Group {number}:")
        for position, image in enumerate(group):
            marker = ""
            if position == 0:
                marker = "(highest resolution - will be kept)" if show_delete else "(highest resolution)"
            elif show_delete:
                marker = "(will be deleted)"
            typer.echo(f"  {image.path} [{image.width}x{image.height}] {marker}".rstrip())
        typer.echo("")


def delete_duplicates(groups: List[DuplicateGroup], force: bool = False) -> None:
    """Delete every image but the first of each group, asking first unless forced."""
    files = plan_deletions(groups)
    if not files:
        return

    typer.echo(f"\nAbout to delete {len(files)} duplicate image(s):")
    for path in files:
        typer.echo(f"  {path}")
    typer.echo("")

    if not force and not typer.confirm("Do you want to proceed with deletion?", default=False):
        typer.echo("Deletion cancelled.")
        return

    summary = delete_files(files, on_deleted=lambda path: typer.echo(f"Deleted: {path}"))
    typer.echo(
        f"\nDeletion completed: {len(summary.deleted)} files deleted, {len(summary.failed)} errors."
    )


@app.command()
def find(
    ctx: typer.Context,
    sources: Optional[List[Path]] = typer.Argument(None, help="Directories or image files to search for duplicates"),
    hash_size: int = typer.Option(8, "--hash-size", "-h", help="Hash grid size for perceptual hashing (1-32)"),
    max_duplicates: int = typer.Option(100, "--max-duplicates", "-d", help="Maximum number of images per duplicate group"),
    max_distance: int = typer.Option(5, "--max-distance", "-m", help="Maximum fingerprint distance for similarity matching"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of images hashed concurrently"),
    metric: str = typer.Option("byte", help="Fingerprint distance: 'byte' (per-byte Euclidean) or 'hamming' (differing bits)"),
    skip_unreadable: bool = typer.Option(False, "--skip-unreadable", help="Skip images that cannot be decoded instead of failing"),
    delete: bool = typer.Option(False, "--delete", help="Delete duplicates, keeping the highest resolution image (asks for confirmation)"),
    force_delete: bool = typer.Option(False, "--force-delete", help="Delete duplicates without confirmation"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version number and exit"
    ),
) -> None:
    """
    Find duplicate images based on visual similarity.

    Every image is fingerprinted with a difference hash and images whose
    fingerprints lie within --max-distance of each other are grouped. With
    --delete or --force-delete the highest resolution image of each group is
    kept and all others are removed.
    """
    logger = get_logger(__name__)

    if not sources:
        logger.error("No source paths provided")
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)

    settings = Settings(
        hash_size=hash_size,
        max_duplicates=max_duplicates,
        max_distance=max_distance,
        workers=workers,
        metric=metric,
        skip_unreadable=skip_unreadable,
    )
    try:
        settings.validate()
    except InvalidSettingsError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    if delete and force_delete:
        logger.error("Cannot use both --delete and --force-delete at the same time")
        raise typer.Exit(code=1)

    missing = [path for path in sources if not path.exists()]
    if missing:
        for path in missing:
            logger.error(f"Path does not exist: {path}")
        raise typer.Exit(code=1)

    resolved = [path.resolve() for path in sources]

    try:
        logger.info("Searching for duplicate images...")
        groups = find_duplicate_images(resolved, settings)
    except DuplicateFinderError as exc:
        logger.error(f"Error finding duplicates: {exc}")
        raise typer.Exit(code=1) from exc

    should_delete = delete or force_delete
    format_results(groups, show_delete=should_delete)

    if should_delete:
        delete_duplicates(groups, force=force_delete)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
