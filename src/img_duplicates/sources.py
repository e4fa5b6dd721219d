"""Expansion of user supplied sources into an ordered list of image files."""

from pathlib import Path
from typing import Iterable, List, Union

from .logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

IMAGE_EXTENSIONS = frozenset({
    ".png",
    ".jpg",
    ".jpeg",
    ".webp",
    ".gif",
    ".avif",
    ".tiff",
    ".tif",
    ".bmp",
})


def is_image_file(path: PathLike) -> bool:
    """Return True if the path has a supported image extension."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def list_directory_images(directory: Path) -> List[Path]:
    """
    List the image files directly inside a directory, sorted by name.

    Subdirectories are not descended into. A directory that cannot be
    listed contributes nothing.
    """
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.warning(f"Skipping unreadable directory {directory}: {exc}")
        return []

    images = [entry for entry in entries if entry.is_file() and is_image_file(entry)]
    return sorted(images, key=str)


def collect_image_paths(source: Union[PathLike, Iterable[PathLike]]) -> List[Path]:
    """
    Expand directories and image files into a sorted list of image paths.

    Args:
        source: A single directory or file, or an iterable mixing both

    Returns:
        De-duplicated image paths sorted by their string form. Missing
        paths and non-image files are left out.
    """
    if isinstance(source, (str, Path)):
        items = [source]
    else:
        items = list(source)

    collected = set()
    for item in items:
        path = Path(item)
        if not path.exists():
            logger.debug(f"Skipping missing path {path}")
            continue

        if path.is_dir():
            collected.update(list_directory_images(path))
        elif is_image_file(path):
            collected.add(path)
        else:
            logger.debug(f"Skipping non-image file {path}")

    return sorted(collected, key=str)
