"""Public API for duplicate image detection."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..config import Settings
from ..errors import HashComputationError
from ..logging import get_logger
from ..sources import PathLike, collect_image_paths
from .cluster import cluster_duplicates
from .hash import Fingerprint, compute_fingerprint
from .index import FingerprintIndex
from .ranking import DuplicateGroup, resolve_group

logger = get_logger(__name__)


def hash_images(
    paths: Sequence[Path],
    hash_size: int = 8,
    workers: int = 1,
    skip_unreadable: bool = False,
) -> Tuple[List[Path], List[Fingerprint]]:
    """
    Fingerprint every image with a bounded pool of worker threads.

    All work completes before this returns, and results keep the order of
    ``paths``.

    Args:
        paths: Image paths in processing order
        hash_size: Edge length of the hash grid
        workers: Maximum number of images hashed concurrently
        skip_unreadable: Leave out images that fail to decode instead of raising

    Returns:
        Tuple of (hashed paths, fingerprints), aligned by position

    Raises:
        HashComputationError: If an image fails to decode and skip_unreadable is False
    """
    def _hash_one(path: Path) -> Optional[Fingerprint]:
        try:
            return compute_fingerprint(path, hash_size)
        except HashComputationError as exc:
            if not skip_unreadable:
                raise
            logger.warning(f"Skipping {path}: {exc}")
            return None

    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(_hash_one, paths))

    hashed_paths = []
    fingerprints = []
    for path, fingerprint in zip(paths, results):
        if fingerprint is not None:
            hashed_paths.append(path)
            fingerprints.append(fingerprint)

    return hashed_paths, fingerprints


def find_duplicate_images(
    source: Union[PathLike, Iterable[PathLike]],
    settings: Optional[Settings] = None,
    **overrides,
) -> List[DuplicateGroup]:
    """
    Find groups of visually duplicate images.

    Every image is fingerprinted with a difference hash, the fingerprints are
    indexed in a k-d tree, and images within ``max_distance`` of a seed image
    are grouped. No image appears in more than one group.

    Args:
        source: A directory, an image file, or an iterable mixing both
        settings: Options for the run; defaults to ``Settings()``
        **overrides: Individual ``Settings`` fields replacing those in ``settings``

    Returns:
        Duplicate groups in discovery order, each sorted by descending
        resolution then file name

    Raises:
        InvalidSettingsError: If an option is out of range
        HashComputationError: If an image cannot be decoded (unless skip_unreadable)
        MetadataReadError: If a grouped image's size cannot be read (unless skip_unreadable)
    """
    settings = settings or Settings()
    if overrides:
        settings = replace(settings, **overrides)
    settings.validate()

    image_paths = collect_image_paths(source)
    logger.info(f"Hashing {len(image_paths)} images with {settings.workers} worker(s)")

    hashed_paths, fingerprints = hash_images(
        image_paths,
        hash_size=settings.hash_size,
        workers=settings.workers,
        skip_unreadable=settings.skip_unreadable,
    )

    if len(fingerprints) < 2:
        logger.info("Less than 2 images with valid hashes, no deduplication needed")
        return []

    index = FingerprintIndex(fingerprints, metric=settings.metric)
    clusters = cluster_duplicates(
        index,
        fingerprints,
        max_duplicates=settings.max_duplicates,
        max_distance=settings.max_distance,
    )

    groups = []
    for positions in clusters:
        group = resolve_group(
            [hashed_paths[position] for position in positions],
            skip_unreadable=settings.skip_unreadable,
        )
        if group is not None:
            groups.append(group)

    logger.info(f"Found {len(groups)} duplicate groups covering {sum(len(g) for g in groups)} images")
    return groups
