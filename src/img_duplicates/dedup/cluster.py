"""Clustering logic for grouping duplicate images."""

from typing import List, Sequence, Set

from .hash import Fingerprint
from .index import FingerprintIndex
from ..logging import get_logger

logger = get_logger(__name__)


def cluster_duplicates(
    index: FingerprintIndex,
    fingerprints: Sequence[Fingerprint],
    max_duplicates: int = 100,
    max_distance: float = 5,
) -> List[List[int]]:
    """
    Partition fingerprints into groups of near neighbours.

    Positions are scanned in index order. Each position not yet claimed seeds
    a query for its ``max_duplicates + 1`` nearest neighbours (the seed finds
    itself). Neighbours claimed by an earlier group are dropped; if at least
    two positions remain they form a new group, capped at ``max_duplicates``,
    and are claimed.

    Args:
        index: Index built over ``fingerprints`` in the same order
        fingerprints: Fingerprints in processing order
        max_duplicates: Maximum group size
        max_distance: Maximum distance from the seed, in the index's metric space

    Returns:
        Groups of index positions in discovery order, each ordered by
        distance from its seed
    """
    if len(index) != len(fingerprints):
        raise ValueError(
            f"Index holds {len(index)} points but {len(fingerprints)} fingerprints were given"
        )

    claimed: Set[int] = set()
    groups: List[List[int]] = []

    for position, fingerprint in enumerate(fingerprints):
        if position in claimed:
            continue

        neighbours = index.query(fingerprint, max_duplicates + 1, max_distance)
        neighbours = [idx for idx in neighbours if idx not in claimed]

        if len(neighbours) < 2:
            continue

        group = neighbours[:max_duplicates]
        if len(group) < 2:
            continue

        groups.append(group)
        claimed.update(group)
        logger.debug(f"Seed {position} grouped with {group[1:]}")

    logger.info(f"Clustered {len(fingerprints)} fingerprints into {len(groups)} duplicate groups")
    return groups
