"""
Spatial index over fingerprints for bounded nearest-neighbour queries.

The index is built once over the full, ordered list of fingerprints;
position ``i`` always refers to the ``i``-th fingerprint passed in.
"""

from typing import List, Optional, Sequence

import numpy as np
from sklearn.neighbors import KDTree

from .distance import BYTE_METRIC, TREE_METRICS, fingerprint_vector
from .hash import Fingerprint
from ..logging import get_logger

logger = get_logger(__name__)


class FingerprintIndex:
    """
    k-d tree over fingerprint coordinates.

    With the ``byte`` metric every packed byte is one coordinate and distances
    are Euclidean over byte values. With the ``hamming`` metric every bit is a
    0/1 coordinate and the tree uses the Manhattan metric, which counts
    differing bits.
    """

    def __init__(
        self,
        fingerprints: Sequence[Fingerprint],
        metric: str = BYTE_METRIC,
        leaf_size: int = 40,
    ):
        """
        Build the index.

        Args:
            fingerprints: Fingerprints in processing order, all of one hash size
            metric: ``byte`` or ``hamming``
            leaf_size: Points per k-d tree leaf

        Raises:
            ValueError: On an unknown metric or mixed hash sizes
        """
        if metric not in TREE_METRICS:
            raise ValueError(f"Unknown metric: {metric}")

        sizes = {fp.hash_size for fp in fingerprints}
        if len(sizes) > 1:
            raise ValueError(f"Fingerprints of different hash sizes cannot share an index: {sorted(sizes)}")

        self.metric = metric
        self.hash_size: Optional[int] = sizes.pop() if sizes else None
        self._size = len(fingerprints)
        self._tree: Optional[KDTree] = None

        if self._size:
            points = np.vstack([fingerprint_vector(fp, metric) for fp in fingerprints])
            self._tree = KDTree(points, leaf_size=leaf_size, metric=TREE_METRICS[metric])

        logger.debug(f"Fingerprint index built: {self._size} points, metric={metric}")

    def __len__(self) -> int:
        return self._size

    def query(self, fingerprint: Fingerprint, k: int, max_distance: float) -> List[int]:
        """
        Find up to ``k`` indexed positions within ``max_distance`` of a fingerprint.

        Results are ordered by increasing distance, equal distances by
        ascending position. An indexed fingerprint finds itself at distance 0.

        Args:
            fingerprint: Query fingerprint
            k: Maximum number of positions to return
            max_distance: Inclusive distance bound in the index's metric space

        Returns:
            List of index positions
        """
        if self._tree is None or k < 1:
            return []
        if fingerprint.hash_size != self.hash_size:
            raise ValueError(
                f"Query hash size {fingerprint.hash_size} does not match index hash size {self.hash_size}"
            )

        point = fingerprint_vector(fingerprint, self.metric).reshape(1, -1)
        indices, distances = self._tree.query_radius(point, r=max_distance, return_distance=True)
        indices, distances = indices[0], distances[0]

        order = np.lexsort((indices, distances))[:k]
        return [int(position) for position in indices[order]]
