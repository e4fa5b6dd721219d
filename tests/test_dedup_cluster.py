"""Tests for duplicate clustering logic."""

from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from img_duplicates.dedup.cluster import cluster_duplicates
from img_duplicates.dedup.hash import fingerprint_from_bytes
from img_duplicates.dedup.index import FingerprintIndex


def fp(*values: int):
    return fingerprint_from_bytes(bytes(values), 4)


def cluster(fingerprints, max_duplicates=100, max_distance=5, metric="byte"):
    index = FingerprintIndex(fingerprints, metric=metric)
    return cluster_duplicates(index, fingerprints, max_duplicates, max_distance)


def linear_scan_clusters(points: List[bytes], max_duplicates: int, max_distance: int) -> List[List[int]]:
    """Reference grouping by exhaustive comparison of squared byte distances."""
    claimed = set()
    groups = []
    for seed, point in enumerate(points):
        if seed in claimed:
            continue
        candidates = sorted(
            (sum((x - y) ** 2 for x, y in zip(point, other)), position)
            for position, other in enumerate(points)
        )
        neighbours = [p for d, p in candidates if d <= max_distance ** 2][:max_duplicates + 1]
        neighbours = [p for p in neighbours if p not in claimed]
        if len(neighbours) < 2 or max_duplicates < 2:
            continue
        group = neighbours[:max_duplicates]
        groups.append(group)
        claimed.update(group)
    return groups


class TestClusterDuplicates:
    def test_cluster_empty_input(self):
        assert cluster([]) == []

    def test_cluster_single_image(self):
        """A lone fingerprint matches only itself and forms no group."""
        assert cluster([fp(1, 2)]) == []

    def test_cluster_identical_images(self):
        assert cluster([fp(5, 5), fp(5, 5), fp(5, 5)]) == [[0, 1, 2]]

    def test_cluster_different_images(self):
        assert cluster([fp(0, 0), fp(100, 0), fp(0, 100)]) == []

    def test_cluster_multiple_groups_in_discovery_order(self):
        fingerprints = [fp(200, 200), fp(0, 0), fp(201, 200), fp(1, 0)]

        assert cluster(fingerprints) == [[0, 2], [1, 3]]

    def test_group_ordered_by_distance_from_seed(self):
        fingerprints = [fp(0, 0), fp(4, 0), fp(1, 0), fp(2, 0)]

        assert cluster(fingerprints) == [[0, 2, 3, 1]]

    def test_max_duplicates_caps_group(self):
        """Three mutual near-duplicates with a cap of two leave the third unmatched."""
        fingerprints = [fp(10, 10), fp(11, 10), fp(12, 10)]

        result = cluster(fingerprints, max_duplicates=2)

        assert result == [[0, 1]]

    def test_max_duplicates_of_one_never_groups(self):
        assert cluster([fp(1, 1), fp(1, 1)], max_duplicates=1) == []

    def test_claimed_images_not_regrouped(self):
        """An image claimed by an earlier seed is not pulled into a later group."""
        # 1 is close to both 0 and 2, but 0 and 2 are far apart
        fingerprints = [fp(0, 0), fp(4, 0), fp(8, 0)]

        assert cluster(fingerprints, max_distance=4) == [[0, 1]]

    def test_threshold_zero_groups_exact_matches_only(self):
        fingerprints = [fp(3, 3), fp(3, 4), fp(3, 3)]

        assert cluster(fingerprints, max_distance=0) == [[0, 2]]

    def test_hamming_metric(self):
        # 0x80 and 0x01 are one bit from zero each but 128 and 1 apart in bytes
        fingerprints = [fp(0, 0), fp(0x80, 0), fp(0, 0x01)]

        assert cluster(fingerprints, max_distance=1, metric="hamming") == [[0, 1, 2]]
        assert cluster(fingerprints, max_distance=1, metric="byte") == [[0, 2]]

    def test_index_must_match_fingerprints(self):
        index = FingerprintIndex([fp(0, 0)])

        with pytest.raises(ValueError):
            cluster_duplicates(index, [fp(0, 0), fp(1, 1)])

    def test_cluster_deterministic(self):
        fingerprints = [fp(i % 7, i % 3) for i in range(40)]

        assert cluster(fingerprints, max_duplicates=4) == cluster(fingerprints, max_duplicates=4)


point_lists = st.lists(st.binary(min_size=2, max_size=2), min_size=0, max_size=40)


class TestClusterInvariants:
    @given(points=point_lists, max_duplicates=st.integers(1, 6), max_distance=st.integers(0, 40))
    @settings(max_examples=75, deadline=None)
    def test_groups_partition_images(self, points, max_duplicates, max_distance):
        """No position appears in two groups and every group respects the size bounds."""
        result = cluster([fingerprint_from_bytes(p, 4) for p in points], max_duplicates, max_distance)

        flattened = [position for group in result for position in group]
        assert len(flattened) == len(set(flattened))
        for group in result:
            assert 2 <= len(group) <= max_duplicates

    @given(points=point_lists, max_duplicates=st.integers(1, 6), max_distance=st.integers(0, 40))
    @settings(max_examples=75, deadline=None)
    def test_matches_linear_scan(self, points, max_duplicates, max_distance):
        result = cluster([fingerprint_from_bytes(p, 4) for p in points], max_duplicates, max_distance)

        assert result == linear_scan_clusters(points, max_duplicates, max_distance)
