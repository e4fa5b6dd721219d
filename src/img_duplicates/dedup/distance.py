"""Distance metrics for fingerprint comparison."""

import numpy as np

from .hash import Fingerprint

BYTE_METRIC = "byte"
HAMMING_METRIC = "hamming"

# KDTree metric name backing each fingerprint metric
TREE_METRICS = {
    BYTE_METRIC: "euclidean",
    HAMMING_METRIC: "manhattan",
}


def _check_comparable(a: Fingerprint, b: Fingerprint) -> None:
    if a.hash_size != b.hash_size:
        raise ValueError(
            f"Cannot compare fingerprints of hash size {a.hash_size} and {b.hash_size}"
        )


def hamming_distance(a: Fingerprint, b: Fingerprint) -> int:
    """
    Calculate Hamming distance between two fingerprints.

    Args:
        a: First fingerprint
        b: Second fingerprint

    Returns:
        Number of differing bits
    """
    _check_comparable(a, b)
    return int(a.image_hash - b.image_hash)


def byte_distance(a: Fingerprint, b: Fingerprint) -> float:
    """
    Calculate Euclidean distance between the packed byte values of two fingerprints.

    Each byte is one coordinate, so a single flipped high bit moves a
    fingerprint by 128 while a flipped low bit moves it by 1.
    """
    _check_comparable(a, b)
    return float(np.linalg.norm(byte_vector(a) - byte_vector(b)))


def distance(a: Fingerprint, b: Fingerprint, metric: str = BYTE_METRIC) -> float:
    """Distance between two fingerprints under the named metric."""
    if metric == BYTE_METRIC:
        return byte_distance(a, b)
    if metric == HAMMING_METRIC:
        return float(hamming_distance(a, b))
    raise ValueError(f"Unknown metric: {metric}")


def byte_vector(fingerprint: Fingerprint) -> np.ndarray:
    return np.frombuffer(fingerprint.packed, dtype=np.uint8).astype(np.float64)


def bit_vector(fingerprint: Fingerprint) -> np.ndarray:
    return fingerprint.bits.astype(np.float64)


def fingerprint_vector(fingerprint: Fingerprint, metric: str = BYTE_METRIC) -> np.ndarray:
    """Coordinates of a fingerprint in the space the index searches for ``metric``."""
    if metric == BYTE_METRIC:
        return byte_vector(fingerprint)
    if metric == HAMMING_METRIC:
        return bit_vector(fingerprint)
    raise ValueError(f"Unknown metric: {metric}")
