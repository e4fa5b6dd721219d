"""Perceptual duplicate detection engine."""

from .model import find_duplicate_images, hash_images
from .hash import Fingerprint, compute_fingerprint
from .distance import byte_distance, hamming_distance
from .index import FingerprintIndex
from .cluster import cluster_duplicates
from .ranking import DuplicateGroup, ImageInfo, sort_group

__all__ = [
    "find_duplicate_images",
    "hash_images",
    "Fingerprint",
    "compute_fingerprint",
    "byte_distance",
    "hamming_distance",
    "FingerprintIndex",
    "cluster_duplicates",
    "DuplicateGroup",
    "ImageInfo",
    "sort_group",
]
