"""Find visually duplicate images with difference hashing."""

from .config import Settings
from .dedup import DuplicateGroup, ImageInfo, find_duplicate_images
from .errors import (
    DuplicateFinderError,
    HashComputationError,
    InvalidSettingsError,
    MetadataReadError,
)

__version__ = "1.0.2"

__all__ = [
    "Settings",
    "DuplicateGroup",
    "ImageInfo",
    "find_duplicate_images",
    "DuplicateFinderError",
    "HashComputationError",
    "InvalidSettingsError",
    "MetadataReadError",
    "__version__",
]
