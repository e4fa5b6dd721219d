"""Difference hash (dHash) fingerprints for duplicate detection."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import imagehash
import numpy as np
from PIL import Image

from ..errors import HashComputationError
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Fingerprint:
    """
    dHash bit grid of one image.

    The grid is ``hash_size x hash_size`` bits held in an ``imagehash.ImageHash``.
    ``packed`` is the byte form used by the spatial index: bits are read
    row-major, most significant bit first, and the tail is zero-padded to a
    whole byte when ``hash_size ** 2`` is not a multiple of 8.
    """
    image_hash: imagehash.ImageHash

    @property
    def hash_size(self) -> int:
        return int(self.image_hash.hash.shape[0])

    @property
    def bits(self) -> np.ndarray:
        return np.asarray(self.image_hash.hash, dtype=bool).flatten()

    @property
    def packed(self) -> bytes:
        return np.packbits(self.bits).tobytes()

    @property
    def hex(self) -> str:
        return self.packed.hex()

    def __str__(self) -> str:
        return self.hex


def packed_length(hash_size: int) -> int:
    """Number of bytes in a packed fingerprint of the given grid size."""
    return (hash_size * hash_size + 7) // 8


def difference_bits(image: Image.Image, hash_size: int = 8) -> np.ndarray:
    """
    Compute the dHash bit grid of an already opened image.

    The image is converted to grayscale and squeezed (aspect ratio ignored)
    to ``hash_size + 1`` columns by ``hash_size`` rows. A bit is set when a
    pixel is strictly darker than its right-hand neighbour.

    Returns:
        Boolean array of shape ``(hash_size, hash_size)``
    """
    if hash_size < 1:
        raise ValueError(f"Hash size must be at least 1, got {hash_size}")

    small = image.convert("L").resize((hash_size + 1, hash_size), Image.Resampling.LANCZOS)
    pixels = np.asarray(small)
    return pixels[:, :-1] < pixels[:, 1:]


def compute_fingerprint(image_path: Union[str, Path], hash_size: int = 8) -> Fingerprint:
    """
    Load image from disk and compute its difference hash.

    Args:
        image_path: Path to image file
        hash_size: Edge length of the hash grid (produces hash_size**2 bits)

    Returns:
        Fingerprint of the image

    Raises:
        HashComputationError: If the image cannot be decoded or resized
    """
    if hash_size < 1:
        raise ValueError(f"Hash size must be at least 1, got {hash_size}")

    try:
        with Image.open(image_path) as img:
            bits = difference_bits(img, hash_size)
    except Exception as exc:
        raise HashComputationError(f"Failed to compute hash for {image_path}: {exc}") from exc

    fingerprint = Fingerprint(imagehash.ImageHash(bits))
    logger.debug(f"Computed dhash for {image_path}: {fingerprint.hex}")
    return fingerprint


def fingerprint_from_bytes(data: bytes, hash_size: int) -> Fingerprint:
    """Rebuild a fingerprint from its packed byte form."""
    expected = packed_length(hash_size)
    if len(data) != expected:
        raise ValueError(
            f"Packed fingerprint for hash size {hash_size} must be {expected} bytes, got {len(data)}"
        )
    bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8), count=hash_size * hash_size)
    return Fingerprint(imagehash.ImageHash(bits.astype(bool).reshape(hash_size, hash_size)))


def fingerprint_from_hex(hex_string: str, hash_size: int) -> Fingerprint:
    """Rebuild a fingerprint from the string produced by ``Fingerprint.hex``."""
    return fingerprint_from_bytes(bytes.fromhex(hex_string), hash_size)
