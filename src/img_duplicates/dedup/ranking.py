"""Resolution metadata and ordering of images inside a duplicate group."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from PIL import Image

from ..errors import MetadataReadError
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageInfo:
    """Path and pixel dimensions of one image."""
    path: Path
    width: int
    height: int

    @property
    def resolution(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class DuplicateGroup:
    """Visually duplicate images, highest resolution first."""
    images: Tuple[ImageInfo, ...]

    @property
    def keep(self) -> ImageInfo:
        return self.images[0]

    @property
    def redundant(self) -> Tuple[ImageInfo, ...]:
        return self.images[1:]

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[ImageInfo]:
        return iter(self.images)


def read_image_info(path: Path) -> ImageInfo:
    """
    Read the dimensions of an image without decoding its pixels.

    Raises:
        MetadataReadError: If the file cannot be opened as an image
    """
    try:
        with Image.open(path) as img:
            width, height = img.size
    except Exception as exc:
        raise MetadataReadError(f"Could not read metadata for {path}: {exc}") from exc
    return ImageInfo(path=Path(path), width=int(width), height=int(height))


def sort_group(images: Iterable[ImageInfo]) -> List[ImageInfo]:
    """Order images by descending pixel count, then ascending file name."""
    return sorted(images, key=lambda info: (-info.resolution, info.path.name))


def resolve_group(paths: Iterable[Path], skip_unreadable: bool = False) -> Optional[DuplicateGroup]:
    """
    Read metadata for every path of a group and sort it.

    Files that disappeared since hashing are dropped. Unreadable files abort
    the run unless ``skip_unreadable`` is set, in which case they are dropped
    too. A group left with fewer than two images is discarded.

    Args:
        paths: Image paths of one group
        skip_unreadable: Drop images whose metadata cannot be read

    Returns:
        Sorted DuplicateGroup, or None if fewer than two images remain

    Raises:
        MetadataReadError: If an image cannot be read and skip_unreadable is False
    """
    infos = []
    for path in paths:
        path = Path(path)
        if not path.exists():
            logger.warning(f"{path} disappeared before its metadata was read, dropping it from its group")
            continue
        try:
            infos.append(read_image_info(path))
        except MetadataReadError as exc:
            if not skip_unreadable:
                raise
            logger.warning(f"{exc}, dropping it from its group")

    if len(infos) < 2:
        return None
    return DuplicateGroup(images=tuple(sort_group(infos)))
