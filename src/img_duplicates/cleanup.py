"""Removal of redundant images from duplicate groups."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .dedup.ranking import DuplicateGroup
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class DeletionSummary:
    deleted: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


def plan_deletions(groups: Iterable[DuplicateGroup]) -> List[Path]:
    """Every image except the first (highest resolution) one of each group."""
    return [info.path for group in groups for info in group.redundant]


def delete_files(
    paths: Iterable[Path],
    on_deleted: Optional[Callable[[Path], None]] = None,
) -> DeletionSummary:
    """
    Unlink each file, carrying on past individual failures.

    Args:
        paths: Files to remove
        on_deleted: Called with each path once it has been removed

    Returns:
        DeletionSummary listing removed and failed paths
    """
    summary = DeletionSummary()
    for path in paths:
        try:
            Path(path).unlink()
        except OSError as exc:
            logger.error(f"Failed to delete {path}: {exc}")
            summary.failed.append(Path(path))
            continue
        summary.deleted.append(Path(path))
        if on_deleted is not None:
            on_deleted(Path(path))
    return summary
