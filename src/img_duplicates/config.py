from dataclasses import dataclass

from .errors import InvalidSettingsError

MIN_HASH_SIZE = 1
MAX_HASH_SIZE = 32
METRICS = ("byte", "hamming")


@dataclass(frozen=True)
class Settings:
    hash_size: int = 8
    max_duplicates: int = 100
    max_distance: int = 5
    workers: int = 1
    metric: str = "byte"
    skip_unreadable: bool = False

    def validate(self) -> "Settings":
        """Check every option against its range, returning self when valid."""
        if not MIN_HASH_SIZE <= self.hash_size <= MAX_HASH_SIZE:
            raise InvalidSettingsError(
                f"Hash size must be between {MIN_HASH_SIZE} and {MAX_HASH_SIZE}"
            )
        if self.max_duplicates < 1:
            raise InvalidSettingsError("Max duplicates must be at least 1")
        if self.max_distance < 0:
            raise InvalidSettingsError("Max distance must be non-negative")
        if self.workers < 1:
            raise InvalidSettingsError("Workers must be at least 1")
        if self.metric not in METRICS:
            raise InvalidSettingsError(
                f"Metric must be one of {', '.join(METRICS)}, got {self.metric!r}"
            )
        return self
