"""Exceptions raised by the duplicate finder."""


class DuplicateFinderError(Exception):
    """Base class for all duplicate finder failures."""


class InvalidSettingsError(DuplicateFinderError, ValueError):
    """Raised when an option is outside its accepted range."""


class HashComputationError(DuplicateFinderError):
    """Raised when an image cannot be decoded into a fingerprint."""


class MetadataReadError(DuplicateFinderError):
    """Raised when the dimensions of an existing image cannot be read."""
